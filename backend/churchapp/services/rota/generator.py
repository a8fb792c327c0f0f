"""
Materialize services from recurring patterns and advance each pattern's watermark.

One service per (template_id, date). The unique constraint on services is the guard against
two runs inserting the same date; an IntegrityError is resolved by reading the existing row,
so re-running a date is a no-op that returns the same id.

Each date is its own unit of work (insert + commit). A failed date does not stop later dates,
but the watermark only advances over the leading run of non-failed dates so the failed one is
retried next run.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date, timedelta
from typing import Any, Iterable

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session, joinedload

from churchapp.core.constants import MANUAL_GENERATION_MAX_DAYS
from churchapp.core.errors import InvalidPattern, PersistenceError
from churchapp.models.recurring_pattern import RecurringPattern
from churchapp.models.service import Service
from churchapp.models.service_template import ServiceTemplate
from churchapp.services.rota.patterns import PatternRule, calculate_service_dates

logger = logging.getLogger(__name__)

CREATED = "created"
EXISTING = "existing"
FAILED = "failed"


@dataclass(frozen=True)
class MaterializeResult:
    date: date
    status: str  # created | existing | failed
    service_id: int | None = None
    error: str | None = None

    @property
    def ok(self) -> bool:
        return self.status != FAILED


def _find_existing(db: Session, template_id: int, day: date) -> Service | None:
    return (
        db.query(Service)
        .filter(Service.template_id == template_id, Service.date == day)
        .first()
    )


def _materialize_one(db: Session, template: ServiceTemplate, day: date) -> MaterializeResult:
    row = Service(template_id=template.id, name=template.name, date=day, time=template.default_time)
    try:
        db.add(row)
        db.commit()
        return MaterializeResult(date=day, status=CREATED, service_id=row.id)
    except IntegrityError:
        db.rollback()
    except SQLAlchemyError as e:
        db.rollback()
        logger.exception("Failed to create service for template %s on %s: %s", template.id, day, e)
        return MaterializeResult(date=day, status=FAILED, error=str(e))

    # Duplicate (template_id, date): someone else already created it
    try:
        existing = _find_existing(db, template.id, day)
    except SQLAlchemyError as e:
        db.rollback()
        logger.exception("Failed to read existing service for template %s on %s: %s", template.id, day, e)
        return MaterializeResult(date=day, status=FAILED, error=str(e))
    if existing is None:
        return MaterializeResult(date=day, status=FAILED, error="insert rejected and no existing service found")
    return MaterializeResult(date=day, status=EXISTING, service_id=existing.id)


def materialize_services(db: Session, template: ServiceTemplate, dates: Iterable[date]) -> list[MaterializeResult]:
    """Create one service per date (idempotent). One result per date, in input order."""
    return [_materialize_one(db, template, day) for day in dates]


def service_ids(results: Iterable[MaterializeResult]) -> list[int]:
    """Ids of created or already-existing services."""
    return [r.service_id for r in results if r.ok and r.service_id is not None]


def contiguous_watermark(results: Iterable[MaterializeResult]) -> date | None:
    """Latest date of the leading run of non-failed results (in date order); None if the first failed."""
    mark = None
    for r in sorted(results, key=lambda r: r.date):
        if not r.ok:
            break
        mark = r.date
    return mark


def advance_watermark(pattern: RecurringPattern, candidate: date | None) -> bool:
    """Move last_generated_date forward to candidate. Never moves it back. Returns True if changed."""
    if candidate is None:
        return False
    if pattern.last_generated_date is not None and candidate <= pattern.last_generated_date:
        return False
    pattern.last_generated_date = candidate
    return True


def continues_watermark(pattern: RecurringPattern, first: date) -> bool:
    """True if first is the pattern's next occurrence after its watermark (or its first occurrence)."""
    rule = PatternRule.from_model(pattern)
    upcoming = calculate_service_dates(rule, rule.start_date, first)
    return bool(upcoming) and upcoming[0] == first


def generate_for_pattern(
    db: Session,
    pattern: RecurringPattern,
    window_start: date,
    window_end: date,
) -> dict[str, Any]:
    """
    Evaluate one pattern over the window, materialize the dates and advance its watermark.
    Raises InvalidPattern; database errors on the watermark write propagate.
    """
    template = pattern.template
    dates = calculate_service_dates(PatternRule.from_model(pattern), window_start, window_end)
    results = materialize_services(db, template, dates)
    if advance_watermark(pattern, contiguous_watermark(results)):
        db.commit()
    created = sum(1 for r in results if r.status == CREATED)
    existing = sum(1 for r in results if r.status == EXISTING)
    failed = [r for r in results if not r.ok]
    out: dict[str, Any] = {
        "pattern_id": pattern.id,
        "pattern_name": template.name,
        "generated": created,
        "existing": existing,
        "failed": len(failed),
        "last_generated_date": pattern.last_generated_date.isoformat() if pattern.last_generated_date else None,
    }
    if failed:
        out["error"] = f"{len(failed)} date(s) failed: " + ", ".join(r.date.isoformat() for r in failed)
    return out


def run_service_generation(db: Session, today: date, window_days: int) -> dict[str, Any]:
    """
    Cron driver: every active pattern, window [today, today + window_days].
    Raises PersistenceError if the patterns cannot be read; any per-pattern problem is reported
    in results and the run continues.
    """
    window_end = today + timedelta(days=window_days)
    try:
        patterns = (
            db.query(RecurringPattern)
            .options(joinedload(RecurringPattern.template))
            .filter(RecurringPattern.is_active.is_(True))
            .order_by(RecurringPattern.id.asc())
            .all()
        )
    except SQLAlchemyError as e:
        logger.exception("Error fetching recurring patterns: %s", e)
        raise PersistenceError("Failed to fetch patterns") from e

    if not patterns:
        return {
            "success": True,
            "message": "No active patterns found",
            "total_generated": 0,
            "results": [],
        }

    total = 0
    results: list[dict[str, Any]] = []
    for pattern in patterns:
        if pattern.template is None:
            results.append({"pattern_id": pattern.id, "pattern_name": "Unknown", "generated": 0, "error": "Template not found"})
            continue
        try:
            res = generate_for_pattern(db, pattern, today, window_end)
        except InvalidPattern as e:
            logger.warning("Skipping invalid pattern %s: %s", pattern.id, e)
            res = {"pattern_id": pattern.id, "pattern_name": pattern.template.name, "generated": 0, "error": str(e)}
        except SQLAlchemyError as e:
            db.rollback()
            logger.exception("Error processing pattern %s: %s", pattern.id, e)
            res = {"pattern_id": pattern.id, "pattern_name": pattern.template.name, "generated": 0, "error": str(e)}
        total += res["generated"]
        results.append(res)

    logger.info("Service generation: %s service(s) from %s pattern(s)", total, len(patterns))
    return {
        "success": True,
        "message": f"Generated {total} service(s) from {len(patterns)} pattern(s)",
        "total_generated": total,
        "results": results,
    }


def _service_row(s: Service) -> dict[str, Any]:
    return {
        "id": s.id,
        "template_id": s.template_id,
        "name": s.name,
        "date": s.date.isoformat(),
        "time": s.time,
    }


def generate_manual(
    db: Session,
    template: ServiceTemplate,
    start: date,
    end: date,
    pattern: RecurringPattern | None = None,
) -> dict[str, Any]:
    """
    Admin-triggered generation. With a pattern: the pattern's dates in [start, end]; the watermark
    advances only when the range picks up right after it, so skipped occurrences stay due.
    Without: one service per day in [start, end].
    Returns created and skipped (already existing) services.
    """
    if pattern is not None:
        dates = calculate_service_dates(PatternRule.from_model(pattern), start, end)
    else:
        span = (end - start).days
        if span > MANUAL_GENERATION_MAX_DAYS:
            raise InvalidPattern(f"Date range too large (max {MANUAL_GENERATION_MAX_DAYS} days)")
        dates = [start + timedelta(days=i) for i in range(span + 1)]

    if not dates:
        return {"success": True, "message": "No dates to generate", "services": [], "skipped": [], "failed": []}

    # A range that starts past the next due occurrence leaves a gap; the watermark stays put
    gapless = pattern is not None and continues_watermark(pattern, dates[0])
    results = materialize_services(db, template, dates)
    if gapless and advance_watermark(pattern, contiguous_watermark(results)):
        db.commit()

    created_ids = [r.service_id for r in results if r.status == CREATED]
    skipped_ids = [r.service_id for r in results if r.status == EXISTING]
    by_id = {s.id: s for s in db.query(Service).filter(Service.id.in_(created_ids + skipped_ids)).all()}
    return {
        "success": True,
        "message": f"Generated {len(created_ids)} service(s)",
        "services": [_service_row(by_id[i]) for i in created_ids if i in by_id],
        "skipped": [_service_row(by_id[i]) for i in skipped_ids if i in by_id],
        "failed": [{"date": r.date.isoformat(), "error": r.error} for r in results if not r.ok],
    }
