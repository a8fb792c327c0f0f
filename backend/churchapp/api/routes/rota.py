"""
Admin rota API: recurring patterns and manual service generation.

All routes require an admin profile (X-User-Id + profiles.role == "admin").
"""
import logging
from datetime import date, datetime, timedelta, timezone
from typing import Any, Literal

from fastapi import APIRouter, Depends, Query
from pydantic import BaseModel, Field
from sqlalchemy.orm import Session, joinedload

from churchapp.api.deps import require_admin
from churchapp.core.constants import MANUAL_GENERATION_DEFAULT_DAYS
from churchapp.core.errors import InvalidPattern, NotFound
from churchapp.db.session import get_db
from churchapp.models.recurring_pattern import RecurringPattern
from churchapp.models.service_template import ServiceTemplate
from churchapp.services.rota.generator import generate_manual
from churchapp.services.rota.patterns import PatternRule, validate_pattern

router = APIRouter(dependencies=[Depends(require_admin)])
logger = logging.getLogger(__name__)


def _pattern_to_dict(p: RecurringPattern) -> dict[str, Any]:
    return {
        "id": p.id,
        "template_id": p.template_id,
        "pattern_type": p.pattern_type,
        "day_of_week": p.day_of_week,
        "week_of_month": p.week_of_month,
        "interval_weeks": p.interval_weeks,
        "start_date": p.start_date.isoformat(),
        "end_date": p.end_date.isoformat() if p.end_date else None,
        "last_generated_date": p.last_generated_date.isoformat() if p.last_generated_date else None,
        "is_active": bool(p.is_active),
        "template": (
            {
                "id": p.template.id,
                "name": p.template.name,
                "description": p.template.description,
                "default_time": p.template.default_time,
            }
            if p.template
            else None
        ),
    }


# --- Patterns ---


@router.get("/patterns")
def list_patterns(
    db: Session = Depends(get_db),
    template_id: int | None = Query(None),
) -> dict[str, Any]:
    """List recurring patterns, newest first, optionally for one template."""
    q = db.query(RecurringPattern).options(joinedload(RecurringPattern.template))
    if template_id is not None:
        q = q.filter(RecurringPattern.template_id == template_id)
    rows = q.order_by(RecurringPattern.created_at.desc(), RecurringPattern.id.desc()).all()
    return {"patterns": [_pattern_to_dict(p) for p in rows]}


class CreatePatternBody(BaseModel):
    template_id: int
    pattern_type: Literal["weekly", "bi_weekly", "monthly", "custom"]
    day_of_week: int | None = Field(None, description="0 = Sunday .. 6 = Saturday")
    week_of_month: int | None = Field(None, description="1-5, monthly only")
    interval_weeks: int | None = Field(None, description=">= 1, custom only")
    start_date: date
    end_date: date | None = None
    is_active: bool = True


@router.post("/patterns")
def create_pattern(body: CreatePatternBody, db: Session = Depends(get_db)) -> dict[str, Any]:
    """Create a recurring pattern. 400 when the rule cannot be evaluated."""
    validate_pattern(
        PatternRule(
            pattern_type=body.pattern_type,
            day_of_week=body.day_of_week,
            start_date=body.start_date,
            week_of_month=body.week_of_month,
            interval_weeks=body.interval_weeks,
            end_date=body.end_date,
        )
    )
    if body.end_date is not None and body.end_date < body.start_date:
        raise InvalidPattern("End date must not be before start date")
    template = db.query(ServiceTemplate).filter(ServiceTemplate.id == body.template_id).first()
    if template is None:
        raise NotFound("Template not found")
    row = RecurringPattern(
        template_id=template.id,
        pattern_type=body.pattern_type,
        day_of_week=body.day_of_week,
        week_of_month=body.week_of_month if body.pattern_type == "monthly" else None,
        interval_weeks=body.interval_weeks if body.pattern_type == "custom" else None,
        start_date=body.start_date,
        end_date=body.end_date,
        is_active=body.is_active,
    )
    db.add(row)
    db.commit()
    db.refresh(row)
    logger.info("Created %s pattern %s for template %s", row.pattern_type, row.id, template.id)
    return {"success": True, "pattern": _pattern_to_dict(row)}


# --- Manual generation ---


class GenerateBody(BaseModel):
    template_id: int
    pattern_id: int | None = None
    start_date: date | None = None
    end_date: date | None = None


@router.post("/generate")
def generate_services(body: GenerateBody, db: Session = Depends(get_db)) -> dict[str, Any]:
    """
    Generate services for a template. With pattern_id the pattern decides the dates;
    without it one service is created per day in the range. Existing dates are skipped.
    """
    today = datetime.now(timezone.utc).date()
    start = body.start_date or today
    end = body.end_date or (start + timedelta(days=MANUAL_GENERATION_DEFAULT_DAYS))
    if start > end:
        raise InvalidPattern("Start date must be before end date")

    template = db.query(ServiceTemplate).filter(ServiceTemplate.id == body.template_id).first()
    if template is None:
        raise NotFound("Template not found")

    pattern = None
    if body.pattern_id is not None:
        pattern = (
            db.query(RecurringPattern)
            .filter(RecurringPattern.id == body.pattern_id, RecurringPattern.is_active.is_(True))
            .first()
        )
        if pattern is None:
            raise NotFound("Pattern not found or inactive")
        if pattern.template_id != template.id:
            raise InvalidPattern("Pattern does not match template")

    return generate_manual(db, template, start, end, pattern=pattern)
