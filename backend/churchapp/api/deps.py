"""
Request guards shared by routers.

Cron endpoints: Bearer CRON_SECRET. When the secret is unset, only non-production allows the call.
Portal endpoints: the hosted auth layer forwards the signed-in user's id as X-User-Id; admin
routes then check profiles.role == "admin".
"""
import hmac

from fastapi import Depends, Header
from sqlalchemy.orm import Session

from churchapp.config import settings
from churchapp.core.errors import Forbidden, Unauthorized
from churchapp.db.session import get_db
from churchapp.models.profile import Profile

ADMIN_ROLE = "admin"


def require_cron_secret(authorization: str | None = Header(None)) -> None:
    secret = settings.cron_secret
    if not secret:
        if settings.is_production:
            raise Unauthorized()
        return
    expected = f"Bearer {secret}"
    if not authorization or not hmac.compare_digest(authorization.encode(), expected.encode()):
        raise Unauthorized()


def current_user_id(x_user_id: str | None = Header(None, alias="X-User-Id")) -> str:
    uid = (x_user_id or "").strip()
    if not uid:
        raise Unauthorized()
    return uid


def require_admin(
    user_id: str = Depends(current_user_id),
    db: Session = Depends(get_db),
) -> Profile:
    profile = db.query(Profile).filter(Profile.id == user_id).first()
    if profile is None or profile.role != ADMIN_ROLE:
        raise Forbidden()
    return profile
