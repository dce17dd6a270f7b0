import secrets
from typing import Generator, Optional

from fastapi import Depends, Header, Request
from sqlalchemy.orm import Session

from quiet_hours.core.auth import AuthenticatedUser, get_current_user
from quiet_hours.core.config import settings
from quiet_hours.db.session import get_db
from quiet_hours.domain.exceptions import UnauthorizedDispatch
from quiet_hours.domain.interfaces.infrastructure_interfaces import IEmailSender
from quiet_hours.domain.unit_of_work import UnitOfWork
from quiet_hours.models.profile_model import Profile
from quiet_hours.services.profile_service import ProfileService


__all__ = [
    "get_db",
    "get_uow",
    "get_email_sender",
    "get_current_profile",
    "require_cron_secret",
]


def get_uow(db: Session = Depends(get_db)) -> Generator[UnitOfWork, None, None]:
    """Get a Unit of Work instance for dependency injection."""
    uow = UnitOfWork(db)
    try:
        yield uow
    except Exception:
        uow.rollback()
        raise


def get_email_sender(request: Request) -> IEmailSender:
    """The sender built once at application start-up."""
    return request.app.state.email_sender


def get_current_profile(
    current_user: AuthenticatedUser = Depends(get_current_user),
    uow: UnitOfWork = Depends(get_uow),
) -> Profile:
    return ProfileService(uow).ensure_profile(
        current_user.id,
        current_user.email,
        full_name=current_user.full_name,
        avatar_url=current_user.avatar_url,
    )


def require_cron_secret(authorization: Optional[str] = Header(None)) -> None:
    """Shared-secret check for the dispatcher trigger; no secret configured means no access."""
    secret = settings.notifications.cron_secret
    expected = f"Bearer {secret}"
    if not secret or authorization is None:
        raise UnauthorizedDispatch()
    if not secrets.compare_digest(authorization.encode(), expected.encode()):
        raise UnauthorizedDispatch()
