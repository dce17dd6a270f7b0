"""Reminder endpoints: the cron-triggered dispatcher and the caller's own reminders."""

from typing import List

from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse

from quiet_hours.api.v1.dependencies import (
    get_current_profile,
    get_email_sender,
    get_uow,
    require_cron_secret,
)
from quiet_hours.domain.exceptions import DomainException
from quiet_hours.domain.interfaces.infrastructure_interfaces import IEmailSender
from quiet_hours.domain.unit_of_work import UnitOfWork
from quiet_hours.models.profile_model import Profile
from quiet_hours.schemas.notification_schema import (
    DispatchSummary,
    EmptyDispatchSummary,
    NotificationResponse,
)
from quiet_hours.services.notification_service import NotificationDispatcher
from quiet_hours.utils.logger import get_logger

logger = get_logger("notification_router")

router = APIRouter(tags=["Notifications"])


@router.post(
    "/send-notifications",
    dependencies=[Depends(require_cron_secret)],
)
def send_notifications(
    uow: UnitOfWork = Depends(get_uow),
    email_sender: IEmailSender = Depends(get_email_sender),
):
    """Send every reminder due within the lookahead window."""
    try:
        result = NotificationDispatcher(uow, email_sender).run()
    except DomainException:
        raise
    except Exception:
        logger.exception("Dispatcher run failed")
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"error": "Internal server error"},
        )

    if result.total == 0:
        return EmptyDispatchSummary()
    return DispatchSummary(
        total=result.total,
        success=result.success,
        failures=result.failures,
    )


@router.get("/notifications", response_model=List[NotificationResponse])
def list_notifications(
    uow: UnitOfWork = Depends(get_uow),
    profile: Profile = Depends(get_current_profile),
):
    """Reminder rows of the current user, latest first."""
    return uow.notifications.list_for_user(profile.id)


notification_router = router
