from typing import Any, Dict

from fastapi import APIRouter, Body, Depends

from quiet_hours.api.v1.dependencies import get_email_sender, get_uow
from quiet_hours.domain.interfaces.infrastructure_interfaces import IEmailSender
from quiet_hours.domain.unit_of_work import UnitOfWork
from quiet_hours.services.profile_service import ProfileService

router = APIRouter(prefix="/webhooks", tags=["Webhooks"])


@router.post("/supabase")
def datastore_webhook(
    payload: Dict[str, Any] = Body(...),
    uow: UnitOfWork = Depends(get_uow),
    email_sender: IEmailSender = Depends(get_email_sender),
):
    """Database change events; a new profile row triggers the welcome e-mail."""
    ProfileService(uow, email_sender).handle_webhook(payload)
    return {"message": "Webhook processed"}


webhook_router = router
