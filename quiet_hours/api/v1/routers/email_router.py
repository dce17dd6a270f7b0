from typing import Any, Dict

from fastapi import APIRouter, Body, Depends, Request, status
from fastapi.responses import JSONResponse

from quiet_hours.api.v1.dependencies import get_email_sender
from quiet_hours.core.config import settings
from quiet_hours.domain.interfaces.infrastructure_interfaces import EmailSent, IEmailSender
from quiet_hours.middlewares.rate_limit import limiter
from quiet_hours.services.email_service import EmailService

router = APIRouter(tags=["Email"])


@router.post("/test-email")
@limiter.limit(lambda: settings.test_email_rate_limit)
def send_test_email(
    request: Request,
    payload: Dict[str, Any] = Body(...),
    email_sender: IEmailSender = Depends(get_email_sender),
):
    """Send a welcome or reminder e-mail with placeholder values to check provider setup."""
    result = EmailService(email_sender).send_test_email(payload)

    if isinstance(result, EmailSent):
        return {"message": "Email sent successfully", "data": result.data}
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"error": "Failed to send email", "details": result.error},
    )


email_router = router
