from typing import Any, Dict, Optional

from quiet_hours.domain.exceptions import ProfileNotFound
from quiet_hours.domain.interfaces.infrastructure_interfaces import EmailSent, IEmailSender
from quiet_hours.domain.unit_of_work import UnitOfWork
from quiet_hours.models.profile_model import Profile
from quiet_hours.schemas.notification_schema import WebhookPayload
from quiet_hours.utils.logger import get_logger


logger = get_logger("profile_service")


class ProfileService:
    def __init__(self, uow: UnitOfWork, email_sender: Optional[IEmailSender] = None):
        self.uow = uow
        self.email_sender = email_sender

    def get_profile(self, profile_id: str) -> Profile:
        profile = self.uow.profiles.get(profile_id)
        if profile is None:
            raise ProfileNotFound(profile_id)
        return profile

    def ensure_profile(
        self,
        profile_id: str,
        email: Optional[str],
        full_name: Optional[str] = None,
        avatar_url: Optional[str] = None,
    ) -> Profile:
        """Return the caller's profile, creating it from token claims on first use."""
        profile = self.uow.profiles.get(profile_id)
        if profile is not None:
            return profile
        if not email:
            raise ProfileNotFound(profile_id)

        with self.uow:
            profile = Profile(
                id=profile_id,
                email=email,
                full_name=full_name,
                avatar_url=avatar_url,
            )
            self.uow.profiles.add(profile)
        logger.info(f"Created profile {profile_id}")
        return profile

    def handle_webhook(self, payload: Dict[str, Any]) -> None:
        """Best-effort welcome e-mail for newly inserted profiles; never raises."""
        try:
            event = WebhookPayload.model_validate(payload)
            if event.type != "INSERT" or event.table != "profiles":
                logger.info(f"Ignoring webhook event {event.type} on {event.table}")
                return

            record = event.record or {}
            email = record.get("email")
            if not email:
                logger.info("Ignoring new profile without an email address")
                return

            result = self.email_sender.send_welcome(email, record.get("full_name"))
            if isinstance(result, EmailSent):
                logger.info(f"Welcome email sent to {email}")
            else:
                logger.warning(f"Welcome email to {email} failed: {result.error}")
        except Exception as exc:
            logger.warning(f"Webhook handling failed: {exc}")
