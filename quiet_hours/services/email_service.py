from typing import Any, Dict

from quiet_hours.core.constants import EmailKind
from quiet_hours.domain.exceptions import InvalidEmailType, RequiredFieldMissing
from quiet_hours.domain.interfaces.infrastructure_interfaces import EmailResult, IEmailSender
from quiet_hours.utils.logger import get_logger


logger = get_logger("email_service")

# Placeholder values for the manual test trigger
TEST_USER_NAME = "Test User"
TEST_REMINDER_FIELDS = {
    "title": "Test Study Session",
    "description": "This is a test quiet block reminder",
    "startTime": "2:00 PM",
    "endTime": "3:00 PM",
    "date": "Today",
}


class EmailService:
    """Manual e-mail trigger used to check provider configuration."""

    def __init__(self, email_sender: IEmailSender):
        self.email_sender = email_sender

    def send_test_email(self, payload: Dict[str, Any]) -> EmailResult:
        email = payload.get("email")
        if not email:
            raise RequiredFieldMissing("email")

        try:
            kind = EmailKind(payload.get("type"))
        except ValueError:
            raise InvalidEmailType(payload.get("type")) from None

        name = payload.get("name") or TEST_USER_NAME
        logger.info(f"Sending test {kind.value} email to {email}")

        if kind == EmailKind.WELCOME:
            return self.email_sender.send_welcome(email, name)

        def field(key: str) -> str:
            return payload.get(key) or TEST_REMINDER_FIELDS[key]

        return self.email_sender.send_reminder(
            email,
            user_name=name,
            block_title=field("title"),
            block_description=field("description"),
            start_time=field("startTime"),
            end_time=field("endTime"),
            date=field("date"),
        )
