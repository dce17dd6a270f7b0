"""Infrastructure service interfaces to decouple domain from concrete implementations."""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, ClassVar, Dict, Optional, Union

from quiet_hours.core.constants import DEFAULT_GREETING_NAME, EmailKind


@dataclass(frozen=True)
class EmailSent:
    data: Dict[str, Any] = field(default_factory=dict)
    success: ClassVar[bool] = True


@dataclass(frozen=True)
class EmailFailed:
    error: str
    success: ClassVar[bool] = False


EmailResult = Union[EmailSent, EmailFailed]


class IEmailSender(ABC):
    """Interface for outbound transactional e-mail.

    Implementations must never raise: every provider error is returned as
    ``EmailFailed``.
    """

    @abstractmethod
    def send(self, kind: EmailKind, recipient: str, fields: Dict[str, Any]) -> EmailResult:
        """Render the template for ``kind`` with ``fields`` and send it to ``recipient``."""

    def send_reminder(
        self,
        recipient: str,
        *,
        user_name: Optional[str],
        block_title: str,
        block_description: Optional[str],
        start_time: str,
        end_time: str,
        date: str,
    ) -> EmailResult:
        return self.send(
            EmailKind.REMINDER,
            recipient,
            {
                "user_name": user_name or DEFAULT_GREETING_NAME,
                "block_title": block_title,
                "block_description": block_description,
                "start_time": start_time,
                "end_time": end_time,
                "date": date,
            },
        )

    def send_welcome(self, recipient: str, user_name: Optional[str]) -> EmailResult:
        return self.send(
            EmailKind.WELCOME,
            recipient,
            {"user_name": user_name or DEFAULT_GREETING_NAME},
        )
