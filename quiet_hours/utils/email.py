from contextlib import contextmanager
from email.mime.multipart import MIMEMultipart
from email.mime.text import MIMEText
from email.utils import formataddr, make_msgid
from typing import Any, Dict, Generator
import smtplib

from quiet_hours.core.config import SMTPSettings
from quiet_hours.core.constants import EmailKind, UNKNOWN_ERROR
from quiet_hours.domain.interfaces.infrastructure_interfaces import (
    EmailFailed,
    EmailResult,
    EmailSent,
    IEmailSender,
)
from quiet_hours.utils.email_templates import render_email
from quiet_hours.utils.logger import get_logger


logger = get_logger("email")


class SMTPEmailSender(IEmailSender):
    """Sends the application's HTML e-mails through the provider's SMTP relay."""

    def __init__(self, smtp_settings: SMTPSettings, dashboard_url: str) -> None:
        self.smtp = smtp_settings
        self.dashboard_url = dashboard_url

    @property
    def sender(self) -> str:
        return formataddr((self.smtp.sender_name, self.smtp.sender_email))

    @contextmanager
    def _smtp_connection(self) -> Generator[smtplib.SMTP, None, None]:
        """Yields an authenticated SMTP connection; ``QUIT`` is sent on exit."""
        with smtplib.SMTP(
            self.smtp.smtp_server, self.smtp.smtp_port, timeout=self.smtp.smtp_timeout
        ) as server:
            if self.smtp.smtp_use_tls:
                server.starttls()
            if self.smtp.smtp_password:
                server.login(self.smtp.smtp_username, self.smtp.smtp_password)
            yield server

    def _build_message(self, recipient: str, subject: str, html_body: str) -> MIMEMultipart:
        """Composes an HTML MIME message."""
        msg = MIMEMultipart("alternative")
        msg["From"] = self.sender
        msg["To"] = recipient
        msg["Subject"] = subject
        msg["Message-ID"] = make_msgid(domain=self.smtp.sender_email.rpartition("@")[2] or None)
        msg.attach(MIMEText(html_body.strip(), "html", "utf-8"))
        return msg

    def send(self, kind: EmailKind, recipient: str, fields: Dict[str, Any]) -> EmailResult:
        try:
            subject, html_body = render_email(EmailKind(kind), fields, self.dashboard_url)
            message = self._build_message(recipient, subject, html_body)
            with self._smtp_connection() as server:
                refused = server.send_message(message)
        except Exception as exc:
            # Provider boundary: callers only ever see the failure variant.
            logger.warning(f"Failed to send {kind} email to {recipient}: {exc}")
            return EmailFailed(error=str(exc) or UNKNOWN_ERROR)

        if refused:
            detail = "; ".join(f"{addr}: {code} {reason!r}" for addr, (code, reason) in refused.items())
            logger.warning(f"Recipient refused for {kind} email: {detail}")
            return EmailFailed(error=f"Recipient refused: {detail}")

        logger.info(f"Sent {EmailKind(kind).value} email to {recipient}")
        return EmailSent(data={"id": message["Message-ID"], "to": [recipient], "subject": subject})
