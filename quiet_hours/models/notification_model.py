import datetime as dt
import uuid
from dataclasses import dataclass
from typing import Optional, Union

from sqlalchemy import DateTime, Enum, ForeignKey, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from quiet_hours.core.constants import NotificationStatus
from quiet_hours.db.base import Base
from quiet_hours.utils.formatting import as_utc, utcnow


# Delivery state as a closed variant; each state carries only the data that
# is legal for it.
@dataclass(frozen=True)
class Pending:
    status = NotificationStatus.PENDING


@dataclass(frozen=True)
class Sending:
    status = NotificationStatus.SENDING


@dataclass(frozen=True)
class Sent:
    sent_at: dt.datetime
    status = NotificationStatus.SENT


@dataclass(frozen=True)
class Failed:
    detail: str
    status = NotificationStatus.FAILED


NotificationState = Union[Pending, Sending, Sent, Failed]


class EmailNotification(Base):
    """Reminder e-mail scheduled for a quiet block (one per block)"""

    __tablename__ = "email_notifications"

    id: Mapped[str] = mapped_column(
        String, primary_key=True, default=lambda: str(uuid.uuid4())
    )
    quiet_block_id: Mapped[str] = mapped_column(
        String,
        ForeignKey("quiet_blocks.id", ondelete="CASCADE"),
        nullable=False,
        unique=True,
    )
    user_id: Mapped[str] = mapped_column(
        String, ForeignKey("profiles.id", ondelete="CASCADE"), nullable=False, index=True
    )
    scheduled_time: Mapped[dt.datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, index=True
    )
    sent_at: Mapped[Optional[dt.datetime]] = mapped_column(DateTime(timezone=True))
    status: Mapped[NotificationStatus] = mapped_column(
        Enum(
            NotificationStatus,
            name="notification_status",
            native_enum=False,
            length=16,
            values_callable=lambda statuses: [s.value for s in statuses],
        ),
        default=NotificationStatus.PENDING,
        nullable=False,
        index=True,
    )
    error_message: Mapped[Optional[str]] = mapped_column(Text)
    created_at: Mapped[dt.datetime] = mapped_column(DateTime(timezone=True), default=utcnow)
    updated_at: Mapped[dt.datetime] = mapped_column(DateTime(timezone=True), default=utcnow, onupdate=utcnow)

    # Relationships
    quiet_block = relationship("QuietBlock", back_populates="notification")
    profile = relationship("Profile", back_populates="notifications")

    @property
    def state(self) -> NotificationState:
        if self.status == NotificationStatus.SENT:
            return Sent(sent_at=as_utc(self.sent_at))
        if self.status == NotificationStatus.FAILED:
            return Failed(detail=self.error_message or "")
        if self.status == NotificationStatus.SENDING:
            return Sending()
        return Pending()

    # ---- transitions --------------------------------------------------
    def reset_pending(self, scheduled_time: dt.datetime) -> None:
        """Re-arm the reminder, whatever happened to it before."""
        self.scheduled_time = scheduled_time
        self._apply(Pending())

    def mark_sending(self) -> None:
        self._apply(Sending())

    def mark_sent(self, sent_at: dt.datetime) -> None:
        self._apply(Sent(sent_at=sent_at))

    def mark_failed(self, detail: str) -> None:
        self._apply(Failed(detail=detail))

    @staticmethod
    def state_values(state: NotificationState) -> dict:
        """Column values for a state, for bulk UPDATE statements."""
        return {
            "status": state.status,
            "sent_at": state.sent_at if isinstance(state, Sent) else None,
            "error_message": state.detail if isinstance(state, Failed) else None,
        }

    def _apply(self, state: NotificationState) -> None:
        for column, value in self.state_values(state).items():
            setattr(self, column, value)
        self.updated_at = utcnow()
