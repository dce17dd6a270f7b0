"""Reminder dispatch: find due reminder rows, e-mail their owners, record the outcome."""

import datetime as dt
from dataclasses import dataclass
from enum import Enum
from typing import List, Optional

from sqlalchemy.exc import SQLAlchemyError

from quiet_hours.core.config import settings
from quiet_hours.core.constants import UNKNOWN_ERROR
from quiet_hours.domain.exceptions import NotificationFetchError
from quiet_hours.domain.interfaces.infrastructure_interfaces import EmailSent, IEmailSender
from quiet_hours.domain.unit_of_work import UnitOfWork
from quiet_hours.models.notification_model import EmailNotification, Failed, Sent
from quiet_hours.utils.formatting import format_clock_time, format_long_date, utcnow
from quiet_hours.utils.logger import get_logger


logger = get_logger("notification_service")


class DispatchOutcome(str, Enum):
    SENT = "sent"
    FAILED = "failed"
    SKIPPED = "skipped"


@dataclass
class DispatchResult:
    total: int = 0
    success: int = 0
    failures: int = 0
    skipped: int = 0

    def record(self, outcome: DispatchOutcome) -> None:
        if outcome == DispatchOutcome.SENT:
            self.success += 1
        elif outcome == DispatchOutcome.FAILED:
            self.failures += 1
        else:
            self.skipped += 1


class NotificationDispatcher:
    """One polling pass over the reminder rows.

    Rows are handled one at a time and in isolation: whatever happens to one
    row is written to that row only, and never stops the rest of the batch.
    """

    def __init__(
        self,
        uow: UnitOfWork,
        email_sender: IEmailSender,
        lookahead: Optional[dt.timedelta] = None,
    ):
        self.uow = uow
        self.email_sender = email_sender
        self.lookahead = lookahead or dt.timedelta(
            minutes=settings.notifications.lookahead_minutes
        )

    def run(self, now: Optional[dt.datetime] = None) -> DispatchResult:
        now = now or utcnow()
        window_end = now + self.lookahead
        logger.info(f"Dispatching reminders due between {now.isoformat()} and {window_end.isoformat()}")
        self._warn_stale_in_flight(now - self.lookahead)

        try:
            candidates = self.uow.notifications.find_due(now, window_end)
        except SQLAlchemyError as exc:
            self.uow.rollback()
            logger.error(f"Failed to fetch due notifications: {exc}")
            raise NotificationFetchError() from exc

        batch = self._unique(candidates)
        result = DispatchResult(total=len(batch))
        for notification in batch:
            result.record(self._process(notification, now))

        logger.info(
            f"Dispatch finished: total={result.total} success={result.success} "
            f"failures={result.failures} skipped={result.skipped}"
        )
        return result

    # ---------------- per record -------------------------------------
    def _process(self, notification: EmailNotification, now: dt.datetime) -> DispatchOutcome:
        notification_id = notification.id
        try:
            block = notification.quiet_block
            profile = notification.profile
            if block is None or profile is None or not block.is_active:
                logger.info(f"Skipping notification {notification_id}: block or profile unavailable")
                return DispatchOutcome.SKIPPED

            with self.uow:
                claimed = self.uow.notifications.claim(notification_id)
            if not claimed:
                logger.info(f"Skipping notification {notification_id}: claimed by another run")
                return DispatchOutcome.SKIPPED

            email_result = self.email_sender.send_reminder(
                profile.email,
                user_name=profile.full_name,
                block_title=block.title,
                block_description=block.description,
                start_time=format_clock_time(block.start_time),
                end_time=format_clock_time(block.end_time),
                date=format_long_date(block.date),
            )

            if isinstance(email_result, EmailSent):
                outcome = Sent(sent_at=now)
            else:
                outcome = Failed(detail=email_result.error or UNKNOWN_ERROR)
            with self.uow:
                recorded = self.uow.notifications.complete(notification_id, outcome)
            if not recorded:
                logger.info(f"Notification {notification_id} was re-armed while sending; left pending")

            if isinstance(email_result, EmailSent):
                return DispatchOutcome.SENT
            logger.warning(f"Reminder {notification_id} failed: {email_result.error}")
            return DispatchOutcome.FAILED

        except Exception as exc:
            logger.exception(f"Error processing notification {notification_id}")
            self._record_failure(notification_id, str(exc) or UNKNOWN_ERROR)
            return DispatchOutcome.FAILED

    def _record_failure(self, notification_id: str, detail: str) -> None:
        try:
            with self.uow:
                self.uow.notifications.complete(notification_id, Failed(detail=detail))
        except SQLAlchemyError as exc:
            logger.error(f"Could not mark notification {notification_id} as failed: {exc}")

    def _warn_stale_in_flight(self, older_than: dt.datetime) -> None:
        try:
            stale = self.uow.notifications.find_stale_in_flight(older_than)
        except SQLAlchemyError as exc:
            self.uow.rollback()
            logger.error(f"Failed to look up in-flight notifications: {exc}")
            return
        stale_ids = [notification.id for notification in stale]
        if stale_ids:
            logger.warning(
                f"{len(stale_ids)} notification(s) stuck in sending since before "
                f"{older_than.isoformat()}; edit their blocks to re-arm: {', '.join(stale_ids)}"
            )

    @staticmethod
    def _unique(candidates: List[EmailNotification]) -> List[EmailNotification]:
        seen = set()
        batch = []
        for notification in candidates:
            if notification.id in seen:
                continue
            seen.add(notification.id)
            batch.append(notification)
        return batch
