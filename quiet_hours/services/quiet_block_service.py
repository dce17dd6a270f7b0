"""Quiet block CRUD and derivation of each block's reminder row."""

import datetime as dt
from dataclasses import dataclass
from typing import List, Optional

from sqlalchemy.exc import SQLAlchemyError

from quiet_hours.core.config import settings
from quiet_hours.core.constants import NotificationStatus
from quiet_hours.domain.exceptions import InvalidTimeRange, QuietBlockNotFound
from quiet_hours.domain.unit_of_work import UnitOfWork
from quiet_hours.models.notification_model import EmailNotification
from quiet_hours.models.quiet_block_model import QuietBlock
from quiet_hours.schemas.quiet_block_schema import QuietBlockCreate, QuietBlockUpdate
from quiet_hours.utils.formatting import utcnow
from quiet_hours.utils.logger import get_logger


logger = get_logger("quiet_block_service")


def compute_scheduled_time(
    date: dt.date, start_time: dt.time, lead: dt.timedelta
) -> dt.datetime:
    """Reminder instant: block start (UTC unless the time carries an offset) minus the lead time."""
    start = dt.datetime.combine(date, start_time)
    if start.tzinfo is None:
        start = start.replace(tzinfo=dt.timezone.utc)
    return start.astimezone(dt.timezone.utc) - lead


@dataclass
class QuietBlockResult:
    quiet_block: QuietBlock
    reminder_scheduled: bool = False
    reminder_error: Optional[str] = None
    notification: Optional[EmailNotification] = None


class QuietBlockService:
    def __init__(self, uow: UnitOfWork, reminder_lead: Optional[dt.timedelta] = None):
        self.uow = uow
        self.reminder_lead = reminder_lead or dt.timedelta(
            minutes=settings.notifications.reminder_lead_minutes
        )

    # ---------------- queries ----------------------------------------
    def get_quiet_block(self, owner_id: str, quiet_block_id: str) -> QuietBlock:
        block = self.uow.quiet_blocks.get_for_owner(quiet_block_id, owner_id)
        if block is None:
            raise QuietBlockNotFound(quiet_block_id)
        return block

    def list_quiet_blocks(
        self,
        owner_id: str,
        *,
        upcoming_only: bool = False,
        include_inactive: bool = False,
        now: Optional[dt.datetime] = None,
    ) -> List[QuietBlock]:
        starting_after = (now or utcnow()) if upcoming_only else None
        return self.uow.quiet_blocks.list_for_owner(
            owner_id,
            include_inactive=include_inactive,
            starting_after=starting_after,
        )

    def get_notification(self, owner_id: str, quiet_block_id: str) -> Optional[EmailNotification]:
        block = self.get_quiet_block(owner_id, quiet_block_id)
        return self.uow.notifications.get_by_quiet_block(block.id)

    # ---------------- CRUD -------------------------------------------
    def create_quiet_block(
        self,
        owner_id: str,
        block_in: QuietBlockCreate,
        now: Optional[dt.datetime] = None,
    ) -> QuietBlockResult:
        """Create the block, then its pending reminder if the reminder is still ahead of us.

        The block is committed on its own; a failed reminder write is reported
        on the result and never undoes the block.
        """
        self._check_time_range(block_in.start_time, block_in.end_time)
        now = now or utcnow()

        with self.uow:
            block = QuietBlock(
                user_id=owner_id,
                title=block_in.title,
                description=block_in.description,
                date=block_in.date,
                start_time=block_in.start_time,
                end_time=block_in.end_time,
                is_recurring=block_in.is_recurring,
                recurrence_pattern=block_in.recurrence_pattern,
                is_active=True,
            )
            self.uow.quiet_blocks.add(block)
        logger.info(f"Created quiet block {block.id} for user {owner_id}")

        result = QuietBlockResult(quiet_block=block)
        scheduled = compute_scheduled_time(block.date, block.start_time, self.reminder_lead)
        if scheduled <= now:
            logger.info(f"No reminder for quiet block {block.id}: {scheduled.isoformat()} already passed")
            return result

        try:
            with self.uow:
                notification = EmailNotification(
                    quiet_block_id=block.id,
                    user_id=owner_id,
                    scheduled_time=scheduled,
                    status=NotificationStatus.PENDING,
                )
                self.uow.notifications.add(notification)
        except SQLAlchemyError as exc:
            logger.warning(f"Reminder setup failed for quiet block {block.id}: {exc}")
            result.reminder_error = f"Notification setup failed: {exc}"
            return result

        result.reminder_scheduled = True
        result.notification = notification
        return result

    def update_quiet_block(
        self,
        owner_id: str,
        quiet_block_id: str,
        block_in: QuietBlockUpdate,
        now: Optional[dt.datetime] = None,
    ) -> QuietBlockResult:
        """Apply an edit and re-arm the reminder.

        Every edit recomputes the reminder instant and forces the row back to
        pending, even when it was already sent or failed.
        """
        block = self.get_quiet_block(owner_id, quiet_block_id)
        changes = block_in.model_dump(exclude_unset=True)
        for required in ("title", "date", "start_time", "end_time", "is_recurring", "is_active"):
            if changes.get(required, ...) is None:
                changes.pop(required)
        self._check_time_range(
            changes.get("start_time", block.start_time),
            changes.get("end_time", block.end_time),
        )
        now = now or utcnow()

        with self.uow:
            for field, value in changes.items():
                setattr(block, field, value)
            block.updated_at = now
        logger.info(f"Updated quiet block {block.id}: {', '.join(sorted(changes)) or 'no changes'}")

        result = QuietBlockResult(quiet_block=block)
        scheduled = compute_scheduled_time(block.date, block.start_time, self.reminder_lead)
        try:
            with self.uow:
                notification = self.uow.notifications.get_by_quiet_block(block.id)
                if notification is None:
                    if scheduled > now:
                        notification = EmailNotification(
                            quiet_block_id=block.id,
                            user_id=block.user_id,
                            scheduled_time=scheduled,
                            status=NotificationStatus.PENDING,
                        )
                        self.uow.notifications.add(notification)
                if notification is not None:
                    notification.reset_pending(scheduled)
        except SQLAlchemyError as exc:
            logger.warning(f"Reminder update failed for quiet block {block.id}: {exc}")
            result.reminder_error = f"Notification update failed: {exc}"
            return result

        result.notification = notification
        result.reminder_scheduled = notification is not None and scheduled > now
        return result

    def deactivate_quiet_block(self, owner_id: str, quiet_block_id: str) -> QuietBlock:
        """Soft removal: the block and its reminder row stay, the dispatcher skips them."""
        block = self.get_quiet_block(owner_id, quiet_block_id)
        with self.uow:
            block.is_active = False
            block.updated_at = utcnow()
        logger.info(f"Deactivated quiet block {block.id}")
        return block

    def delete_quiet_block(self, owner_id: str, quiet_block_id: str) -> None:
        """Delete the block and its reminder row in one transaction."""
        block = self.get_quiet_block(owner_id, quiet_block_id)
        with self.uow:
            removed = self.uow.notifications.delete_for_quiet_block(block.id)
            self.uow.quiet_blocks.delete(block)
        logger.info(f"Deleted quiet block {quiet_block_id} and {removed} reminder(s)")

    # ---------------- helpers ----------------------------------------
    @staticmethod
    def _check_time_range(start_time: dt.time, end_time: dt.time) -> None:
        if end_time <= start_time:
            raise InvalidTimeRange()
