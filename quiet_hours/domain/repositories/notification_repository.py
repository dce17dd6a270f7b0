import datetime as dt
from typing import List, Optional

from sqlalchemy import delete, select, update
from sqlalchemy.orm import Session, joinedload

from quiet_hours.core.constants import NotificationStatus
from quiet_hours.domain.repositories.base_sqlalchemy import SQLAlchemyRepository
from quiet_hours.domain.repositories.inotification_repository import INotificationRepository
from quiet_hours.models.notification_model import EmailNotification, NotificationState
from quiet_hours.utils.formatting import utcnow


class NotificationRepository(SQLAlchemyRepository[EmailNotification, str], INotificationRepository):
    def __init__(self, db: Session):
        super().__init__(EmailNotification, db)

    def get_by_quiet_block(self, quiet_block_id: str) -> Optional[EmailNotification]:
        stmt = select(EmailNotification).where(
            EmailNotification.quiet_block_id == quiet_block_id
        )
        return self.db.scalar(stmt)

    def find_due(
        self, window_start: dt.datetime, window_end: dt.datetime
    ) -> List[EmailNotification]:
        stmt = (
            select(EmailNotification)
            .options(
                joinedload(EmailNotification.quiet_block),
                joinedload(EmailNotification.profile),
            )
            .where(
                EmailNotification.status == NotificationStatus.PENDING,
                EmailNotification.scheduled_time >= window_start,
                EmailNotification.scheduled_time <= window_end,
            )
            .order_by(EmailNotification.scheduled_time, EmailNotification.id)
        )
        return list(self.db.scalars(stmt).unique().all())

    def claim(self, notification_id: str) -> bool:
        stmt = (
            update(EmailNotification)
            .where(
                EmailNotification.id == notification_id,
                EmailNotification.status == NotificationStatus.PENDING,
            )
            .values(status=NotificationStatus.SENDING, updated_at=utcnow())
            .execution_options(synchronize_session=False)
        )
        result = self.db.execute(stmt)
        self._expire_cached(notification_id)
        return result.rowcount == 1

    def complete(self, notification_id: str, state: NotificationState) -> bool:
        stmt = (
            update(EmailNotification)
            .where(
                EmailNotification.id == notification_id,
                EmailNotification.status == NotificationStatus.SENDING,
            )
            .values(**EmailNotification.state_values(state), updated_at=utcnow())
            .execution_options(synchronize_session=False)
        )
        result = self.db.execute(stmt)
        self._expire_cached(notification_id)
        return result.rowcount == 1

    def find_stale_in_flight(self, older_than: dt.datetime) -> List[EmailNotification]:
        stmt = (
            select(EmailNotification)
            .where(
                EmailNotification.status == NotificationStatus.SENDING,
                EmailNotification.updated_at < older_than,
            )
            .order_by(EmailNotification.updated_at, EmailNotification.id)
        )
        return list(self.db.scalars(stmt).all())

    def delete_for_quiet_block(self, quiet_block_id: str) -> int:
        stmt = (
            delete(EmailNotification)
            .where(EmailNotification.quiet_block_id == quiet_block_id)
            .execution_options(synchronize_session="fetch")
        )
        return self.db.execute(stmt).rowcount

    def list_for_user(self, user_id: str) -> List[EmailNotification]:
        stmt = (
            select(EmailNotification)
            .where(EmailNotification.user_id == user_id)
            .order_by(EmailNotification.scheduled_time.desc())
        )
        return list(self.db.scalars(stmt).all())

    def _expire_cached(self, notification_id: str) -> None:
        # Bulk updates bypass the identity map; reload the row on next access.
        key = self.db.identity_key(EmailNotification, notification_id)
        cached = self.db.identity_map.get(key)
        if cached is not None:
            self.db.expire(cached)
