import datetime as dt

import pytest
from sqlalchemy.exc import IntegrityError

from quiet_hours.core.constants import NotificationStatus
from quiet_hours.models.notification_model import EmailNotification, Failed, Sent
from quiet_hours.models.quiet_block_model import QuietBlock


UTC = dt.timezone.utc


def add_block_with_reminder(db, owner_id, scheduled, status=NotificationStatus.PENDING):
    block = QuietBlock(
        user_id=owner_id,
        title="Reading",
        date=scheduled.date(),
        start_time=(scheduled + dt.timedelta(minutes=10)).time(),
        end_time=dt.time(23, 59),
    )
    db.add(block)
    db.flush()
    notification = EmailNotification(
        quiet_block_id=block.id,
        user_id=owner_id,
        scheduled_time=scheduled,
        status=status,
    )
    db.add(notification)
    db.commit()
    return notification


class TestNotificationRepository:
    def test_find_due_filters_status_and_window(self, uow, profile, db_session):
        start = dt.datetime(2025, 3, 10, 8, 45, tzinfo=UTC)
        due = add_block_with_reminder(db_session, profile.id, dt.datetime(2025, 3, 10, 8, 50, tzinfo=UTC))
        add_block_with_reminder(db_session, profile.id, dt.datetime(2025, 3, 10, 8, 40, tzinfo=UTC))
        add_block_with_reminder(db_session, profile.id, dt.datetime(2025, 3, 10, 9, 30, tzinfo=UTC))
        add_block_with_reminder(
            db_session, profile.id, dt.datetime(2025, 3, 10, 8, 52, tzinfo=UTC), NotificationStatus.SENT
        )

        found = uow.notifications.find_due(start, start + dt.timedelta(minutes=10))

        assert [n.id for n in found] == [due.id]
        assert found[0].quiet_block.title == "Reading"
        assert found[0].profile.email == "student@example.com"

    def test_claim_only_succeeds_once(self, uow, profile, db_session):
        notification = add_block_with_reminder(
            db_session, profile.id, dt.datetime(2025, 3, 10, 8, 50, tzinfo=UTC)
        )

        with uow:
            first = uow.notifications.claim(notification.id)
        with uow:
            second = uow.notifications.claim(notification.id)

        assert first is True
        assert second is False
        db_session.refresh(notification)
        assert notification.status == NotificationStatus.SENDING

    def test_delete_for_quiet_block(self, uow, profile, db_session):
        notification = add_block_with_reminder(
            db_session, profile.id, dt.datetime(2025, 3, 10, 8, 50, tzinfo=UTC)
        )
        block_id = notification.quiet_block_id

        with uow:
            removed = uow.notifications.delete_for_quiet_block(block_id)

        assert removed == 1
        assert uow.notifications.get_by_quiet_block(block_id) is None
        assert uow.quiet_blocks.get(block_id) is not None

    def test_one_reminder_per_block(self, profile, db_session):
        notification = add_block_with_reminder(
            db_session, profile.id, dt.datetime(2025, 3, 10, 8, 50, tzinfo=UTC)
        )
        db_session.add(
            EmailNotification(
                quiet_block_id=notification.quiet_block_id,
                user_id=profile.id,
                scheduled_time=notification.scheduled_time,
            )
        )

        with pytest.raises(IntegrityError):
            db_session.commit()
        db_session.rollback()

    def test_complete_only_applies_while_sending(self, uow, profile, db_session):
        sent_at = dt.datetime(2025, 3, 10, 8, 51, tzinfo=UTC)
        notification = add_block_with_reminder(
            db_session, profile.id, dt.datetime(2025, 3, 10, 8, 50, tzinfo=UTC)
        )

        with uow:
            early = uow.notifications.complete(notification.id, Sent(sent_at=sent_at))
        assert early is False
        assert notification.status == NotificationStatus.PENDING

        with uow:
            uow.notifications.claim(notification.id)
            done = uow.notifications.complete(notification.id, Sent(sent_at=sent_at))

        assert done is True
        assert notification.status == NotificationStatus.SENT
        assert notification.sent_at.replace(tzinfo=None) == sent_at.replace(tzinfo=None)
        assert notification.error_message is None

    def test_complete_records_failure_detail(self, uow, profile, db_session):
        notification = add_block_with_reminder(
            db_session, profile.id, dt.datetime(2025, 3, 10, 8, 50, tzinfo=UTC), NotificationStatus.SENDING
        )

        with uow:
            done = uow.notifications.complete(notification.id, Failed(detail="mailbox full"))

        assert done is True
        assert notification.status == NotificationStatus.FAILED
        assert notification.error_message == "mailbox full"
        assert notification.sent_at is None

    def test_find_stale_in_flight(self, uow, profile, db_session):
        cutoff = dt.datetime(2025, 3, 10, 8, 0, tzinfo=UTC)
        stale = add_block_with_reminder(
            db_session, profile.id, dt.datetime(2025, 3, 10, 7, 50, tzinfo=UTC), NotificationStatus.SENDING
        )
        recent = add_block_with_reminder(
            db_session, profile.id, dt.datetime(2025, 3, 10, 8, 50, tzinfo=UTC), NotificationStatus.SENDING
        )
        finished = add_block_with_reminder(
            db_session, profile.id, dt.datetime(2025, 3, 10, 7, 50, tzinfo=UTC), NotificationStatus.SENT
        )
        stale.updated_at = cutoff - dt.timedelta(minutes=30)
        recent.updated_at = cutoff + dt.timedelta(minutes=5)
        finished.updated_at = cutoff - dt.timedelta(minutes=30)
        db_session.commit()

        found = uow.notifications.find_stale_in_flight(cutoff)

        assert [n.id for n in found] == [stale.id]
