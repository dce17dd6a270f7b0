import datetime as dt
from unittest.mock import patch

from quiet_hours.core.constants import NotificationStatus
from quiet_hours.domain.exceptions import NotificationFetchError
from quiet_hours.models.notification_model import EmailNotification
from quiet_hours.models.quiet_block_model import QuietBlock
from quiet_hours.tasks.notification_tasks import NotificationPoller, main
from tests.conftest import FakeEmailSender


def make_poller(db_session, sender):
    poller = NotificationPoller(email_sender=sender, interval=5)
    poller.session = lambda: db_session
    return poller


def test_dispatch_once_sends_due_reminders(db_session, profile):
    now = dt.datetime.now(dt.timezone.utc)
    block = QuietBlock(
        user_id=profile.id,
        title="Flashcards",
        date=dt.date(2030, 1, 1),
        start_time=dt.time(9, 0),
        end_time=dt.time(9, 30),
    )
    db_session.add(block)
    db_session.flush()
    db_session.add(
        EmailNotification(
            quiet_block_id=block.id,
            user_id=profile.id,
            scheduled_time=now + dt.timedelta(minutes=2),
            status=NotificationStatus.PENDING,
        )
    )
    db_session.commit()
    sender = FakeEmailSender()

    result = make_poller(db_session, sender).dispatch_once()

    assert result.success == 1
    assert sender.sent[0]["to"] == profile.email


def test_dispatch_once_survives_fetch_failure(db_session):
    poller = make_poller(db_session, FakeEmailSender())

    with patch(
        "quiet_hours.tasks.notification_tasks.NotificationDispatcher.run",
        side_effect=NotificationFetchError(),
    ):
        assert poller.dispatch_once() is None


def test_main_once_runs_a_single_pass():
    with patch.object(NotificationPoller, "dispatch_once") as dispatch_once, patch.object(
        NotificationPoller, "run_forever"
    ) as run_forever, patch("quiet_hours.tasks.notification_tasks.SMTPEmailSender"):
        main(["--once"])

    dispatch_once.assert_called_once()
    run_forever.assert_not_called()
