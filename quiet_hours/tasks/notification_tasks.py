"""Standalone reminder poller.

Runs the same dispatch pass as ``POST /api/v1/send-notifications`` on a fixed
interval, for deployments without an external cron trigger::

    python -m quiet_hours.tasks.notification_tasks --interval 60
    python -m quiet_hours.tasks.notification_tasks --once
"""

import argparse
import time
from typing import Optional

from quiet_hours.core.config import settings
from quiet_hours.db.session import db_manager
from quiet_hours.domain.exceptions import DomainException
from quiet_hours.domain.interfaces.infrastructure_interfaces import IEmailSender
from quiet_hours.domain.unit_of_work import UnitOfWork
from quiet_hours.services.notification_service import DispatchResult, NotificationDispatcher
from quiet_hours.utils.email import SMTPEmailSender
from quiet_hours.utils.logger import configure_logging, get_logger


logger = get_logger("notification_tasks")


class NotificationPoller:
    def __init__(self, email_sender: Optional[IEmailSender] = None, interval: Optional[int] = None):
        self.session = db_manager.SessionLocal
        self.email_sender = email_sender or SMTPEmailSender(settings.smtp, settings.dashboard_url)
        self.interval = interval or settings.notifications.poll_interval_seconds

    def run_forever(self):
        logger.info(f"Reminder poller started, interval {self.interval}s")
        while True:
            self.dispatch_once()
            time.sleep(self.interval)

    def dispatch_once(self) -> Optional[DispatchResult]:
        # Fresh session per tick so a broken connection never outlives one pass
        db = self.session()
        try:
            dispatcher = NotificationDispatcher(UnitOfWork(db), self.email_sender)
            return dispatcher.run()
        except DomainException as exc:
            logger.error(f"Dispatch pass aborted: {exc.message}")
            return None
        finally:
            db.close()


def main(argv=None):
    parser = argparse.ArgumentParser(description="Send due quiet-block reminders")
    parser.add_argument("--once", action="store_true", help="run a single dispatch pass and exit")
    parser.add_argument("--interval", type=int, default=None, help="seconds between passes")
    args = parser.parse_args(argv)

    configure_logging(settings.debug)
    poller = NotificationPoller(interval=args.interval)
    if args.once:
        poller.dispatch_once()
        return
    try:
        poller.run_forever()
    except KeyboardInterrupt:
        logger.info("Reminder poller stopped")


if __name__ == "__main__":
    main()
