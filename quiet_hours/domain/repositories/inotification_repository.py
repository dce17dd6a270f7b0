import datetime as dt
from abc import ABC, abstractmethod
from typing import List, Optional

from quiet_hours.domain.repositories.base import IRepository
from quiet_hours.models.notification_model import EmailNotification, NotificationState


class INotificationRepository(IRepository[EmailNotification, str], ABC):
    """Store of reminder rows used by the quiet block service and the dispatcher."""

    @abstractmethod
    def get_by_quiet_block(self, quiet_block_id: str) -> Optional[EmailNotification]:
        pass

    @abstractmethod
    def find_due(
        self, window_start: dt.datetime, window_end: dt.datetime
    ) -> List[EmailNotification]:
        """Pending rows scheduled inside the window, with block and profile loaded."""

    @abstractmethod
    def claim(self, notification_id: str) -> bool:
        """Atomically move a row from pending to sending; False if another run got it."""

    @abstractmethod
    def complete(self, notification_id: str, state: NotificationState) -> bool:
        """Record the send outcome only while the row is still sending; False if it was re-armed meanwhile."""

    @abstractmethod
    def find_stale_in_flight(self, older_than: dt.datetime) -> List[EmailNotification]:
        """Rows left in sending since before ``older_than``."""

    @abstractmethod
    def delete_for_quiet_block(self, quiet_block_id: str) -> int:
        pass
