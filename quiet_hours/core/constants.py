from enum import Enum


class EmailKind(str, Enum):
    WELCOME = "welcome"
    REMINDER = "reminder"


class NotificationStatus(str, Enum):
    PENDING = "pending"
    SENDING = "sending"  # claimed by a dispatcher run, send in progress
    SENT = "sent"
    FAILED = "failed"


UNKNOWN_ERROR = "Unknown error"
DEFAULT_GREETING_NAME = "there"
