# Import order is important to avoid circular dependencies
from quiet_hours.models.profile_model import Profile
from quiet_hours.models.quiet_block_model import QuietBlock
from quiet_hours.models.notification_model import EmailNotification

__all__ = [
    "Profile",
    "QuietBlock",
    "EmailNotification",
]
