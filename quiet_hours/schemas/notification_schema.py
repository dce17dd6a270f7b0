from datetime import datetime
from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict

from quiet_hours.core.constants import NotificationStatus


class NotificationResponse(BaseModel):
    id: str
    quiet_block_id: str
    user_id: str
    scheduled_time: datetime
    status: NotificationStatus
    sent_at: Optional[datetime] = None
    error_message: Optional[str] = None
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)


# ============================================================================
# Dispatcher Schemas
# ============================================================================


class DispatchSummary(BaseModel):
    message: str = "Notifications processed"
    total: int
    success: int
    failures: int


class EmptyDispatchSummary(BaseModel):
    message: str = "No notifications to send"
    processed: int = 0


# ============================================================================
# Webhook Schemas
# ============================================================================


class WebhookPayload(BaseModel):
    """Change event posted by the datastore's database webhook"""

    type: Optional[str] = None
    table: Optional[str] = None
    record: Optional[Dict[str, Any]] = None
    schema_name: Optional[str] = None
    old_record: Optional[Dict[str, Any]] = None
