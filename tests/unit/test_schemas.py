import datetime as dt

import pytest
from pydantic import ValidationError

from quiet_hours.core.constants import NotificationStatus
from quiet_hours.models.notification_model import EmailNotification
from quiet_hours.models.quiet_block_model import QuietBlock
from quiet_hours.schemas.notification_schema import NotificationResponse
from quiet_hours.schemas.quiet_block_schema import (
    QuietBlockCreate,
    QuietBlockResponse,
    QuietBlockUpdate,
)


UTC = dt.timezone.utc


def create_payload(**overrides):
    data = {
        "title": "Thermodynamics",
        "date": "2025-03-10",
        "start_time": "09:00",
        "end_time": "10:00",
    }
    data.update(overrides)
    return data


class TestQuietBlockTimes:
    def test_offset_time_is_rejected(self):
        with pytest.raises(ValidationError, match="without an offset"):
            QuietBlockCreate(**create_payload(start_time="09:00+02:00"))

    def test_utc_time_is_stored_naive(self):
        block = QuietBlockCreate(**create_payload(start_time="09:00Z", end_time="10:00+00:00"))

        assert block.start_time == dt.time(9, 0)
        assert block.start_time.tzinfo is None
        assert block.end_time.tzinfo is None

    def test_update_rejects_offset_time(self):
        with pytest.raises(ValidationError):
            QuietBlockUpdate(end_time="17:00-05:00")

    def test_update_leaves_missing_times_unset(self):
        update = QuietBlockUpdate(title="Renamed")

        assert update.start_time is None
        assert update.model_dump(exclude_unset=True) == {"title": "Renamed"}


class TestResponsesFromModels:
    def test_quiet_block_response_reads_attributes(self):
        block = QuietBlock(
            id="b-1",
            user_id="u-1",
            title="Thermodynamics",
            date=dt.date(2025, 3, 10),
            start_time=dt.time(9, 0),
            end_time=dt.time(10, 0),
            is_recurring=False,
            is_active=True,
            created_at=dt.datetime(2025, 3, 1, tzinfo=UTC),
            updated_at=dt.datetime(2025, 3, 1, tzinfo=UTC),
        )

        response = QuietBlockResponse.model_validate(block)

        assert response.id == "b-1"
        assert response.start_time == dt.time(9, 0)

    def test_notification_response_reads_attributes(self):
        notification = EmailNotification(
            id="n-1",
            quiet_block_id="b-1",
            user_id="u-1",
            scheduled_time=dt.datetime(2025, 3, 10, 8, 50, tzinfo=UTC),
            status=NotificationStatus.PENDING,
            created_at=dt.datetime(2025, 3, 1, tzinfo=UTC),
            updated_at=dt.datetime(2025, 3, 1, tzinfo=UTC),
        )

        response = NotificationResponse.model_validate(notification)

        assert response.id == "n-1"
        assert response.status == NotificationStatus.PENDING
