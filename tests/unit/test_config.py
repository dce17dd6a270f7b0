import pytest
from pydantic import ValidationError

from quiet_hours.core.config import AppSettings, NotificationSettings


def test_nested_settings_from_environment(monkeypatch):
    monkeypatch.setenv("APP_NOTIFICATIONS__CRON_SECRET", "s3cret")
    monkeypatch.setenv("APP_SMTP__SMTP_PORT", "2525")
    monkeypatch.setenv("APP_APP_URL", "https://quiet.example.com/")

    settings = AppSettings(_env_file=None)

    assert settings.notifications.cron_secret == "s3cret"
    assert settings.smtp.smtp_port == 2525
    assert settings.dashboard_url == "https://quiet.example.com/dashboard"


def test_allowed_hosts_list_drops_invalid_entries():
    settings = AppSettings(_env_file=None, allowed_hosts="https://a.example.com/, ftp://b, http://c:3000")
    assert settings.allowed_hosts_list == ["https://a.example.com", "http://c:3000"]


def test_lead_time_must_be_positive():
    with pytest.raises(ValidationError):
        NotificationSettings(reminder_lead_minutes=0)
