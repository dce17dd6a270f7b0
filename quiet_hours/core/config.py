from pathlib import Path
from typing import List, Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings


class DatabaseSettings(BaseSettings):
    database_url: str = Field("sqlite:///./quiet_hours.db")
    pool_size: int = Field(10)
    max_overflow: int = Field(20)
    pool_timeout: int = Field(30)  # Connection timeout in seconds
    pool_recycle: int = Field(1800)  # Recycle connections every 30 minutes
    pool_pre_ping: bool = Field(True)  # Validate connections before use
    auto_create_tables: bool = Field(True)

    @property
    def is_sqlite(self) -> bool:
        return self.database_url.startswith("sqlite")


class AuthSettings(BaseSettings):
    # Access tokens are issued by the hosted auth provider and signed with
    # its project JWT secret.
    jwt_secret: str = Field("change-me")
    algorithm: str = Field("HS256")
    audience: Optional[str] = Field("authenticated")


class SMTPSettings(BaseSettings):
    smtp_server: str = Field("smtp.resend.com")
    smtp_port: int = Field(587)
    smtp_username: str = Field("resend")
    smtp_password: str = Field("")  # provider API key
    sender_email: str = Field("quiethoursscheduler@donotreply.example.com")
    sender_name: str = Field("Quiet Hours Scheduler")
    smtp_use_tls: bool = Field(True)
    smtp_timeout: int = Field(30)


class NotificationSettings(BaseSettings):
    cron_secret: str = Field("")
    reminder_lead_minutes: int = Field(10)
    lookahead_minutes: int = Field(10)
    poll_interval_seconds: int = Field(60)

    @field_validator("reminder_lead_minutes", "lookahead_minutes", "poll_interval_seconds")
    @classmethod
    def validate_positive(cls, v: int) -> int:
        if v <= 0:
            raise ValueError("must be a positive number")
        return v


class AppSettings(BaseSettings):
    debug: bool = Field(False)
    app_url: str = Field("http://localhost:3000")
    allowed_hosts: str = Field("http://localhost:3000,http://localhost:8000")
    test_email_rate_limit: str = Field("20/minute")
    database: DatabaseSettings = Field(default_factory=DatabaseSettings)
    auth: AuthSettings = Field(default_factory=AuthSettings)
    smtp: SMTPSettings = Field(default_factory=SMTPSettings)
    notifications: NotificationSettings = Field(default_factory=NotificationSettings)

    @classmethod
    def _split_allowed_hosts(cls, v: str) -> List[str]:
        if not v or not v.strip():
            return []
        hosts = []
        for host in v.split(","):
            host = host.strip().rstrip("/")
            if host.startswith(("http://", "https://")):
                hosts.append(host)
        return hosts

    @property
    def allowed_hosts_list(self) -> List[str]:
        """Convert allowed_hosts string to list."""
        if not self.allowed_hosts:
            return ["http://localhost:3000", "http://localhost:8000"]
        return self._split_allowed_hosts(self.allowed_hosts)

    @property
    def dashboard_url(self) -> str:
        return f"{self.app_url.rstrip('/')}/dashboard"

    class Config:
        env_prefix = "APP_"
        case_sensitive = False
        env_nested_delimiter = "__"
        env_file = str(Path(__file__).parent.parent.parent / ".env")
        env_file_encoding = "utf-8"


settings: AppSettings = AppSettings()

if __name__ == "__main__":
    settings = AppSettings()
    print(settings.model_dump())
