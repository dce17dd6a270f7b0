import datetime as dt
from typing import Optional

from sqlalchemy import DateTime, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from quiet_hours.db.base import Base
from quiet_hours.utils.formatting import utcnow


class Profile(Base):
    """Public profile of an auth-provider user; id mirrors the provider's user id"""

    __tablename__ = "profiles"

    id: Mapped[str] = mapped_column(String, primary_key=True)
    email: Mapped[str] = mapped_column(String(255), nullable=False)
    full_name: Mapped[Optional[str]] = mapped_column(String(255))
    avatar_url: Mapped[Optional[str]] = mapped_column(Text)
    created_at: Mapped[dt.datetime] = mapped_column(DateTime(timezone=True), default=utcnow)
    updated_at: Mapped[dt.datetime] = mapped_column(DateTime(timezone=True), default=utcnow, onupdate=utcnow)

    # Relationships
    quiet_blocks = relationship("QuietBlock", back_populates="owner", passive_deletes=True)
    notifications = relationship("EmailNotification", back_populates="profile", passive_deletes=True)
