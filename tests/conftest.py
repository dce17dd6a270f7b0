import pytest
from fastapi.testclient import TestClient
from jose import jwt
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

import quiet_hours.models  # noqa: F401
from quiet_hours.api.v1.dependencies import get_email_sender
from quiet_hours.core.config import settings
from quiet_hours.db.base import Base
from quiet_hours.db.session import enable_sqlite_foreign_keys, get_db
from quiet_hours.domain.interfaces.infrastructure_interfaces import (
    EmailFailed,
    EmailSent,
    IEmailSender,
)
from quiet_hours.domain.unit_of_work import UnitOfWork
from quiet_hours.main import app
from quiet_hours.middlewares.rate_limit import limiter
from quiet_hours.models.profile_model import Profile


CRON_SECRET = "test-cron-secret"


class FakeEmailSender(IEmailSender):
    """Records every send; ``fail_with`` or ``raise_for`` simulate provider trouble."""

    def __init__(self, fail_with=None, raise_for=None):
        self.sent = []
        self.fail_with = fail_with
        self.raise_for = set(raise_for or ())

    def send(self, kind, recipient, fields):
        self.sent.append({"kind": kind, "to": recipient, "fields": dict(fields)})
        if recipient in self.raise_for:
            raise RuntimeError(f"connection reset while sending to {recipient}")
        if self.fail_with is not None:
            return EmailFailed(error=self.fail_with)
        return EmailSent(data={"id": f"msg-{len(self.sent)}", "to": [recipient]})


def make_engine():
    engine = create_engine(
        "sqlite://",
        future=True,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    enable_sqlite_foreign_keys(engine)
    Base.metadata.create_all(bind=engine)
    return engine


@pytest.fixture()
def db_session():
    """A fresh in-memory database per test."""
    engine = make_engine()
    SessionLocal = sessionmaker(bind=engine, autoflush=False, expire_on_commit=False, future=True)
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(bind=engine)
        engine.dispose()


@pytest.fixture()
def uow(db_session):
    return UnitOfWork(db_session)


@pytest.fixture()
def email_sender():
    return FakeEmailSender()


@pytest.fixture()
def profile(db_session):
    user = Profile(id="user-1", email="student@example.com", full_name="Ada Student")
    db_session.add(user)
    db_session.commit()
    return user


@pytest.fixture()
def client(db_session, email_sender):
    app.dependency_overrides[get_db] = lambda: db_session
    app.dependency_overrides[get_email_sender] = lambda: email_sender
    limiter.reset()
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()


@pytest.fixture()
def cron_secret(monkeypatch):
    monkeypatch.setattr(settings.notifications, "cron_secret", CRON_SECRET)
    return CRON_SECRET


def make_token(user_id="user-1", email="student@example.com", full_name="Ada Student", **claims):
    payload = {
        "sub": user_id,
        "email": email,
        "aud": "authenticated",
        "user_metadata": {"full_name": full_name},
    }
    payload.update(claims)
    return jwt.encode(payload, settings.auth.jwt_secret, algorithm=settings.auth.algorithm)


@pytest.fixture()
def auth_headers():
    return {"Authorization": f"Bearer {make_token()}"}
