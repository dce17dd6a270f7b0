from __future__ import annotations

from typing import Generic, Type

from sqlalchemy.orm import Session

from quiet_hours.domain.repositories.base import ID, IRepository, T


class SQLAlchemyRepository(Generic[T, ID], IRepository[T, ID]):
    """Session-backed implementation of the shared repository contract."""

    def __init__(self, model: Type[T], db: Session):
        self.model = model
        self.db = db

    def add(self, obj: T) -> T:
        self.db.add(obj)
        return obj

    def get(self, id_: ID) -> T | None:
        return self.db.get(self.model, id_)

    def delete(self, obj: T) -> None:
        self.db.delete(obj)

    def flush(self) -> None:
        self.db.flush()
