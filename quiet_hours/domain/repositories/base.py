from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Generic, TypeVar


T = TypeVar("T")  # mapped model
ID = TypeVar("ID")  # primary key


class IRepository(Generic[T, ID], ABC):
    """Minimal persistence contract shared by every repository."""

    @abstractmethod
    def add(self, obj: T) -> T: ...

    @abstractmethod
    def get(self, id_: ID) -> T | None: ...

    @abstractmethod
    def delete(self, obj: T) -> None: ...

    @abstractmethod
    def flush(self) -> None: ...
