"""Store interfaces (repository pattern).

Stores are swappable, return domain models, and report a missing row as
``None``. Any backend failure surfaces as ``StoreError``.
"""
from abc import ABC, abstractmethod
from typing import Optional

from clubhouse.domain import Actor, EventRecord, UserSummary


class StoreError(Exception):
    """A backing store (relational or blob) failed to complete a call."""


class EventRepository(ABC):
    """Persistence for event records."""

    @abstractmethod
    def get(self, event_id: str) -> Optional[EventRecord]:
        ...

    @abstractmethod
    def create(self, record: EventRecord) -> EventRecord:
        ...

    @abstractmethod
    def update(self, event_id: str, record: EventRecord) -> Optional[EventRecord]:
        """Replace every mutable field of ``event_id``; None if it is gone."""
        ...

    @abstractmethod
    def delete(self, event_id: str) -> bool:
        """Remove ``event_id``; False if there was nothing to remove."""
        ...

    @abstractmethod
    def list_all(self) -> list[EventRecord]:
        ...


class UserRepository(ABC):
    """Read access to users, including bearer-secret identity resolution."""

    @abstractmethod
    def get_by_secret(self, secret: str) -> Optional[Actor]:
        ...

    @abstractmethod
    def list_all(self) -> list[UserSummary]:
        ...


class BlobStore(ABC):
    """Image byte storage addressed by URL."""

    @abstractmethod
    def put(self, data: bytes) -> str:
        """Store ``data`` and return the URL it is reachable under."""
        ...

    @abstractmethod
    def delete(self, url: str) -> None:
        """Remove the blob at ``url``. Removing an absent blob succeeds."""
        ...

    @abstractmethod
    def exists(self, url: str) -> bool:
        ...

    @abstractmethod
    def owns(self, url: str) -> bool:
        """True if ``url`` addresses a blob this store manages."""
        ...
