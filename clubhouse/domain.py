"""Plain domain types passed between the stores and the service layer.

Stores convert ORM rows into these so the service layer never holds a
live session object.
"""
from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional, Union


@dataclass(frozen=True)
class Actor:
    """An authenticated user as seen by the permission checks. Read-only."""

    id: str
    name: str
    permissions: frozenset[str] = frozenset()
    roles: frozenset[str] = frozenset()


@dataclass
class EventRecord:
    """A persisted event."""

    id: str
    name: str
    description: str
    date: str
    location: str
    image: str
    perks: list[str] = field(default_factory=list)
    rsvps: list[str] = field(default_factory=list)
    pinned: bool = False
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


@dataclass
class EventDraft:
    """Caller-supplied event payload for create and update.

    ``image_data`` carries inline image bytes, or a base64 string decoded
    behind the authorization gate; when it is ``None`` the
    image is defaulted on create and preserved on update.
    """

    name: Optional[str]
    description: Optional[str]
    date: Optional[str]
    location: Optional[str]
    id: Optional[str] = None
    perks: Optional[list[str]] = None
    rsvps: Optional[list[str]] = None
    pinned: Optional[bool] = None
    image_data: Union[bytes, str, None] = None


@dataclass
class UserSummary:
    """User fields that are safe to expose: no secret, no password."""

    id: str
    email: str
    name: str
    image: str
    roles: list[str] = field(default_factory=list)
    permissions: list[str] = field(default_factory=list)
