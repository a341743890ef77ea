"""SQLAlchemy implementations of the entity repositories."""
import logging
from typing import Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from clubhouse.domain import Actor, EventRecord, UserSummary
from clubhouse.models.event import Event
from clubhouse.models.user import User
from clubhouse.stores.interfaces import EventRepository, StoreError, UserRepository

logger = logging.getLogger(__name__)


def _to_record(event: Event) -> EventRecord:
    return EventRecord(
        id=event.id,
        name=event.name,
        description=event.description,
        date=event.date,
        location=event.location,
        image=event.image,
        perks=list(event.perks or []),
        rsvps=list(event.rsvps or []),
        pinned=bool(event.pinned),
        created_at=event.created_at,
        updated_at=event.updated_at,
    )


class SqlAlchemyEventRepository(EventRepository):
    """Event store over a request-scoped session. Commits per call."""

    def __init__(self, db: Session) -> None:
        self._db = db

    def get(self, event_id: str) -> Optional[EventRecord]:
        try:
            event = self._db.query(Event).filter(Event.id == event_id).first()
        except SQLAlchemyError as exc:
            raise StoreError(f"Failed to load event {event_id}") from exc
        return _to_record(event) if event else None

    def create(self, record: EventRecord) -> EventRecord:
        event = Event(
            id=record.id,
            name=record.name,
            description=record.description,
            date=record.date,
            location=record.location,
            image=record.image,
            perks=list(record.perks),
            rsvps=list(record.rsvps),
            pinned=record.pinned,
        )
        try:
            self._db.add(event)
            self._db.commit()
            self._db.refresh(event)
        except SQLAlchemyError as exc:
            self._db.rollback()
            raise StoreError(f"Failed to create event {record.id}") from exc
        return _to_record(event)

    def update(self, event_id: str, record: EventRecord) -> Optional[EventRecord]:
        try:
            event = self._db.query(Event).filter(Event.id == event_id).first()
            if not event:
                return None
            event.name = record.name
            event.description = record.description
            event.date = record.date
            event.location = record.location
            event.image = record.image
            event.perks = list(record.perks)
            event.rsvps = list(record.rsvps)
            event.pinned = record.pinned
            self._db.commit()
            self._db.refresh(event)
        except SQLAlchemyError as exc:
            self._db.rollback()
            raise StoreError(f"Failed to update event {event_id}") from exc
        return _to_record(event)

    def delete(self, event_id: str) -> bool:
        try:
            event = self._db.query(Event).filter(Event.id == event_id).first()
            if not event:
                return False
            self._db.delete(event)
            self._db.commit()
        except SQLAlchemyError as exc:
            self._db.rollback()
            raise StoreError(f"Failed to delete event {event_id}") from exc
        return True

    def list_all(self) -> list[EventRecord]:
        try:
            events = self._db.query(Event).all()
        except SQLAlchemyError as exc:
            raise StoreError("Failed to list events") from exc
        return [_to_record(e) for e in events]


class SqlAlchemyUserRepository(UserRepository):
    def __init__(self, db: Session) -> None:
        self._db = db

    def get_by_secret(self, secret: str) -> Optional[Actor]:
        if not secret:
            return None
        try:
            user = self._db.query(User).filter(User.secret == secret).first()
        except SQLAlchemyError as exc:
            raise StoreError("Failed to resolve actor") from exc
        if not user:
            return None
        return Actor(
            id=user.id,
            name=user.name,
            permissions=frozenset(user.permissions or []),
            roles=frozenset(user.roles or []),
        )

    def list_all(self) -> list[UserSummary]:
        try:
            users = self._db.query(User).all()
        except SQLAlchemyError as exc:
            raise StoreError("Failed to list users") from exc
        return [
            UserSummary(
                id=u.id,
                email=u.email,
                name=u.name,
                image=u.image,
                roles=list(u.roles or []),
                permissions=list(u.permissions or []),
            )
            for u in users
        ]
