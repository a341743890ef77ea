"""Event lifecycle manager: keeps event records and their images consistent.

Responsibilities:
- Authorization gate: resolve the actor from the bearer secret and check
  the operation's permission before any store is touched
- Validation gate: reject payloads that break the field-length policy
- Image reconciliation between the entity store and the blob store:
  upload before persist on create, upload before dropping the old blob on
  update, blob delete before record delete on delete
- Typed outcomes: every operation returns a ``Result``; nothing is retried

The two stores are not transactional. Orphaned blobs left behind by a
failed cleanup are logged and not reconciled later.
"""
import logging
import uuid
from typing import Optional

from clubhouse.config import EventPolicy
from clubhouse.domain import Actor, EventDraft, EventRecord
from clubhouse.models.user import Permission
from clubhouse.services.permissions import has_permission
from clubhouse.services.results import ErrorKind, Result
from clubhouse.services.validation import decode_image, find_violation
from clubhouse.stores.interfaces import BlobStore, EventRepository, StoreError, UserRepository

logger = logging.getLogger(__name__)


class EventLifecycleManager:
    """Create, update, delete and read events. Built per request."""

    def __init__(
        self,
        events: EventRepository,
        users: UserRepository,
        blobs: BlobStore,
        policy: EventPolicy,
        default_image: str,
        max_image_bytes: int,
    ) -> None:
        self._events = events
        self._users = users
        self._blobs = blobs
        self._policy = policy
        self._default_image = default_image
        self._max_image_bytes = max_image_bytes

    @property
    def default_image(self) -> str:
        return self._default_image

    # ── gates ────────────────────────────────────────────────────────

    def _authorize(self, secret: Optional[str], permission: Permission) -> Result[Actor]:
        if not secret:
            return Result.failure(ErrorKind.unauthorized, "Missing access token")
        try:
            actor = self._users.get_by_secret(secret)
        except StoreError as exc:
            logger.error("Actor lookup failed: %s", exc)
            return Result.failure(ErrorKind.storage_error, "Could not resolve actor")
        if actor is None:
            logger.info("Rejected %s: unknown access token", permission.value)
            return Result.failure(ErrorKind.unauthorized, "Invalid access token")
        if not has_permission(actor, [permission]):
            logger.info("Rejected %s for user %s: missing permission", permission.value, actor.id)
            return Result.failure(
                ErrorKind.unauthorized,
                f"Permission '{permission.value}' required",
                field="permission",
            )
        return Result.success(actor)

    def _check_payload(self, draft: EventDraft) -> Result[EventDraft]:
        """Apply defaults, check the field policy, then decode and size-check the image."""
        field = find_violation(self._with_defaults(draft, None), self._policy)
        image_data = None
        if field is None:
            try:
                image_data = decode_image(draft.image_data)
            except ValueError as exc:
                logger.warning("Rejected event payload: %s", exc)
                return Result.failure(ErrorKind.invalid_payload, "Image is not valid base64", field="image")
            if image_data is not None and (not image_data or len(image_data) > self._max_image_bytes):
                field = "image"
        if field is not None:
            logger.warning("Rejected event payload: invalid field '%s'", field)
            return Result.failure(ErrorKind.invalid_payload, f"Invalid value for '{field}'", field=field)
        return Result.success(self._with_defaults(draft, image_data))

    def _with_defaults(self, draft: EventDraft, image_data: Optional[bytes]) -> EventDraft:
        # rsvps stay None so an update can keep the stored list
        defaults = self._policy.default
        return EventDraft(
            id=draft.id,
            name=draft.name,
            description=draft.description,
            date=draft.date,
            location=draft.location,
            perks=list(draft.perks) if draft.perks is not None else list(defaults.perks),
            rsvps=list(draft.rsvps) if draft.rsvps is not None else None,
            pinned=draft.pinned if draft.pinned is not None else defaults.pinned,
            image_data=image_data,
        )

    # ── blob helpers ─────────────────────────────────────────────────

    def _upload(self, data: bytes) -> Optional[str]:
        try:
            return self._blobs.put(data)
        except StoreError as exc:
            logger.error("Image upload failed: %s", exc)
            return None

    def _discard_blob(self, url: str) -> None:
        """Best-effort removal; a failure leaves an orphan and is only logged."""
        if url == self._default_image or not self._blobs.owns(url):
            return
        try:
            self._blobs.delete(url)
        except StoreError as exc:
            logger.warning("Could not delete blob %s, leaving it orphaned: %s", url, exc)

    # ── operations ───────────────────────────────────────────────────

    def create_event(self, secret: Optional[str], draft: Optional[EventDraft]) -> Result[EventRecord]:
        """Persist a new event, uploading its inline image first."""
        auth = self._authorize(secret, Permission.create_event)
        if not auth.ok:
            return auth
        if draft is None:
            return Result.failure(ErrorKind.invalid_payload, "Missing event payload", field="event")
        checked = self._check_payload(draft)
        if not checked.ok:
            return checked
        payload = checked.value

        image = self._default_image
        if payload.image_data is not None:
            uploaded = self._upload(payload.image_data)
            if uploaded is None:
                return Result.failure(ErrorKind.storage_error, "Image upload failed", field="image")
            image = uploaded

        record = EventRecord(
            id=payload.id or str(uuid.uuid4()),
            name=payload.name,
            description=payload.description,
            date=payload.date,
            location=payload.location,
            image=image,
            perks=payload.perks,
            rsvps=payload.rsvps if payload.rsvps is not None else list(self._policy.default.rsvps),
            pinned=payload.pinned,
        )
        try:
            created = self._events.create(record)
        except StoreError as exc:
            logger.error("Failed to persist event %s: %s", record.id, exc)
            self._discard_blob(image)
            return Result.failure(ErrorKind.storage_error, "Could not save event")

        logger.info("Created event '%s' (%s) by user %s", created.name, created.id, auth.value.id)
        return Result.success(created)

    def update_event(
        self,
        secret: Optional[str],
        draft: Optional[EventDraft],
        event_id: Optional[str] = None,
    ) -> Result[EventRecord]:
        """Replace an event.

        ``event_id`` addresses the event (the draft's own id is used when it
        is omitted); both must agree when both are given. Without new image
        data the old image is kept, and without ``rsvps`` the stored RSVP
        list is kept.
        """
        auth = self._authorize(secret, Permission.edit_event)
        if not auth.ok:
            return auth
        if draft is None:
            return Result.failure(ErrorKind.invalid_payload, "Missing event payload", field="event")
        if event_id and draft.id and draft.id != event_id:
            return Result.failure(ErrorKind.invalid_payload, "Body id does not match path", field="id")
        target_id = event_id or draft.id
        if not target_id:
            return Result.failure(ErrorKind.invalid_payload, "Event id is required", field="id")
        checked = self._check_payload(draft)
        if not checked.ok:
            return checked
        payload = checked.value

        try:
            previous = self._events.get(target_id)
        except StoreError as exc:
            logger.error("Failed to load event %s: %s", target_id, exc)
            return Result.failure(ErrorKind.storage_error, "Could not load event")
        if previous is None:
            return Result.failure(ErrorKind.not_found, "Event not found")

        image = previous.image
        if payload.image_data is not None:
            uploaded = self._upload(payload.image_data)
            if uploaded is None:
                return Result.failure(ErrorKind.storage_error, "Image upload failed", field="image")
            image = uploaded

        replacement = EventRecord(
            id=previous.id,
            name=payload.name,
            description=payload.description,
            date=payload.date,
            location=payload.location,
            image=image,
            perks=payload.perks,
            rsvps=payload.rsvps if payload.rsvps is not None else list(previous.rsvps),
            pinned=payload.pinned,
            created_at=previous.created_at,
        )
        try:
            updated = self._events.update(previous.id, replacement)
        except StoreError as exc:
            logger.error("Failed to update event %s: %s", previous.id, exc)
            if image != previous.image:
                self._discard_blob(image)
            return Result.failure(ErrorKind.storage_error, "Could not save event")
        if updated is None:
            # deleted between the load and the write
            if image != previous.image:
                self._discard_blob(image)
            return Result.failure(ErrorKind.not_found, "Event not found")

        if image != previous.image:
            self._discard_blob(previous.image)

        logger.info("Updated event %s by user %s", updated.id, auth.value.id)
        return Result.success(updated)

    def delete_event(self, secret: Optional[str], event_id: str) -> Result[EventRecord]:
        """Delete an event's blob and then its record.

        If the blob cannot be deleted the record is kept so the delete can
        be retried.
        """
        auth = self._authorize(secret, Permission.delete_event)
        if not auth.ok:
            return auth

        try:
            event = self._events.get(event_id)
        except StoreError as exc:
            logger.error("Failed to load event %s: %s", event_id, exc)
            return Result.failure(ErrorKind.storage_error, "Could not load event")
        if event is None:
            return Result.failure(ErrorKind.not_found, "Event not found")

        if event.image != self._default_image and not self._blobs.owns(event.image):
            logger.warning("Event %s points at foreign image %s, nothing to reclaim", event_id, event.image)
        elif event.image != self._default_image:
            try:
                self._blobs.delete(event.image)
            except StoreError as exc:
                logger.error("Failed to delete image for event %s, keeping record: %s", event_id, exc)
                return Result.failure(ErrorKind.storage_error, "Could not delete event image", field="image")

        try:
            removed = self._events.delete(event_id)
        except StoreError as exc:
            logger.error("Failed to delete event %s: %s", event_id, exc)
            return Result.failure(ErrorKind.storage_error, "Could not delete event")
        if not removed:
            return Result.failure(ErrorKind.not_found, "Event not found")

        logger.info("Deleted event %s by user %s", event_id, auth.value.id)
        return Result.success(event)

    def get_event(self, event_id: str) -> Result[EventRecord]:
        try:
            event = self._events.get(event_id)
        except StoreError as exc:
            logger.error("Failed to load event %s: %s", event_id, exc)
            return Result.failure(ErrorKind.storage_error, "Could not load event")
        if event is None:
            return Result.failure(ErrorKind.not_found, "Event not found")
        return Result.success(event)

    def list_events(self) -> Result[list[EventRecord]]:
        try:
            return Result.success(self._events.list_all())
        except StoreError as exc:
            logger.error("Failed to list events: %s", exc)
            return Result.failure(ErrorKind.storage_error, "Could not list events")
