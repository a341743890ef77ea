"""FastAPI dependencies that assemble request-scoped services."""
from typing import Optional

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from clubhouse.config import settings
from clubhouse.database import get_db
from clubhouse.services.event_service import EventLifecycleManager
from clubhouse.stores.interfaces import BlobStore
from clubhouse.stores.sqlalchemy_store import SqlAlchemyEventRepository, SqlAlchemyUserRepository

_bearer = HTTPBearer(auto_error=False)


def get_access_token(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(_bearer),
) -> Optional[str]:
    """The bearer secret, or None; the lifecycle manager decides what that means."""
    return credentials.credentials if credentials else None


def get_blob_store(request: Request) -> BlobStore:
    """The blob store constructed at startup and held on ``app.state``."""
    return request.app.state.blob_store


def get_event_manager(
    db: Session = Depends(get_db),
    blobs: BlobStore = Depends(get_blob_store),
) -> EventLifecycleManager:
    return EventLifecycleManager(
        events=SqlAlchemyEventRepository(db),
        users=SqlAlchemyUserRepository(db),
        blobs=blobs,
        policy=settings.EVENT_POLICY,
        default_image=settings.DEFAULT_EVENT_IMAGE,
        max_image_bytes=settings.MAX_IMAGE_BYTES,
    )
