"""Pytest fixtures: SQLite database and a temporary blob directory per test."""
import os
import tempfile
import uuid

# Point the app at throwaway storage before clubhouse.config is imported
os.environ.setdefault("DATABASE_URL", "sqlite:///./test.db")
os.environ.setdefault("BLOB_STORAGE_DIR", tempfile.mkdtemp(prefix="clubhouse-media-"))

import pytest
from sqlalchemy import create_engine, event
from sqlalchemy.orm import sessionmaker
from fastapi.testclient import TestClient

from clubhouse.config import EventPolicy
from clubhouse.database import Base, get_db
from clubhouse.dependencies import get_blob_store
from clubhouse.main import app
from clubhouse.services.event_service import EventLifecycleManager
from clubhouse.stores.blob_store import FilesystemBlobStore
from clubhouse.stores.interfaces import BlobStore, StoreError
from clubhouse.stores.sqlalchemy_store import SqlAlchemyEventRepository, SqlAlchemyUserRepository

# Import all models so they register with Base.metadata
from clubhouse.models.user import User, Permission   # noqa: F401
from clubhouse.models.event import Event             # noqa: F401

SQLITE_URL = "sqlite:///./test.db"
DEFAULT_IMAGE = "/images/default-event-image.png"


class FlakyBlobStore(BlobStore):
    """Wraps a real blob store; flip ``fail_put`` / ``fail_delete`` to inject failures."""

    def __init__(self, inner: BlobStore) -> None:
        self.inner = inner
        self.fail_put = False
        self.fail_delete = False
        self.put_calls = 0
        self.deleted: list[str] = []

    def put(self, data: bytes) -> str:
        self.put_calls += 1
        if self.fail_put:
            raise StoreError("simulated upload failure")
        return self.inner.put(data)

    def delete(self, url: str) -> None:
        if self.fail_delete:
            raise StoreError("simulated delete failure")
        self.inner.delete(url)
        self.deleted.append(url)

    def exists(self, url: str) -> bool:
        return self.inner.exists(url)

    def owns(self, url: str) -> bool:
        return self.inner.owns(url)


@pytest.fixture(scope="function")
def db_engine():
    """Create a fresh SQLite engine for each test."""
    engine = create_engine(SQLITE_URL, connect_args={"check_same_thread": False})

    @event.listens_for(engine, "connect")
    def _set_sqlite_pragma(dbapi_conn, connection_record):
        cursor = dbapi_conn.cursor()
        cursor.execute("PRAGMA journal_mode=WAL")
        cursor.close()

    Base.metadata.create_all(bind=engine)
    yield engine
    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture(scope="function")
def db(db_engine):
    """Yield a database session, closed after the test."""
    TestingSession = sessionmaker(autocommit=False, autoflush=False, bind=db_engine)
    session = TestingSession()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture(scope="function")
def blob_store(tmp_path):
    return FlakyBlobStore(FilesystemBlobStore(tmp_path / "blobs", "/media"))


@pytest.fixture(scope="function")
def manager(db, blob_store):
    """A lifecycle manager wired to the test database and the flaky blob store."""
    return EventLifecycleManager(
        events=SqlAlchemyEventRepository(db),
        users=SqlAlchemyUserRepository(db),
        blobs=blob_store,
        policy=EventPolicy(),
        default_image=DEFAULT_IMAGE,
        max_image_bytes=64 * 1024,
    )


@pytest.fixture(scope="function")
def client(db_engine, blob_store):
    """FastAPI TestClient with the database and blob store overridden."""
    TestingSession = sessionmaker(autocommit=False, autoflush=False, bind=db_engine)

    def _override_get_db():
        session = TestingSession()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = _override_get_db
    app.dependency_overrides[get_blob_store] = lambda: blob_store
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()


# ---------------------------------------------------------------------------
# Helper: seed a user directly, returns the bearer secret
# ---------------------------------------------------------------------------
def create_test_user(db, name: str = "Test User", permissions=(Permission.default,)) -> str:
    """Insert a user with ``permissions`` and return its secret."""
    secret = uuid.uuid4().hex
    user = User(
        email=f"{uuid.uuid4().hex[:8]}@example.com",
        name=name,
        secret=secret,
        password="hashed",
        permissions=[p.value if isinstance(p, Permission) else p for p in permissions],
    )
    db.add(user)
    db.commit()
    return secret


EVENT_MANAGER_PERMISSIONS = (
    Permission.create_event,
    Permission.edit_event,
    Permission.delete_event,
)
