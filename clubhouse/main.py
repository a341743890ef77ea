"""FastAPI application entry point."""
import logging
from pathlib import Path

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles
from clubhouse.config import settings
from clubhouse.database import Base, engine
from clubhouse.stores.blob_store import FilesystemBlobStore

# Import routers
from clubhouse.routers import users, events

# Import all models so Base.metadata knows about them
from clubhouse.models.user import User    # noqa: F401
from clubhouse.models.event import Event  # noqa: F401

logger = logging.getLogger(__name__)


def configure_logging(level: str) -> None:
    logging.basicConfig(
        level=level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


app = FastAPI(
    title="Clubhouse",
    description="Club management API: events with images, members and permissions",
    version="0.1.0",
)

# CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS.split(","),
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Register routers
app.include_router(users.router, prefix="/api/users", tags=["Users"])
app.include_router(events.router, prefix="/api/events", tags=["Events"])

# Serve uploaded event images
app.mount(
    settings.BLOB_BASE_URL,
    StaticFiles(directory=settings.BLOB_STORAGE_DIR, check_dir=False),
    name="media",
)


@app.on_event("startup")
def on_startup():
    """Configure logging, create tables and build the blob store."""
    configure_logging(settings.LOG_LEVEL)
    Base.metadata.create_all(bind=engine)
    app.state.blob_store = FilesystemBlobStore(Path(settings.BLOB_STORAGE_DIR), settings.BLOB_BASE_URL)
    logger.info("Blob store ready at %s", app.state.blob_store.base_dir)


@app.get("/api/health")
def health_check():
    return {"status": "ok"}
