"""Application configuration via environment variables."""
from pydantic import BaseModel
from pydantic_settings import BaseSettings


class FieldBounds(BaseModel):
    """Inclusive length bounds for each bounded event field."""

    name: int
    description: int
    location: int
    date: int
    perks: int


class EventDefaults(BaseModel):
    perks: list[str] = []
    rsvps: list[str] = []
    pinned: bool = False


class EventPolicy(BaseModel):
    """Field-length policy applied to every event payload."""

    min: FieldBounds = FieldBounds(name=1, description=1, location=1, date=1, perks=0)
    max: FieldBounds = FieldBounds(name=50, description=100, location=50, date=50, perks=5)
    default: EventDefaults = EventDefaults()


class Settings(BaseSettings):
    """App settings loaded from .env or environment."""

    DATABASE_URL: str = "sqlite:///./clubhouse.db"
    CORS_ORIGINS: str = "http://localhost:3000"
    LOG_LEVEL: str = "INFO"

    BLOB_STORAGE_DIR: str = "./media"
    BLOB_BASE_URL: str = "/media"
    DEFAULT_EVENT_IMAGE: str = "/images/default-event-image.png"
    MAX_IMAGE_BYTES: int = 4 * 1024 * 1024

    EVENT_POLICY: EventPolicy = EventPolicy()

    class Config:
        env_file = ".env"


settings = Settings()
