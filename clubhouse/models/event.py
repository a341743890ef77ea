"""Event ORM model."""
import uuid
from sqlalchemy import Column, String, Boolean, DateTime, JSON
from sqlalchemy.sql import func
from clubhouse.database import Base


class Event(Base):
    __tablename__ = "events"

    id = Column(String(64), primary_key=True, default=lambda: str(uuid.uuid4()))
    name = Column(String(255), nullable=False)
    description = Column(String(1000), nullable=False)
    date = Column(String(255), nullable=False)  # free-form, never parsed
    location = Column(String(255), nullable=False)
    image = Column(String(1024), nullable=False)
    perks = Column(JSON, nullable=False, default=list)
    rsvps = Column(JSON, nullable=False, default=list)
    pinned = Column(Boolean, nullable=False, default=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())
