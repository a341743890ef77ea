"""User ORM model and the permission/role vocabularies."""
import enum
import uuid
from sqlalchemy import Column, String, DateTime, JSON
from sqlalchemy.sql import func
from clubhouse.database import Base


class Permission(str, enum.Enum):
    default = "default"
    admin = "admin"  # satisfies any permission check
    create_event = "create_event"
    edit_event = "edit_event"
    delete_event = "delete_event"


class Role(str, enum.Enum):
    member = "member"
    president = "president"
    vice_president = "vice_president"
    treasurer = "treasurer"
    project_manager = "project_manager"
    serm_approved = "serm"


class User(Base):
    __tablename__ = "users"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    email = Column(String(255), nullable=False, unique=True)
    name = Column(String(100), nullable=False, default="New User")
    image = Column(String(1024), nullable=False, default="")
    secret = Column(String(255), nullable=False, unique=True, index=True)
    password = Column(String(255), nullable=False, default="")
    roles = Column(JSON, nullable=False, default=lambda: [Role.member.value])
    permissions = Column(JSON, nullable=False, default=lambda: [Permission.default.value])
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())
