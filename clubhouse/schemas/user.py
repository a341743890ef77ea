"""Pydantic schemas for Users."""
from pydantic import BaseModel


class UserOut(BaseModel):
    """Public view of a user; never carries the secret or password."""

    id: str
    email: str
    name: str
    image: str
    roles: list[str] = []
    permissions: list[str] = []

    model_config = {"from_attributes": True}
