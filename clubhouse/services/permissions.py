"""Permission checks for actors."""
from typing import Iterable, Optional

from clubhouse.domain import Actor
from clubhouse.models.user import Permission


def has_permission(actor: Optional[Actor], required: Iterable[str]) -> bool:
    """True if ``actor`` holds every permission in ``required`` or the admin override."""
    if actor is None:
        return False
    granted = actor.permissions
    if Permission.admin.value in granted:
        return True
    return all(_value(p) in granted for p in required)


def _value(permission) -> str:
    return permission.value if isinstance(permission, Permission) else permission
