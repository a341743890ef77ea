"""Event payload validation against the configured field-length policy.

Checks run in a fixed order and stop at the first failure:
name, description, date, location, perks. ``date`` is a free-form
string; only its length is checked.
"""
import base64
import binascii
from typing import Any, Optional, Union

from clubhouse.config import EventPolicy

_STRING_FIELDS = ("name", "description", "date", "location")


def _string_ok(value: Any, lower: int, upper: int) -> bool:
    if not isinstance(value, str) or not value:
        return False
    return lower <= len(value) <= upper


def find_violation(event: Any, policy: EventPolicy) -> Optional[str]:
    """Return the name of the first field that breaks ``policy``, or None.

    A missing event reports ``"event"``.
    """
    if event is None:
        return "event"

    for field in _STRING_FIELDS:
        value = getattr(event, field, None)
        if not _string_ok(value, getattr(policy.min, field), getattr(policy.max, field)):
            return field

    perks = getattr(event, "perks", None)
    if not isinstance(perks, list) or not all(isinstance(p, str) for p in perks):
        return "perks"
    if not policy.min.perks <= len(perks) <= policy.max.perks:
        return "perks"

    return None


def validate(event: Any, policy: EventPolicy) -> bool:
    """True only if every field of ``event`` satisfies ``policy``."""
    return find_violation(event, policy) is None


def decode_image(image_data: Union[bytes, str, None]) -> Optional[bytes]:
    """Return raw image bytes from bytes, base64, or a ``data:<mime>;base64,<...>`` URL.

    Raises ValueError when a string is not valid base64.
    """
    if image_data is None or isinstance(image_data, bytes):
        return image_data
    if image_data.startswith("data:"):
        _, comma, encoded = image_data.partition(",")
        if not comma:
            raise ValueError("data URL has no payload")
    else:
        encoded = image_data
    try:
        return base64.b64decode(encoded, validate=True)
    except binascii.Error as exc:
        raise ValueError("image is not valid base64") from exc
