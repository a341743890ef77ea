"""Tests for the event payload validator."""
import pytest

from clubhouse.config import EventPolicy, FieldBounds
from clubhouse.domain import EventDraft
from clubhouse.services.validation import decode_image, find_violation, validate

POLICY = EventPolicy()


def _draft(**overrides) -> EventDraft:
    fields = {
        "name": "Bake Sale",
        "description": "Fundraiser",
        "date": "2025-05-01",
        "location": "Main Hall",
        "perks": [],
    }
    fields.update(overrides)
    return EventDraft(**fields)


class TestValidate:
    def test_valid_event(self):
        assert validate(_draft(), POLICY) is True

    def test_none_is_invalid(self):
        assert validate(None, POLICY) is False
        assert find_violation(None, POLICY) == "event"

    def test_empty_perks_is_valid(self):
        assert validate(_draft(perks=[]), POLICY) is True

    def test_date_is_free_form(self):
        """Any string inside the length bound passes; nothing is parsed."""
        assert validate(_draft(date="Every other Friday, probably"), POLICY) is True
        assert validate(_draft(date="not-a-date"), POLICY) is True

    @pytest.mark.parametrize("field", ["name", "description", "date", "location"])
    def test_empty_string_fields_rejected(self, field):
        assert find_violation(_draft(**{field: ""}), POLICY) == field

    @pytest.mark.parametrize("field", ["name", "description", "date", "location"])
    def test_missing_string_fields_rejected(self, field):
        assert find_violation(_draft(**{field: None}), POLICY) == field

    @pytest.mark.parametrize("field", ["name", "description", "date", "location"])
    def test_too_long_fields_rejected(self, field):
        too_long = "x" * (getattr(POLICY.max, field) + 1)
        assert find_violation(_draft(**{field: too_long}), POLICY) == field

    @pytest.mark.parametrize("field", ["name", "description", "date", "location"])
    def test_fields_at_max_accepted(self, field):
        at_max = "x" * getattr(POLICY.max, field)
        assert validate(_draft(**{field: at_max}), POLICY) is True

    def test_too_many_perks_rejected(self):
        perks = [f"perk {i}" for i in range(POLICY.max.perks + 1)]
        assert find_violation(_draft(perks=perks), POLICY) == "perks"

    def test_perks_at_max_accepted(self):
        perks = [f"perk {i}" for i in range(POLICY.max.perks)]
        assert validate(_draft(perks=perks), POLICY) is True

    def test_missing_perks_rejected(self):
        assert find_violation(_draft(perks=None), POLICY) == "perks"

    def test_non_string_name_rejected(self):
        assert find_violation(_draft(name=42), POLICY) == "name"

    def test_first_failure_wins(self):
        """Checks run name, description, date, location, perks."""
        draft = _draft(description="", location="", perks=["x"] * 10)
        assert find_violation(draft, POLICY) == "description"
        draft = _draft(date="", location="")
        assert find_violation(draft, POLICY) == "date"

    def test_custom_policy_minimums(self):
        policy = EventPolicy(
            min=FieldBounds(name=5, description=1, location=1, date=1, perks=1),
            max=FieldBounds(name=10, description=100, location=50, date=50, perks=3),
        )
        assert find_violation(_draft(name="Bake"), policy) == "name"
        assert find_violation(_draft(perks=[]), policy) == "perks"
        assert validate(_draft(perks=["Free cake"]), policy) is True


class TestDecodeImage:
    def test_passthrough(self):
        assert decode_image(None) is None
        assert decode_image(b"raw") == b"raw"

    def test_plain_base64(self):
        assert decode_image("aW1hZ2U=") == b"image"

    def test_data_url(self):
        assert decode_image("data:image/png;base64,aW1hZ2U=") == b"image"

    @pytest.mark.parametrize("bad", ["%%%not base64%%%", "data:image/png;base64", "data:image/png;base64,%%%"])
    def test_malformed_raises_value_error(self, bad):
        with pytest.raises(ValueError):
            decode_image(bad)
