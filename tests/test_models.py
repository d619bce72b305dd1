"""
Tests for relationship models.

Tests:
- Coercion of raw store values into RelationshipState
- Snapshot construction (NONE entries dropped, values normalized)
- Immutability of records and events
"""

import pytest
from pydantic import ValidationError

from relationship_notifier import (
    RelationshipState,
    TransitionEvent,
    TransitionKind,
    UserRecord,
    take_snapshot,
)


class TestRelationshipStateCoerce:
    """Tests for RelationshipState.coerce"""

    def test_host_codes(self):
        assert RelationshipState.coerce(0) is RelationshipState.NONE
        assert RelationshipState.coerce(1) is RelationshipState.FRIEND
        assert RelationshipState.coerce(2) is RelationshipState.BLOCKED
        assert RelationshipState.coerce(3) is RelationshipState.PENDING_INCOMING
        assert RelationshipState.coerce(4) is RelationshipState.PENDING_OUTGOING
        assert RelationshipState.coerce(5) is RelationshipState.IMPLICIT

    def test_member_passes_through(self):
        assert RelationshipState.coerce(RelationshipState.BLOCKED) is RelationshipState.BLOCKED

    def test_names_any_case(self):
        assert RelationshipState.coerce("friend") is RelationshipState.FRIEND
        assert RelationshipState.coerce(" Pending_Outgoing ") is RelationshipState.PENDING_OUTGOING

    @pytest.mark.parametrize("value", [9, -1, "enemy", None, True, 1.0])
    def test_rejects_unknown(self, value):
        with pytest.raises(ValueError):
            RelationshipState.coerce(value)


class TestTakeSnapshot:
    """Tests for take_snapshot"""

    def test_normalizes_values(self):
        snapshot = take_snapshot({"u1": 1, "u2": "blocked"})
        assert snapshot == {"u1": RelationshipState.FRIEND, "u2": RelationshipState.BLOCKED}

    def test_drops_none_entries(self):
        snapshot = take_snapshot({"u1": 0, "u2": RelationshipState.NONE, "u3": 3})
        assert snapshot == {"u3": RelationshipState.PENDING_INCOMING}

    def test_is_a_copy(self):
        raw = {"u1": RelationshipState.FRIEND}
        snapshot = take_snapshot(raw)
        raw["u2"] = RelationshipState.BLOCKED
        assert "u2" not in snapshot

    def test_identity_keys_become_strings(self):
        assert take_snapshot({123: 1}) == {"123": RelationshipState.FRIEND}


class TestRecords:
    """Tests for UserRecord and TransitionEvent"""

    def test_user_record_defaults_to_human(self):
        assert UserRecord(id="u1", display_name="u1").is_automated is False

    def test_user_record_is_frozen(self):
        user = UserRecord(id="u1", display_name="u1")
        with pytest.raises(ValidationError):
            user.display_name = "someone else"

    def test_events_compare_by_value(self):
        a = TransitionEvent(subject_id="u1", previous=None, current=RelationshipState.FRIEND, kind=TransitionKind.ADDED)
        b = TransitionEvent(subject_id="u1", current=RelationshipState.FRIEND, kind=TransitionKind.ADDED)
        assert a == b
