"""Tests for event snapshots."""

from datetime import UTC, datetime, timedelta, timezone
from zoneinfo import ZoneInfo

import pytest
from pydantic import ValidationError

from planner.models.event import Event
from planner.persistence import EventRecord, deserialize_event, serialize_event
from planner.persistence.schemas import resolve_zone, zone_name


class TestSerialize:
    """Tests for serialize_event."""

    def test_shape(self, voted_event):
        """Snapshot holds the plain structural form."""
        voted_event.finalize(1)
        data = serialize_event(voted_event)

        assert set(data) == {
            "id",
            "name",
            "invitees",
            "responses",
            "finalized",
            "proposals",
        }
        assert data["id"] == "BBB"
        assert data["finalized"] == 1
        assert data["invitees"] == ["alice", "bob", "carol"]
        assert data["proposals"][0] == {
            "timestamp": 1511067600000,
            "microseconds": 0,
            "timezone": "America/New_York",
            "accepted": ["alice", "bob"],
        }

    def test_holes_are_null(self, voted_event):
        voted_event.unpropose(1)
        data = serialize_event(voted_event)

        assert len(data["proposals"]) == 3
        assert data["proposals"][1] is None

    def test_open_event_finalized_is_none(self, event):
        assert serialize_event(event)["finalized"] is None


class TestRoundTrip:
    """Serialize then deserialize keeps the aggregate intact."""

    def test_preserves_everything(self, voted_event, now):
        voted_event.responded("erin")
        voted_event.unpropose(2)
        voted_event.finalize(1)

        restored = deserialize_event(serialize_event(voted_event))

        assert restored.id == voted_event.id
        assert restored.name == voted_event.name
        assert set(restored.get_invitees()) == set(voted_event.get_invitees())
        assert restored.get_responses() == voted_event.get_responses()
        assert restored.finalized == 1
        assert restored.proposal_keys() == [0, 1]
        assert restored.slot_count() == 3
        for index in restored.proposal_keys():
            original = voted_event.proposal(index)
            copy = restored.proposal(index)
            assert copy.timestamp == original.timestamp
            assert copy.timestamp.tzinfo == original.timestamp.tzinfo
            assert copy.accepted == original.accepted
        assert restored.summarize(now) == voted_event.summarize(now)

    def test_removed_slots_stay_invalid(self, voted_event, next_month):
        from planner.errors import InvalidProposalError

        voted_event.unpropose(0)
        restored = deserialize_event(serialize_event(voted_event))

        with pytest.raises(InvalidProposalError):
            restored.proposal(0)
        assert restored.propose_date(next_month) == 3

    def test_rebuilds_comparison_dates(self, voted_event, next_week, next_month):
        voted_event.unpropose(0)
        restored = deserialize_event(serialize_event(voted_event))

        assert restored.earliest_comparison_date() == next_week
        assert restored.latest_comparison_date() == next_month

    def test_rebuilds_leaders(self, voted_event):
        voted_event.accept_proposal("alice", 1)
        restored = deserialize_event(serialize_event(voted_event))

        assert restored.leaders() == [1]

    def test_fixed_offset_zone(self):
        tz = timezone(timedelta(hours=5, minutes=30))
        evt = Event("OFF", "Offset")
        evt.propose_date(datetime(2024, 3, 1, 18, 0, tzinfo=tz))

        data = serialize_event(evt)
        assert data["proposals"][0]["timezone"] == "+05:30"

        restored = deserialize_event(data)
        assert restored.proposal(0).timestamp == datetime(2024, 3, 1, 18, 0, tzinfo=tz)
        offset = restored.proposal(0).timestamp.utcoffset()
        assert offset == timedelta(hours=5, minutes=30)

    def test_utc(self):
        evt = Event("UTC", "Utc")
        evt.propose_date(datetime(2024, 3, 1, tzinfo=UTC))

        data = serialize_event(evt)
        assert data["proposals"][0]["timezone"] == "UTC"
        assert deserialize_event(data).proposal(0).timestamp == datetime(
            2024, 3, 1, tzinfo=UTC
        )

    def test_keeps_microseconds(self):
        """Sub-millisecond precision survives."""
        ts = datetime(2024, 3, 1, 12, 0, 0, 123456, tzinfo=UTC)
        evt = Event("USEC", "Precise")
        evt.propose_date(ts)

        data = serialize_event(evt)
        assert data["proposals"][0]["timestamp"] == 1709294400123
        assert data["proposals"][0]["microseconds"] == 456

        restored = deserialize_event(data).proposal(0).timestamp
        assert restored == ts
        assert restored.microsecond == 123456

    def test_keeps_microseconds_before_epoch(self):
        ts = datetime(1969, 12, 31, 23, 59, 59, 999001, tzinfo=UTC)
        evt = Event("OLD", "Old")
        evt.propose_date(ts)

        restored = deserialize_event(serialize_event(evt))
        assert restored.proposal(0).timestamp == ts

    def test_identifiers_kept_verbatim(self, tomorrow):
        """Ids, names and uids are opaque; surrounding spaces are kept."""
        evt = Event(" E1 ", " Party ")
        evt.propose_date(tomorrow)
        evt.invite("  carol")
        evt.accept_proposal(" bob", 0)
        evt.responded("dave ")

        restored = deserialize_event(serialize_event(evt))

        assert restored.id == " E1 "
        assert restored.name == " Party "
        assert restored.get_invitees() == ["  carol", " bob"]
        assert restored.get_responses() == {" bob", "dave "}
        assert restored.proposal(0).accepted == {" bob"}


class TestDeserialize:
    """Tests for deserialize_event input handling."""

    def test_millisecond_snapshot_loads(self):
        """Snapshots without a microsecond remainder still load."""
        payload = {
            "id": "X",
            "name": "x",
            "proposals": [{"timestamp": 1500, "timezone": "UTC"}],
        }
        ts = deserialize_event(payload).proposal(0).timestamp
        assert ts == datetime(1970, 1, 1, 0, 0, 1, 500000, tzinfo=UTC)

    def test_missing_timezone_uses_default(self):
        payload = {
            "id": "X",
            "name": "x",
            "proposals": [{"timestamp": 0, "accepted": []}],
        }
        evt = deserialize_event(payload, default_timezone="Europe/Paris")

        ts = evt.proposal(0).timestamp
        assert ts.tzinfo == ZoneInfo("Europe/Paris")
        assert ts == datetime(1970, 1, 1, tzinfo=UTC)

    def test_rejects_dangling_finalized(self):
        payload = {
            "id": "X",
            "name": "x",
            "finalized": 1,
            "proposals": [{"timestamp": 0, "timezone": "UTC"}, None],
        }
        with pytest.raises(ValidationError):
            deserialize_event(payload)

    def test_rejects_unknown_timezone(self):
        payload = {
            "id": "X",
            "name": "x",
            "proposals": [{"timestamp": 0, "timezone": "Mars/Olympus_Mons"}],
        }
        with pytest.raises(ValidationError):
            deserialize_event(payload)

    def test_record_validates_directly(self):
        record = EventRecord.model_validate(
            {"id": "X", "name": "x", "proposals": [None, None]}
        )
        assert record.finalized is None
        assert record.proposals == [None, None]


class TestZones:
    """Tests for timezone naming helpers."""

    def test_zone_name_round_trip(self):
        for name in ("America/New_York", "UTC", "+05:30", "-03:00"):
            tz = resolve_zone(name)
            offset = datetime(2024, 1, 1, tzinfo=tz).utcoffset()
            assert zone_name(tz, offset) == name

    def test_resolve_rejects_garbage(self):
        with pytest.raises(ValueError):
            resolve_zone("Not/AZone")
