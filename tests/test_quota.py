"""Tests for the daily attempt quota and its stores."""

import json

import pytest

from config import MAX_DAILY_ATTEMPTS, QUOTA_TTL_SECONDS
from engine.quota import (
    InMemoryStore,
    JsonFileStore,
    attempts_remaining,
    get_status,
    quota_key,
    record_attempt,
)
from models.quota import DailyStatus


class FakeClock:
    """Manually advanced clock for expiry tests."""

    def __init__(self, now: float = 1000.0) -> None:
        self.now = now

    def __call__(self) -> float:
        return self.now


class TestInMemoryStore:
    """Tests for InMemoryStore."""

    def test_get_missing(self):
        assert InMemoryStore().get("nope") is None

    def test_set_and_get(self):
        store = InMemoryStore()
        store.set("k", {"a": 1})
        assert store.get("k") == {"a": 1}

    def test_get_returns_copy(self):
        store = InMemoryStore()
        store.set("k", {"a": 1})
        store.get("k")["a"] = 2
        assert store.get("k") == {"a": 1}

    def test_expiry(self):
        clock = FakeClock()
        store = InMemoryStore(clock=clock)
        store.set("k", {"a": 1})
        store.expire("k", 60)
        clock.now += 59
        assert store.get("k") == {"a": 1}
        clock.now += 1
        assert store.get("k") is None

    def test_expire_missing_key_is_noop(self):
        store = InMemoryStore()
        store.expire("k", 60)
        store.set("k", {"a": 1})
        assert store.get("k") == {"a": 1}

    def test_write_sweeps_other_expired_keys(self):
        """A user who never comes back does not leave a record behind."""
        clock = FakeClock()
        store = InMemoryStore(clock=clock)
        store.set("gone", {"a": 1})
        store.expire("gone", 60)
        store.set("kept", {"a": 2})
        store.expire("kept", 600)
        clock.now += 60
        store.set("new", {"a": 3})
        assert "gone" not in store._data
        assert "gone" not in store._expires_at
        assert store.get("kept") == {"a": 2}


class TestJsonFileStore:
    """Tests for JsonFileStore."""

    def test_persists_between_instances(self, tmp_path):
        path = str(tmp_path / "quota.json")
        store = JsonFileStore(path)
        store.set("k", {"attempts_used": 1, "max_score": 9})
        store.expire("k", 60)

        reloaded = JsonFileStore(path)
        assert reloaded.get("k") == {"attempts_used": 1, "max_score": 9}

    def test_file_is_json(self, tmp_path):
        path = tmp_path / "quota.json"
        JsonFileStore(str(path)).set("k", {"a": 1})
        data = json.loads(path.read_text())
        assert data["values"] == {"k": {"a": 1}}

    def test_missing_file_is_empty(self, tmp_path):
        assert JsonFileStore(str(tmp_path / "missing.json")).get("k") is None

    def test_expired_keys_dropped_from_file(self, tmp_path):
        path = tmp_path / "quota.json"
        clock = FakeClock()
        store = JsonFileStore(str(path), clock=clock)
        store.set("gone", {"a": 1})
        store.expire("gone", 60)
        clock.now += 60
        store.set("new", {"a": 2})
        data = json.loads(path.read_text())
        assert data["values"] == {"new": {"a": 2}}
        assert "gone" not in data["expires_at"]

    def test_expired_keys_dropped_on_load(self, tmp_path):
        path = str(tmp_path / "quota.json")
        clock = FakeClock()
        store = JsonFileStore(path, clock=clock)
        store.set("gone", {"a": 1})
        store.expire("gone", 60)
        clock.now += 60
        assert JsonFileStore(path, clock=clock)._data == {}


class TestQuota:
    """Tests for get_status() and record_attempt()."""

    def test_key_format(self):
        assert quota_key("t3_abc", "u1") == "borough:attempts:t3_abc:u1"

    def test_status_defaults_to_zero(self):
        assert get_status(InMemoryStore(), "p", "u") == DailyStatus(attempts_used=0, max_score=0)

    def test_record_increments(self):
        store = InMemoryStore()
        status = record_attempt(store, "p", "u", 12)
        assert status.attempts_used == 1
        assert status.max_score == 12
        assert get_status(store, "p", "u") == status

    def test_keeps_best_score(self):
        store = InMemoryStore()
        record_attempt(store, "p", "u", 20)
        status = record_attempt(store, "p", "u", 5)
        assert status.max_score == 20
        assert status.attempts_used == 2

    def test_attempts_capped(self):
        store = InMemoryStore()
        for score in range(MAX_DAILY_ATTEMPTS + 2):
            status = record_attempt(store, "p", "u", score)
        assert status.attempts_used == MAX_DAILY_ATTEMPTS
        assert status.max_score == MAX_DAILY_ATTEMPTS + 1

    def test_users_and_puzzles_separate(self):
        store = InMemoryStore()
        record_attempt(store, "p1", "u1", 10)
        assert get_status(store, "p1", "u2").attempts_used == 0
        assert get_status(store, "p2", "u1").attempts_used == 0

    def test_negative_score_rejected(self):
        with pytest.raises(ValueError, match="negative"):
            record_attempt(InMemoryStore(), "p", "u", -1)

    def test_record_expires_after_ttl(self):
        clock = FakeClock()
        store = InMemoryStore(clock=clock)
        record_attempt(store, "p", "u", 7)
        clock.now += QUOTA_TTL_SECONDS
        assert get_status(store, "p", "u") == DailyStatus()

    def test_write_refreshes_ttl(self):
        clock = FakeClock()
        store = InMemoryStore(clock=clock)
        record_attempt(store, "p", "u", 7)
        clock.now += QUOTA_TTL_SECONDS - 1
        record_attempt(store, "p", "u", 3)
        clock.now += QUOTA_TTL_SECONDS - 1
        assert get_status(store, "p", "u").attempts_used == 2

    def test_attempts_remaining(self):
        assert attempts_remaining(DailyStatus(attempts_used=1)) == MAX_DAILY_ATTEMPTS - 1
        assert attempts_remaining(DailyStatus(attempts_used=MAX_DAILY_ATTEMPTS)) == 0
