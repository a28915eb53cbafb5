"""Daily attempt quota kept in a key-value store with expiry."""

from __future__ import annotations

import json
import logging
import os
import time
from pathlib import Path
from typing import Any, Protocol

from config import MAX_DAILY_ATTEMPTS, QUOTA_TTL_SECONDS
from models.quota import DailyStatus

logger = logging.getLogger(__name__)


class KeyValueStore(Protocol):
    """The slice of a key-value store the quota needs."""

    def get(self, key: str) -> dict[str, Any] | None: ...

    def set(self, key: str, value: dict[str, Any]) -> None: ...

    def expire(self, key: str, seconds: int) -> None: ...


class InMemoryStore:
    """Process-local store with wall-clock expiry.

    An expired key disappears when it is read, and every write sweeps out
    whatever else has expired.
    """

    def __init__(self, clock=time.time) -> None:
        self._clock = clock
        self._data: dict[str, dict[str, Any]] = {}
        self._expires_at: dict[str, float] = {}

    def _purge_expired(self) -> None:
        now = self._clock()
        expired = [key for key, at in self._expires_at.items() if now >= at]
        for key in expired:
            self._data.pop(key, None)
            del self._expires_at[key]
        if expired:
            logger.debug("Purged %d expired quota records", len(expired))

    def get(self, key: str) -> dict[str, Any] | None:
        expires_at = self._expires_at.get(key)
        if expires_at is not None and self._clock() >= expires_at:
            self._data.pop(key, None)
            self._expires_at.pop(key, None)
            return None
        value = self._data.get(key)
        return dict(value) if value is not None else None

    def set(self, key: str, value: dict[str, Any]) -> None:
        self._purge_expired()
        self._data[key] = dict(value)
        self._expires_at.pop(key, None)

    def expire(self, key: str, seconds: int) -> None:
        if key in self._data:
            self._expires_at[key] = self._clock() + seconds


class JsonFileStore(InMemoryStore):
    """In-memory store mirrored to a JSON file after every write."""

    def __init__(self, path: str, clock=time.time) -> None:
        super().__init__(clock)
        self.path = path
        self._load()

    def _load(self) -> None:
        if not Path(self.path).exists():
            return
        with open(self.path) as f:
            data = json.load(f)
        self._data = data.get("values", {})
        self._expires_at = data.get("expires_at", {})
        self._purge_expired()

    def _save(self) -> None:
        """Write to a temporary file first, then rename for atomicity."""
        self._purge_expired()
        tmp_path = self.path + ".tmp"
        with open(tmp_path, "w") as f:
            json.dump({"values": self._data, "expires_at": self._expires_at}, f)
        os.replace(tmp_path, self.path)

    def set(self, key: str, value: dict[str, Any]) -> None:
        super().set(key, value)
        self._save()

    def expire(self, key: str, seconds: int) -> None:
        super().expire(key, seconds)
        self._save()


def quota_key(puzzle_id: str, user_id: str) -> str:
    """Store key for one user's attempts at one puzzle."""
    return f"borough:attempts:{puzzle_id}:{user_id}"


def get_status(store: KeyValueStore, puzzle_id: str, user_id: str) -> DailyStatus:
    """Read a user's attempts and best score; zeros if nothing is recorded."""
    record = store.get(quota_key(puzzle_id, user_id))
    if record is None:
        return DailyStatus()
    return DailyStatus(
        attempts_used=int(record.get("attempts_used", 0)),
        max_score=int(record.get("max_score", 0)),
    )


def record_attempt(
    store: KeyValueStore,
    puzzle_id: str,
    user_id: str,
    score: int,
) -> DailyStatus:
    """Count a finished game against the user's quota and keep the best score.

    Attempts are capped at MAX_DAILY_ATTEMPTS. The record's expiry is
    refreshed on every write.

    Args:
        store: Backing key-value store.
        puzzle_id: The puzzle (post id or daily seed).
        user_id: The player.
        score: Final score of the game.

    Returns:
        The updated status.

    Raises:
        ValueError: If score is negative.
    """
    if score < 0:
        raise ValueError(f"Score cannot be negative: {score}")

    current = get_status(store, puzzle_id, user_id)
    updated = DailyStatus(
        attempts_used=min(current.attempts_used + 1, MAX_DAILY_ATTEMPTS),
        max_score=max(current.max_score, score),
    )

    key = quota_key(puzzle_id, user_id)
    store.set(key, updated.model_dump())
    store.expire(key, QUOTA_TTL_SECONDS)

    logger.info(
        "Attempt recorded for %s on %s: %d/%d used, best %d",
        user_id, puzzle_id, updated.attempts_used, MAX_DAILY_ATTEMPTS, updated.max_score,
    )
    return updated


def attempts_remaining(status: DailyStatus) -> int:
    """Attempts left before the quota is spent."""
    return max(0, MAX_DAILY_ATTEMPTS - status.attempts_used)
