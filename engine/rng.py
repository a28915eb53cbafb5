"""Seeded random streams for reproducible puzzles."""

import random
from collections.abc import Callable
from datetime import date, datetime, timezone

Rng = Callable[[], float]           # Returns floats in [0, 1)


def create_rng(seed: str | int) -> Rng:
    """Build a reproducible float stream from a seed.

    Args:
        seed: Any string or integer, e.g. a date or a post id.

    Returns:
        A zero-argument callable yielding floats in [0, 1). Two streams
        built from the same seed yield the same values in the same order.
    """
    return random.Random(seed).random


def daily_seed(day: date | None = None) -> str:
    """Seed for the puzzle of a calendar day (UTC today by default)."""
    day = day or datetime.now(timezone.utc).date()
    return day.isoformat()


def puzzle_seed(post_id: str | None, day: date | None = None) -> str:
    """Seed for a post's puzzle, falling back to the day's puzzle."""
    return post_id or daily_seed(day)


def draw_index(rng: Rng, size: int) -> int:
    """Draw a uniform integer in [0, size) from the stream.

    Raises:
        ValueError: If the stream yields a value outside [0, 1).
    """
    value = rng()
    if not 0.0 <= value < 1.0:
        raise ValueError(f"RNG returned {value}, expected a float in [0, 1)")
    return int(value * size)


def draw_coin(rng: Rng) -> bool:
    """Fair coin flip: True when the next value is below 0.5."""
    value = rng()
    if not 0.0 <= value < 1.0:
        raise ValueError(f"RNG returned {value}, expected a float in [0, 1)")
    return value < 0.5
