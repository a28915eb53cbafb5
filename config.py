"""Server-wide configuration constants for Miniature Borough."""

import os

GRID_SIZE = 6            # Board is GRID_SIZE x GRID_SIZE
TOTAL_TURNS = 10         # Tiles placed per game
MAX_DAILY_ATTEMPTS = 3   # Scored attempts per puzzle per user
QUOTA_TTL_SECONDS = 30 * 24 * 60 * 60  # Quota records expire after 30 days
PUZZLE_CACHE_SIZE = 128  # Puzzles kept in memory; least recently used dropped first
DEFAULT_USER_ID = "anonymous"

# "shared": one row index and one column index split across a turn's options
# "independent": each option draws its own axis and index
CONSTRAINT_MODE = os.environ.get("BOROUGH_CONSTRAINT_MODE", "shared")

QUOTA_FILE = os.environ.get("BOROUGH_QUOTA_FILE", "")  # Empty = in-memory store
LOG_LEVEL = os.environ.get("BOROUGH_LOG_LEVEL", "INFO")
