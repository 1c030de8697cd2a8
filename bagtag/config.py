"""
Central configuration for the Bagtag Tracker.

All shared constants and configuration values should be defined here
to avoid duplication and ensure consistency across modules.
"""

from pathlib import Path

# --- Project Paths ---
PROJECT_ROOT = Path(__file__).parent.parent
DATA_FOLDER = PROJECT_ROOT / "data"

# --- Storage Keys ---
PLAYERS_KEY = "players"
ROUNDS_KEY = "rounds"
BACKUP_SUFFIX = "_backup"  # Unreadable blobs are copied here before being overwritten
DATE_FORMAT = "%Y-%m-%d"  # Calendar dates are stored as YYYY-MM-DD strings

# --- Round Rules ---
MIN_PARTICIPANTS = 2
MIN_SCORE = 18   # Inclusive lower bound for a round score
MAX_SCORE = 200  # Inclusive upper bound for a round score

# --- Seed Data ---
# Used only when both the player roster and the round history are empty.
SEED_PLAYERS = [
    {"id": "1", "name": "Lars", "currentBagtag": 1, "joinDate": "2025-01-01"},
    {"id": "2", "name": "Thacker", "currentBagtag": 2, "joinDate": "2025-01-01"},
    {"id": "3", "name": "Morten", "currentBagtag": 3, "joinDate": "2025-01-01"},
    {"id": "4", "name": "Espholm", "currentBagtag": 4, "joinDate": "2025-01-05"},
    {"id": "5", "name": "Beuschau", "currentBagtag": 5, "joinDate": "2025-01-10"},
]
SEED_ROUND_DATE = "2025-01-15"
SEED_ROUND_SCORES = {"1": 55, "2": 52, "3": 58}  # player id -> score
