"""
Player and Round Persistence

``BagtagStorage`` reads and writes the ``players`` and ``rounds`` blobs on top
of any KeyValueStore. Each save overwrites the whole collection.

Reads never fail: a missing blob or one that cannot be decoded yields an
empty list and the problem is logged. Callers therefore cannot tell an empty
roster from one that failed to load.

The two blobs are written independently with no transaction between them.

Usage:
    from bagtag.storage import BagtagStorage, JsonFileStore
    storage = BagtagStorage(JsonFileStore())
    players = storage.get_players()
"""

import json
from datetime import date
from typing import Callable, Dict, List, Sequence, TypeVar

from bagtag.config import (
    BACKUP_SUFFIX,
    PLAYERS_KEY,
    ROUNDS_KEY,
    SEED_PLAYERS,
    SEED_ROUND_DATE,
    SEED_ROUND_SCORES,
)
from bagtag.core.models import Player, Round
from bagtag.core.players import build_participants, set_score
from bagtag.core.rounds import process_round
from bagtag.storage.store import KeyValueStore, StorageError
from bagtag.utils import parse_date, setup_logging

# --- Module Logger ---
logger = setup_logging(__name__)

T = TypeVar("T")


class BagtagStorage:
    """Typed access to the stored roster and round history."""

    def __init__(self, store: KeyValueStore):
        self.store = store
        # Raw blobs that failed to decode, kept until the next save of that key
        self._unreadable: Dict[str, str] = {}

    def _load(self, key: str, from_dict: Callable[[dict], T]) -> List[T]:
        raw = None
        try:
            raw = self.store.get_string(key)
            if not raw:
                return []
            items = [from_dict(item) for item in json.loads(raw)]
        except (OSError, ValueError, KeyError, TypeError) as e:
            logger.error(f"Error loading {key}: {e}")
            if raw:
                self._unreadable[key] = raw
            return []
        self._unreadable.pop(key, None)
        return items

    def _save(self, key: str, items: Sequence) -> None:
        try:
            unreadable = self._unreadable.pop(key, None)
            if unreadable is not None:
                backup_key = f"{key}{BACKUP_SUFFIX}"
                logger.warning(f"Overwriting unreadable {key}; previous contents kept under '{backup_key}'")
                self.store.set_string(backup_key, unreadable)
            self.store.set_string(key, json.dumps([item.to_dict() for item in items], ensure_ascii=False))
        except (OSError, ValueError, TypeError) as e:
            logger.error(f"Error saving {key}: {e}")
            raise StorageError(f"Could not save {key}: {e}") from e
        logger.debug(f"Saved {len(items)} {key}")

    # Players
    def get_players(self) -> List[Player]:
        return self._load(PLAYERS_KEY, Player.from_dict)

    def save_players(self, players: Sequence[Player]) -> None:
        self._save(PLAYERS_KEY, players)

    # Rounds
    def get_rounds(self) -> List[Round]:
        return self._load(ROUNDS_KEY, Round.from_dict)

    def save_rounds(self, rounds: Sequence[Round]) -> None:
        self._save(ROUNDS_KEY, rounds)

    def clear_all(self) -> None:
        """Remove all stored data."""
        try:
            self.store.clear_all()
        except OSError as e:
            logger.error(f"Error clearing storage: {e}")
            raise StorageError(f"Could not clear storage: {e}") from e


def seed_data(round_date: date | None = None) -> tuple[List[Player], List[Round]]:
    """
    Build the demo roster and a single demo round.

    The round is run through ``process_round`` so the roster reflects its
    outcome and keeps a dense set of bagtags.
    """
    players = [Player.from_dict(p) for p in SEED_PLAYERS]

    participants = build_participants(players, SEED_ROUND_SCORES)
    for player_id, score in SEED_ROUND_SCORES.items():
        participants = set_score(participants, player_id, score)

    round_, updated_players = process_round(
        participants, players, round_date=round_date or parse_date(SEED_ROUND_DATE)
    )
    return updated_players, [round_]


def initialize_data(storage: BagtagStorage) -> bool:
    """
    Seed demo data when both the roster and the history are empty.

    Returns:
        True if demo data was written
    """
    if storage.get_players() or storage.get_rounds():
        return False

    logger.info("Storage is empty, writing demo data")
    players, rounds = seed_data()
    storage.save_rounds(rounds)
    storage.save_players(players)
    return True
