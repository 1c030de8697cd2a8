"""
Player creation and round-entry selection helpers.

The selection helpers replace shared mutable UI state with functions that
return new collections.
"""

from dataclasses import replace
from datetime import date
from typing import FrozenSet, Iterable, List, Optional, Sequence

from bagtag.core.models import Participant, Player
from bagtag.utils import generate_id


def next_bagtag(existing_players: Sequence[Player]) -> int:
    """Return the bagtag a newly joining player receives."""
    if not existing_players:
        return 1
    return max(p.current_bagtag for p in existing_players) + 1


def create_player(
    name: str,
    existing_players: Sequence[Player],
    join_date: Optional[date] = None,
) -> Player:
    """
    Create a new player holding the next available bagtag.

    Args:
        name: Display name (surrounding whitespace is removed)
        existing_players: Current roster
        join_date: Date the player joins (default: today)

    Returns:
        The new Player (the roster itself is not modified)

    Raises:
        ValueError: If the name is empty or blank
    """
    name = name.strip()
    if not name:
        raise ValueError("Player name must not be empty")

    return Player(
        id=generate_id(),
        name=name,
        current_bagtag=next_bagtag(existing_players),
        join_date=join_date or date.today(),
    )


def sort_by_bagtag(players: Iterable[Player]) -> List[Player]:
    """Return players ordered by bagtag, best first."""
    return sorted(players, key=lambda p: p.current_bagtag)


def toggle_selection(selected: FrozenSet[str], player_id: str) -> FrozenSet[str]:
    """Add ``player_id`` to the selection, or remove it if already selected."""
    if player_id in selected:
        return selected - {player_id}
    return selected | {player_id}


def build_participants(players: Sequence[Player], selected_ids: Iterable[str]) -> List[Participant]:
    """
    Create round participants for the selected players, ordered by bagtag.

    Scores start unset.
    """
    selected_ids = set(selected_ids)
    return [
        Participant(
            player_id=player.id,
            player_name=player.name,
            current_bagtag=player.current_bagtag,
            old_bagtag=player.current_bagtag,
        )
        for player in sort_by_bagtag(players)
        if player.id in selected_ids
    ]


def set_score(participants: Sequence[Participant], player_id: str, score: Optional[int]) -> List[Participant]:
    """Return a new participant list with one player's score replaced."""
    return [
        replace(p, score=score) if p.player_id == player_id else p
        for p in participants
    ]
