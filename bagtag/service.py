"""
Round Recording Service

This module wires the core logic to storage for the front ends:
select players, enter scores, validate, preview and save a round.

Usage:
    python -m bagtag.service

    Programmatic usage:
        from bagtag.service import record_round
        result = record_round(storage, participants)
"""

import sys
from datetime import date
from typing import List, Optional, Sequence

from bagtag.core.changes import get_bagtag_changes
from bagtag.core.models import Participant, Player, Round
from bagtag.core.players import build_participants, create_player, set_score, sort_by_bagtag
from bagtag.core.redistribution import redistribute_bagtags
from bagtag.core.rounds import process_round
from bagtag.core.validation import validate_round
from bagtag.history import sort_rounds
from bagtag.storage import BagtagStorage, JsonFileStore, StorageError, initialize_data
from bagtag.utils import setup_logging

# --- Module Logger ---
logger = setup_logging(__name__)


def load_roster(storage: BagtagStorage) -> List[Player]:
    """Return the stored players ordered by bagtag."""
    return sort_by_bagtag(storage.get_players())


def load_history(storage: BagtagStorage) -> List[Round]:
    """Return the stored rounds, newest first."""
    return sort_rounds(storage.get_rounds())


def add_player(storage: BagtagStorage, name: str) -> Player:
    """
    Create a player with the next free bagtag and save the roster.

    Raises:
        ValueError: If the name is blank
        StorageError: If the roster cannot be saved
    """
    players = storage.get_players()
    player = create_player(name, players)
    storage.save_players([*players, player])
    logger.info(f"Added player {player.name} with bagtag #{player.current_bagtag}")
    return player


def preview_round(participants: Sequence[Participant]) -> dict:
    """
    Validate the participants and show the redistribution without saving.

    Returns:
        Dictionary with:
            - entered: the participants as previewed (pass these to record_round)
            - errors: validation messages (empty if valid)
            - participants: redistributed participants (empty if invalid)
            - changes: bagtag changes for the redistributed participants
    """
    entered = list(participants)
    errors = validate_round(entered)
    if errors:
        return {'entered': entered, 'errors': errors, 'participants': [], 'changes': []}

    redistributed = redistribute_bagtags(entered)
    return {
        'entered': entered,
        'errors': [],
        'participants': redistributed,
        'changes': get_bagtag_changes(redistributed),
    }


def is_preview_current(preview: Optional[dict], participants: Sequence[Participant]) -> bool:
    """True if ``preview`` was made from exactly these participants and scores."""
    return preview is not None and preview['entered'] == list(participants)


def record_round(
    storage: BagtagStorage,
    participants: Sequence[Participant],
    dry_run: bool = False,
    round_date: Optional[date] = None,
) -> dict:
    """
    Main entry point for recording a round.

    The round history is saved before the roster. If the roster write fails
    the round is already durable and the error propagates to the caller.

    Args:
        storage: Storage for players and rounds
        participants: Participants with entered scores
        dry_run: If True, validate only without saving
        round_date: Date of the round (default: today)

    Returns:
        Dictionary with:
            - success: bool
            - errors: validation messages
            - round: the new Round (None if invalid or dry run)
            - players: updated roster (None if invalid or dry run)

    Raises:
        StorageError: If saving fails
    """
    result = {
        'success': False,
        'errors': [],
        'round': None,
        'players': None,
    }

    # Step 1: Validate
    logger.info(f"Validating round with {len(participants)} participants...")
    errors = validate_round(participants)
    result['errors'] = errors
    if errors:
        for e in errors:
            logger.warning(f"  Invalid: {e}")
        return result

    if dry_run:
        logger.info("[DRY RUN] Validation complete. No data was saved.")
        result['success'] = True
        return result

    # Step 2: Redistribute and build the round
    players = storage.get_players()
    round_, updated_players = process_round(participants, players, round_date=round_date)

    # Step 3: Save history first, then the roster
    storage.save_rounds([round_, *storage.get_rounds()])
    storage.save_players(updated_players)

    result.update(success=True, round=round_, players=updated_players)
    logger.info(f"Round {round_.id} saved for {round_.date}")
    return result


def parse_score_line(line: str) -> tuple[str, Optional[int]]:
    """
    Parse a ``name=score`` line from the terminal.

    Raises:
        ValueError: If the line is not in ``name=score`` form
    """
    name, sep, score = line.partition("=")
    if not sep or not name.strip():
        raise ValueError(f"Expected 'name=score', got '{line}'")
    score = score.strip()
    return name.strip(), int(score) if score else None


def print_standings(players: Sequence[Player]) -> None:
    for p in players:
        print(f"  #{p.current_bagtag:<3} {p.name}")


def main():
    """CLI interface for recording a round."""
    storage = BagtagStorage(JsonFileStore())
    initialize_data(storage)
    players = load_roster(storage)

    print("=" * 60)
    print("Bagtag Round Entry")
    print("=" * 60)
    print_standings(players)
    print("\nEnter one 'name=score' per line for each participant.")
    print("Press Enter on an empty line to finish.\n")
    print("-" * 60)

    by_name = {p.name.lower(): p for p in players}
    scores = {}
    try:
        while True:
            line = input().strip()
            if not line:
                break
            try:
                name, score = parse_score_line(line)
            except ValueError as e:
                print(f"  {e}")
                continue
            player = by_name.get(name.lower())
            if player is None:
                print(f"  Unknown player: {name}")
                continue
            scores[player.id] = score
    except EOFError:
        pass

    participants = build_participants(players, scores)
    for player_id, score in scores.items():
        participants = set_score(participants, player_id, score)

    preview = preview_round(participants)
    if preview['errors']:
        print("\nVALIDATION ERROR:")
        for e in preview['errors']:
            print(f"  {e}")
        sys.exit(1)

    print("\nPreview:")
    for c in preview['changes']:
        p = c.participant
        print(f"  #{p.new_bagtag:<3} {p.player_name:<20} {p.score:>4}  {c.change_text}")

    confirm = input("\nSave this round? [y/N]: ").strip().lower()
    if confirm != 'y':
        print("Round discarded.")
        sys.exit(0)

    try:
        result = record_round(storage, preview['entered'])
    except StorageError as e:
        print(f"\nSTORAGE ERROR: {e}")
        sys.exit(1)

    print("\n" + "=" * 60)
    print("SAVED!")
    print_standings(sort_by_bagtag(result['players']))
    print("=" * 60)


if __name__ == "__main__":
    main()
