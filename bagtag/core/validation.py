"""
Round validation.

Checks a prospective round's participant data before it is processed.
Problems are collected as human-readable messages; nothing is raised.
"""

from collections import Counter
from typing import List, Sequence

from bagtag.config import MAX_SCORE, MIN_PARTICIPANTS, MIN_SCORE
from bagtag.core.models import Participant


def validate_round(participants: Sequence[Participant]) -> List[str]:
    """
    Validate the participants of a round.

    Every rule is checked, so one call reports all problems. Duplicate
    scores are allowed; ties are resolved during redistribution.

    Args:
        participants: Participants with their entered scores

    Returns:
        List of error messages (empty if the round can be processed)
    """
    errors = []

    if len(participants) < MIN_PARTICIPANTS:
        errors.append(f"At least {MIN_PARTICIPANTS} players must participate")

    for p in participants:
        if p.score is None:
            errors.append(f"{p.player_name}: Score is missing")
        elif isinstance(p.score, bool) or not isinstance(p.score, int):
            errors.append(f"{p.player_name}: Score must be a whole number (got {p.score!r})")
        elif not MIN_SCORE <= p.score <= MAX_SCORE:
            errors.append(
                f"{p.player_name}: Score must be between {MIN_SCORE}-{MAX_SCORE} (got {p.score})"
            )

    counts = Counter(p.player_id for p in participants)
    reported = set()
    for p in participants:
        if counts[p.player_id] > 1 and p.player_id not in reported:
            reported.add(p.player_id)
            errors.append(f"{p.player_name}: Listed more than once")

    return errors
