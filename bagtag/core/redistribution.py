"""
Bagtag Redistribution

This module converts a round's scores into new bagtag assignments. Only the
bagtags already held by the round's participants are reassigned:

- Participants are ordered by score (lower is better)
- Ties go to the participant holding the lower current bagtag
- The i-th best performer receives the i-th lowest bagtag in the pool

Usage:
    from bagtag.core.redistribution import redistribute_bagtags
    leaderboard = redistribute_bagtags(participants)
"""

from dataclasses import replace
from typing import List, Sequence, Tuple

from bagtag.core.models import Participant
from bagtag.utils import setup_logging

# --- Module Logger ---
logger = setup_logging(__name__)


def performance_key(participant: Participant) -> Tuple[int, int]:
    """Sort key for the performance ordering: score, then current bagtag."""
    return participant.score, participant.current_bagtag


def redistribute_bagtags(participants: Sequence[Participant]) -> List[Participant]:
    """
    Assign new bagtags to the participants of a round.

    The result is a permutation of the participants' current bagtags; bagtags
    held by non-participants are never touched. When two participants share
    both score and current bagtag, Python's stable sort keeps their input
    order.

    Args:
        participants: Validated participants (every score set)

    Returns:
        New participant records with ``new_bagtag`` set, sorted ascending by
        ``new_bagtag`` (final leaderboard order)
    """
    by_performance = sorted(participants, key=performance_key)
    logger.debug(f"Sorted by performance (best to worst): {[p.player_name for p in by_performance]}")

    available_bagtags = sorted(p.current_bagtag for p in participants)
    logger.debug(f"Available bagtags: {available_bagtags}")

    redistributed = [
        replace(participant, new_bagtag=bagtag)
        for participant, bagtag in zip(by_performance, available_bagtags)
    ]

    return sorted(redistributed, key=lambda p: p.new_bagtag)
