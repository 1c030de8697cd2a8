"""
Round Processing

Turns a validated set of participants into a recorded Round and an updated
player roster.

Precondition: ``validate_round`` has already returned no errors. This module
does not validate again; out-of-range scores or a single participant still
produce a structurally valid Round, it just carries no meaning.
"""

from dataclasses import replace
from datetime import date
from typing import List, Optional, Sequence, Tuple

from bagtag.core.models import Participant, Player, Round
from bagtag.core.redistribution import redistribute_bagtags
from bagtag.utils import generate_id, setup_logging

# --- Module Logger ---
logger = setup_logging(__name__)


def apply_bagtags(players: Sequence[Player], participants: Sequence[Participant]) -> List[Player]:
    """
    Return a new roster with each participant's new bagtag applied.

    Players who did not take part pass through unchanged.
    """
    new_bagtags = {p.player_id: p.new_bagtag for p in participants}
    return [
        replace(player, current_bagtag=new_bagtags[player.id])
        if player.id in new_bagtags else player
        for player in players
    ]


def process_round(
    participants: Sequence[Participant],
    players: Sequence[Player],
    round_date: Optional[date] = None,
) -> Tuple[Round, List[Player]]:
    """
    Redistribute bagtags and build the round record.

    Args:
        participants: Validated participants of the round
        players: Full roster before the round (not modified)
        round_date: Date of the round (default: today)

    Returns:
        Tuple of (new Round, updated roster)
    """
    redistributed = redistribute_bagtags(participants)

    round_ = Round(
        id=generate_id(),
        date=round_date or date.today(),
        participants=tuple(redistributed),
    )
    updated_players = apply_bagtags(players, redistributed)

    logger.debug(
        f"Processed round {round_.id} with {len(redistributed)} participants "
        f"({len(players) - len(redistributed)} players unchanged)"
    )
    return round_, updated_players
