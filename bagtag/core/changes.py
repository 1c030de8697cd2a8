"""Bagtag change summaries for displaying a round's results."""

from typing import List, Sequence

from bagtag.core.models import ChangeType, Participant, ParticipantChange


def classify_change(change: int) -> tuple[ChangeType, str]:
    """Return the change type and display text for a bagtag delta."""
    if change < 0:
        return ChangeType.UP, f"↑{abs(change)}"
    if change > 0:
        return ChangeType.DOWN, f"↓{change}"
    return ChangeType.SAME, "→"


def get_bagtag_changes(participants: Sequence[Participant]) -> List[ParticipantChange]:
    """
    Summarize how each participant's bagtag moved in a round.

    A negative delta is an improvement (lower bagtag is better).

    Args:
        participants: Participants with both ``old_bagtag`` and ``new_bagtag``

    Returns:
        One ParticipantChange per participant, in input order
    """
    changes = []
    for p in participants:
        change = p.new_bagtag - p.old_bagtag
        change_type, change_text = classify_change(change)
        changes.append(ParticipantChange(
            participant=p,
            change=change,
            change_type=change_type,
            change_text=change_text,
        ))
    return changes
