"""
Round History Analytics

This module turns the stored round history into tables for display:
- Per-round statistics (participants, best/worst/average score)
- A flat participant table across all rounds
- A bagtag timeline per player for charting

Usage:
    from bagtag.history import rounds_to_frame, round_statistics
"""

from typing import Iterable, List, Optional

import pandas as pd

from bagtag.core.changes import get_bagtag_changes
from bagtag.core.models import Participant, Round

HISTORY_COLUMNS = [
    'round_id', 'date', 'player_id', 'player_name',
    'score', 'old_bagtag', 'new_bagtag', 'change',
]


def sort_rounds(rounds: Iterable[Round]) -> List[Round]:
    """Return rounds newest first; rounds on the same day keep their order."""
    return sorted(rounds, key=lambda r: r.date, reverse=True)


def round_winner(round_: Round) -> Optional[Participant]:
    """Return the participant leaving the round with the lowest bagtag."""
    if not round_.participants:
        return None
    return min(round_.participants, key=lambda p: p.new_bagtag)


def round_statistics(round_: Round) -> dict:
    """
    Summarize the scores of a single round.

    Returns:
        Dictionary with participants, best_score, worst_score and
        average_score (rounded to the nearest integer). Score fields are
        None for a round without participants.
    """
    scores = pd.Series([p.score for p in round_.participants], dtype='float64')
    if scores.empty:
        return {'participants': 0, 'best_score': None, 'worst_score': None, 'average_score': None}

    return {
        'participants': len(scores),
        'best_score': int(scores.min()),
        'worst_score': int(scores.max()),
        'average_score': int(round(scores.mean())),
    }


def _participant_frame(rounds: Iterable[Round]) -> pd.DataFrame:
    """One row per participant per round, in the order the rounds are given."""
    rows = []
    for round_ in rounds:
        for c in get_bagtag_changes(round_.participants):
            p = c.participant
            rows.append({
                'round_id': round_.id,
                'date': round_.date,
                'player_id': p.player_id,
                'player_name': p.player_name,
                'score': p.score,
                'old_bagtag': p.old_bagtag,
                'new_bagtag': p.new_bagtag,
                'change': c.change,
            })

    if not rows:
        return pd.DataFrame(columns=HISTORY_COLUMNS)

    df = pd.DataFrame(rows, columns=HISTORY_COLUMNS)
    df['date'] = pd.to_datetime(df['date'])
    return df


def rounds_to_frame(rounds: Iterable[Round]) -> pd.DataFrame:
    """
    Flatten rounds into one row per participant per round.

    Returns:
        DataFrame with HISTORY_COLUMNS, sorted by date and new bagtag
    """
    df = _participant_frame(rounds)
    return df.sort_values(['date', 'new_bagtag'], kind='stable').reset_index(drop=True)


def bagtag_timeline(rounds: Iterable[Round]) -> pd.DataFrame:
    """
    Bagtag held by each player after every day they played.

    Args:
        rounds: Round history as stored (newest first). When a player
            appears in several rounds on one day, the newest one counts.

    Returns:
        DataFrame with columns date, player_name, bagtag sorted by date
    """
    df = _participant_frame(rounds)
    if df.empty:
        return pd.DataFrame(columns=['date', 'player_name', 'bagtag'])

    timeline = (
        df.rename(columns={'new_bagtag': 'bagtag'})
        .drop_duplicates(subset=['date', 'player_id'], keep='first')
        [['date', 'player_name', 'bagtag']]
    )
    return timeline.sort_values(['date', 'bagtag'], kind='stable').reset_index(drop=True)
