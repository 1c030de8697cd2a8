"""
Value types for players, round participants and recorded rounds.

All records are frozen; updates go through ``dataclasses.replace`` and
produce new objects. ``to_dict``/``from_dict`` use the JSON keys of the
stored ``players`` and ``rounds`` blobs.
"""

from dataclasses import dataclass, field
from datetime import date
from enum import Enum
from typing import Any, Dict, Optional, Tuple

from bagtag.utils import format_date, parse_date


@dataclass(frozen=True)
class Player:
    """A member of the group holding one bagtag.

    Attributes
    ----------
    id : str
        Opaque unique identifier.
    name : str
        Display name (non-empty, trimmed).
    current_bagtag : int
        Rank currently held; unique across the roster.
    join_date : date
        Day the player was added.
    """

    id: str
    name: str
    current_bagtag: int
    join_date: date

    def to_dict(self) -> Dict[str, Any]:
        """Serialize player to dictionary."""
        return {
            "id": self.id,
            "name": self.name,
            "currentBagtag": self.current_bagtag,
            "joinDate": format_date(self.join_date),
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Player":
        """Deserialize player from dictionary."""
        return cls(
            id=str(data["id"]),
            name=data["name"],
            current_bagtag=int(data["currentBagtag"]),
            join_date=parse_date(data["joinDate"]),
        )


@dataclass(frozen=True)
class Participant:
    """A player's entry in a single round.

    ``new_bagtag`` stays ``None`` until the round has been redistributed.
    """

    player_id: str
    player_name: str
    current_bagtag: int
    old_bagtag: int
    score: Optional[int] = None
    new_bagtag: Optional[int] = None

    def to_dict(self) -> Dict[str, Any]:
        """Serialize participant to dictionary."""
        return {
            "playerId": self.player_id,
            "playerName": self.player_name,
            "currentBagtag": self.current_bagtag,
            "oldBagtag": self.old_bagtag,
            "score": self.score,
            "newBagtag": self.new_bagtag,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Participant":
        """Deserialize participant from dictionary."""
        old_bagtag = int(data["oldBagtag"])
        return cls(
            player_id=str(data["playerId"]),
            player_name=data["playerName"],
            current_bagtag=int(data.get("currentBagtag", old_bagtag)),
            old_bagtag=old_bagtag,
            score=data.get("score"),
            new_bagtag=data.get("newBagtag"),
        )


@dataclass(frozen=True)
class Round:
    """One recorded round; participants are ordered by new bagtag."""

    id: str
    date: date
    participants: Tuple[Participant, ...] = field(default_factory=tuple)

    def to_dict(self) -> Dict[str, Any]:
        """Serialize round to dictionary."""
        return {
            "id": self.id,
            "date": format_date(self.date),
            "participants": [p.to_dict() for p in self.participants],
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Round":
        """Deserialize round from dictionary."""
        return cls(
            id=str(data["id"]),
            date=parse_date(data["date"]),
            participants=tuple(
                Participant.from_dict(p) for p in data.get("participants", [])
            ),
        )


class ChangeType(str, Enum):
    """Direction of a bagtag change; a lower bagtag is an improvement."""

    UP = "up"
    DOWN = "down"
    SAME = "same"


@dataclass(frozen=True)
class ParticipantChange:
    """A redistributed participant together with its bagtag delta."""

    participant: Participant
    change: int
    change_type: ChangeType
    change_text: str
