"""ORM models."""

from models.base import Base
from models.game import GameRow
from models.match import MatchParticipantRow, MatchRow
from models.player import PlayerRow
from models.tournament import TournamentRow

__all__ = [
    "Base",
    "GameRow",
    "MatchParticipantRow",
    "MatchRow",
    "PlayerRow",
    "TournamentRow",
]
