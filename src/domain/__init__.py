"""Hall of Fame domain modules."""

from domain.common import Game, GameType, MatchRecord, Participant, Player, Position, SortBy, Tournament

__all__ = [
    "Game",
    "GameType",
    "MatchRecord",
    "Participant",
    "Player",
    "Position",
    "SortBy",
    "Tournament",
]
