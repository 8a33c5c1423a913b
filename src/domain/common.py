"""Shared types for the Hall of Fame statistics engine."""

from __future__ import annotations

import unicodedata
from dataclasses import dataclass
from datetime import date
from enum import Enum


class Position(str, Enum):
    """Finishing classification of one participant in a match."""

    WINNER = "winner"
    PARTICIPANT = "participant"
    LAST = "last"


class GameType(str, Enum):
    BOARD = "board"
    CARD = "card"
    GARDEN = "garden"
    SPORT = "sport"
    OTHER = "other"


class SortBy(str, Enum):
    """Ranking sort criteria."""

    POINTS = "points"
    PERFORMANCE = "performance"
    WINS = "wins"


POSITION_ORDER: dict[str, int] = {
    Position.WINNER.value: 1,
    Position.PARTICIPANT.value: 2,
    Position.LAST.value: 3,
}


@dataclass(frozen=True)
class Player:
    id: int
    name: str
    avatar: str = ""


@dataclass(frozen=True)
class Game:
    id: int
    name: str
    type: str = GameType.OTHER.value


@dataclass(frozen=True)
class Tournament:
    """Named date window; end_date None means the tournament is still running."""

    id: int
    name: str
    description: str
    start_date: date
    end_date: date | None = None

    def contains(self, day: date) -> bool:
        if day < self.start_date:
            return False
        if self.end_date is not None and day > self.end_date:
            return False
        return True


@dataclass(frozen=True)
class Participant:
    player_id: int
    position: str


@dataclass(frozen=True)
class MatchRecord:
    """Canonical match payload consumed by the statistics engine."""

    id: int
    game_id: int
    date: date
    participants: tuple[Participant, ...]
    tournament_id: int | None = None

    def participation_for(self, player_id: int) -> Participant | None:
        for participant in self.participants:
            if participant.player_id == player_id:
                return participant
        return None

    def player_ids(self) -> tuple[int, ...]:
        return tuple(participant.player_id for participant in self.participants)


def name_sort_key(name: str) -> str:
    """Case- and accent-insensitive key used for display-name ordering."""
    decomposed = unicodedata.normalize("NFKD", name)
    stripped = "".join(char for char in decomposed if not unicodedata.combining(char))
    return stripped.casefold()


__all__ = [
    "Game",
    "GameType",
    "MatchRecord",
    "POSITION_ORDER",
    "Participant",
    "Player",
    "Position",
    "SortBy",
    "Tournament",
    "name_sort_key",
]
