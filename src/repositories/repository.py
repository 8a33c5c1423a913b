"""Snapshot-level persistence helpers used by the orchestration layer."""

from __future__ import annotations

from dataclasses import dataclass

from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session

from domain.common import Game, MatchRecord, Player, Tournament
from models.base import Base
from repositories.definitions import (
    GAME_REPOSITORY,
    MATCH_REPOSITORY,
    PLAYER_REPOSITORY,
    TOURNAMENT_REPOSITORY,
)


@dataclass(frozen=True)
class EntitySnapshot:
    """Every entity collection, read in one session."""

    players: tuple[Player, ...]
    games: tuple[Game, ...]
    matches: tuple[MatchRecord, ...]
    tournaments: tuple[Tournament, ...]


def ensure_hall_of_fame_schema(engine: Engine) -> None:
    """Create players, games, tournaments, matches and participants tables if missing."""
    Base.metadata.create_all(bind=engine, checkfirst=True)


def fetch_snapshot(session: Session) -> EntitySnapshot:
    return EntitySnapshot(
        players=tuple(PLAYER_REPOSITORY.fetch_all(session)),
        games=tuple(GAME_REPOSITORY.fetch_all(session)),
        matches=tuple(MATCH_REPOSITORY.fetch_all(session)),
        tournaments=tuple(TOURNAMENT_REPOSITORY.fetch_all(session)),
    )


def delete_matches_for_player(session: Session, player_id: int) -> list[int]:
    """Delete every match the player took part in; returns the removed match ids."""
    match_ids = MATCH_REPOSITORY.match_ids_for_player(session, player_id)
    for match_id in match_ids:
        MATCH_REPOSITORY.delete(session, match_id)
    return match_ids
