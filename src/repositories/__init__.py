"""Database repository helpers."""

from repositories.definitions import (
    GAME_REPOSITORY,
    MATCH_REPOSITORY,
    PLAYER_REPOSITORY,
    TOURNAMENT_REPOSITORY,
)
from repositories.repository import (
    EntitySnapshot,
    delete_matches_for_player,
    ensure_hall_of_fame_schema,
    fetch_snapshot,
)

__all__ = [
    "GAME_REPOSITORY",
    "MATCH_REPOSITORY",
    "PLAYER_REPOSITORY",
    "TOURNAMENT_REPOSITORY",
    "EntitySnapshot",
    "delete_matches_for_player",
    "ensure_hall_of_fame_schema",
    "fetch_snapshot",
]
