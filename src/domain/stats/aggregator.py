"""Per-player statistics aggregation over match snapshots."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal

from domain.common import MatchRecord, Position

POSITION_POINTS: dict[str, int] = {
    Position.WINNER.value: 2,
    Position.PARTICIPANT.value: 1,
    Position.LAST.value: 0,
}
MAX_POINTS_PER_MATCH = POSITION_POINTS[Position.WINNER.value]


@dataclass(frozen=True)
class PlayerStats:
    total_points: int = 0
    games_played: int = 0
    wins: int = 0
    participants: int = 0
    lasts: int = 0
    performance: int = 0


EMPTY_STATS = PlayerStats()


def points_for_position(position: str) -> int:
    """Points awarded for one finishing position; unknown positions score 0."""
    return POSITION_POINTS.get(position, 0)


def round_half_away_from_zero(value: float | Decimal) -> int:
    """Round to the nearest integer, sending .5 away from zero (12.5 -> 13, -12.5 -> -13)."""
    decimal_value = value if isinstance(value, Decimal) else Decimal(str(value))
    return int(decimal_value.quantize(Decimal("1"), rounding=ROUND_HALF_UP))


def calculate_performance(total_points: int, games_played: int) -> int:
    """Share of the maximum reachable points, as an integer percentage."""
    if games_played <= 0:
        return 0
    max_points = games_played * MAX_POINTS_PER_MATCH
    return round_half_away_from_zero(Decimal(100 * total_points) / Decimal(max_points))


def filter_matches(
    matches: Iterable[MatchRecord],
    *,
    tournament_id: int | None = None,
    game_id: int | None = None,
) -> list[MatchRecord]:
    """Restrict matches to one tournament and/or one game; None means unscoped."""
    scoped: list[MatchRecord] = []
    for match in matches:
        if tournament_id is not None and match.tournament_id != tournament_id:
            continue
        if game_id is not None and match.game_id != game_id:
            continue
        scoped.append(match)
    return scoped


def compute_stats(
    player_id: int,
    matches: Iterable[MatchRecord],
    *,
    tournament_id: int | None = None,
    game_id: int | None = None,
) -> PlayerStats:
    """Aggregate points and placement tallies for one player within a scope."""
    total_points = 0
    games_played = 0
    wins = 0
    participants = 0
    lasts = 0

    for match in filter_matches(matches, tournament_id=tournament_id, game_id=game_id):
        participation = match.participation_for(player_id)
        if participation is None:
            continue

        games_played += 1
        total_points += points_for_position(participation.position)
        if participation.position == Position.WINNER.value:
            wins += 1
        elif participation.position == Position.PARTICIPANT.value:
            participants += 1
        elif participation.position == Position.LAST.value:
            lasts += 1

    return PlayerStats(
        total_points=total_points,
        games_played=games_played,
        wins=wins,
        participants=participants,
        lasts=lasts,
        performance=calculate_performance(total_points, games_played),
    )


__all__ = [
    "EMPTY_STATS",
    "MAX_POINTS_PER_MATCH",
    "POSITION_POINTS",
    "PlayerStats",
    "calculate_performance",
    "compute_stats",
    "filter_matches",
    "points_for_position",
    "round_half_away_from_zero",
]
