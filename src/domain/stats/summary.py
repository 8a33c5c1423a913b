"""Aggregate views over rankings and match collections."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal

from domain.common import MatchRecord
from domain.stats.aggregator import round_half_away_from_zero
from domain.stats.ranking import RankedPlayer


@dataclass(frozen=True)
class OverallStats:
    total_players: int
    total_matches: int
    average_points: int
    top_player: RankedPlayer | None
    most_active_player: RankedPlayer | None


@dataclass(frozen=True)
class MatchStatistics:
    total_matches: int
    average_participants: float
    games_played: int
    players_involved: int


_CRITERIA_KEYS = {
    "wins": lambda entry: entry.wins,
    "games_played": lambda entry: entry.games_played,
    "performance": lambda entry: entry.performance,
}

_PERFORMANCE_TIERS = (
    (80, "excellent"),
    (60, "good"),
    (40, "average"),
    (20, "poor"),
)


def overall_stats(ranking: Sequence[RankedPlayer], total_matches: int) -> OverallStats:
    """Headline numbers for a points ranking."""
    if not ranking:
        return OverallStats(
            total_players=0,
            total_matches=0,
            average_points=0,
            top_player=None,
            most_active_player=None,
        )

    total_points = sum(entry.total_points for entry in ranking)
    most_active = ranking[0]
    for entry in ranking[1:]:
        if entry.games_played > most_active.games_played:
            most_active = entry

    return OverallStats(
        total_players=len(ranking),
        total_matches=total_matches,
        average_points=round_half_away_from_zero(Decimal(total_points) / Decimal(len(ranking))),
        top_player=ranking[0],
        most_active_player=most_active,
    )


def top_players_by_criteria(
    ranking: Sequence[RankedPlayer],
    criteria: str,
    limit: int = 10,
) -> list[RankedPlayer]:
    """Re-sort a ranking by a single descending criterion; unknown criteria use points."""
    key = _CRITERIA_KEYS.get(criteria, lambda entry: entry.total_points)
    return sorted(ranking, key=key, reverse=True)[:limit]


def search_players(ranking: Sequence[RankedPlayer], term: str) -> list[RankedPlayer]:
    needle = term.strip().lower()
    return [entry for entry in ranking if needle in entry.name.lower()]


def player_position(ranking: Sequence[RankedPlayer], player_id: int) -> int:
    """1-based ranking position, or -1 when the player is not ranked."""
    for index, entry in enumerate(ranking, start=1):
        if entry.id == player_id:
            return index
    return -1


def position_change(
    player_id: int,
    current: Sequence[RankedPlayer],
    previous: Sequence[RankedPlayer],
) -> int:
    """Positive when the player moved up between the previous and current ranking."""
    current_position = player_position(current, player_id)
    previous_position = player_position(previous, player_id)
    if current_position == -1 or previous_position == -1:
        return 0
    return previous_position - current_position


def performance_tier(performance: int) -> str:
    for threshold, label in _PERFORMANCE_TIERS:
        if performance >= threshold:
            return label
    return "very_poor"


def match_statistics(matches: Sequence[MatchRecord]) -> MatchStatistics:
    if not matches:
        return MatchStatistics(
            total_matches=0,
            average_participants=0.0,
            games_played=0,
            players_involved=0,
        )

    total_participants = sum(len(match.participants) for match in matches)
    return MatchStatistics(
        total_matches=len(matches),
        average_participants=float(
            (Decimal(total_participants) / Decimal(len(matches))).quantize(
                Decimal("0.01"), rounding=ROUND_HALF_UP
            )
        ),
        games_played=len({match.game_id for match in matches}),
        players_involved=len({pid for match in matches for pid in match.player_ids()}),
    )


__all__ = [
    "MatchStatistics",
    "OverallStats",
    "match_statistics",
    "overall_stats",
    "performance_tier",
    "player_position",
    "position_change",
    "search_players",
    "top_players_by_criteria",
]
