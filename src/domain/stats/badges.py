"""Podium, best-performer, best-at-game and tournament podium badges."""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from dataclasses import dataclass

from domain.common import Game, MatchRecord, Player, SortBy, Tournament
from domain.stats.ranking import (
    GameSummary,
    RankedPlayer,
    get_games_where_player_is_best,
    get_ranking,
)

PODIUM_SIZE = 3


@dataclass(frozen=True)
class PodiumEntry:
    position: int
    player: RankedPlayer


@dataclass(frozen=True)
class TournamentBadge:
    tournament_id: int
    tournament_name: str
    position: int


@dataclass(frozen=True)
class PlayerBadges:
    """Independent badge sets held by one player."""

    player_id: int
    podium_position: int | None
    best_performance: bool
    best_games: tuple[GameSummary, ...]
    tournament_badges: tuple[TournamentBadge, ...]

    def has_any(self) -> bool:
        return (
            self.podium_position is not None
            or self.best_performance
            or bool(self.best_games)
            or bool(self.tournament_badges)
        )


def podium(ranking: Sequence[RankedPlayer], size: int = PODIUM_SIZE) -> list[PodiumEntry]:
    return [
        PodiumEntry(position=index, player=entry)
        for index, entry in enumerate(ranking[:size], start=1)
    ]


def podium_position(player_id: int, ranking: Sequence[RankedPlayer]) -> int | None:
    """First, second or third place in the ranking; None outside the top three."""
    for entry in podium(ranking, PODIUM_SIZE):
        if entry.player.id == player_id:
            return entry.position
    return None


def best_performer(
    players: Iterable[Player],
    matches: Sequence[MatchRecord],
    tournament_id: int | None = None,
) -> RankedPlayer | None:
    ranking = get_ranking(players, matches, SortBy.PERFORMANCE, tournament_id)
    return ranking[0] if ranking else None


def tournament_podium_badges(
    player_id: int,
    tournaments: Iterable[Tournament],
    players: Sequence[Player],
    matches: Sequence[MatchRecord],
) -> list[TournamentBadge]:
    """One badge per tournament whose points ranking has the player in the top three."""
    badges: list[TournamentBadge] = []
    for tournament in tournaments:
        ranking = get_ranking(players, matches, SortBy.POINTS, tournament.id)
        position = podium_position(player_id, ranking)
        if position is not None:
            badges.append(
                TournamentBadge(
                    tournament_id=tournament.id,
                    tournament_name=tournament.name,
                    position=position,
                )
            )
    return badges


def player_badges(
    player_id: int,
    *,
    players: Sequence[Player],
    matches: Sequence[MatchRecord],
    games: Iterable[Game],
    tournaments: Iterable[Tournament],
) -> PlayerBadges:
    """Collect every badge one player holds across the global, game and tournament scopes."""
    points_ranking = get_ranking(players, matches, SortBy.POINTS)
    performer = best_performer(players, matches)
    return PlayerBadges(
        player_id=player_id,
        podium_position=podium_position(player_id, points_ranking),
        best_performance=performer is not None and performer.id == player_id,
        best_games=tuple(get_games_where_player_is_best(player_id, games, matches, players)),
        tournament_badges=tuple(
            tournament_podium_badges(player_id, tournaments, players, matches)
        ),
    )


__all__ = [
    "PODIUM_SIZE",
    "PlayerBadges",
    "PodiumEntry",
    "TournamentBadge",
    "best_performer",
    "player_badges",
    "podium",
    "podium_position",
    "tournament_podium_badges",
]
