"""Snapshot-backed query surface for rankings and player statistics."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, replace

from domain.common import Game, MatchRecord, Player, SortBy, Tournament
from domain.stats import badges, summary
from domain.stats.aggregator import PlayerStats, compute_stats
from domain.stats.ranking import (
    GameSummary,
    RankedPlayer,
    coerce_sort_by,
    get_best_player_for_game,
    get_game_ranking,
    get_games_where_player_is_best,
    get_ranking,
)


def parse_tournament_filter(value: int | str | None) -> int | None:
    """Normalize a tournament filter selection; None or blank means all tournaments."""
    if value is None:
        return None
    if isinstance(value, int):
        return value
    text = str(value).strip()
    if not text:
        return None
    try:
        return int(text)
    except ValueError as exc:
        raise ValueError(f"Invalid tournament filter: {value!r}") from exc


@dataclass(frozen=True)
class RankingView:
    """Sort order and tournament scope a caller renders rankings with."""

    sort_by: SortBy = SortBy.POINTS
    tournament_id: int | None = None

    def with_sort_order(self, sort_by: SortBy | str | None) -> RankingView:
        return replace(self, sort_by=coerce_sort_by(sort_by))

    def with_tournament_filter(self, tournament_id: int | str | None) -> RankingView:
        return replace(self, tournament_id=parse_tournament_filter(tournament_id))


class StatsEngine:
    """Holds the latest entity snapshot and recomputes every query against it."""

    def __init__(self) -> None:
        self._players: tuple[Player, ...] = ()
        self._matches: tuple[MatchRecord, ...] = ()
        self._games: tuple[Game, ...] = ()
        self._tournaments: tuple[Tournament, ...] = ()

    def set_data(
        self,
        players: Iterable[Player] | None,
        matches: Iterable[MatchRecord] | None,
        *,
        games: Iterable[Game] | None = None,
        tournaments: Iterable[Tournament] | None = None,
    ) -> None:
        """Replace the snapshot wholesale; omitted collections become empty."""
        self._players = tuple(players or ())
        self._matches = tuple(matches or ())
        self._games = tuple(games or ())
        self._tournaments = tuple(tournaments or ())

    @property
    def players(self) -> tuple[Player, ...]:
        return self._players

    @property
    def matches(self) -> tuple[MatchRecord, ...]:
        return self._matches

    @property
    def games(self) -> tuple[Game, ...]:
        return self._games

    @property
    def tournaments(self) -> tuple[Tournament, ...]:
        return self._tournaments

    def calculate_player_stats(self, player_id: int, tournament_id: int | None = None) -> PlayerStats:
        return compute_stats(player_id, self._matches, tournament_id=tournament_id)

    def calculate_player_stats_for_game(self, player_id: int, game_id: int) -> PlayerStats:
        return compute_stats(player_id, self._matches, game_id=game_id)

    def get_ranking(
        self,
        sort_by: SortBy | str | None = SortBy.POINTS,
        tournament_id: int | None = None,
    ) -> list[RankedPlayer]:
        return get_ranking(self._players, self._matches, sort_by, tournament_id)

    def get_view_ranking(self, view: RankingView) -> list[RankedPlayer]:
        return self.get_ranking(view.sort_by, view.tournament_id)

    def get_game_ranking(self, game_id: int, sort_by: SortBy | str | None = SortBy.POINTS) -> list[RankedPlayer]:
        return get_game_ranking(game_id, self._matches, self._players, sort_by)

    def get_best_player_for_game(
        self,
        game_id: int,
        sort_by: SortBy | str | None = SortBy.POINTS,
    ) -> RankedPlayer | None:
        return get_best_player_for_game(game_id, self._matches, self._players, sort_by)

    def get_best_players_for_games(self) -> dict[int, RankedPlayer]:
        """Points-ranking head for every game that has at least one match."""
        best: dict[int, RankedPlayer] = {}
        for game in self._games:
            entry = self.get_best_player_for_game(game.id, SortBy.POINTS)
            if entry is not None:
                best[game.id] = entry
        return best

    def get_games_where_player_is_best(
        self,
        player_id: int,
        games: Iterable[Game] | None = None,
    ) -> list[GameSummary]:
        target_games = self._games if games is None else tuple(games)
        return get_games_where_player_is_best(player_id, target_games, self._matches, self._players)

    def get_podium(self, view: RankingView, size: int = badges.PODIUM_SIZE) -> list[badges.PodiumEntry]:
        return badges.podium(self.get_view_ranking(view), size)

    def get_best_performer(self, tournament_id: int | None = None) -> RankedPlayer | None:
        return badges.best_performer(self._players, self._matches, tournament_id)

    def get_player_badges(self, player_id: int) -> badges.PlayerBadges:
        return badges.player_badges(
            player_id,
            players=self._players,
            matches=self._matches,
            games=self._games,
            tournaments=self._tournaments,
        )

    def get_overall_stats(self) -> summary.OverallStats:
        return summary.overall_stats(self.get_ranking(SortBy.POINTS), len(self._matches))

    def get_top_players_by_criteria(self, criteria: str, limit: int = 10) -> list[RankedPlayer]:
        return summary.top_players_by_criteria(self.get_ranking(SortBy.POINTS), criteria, limit)

    def search_players_in_stats(self, term: str) -> list[RankedPlayer]:
        return summary.search_players(self.get_ranking(SortBy.POINTS), term)

    def has_stats_data(self) -> bool:
        return bool(self._players) and bool(self._matches)

    def get_player_position(self, player_id: int, view: RankingView | None = None) -> int:
        return summary.player_position(self.get_view_ranking(view or RankingView()), player_id)

    def get_position_change(
        self,
        player_id: int,
        view: RankingView,
        previous_sort_by: SortBy | str,
    ) -> int:
        """Position movement when switching from previous_sort_by to the view's sort order."""
        previous = self.get_view_ranking(view.with_sort_order(previous_sort_by))
        return summary.position_change(player_id, self.get_view_ranking(view), previous)

    def get_match_statistics(self) -> summary.MatchStatistics:
        return summary.match_statistics(self._matches)


__all__ = ["RankingView", "StatsEngine", "parse_tournament_filter"]
