"""Ranking computation with deterministic tie-break chains."""

from __future__ import annotations

from collections.abc import Callable, Iterable, Sequence
from dataclasses import dataclass

from domain.common import Game, MatchRecord, Player, SortBy, name_sort_key
from domain.stats.aggregator import PlayerStats, compute_stats, filter_matches


@dataclass(frozen=True)
class RankedPlayer:
    """A player record merged with the statistics of one scope."""

    player: Player
    stats: PlayerStats

    @property
    def id(self) -> int:
        return self.player.id

    @property
    def name(self) -> str:
        return self.player.name

    @property
    def avatar(self) -> str:
        return self.player.avatar

    @property
    def total_points(self) -> int:
        return self.stats.total_points

    @property
    def games_played(self) -> int:
        return self.stats.games_played

    @property
    def wins(self) -> int:
        return self.stats.wins

    @property
    def participants(self) -> int:
        return self.stats.participants

    @property
    def lasts(self) -> int:
        return self.stats.lasts

    @property
    def performance(self) -> int:
        return self.stats.performance


SortKey = Callable[[RankedPlayer], tuple]


@dataclass(frozen=True)
class GameSummary:
    id: int
    name: str
    type: str


def coerce_sort_by(sort_by: SortBy | str | None) -> SortBy:
    """Map user-facing sort values onto SortBy; unknown values fall back to points."""
    if isinstance(sort_by, SortBy):
        return sort_by
    try:
        return SortBy(str(sort_by).strip().lower())
    except ValueError:
        return SortBy.POINTS


def _points_key(entry: RankedPlayer) -> tuple:
    return (-entry.total_points, -entry.wins, entry.games_played)


def _performance_key(entry: RankedPlayer) -> tuple:
    return (-entry.performance, -entry.total_points, -entry.wins, entry.games_played)


def _wins_key(entry: RankedPlayer) -> tuple:
    return (-entry.wins, -entry.total_points, -entry.performance, entry.games_played)


def _game_points_key(entry: RankedPlayer) -> tuple:
    return (*_points_key(entry), name_sort_key(entry.name))


_GLOBAL_SORT_KEYS: dict[SortBy, SortKey] = {
    SortBy.POINTS: _points_key,
    SortBy.PERFORMANCE: _performance_key,
    SortBy.WINS: _wins_key,
}

# Game rankings break full points ties by display name; the global ranking does not.
_GAME_SORT_KEYS: dict[SortBy, SortKey] = {
    SortBy.POINTS: _game_points_key,
    SortBy.PERFORMANCE: _performance_key,
    SortBy.WINS: _wins_key,
}


def sort_ranking(entries: Iterable[RankedPlayer], sort_by: SortBy | str | None) -> list[RankedPlayer]:
    """Stable sort of ranked entries using the global comparator family."""
    return sorted(entries, key=_GLOBAL_SORT_KEYS[coerce_sort_by(sort_by)])


def get_ranking(
    players: Iterable[Player],
    matches: Sequence[MatchRecord],
    sort_by: SortBy | str | None = SortBy.POINTS,
    tournament_id: int | None = None,
) -> list[RankedPlayer]:
    """Rank every player who played at least once within the tournament scope."""
    scoped_matches = filter_matches(matches, tournament_id=tournament_id)
    entries = [
        RankedPlayer(player=player, stats=compute_stats(player.id, scoped_matches))
        for player in players
    ]
    return sort_ranking((entry for entry in entries if entry.games_played > 0), sort_by)


def players_in_matches(matches: Iterable[MatchRecord]) -> list[int]:
    """Distinct participant ids in first-appearance order."""
    seen: dict[int, None] = {}
    for match in matches:
        for player_id in match.player_ids():
            seen.setdefault(player_id, None)
    return list(seen)


def get_game_ranking(
    game_id: int,
    matches: Sequence[MatchRecord],
    players: Iterable[Player],
    sort_by: SortBy | str | None = SortBy.POINTS,
) -> list[RankedPlayer]:
    """Rank the players of one game title by their results in that game only."""
    game_matches = filter_matches(matches, game_id=game_id)
    if not game_matches:
        return []

    players_by_id = {player.id: player for player in players}
    entries: list[RankedPlayer] = []
    for player_id in players_in_matches(game_matches):
        player = players_by_id.get(player_id)
        if player is None:
            continue
        stats = compute_stats(player_id, game_matches)
        if stats.games_played > 0:
            entries.append(RankedPlayer(player=player, stats=stats))

    return sorted(entries, key=_GAME_SORT_KEYS[coerce_sort_by(sort_by)])


def get_best_player_for_game(
    game_id: int,
    matches: Sequence[MatchRecord],
    players: Iterable[Player],
    sort_by: SortBy | str | None = SortBy.POINTS,
) -> RankedPlayer | None:
    ranking = get_game_ranking(game_id, matches, players, sort_by)
    return ranking[0] if ranking else None


def get_games_where_player_is_best(
    player_id: int,
    games: Iterable[Game],
    matches: Sequence[MatchRecord],
    players: Sequence[Player],
) -> list[GameSummary]:
    """Games whose points-ranking head is the given player."""
    best_games: list[GameSummary] = []
    for game in games:
        best = get_best_player_for_game(game.id, matches, players, SortBy.POINTS)
        if best is not None and best.id == player_id:
            best_games.append(GameSummary(id=game.id, name=game.name, type=game.type))
    return best_games


__all__ = [
    "GameSummary",
    "RankedPlayer",
    "coerce_sort_by",
    "get_best_player_for_game",
    "get_game_ranking",
    "get_games_where_player_is_best",
    "get_ranking",
    "players_in_matches",
    "sort_ranking",
]
