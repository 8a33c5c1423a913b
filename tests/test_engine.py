"""StatsEngine snapshot handling and view-driven queries."""

from __future__ import annotations

from datetime import date

import pytest

from domain.common import Game, MatchRecord, Participant, Player, SortBy, Tournament
from domain.stats.aggregator import EMPTY_STATS
from domain.stats.engine import RankingView, StatsEngine, parse_tournament_filter

IRIS = Player(id=1, name="Iris")
JULES = Player(id=2, name="Jules")
KARIM = Player(id=3, name="Karim")

TAROT = Game(id=10, name="Tarot", type="card")
MOLKKY = Game(id=20, name="Molkky", type="garden")
EMPTY_GAME = Game(id=30, name="Go", type="board")

AUTUMN = Tournament(id=500, name="Autumn", description="Autumn league", start_date=date(2025, 9, 1))


def _match(
    match_id: int,
    game_id: int,
    *participants: tuple[int, str],
    tournament_id: int | None = None,
) -> MatchRecord:
    return MatchRecord(
        id=match_id,
        game_id=game_id,
        date=date(2025, 9, 15),
        tournament_id=tournament_id,
        participants=tuple(Participant(player_id=pid, position=pos) for pid, pos in participants),
    )


MATCHES = [
    _match(1, TAROT.id, (IRIS.id, "winner"), (JULES.id, "participant"), (KARIM.id, "last")),
    _match(2, TAROT.id, (JULES.id, "winner"), (IRIS.id, "last"), tournament_id=AUTUMN.id),
    _match(3, MOLKKY.id, (KARIM.id, "winner"), (JULES.id, "last"), tournament_id=AUTUMN.id),
]


@pytest.fixture
def engine() -> StatsEngine:
    stats_engine = StatsEngine()
    stats_engine.set_data(
        [IRIS, JULES, KARIM],
        MATCHES,
        games=[TAROT, MOLKKY, EMPTY_GAME],
        tournaments=[AUTUMN],
    )
    return stats_engine


def test_set_data_twice_gives_identical_rankings(engine: StatsEngine) -> None:
    first = engine.get_ranking(SortBy.POINTS)
    engine.set_data(
        [IRIS, JULES, KARIM],
        MATCHES,
        games=[TAROT, MOLKKY, EMPTY_GAME],
        tournaments=[AUTUMN],
    )
    second = engine.get_ranking(SortBy.POINTS)

    assert first == second
    assert engine.games == (TAROT, MOLKKY, EMPTY_GAME)


def test_set_data_replaces_snapshot_wholesale(engine: StatsEngine) -> None:
    engine.set_data([IRIS], MATCHES[:1])
    assert [entry.id for entry in engine.get_ranking()] == [IRIS.id]
    assert engine.games == ()
    assert engine.tournaments == ()
    assert engine.get_best_players_for_games() == {}
    engine.set_data(None, None)
    assert engine.get_ranking() == []
    assert not engine.has_stats_data()


def test_removed_player_does_not_break_queries(engine: StatsEngine) -> None:
    engine.set_data([IRIS, JULES], MATCHES)

    assert KARIM.id not in {entry.id for entry in engine.get_ranking()}
    assert engine.calculate_player_stats(KARIM.id).games_played == 2
    assert engine.calculate_player_stats(999) == EMPTY_STATS
    assert engine.get_best_player_for_game(MOLKKY.id) is not None


def test_tournament_scoped_stats(engine: StatsEngine) -> None:
    stats = engine.calculate_player_stats(JULES.id, AUTUMN.id)
    assert (stats.total_points, stats.games_played, stats.wins) == (2, 2, 1)
    assert engine.calculate_player_stats_for_game(JULES.id, TAROT.id).total_points == 3


def test_view_ranking_follows_sort_and_filter(engine: StatsEngine) -> None:
    view = RankingView().with_sort_order("performance").with_tournament_filter(str(AUTUMN.id))

    assert view.sort_by is SortBy.PERFORMANCE
    assert view.tournament_id == AUTUMN.id
    assert engine.get_view_ranking(view) == engine.get_ranking(SortBy.PERFORMANCE, AUTUMN.id)
    assert [entry.player.id for entry in engine.get_podium(view, 2)] == [KARIM.id, JULES.id]


def test_best_players_for_games_skip_games_without_matches(engine: StatsEngine) -> None:
    best = engine.get_best_players_for_games()

    assert set(best) == {TAROT.id, MOLKKY.id}
    assert best[MOLKKY.id].id == KARIM.id
    assert engine.get_best_player_for_game(EMPTY_GAME.id) is None


def test_games_where_player_is_best_defaults_to_snapshot_games(engine: StatsEngine) -> None:
    assert [game.name for game in engine.get_games_where_player_is_best(KARIM.id)] == ["Molkky"]
    assert engine.get_games_where_player_is_best(KARIM.id, [TAROT]) == []


def test_player_position_and_badges(engine: StatsEngine) -> None:
    assert engine.get_player_position(JULES.id) == 1
    assert engine.get_player_position(999) == -1

    badges = engine.get_player_badges(KARIM.id)
    assert [badge.tournament_name for badge in badges.tournament_badges] == ["Autumn"]


def test_parse_tournament_filter() -> None:
    assert parse_tournament_filter(None) is None
    assert parse_tournament_filter("") is None
    assert parse_tournament_filter("  42 ") == 42
    assert parse_tournament_filter(7) == 7
    with pytest.raises(ValueError):
        parse_tournament_filter("spring")
