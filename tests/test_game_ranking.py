"""Per-game rankings and best-player selection."""

from __future__ import annotations

from datetime import date

from domain.common import Game, MatchRecord, Participant, Player, SortBy
from domain.stats.ranking import (
    GameSummary,
    get_best_player_for_game,
    get_game_ranking,
    get_games_where_player_is_best,
)

CATAN = Game(id=100, name="Catan", type="board")
UNO = Game(id=200, name="Uno", type="card")
CHESS = Game(id=300, name="Chess", type="board")

ZOE = Player(id=1, name="Zoé")
ANNA = Player(id=2, name="anna")
ELOISE = Player(id=3, name="Éloïse")
MARC = Player(id=4, name="Marc")
PLAYERS = [ZOE, ANNA, ELOISE, MARC]


def _match(match_id: int, game_id: int, *participants: tuple[int, str]) -> MatchRecord:
    return MatchRecord(
        id=match_id,
        game_id=game_id,
        date=date(2025, 5, 10),
        participants=tuple(Participant(player_id=pid, position=pos) for pid, pos in participants),
    )


def test_game_ranking_uses_only_that_game() -> None:
    matches = [
        _match(1, CATAN.id, (ZOE.id, "winner"), (ANNA.id, "last")),
        _match(2, UNO.id, (ANNA.id, "winner"), (ZOE.id, "last")),
        _match(3, UNO.id, (ANNA.id, "winner"), (MARC.id, "last")),
    ]

    ranking = get_game_ranking(UNO.id, matches, PLAYERS)

    # Zoé and Marc tie on every numeric key, so the name decides.
    assert [entry.id for entry in ranking] == [ANNA.id, MARC.id, ZOE.id]
    assert ranking[0].games_played == 2
    assert ranking[1].games_played == ranking[2].games_played == 1


def test_game_without_matches_has_empty_ranking_and_no_best() -> None:
    matches = [_match(1, CATAN.id, (ZOE.id, "winner"), (ANNA.id, "last"))]
    assert get_game_ranking(CHESS.id, matches, PLAYERS) == []
    assert get_best_player_for_game(CHESS.id, matches, PLAYERS) is None


def test_full_points_tie_breaks_on_accent_insensitive_name() -> None:
    matches = [
        _match(1, CATAN.id, (ZOE.id, "winner"), (ELOISE.id, "last")),
        _match(2, CATAN.id, (ELOISE.id, "winner"), (ANNA.id, "last")),
        _match(3, CATAN.id, (ANNA.id, "winner"), (ZOE.id, "last")),
    ]

    ranking = get_game_ranking(CATAN.id, matches, PLAYERS, SortBy.POINTS)

    assert [entry.name for entry in ranking] == ["anna", "Éloïse", "Zoé"]


def test_best_player_is_head_of_game_ranking() -> None:
    matches = [
        _match(1, CATAN.id, (ZOE.id, "winner"), (ANNA.id, "participant"), (MARC.id, "last")),
        _match(2, CATAN.id, (MARC.id, "winner"), (ANNA.id, "participant"), (ZOE.id, "last")),
        _match(3, CATAN.id, (ANNA.id, "winner"), (MARC.id, "last")),
        _match(4, UNO.id, (MARC.id, "winner"), (ZOE.id, "last")),
    ]

    for game in (CATAN, UNO):
        for sort_by in SortBy:
            ranking = get_game_ranking(game.id, matches, PLAYERS, sort_by)
            best = get_best_player_for_game(game.id, matches, PLAYERS, sort_by)
            assert best is not None
            assert best.id == ranking[0].id


def test_best_player_wins_variant() -> None:
    # Anna: 4 participant finishes (4 points, 0 wins). Marc: 1 win, 3 lasts (2 points).
    matches = [
        _match(index, CATAN.id, (ZOE.id, "winner"), (ANNA.id, "participant"), (MARC.id, "last"))
        for index in range(1, 4)
    ]
    matches.append(_match(4, CATAN.id, (MARC.id, "winner"), (ANNA.id, "participant")))

    by_wins = get_best_player_for_game(CATAN.id, matches, [ANNA, MARC], SortBy.WINS)
    by_points = get_best_player_for_game(CATAN.id, matches, [ANNA, MARC], SortBy.POINTS)

    assert by_wins is not None and by_wins.id == MARC.id
    assert by_points is not None and by_points.id == ANNA.id


def test_deleted_player_is_skipped_in_game_ranking() -> None:
    matches = [_match(1, CATAN.id, (ZOE.id, "winner"), (99, "last"))]

    ranking = get_game_ranking(CATAN.id, matches, PLAYERS)

    assert [entry.id for entry in ranking] == [ZOE.id]


def test_games_where_player_is_best_lists_each_game_once() -> None:
    matches = [
        _match(1, CATAN.id, (ZOE.id, "winner"), (ANNA.id, "last")),
        _match(2, UNO.id, (ZOE.id, "winner"), (ANNA.id, "last")),
        _match(3, CHESS.id, (ANNA.id, "winner"), (ZOE.id, "last")),
    ]

    best = get_games_where_player_is_best(ZOE.id, [CATAN, UNO, CHESS], matches, PLAYERS)

    assert best == [
        GameSummary(id=CATAN.id, name="Catan", type="board"),
        GameSummary(id=UNO.id, name="Uno", type="card"),
    ]
    assert get_games_where_player_is_best(MARC.id, [CATAN, UNO, CHESS], matches, PLAYERS) == []
