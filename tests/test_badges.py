"""Podium, best-performer, best-at-game and tournament podium badges."""

from __future__ import annotations

from datetime import date

from domain.common import Game, MatchRecord, Participant, Player, SortBy, Tournament
from domain.stats.badges import (
    PODIUM_SIZE,
    best_performer,
    player_badges,
    podium,
    podium_position,
    tournament_podium_badges,
)
from domain.stats.engine import RankingView, StatsEngine
from domain.stats.ranking import get_ranking

ANA = Player(id=1, name="Ana")
BEN = Player(id=2, name="Ben")
CLA = Player(id=3, name="Cla")
DAN = Player(id=4, name="Dan")
PLAYERS = [ANA, BEN, CLA, DAN]

DOMINO = Game(id=10, name="Domino", type="board")
PETANQUE = Game(id=20, name="Petanque", type="garden")

SPRING = Tournament(
    id=100,
    name="Spring",
    description="Spring cup",
    start_date=date(2025, 3, 1),
    end_date=date(2025, 5, 31),
)
SUMMER = Tournament(id=200, name="Summer", description="Summer cup", start_date=date(2025, 6, 1))


def _match(
    match_id: int,
    game_id: int,
    *participants: tuple[int, str],
    tournament_id: int | None = None,
) -> MatchRecord:
    return MatchRecord(
        id=match_id,
        game_id=game_id,
        date=date(2025, 4, 1) if tournament_id == SPRING.id else date(2025, 7, 1),
        tournament_id=tournament_id,
        participants=tuple(Participant(player_id=pid, position=pos) for pid, pos in participants),
    )


MATCHES = [
    _match(1, DOMINO.id, (ANA.id, "winner"), (BEN.id, "participant"), (CLA.id, "last"), tournament_id=SPRING.id),
    _match(2, DOMINO.id, (ANA.id, "winner"), (CLA.id, "participant"), (BEN.id, "last"), tournament_id=SPRING.id),
    _match(3, PETANQUE.id, (DAN.id, "winner"), (ANA.id, "last"), tournament_id=SUMMER.id),
    _match(4, PETANQUE.id, (BEN.id, "winner"), (DAN.id, "participant"), (ANA.id, "last"), tournament_id=SUMMER.id),
]


def test_podium_is_first_three_of_ranking() -> None:
    ranking = get_ranking(PLAYERS, MATCHES, SortBy.POINTS)

    entries = podium(ranking)

    assert [entry.position for entry in entries] == [1, 2, 3]
    assert [entry.player.id for entry in entries] == [entry.id for entry in ranking[:3]]
    assert podium_position(ranking[3].id, ranking) is None


def test_podium_shorter_than_three_when_few_players() -> None:
    ranking = get_ranking(PLAYERS, MATCHES[:1], SortBy.POINTS)
    assert len(podium(ranking, 5)) == 3
    assert len(podium(get_ranking(PLAYERS, MATCHES[2:3]), 3)) == 2


def test_best_performer_is_head_of_performance_ranking() -> None:
    best = best_performer(PLAYERS, MATCHES)
    assert best is not None
    # Dan: 3 points from 2 matches.
    assert best.id == DAN.id
    assert best_performer(PLAYERS, []) is None


def test_tournament_podium_badges_are_independent_per_tournament() -> None:
    ana_badges = tournament_podium_badges(ANA.id, [SPRING, SUMMER], PLAYERS, MATCHES)
    dan_badges = tournament_podium_badges(DAN.id, [SPRING, SUMMER], PLAYERS, MATCHES)

    assert [(badge.tournament_name, badge.position) for badge in ana_badges] == [
        ("Spring", 1),
        ("Summer", 3),
    ]
    assert [(badge.tournament_name, badge.position) for badge in dan_badges] == [("Summer", 1)]


def test_player_badges_collects_every_badge_kind() -> None:
    badges = player_badges(
        DAN.id,
        players=PLAYERS,
        matches=MATCHES,
        games=[DOMINO, PETANQUE],
        tournaments=[SPRING, SUMMER],
    )

    assert badges.best_performance is True
    assert [game.name for game in badges.best_games] == ["Petanque"]
    assert badges.podium_position == 2
    assert badges.has_any()


def test_player_without_matches_has_no_badges() -> None:
    outsider = Player(id=5, name="Eve")
    badges = player_badges(
        outsider.id,
        players=[*PLAYERS, outsider],
        matches=MATCHES,
        games=[DOMINO, PETANQUE],
        tournaments=[SPRING, SUMMER],
    )
    assert not badges.has_any()


def test_tournament_badges_stop_at_third_place() -> None:
    eve = Player(id=5, name="Eve")
    league = Tournament(
        id=900,
        name="League",
        description="Five-player league",
        start_date=date(2025, 1, 1),
    )
    five = [ANA, BEN, CLA, DAN, eve]
    # League points: Ana 6, Ben 3, Cla 2, Dan 1, Eve 0.
    league_matches = [
        _match(
            11,
            DOMINO.id,
            (ANA.id, "winner"),
            (BEN.id, "participant"),
            (CLA.id, "participant"),
            (DAN.id, "participant"),
            (eve.id, "last"),
            tournament_id=league.id,
        ),
        _match(
            12,
            DOMINO.id,
            (ANA.id, "winner"),
            (BEN.id, "participant"),
            (CLA.id, "participant"),
            (DAN.id, "last"),
            (eve.id, "last"),
            tournament_id=league.id,
        ),
        _match(
            13,
            DOMINO.id,
            (ANA.id, "winner"),
            (BEN.id, "participant"),
            (CLA.id, "last"),
            (DAN.id, "last"),
            (eve.id, "last"),
            tournament_id=league.id,
        ),
    ]

    assert PODIUM_SIZE == 3
    cla_badges = tournament_podium_badges(CLA.id, [league], five, league_matches)
    assert [badge.position for badge in cla_badges] == [3]
    assert tournament_podium_badges(DAN.id, [league], five, league_matches) == []
    assert tournament_podium_badges(eve.id, [league], five, league_matches) == []

    engine = StatsEngine()
    engine.set_data(five, league_matches, games=[DOMINO], tournaments=[league])
    assert engine.get_player_badges(DAN.id).tournament_badges == ()
    assert engine.get_player_badges(DAN.id).podium_position is None
    # A wider display podium does not widen the badges.
    assert len(engine.get_podium(RankingView(tournament_id=league.id), 5)) == 5
