"""CLI smoke tests driving scripts/hall_of_fame.py against a temporary SQLite file."""

from __future__ import annotations

import importlib.util
import sys
from pathlib import Path

import pytest
from typer.testing import CliRunner

SCRIPT_PATH = Path(__file__).resolve().parents[1] / "scripts" / "hall_of_fame.py"
_module_spec = importlib.util.spec_from_file_location("hall_of_fame_cli", SCRIPT_PATH)
assert _module_spec is not None and _module_spec.loader is not None
hall_of_fame_cli = importlib.util.module_from_spec(_module_spec)
sys.modules[_module_spec.name] = hall_of_fame_cli
_module_spec.loader.exec_module(hall_of_fame_cli)

runner = CliRunner()


@pytest.fixture
def db_url(tmp_path: Path) -> str:
    return f"sqlite:///{tmp_path / 'cli.db'}"


def _invoke(db_url: str, *args: str):
    return runner.invoke(hall_of_fame_cli.app, [*args, "--db-url", db_url])


def _seed(db_url: str) -> None:
    for name in ("Ana", "Ben"):
        assert _invoke(db_url, "add-player", name).exit_code == 0
    assert _invoke(db_url, "add-game", "Catan", "--type", "board").exit_code == 0
    result = _invoke(
        db_url,
        "record-match",
        "Catan",
        "--date",
        "2025-04-01",
        "--player",
        "Ana:winner",
        "--player",
        "Ben:last",
    )
    assert result.exit_code == 0, result.output


def test_ranking_after_recording_a_match(db_url: str) -> None:
    _seed(db_url)

    result = _invoke(db_url, "ranking")

    assert result.exit_code == 0, result.output
    lines = result.output.strip().splitlines()
    assert lines[0].startswith("sort=points")
    assert " 1. Ana" in lines[1]
    assert "performance=100%" in lines[1]
    assert " 2. Ben" in lines[2]


def test_game_ranking_player_stats_badges_and_summary(db_url: str) -> None:
    _seed(db_url)

    game_result = _invoke(db_url, "game-ranking", "catan")
    stats_result = _invoke(db_url, "player-stats", "Ben")
    badges_result = _invoke(db_url, "badges", "Ana")
    summary_result = _invoke(db_url, "summary")

    assert " 1. Ana" in game_result.output
    assert "total_points=0" in stats_result.output
    assert "tier=very_poor" in stats_result.output
    assert "position=2" in stats_result.output
    assert "podium position=1" in badges_result.output
    assert "best_in_game game=Catan" in badges_result.output
    assert "ranked_players=2" in summary_result.output


def test_tournament_scoped_ranking(db_url: str) -> None:
    _seed(db_url)
    created = _invoke(
        db_url,
        "add-tournament",
        "Spring",
        "--description",
        "Spring cup",
        "--start",
        "2025-03-01",
        "--end",
        "2025-05-31",
    )
    assert created.exit_code == 0, created.output

    empty = _invoke(db_url, "ranking", "--tournament", "Spring")
    assert "No ranked players yet." in empty.output

    recorded = _invoke(
        db_url,
        "record-match",
        "Catan",
        "--date",
        "2025-04-02",
        "--player",
        "Ben:winner",
        "--player",
        "Ana:last",
        "--tournament",
        "Spring",
    )
    assert recorded.exit_code == 0, recorded.output

    scoped = _invoke(db_url, "ranking", "--tournament", "Spring", "--sort", "performance")
    assert " 1. Ben" in scoped.output
    assert "Ana" in scoped.output


def test_delete_player_removes_their_matches(db_url: str) -> None:
    _seed(db_url)

    deleted = _invoke(db_url, "delete-player", "Ana")
    ranking = _invoke(db_url, "ranking")

    assert deleted.exit_code == 0, deleted.output
    assert "cascaded_matches=1" in deleted.output
    assert "No ranked players yet." in ranking.output


@pytest.mark.parametrize(
    "args",
    [
        ("add-player", "Ana"),
        ("ranking", "--sort", "elo"),
        ("record-match", "Catan", "--date", "2025-04-01", "--player", "Ana:winner"),
        ("record-match", "Catan", "--date", "2025-04-01", "--player", "Ana:winner", "--player", "Zed:last"),
        ("record-match", "Catan", "--date", "2025-04-01", "--player", "Ana", "--player", "Ben:last"),
        ("player-stats", "Nobody"),
    ],
)
def test_invalid_input_exits_non_zero(db_url: str, args: tuple[str, ...]) -> None:
    _seed(db_url)

    result = _invoke(db_url, *args)

    assert result.exit_code != 0
