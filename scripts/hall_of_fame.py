#!/usr/bin/env python3
"""Hall of Fame CLI: record players, games, tournaments and matches, then query rankings."""

from __future__ import annotations

import sys
from dataclasses import replace
from datetime import date, datetime
from pathlib import Path
from typing import Annotated

import typer

ROOT_DIR = Path(__file__).resolve().parents[1]
SRC_DIR = ROOT_DIR / "src"
if str(SRC_DIR) not in sys.path:
    sys.path.insert(0, str(SRC_DIR))

from domain.common import Participant, SortBy
from domain.config import load_config
from domain.errors import EntityNotFoundError, ValidationError
from domain.service import HallOfFameService
from domain.stats import RankedPlayer, performance_tier

app = typer.Typer(
    add_completion=False,
    no_args_is_help=True,
    help="Hall of Fame ranking and statistics commands.",
)

DATE_FORMATS = ["%Y-%m-%d"]

ConfigOption = Annotated[
    Path | None,
    typer.Option("--config", help="TOML config file. Defaults to configs/default.toml."),
]
DbUrlOption = Annotated[
    str | None,
    typer.Option("--db-url", help="Database URL override for [hall_of_fame].db_url."),
]


def _open_service(config_path: Path | None, db_url: str | None) -> HallOfFameService:
    try:
        config = load_config(config_path)
    except (FileNotFoundError, ValueError) as exc:
        raise typer.BadParameter(str(exc), param_hint="--config") from exc
    if db_url is not None:
        config = replace(config, db_url=db_url)
    return HallOfFameService.from_config(config, echo=typer.echo)


def _to_date(value: datetime | None) -> date | None:
    return None if value is None else value.date()


def _resolve_player_id(service: HallOfFameService, name: str, param_hint: str = "player") -> int:
    player = service.find_player(name)
    if player is None:
        raise typer.BadParameter(f"Unknown player '{name}'", param_hint=param_hint)
    return player.id


def _resolve_game_id(service: HallOfFameService, name: str) -> int:
    game = service.find_game(name)
    if game is None:
        raise typer.BadParameter(f"Unknown game '{name}'", param_hint="game")
    return game.id


def _resolve_tournament_id(service: HallOfFameService, name: str | None) -> int | None:
    if name is None:
        return None
    tournament = service.find_tournament(name)
    if tournament is None:
        raise typer.BadParameter(f"Unknown tournament '{name}'", param_hint="--tournament")
    return tournament.id


def _parse_participants(service: HallOfFameService, entries: list[str]) -> list[Participant]:
    participants: list[Participant] = []
    for entry in entries:
        name, separator, position = entry.rpartition(":")
        if not separator or not name.strip():
            raise typer.BadParameter(
                f"Expected NAME:POSITION, got '{entry}'",
                param_hint="--player",
            )
        participants.append(
            Participant(
                player_id=_resolve_player_id(service, name, "--player"),
                position=position.strip().lower(),
            )
        )
    return participants


def _render_ranked(index: int, entry: RankedPlayer) -> str:
    return (
        f"{index:2d}. {entry.name:<20} "
        f"points={entry.total_points:3d} games={entry.games_played:3d} "
        f"wins={entry.wins:3d} performance={entry.performance:3d}%"
    )


def _coerce_sort(value: str) -> SortBy:
    try:
        return SortBy(value.strip().lower())
    except ValueError as exc:
        available = ", ".join(item.value for item in SortBy)
        raise typer.BadParameter(
            f"Unsupported sort '{value}'. Choose one of: {available}.",
            param_hint="--sort",
        ) from exc


@app.command()
def add_player(
    name: Annotated[str, typer.Argument(help="Player display name.")],
    avatar: Annotated[str, typer.Option("--avatar", help="Avatar reference.")] = "",
    config_path: ConfigOption = None,
    db_url: DbUrlOption = None,
) -> None:
    """Register a new player."""
    service = _open_service(config_path, db_url)
    try:
        service.add_player(name, avatar)
    except ValidationError as exc:
        raise typer.BadParameter(str(exc), param_hint="name") from exc


@app.command()
def add_game(
    name: Annotated[str, typer.Argument(help="Game name.")],
    game_type: Annotated[
        str,
        typer.Option("--type", help="Game type (board, card, garden, sport, other)."),
    ] = "other",
    config_path: ConfigOption = None,
    db_url: DbUrlOption = None,
) -> None:
    """Register a new game."""
    service = _open_service(config_path, db_url)
    try:
        service.add_game(name, game_type)
    except ValidationError as exc:
        raise typer.BadParameter(str(exc)) from exc


@app.command()
def add_tournament(
    name: Annotated[str, typer.Argument(help="Tournament name.")],
    description: Annotated[str, typer.Option("--description", help="Tournament description.")],
    start: Annotated[
        datetime,
        typer.Option("--start", formats=DATE_FORMATS, help="First day (YYYY-MM-DD)."),
    ],
    end: Annotated[
        datetime | None,
        typer.Option("--end", formats=DATE_FORMATS, help="Last day (YYYY-MM-DD); omit for open-ended."),
    ] = None,
    config_path: ConfigOption = None,
    db_url: DbUrlOption = None,
) -> None:
    """Register a new tournament window."""
    service = _open_service(config_path, db_url)
    try:
        service.add_tournament(name, description, start.date(), _to_date(end))
    except ValidationError as exc:
        raise typer.BadParameter(str(exc)) from exc


@app.command()
def record_match(
    game: Annotated[str, typer.Argument(help="Game name.")],
    match_date: Annotated[
        datetime,
        typer.Option("--date", formats=DATE_FORMATS, help="Match day (YYYY-MM-DD)."),
    ],
    players: Annotated[
        list[str] | None,
        typer.Option(
            "--player",
            help="Participant as NAME:POSITION (winner, participant, last). Repeat per player.",
        ),
    ] = None,
    tournament: Annotated[
        str | None,
        typer.Option("--tournament", help="Tournament name the match counts towards."),
    ] = None,
    config_path: ConfigOption = None,
    db_url: DbUrlOption = None,
) -> None:
    """Record one played match."""
    service = _open_service(config_path, db_url)
    game_id = _resolve_game_id(service, game)
    tournament_id = _resolve_tournament_id(service, tournament)
    participants = _parse_participants(service, players or [])
    try:
        service.record_match(game_id, match_date.date(), participants, tournament_id)
    except ValidationError as exc:
        raise typer.BadParameter(str(exc)) from exc


@app.command()
def delete_player(
    name: Annotated[str, typer.Argument(help="Player display name.")],
    config_path: ConfigOption = None,
    db_url: DbUrlOption = None,
) -> None:
    """Delete a player and every match they took part in."""
    service = _open_service(config_path, db_url)
    player_id = _resolve_player_id(service, name)
    try:
        service.delete_player(player_id)
    except EntityNotFoundError as exc:
        raise typer.BadParameter(str(exc), param_hint="name") from exc


@app.command()
def ranking(
    sort: Annotated[
        str,
        typer.Option("--sort", help="Sort order (points, performance, wins)."),
    ] = "",
    tournament: Annotated[
        str | None,
        typer.Option("--tournament", help="Only count matches from this tournament."),
    ] = None,
    config_path: ConfigOption = None,
    db_url: DbUrlOption = None,
) -> None:
    """Print the global ranking for the selected view."""
    service = _open_service(config_path, db_url)
    if sort:
        service.set_sort_order(_coerce_sort(sort))
    service.set_tournament_filter(_resolve_tournament_id(service, tournament))

    entries = service.current_ranking()
    if not entries:
        typer.echo("No ranked players yet.")
        return

    typer.echo(
        f"sort={service.get_sort_order().value} "
        f"tournament_id={service.get_tournament_filter()} players={len(entries)}"
    )
    for index, entry in enumerate(entries, start=1):
        typer.echo(_render_ranked(index, entry))


@app.command()
def game_ranking(
    game: Annotated[str, typer.Argument(help="Game name.")],
    sort: Annotated[
        str,
        typer.Option("--sort", help="Sort order (points, performance, wins)."),
    ] = SortBy.POINTS.value,
    config_path: ConfigOption = None,
    db_url: DbUrlOption = None,
) -> None:
    """Print the per-game ranking."""
    service = _open_service(config_path, db_url)
    game_id = _resolve_game_id(service, game)
    entries = service.engine.get_game_ranking(game_id, _coerce_sort(sort))
    if not entries:
        typer.echo(f"No matches recorded for game '{game}'.")
        return

    for index, entry in enumerate(entries, start=1):
        typer.echo(_render_ranked(index, entry))


@app.command()
def player_stats(
    name: Annotated[str, typer.Argument(help="Player display name.")],
    tournament: Annotated[
        str | None,
        typer.Option("--tournament", help="Only count matches from this tournament."),
    ] = None,
    config_path: ConfigOption = None,
    db_url: DbUrlOption = None,
) -> None:
    """Print aggregated statistics for one player."""
    service = _open_service(config_path, db_url)
    player_id = _resolve_player_id(service, name)
    tournament_id = _resolve_tournament_id(service, tournament)
    stats = service.engine.calculate_player_stats(player_id, tournament_id)
    service.set_tournament_filter(tournament_id)
    position = service.engine.get_player_position(player_id, service.view)

    typer.echo(
        f"player={name} total_points={stats.total_points} games_played={stats.games_played} "
        f"wins={stats.wins} participants={stats.participants} lasts={stats.lasts} "
        f"performance={stats.performance}% tier={performance_tier(stats.performance)} "
        f"position={position if position > 0 else '-'}"
    )


@app.command()
def badges(
    name: Annotated[str, typer.Argument(help="Player display name.")],
    config_path: ConfigOption = None,
    db_url: DbUrlOption = None,
) -> None:
    """Print podium, best-performance, per-game and tournament badges for one player."""
    service = _open_service(config_path, db_url)
    player_id = _resolve_player_id(service, name)
    player_badges = service.engine.get_player_badges(player_id)
    if not player_badges.has_any():
        typer.echo(f"player={name} badges=none")
        return

    if player_badges.podium_position is not None:
        typer.echo(f"podium position={player_badges.podium_position}")
    if player_badges.best_performance:
        typer.echo("best_performance")
    for game in player_badges.best_games:
        typer.echo(f"best_in_game game={game.name} type={game.type}")
    for badge in player_badges.tournament_badges:
        typer.echo(f"tournament_podium tournament={badge.tournament_name} position={badge.position}")


@app.command()
def summary(
    config_path: ConfigOption = None,
    db_url: DbUrlOption = None,
) -> None:
    """Print overall and match statistics."""
    service = _open_service(config_path, db_url)
    if not service.engine.has_stats_data():
        typer.echo("No statistics yet.")
        return

    overall = service.engine.get_overall_stats()
    matches = service.engine.get_match_statistics()
    typer.echo(
        f"ranked_players={overall.total_players} total_matches={overall.total_matches} "
        f"average_points={overall.average_points}"
    )
    typer.echo(
        f"games_played={matches.games_played} players_involved={matches.players_involved} "
        f"average_participants={matches.average_participants}"
    )
    if overall.top_player is not None:
        typer.echo(f"top_player={overall.top_player.name} points={overall.top_player.total_points}")
    if overall.most_active_player is not None:
        typer.echo(
            f"most_active={overall.most_active_player.name} "
            f"games={overall.most_active_player.games_played}"
        )


if __name__ == "__main__":
    app()
