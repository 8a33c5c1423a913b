"""Input validation for entity edits."""

from __future__ import annotations

from collections.abc import Iterable, Mapping, Sequence
from datetime import date
from typing import Protocol

from domain.common import (
    POSITION_ORDER,
    GameType,
    Participant,
    Player,
    Tournament,
    name_sort_key,
)
from domain.errors import ValidationError

MIN_PARTICIPANTS = 2


class _Named(Protocol):
    id: int
    name: str


def validate_name(
    name: str | None,
    existing: Iterable[_Named],
    *,
    exclude_id: int | None = None,
    label: str = "player",
) -> str:
    """Return the trimmed name, rejecting blanks and case-insensitive duplicates."""
    cleaned = (name or "").strip()
    if not cleaned:
        raise ValidationError(f"{label} name must not be empty")

    lowered = cleaned.lower()
    for entity in existing:
        if entity.id != exclude_id and entity.name.lower() == lowered:
            raise ValidationError(f"{label} name '{cleaned}' already exists")
    return cleaned


def validate_game_type(game_type: str) -> str:
    try:
        return GameType(str(game_type).strip().lower()).value
    except ValueError as exc:
        allowed = ", ".join(item.value for item in GameType)
        raise ValidationError(f"game type '{game_type}' is not one of: {allowed}") from exc


def validate_tournament_window(
    description: str | None,
    start_date: date | None,
    end_date: date | None,
) -> str:
    cleaned = (description or "").strip()
    if not cleaned:
        raise ValidationError("tournament description must not be empty")
    if start_date is None:
        raise ValidationError("tournament start_date is required")
    if end_date is not None and end_date < start_date:
        raise ValidationError(
            f"tournament end_date={end_date} is before start_date={start_date}"
        )
    return cleaned


def validate_participants(participants: Sequence[Participant]) -> None:
    if len(participants) < MIN_PARTICIPANTS:
        raise ValidationError(f"a match needs at least {MIN_PARTICIPANTS} participants")

    seen: set[int] = set()
    for participant in participants:
        if participant.position not in POSITION_ORDER:
            raise ValidationError(
                f"player_id={participant.player_id} has unknown position '{participant.position}'"
            )
        if participant.player_id in seen:
            raise ValidationError(f"player_id={participant.player_id} appears more than once")
        seen.add(participant.player_id)


def validate_match_tournament(
    match_date: date,
    tournament_id: int | None,
    tournaments: Mapping[int, Tournament],
) -> None:
    if tournament_id is None:
        return
    tournament = tournaments.get(tournament_id)
    if tournament is None:
        raise ValidationError(f"tournament_id={tournament_id} does not exist")
    if not tournament.contains(match_date):
        raise ValidationError(
            f"match date {match_date} is outside tournament '{tournament.name}' "
            f"({tournament.start_date} - {tournament.end_date or 'open'})"
        )


def compatible_tournaments(match_date: date | None, tournaments: Iterable[Tournament]) -> list[Tournament]:
    """Tournaments whose inclusive window contains the match date."""
    if match_date is None:
        return []
    return [tournament for tournament in tournaments if tournament.contains(match_date)]


def sort_participants_by_rank(
    participants: Iterable[Participant],
    players: Mapping[int, Player],
    *,
    deleted_player_label: str = "Player deleted",
) -> list[Participant]:
    """Order by position (winner, participant, last), then by display name."""

    def _key(participant: Participant) -> tuple[int, str]:
        player = players.get(participant.player_id)
        display_name = player.name if player is not None else deleted_player_label
        return (POSITION_ORDER.get(participant.position, len(POSITION_ORDER) + 1), name_sort_key(display_name))

    return sorted(participants, key=_key)


__all__ = [
    "MIN_PARTICIPANTS",
    "compatible_tournaments",
    "sort_participants_by_rank",
    "validate_game_type",
    "validate_match_tournament",
    "validate_name",
    "validate_participants",
    "validate_tournament_window",
]
