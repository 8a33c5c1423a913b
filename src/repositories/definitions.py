"""Repository instances for every Hall of Fame entity table."""

from __future__ import annotations

from typing import Any

from sqlalchemy import select
from sqlalchemy.orm import Session

from domain.common import Game, MatchRecord, Participant, Player, Tournament
from models import GameRow, MatchParticipantRow, MatchRow, PlayerRow, TournamentRow
from repositories.base import BaseEntityRepository


def _player_to_domain(row: PlayerRow) -> Player:
    return Player(id=row.id, name=row.name, avatar=row.avatar or "")


def _player_to_row(player: Player) -> dict[str, Any]:
    return {"id": player.id, "name": player.name, "avatar": player.avatar}


def _game_to_domain(row: GameRow) -> Game:
    return Game(id=row.id, name=row.name, type=row.type)


def _game_to_row(game: Game) -> dict[str, Any]:
    return {"id": game.id, "name": game.name, "type": game.type}


def _tournament_to_domain(row: TournamentRow) -> Tournament:
    return Tournament(
        id=row.id,
        name=row.name,
        description=row.description,
        start_date=row.start_date,
        end_date=row.end_date,
    )


def _tournament_to_row(tournament: Tournament) -> dict[str, Any]:
    return {
        "id": tournament.id,
        "name": tournament.name,
        "description": tournament.description,
        "start_date": tournament.start_date,
        "end_date": tournament.end_date,
    }


def _match_to_domain(row: MatchRow) -> MatchRecord:
    return MatchRecord(
        id=row.id,
        game_id=row.game_id,
        date=row.date,
        tournament_id=row.tournament_id,
        participants=tuple(
            Participant(player_id=participant.player_id, position=participant.position)
            for participant in row.participants
        ),
    )


def _match_to_row(match: MatchRecord) -> dict[str, Any]:
    return {
        "id": match.id,
        "game_id": match.game_id,
        "date": match.date,
        "tournament_id": match.tournament_id,
    }


def _participant_rows(match: MatchRecord) -> list[MatchParticipantRow]:
    return [
        MatchParticipantRow(
            player_id=participant.player_id,
            position=participant.position,
            sort_index=index,
        )
        for index, participant in enumerate(match.participants)
    ]


class MatchRepository(BaseEntityRepository[MatchRow, MatchRecord]):
    """Matches plus their ordered participant rows."""

    def add(self, session: Session, entity: MatchRecord) -> MatchRecord:
        row = MatchRow(**self.to_row_fields(entity))
        row.participants = _participant_rows(entity)
        session.add(row)
        session.flush()
        return self.to_domain(row)

    def update(self, session: Session, entity: MatchRecord) -> MatchRecord | None:
        row = self.get_row(session, entity.id)
        if row is None:
            return None
        row.game_id = entity.game_id
        row.date = entity.date
        row.tournament_id = entity.tournament_id
        # Orphans must be flushed before re-inserting the same (match_id, player_id) pairs.
        row.participants.clear()
        session.flush()
        row.participants.extend(_participant_rows(entity))
        session.flush()
        return self.to_domain(row)

    def match_ids_for_player(self, session: Session, player_id: int) -> list[int]:
        statement = (
            select(MatchParticipantRow.match_id)
            .where(MatchParticipantRow.player_id == player_id)
            .distinct()
            .order_by(MatchParticipantRow.match_id)
        )
        return [int(match_id) for match_id in session.execute(statement).scalars().all()]


PLAYER_REPOSITORY = BaseEntityRepository[PlayerRow, Player](
    row_model=PlayerRow,
    to_domain=_player_to_domain,
    to_row_fields=_player_to_row,
)

GAME_REPOSITORY = BaseEntityRepository[GameRow, Game](
    row_model=GameRow,
    to_domain=_game_to_domain,
    to_row_fields=_game_to_row,
)

TOURNAMENT_REPOSITORY = BaseEntityRepository[TournamentRow, Tournament](
    row_model=TournamentRow,
    to_domain=_tournament_to_domain,
    to_row_fields=_tournament_to_row,
)

MATCH_REPOSITORY = MatchRepository(
    row_model=MatchRow,
    to_domain=_match_to_domain,
    to_row_fields=_match_to_row,
)
