"""Orchestration: entity edits, snapshot refresh and ranking view state."""

from __future__ import annotations

from collections.abc import Callable, Sequence
from dataclasses import replace
from datetime import date, datetime

from sqlalchemy.orm import Session, sessionmaker

from db import create_db_engine, create_session_factory
from domain.common import Game, MatchRecord, Participant, Player, SortBy, Tournament
from domain.config import HallOfFameConfig
from domain.errors import EntityNotFoundError, ValidationError
from domain.stats.badges import PodiumEntry
from domain.stats.engine import RankingView, StatsEngine
from domain.stats.ranking import RankedPlayer
from domain.validation import (
    compatible_tournaments,
    sort_participants_by_rank,
    validate_game_type,
    validate_match_tournament,
    validate_name,
    validate_participants,
    validate_tournament_window,
)
from repositories import (
    GAME_REPOSITORY,
    MATCH_REPOSITORY,
    PLAYER_REPOSITORY,
    TOURNAMENT_REPOSITORY,
    delete_matches_for_player,
    ensure_hall_of_fame_schema,
    fetch_snapshot,
)

Echo = Callable[[str], None]


class HallOfFameService:
    """Owns the store session factory, the stats engine and the current ranking view."""

    def __init__(
        self,
        session_factory: sessionmaker[Session],
        *,
        config: HallOfFameConfig | None = None,
        echo: Echo | None = None,
        clock: Callable[[], datetime] | None = None,
    ) -> None:
        self.session_factory = session_factory
        self.config = config or HallOfFameConfig(file_path=None)
        self.engine = StatsEngine()
        self._view = RankingView(sort_by=self.config.default_sort)
        self._echo = echo
        self._clock = clock
        self.refresh()

    @classmethod
    def from_config(cls, config: HallOfFameConfig, *, echo: Echo | None = None) -> HallOfFameService:
        engine = create_db_engine(config.db_url)
        ensure_hall_of_fame_schema(engine)
        return cls(create_session_factory(engine), config=config, echo=echo)

    def _report(self, message: str) -> None:
        if self._echo is not None:
            self._echo(message)

    def _now(self) -> datetime | None:
        return None if self._clock is None else self._clock()

    def refresh(self) -> None:
        """Reload every collection and hand the engine a fresh snapshot."""
        with self.session_factory() as session:
            snapshot = fetch_snapshot(session)
        self.engine.set_data(
            snapshot.players,
            snapshot.matches,
            games=snapshot.games,
            tournaments=snapshot.tournaments,
        )

    # View state

    @property
    def view(self) -> RankingView:
        return self._view

    def set_sort_order(self, sort_by: SortBy | str) -> None:
        self._view = self._view.with_sort_order(sort_by)

    def get_sort_order(self) -> SortBy:
        return self._view.sort_by

    def set_tournament_filter(self, tournament_id: int | str | None) -> None:
        self._view = self._view.with_tournament_filter(tournament_id)

    def get_tournament_filter(self) -> int | None:
        return self._view.tournament_id

    def _reconcile_tournament_filter(self) -> None:
        current = self._view.tournament_id
        if current is None:
            return
        if any(tournament.id == current for tournament in self.engine.tournaments):
            return
        latest = self.tournaments_sorted_by_start_date()
        self._view = replace(self._view, tournament_id=latest[0].id if latest else None)

    # Players

    def add_player(self, name: str, avatar: str = "") -> Player:
        with self.session_factory() as session:
            cleaned = validate_name(name, PLAYER_REPOSITORY.fetch_all(session), label="player")
            player = PLAYER_REPOSITORY.add(
                session,
                Player(id=PLAYER_REPOSITORY.allocate_id(session, now=self._now()), name=cleaned, avatar=avatar),
            )
            session.commit()
        self._report(f"added player_id={player.id} name={player.name!r}")
        self.refresh()
        return player

    def edit_player(self, player_id: int, name: str, avatar: str | None = None) -> Player:
        with self.session_factory() as session:
            current = PLAYER_REPOSITORY.get(session, player_id)
            if current is None:
                raise EntityNotFoundError("player", player_id)
            cleaned = validate_name(
                name,
                PLAYER_REPOSITORY.fetch_all(session),
                exclude_id=player_id,
                label="player",
            )
            updated = replace(current, name=cleaned, avatar=current.avatar if avatar is None else avatar)
            PLAYER_REPOSITORY.update(session, updated)
            session.commit()
        self._report(f"updated player_id={player_id} name={updated.name!r}")
        self.refresh()
        return updated

    def delete_player(self, player_id: int) -> list[int]:
        """Remove the player together with every match they appear in."""
        with self.session_factory() as session:
            if PLAYER_REPOSITORY.get_row(session, player_id) is None:
                raise EntityNotFoundError("player", player_id)
            removed_matches = delete_matches_for_player(session, player_id)
            PLAYER_REPOSITORY.delete(session, player_id)
            session.commit()
        self._report(f"deleted player_id={player_id} cascaded_matches={len(removed_matches)}")
        self.refresh()
        return removed_matches

    # Games

    def add_game(self, name: str, game_type: str = "other") -> Game:
        with self.session_factory() as session:
            cleaned = validate_name(name, GAME_REPOSITORY.fetch_all(session), label="game")
            game = GAME_REPOSITORY.add(
                session,
                Game(
                    id=GAME_REPOSITORY.allocate_id(session, now=self._now()),
                    name=cleaned,
                    type=validate_game_type(game_type),
                ),
            )
            session.commit()
        self._report(f"added game_id={game.id} name={game.name!r} type={game.type}")
        self.refresh()
        return game

    def edit_game(self, game_id: int, name: str, game_type: str | None = None) -> Game:
        with self.session_factory() as session:
            current = GAME_REPOSITORY.get(session, game_id)
            if current is None:
                raise EntityNotFoundError("game", game_id)
            cleaned = validate_name(
                name,
                GAME_REPOSITORY.fetch_all(session),
                exclude_id=game_id,
                label="game",
            )
            updated = replace(
                current,
                name=cleaned,
                type=current.type if game_type is None else validate_game_type(game_type),
            )
            GAME_REPOSITORY.update(session, updated)
            session.commit()
        self._report(f"updated game_id={game_id} name={updated.name!r}")
        self.refresh()
        return updated

    def delete_game(self, game_id: int) -> None:
        with self.session_factory() as session:
            if not GAME_REPOSITORY.delete(session, game_id):
                raise EntityNotFoundError("game", game_id)
            session.commit()
        self._report(f"deleted game_id={game_id}")
        self.refresh()

    # Tournaments

    def add_tournament(
        self,
        name: str,
        description: str,
        start_date: date,
        end_date: date | None = None,
    ) -> Tournament:
        with self.session_factory() as session:
            cleaned = validate_name(name, TOURNAMENT_REPOSITORY.fetch_all(session), label="tournament")
            tournament = TOURNAMENT_REPOSITORY.add(
                session,
                Tournament(
                    id=TOURNAMENT_REPOSITORY.allocate_id(session, now=self._now()),
                    name=cleaned,
                    description=validate_tournament_window(description, start_date, end_date),
                    start_date=start_date,
                    end_date=end_date,
                ),
            )
            session.commit()
        self._report(f"added tournament_id={tournament.id} name={tournament.name!r}")
        self.refresh()
        return tournament

    def edit_tournament(
        self,
        tournament_id: int,
        name: str,
        description: str,
        start_date: date,
        end_date: date | None = None,
    ) -> Tournament:
        with self.session_factory() as session:
            if TOURNAMENT_REPOSITORY.get_row(session, tournament_id) is None:
                raise EntityNotFoundError("tournament", tournament_id)
            cleaned = validate_name(
                name,
                TOURNAMENT_REPOSITORY.fetch_all(session),
                exclude_id=tournament_id,
                label="tournament",
            )
            updated = Tournament(
                id=tournament_id,
                name=cleaned,
                description=validate_tournament_window(description, start_date, end_date),
                start_date=start_date,
                end_date=end_date,
            )
            TOURNAMENT_REPOSITORY.update(session, updated)
            session.commit()
        self._report(f"updated tournament_id={tournament_id} name={updated.name!r}")
        self.refresh()
        self._reconcile_tournament_filter()
        return updated

    def delete_tournament(self, tournament_id: int) -> None:
        """Remove the tournament; its matches keep their now-dangling tournament_id."""
        with self.session_factory() as session:
            if not TOURNAMENT_REPOSITORY.delete(session, tournament_id):
                raise EntityNotFoundError("tournament", tournament_id)
            session.commit()
        self._report(f"deleted tournament_id={tournament_id}")
        self.refresh()
        self._reconcile_tournament_filter()

    # Matches

    def _build_match(
        self,
        session: Session,
        *,
        match_id: int,
        game_id: int,
        match_date: date | None,
        participants: Sequence[Participant],
        tournament_id: int | None,
    ) -> MatchRecord:
        if GAME_REPOSITORY.get_row(session, game_id) is None:
            raise ValidationError(f"game_id={game_id} does not exist")
        if match_date is None:
            raise ValidationError("match date is required")
        validate_participants(participants)

        players = {player.id: player for player in PLAYER_REPOSITORY.fetch_all(session)}
        unknown = [participant.player_id for participant in participants if participant.player_id not in players]
        if unknown:
            raise ValidationError(f"unknown player ids: {unknown}")

        tournaments = {tournament.id: tournament for tournament in TOURNAMENT_REPOSITORY.fetch_all(session)}
        validate_match_tournament(match_date, tournament_id, tournaments)

        return MatchRecord(
            id=match_id,
            game_id=game_id,
            date=match_date,
            tournament_id=tournament_id,
            participants=tuple(
                sort_participants_by_rank(
                    participants,
                    players,
                    deleted_player_label=self.config.deleted_player_label,
                )
            ),
        )

    def record_match(
        self,
        game_id: int,
        match_date: date,
        participants: Sequence[Participant],
        tournament_id: int | None = None,
    ) -> MatchRecord:
        with self.session_factory() as session:
            match = self._build_match(
                session,
                match_id=MATCH_REPOSITORY.allocate_id(session, now=self._now()),
                game_id=game_id,
                match_date=match_date,
                participants=participants,
                tournament_id=tournament_id,
            )
            MATCH_REPOSITORY.add(session, match)
            session.commit()
        self._report(
            f"recorded match_id={match.id} game_id={game_id} "
            f"participants={len(match.participants)} tournament_id={tournament_id}"
        )
        self.refresh()
        return match

    def edit_match(
        self,
        match_id: int,
        game_id: int,
        match_date: date,
        participants: Sequence[Participant],
        tournament_id: int | None = None,
    ) -> MatchRecord:
        with self.session_factory() as session:
            if MATCH_REPOSITORY.get_row(session, match_id) is None:
                raise EntityNotFoundError("match", match_id)
            match = self._build_match(
                session,
                match_id=match_id,
                game_id=game_id,
                match_date=match_date,
                participants=participants,
                tournament_id=tournament_id,
            )
            MATCH_REPOSITORY.update(session, match)
            session.commit()
        self._report(f"updated match_id={match_id}")
        self.refresh()
        return match

    def delete_match(self, match_id: int) -> None:
        with self.session_factory() as session:
            if not MATCH_REPOSITORY.delete(session, match_id):
                raise EntityNotFoundError("match", match_id)
            session.commit()
        self._report(f"deleted match_id={match_id}")
        self.refresh()

    # Lookups over the current snapshot

    def find_player(self, name: str) -> Player | None:
        lowered = name.strip().lower()
        return next((player for player in self.engine.players if player.name.lower() == lowered), None)

    def find_game(self, name: str) -> Game | None:
        lowered = name.strip().lower()
        return next((game for game in self.engine.games if game.name.lower() == lowered), None)

    def find_tournament(self, name: str) -> Tournament | None:
        lowered = name.strip().lower()
        return next(
            (tournament for tournament in self.engine.tournaments if tournament.name.lower() == lowered),
            None,
        )

    def player_display_name(self, player_id: int) -> str:
        player = next((player for player in self.engine.players if player.id == player_id), None)
        return player.name if player is not None else self.config.deleted_player_label

    def game_display_name(self, game_id: int) -> str:
        game = next((game for game in self.engine.games if game.id == game_id), None)
        return game.name if game is not None else self.config.deleted_game_label

    def compatible_tournaments(self, match_date: date | None) -> list[Tournament]:
        return compatible_tournaments(match_date, self.engine.tournaments)

    def active_tournaments(self, today: date) -> list[Tournament]:
        return [
            tournament
            for tournament in self.engine.tournaments
            if tournament.end_date is None or tournament.end_date >= today
        ]

    def completed_tournaments(self, today: date) -> list[Tournament]:
        return [
            tournament
            for tournament in self.engine.tournaments
            if tournament.end_date is not None and tournament.end_date < today
        ]

    def tournaments_sorted_by_start_date(self) -> list[Tournament]:
        """Newest first."""
        return sorted(self.engine.tournaments, key=lambda tournament: tournament.start_date, reverse=True)

    def matches_by_game(self, game_id: int) -> list[MatchRecord]:
        return [match for match in self.engine.matches if match.game_id == game_id]

    def matches_by_player(self, player_id: int) -> list[MatchRecord]:
        return [match for match in self.engine.matches if match.participation_for(player_id) is not None]

    def matches_by_date_range(self, start_date: date, end_date: date) -> list[MatchRecord]:
        return [match for match in self.engine.matches if start_date <= match.date <= end_date]

    def recent_matches(self, limit: int = 10) -> list[MatchRecord]:
        return sorted(self.engine.matches, key=lambda match: match.date, reverse=True)[:limit]

    # Rankings under the current view

    def current_ranking(self) -> list[RankedPlayer]:
        return self.engine.get_view_ranking(self._view)

    def current_podium(self) -> list[PodiumEntry]:
        """Leading podium_size entries for display; badge positions always use the top three."""
        return self.engine.get_podium(self._view, self.config.podium_size)


__all__ = ["Echo", "HallOfFameService"]
