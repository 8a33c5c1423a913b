"""matches and match_participants table models."""

from __future__ import annotations

import datetime as dt

from sqlalchemy import (
    BigInteger,
    CheckConstraint,
    Date,
    ForeignKey,
    Index,
    Integer,
    String,
    UniqueConstraint,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship

from models.base import Base


class MatchRow(Base):
    """One played match; game_id and tournament_id may dangle after deletes."""

    __tablename__ = "matches"
    __table_args__ = (
        Index("idx_matches_game", "game_id"),
        Index("idx_matches_tournament", "tournament_id"),
    )

    id: Mapped[int] = mapped_column(BigInteger, primary_key=True, autoincrement=False)
    game_id: Mapped[int] = mapped_column(BigInteger, nullable=False)
    date: Mapped[dt.date] = mapped_column(Date, nullable=False)
    tournament_id: Mapped[int | None] = mapped_column(BigInteger, nullable=True)

    participants: Mapped[list[MatchParticipantRow]] = relationship(
        back_populates="match",
        cascade="all, delete-orphan",
        order_by="MatchParticipantRow.sort_index",
        lazy="selectin",
    )


class MatchParticipantRow(Base):
    __tablename__ = "match_participants"
    __table_args__ = (
        UniqueConstraint("match_id", "player_id", name="uq_match_participants_match_player"),
        CheckConstraint(
            "position IN ('winner', 'participant', 'last')",
            name="ck_match_participants_position",
        ),
        Index("idx_match_participants_player", "player_id"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    match_id: Mapped[int] = mapped_column(
        ForeignKey("matches.id", ondelete="CASCADE"),
        nullable=False,
    )
    player_id: Mapped[int] = mapped_column(BigInteger, nullable=False)
    position: Mapped[str] = mapped_column(String(16), nullable=False)
    sort_index: Mapped[int] = mapped_column(Integer, nullable=False)

    match: Mapped[MatchRow] = relationship(back_populates="participants")
