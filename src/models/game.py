"""games table model."""

from __future__ import annotations

from sqlalchemy import BigInteger, Enum, String
from sqlalchemy.orm import Mapped, mapped_column

from models.base import Base


class GameRow(Base):
    __tablename__ = "games"

    id: Mapped[int] = mapped_column(BigInteger, primary_key=True, autoincrement=False)
    name: Mapped[str] = mapped_column(String(128), nullable=False, index=True)
    type: Mapped[str] = mapped_column(
        Enum(
            "board",
            "card",
            "garden",
            "sport",
            "other",
            name="game_type",
            native_enum=False,
        ),
        nullable=False,
        default="other",
    )
