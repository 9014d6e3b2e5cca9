"""games and game_players table models."""

from __future__ import annotations

from datetime import datetime

from sqlalchemy import (
    CheckConstraint,
    DateTime,
    ForeignKey,
    Index,
    Integer,
    String,
    UniqueConstraint,
    func,
)
from sqlalchemy.orm import Mapped, mapped_column

from models.base import Base


class Game(Base):
    """One played game; `result` stays NULL until the referee declares it."""

    __tablename__ = "games"

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    name: Mapped[str | None] = mapped_column(String(255), nullable=True)
    result: Mapped[str | None] = mapped_column(String(50), nullable=True)
    club_id: Mapped[int | None] = mapped_column(Integer, nullable=True)
    federation_id: Mapped[int | None] = mapped_column(Integer, nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=False),
        nullable=False,
        server_default=func.now(),
    )


class GamePlayer(Base):
    """One seat in one game."""

    __tablename__ = "game_players"
    __table_args__ = (
        UniqueConstraint("game_id", "slot_number", name="uq_game_players_game_slot"),
        CheckConstraint("fouls >= 0", name="ck_game_players_fouls"),
        Index("idx_game_players_game", "game_id"),
        Index("idx_game_players_player", "player_id"),
    )

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    game_id: Mapped[int] = mapped_column(ForeignKey("games.id"), nullable=False)
    player_id: Mapped[int] = mapped_column(Integer, nullable=False)
    role: Mapped[str] = mapped_column(String(50), nullable=False)
    fouls: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    # Stored as text: historical rows carry values like "00.500.900.202.00".
    additional_points: Mapped[str | None] = mapped_column(String(64), nullable=True)
    slot_number: Mapped[int] = mapped_column(Integer, nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=False),
        nullable=False,
        server_default=func.now(),
    )
