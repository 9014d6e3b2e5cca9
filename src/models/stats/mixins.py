"""SQLAlchemy mixin for the columns shared by every player result table."""

from __future__ import annotations

from datetime import datetime

from sqlalchemy import DateTime, Float, Integer, func
from sqlalchemy.orm import Mapped, mapped_column


class PlayerResultMixin:
    """Aggregated per-player counters for one scope (no scope column; add in concrete class)."""

    player_id: Mapped[int] = mapped_column(Integer, nullable=False)
    points: Mapped[float] = mapped_column(Float, nullable=False, default=0.0)
    games_played: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    wins: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    civilian_wins: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    mafia_wins: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    don_games: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    sheriff_games: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    first_outs: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    fouls: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    civilian_games: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    mafia_games: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    sheriff_wins: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    don_wins: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=False),
        nullable=False,
        server_default=func.now(),
    )
