"""player_stats table model."""

from __future__ import annotations

from sqlalchemy import CheckConstraint, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from models.base import Base
from models.stats.mixins import PlayerResultMixin


class PlayerStats(PlayerResultMixin, Base):
    """Per-player totals over every recorded game."""

    __tablename__ = "player_stats"
    __table_args__ = (
        UniqueConstraint("player_id", name="uq_player_stats_player"),
        CheckConstraint("wins <= games_played", name="ck_player_stats_wins"),
    )

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
