"""rating_results table model."""

from __future__ import annotations

from sqlalchemy import CheckConstraint, ForeignKey, Index, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from models.base import Base
from models.stats.mixins import PlayerResultMixin


class RatingResult(PlayerResultMixin, Base):
    """Per-player totals over the games of one rating."""

    __tablename__ = "rating_results"
    __table_args__ = (
        UniqueConstraint("rating_id", "player_id", name="uq_rating_results_rating_player"),
        CheckConstraint("wins <= games_played", name="ck_rating_results_wins"),
        Index("idx_rating_results_rating_points", "rating_id", "points"),
    )

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    rating_id: Mapped[int] = mapped_column(ForeignKey("ratings.id"), nullable=False)
