"""Player result ORM models."""

from models.stats.player_stats import PlayerStats
from models.stats.rating_result import RatingResult

__all__ = ["PlayerStats", "RatingResult"]
