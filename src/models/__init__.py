"""ORM models."""

from models.base import Base
from models.game import Game, GamePlayer
from models.rating import Rating, RatingGame
from models.stats import PlayerStats, RatingResult

__all__ = [
    "Base",
    "Game",
    "GamePlayer",
    "PlayerStats",
    "Rating",
    "RatingGame",
    "RatingResult",
]
