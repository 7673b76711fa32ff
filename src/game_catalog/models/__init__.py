"""SQLAlchemy ORM models."""

from game_catalog.models.game import Game, GamePlatform
from game_catalog.models.user import User

__all__ = [
    "Game",
    "GamePlatform",
    "User",
]
