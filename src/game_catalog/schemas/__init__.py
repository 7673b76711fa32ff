"""Pydantic schemas for request/response validation."""

from game_catalog.schemas.game import (
    GameCreate,
    GameListResponse,
    GameQuery,
    GameResponse,
    GameUpdate,
)
from game_catalog.schemas.user import (
    LoginCredentials,
    MessageResponse,
    Token,
    UserCredentials,
    UserResponse,
)

__all__ = [
    # Game schemas
    "GameCreate",
    "GameUpdate",
    "GameResponse",
    "GameQuery",
    "GameListResponse",
    # User schemas
    "LoginCredentials",
    "UserCredentials",
    "UserResponse",
    "Token",
    "MessageResponse",
]
