"""Pydantic schemas for game API endpoints."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from game_catalog.database import SQL_INTEGER_MAX


class CamelModel(BaseModel):
    """Base schema exposing camelCase field names on the wire."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


def _normalize_platforms(platforms: list[str]) -> list[str]:
    """Strip names, drop blanks and duplicates, keep first-seen order."""
    seen: dict[str, None] = {}
    for name in platforms:
        name = name.strip()
        if name:
            seen.setdefault(name, None)
    return list(seen)


class GameBase(CamelModel):
    """Descriptive game fields shared by create and response schemas."""

    release_year: int | None = Field(default=None, description="Year of release")
    genre: str | None = Field(default=None, max_length=100, description="Genre")
    developer: str | None = Field(default=None, max_length=255, description="Developer studio")
    metascore: int | None = Field(default=None, ge=0, le=100, description="Metacritic score")

    @field_validator("release_year")
    @classmethod
    def validate_release_year(cls, v: int | None) -> int | None:
        """Validate year is reasonable."""
        if v is not None and not 1950 <= v <= 2100:
            msg = "Release year must be between 1950 and 2100"
            raise ValueError(msg)
        return v


class GameCreate(GameBase):
    """Schema for creating a game."""

    title: str = Field(min_length=1, max_length=255, description="Game title")
    platforms: list[str] = Field(default_factory=list, description="Platforms")

    @field_validator("title")
    @classmethod
    def validate_title(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("Title must not be blank")
        return v

    @field_validator("platforms")
    @classmethod
    def validate_platforms(cls, v: list[str]) -> list[str]:
        return _normalize_platforms(v)


class GameUpdate(GameBase):
    """Schema for a partial game update.

    Only fields present in the request body are applied. Ownership cannot
    be changed through this schema.
    """

    title: str | None = Field(default=None, max_length=255, description="Game title")
    platforms: list[str] | None = Field(default=None, description="Platforms")

    @field_validator("title")
    @classmethod
    def validate_title(cls, v: str | None) -> str:
        if v is None or not v.strip():
            raise ValueError("Title must not be blank")
        return v.strip()

    @field_validator("platforms")
    @classmethod
    def validate_platforms(cls, v: list[str] | None) -> list[str]:
        if v is None:
            raise ValueError("Platforms must be a list")
        return _normalize_platforms(v)


class GameResponse(GameBase):
    """Response schema for a stored game."""

    id: int = Field(description="Game ID")
    title: str = Field(description="Game title")
    platforms: list[str] = Field(description="Platforms")
    image_url: str | None = Field(default=None, description="Public URL of the cover image")
    owner_id: int = Field(description="ID of the user who created the game")
    created_at: datetime = Field(description="When the game was created")
    updated_at: datetime = Field(description="When the game was last updated")


class GameQuery(CamelModel):
    """Filters accepted by the game listing endpoint.

    Empty strings are treated as absent.
    """

    genre: str | None = None
    platform: str | None = None
    developer: str | None = None
    min_score: int | None = Field(default=None, ge=-SQL_INTEGER_MAX, le=SQL_INTEGER_MAX)
    max_score: int | None = Field(default=None, ge=-SQL_INTEGER_MAX, le=SQL_INTEGER_MAX)
    q: str | None = None

    @field_validator(
        "genre", "platform", "developer", "min_score", "max_score", "q", mode="before"
    )
    @classmethod
    def empty_as_none(cls, v: object) -> object:
        if isinstance(v, str) and not v:
            return None
        return v


class GameListResponse(CamelModel):
    """Paginated list of games with navigation links."""

    total: int = Field(description="Total number of matching games")
    page: int = Field(description="Current page number")
    page_size: int = Field(description="Items per page")
    games: list[GameResponse] = Field(description="Games on this page")
    links: dict[str, str] = Field(alias="_links", description="Navigation links")
