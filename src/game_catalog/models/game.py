"""Game and platform ORM models."""

from __future__ import annotations

from datetime import datetime

from sqlalchemy import ForeignKey, String
from sqlalchemy.ext.associationproxy import AssociationProxy, association_proxy
from sqlalchemy.orm import Mapped, mapped_column, relationship

from game_catalog.database import Base, utcnow


class Game(Base):
    """A video game in the catalog, owned by the user who created it."""

    __tablename__ = "games"

    id: Mapped[int] = mapped_column(primary_key=True)
    title: Mapped[str] = mapped_column(String(255), index=True)
    release_year: Mapped[int | None] = mapped_column(nullable=True)
    genre: Mapped[str | None] = mapped_column(String(100), nullable=True, index=True)
    developer: Mapped[str | None] = mapped_column(String(255), nullable=True, index=True)
    metascore: Mapped[int | None] = mapped_column(nullable=True, index=True)
    image_url: Mapped[str | None] = mapped_column(String(500), nullable=True)
    owner_id: Mapped[int] = mapped_column(ForeignKey("users.id", ondelete="CASCADE"), index=True)
    created_at: Mapped[datetime] = mapped_column(default=utcnow)
    updated_at: Mapped[datetime] = mapped_column(default=utcnow)

    # Relationships
    platform_entries: Mapped[list[GamePlatform]] = relationship(
        back_populates="game",
        cascade="all, delete-orphan",
        lazy="selectin",
        order_by="GamePlatform.id",
    )

    # Platform names in insertion order; assigning a list replaces the entries
    platforms: AssociationProxy[list[str]] = association_proxy(
        "platform_entries",
        "name",
        creator=lambda name: GamePlatform(name=name),
    )


class GamePlatform(Base):
    """A platform a game is released on."""

    __tablename__ = "game_platforms"

    id: Mapped[int] = mapped_column(primary_key=True)
    game_id: Mapped[int] = mapped_column(ForeignKey("games.id", ondelete="CASCADE"), index=True)
    name: Mapped[str] = mapped_column(String(100), index=True)

    # Relationships
    game: Mapped[Game] = relationship(back_populates="platform_entries")
