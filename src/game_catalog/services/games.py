"""Game repository: persistence and filtered, paginated reads."""

import logging
from collections.abc import Sequence
from typing import Any

from sqlalchemy import ColumnElement, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from game_catalog.database import SQL_INTEGER_MAX, utcnow
from game_catalog.models.game import Game, GamePlatform
from game_catalog.schemas.game import GameCreate, GameQuery, GameUpdate

logger = logging.getLogger(__name__)


def build_filter_clauses(query: GameQuery) -> list[ColumnElement[bool]]:
    """Translate listing filters into SQL predicates to be ANDed together.

    Absent filters impose no constraint. Score bounds are inclusive and an
    inverted range simply matches nothing.
    """
    clauses: list[ColumnElement[bool]] = []

    if query.genre is not None:
        clauses.append(Game.genre == query.genre)
    if query.developer is not None:
        clauses.append(Game.developer == query.developer)
    if query.platform is not None:
        clauses.append(Game.platform_entries.any(GamePlatform.name == query.platform))
    if query.min_score is not None:
        clauses.append(Game.metascore >= query.min_score)
    if query.max_score is not None:
        clauses.append(Game.metascore <= query.max_score)
    if query.q is not None:
        clauses.append(Game.title.icontains(query.q, autoescape=True))

    return clauses


class GameRepository:
    """Stores game records and runs filtered reads against them."""

    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def create(
        self,
        game_data: GameCreate,
        owner_id: int,
        image_url: str | None = None,
    ) -> Game:
        """Store a new game owned by ``owner_id``."""
        now = utcnow()
        game = Game(
            title=game_data.title,
            release_year=game_data.release_year,
            genre=game_data.genre,
            developer=game_data.developer,
            metascore=game_data.metascore,
            image_url=image_url,
            owner_id=owner_id,
            created_at=now,
            updated_at=now,
        )
        game.platforms = list(game_data.platforms)
        self.session.add(game)
        await self.session.flush()

        logger.info("Created game %s (owner=%s)", game.id, owner_id)
        return game

    async def find_by_id(self, game_id: int) -> Game | None:
        if not -SQL_INTEGER_MAX <= game_id <= SQL_INTEGER_MAX:
            return None
        result = await self.session.execute(select(Game).where(Game.id == game_id))
        return result.scalar_one_or_none()

    async def update(self, game: Game, game_data: GameUpdate) -> Game:
        """Merge the fields present in ``game_data`` into ``game``.

        The owner is never changed.
        """
        changes: dict[str, Any] = game_data.model_dump(exclude_unset=True)
        platforms = changes.pop("platforms", None)

        for field, value in changes.items():
            setattr(game, field, value)
        if platforms is not None:
            game.platforms = platforms

        game.updated_at = utcnow()
        await self.session.flush()

        logger.info("Updated game %s fields=%s", game.id, sorted(game_data.model_fields_set))
        return game

    async def delete(self, game: Game) -> None:
        """Permanently remove a game and its platform entries."""
        await self.session.delete(game)
        await self.session.flush()
        logger.info("Deleted game %s (owner=%s)", game.id, game.owner_id)

    async def count_matching(self, query: GameQuery) -> int:
        count_query = select(func.count(Game.id)).where(*build_filter_clauses(query))
        result = await self.session.execute(count_query)
        return result.scalar_one()

    async def find_matching(self, query: GameQuery, skip: int, limit: int) -> Sequence[Game]:
        """Return one page of matching games in insertion order."""
        results_query = (
            select(Game)
            .where(*build_filter_clauses(query))
            .order_by(Game.id)
            .offset(skip)
            .limit(limit)
        )
        result = await self.session.execute(results_query)
        return result.scalars().all()
