"""Listing engine: pagination bounds and navigation links for game lists."""

import math
from collections.abc import Sequence
from dataclasses import dataclass, field

from game_catalog.database import SQL_INTEGER_MAX
from game_catalog.errors import InvalidInputError
from game_catalog.models.game import Game
from game_catalog.schemas.game import GameQuery
from game_catalog.services.games import GameRepository


@dataclass
class GameListing:
    """One page of games along with the numbers needed to navigate."""

    total: int
    page: int
    page_size: int
    items: Sequence[Game]
    links: dict[str, str] = field(default_factory=dict)


def last_page_number(total: int, page_size: int) -> int:
    """Number of the last page, 0 when there is nothing to list."""
    return math.ceil(total / page_size)


def build_links(base_url: str, page: int, page_size: int, total: int) -> dict[str, str]:
    """Build navigation links for a page.

    ``self``, ``first`` and ``last`` are always present; ``prev`` only after
    the first page and ``next`` only before the last. Filter parameters are
    not carried over into the links.
    """
    last_page = last_page_number(total, page_size)

    def link(number: int) -> str:
        return f"{base_url}?page={number}&limit={page_size}"

    links = {
        "self": link(page),
        "first": link(1),
        "last": link(last_page),
    }
    if page > 1:
        links["prev"] = link(page - 1)
    if page < last_page:
        links["next"] = link(page + 1)
    return links


class ListingEngine:
    """Runs paginated, filtered game listings.

    Pages past the end are not clamped: they come back empty with the same
    totals and links.
    """

    def __init__(self, repository: GameRepository, max_page_size: int = 100) -> None:
        self.repository = repository
        self.max_page_size = max_page_size

    def validate_page(self, page: int, page_size: int) -> None:
        if page < 1:
            raise InvalidInputError("page must be at least 1")
        if page_size < 1:
            raise InvalidInputError("limit must be at least 1")
        if page_size > self.max_page_size:
            raise InvalidInputError(f"limit must be at most {self.max_page_size}")

    async def list(
        self,
        query: GameQuery,
        page: int,
        page_size: int,
        base_url: str,
    ) -> GameListing:
        self.validate_page(page, page_size)

        total = await self.repository.count_matching(query)
        skip = (page - 1) * page_size
        items: Sequence[Game] = []
        # No row can sit beyond the largest offset the database accepts
        if skip <= SQL_INTEGER_MAX:
            items = await self.repository.find_matching(query, skip=skip, limit=page_size)

        return GameListing(
            total=total,
            page=page,
            page_size=page_size,
            items=items,
            links=build_links(base_url, page, page_size, total),
        )
