"""Game catalog API endpoints."""

import logging
import time
from pathlib import PurePath
from typing import Annotated, Any

from fastapi import APIRouter, Depends, File, Form, Query, Request, UploadFile
from starlette.concurrency import run_in_threadpool

from game_catalog.config import Settings
from game_catalog.dependencies import (
    CurrentUser,
    OwnedGame,
    get_app_settings,
    get_blob_store,
    get_game_repository,
    get_listing_engine,
    get_search_client,
)
from game_catalog.errors import InvalidInputError, NotFoundError
from game_catalog.models.game import Game
from game_catalog.schemas.game import (
    GameCreate,
    GameListResponse,
    GameQuery,
    GameResponse,
    GameUpdate,
)
from game_catalog.schemas.user import MessageResponse
from game_catalog.services.blobs import BlobStoreClient
from game_catalog.services.games import GameRepository
from game_catalog.services.images import resize_image
from game_catalog.services.listing import ListingEngine
from game_catalog.services.search import AlgoliaSearchClient
from game_catalog.utils.validation import parse_input

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/games", tags=["games"])


def game_to_response(game: Game) -> GameResponse:
    """Convert a Game model to GameResponse schema.

    Requires game.platform_entries to be loaded.
    """
    return GameResponse(
        id=game.id,
        title=game.title,
        platforms=list(game.platforms),
        release_year=game.release_year,
        genre=game.genre,
        developer=game.developer,
        metascore=game.metascore,
        image_url=game.image_url,
        owner_id=game.owner_id,
        created_at=game.created_at,
        updated_at=game.updated_at,
    )


def listing_base_url(request: Request) -> str:
    """Request URL without its query string."""
    url = request.url
    return f"{url.scheme}://{url.netloc}{url.path}"


def image_blob_key(filename: str | None) -> str:
    """Unique blob key for an uploaded cover image."""
    name = PurePath(filename or "cover").name or "cover"
    return f"games/{int(time.time() * 1000)}-{name}"


async def store_cover_image(
    image: UploadFile,
    blob_store: BlobStoreClient,
    settings: Settings,
) -> str:
    """Resize an uploaded cover image and store it, returning its public URL.

    Raises:
        InvalidInputError: If the file is too large or not an image
        UpstreamError: If the blob store rejects the upload
    """
    data = await image.read(settings.max_image_bytes + 1)
    if len(data) > settings.max_image_bytes:
        limit_mb = settings.max_image_bytes / (1024 * 1024)
        raise InvalidInputError(f"Image must be at most {limit_mb:g}MB")

    resized = await run_in_threadpool(
        resize_image, data, (settings.image_width, settings.image_height)
    )
    key = image_blob_key(image.filename)
    url = await blob_store.upload(key, resized, content_type="image/jpeg")
    logger.info("Stored cover image %s (%d bytes)", key, len(resized))
    return url


@router.get("", response_model=GameListResponse)
async def list_games(
    request: Request,
    page: int = Query(1, description="Page number"),
    limit: int | None = Query(None, description="Items per page"),
    genre: str | None = Query(None, description="Exact genre"),
    platform: str | None = Query(None, description="Exact platform"),
    developer: str | None = Query(None, description="Exact developer"),
    min_score: str | None = Query(None, alias="minScore", description="Minimum metascore"),
    max_score: str | None = Query(None, alias="maxScore", description="Maximum metascore"),
    q: str | None = Query(None, description="Case-insensitive title substring"),
    listing: ListingEngine = Depends(get_listing_engine),
    settings: Settings = Depends(get_app_settings),
) -> GameListResponse:
    """List games with pagination and filtering.

    All provided filters are combined. Navigation links carry only the
    page and limit parameters.
    """
    query = parse_input(
        GameQuery,
        {
            "genre": genre,
            "platform": platform,
            "developer": developer,
            "min_score": min_score,
            "max_score": max_score,
            "q": q,
        },
    )
    page_size = limit if limit is not None else settings.default_page_size

    result = await listing.list(query, page, page_size, base_url=listing_base_url(request))

    return GameListResponse(
        total=result.total,
        page=result.page,
        page_size=result.page_size,
        games=[game_to_response(game) for game in result.items],
        links=result.links,
    )


@router.get("/search", response_model=list[dict[str, Any]])
async def search_games(
    q: str | None = Query(None, description="Search query"),
    search_client: AlgoliaSearchClient = Depends(get_search_client),
) -> list[dict[str, Any]]:
    """Keyword search over the hosted search index.

    Raises:
        InvalidInputError 400: If q is missing
        UpstreamError 500: If the search index fails
    """
    if not q or not q.strip():
        raise InvalidInputError("Missing search query")

    return await search_client.search(q)


@router.get("/{game_id}", response_model=GameResponse)
async def get_game(
    game_id: int,
    games: GameRepository = Depends(get_game_repository),
) -> GameResponse:
    """Get a single game by ID."""
    game = await games.find_by_id(game_id)
    if game is None:
        raise NotFoundError("Game not found")
    return game_to_response(game)


@router.post("", response_model=GameResponse, status_code=201)
async def create_game(
    current_user: CurrentUser,
    title: Annotated[str | None, Form()] = None,
    platforms: Annotated[list[str] | None, Form()] = None,
    platform: Annotated[list[str] | None, Form()] = None,
    release_year: Annotated[str | None, Form(alias="releaseYear")] = None,
    release_year_snake: Annotated[str | None, Form(alias="release_year")] = None,
    genre: Annotated[str | None, Form()] = None,
    developer: Annotated[str | None, Form()] = None,
    metascore: Annotated[str | None, Form()] = None,
    image: Annotated[UploadFile | None, File()] = None,
    games: GameRepository = Depends(get_game_repository),
    blob_store: BlobStoreClient = Depends(get_blob_store),
    settings: Settings = Depends(get_app_settings),
) -> GameResponse:
    """Create a game owned by the current user.

    Accepts multipart form fields and an optional cover image, which is
    resized to a fixed-size JPEG and stored in the blob store.
    Requires authentication.
    """
    fields = {
        "title": title,
        "platforms": [*(platforms or []), *(platform or [])],
        "release_year": release_year or release_year_snake,
        "genre": genre,
        "developer": developer,
        "metascore": metascore,
    }
    game_data = parse_input(
        GameCreate,
        {key: value for key, value in fields.items() if value not in (None, "")},
    )

    image_url = None
    if image is not None and image.filename:
        image_url = await store_cover_image(image, blob_store, settings)

    game = await games.create(game_data, owner_id=current_user.id, image_url=image_url)
    return game_to_response(game)


@router.put("/{game_id}", response_model=GameResponse)
async def update_game(
    game: OwnedGame,
    game_data: GameUpdate,
    games: GameRepository = Depends(get_game_repository),
) -> GameResponse:
    """Update a game with the fields present in the request body.

    Only the owner can update a game.
    Requires authentication.
    """
    game = await games.update(game, game_data)
    return game_to_response(game)


@router.delete("/{game_id}", response_model=MessageResponse)
async def delete_game(
    game: OwnedGame,
    games: GameRepository = Depends(get_game_repository),
) -> MessageResponse:
    """Delete a game permanently.

    Only the owner can delete a game.
    Requires authentication.
    """
    await games.delete(game)
    return MessageResponse(message="Game deleted")
