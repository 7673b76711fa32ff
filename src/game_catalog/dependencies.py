"""FastAPI dependencies: service providers, authentication and ownership checks.

Long-lived collaborators (token service, search client, blob store) are
built once by the application factory and read from ``app.state``;
request-scoped ones are built around the request's database session.
"""

from typing import Annotated

from fastapi import Depends, Request
from fastapi.security import APIKeyHeader
from sqlalchemy.ext.asyncio import AsyncSession

from game_catalog.config import Settings
from game_catalog.database import get_db
from game_catalog.errors import ForbiddenError, NotFoundError, UnauthorizedError
from game_catalog.models.game import Game
from game_catalog.models.user import User
from game_catalog.services.blobs import BlobStoreClient
from game_catalog.services.games import GameRepository
from game_catalog.services.listing import ListingEngine
from game_catalog.services.search import AlgoliaSearchClient
from game_catalog.services.users import CredentialStore
from game_catalog.utils.security import TokenService

# Raw Authorization header; the Bearer prefix is checked by get_current_user
authorization_header = APIKeyHeader(
    name="Authorization",
    auto_error=False,
    description="Bearer token: `Bearer <token>`",
)

BEARER_PREFIX = "Bearer "


def get_app_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_token_service(request: Request) -> TokenService:
    return request.app.state.token_service


def get_search_client(request: Request) -> AlgoliaSearchClient:
    return request.app.state.search_client


def get_blob_store(request: Request) -> BlobStoreClient:
    return request.app.state.blob_store


def get_credential_store(
    db: AsyncSession = Depends(get_db),
    settings: Settings = Depends(get_app_settings),
) -> CredentialStore:
    return CredentialStore(db, bcrypt_rounds=settings.bcrypt_rounds)


def get_game_repository(db: AsyncSession = Depends(get_db)) -> GameRepository:
    return GameRepository(db)


def get_listing_engine(
    repository: GameRepository = Depends(get_game_repository),
    settings: Settings = Depends(get_app_settings),
) -> ListingEngine:
    return ListingEngine(repository, max_page_size=settings.max_page_size)


def extract_bearer_token(authorization: str | None) -> str:
    """Return the token from an ``Authorization: Bearer <token>`` header.

    Raises:
        UnauthorizedError: If the header is missing or has any other form
    """
    if not authorization or not authorization.startswith(BEARER_PREFIX):
        raise UnauthorizedError("No token")
    token = authorization[len(BEARER_PREFIX) :]
    if not token:
        raise UnauthorizedError("No token")
    return token


async def get_current_user(
    authorization: Annotated[str | None, Depends(authorization_header)],
    token_service: TokenService = Depends(get_token_service),
    users: CredentialStore = Depends(get_credential_store),
) -> User:
    """Get the current authenticated user from the bearer token.

    This is a FastAPI dependency that validates the JWT token from the
    Authorization header and returns the corresponding user.

    Raises:
        UnauthorizedError: If the token is missing, malformed, forged or
            expired, or the user it names no longer exists
    """
    token = extract_bearer_token(authorization)
    user_id = token_service.verify(token)

    user = await users.get_by_id(user_id)
    if user is None:
        raise UnauthorizedError("Invalid token")

    return user


# Type alias for use in route dependencies
CurrentUser = Annotated[User, Depends(get_current_user)]


async def get_owned_game(
    game_id: int,
    current_user: CurrentUser,
    games: GameRepository = Depends(get_game_repository),
) -> Game:
    """Load the addressed game and check the current user owns it.

    Runs after authentication since it depends on the resolved user.

    Raises:
        NotFoundError: If the game does not exist
        ForbiddenError: If the game belongs to another user
    """
    game = await games.find_by_id(game_id)
    if game is None:
        raise NotFoundError("Game not found")

    if game.owner_id != current_user.id:
        raise ForbiddenError("Forbidden")

    return game


OwnedGame = Annotated[Game, Depends(get_owned_game)]
