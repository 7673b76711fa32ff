"""Authentication API endpoints."""

from fastapi import APIRouter, Depends

from game_catalog.dependencies import CurrentUser, get_credential_store, get_token_service
from game_catalog.schemas.user import (
    LoginCredentials,
    MessageResponse,
    Token,
    UserCredentials,
    UserResponse,
)
from game_catalog.services.users import CredentialStore
from game_catalog.utils.security import TokenService

router = APIRouter(prefix="/auth", tags=["auth"])


@router.post("/register", response_model=MessageResponse, status_code=201)
async def register(
    credentials: UserCredentials,
    users: CredentialStore = Depends(get_credential_store),
) -> MessageResponse:
    """Register a new user.

    The password is securely hashed before storage.

    Raises:
        InvalidInputError 400: If username or password is missing
        ConflictError 400: If the username already exists
    """
    await users.register(credentials.username, credentials.password)
    return MessageResponse(message="User created")


@router.post("/login", response_model=Token)
async def login(
    credentials: LoginCredentials,
    users: CredentialStore = Depends(get_credential_store),
    token_service: TokenService = Depends(get_token_service),
) -> Token:
    """Authenticate user and return a bearer token valid for one day.

    Raises:
        InvalidCredentialsError 400: If the username or password is wrong
    """
    user = await users.verify_credentials(credentials.username, credentials.password)
    return Token(token=token_service.issue(user.id))


@router.get("/me", response_model=UserResponse)
async def get_current_user_info(current_user: CurrentUser) -> UserResponse:
    """Get the current authenticated user's information."""
    return UserResponse(id=current_user.id, username=current_user.username)
