"""Credential store: user persistence and password verification."""

import logging

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from game_catalog.database import SQL_INTEGER_MAX, utcnow
from game_catalog.errors import ConflictError, InvalidCredentialsError, InvalidInputError
from game_catalog.models.user import User
from game_catalog.utils.security import hash_password, verify_password

logger = logging.getLogger(__name__)


class CredentialStore:
    """Persists user records and owns password hashing.

    Plaintext passwords are hashed on registration and never stored or logged.
    """

    def __init__(self, session: AsyncSession, bcrypt_rounds: int = 10) -> None:
        self.session = session
        self.bcrypt_rounds = bcrypt_rounds

    async def get_by_id(self, user_id: int) -> User | None:
        if not -SQL_INTEGER_MAX <= user_id <= SQL_INTEGER_MAX:
            return None
        result = await self.session.execute(select(User).where(User.id == user_id))
        return result.scalar_one_or_none()

    async def get_by_username(self, username: str) -> User | None:
        result = await self.session.execute(select(User).where(User.username == username))
        return result.scalar_one_or_none()

    async def register(self, username: str, password: str) -> User:
        """Register a new user.

        Raises:
            InvalidInputError: If username or password is empty
            ConflictError: If the username is already taken
        """
        if not username or not password:
            raise InvalidInputError("Missing fields")

        if await self.get_by_username(username) is not None:
            raise ConflictError("User exists")

        user = User(
            username=username,
            hashed_password=hash_password(password, rounds=self.bcrypt_rounds),
            created_at=utcnow(),
        )
        self.session.add(user)
        try:
            await self.session.flush()
        except IntegrityError:
            # Lost a race with a concurrent registration of the same name
            raise ConflictError("User exists") from None

        logger.info("Registered user %s (id=%s)", user.username, user.id)
        return user

    async def verify_credentials(self, username: str, password: str) -> User:
        """Return the user matching the credentials.

        Raises:
            InvalidCredentialsError: If the user does not exist or the password is wrong
        """
        user = await self.get_by_username(username)
        if user is None or not verify_password(password, user.hashed_password):
            logger.info("Failed login attempt for username %s", username)
            raise InvalidCredentialsError("Invalid credentials")
        return user
