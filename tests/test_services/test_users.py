"""Tests for the credential store."""

import pytest
from sqlalchemy.ext.asyncio import AsyncSession

from game_catalog.errors import ConflictError, InvalidCredentialsError, InvalidInputError
from game_catalog.services.users import CredentialStore


@pytest.fixture
def users(session: AsyncSession) -> CredentialStore:
    return CredentialStore(session, bcrypt_rounds=4)


class TestCredentialStore:
    """Tests for registering and verifying users."""

    async def test_register_and_verify(self, users: CredentialStore) -> None:
        user = await users.register("alice", "wonderland")

        assert await users.verify_credentials("alice", "wonderland") == user
        assert await users.get_by_id(user.id) == user

    @pytest.mark.parametrize(("username", "password"), [("", "secret"), ("alice", "")])
    async def test_register_empty_fields(
        self, users: CredentialStore, username: str, password: str
    ) -> None:
        with pytest.raises(InvalidInputError, match="Missing fields"):
            await users.register(username, password)

    async def test_register_duplicate(self, users: CredentialStore) -> None:
        await users.register("alice", "wonderland")

        with pytest.raises(ConflictError) as exc_info:
            await users.register("alice", "other")

        assert exc_info.value.message == "User exists"
        assert exc_info.value.status_code == 400

    async def test_verify_wrong_password(self, users: CredentialStore) -> None:
        await users.register("alice", "wonderland")

        with pytest.raises(InvalidCredentialsError):
            await users.verify_credentials("alice", "looking-glass")

    async def test_get_by_id_beyond_integer_range(self, users: CredentialStore) -> None:
        assert await users.get_by_id(10**20) is None


def test_conflict_default_message_is_generic() -> None:
    assert ConflictError().message == "Resource already exists"
