"""Security utilities for password hashing and JWT handling."""

from datetime import UTC, datetime, timedelta

import bcrypt
from jose import jwt
from jose.exceptions import ExpiredSignatureError, JWTClaimsError, JWTError

from game_catalog.config import Settings
from game_catalog.errors import TokenExpiredError, TokenMalformedError, TokenSignatureError

# bcrypt only looks at the first 72 bytes of a password
MAX_PASSWORD_BYTES = 72


def hash_password(password: str, rounds: int = 12) -> str:
    """Hash a plain text password using bcrypt."""
    password_bytes = password.encode("utf-8")
    salt = bcrypt.gensalt(rounds=rounds)
    hashed = bcrypt.hashpw(password_bytes, salt)
    return hashed.decode("utf-8")


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Verify a plain text password against a hashed password."""
    password_bytes = plain_password.encode("utf-8")
    if len(password_bytes) > MAX_PASSWORD_BYTES:
        # Never stored, so it cannot match
        return False
    hashed_bytes = hashed_password.encode("utf-8")
    try:
        return bcrypt.checkpw(password_bytes, hashed_bytes)
    except ValueError:
        # Stored hash is not a valid bcrypt hash, or the password is too long
        return False


class TokenService:
    """Issues and verifies signed bearer tokens carrying a user ID.

    Tokens are stateless: nothing is persisted and there is no revocation,
    a token stays valid until its expiry passes.
    """

    def __init__(
        self,
        secret_key: str,
        algorithm: str = "HS256",
        expires_delta: timedelta = timedelta(days=1),
    ) -> None:
        self.secret_key = secret_key
        self.algorithm = algorithm
        self.expires_delta = expires_delta

    @classmethod
    def from_settings(cls, settings: Settings) -> "TokenService":
        return cls(
            secret_key=settings.secret_key,
            algorithm=settings.jwt_algorithm,
            expires_delta=timedelta(minutes=settings.jwt_access_token_expire_minutes),
        )

    def issue(self, user_id: int, expires_delta: timedelta | None = None) -> str:
        """Create a JWT access token for a user.

        Args:
            user_id: ID of the user, stored as a string in the "sub" claim.
            expires_delta: Optional custom lifetime. Defaults to the service lifetime.

        Returns:
            Encoded JWT token string
        """
        expire = datetime.now(UTC) + (expires_delta or self.expires_delta)
        to_encode = {"sub": str(user_id), "exp": expire}
        return jwt.encode(to_encode, self.secret_key, algorithm=self.algorithm)

    def verify(self, token: str) -> int:
        """Verify a JWT access token and return the user ID it carries.

        Raises:
            TokenMalformedError: If the token or its claims cannot be parsed
            TokenSignatureError: If the signature does not match
            TokenExpiredError: If the token has expired
        """
        try:
            jwt.get_unverified_claims(token)
        except JWTError as e:
            raise TokenMalformedError("Malformed token") from e

        try:
            payload = jwt.decode(token, self.secret_key, algorithms=[self.algorithm])
        except ExpiredSignatureError as e:
            raise TokenExpiredError("Token expired") from e
        except JWTClaimsError as e:
            raise TokenMalformedError("Malformed token") from e
        except JWTError as e:
            raise TokenSignatureError("Invalid token signature") from e

        user_id_str = payload.get("sub")
        if not isinstance(user_id_str, str):
            raise TokenMalformedError("Malformed token")

        try:
            return int(user_id_str)
        except ValueError:
            raise TokenMalformedError("Malformed token") from None
