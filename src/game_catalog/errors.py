"""Exception hierarchy mapped onto HTTP error responses."""


class CatalogError(Exception):
    """Base exception for errors surfaced to API callers."""

    status_code: int = 500
    default_message: str = "Internal server error"

    def __init__(self, message: str | None = None, status_code: int | None = None) -> None:
        super().__init__(message or self.default_message)
        if status_code is not None:
            self.status_code = status_code

    @property
    def message(self) -> str:
        return str(self)


class InvalidInputError(CatalogError):
    """Raised when request fields are missing or malformed."""

    status_code = 400
    default_message = "Invalid input"


class ConflictError(CatalogError):
    """Raised when a unique value is already taken.

    Reported as 400, not 409.
    """

    status_code = 400
    default_message = "Resource already exists"


class InvalidCredentialsError(CatalogError):
    """Raised when a login attempt fails, whichever field was wrong."""

    status_code = 400
    default_message = "Invalid credentials"


class UnauthorizedError(CatalogError):
    """Raised when a request lacks a usable bearer token."""

    status_code = 401
    default_message = "Invalid token"


class TokenExpiredError(UnauthorizedError):
    """Raised when a token's expiry has passed."""


class TokenMalformedError(UnauthorizedError):
    """Raised when a token or its payload cannot be parsed."""


class TokenSignatureError(UnauthorizedError):
    """Raised when a token's signature does not match."""


class ForbiddenError(CatalogError):
    """Raised when the caller is authenticated but not allowed."""

    status_code = 403
    default_message = "Forbidden"


class NotFoundError(CatalogError):
    """Raised when a resource is not found."""

    status_code = 404
    default_message = "Resource not found"


class UpstreamError(CatalogError):
    """Raised when a third-party service (search index, blob store) fails."""

    status_code = 500
    default_message = "Upstream service error"
