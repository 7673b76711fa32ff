"""Application configuration using Pydantic Settings."""

from functools import lru_cache

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )

    # App settings
    app_name: str = "Game Catalog API"
    debug: bool = False
    secret_key: str  # Required, no default
    host: str = "0.0.0.0"
    port: int = 3000
    cors_origins: list[str] = ["*"]

    # Database
    database_url: str = "sqlite+aiosqlite:///./game_catalog.db"
    create_tables: bool = True

    # JWT Authentication
    jwt_algorithm: str = "HS256"
    jwt_access_token_expire_minutes: int = 60 * 24
    bcrypt_rounds: int = 10

    # Listing
    default_page_size: int = 10
    max_page_size: int = 100

    # Algolia search index
    algolia_app_id: str = ""
    algolia_api_key: str = ""
    algolia_index_name: str = "videogames"

    # Blob store for game cover images
    blob_store_url: str = ""
    blob_store_token: str = ""
    blob_public_url: str = ""

    # Image uploads
    max_image_bytes: int = 3 * 1024 * 1024
    image_width: int = 600
    image_height: int = 400

    @field_validator("secret_key")
    @classmethod
    def validate_secret_key(cls, v: str, info) -> str:
        """Validate that secret_key is secure."""
        if not v:
            raise ValueError("SECRET_KEY is required")

        # In production mode, ensure secret key is strong
        debug = info.data.get("debug", False)
        if not debug:
            if len(v) < 32:
                raise ValueError("SECRET_KEY must be at least 32 characters in production mode")
            if v in ("change-me-in-production", "secret", "password", "changeme"):
                raise ValueError("SECRET_KEY must not be a common weak value")

        return v

    @field_validator("bcrypt_rounds")
    @classmethod
    def validate_bcrypt_rounds(cls, v: int) -> int:
        """Validate the bcrypt work factor is within the range bcrypt accepts."""
        if not 4 <= v <= 31:
            raise ValueError("BCRYPT_ROUNDS must be between 4 and 31")
        return v

    @property
    def search_configured(self) -> bool:
        return bool(self.algolia_app_id and self.algolia_api_key)

    @property
    def blob_store_configured(self) -> bool:
        return bool(self.blob_store_url and self.blob_store_token)

    def validate_runtime_config(self) -> list[str]:
        """Validate runtime configuration and return warnings."""
        warnings = []

        if not self.search_configured:
            warnings.append(
                "ALGOLIA_APP_ID / ALGOLIA_API_KEY are not set - game search will not work"
            )

        if not self.blob_store_configured:
            warnings.append(
                "BLOB_STORE_URL / BLOB_STORE_TOKEN are not set - image uploads will fail"
            )

        if self.max_page_size < self.default_page_size:
            warnings.append("MAX_PAGE_SIZE is smaller than DEFAULT_PAGE_SIZE")

        # Warn about debug mode in production
        if self.debug:
            warnings.append("DEBUG mode is enabled - should be disabled in production")

        return warnings


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
