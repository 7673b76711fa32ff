"""FastAPI application entry point."""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from game_catalog import __version__
from game_catalog.api import api_router
from game_catalog.config import Settings, get_settings
from game_catalog.database import create_engine, create_session_factory, create_tables
from game_catalog.errors import CatalogError, UnauthorizedError
from game_catalog.services.blobs import BlobStoreClient
from game_catalog.services.search import AlgoliaSearchClient
from game_catalog.utils.security import TokenService
from game_catalog.utils.validation import validation_message

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Application lifespan - runs on startup and shutdown."""
    settings: Settings = app.state.settings

    # Startup
    logger.info("Starting %s v%s", settings.app_name, __version__)
    logger.info("Debug mode: %s", settings.debug)
    logger.info("Database: %s", settings.database_url.split("///")[-1])  # Hide path details
    logger.info("Search index: %s", "configured" if settings.search_configured else "NOT CONFIGURED")
    logger.info(
        "Blob store: %s", "configured" if settings.blob_store_configured else "NOT CONFIGURED"
    )

    # Validate and log warnings
    warnings = settings.validate_runtime_config()
    if warnings:
        logger.warning("Configuration warnings:")
        for warning in warnings:
            logger.warning("  - %s", warning)
    else:
        logger.info("Configuration validation passed - no warnings")

    if settings.create_tables:
        await create_tables(app.state.engine)

    logger.info("Application startup complete")

    yield

    # Shutdown
    logger.info("Application shutting down")
    await app.state.search_client.close()
    await app.state.blob_store.close()
    await app.state.engine.dispose()


async def catalog_error_handler(_request: Request, exc: CatalogError) -> JSONResponse:
    """Handle CatalogError exceptions globally."""
    headers = {}
    if isinstance(exc, UnauthorizedError):
        headers["WWW-Authenticate"] = "Bearer"
    return JSONResponse(
        status_code=exc.status_code,
        content={"message": exc.message},
        headers=headers,
    )


async def validation_error_handler(
    _request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Report request validation failures as 400 InvalidInput."""
    return JSONResponse(
        status_code=400,
        content={"message": validation_message(exc.errors())},
    )


def create_app(settings: Settings | None = None) -> FastAPI:
    """Build the application and the collaborators it depends on.

    The engine, session factory, token service and upstream clients are
    created once here and shared through ``app.state``.
    """
    settings = settings or get_settings()

    app = FastAPI(
        title=settings.app_name,
        version=__version__,
        debug=settings.debug,
        lifespan=lifespan,
    )

    engine = create_engine(settings)
    app.state.settings = settings
    app.state.engine = engine
    app.state.session_factory = create_session_factory(engine)
    app.state.token_service = TokenService.from_settings(settings)
    app.state.search_client = AlgoliaSearchClient.from_settings(settings)
    app.state.blob_store = BlobStoreClient.from_settings(settings)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.add_exception_handler(CatalogError, catalog_error_handler)
    app.add_exception_handler(RequestValidationError, validation_error_handler)

    # Include API router
    app.include_router(api_router)

    @app.get("/health")
    async def health_check() -> dict[str, str]:
        """Health check endpoint to verify the API is running."""
        return {"status": "healthy", "version": __version__}

    return app


app = create_app()


def run() -> None:
    """Run the API with uvicorn on the configured host and port."""
    import uvicorn

    settings = get_settings()
    uvicorn.run(app, host=settings.host, port=settings.port)
