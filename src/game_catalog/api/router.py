"""Main API router aggregation."""

from fastapi import APIRouter

from game_catalog.api.auth import router as auth_router
from game_catalog.api.games import router as games_router

# Main API router
api_router = APIRouter()

# Include all sub-routers
api_router.include_router(auth_router)
api_router.include_router(games_router)
