"""Business logic and third-party service clients."""

from game_catalog.services.base import BaseAPIClient
from game_catalog.services.blobs import BlobStoreClient
from game_catalog.services.games import GameRepository, build_filter_clauses
from game_catalog.services.images import resize_image
from game_catalog.services.listing import GameListing, ListingEngine, build_links
from game_catalog.services.search import AlgoliaSearchClient
from game_catalog.services.users import CredentialStore

__all__ = [
    "AlgoliaSearchClient",
    "BaseAPIClient",
    "BlobStoreClient",
    "CredentialStore",
    "GameListing",
    "GameRepository",
    "ListingEngine",
    "build_filter_clauses",
    "build_links",
    "resize_image",
]
