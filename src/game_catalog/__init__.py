"""Game Catalog API - video game catalog with owner-scoped editing."""

__version__ = "0.1.0"
