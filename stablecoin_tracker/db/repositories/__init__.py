"""Repository layer for database access."""

from stablecoin_tracker.db.repositories.base import Repository
from stablecoin_tracker.db.repositories.stablecoin import StablecoinRepository

__all__ = [
    "Repository",
    "StablecoinRepository",
]
