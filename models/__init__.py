"""Canonical data models shared by the build and favorites services."""

from models.build import BudgetRange, Build, BuildCollection
from models.favorite import FavoriteRecord, SavedFavorite, price_key
from models.part import Part
from models.user import SessionUser

__all__ = [
    "BudgetRange",
    "Build",
    "BuildCollection",
    "FavoriteRecord",
    "Part",
    "SavedFavorite",
    "SessionUser",
    "price_key",
]
