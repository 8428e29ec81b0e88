"""HTTP collaborators for the builds, favorites, and currency-rate APIs."""

from repositories.api_client import ApiClient
from repositories.builds_repository import BuildsRepository
from repositories.currency_repository import CurrencyRepository
from repositories.favorites_repository import FavoritesRepository

__all__ = ["ApiClient", "BuildsRepository", "CurrencyRepository", "FavoritesRepository"]
