"""
Currency Service - converts peso prices for display.

Rates come from the currency-rate API and are cached on disk with their
fetch time. When the API fails, a cached rate is used while it is still
fresh; otherwise prices stay in the base currency.
"""

from __future__ import annotations

import time
from collections.abc import Callable
from dataclasses import dataclass
from pathlib import Path

from loguru import logger

from repositories.currency_repository import CurrencyRepository
from utils.constants import CURRENCY_RATE_CACHE_FILE, CURRENCY_RATE_FRESHNESS_SECONDS
from utils.errors import RemoteRequestError
from utils.json_store import locked_path, read_json_document, write_json_document

BASE_CURRENCY = "PHP"

CURRENCY_SYMBOLS = {
    "PHP": "₱",
    "USD": "$",
    "EUR": "€",
    "GBP": "£",
    "JPY": "¥",
}


@dataclass(frozen=True)
class ConvertedPrice:
    amount: float
    currency: str

    def formatted(self) -> str:
        return format_price(self.amount, self.currency)


def format_price(amount: float, currency: str = BASE_CURRENCY) -> str:
    """Format as ``₱1,234.00``; unknown currencies are prefixed with their code."""
    symbol = CURRENCY_SYMBOLS.get(currency.upper())
    prefix = symbol if symbol else f"{currency.upper()} "
    return f"{prefix}{amount:,.2f}"


class CurrencyService:
    def __init__(
        self,
        repository: CurrencyRepository | None,
        *,
        base_currency: str = BASE_CURRENCY,
        cache_path: Path | None = None,
        max_age_seconds: float = CURRENCY_RATE_FRESHNESS_SECONDS,
        clock: Callable[[], float] = time.time,
    ) -> None:
        self.repository = repository
        self.base_currency = base_currency.upper()
        self.cache_path = cache_path or CURRENCY_RATE_CACHE_FILE
        self.max_age_seconds = max_age_seconds
        self._clock = clock

    def _cache_key(self, target: str) -> str:
        return f"{self.base_currency}:{target.upper()}"

    def _cached_rate(self, target: str) -> float | None:
        entries = read_json_document(self.cache_path, {})
        entry = entries.get(self._cache_key(target)) if isinstance(entries, dict) else None
        if not isinstance(entry, dict):
            return None
        try:
            rate = float(entry["rate"])
            fetched_at = float(entry["fetched_at"])
        except (KeyError, TypeError, ValueError, OverflowError):
            return None
        if self._clock() - fetched_at > self.max_age_seconds:
            logger.debug(f"Cached {self._cache_key(target)} rate is stale")
            return None
        return rate

    def _store_rate(self, target: str, rate: float) -> None:
        with locked_path(self.cache_path):
            entries = read_json_document(self.cache_path, {})
            if not isinstance(entries, dict):
                entries = {}
            entries[self._cache_key(target)] = {"rate": rate, "fetched_at": self._clock()}
            try:
                write_json_document(self.cache_path, entries)
            except OSError as exc:  # pragma: no cover
                logger.warning(f"Unable to persist currency rate cache: {exc}")

    def get_rate(self, target: str) -> float | None:
        """Return the base→target multiplier, or ``None`` to stay in the base currency."""
        if target.upper() == self.base_currency:
            return 1.0
        if self.repository is not None:
            try:
                rate = self.repository.fetch_rate(self.base_currency, target)
            except RemoteRequestError as exc:
                logger.warning(f"Currency rate fetch failed, trying cache: {exc}")
            else:
                self._store_rate(target, rate)
                return rate
        return self._cached_rate(target)

    def convert(self, amount: float, target: str) -> ConvertedPrice:
        rate = self.get_rate(target)
        if rate is None:
            return ConvertedPrice(amount=amount, currency=self.base_currency)
        return ConvertedPrice(amount=round(amount * rate, 2), currency=target.upper())
