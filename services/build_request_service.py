"""
Build Request Service - asks the builds API for a batch of recommended builds.

This module handles:
- Request validation against per-use-case minimum budgets
- Request payloads for the current and legacy API forms
- Loading the response into a collection and resetting the cursor
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, replace
from typing import Any

from loguru import logger

from models.build import Build, BuildCollection
from repositories.builds_repository import BuildsRepository
from services.build_collection import load_collection
from services.build_cursor import BuildCursor
from utils.coercion import coerce_price
from utils.errors import BuildRequestInProgressError, InvalidBuildRequestError


@dataclass(frozen=True)
class BuildRequest:
    """What the user asked for: free-text needs or a use case, plus a budget."""

    description: str = ""
    min_price: float | None = None
    max_price: float | None = None
    detailed_needs: str | None = None
    category: str | None = None

    @property
    def is_legacy(self) -> bool:
        return bool(self.category) and not self.description

    def to_payload(self) -> dict[str, Any]:
        if self.is_legacy:
            return {"category": self.category, "min": self.min_price, "max": self.max_price}
        payload: dict[str, Any] = {"description": self.description}
        if self.min_price is not None:
            payload["min"] = self.min_price
        if self.max_price is not None:
            payload["max"] = self.max_price
        if self.detailed_needs:
            payload["detailed_needs"] = self.detailed_needs
        return payload

    def with_minimum(self, minimum: float) -> BuildRequest:
        """Raise ``min_price`` (and ``max_price`` if needed) to at least ``minimum``."""
        low = max(self.min_price or 0.0, minimum)
        high = self.max_price
        if high is not None and high < low:
            high = low
        return replace(self, min_price=low, max_price=high)

    def validate(self, minimum: float = 0.0) -> None:
        if not self.description.strip() and not self.category:
            raise InvalidBuildRequestError("Please describe your needs or select a use case.")
        for label, value in (("Minimum", self.min_price), ("Maximum", self.max_price)):
            if value is not None and value < 0:
                raise InvalidBuildRequestError(f"{label} price cannot be negative.")
        if self.max_price is None:
            return
        if self.min_price is not None and self.max_price < self.min_price:
            raise InvalidBuildRequestError("Maximum cannot be below the minimum price.")
        if self.max_price < minimum:
            raise InvalidBuildRequestError(
                f"Maximum cannot be below the minimum price of ₱{minimum:,.0f}"
            )


def parse_use_case_minimums(rows: Iterable[Any]) -> dict[str, float]:
    """Flatten ``[{"Gaming": "35000"}, ...]`` into ``{"Gaming": 35000.0}``."""
    minimums: dict[str, float] = {}
    for row in rows:
        if not isinstance(row, dict):
            continue
        for use_case, price in row.items():
            minimums[str(use_case)] = coerce_price(price)
    return minimums


class BuildRequestService:
    """Fetches build batches and owns the cursor over the current batch.

    Only one request may be outstanding at a time; a second ``generate``
    while the first is in flight is rejected rather than queued.
    """

    def __init__(self, repository: BuildsRepository, cursor: BuildCursor | None = None) -> None:
        self.repository = repository
        self.cursor = cursor or BuildCursor()
        self.collection = BuildCollection()
        self.use_case_minimums: dict[str, float] = {}
        self._busy = False

    @property
    def busy(self) -> bool:
        return self._busy

    def fetch_use_case_minimums(self) -> dict[str, float]:
        self.use_case_minimums = parse_use_case_minimums(self.repository.fetch_categories())
        return dict(self.use_case_minimums)

    def minimum_price_for(self, use_cases: Iterable[str]) -> float:
        """Mixed use needs the largest of the selected use cases' minimums."""
        prices = [self.use_case_minimums.get(use_case, 0.0) for use_case in use_cases]
        return max(prices, default=0.0)

    def generate(self, request: BuildRequest, use_cases: Iterable[str] = ()) -> BuildCollection:
        """Request a new batch and make its first build current.

        Raises:
            BuildRequestInProgressError: another request is outstanding.
            InvalidBuildRequestError: the request failed validation; nothing was sent.
            RemoteRequestError: the builds API call failed; the previous batch stays current.
        """
        if self._busy:
            raise BuildRequestInProgressError("A build request is already in progress.")
        request.validate(self.minimum_price_for(use_cases))

        self._busy = True
        try:
            payload = self.repository.request_builds(request.to_payload())
        finally:
            self._busy = False

        collection = load_collection(payload)
        if collection.is_empty:
            logger.warning("Builds API returned no usable builds")
        if collection.budget_note:
            logger.info(f"Budget note: {collection.budget_note}")
        self.collection = collection
        self.cursor.reset(collection)
        return collection

    def current(self) -> Build | None:
        return self.cursor.current()

    def regenerate(self) -> Build | None:
        """Show the next build of the already-fetched batch."""
        return self.cursor.advance()
