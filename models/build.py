"""Canonical build and build-collection models."""

from __future__ import annotations

from dataclasses import dataclass

from models.part import Part
from utils.constants import DEFAULT_CATEGORY


@dataclass(frozen=True)
class Build:
    """A complete parts list as recommended by the backend.

    ``total_price`` is the backend's figure and is never recomputed from
    ``parts``; the parts list may be a partial view of the build.
    """

    parts: tuple[Part, ...] = ()
    total_price: float = 0.0
    description: str = ""
    category: str = ""
    needs: str = ""

    @property
    def is_empty(self) -> bool:
        return not self.parts

    @property
    def parts_total(self) -> float:
        return round(sum(part.price for part in self.parts), 2)

    def category_or_default(self) -> str:
        return self.category or DEFAULT_CATEGORY


@dataclass(frozen=True)
class BudgetRange:
    min: float
    max: float


@dataclass(frozen=True)
class BuildCollection:
    """One batch of alternative builds returned for a single request."""

    builds: tuple[Build, ...] = ()
    budget_range: BudgetRange | None = None
    budget_note: str | None = None
    recommendation: str | None = None

    @property
    def is_empty(self) -> bool:
        return not self.builds

    def __len__(self) -> int:
        return len(self.builds)
