"""Favorite build records, local and remote."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Any

from models.part import Part
from utils.coercion import coerce_int, coerce_price, coerce_text


def price_key(total_price: float) -> float:
    """Round a total to cents so float noise never splits an identity key."""
    return round(float(total_price), 2)


@dataclass(frozen=True)
class FavoriteRecord:
    """Snapshot of a liked build, stored per user in the local favorites cache.

    ``build_id`` is the build's position in the collection it was liked from.
    """

    build_id: int
    total_price: float
    category: str = ""
    needs: str = ""
    parts: tuple[Part, ...] = ()
    timestamp: str = ""
    description: str = ""
    remote_id: int | None = None

    @property
    def identity(self) -> tuple[int, float]:
        return (self.build_id, price_key(self.total_price))

    def to_dict(self) -> dict[str, Any]:
        return {
            "buildId": self.build_id,
            "totalPrice": self.total_price,
            "category": self.category,
            "needs": self.needs,
            "description": self.description,
            "parts": [part.to_dict() for part in self.parts],
            "timestamp": self.timestamp,
            "remoteId": self.remote_id,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> FavoriteRecord:
        raw_parts = data.get("parts")
        remote_id = data.get("remoteId")
        return cls(
            build_id=coerce_int(data.get("buildId")),
            total_price=coerce_price(data.get("totalPrice")),
            category=coerce_text(data.get("category")),
            needs=coerce_text(data.get("needs")),
            description=coerce_text(data.get("description")),
            parts=tuple(Part.from_dict(item) for item in raw_parts)
            if isinstance(raw_parts, list)
            else (),
            timestamp=coerce_text(data.get("timestamp")),
            remote_id=coerce_int(remote_id) if remote_id is not None else None,
        )


@dataclass(frozen=True)
class SavedFavorite:
    """A favorite as listed by the favorites API, after normalization."""

    id: int
    build_id: int
    total_price: float
    parts: tuple[Part, ...] = ()
    needs: str = ""
    description: str = ""
    category: str = ""
    created_at: str = ""

    @property
    def identity(self) -> tuple[int, float]:
        return (self.build_id, price_key(self.total_price))

    @property
    def formatted_date(self) -> str:
        """``created_at`` as ``"Mar 5, 2025"``; empty when it is not ISO-8601."""
        if not self.created_at:
            return ""
        try:
            created = datetime.fromisoformat(self.created_at.replace("Z", "+00:00"))
        except ValueError:
            return ""
        return f"{created:%b} {created.day}, {created.year}"

    def to_record(self) -> FavoriteRecord:
        return FavoriteRecord(
            build_id=self.build_id,
            total_price=self.total_price,
            category=self.category,
            needs=self.needs,
            parts=self.parts,
            timestamp=self.created_at,
            description=self.description,
            remote_id=self.id or None,
        )
