"""Canonical PC component model."""

from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Any

from utils.coercion import coerce_int, coerce_price, coerce_text
from utils.constants import PRODUCT_BASE_URL


@dataclass(frozen=True)
class Part:
    """One component of a build, normalized from any backend key casing."""

    id: int = 0
    external_id: str = ""
    type: str = ""
    display_type: str = ""
    name: str = ""
    vendor: str = ""
    price: float = 0.0
    image: str = ""
    product_link: str = ""

    @property
    def has_identity(self) -> bool:
        return bool(self.id) or bool(self.external_id)

    @property
    def product_url(self) -> str:
        """Absolute purchase-page URL; relative links resolve against the store site."""
        link = self.product_link
        if not link or link.startswith(("http://", "https://")):
            return link
        return f"{PRODUCT_BASE_URL}/{link.lstrip('/')}"

    def to_payload(self) -> dict[str, Any]:
        """Lower-camel wire shape used in favorite snapshots sent to the backend."""
        return {
            "id": self.id,
            "external_id": self.external_id,
            "type": self.type,
            "partType": self.type,
            "displayType": self.display_type,
            "name": self.name,
            "vendor": self.vendor,
            "price": self.price,
            "image": self.image,
            "product": self.product_link,
        }

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: Any) -> Part:
        """Restore a part written by ``to_dict``; malformed values take defaults."""
        if not isinstance(data, dict):
            return cls()
        return cls(
            id=coerce_int(data.get("id")),
            external_id=coerce_text(data.get("external_id")),
            type=coerce_text(data.get("type")),
            display_type=coerce_text(data.get("display_type")),
            name=coerce_text(data.get("name")),
            vendor=coerce_text(data.get("vendor")),
            price=coerce_price(data.get("price")),
            image=coerce_text(data.get("image")),
            product_link=coerce_text(data.get("product_link")),
        )
