"""Normalization of raw part objects into canonical ``Part`` values.

The builds backend has shipped parts with vendor-style capitalized keys
(``Type``, ``Title``, ``Price``), lower-camel keys (``partType``, ``name``,
``product``) and legacy flat keys (``type``). Each canonical field probes
its candidate keys in that priority order and takes the first defined
value.
"""

from __future__ import annotations

from typing import Any

from models.part import Part
from utils.coercion import coerce_int, coerce_price, coerce_text, first_defined
from utils.constants import PART_DISPLAY_LABELS, fold_category_key
from utils.image_urls import canonicalize_image_url

TYPE_KEYS = ("Type", "partType", "type")
NAME_KEYS = ("Title", "name")
VENDOR_KEYS = ("Vendor", "vendor")
PRICE_KEYS = ("Price", "price")
IMAGE_KEYS = ("Image", "image")
LINK_KEYS = ("Link", "product")
ID_KEYS = ("ID", "id")
EXTERNAL_ID_KEYS = ("external_id",)


def display_type_for(part_type: str) -> str:
    """Map an upstream category label to its display label; unknown labels pass through."""
    if not part_type:
        return part_type
    return PART_DISPLAY_LABELS.get(fold_category_key(part_type), part_type)


def normalize_part(raw: Any) -> Part:
    """Convert one raw part mapping into a ``Part``; never raises."""
    if not isinstance(raw, dict):
        return Part()
    part_type = coerce_text(first_defined(raw, TYPE_KEYS))
    return Part(
        id=coerce_int(first_defined(raw, ID_KEYS)),
        external_id=coerce_text(first_defined(raw, EXTERNAL_ID_KEYS)),
        type=part_type,
        display_type=display_type_for(part_type),
        name=coerce_text(first_defined(raw, NAME_KEYS)),
        vendor=coerce_text(first_defined(raw, VENDOR_KEYS)),
        price=coerce_price(first_defined(raw, PRICE_KEYS)),
        image=canonicalize_image_url(first_defined(raw, IMAGE_KEYS)),
        product_link=coerce_text(first_defined(raw, LINK_KEYS)),
    )


def normalize_parts(raw_parts: Any) -> tuple[Part, ...]:
    """Normalize a list of raw parts, skipping entries that are not mappings."""
    if not isinstance(raw_parts, list):
        return ()
    return tuple(normalize_part(item) for item in raw_parts if isinstance(item, dict))
