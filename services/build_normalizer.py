"""Normalization of raw build payloads into canonical ``Build`` values.

A build reaches us in one of four shapes, depending on which backend
endpoint and which schema revision produced it:

1. ``build_data``: a JSON document (usually a string) holding ``parts`` and
   the request context (``needs``, ``description``, ``category``);
2. ``parts_data``: a JSON array string, sometimes escaped a second time;
3. ``parts``: an already-decoded array;
4. flat per-slot columns (``cpu_name``, ``cpu_price``, ``cpu_id``, ...).

The shapes are tried in that order and the first one yielding at least one
part wins. A strategy that cannot decode its input yields nothing and the
chain moves on.
"""

from __future__ import annotations

import json
from collections.abc import Callable
from typing import Any, NamedTuple

from loguru import logger

from models.build import Build
from services.part_normalizer import normalize_parts
from utils.coercion import coerce_price, coerce_text
from utils.constants import COMPONENT_SLOTS


class PartsStrategy(NamedTuple):
    name: str
    applies: Callable[[dict[str, Any]], bool]
    extract: Callable[[dict[str, Any]], list[Any]]


def _decode_json(value: Any) -> Any:
    if isinstance(value, (dict, list)):
        return value
    if not isinstance(value, str) or not value.strip():
        return None
    try:
        return json.loads(value)
    except (ValueError, RecursionError) as exc:
        logger.debug(f"Discarding undecodable JSON fragment: {exc}")
        return None


def _unescape_twice_encoded(text: str) -> str:
    return text.replace('\\"', '"').replace("\\\\", "\\")


def parse_build_data(raw: dict[str, Any]) -> dict[str, Any] | None:
    """Decode ``raw["build_data"]`` into a mapping, or ``None``."""
    decoded = _decode_json(raw.get("build_data"))
    return decoded if isinstance(decoded, dict) else None


def _parts_from_build_data(raw: dict[str, Any]) -> list[Any]:
    build_data = parse_build_data(raw)
    if build_data is None:
        return []
    parts = build_data.get("parts")
    return parts if isinstance(parts, list) else []


def _parts_from_parts_data(raw: dict[str, Any]) -> list[Any]:
    value = raw.get("parts_data")
    decoded = _decode_json(value)
    if decoded is None and isinstance(value, str):
        decoded = _decode_json(_unescape_twice_encoded(value))
    # JSON-in-JSON: the first decode produced the inner document as a string.
    if isinstance(decoded, str):
        decoded = _decode_json(decoded)
    return decoded if isinstance(decoded, list) else []


def _parts_from_parts_list(raw: dict[str, Any]) -> list[Any]:
    return raw["parts"]


def _parts_from_flat_slots(raw: dict[str, Any]) -> list[Any]:
    parts = []
    for slot, label in COMPONENT_SLOTS:
        name = raw.get(f"{slot}_name")
        if not name:
            continue
        parts.append(
            {
                "partType": label,
                "name": name,
                "price": raw.get(f"{slot}_price"),
                "id": raw.get(f"{slot}_id"),
            }
        )
    return parts


PARTS_STRATEGIES: tuple[PartsStrategy, ...] = (
    PartsStrategy(
        "build_data",
        lambda raw: raw.get("build_data") is not None,
        _parts_from_build_data,
    ),
    PartsStrategy(
        "parts_data",
        lambda raw: raw.get("parts_data") is not None,
        _parts_from_parts_data,
    ),
    PartsStrategy(
        "parts",
        lambda raw: isinstance(raw.get("parts"), list),
        _parts_from_parts_list,
    ),
    PartsStrategy(
        "flat_slots",
        lambda raw: any(raw.get(f"{slot}_name") for slot, _ in COMPONENT_SLOTS),
        _parts_from_flat_slots,
    ),
)


def _context_value(key: str, build_data: dict[str, Any], raw: dict[str, Any]) -> str:
    return coerce_text(build_data.get(key)) or coerce_text(raw.get(key))


def normalize_build(raw: Any) -> Build:
    """Convert one raw build payload into a ``Build``; never raises.

    ``Build.parts`` is empty when no strategy produced parts. Callers decide
    how to present an empty build.
    """
    if not isinstance(raw, dict):
        logger.debug(f"Ignoring build payload of type {type(raw).__name__}")
        return Build()

    parts = ()
    for strategy in PARTS_STRATEGIES:
        if not strategy.applies(raw):
            continue
        parts = normalize_parts(strategy.extract(raw))
        if parts:
            logger.trace(f"Build parts resolved from {strategy.name} ({len(parts)} parts)")
            break

    build_data = parse_build_data(raw) or {}
    total_price = raw.get("total_price")
    if total_price is None:
        total_price = build_data.get("total_price")

    return Build(
        parts=parts,
        total_price=coerce_price(total_price),
        description=_context_value("description", build_data, raw),
        category=_context_value("category", build_data, raw),
        needs=_context_value("needs", build_data, raw),
    )
