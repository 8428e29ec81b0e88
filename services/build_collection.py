"""Loading of a builds API response into a ``BuildCollection``."""

from __future__ import annotations

import json
import math
from typing import Any

from loguru import logger

from models.build import BudgetRange, BuildCollection
from services.build_normalizer import normalize_build
from utils.coercion import coerce_text


def _parse_budget_range(value: Any) -> BudgetRange | None:
    if not isinstance(value, dict):
        return None
    try:
        low = float(value["min"])
        high = float(value["max"])
    except (KeyError, TypeError, ValueError, OverflowError):
        return None
    if not (math.isfinite(low) and math.isfinite(high)):
        return None
    return BudgetRange(min=low, max=high)


def _optional_text(value: Any) -> str | None:
    text = coerce_text(value)
    return text or None


def load_collection(payload: Any) -> BuildCollection:
    """Normalize a builds API response.

    ``payload`` may be a bare list of raw builds, an object with ``builds``
    plus budget metadata, or the JSON text of either. Anything else yields
    an empty collection, which callers treat as "no data".
    """
    if isinstance(payload, (str, bytes)):
        try:
            payload = json.loads(payload)
        except ValueError as exc:
            logger.warning(f"Builds payload is not valid JSON: {exc}")
            return BuildCollection()

    if isinstance(payload, list):
        raw_builds: Any = payload
        budget_range = None
        budget_note = None
        recommendation = None
    elif isinstance(payload, dict):
        raw_builds = payload.get("builds", [])
        budget_range = _parse_budget_range(payload.get("budget_range"))
        budget_note = _optional_text(payload.get("budget_note"))
        recommendation = _optional_text(payload.get("recommendation"))
    else:
        logger.warning(f"Unusable builds payload of type {type(payload).__name__}")
        return BuildCollection()

    if not isinstance(raw_builds, list):
        logger.warning("Builds payload has a non-list 'builds' field; treating as empty")
        raw_builds = []

    builds = tuple(normalize_build(raw) for raw in raw_builds)
    logger.debug(
        f"Loaded {len(builds)} build(s) from {'list' if isinstance(payload, list) else 'object'} payload"
    )
    return BuildCollection(
        builds=builds,
        budget_range=budget_range,
        budget_note=budget_note,
        recommendation=recommendation,
    )
