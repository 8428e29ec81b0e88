"""Shared constants for paths, part categories, and timing."""

from utils.constants.parts import (
    COMPONENT_SLOTS,
    DEFAULT_CATEGORY,
    IMAGE_TRACKING_SUFFIX,
    PART_DISPLAY_LABELS,
    PRODUCT_BASE_URL,
    fold_category_key,
)
from utils.constants.paths import (
    BASE_DATA_DIR,
    CACHE_DIR,
    CONFIG_DIR,
    CONFIG_FILE,
    CURRENCY_RATE_CACHE_FILE,
    FAVORITES_CACHE_FILE,
    LOG_FILE,
    LOGS_DIR,
    ensure_base_dirs,
)
from utils.constants.timing import (
    CURRENCY_RATE_FRESHNESS_SECONDS,
    ONE_HOUR_SECONDS,
    REQUEST_TIMEOUT_SECONDS,
)

__all__ = [
    "BASE_DATA_DIR",
    "CACHE_DIR",
    "COMPONENT_SLOTS",
    "CONFIG_DIR",
    "CONFIG_FILE",
    "CURRENCY_RATE_CACHE_FILE",
    "CURRENCY_RATE_FRESHNESS_SECONDS",
    "DEFAULT_CATEGORY",
    "FAVORITES_CACHE_FILE",
    "IMAGE_TRACKING_SUFFIX",
    "LOG_FILE",
    "LOGS_DIR",
    "ONE_HOUR_SECONDS",
    "PART_DISPLAY_LABELS",
    "PRODUCT_BASE_URL",
    "REQUEST_TIMEOUT_SECONDS",
    "ensure_base_dirs",
    "fold_category_key",
]
