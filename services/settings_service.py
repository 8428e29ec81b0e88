from __future__ import annotations

import os
from dataclasses import asdict, dataclass, fields
from pathlib import Path
from typing import Any

from loguru import logger

from utils import constants
from utils.coercion import coerce_text
from utils.json_store import read_json_document, write_json_document

DEFAULT_API_BASE_URL = "http://127.0.0.1:8000/api"
DEFAULT_CURRENCY_API_URL = ""

ENV_OVERRIDES = {
    "api_base_url": "AUTOBUILD_API_BASE_URL",
    "currency_api_url": "AUTOBUILD_CURRENCY_API_URL",
    "log_level": "AUTOBUILD_LOG_LEVEL",
}

LOG_LEVELS = {"TRACE", "DEBUG", "INFO", "SUCCESS", "WARNING", "ERROR", "CRITICAL"}


@dataclass(frozen=True)
class AppSettings:
    api_base_url: str = DEFAULT_API_BASE_URL
    currency_api_url: str = DEFAULT_CURRENCY_API_URL
    base_currency: str = "PHP"
    display_currency: str = "PHP"
    request_timeout: float = float(constants.REQUEST_TIMEOUT_SECONDS)
    currency_rate_max_age_hours: int = (
        constants.CURRENCY_RATE_FRESHNESS_SECONDS // constants.ONE_HOUR_SECONDS
    )
    log_level: str = "INFO"

    @property
    def currency_rate_max_age_seconds(self) -> int:
        return self.currency_rate_max_age_hours * constants.ONE_HOUR_SECONDS


class SettingsService:
    """Load and persist application settings from ``config.json`` and the environment."""

    def __init__(self, settings_path: Path | None = None) -> None:
        self.settings_path = settings_path or constants.CONFIG_FILE

    def load(self) -> AppSettings:
        data = read_json_document(self.settings_path, {})
        if not isinstance(data, dict):
            logger.warning(f"Ignoring settings file {self.settings_path}: expected an object")
            data = {}
        for field_name, env_name in ENV_OVERRIDES.items():
            value = os.getenv(env_name)
            if value:
                data[field_name] = value
        return self.from_mapping(data)

    def save(self, settings: AppSettings) -> None:
        try:
            write_json_document(self.settings_path, asdict(settings))
        except OSError as exc:  # pragma: no cover
            logger.warning(f"Unable to persist settings: {exc}")

    @classmethod
    def from_mapping(cls, data: dict[str, Any]) -> AppSettings:
        defaults = AppSettings()
        known = {field.name for field in fields(AppSettings)}
        unknown = sorted(set(data) - known)
        if unknown:
            logger.debug(f"Ignoring unknown settings keys: {', '.join(unknown)}")
        return AppSettings(
            api_base_url=cls.coerce_url(data.get("api_base_url"), defaults.api_base_url),
            currency_api_url=cls.coerce_url(
                data.get("currency_api_url"), defaults.currency_api_url
            ),
            base_currency=cls.coerce_currency(data.get("base_currency"), defaults.base_currency),
            display_currency=cls.coerce_currency(
                data.get("display_currency"), defaults.display_currency
            ),
            request_timeout=cls.clamp_number(
                data.get("request_timeout"),
                default=defaults.request_timeout,
                minimum=1.0,
                maximum=120.0,
            ),
            currency_rate_max_age_hours=int(
                cls.clamp_number(
                    data.get("currency_rate_max_age_hours"),
                    default=defaults.currency_rate_max_age_hours,
                    minimum=0,
                    maximum=24 * 7,
                )
            ),
            log_level=cls.coerce_log_level(data.get("log_level"), defaults.log_level),
        )

    @staticmethod
    def coerce_url(value: Any, default: str) -> str:
        text = coerce_text(value).strip()
        if text.startswith(("http://", "https://")):
            return text.rstrip("/")
        if text:
            logger.warning(f"Ignoring settings URL without http(s) scheme: {text}")
        return default

    @staticmethod
    def coerce_currency(value: Any, default: str) -> str:
        text = coerce_text(value).strip().upper()
        return text if len(text) == 3 and text.isalpha() else default

    @staticmethod
    def coerce_log_level(value: Any, default: str) -> str:
        text = coerce_text(value).strip().upper()
        return text if text in LOG_LEVELS else default

    @staticmethod
    def clamp_number(value: Any, *, default: float, minimum: float, maximum: float) -> float:
        try:
            number = float(value)
        except (TypeError, ValueError, OverflowError):
            number = default
        if number != number:
            number = default
        return max(minimum, min(number, maximum))


__all__ = ["AppSettings", "SettingsService"]
