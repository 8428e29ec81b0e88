"""Durations and network timeouts."""

ONE_HOUR_SECONDS = 60 * 60
REQUEST_TIMEOUT_SECONDS = 30
CURRENCY_RATE_FRESHNESS_SECONDS = 12 * ONE_HOUR_SECONDS
