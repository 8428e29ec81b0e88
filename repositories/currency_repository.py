"""Currency-rate API collaborator."""

from __future__ import annotations

import math

import requests
from loguru import logger

from utils.constants import REQUEST_TIMEOUT_SECONDS
from utils.errors import RemoteRequestError


class CurrencyRepository:
    """Fetches pair conversion rates.

    ``url_template`` is formatted with ``base`` and ``target`` currency
    codes, e.g. ``https://v6.exchangerate-api.com/v6/<key>/pair/{base}/{target}``.
    """

    def __init__(
        self,
        url_template: str,
        *,
        timeout: float = REQUEST_TIMEOUT_SECONDS,
        session: requests.Session | None = None,
    ) -> None:
        self.url_template = url_template
        self.timeout = timeout
        self.session = session or requests.Session()

    def fetch_rate(self, base: str, target: str) -> float:
        url = self.url_template.format(base=base.upper(), target=target.upper())
        try:
            response = self.session.get(url, timeout=self.timeout)
            response.raise_for_status()
            body = response.json()
        except (requests.RequestException, ValueError) as exc:
            raise RemoteRequestError(f"Currency rate request failed: {exc}") from exc

        if not isinstance(body, dict) or body.get("result") != "success":
            raise RemoteRequestError(f"Currency rate unavailable for {base}->{target}")
        rate = body.get("conversion_rate")
        if isinstance(rate, bool) or not isinstance(rate, (int, float)) or rate <= 0:
            raise RemoteRequestError(f"Invalid conversion rate for {base}->{target}: {rate!r}")
        try:
            rate = float(rate)
        except OverflowError:
            rate = math.inf
        if not math.isfinite(rate):
            raise RemoteRequestError(f"Invalid conversion rate for {base}->{target}")
        logger.debug(f"Fetched {base}->{target} rate {rate}")
        return rate
