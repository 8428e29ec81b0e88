"""Builds API: build generation and use-case minimum prices."""

from __future__ import annotations

from typing import Any

from repositories.api_client import ApiClient


class BuildsRepository:
    def __init__(self, client: ApiClient) -> None:
        self.client = client

    def request_builds(self, payload: dict[str, Any]) -> Any:
        """POST a build request; the raw response goes to ``load_collection``."""
        return self.client.post_json("/min-price", payload)

    def fetch_categories(self) -> list[Any]:
        """Return the raw ``[{"<use case>": "<min price>"}, ...]`` list."""
        data = self.client.get_json("/category")
        return data if isinstance(data, list) else []
