"""Favorites API: list, create, and delete saved builds for a user."""

from __future__ import annotations

import json
from typing import Any

from loguru import logger

from repositories.api_client import ApiClient
from utils.coercion import coerce_int


class FavoritesRepository:
    def __init__(self, client: ApiClient) -> None:
        self.client = client

    def list_favorites(self, user_id: int | str) -> list[dict[str, Any]]:
        """Return raw favorite rows; an unsuccessful envelope yields ``[]``."""
        body = self.client.get_json("/favorites", params={"user_id": user_id})
        if not isinstance(body, dict) or not body.get("success"):
            logger.warning(f"Favorites listing for user {user_id} was not successful")
            return []
        data = body.get("data")
        favorites = data.get("favorites") if isinstance(data, dict) else None
        if not isinstance(favorites, list):
            return []
        return [row for row in favorites if isinstance(row, dict)]

    def create_favorite(self, user_id: int | str, build_data: dict[str, Any]) -> int | None:
        """Save a build snapshot; return the new favorite's id when the API reports one."""
        body = self.client.post_json(
            "/favorites",
            {"user_id": user_id, "build_data": json.dumps(build_data)},
        )
        return self._extract_favorite_id(body)

    def delete_favorite(self, favorite_id: int, user_id: int | str) -> None:
        self.client.delete_json(f"/favorites/{favorite_id}", params={"user_id": user_id})

    @staticmethod
    def _extract_favorite_id(body: Any) -> int | None:
        if not isinstance(body, dict):
            return None
        data = body.get("data")
        candidates = []
        if isinstance(data, dict):
            favorite = data.get("favorite")
            if isinstance(favorite, dict):
                candidates.append(favorite.get("id"))
            candidates.append(data.get("id"))
        candidates.append(body.get("id"))
        for candidate in candidates:
            favorite_id = coerce_int(candidate)
            if favorite_id:
                return favorite_id
        return None
