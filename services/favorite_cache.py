"""Per-user local cache of favorited builds.

Records live in one JSON document keyed by user id::

    {"version": 1, "users": {"42": [{"buildId": 0, "totalPrice": 35999.0, ...}]}}

A record's identity is ``(buildId, totalPrice)``: the build's position in
the batch it was liked from plus the backend total. Guests have no cache
scope.
"""

from __future__ import annotations

from collections.abc import Iterable
from pathlib import Path
from typing import Any

from loguru import logger

from models.favorite import FavoriteRecord, SavedFavorite, price_key
from utils.constants import FAVORITES_CACHE_FILE
from utils.errors import NotAuthenticatedError
from utils.json_store import locked_path, read_json_document, write_json_document

FAVORITES_CACHE_VERSION = 1


def favorite_identity(build_index: int, total_price: float) -> tuple[int, float]:
    """Identity key shared by ``FavoriteRecord`` and ``SavedFavorite``."""
    return (int(build_index), price_key(total_price))


class FavoriteCache:
    """Read-modify-write store of ``FavoriteRecord`` lists, one per user."""

    def __init__(self, path: Path | None = None) -> None:
        self.path = path or FAVORITES_CACHE_FILE

    # ============= Persistence =============

    def _load_users(self) -> dict[str, list[dict[str, Any]]]:
        document = read_json_document(self.path, None)
        if document is None:
            return {}
        if not isinstance(document, dict) or document.get("version") != FAVORITES_CACHE_VERSION:
            logger.info("Discarding favorites cache due to version mismatch")
            return {}
        users = document.get("users")
        if not isinstance(users, dict):
            return {}
        return {
            str(key): [entry for entry in entries if isinstance(entry, dict)]
            for key, entries in users.items()
            if isinstance(entries, list)
        }

    def _save_users(self, users: dict[str, list[dict[str, Any]]]) -> None:
        write_json_document(self.path, {"version": FAVORITES_CACHE_VERSION, "users": users})

    @staticmethod
    def _scope(user_id: int | str | None) -> str:
        if user_id is None or user_id == "":
            raise NotAuthenticatedError()
        return str(user_id)

    # ============= Queries =============

    def records(self, user_id: int | str | None) -> list[FavoriteRecord]:
        """Return the user's records in the order they were liked."""
        if user_id is None or user_id == "":
            return []
        entries = self._load_users().get(str(user_id), [])
        return [FavoriteRecord.from_dict(entry) for entry in entries]

    def find(
        self, user_id: int | str | None, build_index: int, total_price: float
    ) -> FavoriteRecord | None:
        identity = favorite_identity(build_index, total_price)
        for record in self.records(user_id):
            if record.identity == identity:
                return record
        return None

    def is_favorite(self, user_id: int | str | None, build_index: int, total_price: float) -> bool:
        return self.find(user_id, build_index, total_price) is not None

    def remote_id_for(
        self, user_id: int | str | None, build_index: int, total_price: float
    ) -> int | None:
        record = self.find(user_id, build_index, total_price)
        return record.remote_id if record else None

    # ============= Mutations =============

    def upsert_toggle(self, user_id: int | str | None, record: FavoriteRecord) -> bool:
        """Flip the favorite state of ``record``'s identity; return the new state.

        Calling this twice with the same record removes what the first call
        added, like clicking the heart twice.
        """
        key = self._scope(user_id)
        with locked_path(self.path):
            users = self._load_users()
            existing = [FavoriteRecord.from_dict(entry) for entry in users.get(key, [])]
            kept = [entry for entry in existing if entry.identity != record.identity]
            now_favorite = len(kept) == len(existing)
            if now_favorite:
                kept.append(record)
            users[key] = [entry.to_dict() for entry in kept]
            self._save_users(users)
        logger.debug(
            f"Favorite {record.identity} for user {key} -> {'liked' if now_favorite else 'unliked'}"
        )
        return now_favorite

    def reconcile(self, user_id: int | str | None, remote: Iterable[SavedFavorite]) -> None:
        """Replace the user's records with the remote favorites list."""
        key = self._scope(user_id)
        seen: set[tuple[int, float]] = set()
        records: list[dict[str, Any]] = []
        for favorite in remote:
            if favorite.identity in seen:
                continue
            seen.add(favorite.identity)
            records.append(favorite.to_record().to_dict())
        with locked_path(self.path):
            users = self._load_users()
            users[key] = records
            self._save_users(users)
        logger.debug(f"Reconciled {len(records)} favorite(s) for user {key}")

    def remove_remote(self, user_id: int | str | None, favorite_id: int) -> bool:
        """Drop the record that mirrors remote favorite ``favorite_id``."""
        key = self._scope(user_id)
        with locked_path(self.path):
            users = self._load_users()
            existing = [FavoriteRecord.from_dict(entry) for entry in users.get(key, [])]
            kept = [entry for entry in existing if entry.remote_id != favorite_id]
            if len(kept) == len(existing):
                return False
            users[key] = [entry.to_dict() for entry in kept]
            self._save_users(users)
        return True

    def clear(self, user_id: int | str | None) -> None:
        key = self._scope(user_id)
        with locked_path(self.path):
            users = self._load_users()
            if users.pop(key, None) is not None:
                self._save_users(users)


__all__ = ["FAVORITES_CACHE_VERSION", "FavoriteCache", "favorite_identity"]
