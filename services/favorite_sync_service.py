"""
Favorite Sync Service - keeps the favorites API and the local cache in step.

This module handles:
- Liking/unliking the current build (remote write first, cache second)
- Liked-state queries for the build on screen
- Loading and deleting saved favorites for the favorites page
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, replace
from datetime import UTC, datetime
from typing import Any

from loguru import logger

from models.build import Build
from models.favorite import FavoriteRecord, SavedFavorite
from models.user import SessionUser
from repositories.favorites_repository import FavoritesRepository
from services.build_normalizer import normalize_build, parse_build_data
from services.favorite_cache import FavoriteCache
from utils.coercion import coerce_int, coerce_text
from utils.errors import NotAuthenticatedError, RemoteRequestError, RemoteWriteFailedError


@dataclass(frozen=True)
class ToggleContext:
    """Request context captured into the favorite snapshot at like-time."""

    category: str = ""
    needs: str = ""


def normalize_saved_favorite(raw: dict[str, Any]) -> SavedFavorite:
    """Convert one favorites API row into a ``SavedFavorite``."""
    build = normalize_build(raw)
    build_data = parse_build_data(raw) or {}
    build_id = raw.get("build_id")
    if build_id is None:
        build_id = build_data.get("build_id")
    return SavedFavorite(
        id=coerce_int(raw.get("id")),
        build_id=coerce_int(build_id),
        total_price=build.total_price,
        parts=build.parts,
        needs=build.needs,
        description=build.description,
        category=build.category,
        created_at=coerce_text(raw.get("created_at")),
    )


class FavoriteSyncService:
    """Service for favorite toggles and saved-favorite listings.

    A toggle writes to the favorites API first and only updates the local
    cache once the API call succeeds, so the heart icon never reflects a
    state the backend has not accepted.
    """

    def __init__(
        self,
        repository: FavoritesRepository,
        cache: FavoriteCache | None = None,
        *,
        login_redirect: Callable[[], None] | None = None,
        clock: Callable[[], datetime] | None = None,
    ) -> None:
        self.repository = repository
        self.cache = cache or FavoriteCache()
        self.login_redirect = login_redirect
        self._clock = clock or (lambda: datetime.now(UTC))

    # ============= Liked State =============

    def is_liked(self, user: SessionUser | None, build_index: int, build: Build) -> bool:
        if user is None or not user.can_favorite:
            return False
        return self.cache.is_favorite(user.id, build_index, build.total_price)

    def liked_count(self, user: SessionUser | None) -> int:
        if user is None or not user.can_favorite:
            return 0
        return len(self.cache.records(user.id))

    # ============= Toggle =============

    def toggle_favorite(
        self,
        user: SessionUser | None,
        build: Build,
        build_index: int,
        context: ToggleContext | None = None,
    ) -> bool:
        """Like or unlike ``build``; return the new liked state.

        Raises:
            NotAuthenticatedError: ``user`` is missing or a guest. Nothing is
                written anywhere.
            RemoteWriteFailedError: the favorites API rejected the change. The
                local cache is left untouched so the caller may retry.
        """
        self._require_user(user)
        existing = self.cache.find(user.id, build_index, build.total_price)
        if existing is not None:
            self._delete_remote(user, existing)
            return self._toggle_cached(user, existing, liked=False)

        record = self._snapshot(build, build_index, context or ToggleContext())
        try:
            remote_id = self.repository.create_favorite(user.id, self._build_data(record))
        except RemoteRequestError as exc:
            raise RemoteWriteFailedError(
                f"Could not save build to favorites: {exc}", status_code=exc.status_code
            ) from exc
        return self._toggle_cached(user, replace(record, remote_id=remote_id), liked=True)

    def _toggle_cached(self, user: SessionUser, record: FavoriteRecord, *, liked: bool) -> bool:
        """Mirror an accepted remote change locally; the next reconcile repairs a failed write."""
        try:
            return self.cache.upsert_toggle(user.id, record)
        except OSError as exc:
            logger.error(f"Favorites cache write failed for {record.identity}: {exc}")
            return liked

    def _snapshot(self, build: Build, build_index: int, context: ToggleContext) -> FavoriteRecord:
        return FavoriteRecord(
            build_id=build_index,
            total_price=build.total_price,
            category=context.category or build.category_or_default(),
            needs=context.needs or build.needs,
            parts=build.parts,
            timestamp=self._clock().isoformat(),
            description=build.description,
        )

    @staticmethod
    def _build_data(record: FavoriteRecord) -> dict[str, Any]:
        return {
            "build_id": record.build_id,
            "total_price": record.total_price,
            "category": record.category,
            "needs": record.needs,
            "description": record.description,
            "parts": [part.to_payload() for part in record.parts],
            "timestamp": record.timestamp,
        }

    def _delete_remote(self, user: SessionUser, record: FavoriteRecord) -> None:
        remote_id = record.remote_id
        if remote_id is None:
            remote_id = self._lookup_remote_id(user, record)
        if remote_id is None:
            logger.warning(
                f"No remote favorite found for {record.identity}; removing local record only"
            )
            return
        try:
            self.repository.delete_favorite(remote_id, user.id)
        except RemoteRequestError as exc:
            if exc.status_code == 404:
                logger.info(f"Favorite {remote_id} was already removed remotely")
                return
            raise RemoteWriteFailedError(
                f"Could not remove build from favorites: {exc}", status_code=exc.status_code
            ) from exc

    def _lookup_remote_id(self, user: SessionUser, record: FavoriteRecord) -> int | None:
        try:
            rows = self.repository.list_favorites(user.id)
        except RemoteRequestError as exc:
            raise RemoteWriteFailedError(
                f"Could not look up favorite to remove: {exc}", status_code=exc.status_code
            ) from exc
        for row in rows:
            favorite = normalize_saved_favorite(row)
            if favorite.identity == record.identity and favorite.id:
                return favorite.id
        return None

    # ============= Favorites Page =============

    def fetch_favorites(self, user: SessionUser | None) -> list[SavedFavorite]:
        """Load the user's saved builds and mirror them into the local cache.

        Raises:
            NotAuthenticatedError: no signed-in, non-guest user.
            RemoteRequestError: the favorites API could not be reached.
        """
        self._require_user(user)
        favorites = [normalize_saved_favorite(row) for row in self.repository.list_favorites(user.id)]
        self.cache.reconcile(user.id, favorites)
        logger.info(f"Loaded {len(favorites)} favorite build(s) for user {user.id}")
        return favorites

    def delete_favorite(self, user: SessionUser | None, favorite_id: int) -> None:
        self._require_user(user)
        try:
            self.repository.delete_favorite(favorite_id, user.id)
        except RemoteRequestError as exc:
            raise RemoteWriteFailedError(
                f"Failed to remove favorite: {exc}", status_code=exc.status_code
            ) from exc
        try:
            self.cache.remove_remote(user.id, favorite_id)
        except OSError as exc:
            logger.error(f"Favorites cache write failed removing favorite {favorite_id}: {exc}")

    def _require_user(self, user: SessionUser | None) -> None:
        if user is not None and user.can_favorite:
            return
        logger.info("Favorites require a signed-in account; redirecting to login")
        if self.login_redirect is not None:
            self.login_redirect()
        raise NotAuthenticatedError()


__all__ = ["FavoriteSyncService", "ToggleContext", "normalize_saved_favorite"]
