"""
Parts List Controller - application logic behind the parts-list and favorites views.

This controller wires settings, repositories and services together and gives
the view layer one object to call. It keeps the session-scoped state (the
signed-in user, the current batch, the user's free-text needs) as explicit
attributes instead of reading shared storage.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import Any

from loguru import logger

from models.build import Build, BuildCollection
from models.favorite import SavedFavorite
from models.user import SessionUser
from repositories.api_client import ApiClient
from repositories.builds_repository import BuildsRepository
from repositories.currency_repository import CurrencyRepository
from repositories.favorites_repository import FavoritesRepository
from services.build_request_service import BuildRequest, BuildRequestService
from services.currency_service import ConvertedPrice, CurrencyService
from services.favorite_cache import FavoriteCache
from services.favorite_sync_service import FavoriteSyncService, ToggleContext
from services.settings_service import AppSettings, SettingsService
from utils.constants import ensure_base_dirs
from utils.errors import AutoBuildError, NotAuthenticatedError, RemoteRequestError
from utils.logging_setup import configure_logging


class AppController:

    def __init__(
        self,
        *,
        settings: AppSettings | None = None,
        build_service: BuildRequestService | None = None,
        favorite_service: FavoriteSyncService | None = None,
        currency_service: CurrencyService | None = None,
        on_notice: Callable[[str], None] | None = None,
        on_login_required: Callable[[], None] | None = None,
    ) -> None:
        ensure_base_dirs()
        self.settings = settings or SettingsService().load()

        client: ApiClient | None = None
        if build_service is None or favorite_service is None:
            client = ApiClient(self.settings.api_base_url, timeout=self.settings.request_timeout)

        self.build_service = build_service or BuildRequestService(BuildsRepository(client))
        self.favorite_service = favorite_service or FavoriteSyncService(
            FavoritesRepository(client),
            FavoriteCache(),
            login_redirect=self._redirect_to_login,
        )
        if self.favorite_service.login_redirect is None:
            self.favorite_service.login_redirect = self._redirect_to_login
        self.currency_service = currency_service or CurrencyService(
            CurrencyRepository(self.settings.currency_api_url, timeout=self.settings.request_timeout)
            if self.settings.currency_api_url
            else None,
            base_currency=self.settings.base_currency,
            max_age_seconds=self.settings.currency_rate_max_age_seconds,
        )

        self._on_notice = on_notice
        self._on_login_required = on_login_required

        # Session state
        self.user: SessionUser | None = None
        self.needs = ""
        self.category = ""

    # ============= Session =============

    def sign_in(self, user_payload: Any) -> SessionUser | None:
        self.user = SessionUser.from_payload(user_payload)
        if self.user is None:
            logger.warning("Login response carried no usable user")
        return self.user

    def sign_out(self) -> None:
        self.user = None

    # ============= Builds =============

    def generate_builds(
        self, request: BuildRequest, use_cases: tuple[str, ...] = ()
    ) -> BuildCollection | None:
        """Fetch a new batch; failures become notices and keep the previous batch."""
        try:
            collection = self.build_service.generate(request, use_cases)
        except AutoBuildError as exc:
            self._notify(str(exc))
            return None
        self.needs = request.detailed_needs or request.description
        self.category = request.category or ""
        return collection

    def regenerate(self) -> Build | None:
        return self.build_service.regenerate()

    def current_build(self) -> Build | None:
        return self.build_service.current()

    def build_counter(self) -> tuple[int, int]:
        cursor = self.build_service.cursor
        return cursor.position, cursor.total

    def display_price(self, amount: float) -> ConvertedPrice:
        return self.currency_service.convert(amount, self.settings.display_currency)

    # ============= Favorites =============

    def is_current_liked(self) -> bool:
        build = self.current_build()
        if build is None:
            return False
        return self.favorite_service.is_liked(
            self.user, self.build_service.cursor.index, build
        )

    def liked_count(self) -> int:
        return self.favorite_service.liked_count(self.user)

    def toggle_like(self) -> bool | None:
        """Toggle the heart on the current build; ``None`` when nothing changed."""
        build = self.current_build()
        if build is None:
            return None
        context = ToggleContext(category=self.category, needs=self.needs)
        try:
            return self.favorite_service.toggle_favorite(
                self.user, build, self.build_service.cursor.index, context
            )
        except NotAuthenticatedError:
            return None
        except RemoteRequestError as exc:
            self._notify(str(exc))
            return None

    def load_favorites(self) -> list[SavedFavorite]:
        try:
            return self.favorite_service.fetch_favorites(self.user)
        except NotAuthenticatedError:
            return []
        except RemoteRequestError as exc:
            self._notify(f"Failed to load favorites. {exc}")
            return []

    def remove_favorite(self, favorite_id: int) -> bool:
        try:
            self.favorite_service.delete_favorite(self.user, favorite_id)
        except NotAuthenticatedError:
            return False
        except RemoteRequestError as exc:
            self._notify(str(exc))
            return False
        self._notify("Build removed from favorites!")
        return True

    # ============= UI Callbacks =============

    def _notify(self, message: str) -> None:
        logger.info(f"Notice: {message}")
        if self._on_notice is not None:
            self._on_notice(message)

    def _redirect_to_login(self) -> None:
        if self._on_login_required is not None:
            self._on_login_required()


def create_app_controller(
    *,
    on_notice: Callable[[str], None] | None = None,
    on_login_required: Callable[[], None] | None = None,
) -> AppController:
    """Load settings, configure logging, and build a fully wired controller."""
    ensure_base_dirs()
    settings = SettingsService().load()
    configure_logging(settings.log_level)
    return AppController(
        settings=settings,
        on_notice=on_notice,
        on_login_required=on_login_required,
    )
