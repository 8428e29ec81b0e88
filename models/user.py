"""Signed-in user as supplied by the session collaborator."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from utils.coercion import coerce_bool


@dataclass(frozen=True)
class SessionUser:
    id: int | str | None
    is_guest: bool = False
    fullname: str = ""

    @property
    def can_favorite(self) -> bool:
        return not self.is_guest and self.id not in (None, "")

    @property
    def cache_key(self) -> str:
        return str(self.id)

    @classmethod
    def from_payload(cls, payload: Any) -> SessionUser | None:
        """Build a user from the login response's ``user`` object."""
        if not isinstance(payload, dict):
            return None
        user_id = payload.get("id")
        if user_id in (None, ""):
            return None
        is_guest = payload.get("isGuest", payload.get("is_guest", False))
        return cls(
            id=user_id,
            is_guest=coerce_bool(is_guest),
            fullname=str(payload.get("fullname") or ""),
        )
