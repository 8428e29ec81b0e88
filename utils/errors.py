"""Exception hierarchy surfaced to callers of the build and favorites services."""

from __future__ import annotations


class AutoBuildError(Exception):
    """Base class for recoverable errors raised by the core services."""


class NotAuthenticatedError(AutoBuildError):
    """A favorites operation was attempted without a signed-in, non-guest user."""

    def __init__(self, message: str = "Sign in to save builds to your favorites.") -> None:
        super().__init__(message)


class RemoteRequestError(AutoBuildError):
    """A call to one of the backend APIs failed."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class RemoteWriteFailedError(RemoteRequestError):
    """Creating or deleting a favorite on the backend failed; nothing was cached."""


class InvalidBuildRequestError(AutoBuildError):
    """A build request was rejected before being sent."""


class BuildRequestInProgressError(AutoBuildError):
    """A build request is already outstanding."""


__all__ = [
    "AutoBuildError",
    "BuildRequestInProgressError",
    "InvalidBuildRequestError",
    "NotAuthenticatedError",
    "RemoteRequestError",
    "RemoteWriteFailedError",
]
