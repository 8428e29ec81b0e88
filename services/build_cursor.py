"""Cyclic cursor over the builds of one collection."""

from __future__ import annotations

from collections.abc import Iterable

from models.build import Build, BuildCollection


class BuildCursor:
    """Tracks which build of the current batch is shown.

    ``advance`` walks the batch cyclically; fetching a new batch goes
    through ``reset`` and starts again at the first build.
    """

    def __init__(self, builds: BuildCollection | Iterable[Build] = ()) -> None:
        self._builds: tuple[Build, ...] = ()
        self._index = 0
        self.reset(builds)

    def reset(self, builds: BuildCollection | Iterable[Build]) -> None:
        if isinstance(builds, BuildCollection):
            builds = builds.builds
        self._builds = tuple(builds)
        self._index = 0

    @property
    def builds(self) -> tuple[Build, ...]:
        return self._builds

    @property
    def index(self) -> int:
        return self._index

    @property
    def position(self) -> int:
        """1-based position for "Build N of M" counters; 0 when empty."""
        return self._index + 1 if self._builds else 0

    @property
    def total(self) -> int:
        return len(self._builds)

    @property
    def can_advance(self) -> bool:
        return len(self._builds) > 1

    def current(self) -> Build | None:
        if not self._builds:
            return None
        return self._builds[self._index]

    def advance(self) -> Build | None:
        if self.can_advance:
            self._index = (self._index + 1) % len(self._builds)
        return self.current()
