"""
Watch services that directories are registered against.

``WatchService`` is the capability the registration code needs: register a
single directory and get back a handle, and close the session. The
``ObserverWatchService`` implementation schedules non-recursive watchdog
watches; walking subdirectories is left to the caller.
"""

from __future__ import annotations

import errno
import os
from pathlib import Path
from typing import Hashable, Literal, Protocol

from watchdog.events import (
    DirCreatedEvent,
    DirDeletedEvent,
    DirModifiedEvent,
    FileCreatedEvent,
    FileDeletedEvent,
    FileModifiedEvent,
    FileSystemEventHandler,
)
from watchdog.observers import Observer
from watchdog.observers.api import DEFAULT_OBSERVER_TIMEOUT, BaseObserver, ObservedWatch
from watchdog.observers.polling import PollingObserver

Backend = Literal["native", "polling"]

BACKENDS: tuple[str, ...] = ("native", "polling")

# Created, modified and deleted entries, for files and directories alike
WATCHED_EVENTS = (
    FileCreatedEvent,
    DirCreatedEvent,
    FileModifiedEvent,
    DirModifiedEvent,
    FileDeletedEvent,
    DirDeletedEvent,
)


# Seconds between checks for changes, and the polling backend's poll
# interval. Never coarser than watchdog's own default.
HIGH_SENSITIVITY = DEFAULT_OBSERVER_TIMEOUT


class WatchService(Protocol):
    """A file-change notification session."""

    def register_directory(self, path: Path) -> Hashable:
        """Watch a single directory and return its handle."""
        ...

    def close(self) -> None:
        """End the session and drop every registration."""
        ...


def make_observer(backend: Backend = "native") -> BaseObserver:
    """Build a watchdog observer running at the highest sensitivity."""
    timeout = HIGH_SENSITIVITY
    if backend == "native":
        return Observer(timeout=timeout)
    if backend == "polling":
        return PollingObserver(timeout=timeout)
    raise ValueError(f"Unknown backend {backend!r}, expected one of {', '.join(BACKENDS)}")


class ObserverWatchService:
    """
    Watch service backed by a watchdog observer.

    Usage:
        with ObserverWatchService() as service:
            handle = service.register_directory(Path("src"))
    """

    def __init__(
        self,
        event_handler: FileSystemEventHandler | None = None,
        backend: Backend = "native",
    ):
        self.backend = backend
        self.event_handler = event_handler or FileSystemEventHandler()
        self._observer = make_observer(backend)

    def start(self):
        """Start delivering notifications for registered directories."""
        if self._observer.is_alive():
            raise RuntimeError("Watch service is already running")
        self._observer.start()

    def register_directory(self, path: str | Path) -> ObservedWatch:
        path = Path(path)

        # A missing path only fails once the observer starts its emitter,
        # so check up front to fail at registration time.
        if not path.exists():
            raise FileNotFoundError(errno.ENOENT, os.strerror(errno.ENOENT), str(path))
        if not path.is_dir():
            raise NotADirectoryError(errno.ENOTDIR, os.strerror(errno.ENOTDIR), str(path))

        return self._observer.schedule(
            self.event_handler,
            str(path),
            recursive=False,
            event_filter=list(WATCHED_EVENTS),
        )

    def watched_paths(self) -> set[str]:
        """Paths with an active watch."""
        return {emitter.watch.path for emitter in self._observer.emitters}

    def is_running(self) -> bool:
        return self._observer.is_alive()

    def close(self):
        """Stop the observer, or just drop the watches if it never started."""
        if self._observer.is_alive():
            self._observer.stop()
            self._observer.join(timeout=5)
        else:
            self._observer.unschedule_all()

    def __enter__(self) -> "ObserverWatchService":
        self.start()
        return self

    def __exit__(self, *exc_info):
        self.close()
