"""
Single-directory registration.

``register`` asks a watch service to watch one directory and reports the
resulting handle -> path pair. Tables are consulted, never mutated; the
recursive walker builds the resulting table.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Hashable, Mapping

from dirwatch.watcher.errors import PathVanishedError, RegistrationError
from dirwatch.watcher.service import WatchService

logger = logging.getLogger(__name__)

RegistrationTable = dict[Hashable, Path]


@dataclass(frozen=True)
class RegistrationPolicy:
    """
    How registration reacts to vanished paths and whether tables are kept.

    ignore_vanished: log and skip directories that disappear mid-registration
        instead of raising PathVanishedError.
    track_table: look up and record handle -> path pairs.
    """

    ignore_vanished: bool = True
    track_table: bool = True


DEFAULT_POLICY = RegistrationPolicy()


@dataclass(frozen=True)
class Registration:
    """A directory's active registration."""

    handle: Hashable
    path: Path
    previous: Path | None = None

    @property
    def is_new(self) -> bool:
        return self.previous is None

    @property
    def is_update(self) -> bool:
        """The handle used to point at a different path."""
        return self.previous is not None and self.previous != self.path


def register(
    service: WatchService,
    directory: str | Path,
    *,
    table: Mapping[Hashable, Path] | None = None,
    policy: RegistrationPolicy = DEFAULT_POLICY,
) -> Registration | None:
    """
    Register a single directory with the watch service.

    Args:
        service: Open watch service
        directory: Directory to watch (not its subdirectories)
        table: Known handle -> path pairs, consulted but not modified
        policy: Vanished-path and table-tracking behaviour

    Returns:
        The Registration, or None when the directory vanished and the policy
        ignores vanished paths

    Raises:
        PathVanishedError: the directory does not exist and vanished paths
            are not ignored
        RegistrationError: any other failure from the watch service
    """
    path = Path(directory)

    try:
        handle = service.register_directory(path)
    except FileNotFoundError as e:
        if not policy.ignore_vanished:
            raise PathVanishedError(path, e) from e
        logger.warning("failed to register watcher for path '%s': %s", path, e)
        return None
    except OSError as e:
        raise RegistrationError(path, e) from e

    if not policy.track_table:
        return Registration(handle=handle, path=path)

    previous = (table or {}).get(handle)
    if previous is None:
        logger.debug("registering watched path: %s", path)
    elif previous != path:
        logger.debug("update watched path: %s -> %s", previous, path)

    return Registration(handle=handle, path=path, previous=previous)
