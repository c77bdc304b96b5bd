"""
Recursive directory registration.

Walks each starting path top-down and registers every directory, root
included, before descending into its children.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Hashable, Iterable, Mapping

from dirwatch.watcher.errors import DirWatchError, PathVanishedError, TraversalError
from dirwatch.watcher.registrar import (
    DEFAULT_POLICY,
    Registration,
    RegistrationPolicy,
    RegistrationTable,
    register,
)
from dirwatch.watcher.service import WatchService

logger = logging.getLogger(__name__)


@dataclass
class RegistrationSummary:
    """Outcome of a recursive registration pass."""

    registered: list[Path] = field(default_factory=list)
    skipped: list[Path] = field(default_factory=list)
    updated: list[tuple[Path, Path]] = field(default_factory=list)
    table: RegistrationTable = field(default_factory=dict)

    @property
    def registered_count(self) -> int:
        return len(self.registered)

    @property
    def skipped_count(self) -> int:
        return len(self.skipped)

    @property
    def is_complete(self) -> bool:
        """True when no directory was skipped."""
        return not self.skipped

    def _skip(self, path: Path):
        if path not in self.skipped:
            self.skipped.append(path)

    def _record(self, registration: Registration, track_table: bool):
        self.registered.append(registration.path)
        if registration.is_update:
            self.updated.append((registration.previous, registration.path))
        if track_table:
            self.table[registration.handle] = registration.path


def register_recursive(
    service: WatchService,
    starting_paths: str | Path | Iterable[str | Path],
    *,
    table: Mapping[Hashable, Path] | None = None,
    policy: RegistrationPolicy = DEFAULT_POLICY,
) -> RegistrationSummary:
    """
    Register directories and all their subdirectories with the watch service.

    Args:
        service: Open watch service
        starting_paths: Tree roots, walked in the given order
        table: Known handle -> path pairs; copied into the summary, never modified
        policy: Vanished-path and table-tracking behaviour

    Returns:
        RegistrationSummary with the registered and skipped paths and the
        resulting table

    Raises:
        PathVanishedError: a directory vanished and vanished paths are not ignored
        RegistrationError: the watch service refused a directory
        TraversalError: a directory could not be listed for any other reason

        The raised error's ``summary`` holds the directories registered before
        the failure; their watches stay active.
    """
    if isinstance(starting_paths, (str, Path)):
        starting_paths = [starting_paths]

    summary = RegistrationSummary()
    if policy.track_table and table:
        summary.table.update(table)

    try:
        for start in starting_paths:
            _register_tree(service, Path(start), summary, policy)
    except DirWatchError as e:
        e.summary = summary
        raise

    return summary


def _register_tree(
    service: WatchService,
    start: Path,
    summary: RegistrationSummary,
    policy: RegistrationPolicy,
):
    """Register one tree, pre-order."""

    def on_error(error: OSError):
        failed = Path(error.filename) if error.filename else start

        if isinstance(error, FileNotFoundError):
            if not policy.ignore_vanished:
                raise PathVanishedError(failed, error) from error
            # Removed since it was listed (e.g. a lock directory cleaned up)
            logger.debug("skipping vanished path: %s", failed)
            summary._skip(failed)
            return

        if isinstance(error, NotADirectoryError):
            # A root given as a file, or a directory replaced by a file
            logger.debug("not a directory, nothing to watch: %s", failed)
            return

        raise TraversalError(failed, error) from error

    for dirpath, dirnames, _filenames in os.walk(start, topdown=True, onerror=on_error):
        # Sorted siblings keep the visitation order stable
        dirnames.sort()

        registration = register(
            service,
            Path(dirpath),
            table=summary.table if policy.track_table else None,
            policy=policy,
        )
        if registration is None:
            summary._skip(Path(dirpath))
            continue

        summary._record(registration, policy.track_table)
