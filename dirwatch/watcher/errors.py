"""
Directory registration error hierarchy.

Every error carries the path it concerns. Errors that wrap an ``OSError``
keep it as ``cause`` and are raised with it chained. Errors raised out of a
recursive registration also carry the partial ``summary``.
"""

from __future__ import annotations

from pathlib import Path


class DirWatchError(Exception):
    """Base exception for directory registration failures."""

    def __init__(self, path: str | Path, cause: BaseException | None = None):
        self.path = Path(path)
        self.cause = cause
        # Set by register_recursive to what was registered before the failure
        self.summary = None
        super().__init__(self._describe())

    def _describe(self) -> str:
        if self.cause is None:
            return str(self.path)
        return f"{self.path}: {self.cause}"


class PathVanishedError(DirWatchError):
    """A directory disappeared between discovery and registration."""

    def _describe(self) -> str:
        return f"path vanished during registration: {self.path}"


class RegistrationError(DirWatchError):
    """The watch facility refused to register a directory."""

    def _describe(self) -> str:
        return f"failed to register watcher for path '{self.path}': {self.cause}"


class TraversalError(DirWatchError):
    """A directory could not be listed while walking a tree."""

    def _describe(self) -> str:
        return f"failed to traverse '{self.path}': {self.cause}"
