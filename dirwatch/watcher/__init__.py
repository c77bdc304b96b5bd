"""Directory registration with file-change notification services."""

from dirwatch.watcher.errors import (
    DirWatchError,
    PathVanishedError,
    RegistrationError,
    TraversalError,
)
from dirwatch.watcher.registrar import (
    Registration,
    RegistrationPolicy,
    register,
)
from dirwatch.watcher.service import HIGH_SENSITIVITY, ObserverWatchService, WatchService
from dirwatch.watcher.walker import RegistrationSummary, register_recursive

__all__ = [
    "DirWatchError",
    "HIGH_SENSITIVITY",
    "ObserverWatchService",
    "PathVanishedError",
    "Registration",
    "RegistrationError",
    "RegistrationPolicy",
    "RegistrationSummary",
    "TraversalError",
    "WatchService",
    "register",
    "register_recursive",
]
