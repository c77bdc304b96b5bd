"""
Settings read from the environment.

Values usually come from a ``.env`` file loaded by the CLI.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from typing import Mapping

from dirwatch.watcher.registrar import RegistrationPolicy
from dirwatch.watcher.service import BACKENDS

TRUE_VALUES = {"1", "true", "yes", "on"}
FALSE_VALUES = {"0", "false", "no", "off"}


def _parse_bool(name: str, value: str) -> bool:
    lowered = value.strip().lower()
    if lowered in TRUE_VALUES:
        return True
    if lowered in FALSE_VALUES:
        return False
    raise ValueError(f"{name} must be a boolean (true/false), got {value!r}")


@dataclass(frozen=True)
class Settings:
    """Registration defaults."""

    ignore_vanished: bool = True
    track_table: bool = True
    backend: str = "native"
    log_level: str = "WARNING"

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> "Settings":
        """Read DIRWATCH_* variables, falling back to the defaults."""
        env = os.environ if environ is None else environ
        defaults = cls()

        ignore_vanished = defaults.ignore_vanished
        if env.get("DIRWATCH_IGNORE_VANISHED"):
            ignore_vanished = _parse_bool(
                "DIRWATCH_IGNORE_VANISHED", env["DIRWATCH_IGNORE_VANISHED"]
            )

        track_table = defaults.track_table
        if env.get("DIRWATCH_TRACK_TABLE"):
            track_table = _parse_bool("DIRWATCH_TRACK_TABLE", env["DIRWATCH_TRACK_TABLE"])

        backend = (env.get("DIRWATCH_BACKEND") or defaults.backend).strip().lower()
        if backend not in BACKENDS:
            raise ValueError(
                f"DIRWATCH_BACKEND must be one of {', '.join(BACKENDS)}, got {backend!r}"
            )

        log_level = (env.get("DIRWATCH_LOG_LEVEL") or defaults.log_level).strip().upper()
        if not isinstance(logging.getLevelName(log_level), int):
            raise ValueError(f"DIRWATCH_LOG_LEVEL is not a logging level: {log_level!r}")

        return cls(
            ignore_vanished=ignore_vanished,
            track_table=track_table,
            backend=backend,
            log_level=log_level,
        )

    def policy(self) -> RegistrationPolicy:
        return RegistrationPolicy(
            ignore_vanished=self.ignore_vanished,
            track_table=self.track_table,
        )
