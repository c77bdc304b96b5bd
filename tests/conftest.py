"""Shared fixtures for the registration tests."""

import errno
import os
from pathlib import Path

import pytest


class FakeWatchService:
    """
    In-memory watch service.

    Hands out one handle per distinct path, like a real session does, and can
    be told to report paths as vanished or to fail outright.
    """

    def __init__(self):
        self.calls: list[Path] = []
        self.vanished: set[Path] = set()
        self.failures: dict[Path, OSError] = {}
        self.reused: dict[Path, str] = {}
        self.closed = False
        self._handles: dict[Path, str] = {}

    def register_directory(self, path):
        path = Path(path)
        self.calls.append(path)

        if path in self.vanished:
            raise FileNotFoundError(errno.ENOENT, os.strerror(errno.ENOENT), str(path))
        if path in self.failures:
            raise self.failures[path]

        if path in self.reused:
            return self.reused[path]
        if path not in self._handles:
            self._handles[path] = f"wd-{len(self._handles) + 1}"
        return self._handles[path]

    def close(self):
        self.closed = True


@pytest.fixture
def service():
    return FakeWatchService()


@pytest.fixture
def tree(tmp_path):
    """
    A small directory tree:

        root/
            a/
                a1/
                file.py
            b/
            notes.txt
    """
    root = tmp_path / "root"
    (root / "a" / "a1").mkdir(parents=True)
    (root / "b").mkdir()
    (root / "a" / "file.py").write_text("# code")
    (root / "notes.txt").write_text("notes")
    return root
