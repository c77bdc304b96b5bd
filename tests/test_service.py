"""Tests for the watchdog-backed watch service."""

import pytest
from watchdog.observers.api import DEFAULT_OBSERVER_TIMEOUT, ObservedWatch
from watchdog.observers.polling import PollingObserver

from dirwatch.watcher.service import (
    HIGH_SENSITIVITY,
    WATCHED_EVENTS,
    ObserverWatchService,
    make_observer,
)
from dirwatch.watcher.walker import register_recursive


class TestMakeObserver:
    """Test cases for make_observer()."""

    def test_polling_backend(self):
        observer = make_observer("polling")

        assert isinstance(observer, PollingObserver)
        assert observer.timeout == HIGH_SENSITIVITY

    def test_native_backend_uses_high_sensitivity(self):
        assert make_observer("native").timeout == HIGH_SENSITIVITY

    def test_poll_rate_not_coarser_than_watchdog_default(self):
        """The highest sensitivity polls at least as often as watchdog does by default."""
        assert make_observer("polling").timeout <= DEFAULT_OBSERVER_TIMEOUT
        assert make_observer("native").timeout <= DEFAULT_OBSERVER_TIMEOUT

    def test_unknown_backend(self):
        with pytest.raises(ValueError):
            make_observer("carrier-pigeon")


class TestObserverWatchService:
    """Test cases for the ObserverWatchService."""

    def test_register_returns_watch(self, tmp_path):
        service = ObserverWatchService()

        watch = service.register_directory(tmp_path)

        assert isinstance(watch, ObservedWatch)
        assert watch.path == str(tmp_path)
        assert watch.is_recursive is False
        assert watch.event_filter == frozenset(WATCHED_EVENTS)
        service.close()

    def test_same_directory_same_handle(self, tmp_path):
        service = ObserverWatchService()

        assert service.register_directory(tmp_path) == service.register_directory(tmp_path)
        assert service.watched_paths() == {str(tmp_path)}
        service.close()

    def test_missing_directory(self, tmp_path):
        service = ObserverWatchService()

        with pytest.raises(FileNotFoundError):
            service.register_directory(tmp_path / "missing")

        assert service.watched_paths() == set()

    def test_regular_file(self, tmp_path):
        target = tmp_path / "file.py"
        target.write_text("# code")
        service = ObserverWatchService()

        with pytest.raises(NotADirectoryError):
            service.register_directory(target)

    def test_starts_and_stops(self, tmp_path):
        with ObserverWatchService(backend="polling") as service:
            service.register_directory(tmp_path)
            assert service.is_running() is True

        assert service.is_running() is False
        assert service.watched_paths() == set()

    def test_cannot_start_twice(self):
        service = ObserverWatchService(backend="polling")
        service.start()

        with pytest.raises(RuntimeError):
            service.start()

        service.close()

    def test_close_without_start_drops_watches(self, tmp_path):
        service = ObserverWatchService()
        service.register_directory(tmp_path)

        service.close()

        assert service.watched_paths() == set()

    def test_recursive_registration(self, tree):
        """Every directory in the tree gets its own non-recursive watch."""
        with ObserverWatchService() as service:
            summary = register_recursive(service, [tree])

            assert service.watched_paths() == {
                str(tree),
                str(tree / "a"),
                str(tree / "a" / "a1"),
                str(tree / "b"),
            }

        assert summary.registered_count == 4
        assert all(isinstance(handle, ObservedWatch) for handle in summary.table)
        assert set(summary.table.values()) == {
            tree,
            tree / "a",
            tree / "a" / "a1",
            tree / "b",
        }
