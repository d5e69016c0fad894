"""Debounced file change notifications for hot reloading."""

from __future__ import annotations

import os
import queue
import time
from dataclasses import dataclass
from pathlib import Path

from watchdog.events import (
    EVENT_TYPE_CREATED,
    EVENT_TYPE_DELETED,
    EVENT_TYPE_MODIFIED,
    EVENT_TYPE_MOVED,
    FileSystemEvent,
    FileSystemEventHandler,
)
from watchdog.observers import Observer
from watchdog.observers.api import ObservedWatch

from hotdash.errors import UnwatchFailedError, WatchFailedError, WatchInitError

_RELEVANT_EVENTS = frozenset(
    {EVENT_TYPE_CREATED, EVENT_TYPE_MODIFIED, EVENT_TYPE_DELETED, EVENT_TYPE_MOVED}
)


class _QueueHandler(FileSystemEventHandler):
    """Forwards the paths of create, modify, delete and move events to a queue."""

    def __init__(self, sink: queue.SimpleQueue) -> None:
        super().__init__()
        self._sink = sink

    def on_any_event(self, event: FileSystemEvent) -> None:
        if event.is_directory or event.event_type not in _RELEVANT_EVENTS:
            return
        self._sink.put(Path(os.fsdecode(event.src_path)))
        dest = getattr(event, "dest_path", "")
        if dest:
            self._sink.put(Path(os.fsdecode(dest)))


@dataclass
class _Schedule:
    watch: ObservedWatch
    users: int = 1


@dataclass(frozen=True)
class _Target:
    directory: Path
    recursive: bool


class FileWatcher:
    """Watches files and directories and reports changed files after a debounce period.

    Directories are watched recursively. Call :meth:`close` (or use the
    watcher as a context manager) to stop the background observer.
    """

    def __init__(self, debounce_ms: int = 100) -> None:
        self.debounce_ms = debounce_ms
        self._events: queue.SimpleQueue = queue.SimpleQueue()
        self._handler = _QueueHandler(self._events)
        self._watched: dict[Path, _Target] = {}
        self._schedules: dict[_Target, _Schedule] = {}
        self._pending: set[Path] = set()
        self._last_process_time = time.monotonic()
        try:
            self._observer = Observer()
            self._observer.start()
        except (OSError, RuntimeError) as exc:
            raise WatchInitError(str(exc)) from exc

    def __enter__(self) -> FileWatcher:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def watch(self, path: str | Path) -> None:
        """Start watching a file, or a directory and everything below it."""
        try:
            canonical = Path(path).resolve(strict=True)
        except (OSError, RuntimeError) as exc:
            raise WatchFailedError(path, str(exc)) from exc

        if canonical in self._watched:
            return

        if canonical.is_dir():
            target = _Target(canonical, recursive=True)
        else:
            target = _Target(canonical.parent, recursive=False)

        schedule = self._schedules.get(target)
        if schedule is None:
            try:
                observed = self._observer.schedule(
                    self._handler, str(target.directory), recursive=target.recursive
                )
            except (OSError, RuntimeError) as exc:
                raise WatchFailedError(canonical, str(exc)) from exc
            self._schedules[target] = _Schedule(observed)
        else:
            schedule.users += 1

        self._watched[canonical] = target

    def unwatch(self, path: str | Path) -> None:
        """Stop watching a path; unknown paths are ignored."""
        try:
            canonical = Path(path).resolve(strict=True)
        except (OSError, RuntimeError) as exc:
            raise UnwatchFailedError(path, str(exc)) from exc
        if canonical in self._watched:
            self._remove(canonical)

    def _remove(self, canonical: Path) -> None:
        target = self._watched[canonical]
        schedule = self._schedules[target]
        if schedule.users <= 1:
            try:
                self._observer.unschedule(schedule.watch)
            except (OSError, KeyError, RuntimeError) as exc:
                raise UnwatchFailedError(canonical, str(exc)) from exc
            del self._schedules[target]
        else:
            schedule.users -= 1
        del self._watched[canonical]

    def _covers(self, path: Path) -> bool:
        if path in self._watched:
            return True
        return any(
            target.recursive and watched in path.parents
            for watched, target in self._watched.items()
        )

    def poll(self) -> list[Path]:
        """Return the files changed since the last report, once the debounce period has passed."""
        while True:
            try:
                path = self._events.get_nowait()
            except queue.Empty:
                break
            if path.is_file() and self._covers(path):
                self._pending.add(path)

        now = time.monotonic()
        elapsed_ms = (now - self._last_process_time) * 1000
        if elapsed_ms >= self.debounce_ms and self._pending:
            changes = sorted(self._pending)
            self._pending.clear()
            self._last_process_time = now
            return changes
        return []

    def watched_paths(self) -> list[Path]:
        return list(self._watched)

    def watch_count(self) -> int:
        return len(self._watched)

    def clear(self) -> None:
        """Stop watching every path."""
        for path in list(self._watched):
            self._remove(path)

    def close(self) -> None:
        """Stop the background observer and forget all watches."""
        if self._observer.is_alive():
            self._observer.stop()
            self._observer.join(timeout=5)
        self._watched.clear()
        self._schedules.clear()
        self._pending.clear()