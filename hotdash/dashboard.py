"""Dashboard engine: file loading, hot reload, error overlay and event handling."""

from __future__ import annotations

import abc
from pathlib import Path
from typing import Any

from hotdash.errors import InvalidStateError
from hotdash.events import Action, CharKey, Event, FileChangeEvent, KeyEvent, ResizeEvent
from hotdash.loader import FileLoader
from hotdash.overlay import ErrorOverlay
from hotdash.state import DashboardState
from hotdash.watcher import FileWatcher


class Renderer(abc.ABC):
    """A backend that draws frame buffers to a terminal or another output."""

    @abc.abstractmethod
    def draw(self, buffer: Any) -> None:
        """Make the output show the contents of ``buffer``."""

    @abc.abstractmethod
    def flush(self) -> None:
        """Write out anything still buffered."""

    @abc.abstractmethod
    def size(self) -> Any:
        """The current output area."""

    @abc.abstractmethod
    def clear(self) -> None:
        """Remove everything from the output."""

    @abc.abstractmethod
    def show_cursor(self, show: bool) -> None:
        """Show or hide the cursor."""

    @abc.abstractmethod
    def set_cursor(self, x: int, y: int) -> None:
        """Move the cursor to column ``x``, row ``y``."""


class DashboardEngine:
    """Loads a dashboard file, watches it for changes and turns events into actions.

    Relative paths given to :meth:`load` are resolved against ``root_path``.
    The engine can be used as a context manager to stop the watcher on exit.
    """

    def __init__(self, renderer: Renderer, root_path: str | Path) -> None:
        self.renderer = renderer
        self.root_path = Path(root_path)
        self.loader = FileLoader()
        self.state = DashboardState()
        self.entry_file: Path | None = None
        self.error_overlay: ErrorOverlay | None = None
        self._watcher: FileWatcher | None = None

    def __enter__(self) -> DashboardEngine:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.disable_hot_reload()

    def show_error(self, error: BaseException) -> None:
        """Display ``error`` in an overlay instead of failing."""
        self.error_overlay = ErrorOverlay.from_engine_error(error)
        self.state.mark_dirty()

    def dismiss_error(self) -> None:
        if self.error_overlay is not None:
            self.error_overlay = None
            self.state.mark_dirty()

    def has_error(self) -> bool:
        """Whether an error overlay is currently visible."""
        return self.error_overlay is not None and self.error_overlay.is_visible()

    def load(self, entry: str | Path) -> None:
        """Load the main dashboard file and watch it if hot reload is on."""
        entry = Path(entry)
        path = entry if entry.is_absolute() else self.root_path / entry
        loaded = self.loader.load(path)
        self.entry_file = loaded.path
        if self._watcher is not None:
            self._watcher.watch(loaded.path)
            for dep in loaded.dependencies:
                self._watcher.watch(dep)
        self.state.mark_dirty()

    def reload(self) -> None:
        """Drop the entry file and its dependents from the cache and load it again."""
        if self.entry_file is None:
            raise InvalidStateError("No entry file loaded")
        self.loader.invalidate(self.entry_file)
        loaded = self.loader.load(self.entry_file)
        if self._watcher is not None:
            for dep in loaded.dependencies:
                self._watcher.watch(dep)
        self.state.mark_dirty()

    def enable_hot_reload(self, debounce_ms: int = 100) -> None:
        """Start watching the loaded files, reporting changes after ``debounce_ms``."""
        watcher = FileWatcher(debounce_ms)
        if self._watcher is not None:
            self._watcher.close()
        self._watcher = watcher
        if self.entry_file is not None:
            watcher.watch(self.entry_file)
            loaded = self.loader.get(self.entry_file)
            if loaded is not None:
                for dep in loaded.dependencies:
                    watcher.watch(dep)

    def disable_hot_reload(self) -> None:
        if self._watcher is not None:
            self._watcher.close()
            self._watcher = None

    def poll_changes(self) -> list[Path] | None:
        """Changed files since the last poll, or None when hot reload is off."""
        if self._watcher is None:
            return None
        return self._watcher.poll()

    def handle_event(self, event: Event) -> Action:
        """Apply the engine's default handling to ``event`` and say what to do next.

        Ctrl+C quits, Ctrl+R reloads, Ctrl+D dismisses a visible error overlay;
        file changes reload and resizes request a render.
        """
        if isinstance(event, FileChangeEvent):
            self.loader.invalidate(event.path)
            self.reload()
            return Action.RENDER

        if isinstance(event, ResizeEvent):
            self.state.mark_dirty()
            return Action.RENDER

        if isinstance(event, KeyEvent) and event.modifiers.ctrl:
            if event.code == CharKey("c"):
                return Action.QUIT
            if event.code == CharKey("r"):
                self.reload()
                return Action.RENDER
            if event.code == CharKey("d") and self.has_error():
                self.dismiss_error()
                return Action.RENDER

        return Action.NONE

    def is_hot_reload_enabled(self) -> bool:
        return self._watcher is not None

    def clear(self) -> None:
        """Clear the renderer output and all dashboard state."""
        self.renderer.clear()
        self.state.clear()