"""Exception hierarchy for the dashboard engine, file loading, watching and rendering."""

from __future__ import annotations

from pathlib import Path
from typing import Any, Iterable


class EngineError(Exception):
    """Base class for every error raised by the dashboard engine."""

    _prefix = ""

    @property
    def detail(self) -> str:
        """The message without the category prefix."""
        return str(self.args[0]) if self.args else ""

    def __str__(self) -> str:
        return f"{self._prefix}{self.detail}"


class InvalidStateError(EngineError):
    """The engine was asked to do something its current state does not allow."""

    _prefix = "Invalid state: "


class WidgetNotFoundError(EngineError):
    """A widget id did not match any known widget."""

    _prefix = "Widget not found: "


class CustomError(EngineError):
    """An application-defined error."""

    _prefix = "Custom error: "


class LoadError(EngineError):
    """Base class for file loading failures."""


class FileMissingError(LoadError):
    """The requested file does not exist."""

    def __init__(self, path: str | Path) -> None:
        self.path = Path(path)
        super().__init__(f"File not found: {self.path}")


class ReadFailedError(LoadError):
    """The file exists but could not be read."""

    def __init__(self, path: str | Path, cause: BaseException) -> None:
        self.path = Path(path)
        self.cause = cause
        super().__init__(f"Failed to read file: {self.path}: {cause}")
        self.__cause__ = cause


class ParseFailedError(LoadError):
    """The file was read but its content could not be parsed."""

    def __init__(self, path: str | Path, reason: str) -> None:
        self.path = Path(path)
        self.reason = reason
        super().__init__(f"Failed to parse file: {self.path}: {reason}")


class CircularDependencyError(LoadError):
    """Files depend on each other in a cycle."""

    def __init__(self, cycle: Iterable[str | Path]) -> None:
        self.cycle = [Path(p) for p in cycle]
        names = [str(p) for p in self.cycle]
        super().__init__(f"Circular dependency detected: {names}")


class InvalidFormatError(LoadError):
    """The file is not in a format the loader understands."""

    def __init__(self, path: str | Path) -> None:
        self.path = Path(path)
        super().__init__(f"Invalid file format: {self.path}")


class DependencyNotFoundError(LoadError):
    """A file names a dependency that cannot be found."""

    def __init__(self, dependency: str | Path, dependent: str | Path) -> None:
        self.dependency = Path(dependency)
        self.dependent = Path(dependent)
        super().__init__(
            f"Dependency not found: {self.dependency} required by {self.dependent}"
        )


class WatchError(EngineError):
    """Base class for file watching failures."""


class WatchInitError(WatchError):
    """The file watcher could not be started."""

    _prefix = "Failed to initialize file watcher: "


class WatchFailedError(WatchError):
    """A path could not be watched."""

    def __init__(self, path: str | Path, reason: str) -> None:
        self.path = Path(path)
        self.reason = reason
        super().__init__(f"Failed to watch path: {self.path}: {reason}")


class UnwatchFailedError(WatchError):
    """A path could not be unwatched."""

    def __init__(self, path: str | Path, reason: str) -> None:
        self.path = Path(path)
        self.reason = reason
        super().__init__(f"Failed to unwatch path: {self.path}: {reason}")


class WatchChannelClosedError(WatchError):
    """The watcher stopped delivering events."""

    def __str__(self) -> str:
        return "Watcher channel closed"


class RenderError(EngineError):
    """Base class for rendering failures."""


class BackendError(RenderError):
    """The rendering backend reported a failure."""

    _prefix = "Backend error: "


class SizeMismatchError(RenderError):
    """A buffer's area does not match the area the renderer expects."""

    def __init__(self, expected: Any, actual: Any) -> None:
        self.expected = expected
        self.actual = actual
        super().__init__(f"Size mismatch: expected {expected!r}, got {actual!r}")