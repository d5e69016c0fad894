"""Error overlay shown on top of a dashboard while developing it."""

from __future__ import annotations

import dataclasses
import enum
import time
from dataclasses import dataclass, field
from typing import Sequence

from hotdash.errors import (
    EngineError,
    FileMissingError,
    InvalidStateError,
    LoadError,
    ParseFailedError,
    ReadFailedError,
    RenderError,
    WatchError,
)

_FOOTER = "Press Ctrl+D to dismiss, Ctrl+R to reload"


class ErrorSeverity(enum.Enum):
    """How serious a displayed error is; decides the overlay's colour."""

    ERROR = "ERROR"
    WARNING = "WARNING"
    INFO = "INFO"

    def label(self) -> str:
        """The upper-case name shown in the panel title."""
        return self.value

    @property
    def color(self) -> str:
        """Colour name used for the panel border and title."""
        return _SEVERITY_COLORS[self]


_SEVERITY_COLORS = {
    ErrorSeverity.ERROR: "red",
    ErrorSeverity.WARNING: "yellow",
    ErrorSeverity.INFO: "blue",
}


@dataclass
class ErrorMessage:
    """A displayable error with optional location and hints.

    The ``with_*`` methods return a modified copy.
    """

    title: str
    message: str
    source: str | None = None
    line: int | None = None
    column: int | None = None
    severity: ErrorSeverity = ErrorSeverity.ERROR
    hints: list[str] = field(default_factory=list)

    @classmethod
    def from_engine_error(cls, error: BaseException) -> ErrorMessage:
        """Describe an engine error for the overlay, with hints on fixing it."""
        if isinstance(error, FileMissingError):
            return (
                cls("File Not Found", f"Could not find file: {error.path}")
                .with_source(str(error.path))
                .with_hint("Check that the file path is correct")
                .with_hint("Make sure the file exists in the expected location")
            )
        if isinstance(error, ReadFailedError):
            return (
                cls("Failed to Read File", f"Could not read file: {error.cause}")
                .with_source(str(error.path))
                .with_hint("Check file permissions")
                .with_hint("Ensure the file is not locked by another process")
            )
        if isinstance(error, ParseFailedError):
            return (
                cls("Parse Error", f"Failed to parse file: {error.reason}")
                .with_source(str(error.path))
                .with_hint("Check the syntax of your .fsx file")
                .with_hint("Look for unclosed brackets, quotes, or other syntax errors")
            )
        if isinstance(error, LoadError):
            return cls("Load Error", str(error))
        if isinstance(error, WatchError):
            return (
                cls("Watch Error", str(error))
                .with_hint("Try restarting the application")
                .with_severity(ErrorSeverity.WARNING)
            )
        if isinstance(error, RenderError):
            return (
                cls("Render Error", str(error))
                .with_hint("This may be a temporary issue")
                .with_hint("Try resizing the terminal or reloading")
                .with_severity(ErrorSeverity.WARNING)
            )
        if isinstance(error, InvalidStateError):
            return cls("Invalid State", error.detail).with_hint(
                "Try reloading the dashboard"
            )
        if isinstance(error, OSError) and not isinstance(error, EngineError):
            return cls("Error", f"IO error: {error}")
        return cls("Error", str(error))

    def _copy(self, **changes: object) -> ErrorMessage:
        changes.setdefault("hints", list(self.hints))
        return dataclasses.replace(self, **changes)

    def with_source(self, source: str) -> ErrorMessage:
        return self._copy(source=source)

    def with_line(self, line: int) -> ErrorMessage:
        return self._copy(line=line)

    def with_column(self, column: int) -> ErrorMessage:
        return self._copy(column=column)

    def with_severity(self, severity: ErrorSeverity) -> ErrorMessage:
        return self._copy(severity=severity)

    def with_hint(self, hint: str) -> ErrorMessage:
        return self._copy(hints=[*self.hints, hint])

    def panel_title(self) -> str:
        """The title drawn in the panel border."""
        return f" {self.severity.label()}: {self.title} "

    def panel_text(self) -> str:
        """The body of the panel: message, location, hints and key help."""
        parts = [self.message, "\n\n"]
        if self.source is not None:
            if self.line is not None and self.column is not None:
                parts.append(f"Location: {self.source}:{self.line}:{self.column}\n\n")
            elif self.line is not None:
                parts.append(f"Location: {self.source}:{self.line}\n\n")
            else:
                parts.append(f"Location: {self.source}\n\n")
        if self.hints:
            parts.append("Hints:\n")
            parts.extend(f"  * {hint}\n" for hint in self.hints)
            parts.append("\n")
        parts.append(_FOOTER)
        return "".join(parts)


class ErrorOverlay:
    """An error panel that can be dismissed by hand or after a timeout.

    ``auto_dismiss_after`` is in seconds; ``None`` means manual dismissal only.
    """

    def __init__(
        self, error: ErrorMessage, auto_dismiss_after: float | None = None
    ) -> None:
        self.error = error
        self.auto_dismiss_after = auto_dismiss_after
        self._timestamp = time.monotonic()
        self._visible = True

    @classmethod
    def from_engine_error(cls, error: BaseException) -> ErrorOverlay:
        """An overlay describing an engine error, dismissed by hand only."""
        return cls(ErrorMessage.from_engine_error(error))

    def is_visible(self) -> bool:
        return self._visible

    def dismiss(self) -> None:
        self._visible = False

    def show(self) -> None:
        """Show the overlay again and restart its auto-dismiss timer."""
        self._visible = True
        self._timestamp = time.monotonic()

    def update(self) -> None:
        """Hide the overlay once its auto-dismiss time has passed."""
        if self.auto_dismiss_after is not None and self.elapsed() >= self.auto_dismiss_after:
            self._visible = False

    def elapsed(self) -> float:
        """Seconds since the overlay was last shown."""
        return time.monotonic() - self._timestamp


def centered_rect(
    percent_x: int, percent_y: int, area: Sequence[int]
) -> tuple[int, int, int, int]:
    """A rectangle centred in ``area`` taking the given percentages of its size.

    ``area`` is ``(x, y, width, height)``; the result has the same form.
    """
    x, y, width, height = area
    horizontal_margin = max(width - (width * percent_x) // 100, 0) // 2
    vertical_margin = max(height - (height * percent_y) // 100, 0) // 2
    return (
        x + horizontal_margin,
        y + vertical_margin,
        max(width - horizontal_margin * 2, 0),
        max(height - vertical_margin * 2, 0),
    )