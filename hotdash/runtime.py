"""Script context for dashboard files and helpers for their `#load` directives."""

from __future__ import annotations

import hashlib
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Iterable

from hotdash.errors import InvalidStateError
from hotdash.state import DashboardState

_NAMED_COLORS = (
    "black",
    "red",
    "green",
    "yellow",
    "blue",
    "magenta",
    "cyan",
    "white",
    "darkGray",
    "lightRed",
    "lightGreen",
    "lightYellow",
    "lightBlue",
    "lightMagenta",
    "lightCyan",
)

_STYLE_MODIFIERS = (
    "bold",
    "dim",
    "italic",
    "underlined",
    "slowBlink",
    "rapidBlink",
    "reversed",
    "hidden",
    "crossedOut",
)


def _color_functions() -> list[str]:
    names = ["tui.color.rgb", "tui.color.indexed", "tui.color.reset"]
    names.extend(f"tui.color.{name}" for name in _NAMED_COLORS)
    return names


def _style_functions() -> list[str]:
    names = ["tui.style.new", "tui.style.fg", "tui.style.bg"]
    names.extend(f"tui.style.{modifier}" for modifier in _STYLE_MODIFIERS)
    return names


def _layout_functions() -> list[str]:
    return [
        "tui.layout.rect",
        "tui.layout.split",
        "tui.layout.length",
        "tui.layout.percentage",
        "tui.layout.ratio",
        "tui.layout.fill",
        "tui.layout.min",
        "tui.layout.max",
    ]


def _widget_functions() -> list[str]:
    return [
        "tui.widget.block",
        "tui.widget.blockTitle",
        "tui.widget.blockBorders",
        "tui.widget.paragraph",
        "tui.widget.paragraphAlignment",
        "tui.widget.list",
        "tui.widget.listItem",
        "tui.widget.gauge",
        "tui.widget.gaugePercent",
        "tui.widget.table",
        "tui.widget.tableRow",
        "tui.widget.sparkline",
        "tui.widget.tabs",
        "tui.widget.render",
    ]


def _buffer_functions() -> list[str]:
    return [
        "tui.buffer.setString",
        "tui.buffer.setStyle",
        "tui.buffer.get",
        "tui.buffer.clear",
    ]


@dataclass
class CompiledModule:
    """A script module ready for execution, keyed by its source hash."""

    path: Path
    source_hash: int
    dependencies: list[Path] = field(default_factory=list)


class FusabiContext:
    """Evaluation context for a dashboard script and its host functions.

    The host function table is registered on construction; the script itself
    is recorded by :meth:`evaluate`, after which :meth:`render` may be called.
    """

    def __init__(self, entry_file: str | Path) -> None:
        self.entry_file = Path(entry_file)
        self._module_cache: dict[Path, CompiledModule] = {}
        self._registered: list[str] = []
        self._initialized = False

        for group in (
            _color_functions,
            _style_functions,
            _layout_functions,
            _widget_functions,
            _buffer_functions,
        ):
            self._registered.extend(group())

    def evaluate(self, source: str) -> None:
        """Record the entry script and its `#load` dependencies, making the context ready."""
        module = CompiledModule(
            path=self.entry_file,
            source_hash=hash_source(source),
            dependencies=parse_load_directives(source, self.entry_file),
        )
        self._module_cache[self.entry_file] = module
        self._initialized = True

    def render(self, buffer: Any, area: Any, state: DashboardState) -> None:
        """Render the dashboard for this frame.

        Raises :class:`InvalidStateError` if the script has not been evaluated.
        No script interpreter is attached, so the buffer is left as it is.
        """
        if not self._initialized:
            raise InvalidStateError("FusabiContext not initialized")

    def invalidate(self, paths: Iterable[str | Path]) -> None:
        """Drop cached modules for the given paths and require re-evaluation."""
        for path in paths:
            self._module_cache.pop(Path(path), None)
        self._initialized = False

    def is_initialized(self) -> bool:
        return self._initialized

    def registered_functions(self) -> list[str]:
        """Names of the registered host functions, in registration order."""
        return list(self._registered)


def parse_load_directives(source: str, base_path: str | Path) -> list[Path]:
    """Paths named by `#load "..."` lines, resolved against the script's directory.

    Paths that exist are canonicalised; others are kept as joined.
    """
    parent = Path(base_path).parent
    deps: list[Path] = []
    for line in source.split("\n"):
        trimmed = line.strip()
        if not trimmed or trimmed.startswith("//"):
            continue
        if not trimmed.startswith("#load"):
            continue
        path_str = extract_quoted_string(trimmed[len("#load"):])
        if path_str is None:
            continue
        dep_path = parent / path_str
        try:
            deps.append(dep_path.resolve(strict=True))
        except (OSError, RuntimeError):
            deps.append(dep_path)
    return deps


def extract_quoted_string(text: str) -> str | None:
    """The content of the first double-quoted string at the start of ``text``."""
    text = text.strip()
    if not text.startswith('"'):
        return None
    end = text.find('"', 1)
    if end == -1:
        return None
    return text[1:end]


def hash_source(source: str) -> int:
    """A stable 64-bit hash of source text, for cache invalidation."""
    digest = hashlib.blake2b(source.encode("utf-8"), digest_size=8).digest()
    return int.from_bytes(digest, "big")