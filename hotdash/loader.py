"""File loading with modification-time caching and reverse dependency tracking."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable, Iterable

from hotdash.errors import FileMissingError, ReadFailedError

DependencyParser = Callable[[Path, str], Iterable["str | Path"]]


@dataclass
class LoadedFile:
    """A file read from disk, with its canonical path and dependencies.

    ``modified`` is the file's modification time in nanoseconds.
    """

    path: Path
    content: str
    modified: int
    dependencies: list[Path] = field(default_factory=list)


def _no_dependencies(path: Path, content: str) -> Iterable[Path]:
    return ()


def _canonical(path: str | Path) -> Path | None:
    try:
        return Path(path).resolve(strict=True)
    except (OSError, RuntimeError):
        return None


class FileLoader:
    """Loads files, caches them by canonical path and tracks who depends on whom.

    A ``dependency_parser`` may be given to extract the files a loaded file
    depends on; by default files have no dependencies.
    """

    def __init__(self, dependency_parser: DependencyParser | None = None) -> None:
        self._parse_dependencies = dependency_parser or _no_dependencies
        self._cache: dict[Path, LoadedFile] = {}
        self._dependents: dict[Path, dict[Path, None]] = {}

    def load(self, path: str | Path) -> LoadedFile:
        """Return the file at ``path``, reading it again only if it changed on disk."""
        canonical = _canonical(path)
        if canonical is None:
            raise FileMissingError(path)

        cached = self._cache.get(canonical)
        if cached is not None:
            try:
                current = canonical.stat().st_mtime_ns
            except OSError:
                current = None
            if current is not None and current <= cached.modified:
                return cached

        try:
            content = canonical.read_bytes().decode("utf-8")
            modified = canonical.stat().st_mtime_ns
        except (OSError, UnicodeDecodeError) as exc:
            raise ReadFailedError(canonical, exc) from exc

        dependencies = [Path(dep) for dep in self._parse_dependencies(canonical, content)]
        for dep in dependencies:
            self._dependents.setdefault(dep, {})[canonical] = None

        loaded = LoadedFile(
            path=canonical,
            content=content,
            modified=modified,
            dependencies=dependencies,
        )
        self._cache[canonical] = loaded
        return loaded

    def invalidate(self, path: str | Path) -> list[Path]:
        """Drop a file and everything depending on it from the cache.

        Returns the invalidated paths, the file itself first. A path that
        cannot be resolved invalidates nothing.
        """
        canonical = _canonical(path)
        if canonical is None:
            return []

        self._cache.pop(canonical, None)
        invalidated = [canonical]
        for dependent in self.get_dependents(canonical):
            if dependent not in invalidated:
                invalidated.append(dependent)
                self._cache.pop(dependent, None)
        return invalidated

    def get_dependents(self, path: str | Path) -> list[Path]:
        """All files that depend on ``path``, directly or transitively."""
        canonical = _canonical(path)
        if canonical is None:
            return []
        visited: set[Path] = set()
        result: list[Path] = []
        self._collect_dependents(canonical, visited, result)
        return result

    def _collect_dependents(self, path: Path, visited: set[Path], result: list[Path]) -> None:
        if path in visited:
            return
        visited.add(path)
        for dependent in self._dependents.get(path, {}):
            result.append(dependent)
            self._collect_dependents(dependent, visited, result)

    def is_cached(self, path: str | Path) -> bool:
        canonical = _canonical(path)
        return canonical is not None and canonical in self._cache

    def get(self, path: str | Path) -> LoadedFile | None:
        """The cached file for ``path`` without touching the disk, if any."""
        canonical = _canonical(path)
        if canonical is None:
            return None
        return self._cache.get(canonical)

    def clear(self) -> None:
        """Forget every cached file and every dependency."""
        self._cache.clear()
        self._dependents.clear()

    def __len__(self) -> int:
        return len(self._cache)