import os
from pathlib import Path

import pytest

from hotdash.errors import FileMissingError, LoadError, ReadFailedError
from hotdash.loader import FileLoader, LoadedFile


@pytest.fixture
def script(tmp_path):
    path = tmp_path / "dashboard.fsx"
    path.write_text("let x = 42\n")
    return path


def _dep_parser(path, content):
    """Each line 'dep: NAME' names a sibling file."""
    return [
        path.parent / line.split(":", 1)[1].strip()
        for line in content.splitlines()
        if line.startswith("dep:")
    ]


def test_file_loader_new():
    loader = FileLoader()
    assert len(loader) == 0
    assert not loader


def test_load_file(script):
    loader = FileLoader()
    loaded = loader.load(script)
    assert loaded.content.strip() == "let x = 42"
    assert len(loader) == 1


def test_loaded_path_is_canonical(script):
    loader = FileLoader()
    loaded = loader.load(script.parent / "." / script.name)
    assert loaded.path == script.resolve()
    assert loaded.dependencies == []


def test_load_nonexistent_file():
    loader = FileLoader()
    with pytest.raises(FileMissingError) as info:
        loader.load("/nonexistent/file.fsx")
    assert info.value.path == Path("/nonexistent/file.fsx")
    assert isinstance(info.value, LoadError)


def test_load_invalid_utf8_is_read_failure(tmp_path):
    path = tmp_path / "bad.fsx"
    path.write_bytes(b"\xff\xfe\xfa")
    with pytest.raises(ReadFailedError) as info:
        FileLoader().load(path)
    assert info.value.path == path.resolve()


def test_cache_hit(script):
    loader = FileLoader()
    first = loader.load(script)
    second = loader.load(script)
    assert first is second


def test_reload_when_modified(script):
    loader = FileLoader()
    first = loader.load(script)
    script.write_text("let x = 43\n")
    later = first.modified + 5_000_000_000
    os.utime(script, ns=(later, later))
    second = loader.load(script)
    assert second is not first
    assert second.content == "let x = 43\n"
    assert second.modified == later


def test_invalidate(script):
    loader = FileLoader()
    loader.load(script)
    assert loader.is_cached(script)
    invalidated = loader.invalidate(script)
    assert invalidated == [script.resolve()]
    assert not loader.is_cached(script)


def test_invalidate_missing_path_returns_empty():
    assert FileLoader().invalidate("/nonexistent/file.fsx") == []


def test_get_cached(script):
    loader = FileLoader()
    assert loader.get(script) is None
    loaded = loader.load(script)
    assert loader.get(script) is loaded


def test_clear(script):
    loader = FileLoader()
    loader.load(script)
    assert len(loader) == 1
    loader.clear()
    assert len(loader) == 0
    assert not loader


def test_dependencies_and_dependents(tmp_path):
    base = tmp_path / "base.fsx"
    base.write_text("let base = 1\n")
    mid = tmp_path / "mid.fsx"
    mid.write_text("dep: base.fsx\n")
    top = tmp_path / "top.fsx"
    top.write_text("dep: mid.fsx\n")

    loader = FileLoader(_dep_parser)
    for path in (base, mid, top):
        loader.load(path)

    assert loader.get(top).dependencies == [tmp_path.resolve() / "mid.fsx"]
    assert loader.get_dependents(base) == [mid.resolve(), top.resolve()]
    assert loader.get_dependents(top) == []


def test_invalidate_cascades_to_dependents(tmp_path):
    base = tmp_path / "base.fsx"
    base.write_text("let base = 1\n")
    mid = tmp_path / "mid.fsx"
    mid.write_text("dep: base.fsx\n")
    top = tmp_path / "top.fsx"
    top.write_text("dep: mid.fsx\n")

    loader = FileLoader(_dep_parser)
    for path in (base, mid, top):
        loader.load(path)

    invalidated = loader.invalidate(base)
    assert invalidated == [base.resolve(), mid.resolve(), top.resolve()]
    assert len(loader) == 0


def test_loaded_file_fields():
    loaded = LoadedFile(path=Path("a.fsx"), content="x", modified=7)
    assert loaded.dependencies == []
    assert loaded.modified == 7