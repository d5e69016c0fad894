from pathlib import Path

import pytest

from hotdash.errors import InvalidStateError
from hotdash.runtime import (
    CompiledModule,
    FusabiContext,
    extract_quoted_string,
    hash_source,
    parse_load_directives,
)
from hotdash.state import DashboardState


def test_parse_load_directives():
    source = """
// Dashboard file
#load "../tui.fsx"
#load "widgets/block.fsx"

let x = 42
"""
    deps = parse_load_directives(source, Path("/app/fsx/dashboard.fsx"))
    assert len(deps) == 2
    assert deps[0].name == "tui.fsx"
    assert deps[1].name == "block.fsx"
    assert deps[1] == Path("/app/fsx/widgets/block.fsx")


def test_parse_load_directives_skips_comments_and_unquoted():
    source = '// #load "hidden.fsx"\n#load unquoted.fsx\n#load "real.fsx"\n'
    deps = parse_load_directives(source, "dir/main.fsx")
    assert deps == [Path("dir/real.fsx")]


def test_parse_load_directives_canonicalises_existing(tmp_path):
    (tmp_path / "lib.fsx").write_text("let y = 1\n")
    sub = tmp_path / "sub"
    sub.mkdir()
    deps = parse_load_directives('#load "../lib.fsx"', sub / "main.fsx")
    assert deps == [(tmp_path / "lib.fsx").resolve()]


def test_parse_load_directives_empty_source():
    assert parse_load_directives("", "main.fsx") == []


def test_extract_quoted_string():
    assert extract_quoted_string('"hello"') == "hello"
    assert extract_quoted_string('  "path/to/file"  ') == "path/to/file"
    assert extract_quoted_string("unquoted") is None
    assert extract_quoted_string('"unclosed') is None


def test_extract_quoted_string_stops_at_first_close():
    assert extract_quoted_string('"a" "b"') == "a"


def test_hash_source():
    hash1 = hash_source("let x = 42")
    hash2 = hash_source("let x = 42")
    hash3 = hash_source("let x = 43")
    assert hash1 == hash2
    assert hash1 != hash3


def test_hash_source_fits_in_64_bits():
    assert 0 <= hash_source("anything at all") < 2**64


def test_fusabi_context_new():
    ctx = FusabiContext(Path("test.fsx"))
    assert not ctx.is_initialized()
    assert len(ctx.registered_functions()) > 0


def test_fusabi_context_registered_functions():
    funcs = FusabiContext(Path("test.fsx")).registered_functions()
    assert "tui.color.rgb" in funcs
    assert "tui.style.new" in funcs
    assert "tui.layout.rect" in funcs
    assert "tui.widget.block" in funcs
    assert "tui.buffer.setString" in funcs


def test_registered_functions_are_unique_and_complete():
    funcs = FusabiContext("test.fsx").registered_functions()
    assert len(funcs) == len(set(funcs))
    assert len(funcs) == 56
    assert funcs[0] == "tui.color.rgb"
    assert funcs[-1] == "tui.buffer.clear"


def test_registered_functions_returns_copy():
    ctx = FusabiContext("test.fsx")
    ctx.registered_functions().clear()
    assert "tui.color.rgb" in ctx.registered_functions()


def test_evaluate_initializes():
    ctx = FusabiContext("test.fsx")
    ctx.evaluate("let x = 42")
    assert ctx.is_initialized()


def test_render_before_evaluate_raises():
    ctx = FusabiContext("test.fsx")
    with pytest.raises(InvalidStateError) as info:
        ctx.render(None, None, DashboardState())
    assert str(info.value) == "Invalid state: FusabiContext not initialized"


def test_invalidate_requires_reevaluation():
    ctx = FusabiContext("test.fsx")
    ctx.evaluate("let x = 42")
    ctx.invalidate([Path("test.fsx")])
    assert not ctx.is_initialized()
    with pytest.raises(InvalidStateError):
        ctx.render(None, None, DashboardState())


def test_compiled_module_fields():
    module = CompiledModule(path=Path("a.fsx"), source_hash=hash_source("x"))
    assert module.dependencies == []
    assert module.path == Path("a.fsx")
    assert module.source_hash == hash_source("x")