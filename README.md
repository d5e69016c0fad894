# hotdash

The engine side of a hot-reloadable terminal dashboard. It loads a dashboard
file, watches it for changes, keeps widget state, turns input events into
actions, and keeps an error overlay to show when a load or reload fails
instead of crashing.

## Installing

```
pip install hotdash
```

## Modules

- `hotdash.dashboard`
  - `DashboardEngine(renderer, root_path)` loads an entry file (`load`),
    reloads it (`reload`), turns hot reload on and off
    (`enable_hot_reload(debounce_ms=100)`, `disable_hot_reload`,
    `is_hot_reload_enabled`), reports changed files (`poll_changes`, which
    returns `None` while hot reload is off), handles events
    (`handle_event`), holds an error overlay (`show_error`,
    `dismiss_error`, `has_error`) and clears the renderer and state
    (`clear`). Its attributes `state`, `entry_file`, `error_overlay`,
    `loader`, `renderer` and `root_path` are public. It is also a context
    manager that stops the watcher on exit.
  - `Renderer` is the abstract interface a drawing backend implements:
    `draw`, `flush`, `size`, `clear`, `show_cursor` and `set_cursor`.
- `hotdash.loader`
  - `FileLoader` reads files as UTF-8, caches them by resolved path and
    reads them again only when their modification time moves forward.
    `invalidate` drops a file and everything that depends on it;
    `get_dependents`, `is_cached`, `get`, `clear` and `len()` inspect the
    cache. An optional `dependency_parser(path, content)` callable supplies
    each file's dependencies; without one, files have none.
  - `LoadedFile` holds `path`, `content`, `modified` (nanoseconds) and
    `dependencies`.
- `hotdash.watcher`
  - `FileWatcher(debounce_ms=100)` watches files, and directories
    recursively, using watchdog. `poll()` returns the changed files, sorted,
    once `debounce_ms` has passed since the last report. Also `watch`,
    `unwatch`, `watched_paths`, `watch_count`, `clear` and `close`; it is a
    context manager.
- `hotdash.events` defines `KeyEvent` (with `Key`, `CharKey`,
  `FunctionKey` and `KeyModifiers`), `MouseEvent` (with `MouseAction` and
  `MouseButton`), `ResizeEvent`, `FileChangeEvent`, `TickEvent` and
  `CustomEvent`, and the `Action` returned by event handling
  (`Action.NONE`, `RENDER`, `RELOAD`, `QUIT`, `Action.custom(name)`,
  `Action.batch(actions)`, with `is_none`, `requires_render`, `is_quit`).
- `hotdash.state` has `DashboardState` (widgets, focus and a `dirty` flag),
  `ListState` and `TableState`.
- `hotdash.overlay` has `ErrorSeverity`, `ErrorMessage` (built from an
  engine error with `ErrorMessage.from_engine_error`, with `panel_title()`
  and `panel_text()` giving the text to display), `ErrorOverlay` (manual or
  timed dismissal) and `centered_rect`.
- `hotdash.runtime` has `parse_load_directives`, `extract_quoted_string`,
  `hash_source`, `CompiledModule` and `FusabiContext`.
- `hotdash.errors` holds the exception classes, all under `EngineError`.

## Example

```python
from pathlib import Path

from hotdash.dashboard import DashboardEngine
from hotdash.events import CharKey, KeyEvent, KeyModifiers

with DashboardEngine(my_renderer, Path(".")) as engine:
    engine.enable_hot_reload(200)
    engine.load(Path("dashboard.fsx"))

    changes = engine.poll_changes()
    if changes:
        engine.reload()

    action = engine.handle_event(KeyEvent(CharKey("c"), KeyModifiers.ctrl_only()))
    if action.is_quit():
        ...
```

`my_renderer` is any object implementing `Renderer`.

In `handle_event`, Ctrl+C returns `Action.QUIT`, Ctrl+R reloads the entry
file and returns `Action.RENDER`, and Ctrl+D dismisses a visible error
overlay and returns `Action.RENDER`. A `ResizeEvent` marks the state dirty
and returns `Action.RENDER`; a `FileChangeEvent` invalidates that file,
reloads the entry file and returns `Action.RENDER`. Anything else returns
`Action.NONE`.

## Errors

Failed loads raise subclasses of `hotdash.errors.LoadError`, for example
`FileMissingError` or `ReadFailedError`. Watching problems raise
`WatchError` subclasses. `reload` with no file loaded raises
`InvalidStateError`. Pass a caught error to `DashboardEngine.show_error`
to hold it in the overlay.

## What it does not do

- It does not draw. There are no buffer, layout or widget types, and the
  engine has no render method; the renderer is only called on by `clear`.
  Drawing frames, and drawing the error overlay from `panel_title()` and
  `panel_text()`, is left to the application.
- It has no terminal backend and reads no keyboard or mouse input; the
  application creates the events and passes them to `handle_event`.
- It does not run dashboard scripts. `FusabiContext.evaluate` records the
  script's hash and `#load` dependencies, and `FusabiContext.render` only
  checks that `evaluate` has been called; it leaves the buffer as it is.

## Tests

```
pip install "hotdash[test]"
pytest
```