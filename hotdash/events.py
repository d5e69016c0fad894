"""Input events and the actions that handling them produces."""

from __future__ import annotations

import enum
from dataclasses import dataclass, field
from pathlib import Path
from typing import ClassVar, Iterable, Union


class Key(enum.Enum):
    """Named keys that carry no payload."""

    ENTER = "enter"
    ESC = "esc"
    BACKSPACE = "backspace"
    TAB = "tab"
    UP = "up"
    DOWN = "down"
    LEFT = "left"
    RIGHT = "right"
    HOME = "home"
    END = "end"
    PAGE_UP = "page_up"
    PAGE_DOWN = "page_down"
    DELETE = "delete"
    INSERT = "insert"
    SPACE = "space"


@dataclass(frozen=True)
class CharKey:
    """A character key."""

    char: str


@dataclass(frozen=True)
class FunctionKey:
    """A function key, F1 to F12."""

    number: int


KeyCode = Union[Key, CharKey, FunctionKey]


@dataclass(frozen=True)
class KeyModifiers:
    """Modifier keys held during an event."""

    shift: bool = False
    ctrl: bool = False
    alt: bool = False
    meta: bool = False

    @classmethod
    def none(cls) -> KeyModifiers:
        return cls()

    @classmethod
    def ctrl_only(cls) -> KeyModifiers:
        return cls(ctrl=True)

    @classmethod
    def shift_only(cls) -> KeyModifiers:
        return cls(shift=True)

    @classmethod
    def alt_only(cls) -> KeyModifiers:
        return cls(alt=True)


@dataclass(frozen=True)
class KeyEvent:
    """A key press with its modifiers."""

    code: KeyCode
    modifiers: KeyModifiers = field(default_factory=KeyModifiers)


class MouseButton(enum.Enum):
    LEFT = "left"
    RIGHT = "right"
    MIDDLE = "middle"


class MouseAction(enum.Enum):
    """What the mouse did; DOWN and UP come with a button."""

    DOWN = "down"
    UP = "up"
    MOVED = "moved"
    SCROLL_UP = "scroll_up"
    SCROLL_DOWN = "scroll_down"


@dataclass(frozen=True)
class MouseEvent:
    """A mouse event at a cell position."""

    action: MouseAction
    x: int
    y: int
    button: MouseButton | None = None
    modifiers: KeyModifiers = field(default_factory=KeyModifiers)


@dataclass(frozen=True)
class ResizeEvent:
    """The terminal changed size."""

    width: int
    height: int


@dataclass(frozen=True)
class FileChangeEvent:
    """A watched file changed on disk."""

    path: Path


@dataclass(frozen=True)
class TickEvent:
    """A periodic tick for timed updates."""


@dataclass(frozen=True)
class CustomEvent:
    """An application-defined event with a string payload."""

    payload: str


Event = Union[KeyEvent, MouseEvent, ResizeEvent, FileChangeEvent, TickEvent, CustomEvent]


class ActionKind(enum.Enum):
    NONE = "none"
    RENDER = "render"
    RELOAD = "reload"
    QUIT = "quit"
    CUSTOM = "custom"
    BATCH = "batch"


@dataclass(frozen=True)
class Action:
    """The outcome of handling an event."""

    kind: ActionKind
    name: str | None = None
    actions: tuple[Action, ...] = ()

    NONE: ClassVar[Action]
    RENDER: ClassVar[Action]
    RELOAD: ClassVar[Action]
    QUIT: ClassVar[Action]

    @classmethod
    def custom(cls, name: str) -> Action:
        return cls(ActionKind.CUSTOM, name=name)

    @classmethod
    def batch(cls, actions: Iterable[Action]) -> Action:
        return cls(ActionKind.BATCH, actions=tuple(actions))

    def is_none(self) -> bool:
        return self.kind is ActionKind.NONE

    def requires_render(self) -> bool:
        if self.kind in (ActionKind.RENDER, ActionKind.RELOAD):
            return True
        if self.kind is ActionKind.BATCH:
            return any(action.requires_render() for action in self.actions)
        return False

    def is_quit(self) -> bool:
        return self.kind is ActionKind.QUIT


Action.NONE = Action(ActionKind.NONE)
Action.RENDER = Action(ActionKind.RENDER)
Action.RELOAD = Action(ActionKind.RELOAD)
Action.QUIT = Action(ActionKind.QUIT)