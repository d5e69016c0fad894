"""Dashboard and widget state."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any


@dataclass
class ListState:
    """Selection and scroll position of a list widget."""

    selected: int | None = None
    offset: int = 0

    @classmethod
    def with_selected(cls, index: int) -> ListState:
        return cls(selected=index)

    def select(self, index: int | None) -> None:
        self.selected = index

    def select_next(self, total_items: int) -> None:
        """Move the selection down, stopping at the last item."""
        if total_items == 0:
            self.selected = None
        elif self.selected is None:
            self.selected = 0
        else:
            self.selected = min(self.selected + 1, total_items - 1)

    def select_previous(self) -> None:
        """Move the selection up, stopping at the first item."""
        self.selected = 0 if self.selected is None else max(self.selected - 1, 0)


@dataclass
class TableState:
    """Selected cell and scroll offsets of a table widget."""

    selected_row: int | None = None
    selected_column: int | None = None
    row_offset: int = 0
    column_offset: int = 0

    @classmethod
    def with_selected(cls, row: int, column: int) -> TableState:
        return cls(selected_row=row, selected_column=column)

    def select(self, row: int | None, column: int | None) -> None:
        self.selected_row = row
        self.selected_column = column

    def select_next_row(self, total_rows: int) -> None:
        self.selected_row = _step_forward(self.selected_row, total_rows)

    def select_previous_row(self) -> None:
        self.selected_row = _step_back(self.selected_row)

    def select_next_column(self, total_columns: int) -> None:
        self.selected_column = _step_forward(self.selected_column, total_columns)

    def select_previous_column(self) -> None:
        self.selected_column = _step_back(self.selected_column)


def _step_forward(current: int | None, total: int) -> int | None:
    if total == 0:
        return None
    if current is None:
        return 0
    return min(current + 1, total - 1)


def _step_back(current: int | None) -> int:
    return 0 if current is None else max(current - 1, 0)


@dataclass
class DashboardState:
    """Widget states, focus and the re-render flag of a dashboard."""

    widgets: dict[str, Any] = field(default_factory=dict)
    focus: str | None = None
    dirty: bool = False

    def mark_dirty(self) -> None:
        self.dirty = True

    def clear_dirty(self) -> None:
        self.dirty = False

    def set_focus(self, widget_id: str) -> None:
        self.focus = widget_id
        self.mark_dirty()

    def clear_focus(self) -> None:
        self.focus = None
        self.mark_dirty()

    def is_focused(self, widget_id: str) -> bool:
        return self.focus == widget_id

    def insert_widget(self, widget_id: str, state: Any) -> None:
        """Add or replace a widget's state."""
        self.widgets[widget_id] = state
        self.mark_dirty()

    def get_widget(self, widget_id: str) -> Any | None:
        return self.widgets.get(widget_id)

    def remove_widget(self, widget_id: str) -> Any | None:
        """Remove a widget's state and return it, or None if it was absent."""
        removed = self.widgets.pop(widget_id, None)
        if removed is not None:
            self.mark_dirty()
        return removed

    def clear(self) -> None:
        self.widgets.clear()
        self.focus = None
        self.mark_dirty()