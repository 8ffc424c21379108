#!/usr/bin/env python3
"""
Generic table engine consumed by the column definitions.

All interaction state (row selection, sorting, column filters, column
visibility) lives in an explicit TableState handed to the Table, so header
and cell generators are plain functions of that state.
"""

from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Optional, Sequence, Union

from breeders.table.columns import ColumnDef

SortDirection = Union[str, bool]


@dataclass
class ColumnSort:
    id: str
    desc: bool = False


@dataclass
class TableState:
    """Interaction state of one table instance."""

    row_selection: Dict[str, bool] = field(default_factory=dict)
    sorting: List[ColumnSort] = field(default_factory=list)
    column_filters: Dict[str, str] = field(default_factory=dict)
    column_visibility: Dict[str, bool] = field(default_factory=dict)


@dataclass
class HeaderContext:
    """Argument passed to header generators."""

    column: "Column"
    table: "Table"


@dataclass
class CellContext:
    """Argument passed to cell generators."""

    row: "Row"
    column: "Column"
    table: "Table"

    def get_value(self) -> Any:
        return self.row.get_value(self.column.id)


@dataclass
class RenderedTable:
    """Output of a render pass: header renders and one list of cell renders per row."""

    headers: List[Any]
    rows: List[List[Any]]


class Column:
    """Engine view of a ColumnDef bound to a table."""

    def __init__(self, definition: ColumnDef, table: "Table"):
        self.definition = definition
        self.table = table

    @property
    def id(self) -> str:
        return self.definition.column_id

    @property
    def accessor_key(self) -> Optional[str]:
        return self.definition.accessor_key

    def get_can_sort(self) -> bool:
        if self.accessor_key is None:
            return False
        return self.definition.enable_sorting is not False

    def get_can_filter(self) -> bool:
        if self.accessor_key is None:
            return False
        return self.definition.enable_column_filter is not False

    def get_can_hide(self) -> bool:
        return self.definition.enable_hiding is not False

    def get_is_sorted(self) -> SortDirection:
        for sort in self.table.state.sorting:
            if sort.id == self.id:
                return "desc" if sort.desc else "asc"
        return False

    def toggle_sorting(self, multi: bool = False) -> None:
        """
        Cycle this column's sort: none -> asc -> desc -> none.

        A plain toggle makes this column the only sort key; with multi=True
        the other keys are kept and this column is appended as the last key.
        """
        if not self.get_can_sort():
            return
        current = self.get_is_sorted()
        if multi:
            others = [s for s in self.table.state.sorting if s.id != self.id]
        else:
            others = []
        if current is False:
            self.table.state.sorting = others + [ColumnSort(self.id, desc=False)]
        elif current == "asc":
            self.table.state.sorting = others + [ColumnSort(self.id, desc=True)]
        else:
            self.table.state.sorting = others

    def get_toggle_sorting_handler(self) -> Callable[..., None]:
        """Click handler for sortable headers; an event with a truthy shift_key multi-sorts."""

        def handler(event: Any = None) -> None:
            self.toggle_sorting(multi=bool(getattr(event, "shift_key", False)))

        return handler

    def get_filter_value(self) -> Optional[str]:
        return self.table.state.column_filters.get(self.id)

    def set_filter_value(self, value: Optional[str]) -> None:
        if not self.get_can_filter():
            return
        if value is None or value == "":
            self.table.state.column_filters.pop(self.id, None)
        else:
            self.table.state.column_filters[self.id] = value

    def get_is_visible(self) -> bool:
        return self.table.state.column_visibility.get(self.id, True)

    def toggle_visibility(self, value: Optional[bool] = None) -> None:
        if not self.get_can_hide():
            return
        new_value = (not self.get_is_visible()) if value is None else bool(value)
        self.table.state.column_visibility[self.id] = new_value

    def render_header(self) -> Any:
        header = self.definition.header
        if callable(header):
            return header(HeaderContext(column=self, table=self.table))
        return header

    def render_cell(self, row: "Row") -> Any:
        cell = self.definition.cell
        if cell is not None:
            return cell(CellContext(row=row, column=self, table=self.table))
        value = row.get_value(self.id)
        return None if value is None else str(value)

    def __repr__(self) -> str:
        return f"<Column {self.id}>"


class Row:
    """One record of the table, with its selection state."""

    def __init__(self, row_id: str, index: int, original: Any, table: "Table"):
        self.id = row_id
        self.index = index
        self.original = original
        self.table = table

    def get_value(self, column_id: str) -> Any:
        column = self.table.get_column(column_id)
        if column.accessor_key is None:
            return None
        return getattr(self.original, column.accessor_key)

    def get_is_selected(self) -> bool:
        return self.table.state.row_selection.get(self.id, False)

    def toggle_selected(self, value: Optional[bool] = None) -> None:
        new_value = (not self.get_is_selected()) if value is None else bool(value)
        if new_value:
            self.table.state.row_selection[self.id] = True
        else:
            self.table.state.row_selection.pop(self.id, None)

    def __repr__(self) -> str:
        return f"<Row {self.id}>"


def _sort_key(value: Any):
    # nulls last in both directions is handled by the caller; strings compare case-insensitively
    if isinstance(value, str):
        return value.lower()
    return value


class Table:
    """
    Table over a list of validated records.

    Args:
        data: Validated records, one per row
        columns: Column definitions
        state: Interaction state; a fresh TableState if None
        get_row_id: Maps (record, index) to a stable row id; defaults to the index
    """

    def __init__(
        self,
        data: Sequence[Any],
        columns: Sequence[ColumnDef],
        state: Optional[TableState] = None,
        get_row_id: Optional[Callable[[Any, int], str]] = None,
    ):
        self.data = list(data)
        self.state = state if state is not None else TableState()
        self.columns = [Column(definition, self) for definition in columns]
        self._columns_by_id = {column.id: column for column in self.columns}
        get_row_id = get_row_id or (lambda _record, index: str(index))
        self.rows = [Row(get_row_id(record, i), i, record, self) for i, record in enumerate(self.data)]

    def get_column(self, column_id: str) -> Column:
        return self._columns_by_id[column_id]

    def get_visible_columns(self) -> List[Column]:
        return [column for column in self.columns if column.get_is_visible()]

    def _matches_filters(self, row: Row) -> bool:
        for column_id, needle in self.state.column_filters.items():
            column = self._columns_by_id.get(column_id)
            if column is None or not column.get_can_filter():
                continue
            value = row.get_value(column_id)
            if value is None or needle.lower() not in str(value).lower():
                return False
        return True

    def get_row_model(self) -> List[Row]:
        """Rows after column filters and sorting, in display order."""
        rows = [row for row in self.rows if self._matches_filters(row)]
        # apply keys from least to most significant, relying on sort stability
        for sort in reversed(self.state.sorting):
            column = self._columns_by_id.get(sort.id)
            if column is None or not column.get_can_sort():
                continue
            present = [row for row in rows if row.get_value(sort.id) is not None]
            missing = [row for row in rows if row.get_value(sort.id) is None]
            present.sort(key=lambda row: _sort_key(row.get_value(sort.id)), reverse=sort.desc)
            rows = present + missing
        return rows

    def get_page_rows(self) -> List[Row]:
        return self.get_row_model()

    def get_selected_rows(self) -> List[Row]:
        return [row for row in self.get_row_model() if row.get_is_selected()]

    def get_is_all_page_rows_selected(self) -> bool:
        rows = self.get_page_rows()
        return len(rows) > 0 and all(row.get_is_selected() for row in rows)

    def get_is_some_page_rows_selected(self) -> bool:
        return any(row.get_is_selected() for row in self.get_page_rows())

    def toggle_all_page_rows_selected(self, value: Optional[bool] = None) -> None:
        if value is None:
            value = not self.get_is_all_page_rows_selected()
        for row in self.get_page_rows():
            row.toggle_selected(value)

    def render(self) -> RenderedTable:
        columns = self.get_visible_columns()
        headers = [column.render_header() for column in columns]
        rows = [[column.render_cell(row) for column in columns] for row in self.get_row_model()]
        return RenderedTable(headers=headers, rows=rows)
