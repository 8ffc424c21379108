#!/usr/bin/env python3
"""
Columns of the breeding programs table.
"""

from html import escape
from typing import Optional

from breeders.schemas import Program
from breeders.table.columns import ColumnDef, RenderComponent, RenderSnippet, check_columns
from breeders.table.engine import CellContext, HeaderContext


def _text(value: Optional[str]) -> str:
    return "" if value is None else escape(value)


def sortable_header(name: str):
    """Header generator rendering a clickable sort toggle labelled `name`."""

    def header(ctx: HeaderContext) -> RenderComponent:
        return RenderComponent(
            "SortableHeader",
            {
                "name": name,
                "sorted": ctx.column.get_is_sorted(),
                "onclick": ctx.column.get_toggle_sorting_handler(),
            },
        )

    return header


def select_header(ctx: HeaderContext) -> RenderComponent:
    table = ctx.table
    all_selected = table.get_is_all_page_rows_selected()
    return RenderComponent(
        "Checkbox",
        {
            "checked": all_selected,
            "indeterminate": table.get_is_some_page_rows_selected() and not all_selected,
            "onCheckedChange": lambda value: table.toggle_all_page_rows_selected(bool(value)),
            "aria-label": "Select all",
        },
    )


def select_cell(ctx: CellContext) -> RenderComponent:
    row = ctx.row
    return RenderComponent(
        "Checkbox",
        {
            "checked": row.get_is_selected(),
            "onCheckedChange": lambda value: row.toggle_selected(bool(value)),
            "aria-label": "Select row",
        },
    )


def name_cell(ctx: CellContext) -> RenderSnippet:
    return RenderSnippet(f'<div class="font-medium">{_text(ctx.row.original.program_name)}</div>')


def objective_cell(ctx: CellContext) -> RenderSnippet:
    return RenderSnippet(f'<div class="text-left">{_text(ctx.row.original.objective)}</div>')


def actions_cell(ctx: CellContext) -> RenderComponent:
    return RenderComponent("Actions", {"name": ctx.row.original.program_name})


program_columns = check_columns(
    Program,
    [
        ColumnDef(
            id="select",
            header=select_header,
            cell=select_cell,
            enable_sorting=False,
            enable_hiding=False,
        ),
        ColumnDef(
            accessor_key="program_db_id",
            header=sortable_header("ID"),
            enable_sorting=True,
            enable_column_filter=True,
        ),
        ColumnDef(
            accessor_key="program_name",
            header=sortable_header("Name"),
            cell=name_cell,
            enable_column_filter=True,
        ),
        ColumnDef(
            accessor_key="objective",
            header=sortable_header("Objective"),
            cell=objective_cell,
            enable_column_filter=True,
            enable_sorting=True,
        ),
        ColumnDef(
            accessor_key="abbreviation",
            header=sortable_header("Abbreviation"),
            enable_column_filter=True,
            enable_sorting=True,
        ),
        ColumnDef(
            id="actions",
            cell=actions_cell,
            enable_column_filter=False,
        ),
    ],
)


def program_row_id(program: Program, _index: int) -> str:
    """Key table rows by programDbId so selection survives re-sorting."""
    return program.program_db_id
