"""
Column model and table engine for the breeders list pages
"""

from .columns import ColumnDef, RenderComponent, RenderSnippet, check_columns
from .engine import CellContext, Column, ColumnSort, HeaderContext, RenderedTable, Row, Table, TableState

__all__ = [
    "CellContext",
    "Column",
    "ColumnDef",
    "ColumnSort",
    "HeaderContext",
    "RenderComponent",
    "RenderSnippet",
    "RenderedTable",
    "Row",
    "Table",
    "TableState",
    "check_columns",
]
