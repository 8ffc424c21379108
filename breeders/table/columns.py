#!/usr/bin/env python3
"""
Declarative column definitions and render descriptions.

A column reads one field of a validated record (accessor_key) or is purely
presentational (id only, with its own cell generator). Header and cell
generators return render descriptions rather than markup bound to a UI.
"""

from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Optional, Sequence, Type, Union

from pydantic import BaseModel

# Generators receive engine contexts (see breeders.table.engine)
HeaderDef = Union[str, Callable[[Any], Any], None]
CellDef = Optional[Callable[[Any], Any]]


@dataclass(frozen=True)
class RenderComponent:
    """Render a named UI component with the given props."""

    component: str
    props: Dict[str, Any] = field(default_factory=dict)


@dataclass(frozen=True)
class RenderSnippet:
    """Render a raw HTML snippet."""

    html: str


@dataclass(frozen=True)
class ColumnDef:
    """
    One column of a table.

    Flags left as None fall back to the table engine's defaults.
    """

    id: Optional[str] = None
    accessor_key: Optional[str] = None
    header: HeaderDef = None
    cell: CellDef = None
    enable_sorting: Optional[bool] = None
    enable_column_filter: Optional[bool] = None
    enable_hiding: Optional[bool] = None

    def __post_init__(self):
        if self.id is None and self.accessor_key is None:
            raise ValueError("Column needs an id or an accessor_key")
        if self.accessor_key is None and self.cell is None:
            raise ValueError(f"Column '{self.id}' has no accessor_key and must define cell")

    @property
    def column_id(self) -> str:
        return self.id if self.id is not None else self.accessor_key


def check_columns(record_type: Type[BaseModel], columns: Sequence[ColumnDef]) -> Sequence[ColumnDef]:
    """
    Check a column set against the record model it will render.

    Raises:
        ValueError: If an accessor_key is not a field of record_type or a column id repeats
    """
    fields = set(record_type.model_fields)
    seen = set()
    for column in columns:
        if column.accessor_key is not None and column.accessor_key not in fields:
            raise ValueError(
                f"Column '{column.column_id}' reads unknown {record_type.__name__} field '{column.accessor_key}'"
            )
        if column.column_id in seen:
            raise ValueError(f"Duplicate column id '{column.column_id}'")
        seen.add(column.column_id)
    return columns
