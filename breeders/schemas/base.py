#!/usr/bin/env python3
"""
Base model and validation helpers shared by all BrAPI resource schemas.
"""

from typing import Any, Iterable, List, Optional, Type, TypeVar

from pydantic import BaseModel, ConfigDict, ValidationError
from pydantic.alias_generators import to_camel

from breeders.errors import SchemaViolation

RecordT = TypeVar("RecordT", bound="BrAPIModel")


class BrAPIModel(BaseModel):
    """
    Base for BrAPI wire models.

    Wire names are camelCase, attributes are snake_case. Unknown keys sent by
    the server are dropped. Field types are declared strict on each model, so
    no value is coerced except by declared defaults.
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="ignore",
        frozen=True,
    )

    def to_wire(self) -> dict:
        """Dump the record back to its camelCase JSON shape."""
        return self.model_dump(by_alias=True)


def validate_record(schema: Type[RecordT], candidate: Any, index: Optional[int] = None) -> RecordT:
    """
    Validate a single JSON value against a schema.

    Args:
        schema: BrAPIModel subclass describing the record
        candidate: Decoded JSON value
        index: Position of the record in its collection, for error reporting

    Returns:
        Validated record instance

    Raises:
        SchemaViolation: If the value does not match the schema
    """
    try:
        return schema.model_validate(candidate)
    except ValidationError as e:
        where = f" at index {index}" if index is not None else ""
        raise SchemaViolation(
            f"{schema.__name__} record{where} failed validation: {e.error_count()} error(s)",
            errors=e.errors(include_url=False),
            index=index,
        ) from e


def validate_records(schema: Type[RecordT], candidates: Iterable[Any]) -> List[RecordT]:
    """
    Validate every element of a collection, failing on the first bad record.

    A list page has no way to show partial success, so one invalid record
    aborts the whole collection and nothing is returned.
    """
    return [validate_record(schema, candidate, index=i) for i, candidate in enumerate(candidates)]
