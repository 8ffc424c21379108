#!/usr/bin/env python3
"""
Schema for BrAPI v2 `programs` records.
"""

from typing import Optional

from pydantic import Field, StrictStr

from breeders.schemas.base import BrAPIModel


class ProgramAdditionalInfo(BrAPIModel):
    """Free-form extras attached to a program; only description is used."""

    description: Optional[StrictStr] = None


class Program(BrAPIModel):
    """A breeding program as returned by `GET /programs`."""

    program_db_id: StrictStr = Field(description="Unique program identifier")
    program_name: StrictStr = Field(description="Human readable program name")
    abbreviation: Optional[StrictStr] = Field(default=None, description="Short program name")
    # key must be present, value may be null
    objective: Optional[StrictStr] = Field(description="Program objective")
    additional_info: Optional[ProgramAdditionalInfo] = None

    @property
    def description(self) -> Optional[str]:
        """Description from additionalInfo, or None when absent."""
        if self.additional_info is None:
            return None
        return self.additional_info.description
