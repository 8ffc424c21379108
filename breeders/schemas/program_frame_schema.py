#!/usr/bin/env python3
"""
Pandera schema for the tabular view of validated programs.
"""

from typing import Iterable

import pandas as pd
import pandera.pandas as pa
from pandera.typing import DataFrame, Series

from breeders.schemas.program import Program

PROGRAM_FRAME_COLUMNS = [
    "program_db_id",
    "program_name",
    "abbreviation",
    "objective",
    "description",
]


class ProgramFrameSchema(pa.DataFrameModel):
    """
    Schema for a DataFrame of programs, one row per validated record.

    additionalInfo is flattened to its description column.
    """

    program_db_id: Series[str] = pa.Field(description="Unique program identifier")
    program_name: Series[str] = pa.Field(description="Program name")
    abbreviation: Series[str] = pa.Field(nullable=True, description="Short program name")
    objective: Series[str] = pa.Field(nullable=True, description="Program objective")
    description: Series[str] = pa.Field(
        nullable=True, description="additionalInfo.description"
    )

    class Config:
        strict = True
        coerce = False


# Type alias for convenience
ProgramFrame = DataFrame[ProgramFrameSchema]


def programs_frame(programs: Iterable[Program]) -> ProgramFrame:
    """
    Build and validate the DataFrame view of a list of programs.

    Args:
        programs: Validated Program records

    Returns:
        Validated DataFrame with PROGRAM_FRAME_COLUMNS

    Raises:
        pandera.errors.SchemaError: If validation fails
    """
    rows = [
        {
            "program_db_id": p.program_db_id,
            "program_name": p.program_name,
            "abbreviation": p.abbreviation,
            "objective": p.objective,
            "description": p.description,
        }
        for p in programs
    ]
    df = pd.DataFrame(rows, columns=PROGRAM_FRAME_COLUMNS, dtype=object)
    return ProgramFrameSchema.validate(df)
