"""
Schemas for BrAPI responses using pydantic, and the pandera frame view
"""

from .base import BrAPIModel, validate_record, validate_records
from .pagination import Pagination
from .program import Program, ProgramAdditionalInfo
from .program_frame_schema import ProgramFrame, ProgramFrameSchema, programs_frame

# resource path segment => record schema
RESOURCE_SCHEMAS = {
    "programs": Program,
}

__all__ = [
    "BrAPIModel",
    "Pagination",
    "Program",
    "ProgramAdditionalInfo",
    "ProgramFrame",
    "ProgramFrameSchema",
    "RESOURCE_SCHEMAS",
    "programs_frame",
    "validate_record",
    "validate_records",
]
