#!/usr/bin/env python3
"""
Pagination block carried in every BrAPI response's metadata.
"""

from pydantic import Field, StrictInt

from breeders.schemas.base import BrAPIModel


class Pagination(BrAPIModel):
    """
    One page of a collection result.

    total_pages is computed by the server and never recomputed here.
    """

    current_page: StrictInt = Field(default=0, ge=0, description="Zero-based page index")
    page_size: StrictInt = Field(default=10, ge=1, description="Records per page")
    total_count: StrictInt = Field(default=0, ge=0, description="Records across all pages")
    total_pages: StrictInt = Field(default=0, ge=0, description="Number of pages")
