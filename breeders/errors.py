#!/usr/bin/env python3
"""
Error taxonomy for the BrAPI data-access layer.

Every failure raised by the client is a BrAPIError:
- TransportError: network failure or non-success HTTP status
- SchemaViolation: response body does not match the declared schema
- NotFound: single-record lookup returned an empty result
"""

from typing import Any, List, Optional


class BrAPIError(Exception):
    """Base class for all BrAPI client errors."""


class TransportError(BrAPIError):
    """Raised when the request fails or the server answers with a non-2xx status."""

    def __init__(self, message: str, url: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.url = url
        self.status_code = status_code


class SchemaViolation(BrAPIError):
    """
    Raised when a server response does not match its declared shape.

    Attributes:
        errors: pydantic-style error dicts (may be empty for envelope errors)
        index: position of the offending record in a collection, if any
    """

    def __init__(self, message: str, errors: Optional[List[Any]] = None, index: Optional[int] = None):
        super().__init__(message)
        self.errors = errors or []
        self.index = index


class NotFound(BrAPIError):
    """Raised when a single-record lookup returns an empty result object."""

    status_code = 404

    def __init__(self, resource_name: str, record_id: Any):
        super().__init__(f"Not found: {resource_name}/{record_id}")
        self.resource_name = resource_name
        self.record_id = record_id
