#!/usr/bin/env python3
"""
BrAPI HTTP Client

This module is the only boundary between typed domain code and the network.
It builds request URLs, issues GET requests, unwraps the BrAPI response
envelope and validates every record before handing it back.

No caching, no retries and no default timeout: callers needing those wrap
the client themselves.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, Iterator, List, Mapping, Optional, Sequence, Tuple, Type, Union
from urllib.parse import quote, urlencode

import requests
from loguru import logger

from breeders.config_utils import get_brapi_timeout, get_brapi_url, get_user_agent
from breeders.errors import NotFound, SchemaViolation, TransportError
from breeders.schemas import RESOURCE_SCHEMAS, BrAPIModel, Pagination, Program, validate_record, validate_records

QueryParams = Union[Mapping[str, Any], Sequence[Tuple[str, Any]]]


@dataclass
class ResourcePage:
    """One validated page of a collection: server pagination plus records."""

    pagination: Pagination
    data: List[BrAPIModel] = field(default_factory=list)

    def __len__(self) -> int:
        return len(self.data)

    def __iter__(self) -> Iterator[BrAPIModel]:
        return iter(self.data)


class BrAPIClient:
    """
    BrAPI v2 client returning schema-validated records.

    The client holds no state between calls other than its HTTP session.
    """

    def __init__(
        self,
        base_url: Optional[str] = None,
        session: Optional[requests.Session] = None,
        timeout: Optional[float] = None,
        user_agent: Optional[str] = None,
    ):
        """
        Initialize BrAPI client.

        Args:
            base_url: API root such as https://host/brapi/v2 (BRAPI_URL env var if None)
            session: requests.Session-like object exposing get(); created if None
            timeout: Per-request timeout in seconds (BRAPI_TIMEOUT env var if None)
            user_agent: User-Agent header value (BRAPI_USER_AGENT env var if None)
        """
        self.base_url = (base_url or get_brapi_url()).rstrip("/")
        self.timeout = timeout if timeout is not None else get_brapi_timeout()
        self.session = session if session is not None else requests.Session()
        self.session.headers.update(
            {
                "User-Agent": user_agent or get_user_agent(),
                "Accept": "application/json",
            }
        )

    def build_url(
        self,
        resource_name: str,
        record_id: Optional[Any] = None,
        query_params: Optional[QueryParams] = None,
    ) -> str:
        """
        Build `{base}/{resource}[/{id}][?{query}]`.

        The query string is only appended when there is at least one parameter.
        Sequences of pairs keep repeated keys in order.
        """
        url = f"{self.base_url}/{resource_name}"
        if record_id is not None:
            url += f"/{quote(str(record_id), safe='')}"
        if query_params:
            pairs = list(query_params.items()) if isinstance(query_params, Mapping) else list(query_params)
            if pairs:
                url += f"?{urlencode(pairs)}"
        return url

    def _schema_for(self, resource_name: str) -> Type[BrAPIModel]:
        try:
            return RESOURCE_SCHEMAS[resource_name]
        except KeyError:
            raise ValueError(
                f"Unknown resource '{resource_name}', expected one of {sorted(RESOURCE_SCHEMAS)}"
            )

    def _make_request(self, url: str) -> Dict[str, Any]:
        """
        Make a GET request and decode the JSON envelope.

        Args:
            url: Fully built target URL

        Returns:
            Decoded JSON body

        Raises:
            TransportError: On network failure or non-2xx status
            SchemaViolation: If the body is not a JSON object
        """
        logger.debug(f"Making request to {url}")
        try:
            response = self.session.get(url, timeout=self.timeout)
        except requests.RequestException as e:
            logger.error(f"Request failed for {url}: {e}")
            raise TransportError(f"Request failed for {url}: {e}", url=url) from e

        if not 200 <= response.status_code < 300:
            logger.warning(f"HTTP error {response.status_code} for {url}")
            raise TransportError(
                f"HTTP {response.status_code} for {url}", url=url, status_code=response.status_code
            )

        try:
            body = response.json()
        except ValueError as e:
            raise SchemaViolation(f"Response from {url} is not valid JSON") from e

        if not isinstance(body, dict):
            raise SchemaViolation(f"Response from {url} is not a JSON object")
        return body

    def _parse_pagination(self, body: Dict[str, Any]) -> Pagination:
        metadata = body.get("metadata") or {}
        if not isinstance(metadata, dict):
            raise SchemaViolation("Envelope metadata is not an object")
        return validate_record(Pagination, metadata.get("pagination") or {})

    def _parse_result(self, body: Dict[str, Any]) -> Dict[str, Any]:
        result = body.get("result")
        if not isinstance(result, dict):
            raise SchemaViolation("Envelope is missing the result object")
        return result

    def list(self, resource_name: str, query_params: Optional[QueryParams] = None) -> ResourcePage:
        """
        Fetch one page of a collection.

        Args:
            resource_name: Resource path segment, e.g. "programs"
            query_params: Paging, filtering and sorting parameters

        Returns:
            ResourcePage with the envelope's pagination and validated records

        Raises:
            TransportError: On network failure or non-2xx status
            SchemaViolation: On a malformed envelope or the first invalid record
        """
        schema = self._schema_for(resource_name)
        url = self.build_url(resource_name, query_params=query_params)
        body = self._make_request(url)

        pagination = self._parse_pagination(body)
        data = self._parse_result(body).get("data")
        if not isinstance(data, list):
            raise SchemaViolation(f"Envelope from {url} is missing result.data")

        if len(data) > 0:
            records = validate_records(schema, data)
        else:
            records = []

        logger.debug(
            f"Fetched {len(records)} {resource_name} records "
            f"(page {pagination.current_page + 1}/{pagination.total_pages}, total {pagination.total_count})"
        )
        return ResourcePage(pagination=pagination, data=records)

    def get_by_id(
        self,
        resource_name: str,
        record_id: Any,
        query_params: Optional[QueryParams] = None,
    ) -> BrAPIModel:
        """
        Fetch a single record.

        Raises:
            NotFound: If the envelope's result object is empty
            TransportError: On network failure or non-2xx status
            SchemaViolation: On a malformed envelope or invalid record
        """
        schema = self._schema_for(resource_name)
        url = self.build_url(resource_name, record_id=record_id, query_params=query_params)
        body = self._make_request(url)

        result = self._parse_result(body)
        if len(result) == 0:
            logger.warning(f"Resource not found: {url}")
            raise NotFound(resource_name, record_id)
        return validate_record(schema, result)

    def iter_pages(
        self,
        resource_name: str,
        query_params: Optional[QueryParams] = None,
        page_size: Optional[int] = None,
    ) -> Iterator[ResourcePage]:
        """
        Walk a collection page by page using BrAPI `page`/`pageSize` parameters.

        Stops once the server-reported total_pages is reached or a page comes
        back empty. Any caller-supplied `page` parameter is replaced.
        """
        if query_params is None:
            base_pairs = []
        elif isinstance(query_params, Mapping):
            base_pairs = list(query_params.items())
        else:
            base_pairs = list(query_params)
        base_pairs = [(k, v) for k, v in base_pairs if k != "page"]
        if page_size is not None:
            base_pairs = [(k, v) for k, v in base_pairs if k != "pageSize"]
            base_pairs.append(("pageSize", str(page_size)))

        page = 0
        while True:
            result = self.list(resource_name, base_pairs + [("page", str(page))])
            yield result

            if len(result) == 0:
                break
            page += 1
            if page >= result.pagination.total_pages:
                break

    def programs(self, query_params: Optional[QueryParams] = None) -> ResourcePage:
        """`GET /programs`"""
        return self.list("programs", query_params)

    def program(self, program_db_id: str, query_params: Optional[QueryParams] = None) -> Program:
        """`GET /programs/{programDbId}`"""
        return self.get_by_id("programs", program_db_id, query_params)
