#!/usr/bin/env python3
"""
Page-load adapter for the breeders routes.

Turns the current URL into a client call and hands the pending computation
to the view layer without waiting for it, so the page shell can render while
data is in flight. Errors are never intercepted here: a failed fetch shows up
as a rejected PendingResult.
"""

from concurrent.futures import Executor, Future, ThreadPoolExecutor
from typing import Any, Callable, Dict, List, Optional, Tuple
from urllib.parse import parse_qsl, urlsplit

from loguru import logger

from breeders.brapi_client import BrAPIClient

PENDING = "pending"
RESOLVED = "resolved"
REJECTED = "rejected"


class PendingResult:
    """
    Handle to a fetch that may not have finished yet.

    state is one of "pending", "resolved" or "rejected".
    """

    def __init__(self, future: Future):
        self._future = future

    @property
    def state(self) -> str:
        if not self._future.done():
            return PENDING
        if self._future.cancelled() or self._future.exception() is not None:
            return REJECTED
        return RESOLVED

    def result(self, timeout: Optional[float] = None) -> Any:
        """Block until resolved and return the value, re-raising the original error."""
        return self._future.result(timeout=timeout)

    def exception(self, timeout: Optional[float] = None) -> Optional[BaseException]:
        return self._future.exception(timeout=timeout)

    def add_done_callback(self, fn: Callable[["PendingResult"], None]) -> None:
        self._future.add_done_callback(lambda _f: fn(self))

    def __repr__(self) -> str:
        return f"<PendingResult {self.state}>"


def query_params_from_url(url: str) -> List[Tuple[str, str]]:
    """Query parameters of a URL as ordered pairs, repeated keys kept."""
    return parse_qsl(urlsplit(url).query, keep_blank_values=True)


class PageLoader:
    """
    Loader for the breeders list and detail pages.

    Each load submits the client call to an executor and returns at once.
    """

    def __init__(self, client: Optional[BrAPIClient] = None, executor: Optional[Executor] = None):
        self.client = client or BrAPIClient()
        self.executor = executor or ThreadPoolExecutor(thread_name_prefix="breeders-load")

    def _submit(self, fn: Callable, *args) -> PendingResult:
        return PendingResult(self.executor.submit(fn, *args))

    def load(self, url: str) -> Dict[str, PendingResult]:
        """Start `GET /programs` with the URL's query parameters."""
        params = query_params_from_url(url)
        logger.debug(f"Loading programs for {url} with {len(params)} query params")
        return {"promise": self._submit(self.client.programs, params)}

    def load_detail(self, url: str, program_db_id: str) -> Dict[str, PendingResult]:
        """Start `GET /programs/{programDbId}` with the URL's query parameters."""
        params = query_params_from_url(url)
        logger.debug(f"Loading program {program_db_id} for {url}")
        return {"promise": self._submit(self.client.program, program_db_id, params)}


def load(url: str, client: Optional[BrAPIClient] = None) -> Dict[str, PendingResult]:
    """Shortcut for PageLoader(client).load(url)."""
    return PageLoader(client).load(url)
