"""
Tests for the page-load adapter and its pending results.
"""

import threading
from concurrent.futures import Future, ThreadPoolExecutor
from unittest.mock import Mock

import pytest

from breeders.errors import NotFound, TransportError
from breeders.page_load import PageLoader, PendingResult, load, query_params_from_url

from conftest import BASE_URL, make_response


@pytest.fixture
def executor():
    pool = ThreadPoolExecutor(max_workers=2)
    yield pool
    pool.shutdown(wait=True)


class TestPendingResult:
    def test_states(self):
        pending = Future()
        assert PendingResult(pending).state == "pending"

        resolved = Future()
        resolved.set_result([1, 2])
        assert PendingResult(resolved).state == "resolved"
        assert PendingResult(resolved).result() == [1, 2]

        rejected = Future()
        rejected.set_exception(NotFound("programs", "999"))
        handle = PendingResult(rejected)
        assert handle.state == "rejected"
        assert isinstance(handle.exception(), NotFound)
        with pytest.raises(NotFound):
            handle.result()

    def test_cancelled_future_is_rejected(self):
        future = Future()
        future.cancel()
        assert PendingResult(future).state == "rejected"

    def test_done_callback_receives_handle(self):
        future = Future()
        handle = PendingResult(future)
        seen = []
        handle.add_done_callback(seen.append)

        future.set_result("done")

        assert seen == [handle]


class TestQueryParams:
    def test_repeated_and_blank_values_kept(self):
        params = query_params_from_url("/sv/breeders?pageSize=20&programDbId=1&programDbId=2&q=")
        assert params == [("pageSize", "20"), ("programDbId", "1"), ("programDbId", "2"), ("q", "")]

    def test_no_query_string(self):
        assert query_params_from_url("https://app.example.org/sv/breeders") == []


class TestPageLoader:
    def test_load_returns_before_fetch_completes(self, client, session, executor, programs_body):
        release = threading.Event()

        def slow_get(url, timeout=None):
            release.wait(5)
            return make_response(programs_body)

        session.get.side_effect = slow_get
        loader = PageLoader(client, executor=executor)

        data = loader.load("/sv/breeders?pageSize=1000000")

        assert list(data) == ["promise"]
        assert data["promise"].state == "pending"

        release.set()
        page = data["promise"].result(timeout=5)
        assert data["promise"].state == "resolved"
        assert len(page) == 3
        session.get.assert_called_once_with(f"{BASE_URL}/programs?pageSize=1000000", timeout=None)

    def test_failure_forwarded_as_rejected(self, client, session, executor):
        session.get.return_value = make_response({}, status_code=500)
        loader = PageLoader(client, executor=executor)

        promise = loader.load("/sv/breeders")["promise"]

        with pytest.raises(TransportError):
            promise.result(timeout=5)
        assert promise.state == "rejected"

    def test_load_detail(self, client, session, executor, program_body):
        session.get.return_value = make_response(program_body)
        loader = PageLoader(client, executor=executor)

        program = loader.load_detail("/sv/breeders/2", "2")["promise"].result(timeout=5)

        assert program.program_db_id == "2"
        session.get.assert_called_once_with(f"{BASE_URL}/programs/2", timeout=None)

    def test_load_detail_not_found(self, client, session, executor):
        session.get.return_value = make_response({"metadata": {}, "result": {}})
        loader = PageLoader(client, executor=executor)

        promise = loader.load_detail("/sv/breeders/999", "999")["promise"]

        assert isinstance(promise.exception(timeout=5), NotFound)

    def test_module_level_load(self, programs_body):
        client = Mock()
        client.programs.return_value = "page"

        promise = load("/sv/breeders?page=1", client=client)["promise"]

        assert promise.result(timeout=5) == "page"
        client.programs.assert_called_once_with([("page", "1")])
