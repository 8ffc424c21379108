"""
Tests for the command line entry point.
"""

from unittest.mock import patch

import pytest

import main
from conftest import make_response


@pytest.fixture
def http(monkeypatch):
    monkeypatch.delenv("BRAPI_TIMEOUT", raising=False)
    with patch("breeders.brapi_client.requests.Session") as session_cls:
        yield session_cls.return_value


def test_build_state():
    state = main.build_state(["program_name=wheat"], ["objective:desc", "program_db_id"])

    assert state.column_filters == {"program_name": "wheat"}
    assert [(s.id, s.desc) for s in state.sorting] == [("objective", True), ("program_db_id", False)]


def test_build_state_rejects_bad_filter():
    with pytest.raises(ValueError):
        main.build_state(["program_name"], [])


@pytest.mark.parametrize(
    "filters,sorts",
    [
        ([], ["select"]),
        ([], ["nickname"]),
        ([], ["program_name:sideways"]),
        (["actions=x"], []),
        (["nickname=x"], []),
    ],
)
def test_build_state_rejects_unusable_columns(filters, sorts):
    with pytest.raises(ValueError):
        main.build_state(filters, sorts)


@pytest.mark.parametrize(
    "extra",
    [
        ["--filter", "program_name"],
        ["--filter", "nickname=x"],
        ["--sort", "select"],
    ],
)
def test_bad_table_arguments_exit_before_fetching(http, extra):
    code = main.main(["--base-url", "https://brapi.example.org/brapi/v2", "programs"] + extra)

    assert code == 2
    http.get.assert_not_called()


def test_programs_command(http, programs_body, capsys):
    http.get.return_value = make_response(programs_body)

    code = main.main(
        ["--base-url", "https://brapi.example.org/brapi/v2", "programs", "--page-size", "1000000",
         "--sort", "program_name:desc"]
    )

    assert code == 0
    http.get.assert_called_once_with(
        "https://brapi.example.org/brapi/v2/programs?pageSize=1000000", timeout=None
    )
    out = capsys.readouterr().out
    assert out.index("charlie Maize") < out.index("Bravo Wheat") < out.index("Alpha")


def test_programs_command_all_pages(http, capsys):
    bodies = [
        {
            "metadata": {"pagination": {"currentPage": page, "pageSize": 1, "totalCount": 2, "totalPages": 2}},
            "result": {"data": [{"programDbId": str(page), "programName": f"P{page}", "objective": None}]},
        }
        for page in range(2)
    ]
    http.get.side_effect = [make_response(body) for body in bodies]

    code = main.main(["--base-url", "https://brapi.example.org/brapi/v2", "programs", "--all-pages"])

    assert code == 0
    assert http.get.call_count == 2
    out = capsys.readouterr().out
    assert "P0" in out and "P1" in out


def test_program_not_found_exits_non_zero(http):
    http.get.return_value = make_response({"metadata": {}, "result": {}})

    code = main.main(["--base-url", "https://brapi.example.org/brapi/v2", "program", "999"])

    assert code == 1


def test_program_command_prints_wire_json(http, program_body, capsys):
    http.get.return_value = make_response(program_body)

    code = main.main(["--base-url", "https://brapi.example.org/brapi/v2", "program", "2"])

    assert code == 0
    out = capsys.readouterr().out
    assert '"programDbId": "2"' in out
    assert "commonCropName" not in out
