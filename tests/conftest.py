"""
Shared fixtures: saved BrAPI responses and a mocked requests session.
"""

import json
from pathlib import Path
from unittest.mock import Mock

import pytest

from breeders.brapi_client import BrAPIClient

FIXTURE_DIR = Path(__file__).parent / "fixtures"
BASE_URL = "https://brapi.example.org/brapi/v2"


def load_fixture(name):
    """Load a saved JSON response from tests/fixtures"""
    with open(FIXTURE_DIR / name, "r") as f:
        return json.load(f)


def make_response(body=None, status_code=200):
    """Build a mock requests.Response returning `body` from json()"""
    response = Mock()
    response.status_code = status_code
    response.json.return_value = body
    return response


@pytest.fixture
def programs_body():
    return load_fixture("programs_page.json")


@pytest.fixture
def program_body():
    return load_fixture("program_detail.json")


@pytest.fixture
def session():
    """Mock session; set session.get.return_value or side_effect per test"""
    return Mock()


@pytest.fixture
def client(session):
    return BrAPIClient(base_url=BASE_URL, session=session)
