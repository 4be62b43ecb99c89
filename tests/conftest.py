"""Shared pytest configuration and fixtures for simplesheets tests."""

import pytest

from simplesheets.session import SpreadsheetSession
from simplesheets.transport.local_transport import LocalTransport


def pytest_addoption(parser):
    parser.addoption(
        "--run-slow",
        action="store_true",
        default=False,
        help="Include tests marked @pytest.mark.slow (e.g. live Google Sheets)",
    )


def pytest_configure(config):
    config.addinivalue_line("markers", "slow: marks tests as slow (skipped unless --run-slow)")


def pytest_collection_modifyitems(config, items):
    if config.getoption("--run-slow"):
        return
    skip = pytest.mark.skip(reason="slow test, pass --run-slow to include")
    for item in items:
        if "slow" in item.keywords:
            item.add_marker(skip)


PEOPLE = [
    ["Name", "Age", "City"],
    ["Ada", "36", "London"],
    ["Alan", "41", "Wilmslow"],
    ["Grace", "85", "Arlington"],
]


@pytest.fixture
def transport() -> LocalTransport:
    return LocalTransport()


@pytest.fixture
def people_id(transport) -> str:
    """A spreadsheet with a "People" tab and an empty "Notes" tab."""
    return transport.add_spreadsheet(
        "Directory", {"People": PEOPLE, "Notes": []}, spreadsheet_id="people"
    )


@pytest.fixture
def session(transport) -> SpreadsheetSession:
    return SpreadsheetSession(transport)
