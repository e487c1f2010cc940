"""Shared fixtures for departure board tests."""

import json

import pytest

from mbta_board.config.settings import DEFAULT_FIXTURES_DIR

TESTDATA_DIR = DEFAULT_FIXTURES_DIR


@pytest.fixture
def testdata_dir():
    return TESTDATA_DIR


@pytest.fixture
def predictions_body():
    return (TESTDATA_DIR / "predictions.json").read_bytes()


@pytest.fixture
def error_429_body():
    return (TESTDATA_DIR / "error-429.json").read_bytes()


@pytest.fixture
def predictions_payload():
    with open(TESTDATA_DIR / "predictions.json") as f:
        return json.load(f)
