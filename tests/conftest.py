"""pytest configuration and shared fixtures."""

from __future__ import annotations

import os
import sys

import pytest

# Ensure tests/ dir is on path so test_fpbase imports work
sys.path.insert(0, os.path.dirname(__file__))

from test_fpbase import TEXTBOOK, TEXTBOOK_EXPECTED, random_transactions  # noqa: E402


@pytest.fixture
def textbook() -> list[list[int]]:
    return [list(t) for t in TEXTBOOK]


@pytest.fixture
def textbook_expected() -> dict[tuple[int, ...], int]:
    return dict(TEXTBOOK_EXPECTED)


@pytest.fixture(params=[0, 1, 2])
def random_db(request: pytest.FixtureRequest) -> list[list[int]]:
    return random_transactions(seed=request.param)
