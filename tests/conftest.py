"""pytest configuration and shared fixtures."""

from __future__ import annotations

import os
import sys

import pytest

# Ensure tests/ dir is on path so apriori_base imports work
sys.path.insert(0, os.path.dirname(__file__))

from apriori_base import make_baskets  # noqa: E402


@pytest.fixture
def textbook_transactions() -> list[list[int]]:
    return [[1, 2, 3, 4], [1, 2, 4], [1, 2], [2, 3, 4]]


@pytest.fixture(scope="session")
def faker_baskets() -> list[list[str]]:
    return make_baskets()
