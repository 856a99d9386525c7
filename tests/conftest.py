"""Shared test fixtures for holiday-api tests."""

import os
import sys
from datetime import date

import pytest

# Make the helpers module importable from test modules
sys.path.insert(0, os.path.dirname(__file__))


@pytest.fixture
def today():
    return date(2025, 1, 2)


@pytest.fixture
def fixed_clock(today):
    return lambda: today
