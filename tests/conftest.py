"""Pytest configuration and fixtures for Caltime tests."""

from __future__ import annotations

import sys
from pathlib import Path

import pytest

# Add the parent directory to sys.path so caltime can be imported
# without needing to install the package
project_root = Path(__file__).parent.parent
if str(project_root) not in sys.path:
    sys.path.insert(0, str(project_root))


@pytest.fixture(autouse=True)
def pinned_defaults():
    """Run every test with Gregorian/UTC defaults, whatever the host zone."""
    from caltime import config

    config.configure(calendar="gregorian", timezone="UTC")
    yield
    config.reset()


@pytest.fixture
def new_york():
    from caltime import Timezone

    return Timezone.named("America/New_York")
