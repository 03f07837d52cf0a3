"""
Shared fixtures for rendertest tests.
"""

import pytest

from rendertest.core.scheduling import default_scheduler
from rendertest.query.registry import IdentityRegistry


@pytest.fixture(autouse=True)
def clean_scheduler():
    """Start and finish every test with an empty scheduler queue."""
    default_scheduler.reset()
    yield
    default_scheduler.reset()


@pytest.fixture
def registry() -> IdentityRegistry:
    """A private identity registry, isolated from the module default."""
    return IdentityRegistry()
