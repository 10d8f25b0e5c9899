"""
Shared fixtures for the consistent hashing ring tests.
"""

import pytest

from weighted_ring import ConsistentHashRing


@pytest.fixture
def ring():
    """An empty ring with default density and bucket count."""
    return ConsistentHashRing()


@pytest.fixture
def abc_ring():
    """Three targets where C carries half the total weight."""
    return ConsistentHashRing({"A": 1, "B": 1, "C": 2})
