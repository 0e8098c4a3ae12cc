"""Test configuration and fixtures for the Circles flow engine."""

import logging
import sys

import pytest

from circles_flow.core.config import FlowConfig
from circles_flow.core.types import TrustEdge

# Configure logging for tests
logging.basicConfig(
    level=logging.DEBUG,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
    handlers=[
        logging.StreamHandler(sys.stdout)
    ]
)

# Test addresses for consistent testing
TEST_ADDRESSES = {
    'a': '0x1111111111111111111111111111111111111111',
    'b': '0x2222222222222222222222222222222222222222',
    'c': '0x3333333333333333333333333333333333333333',
    'd': '0x4444444444444444444444444444444444444444',
    'e': '0x5555555555555555555555555555555555555555',
    'f': '0x6666666666666666666666666666666666666666',
    'g': '0x7777777777777777777777777777777777777777',
    'invalid': '0xinvalid'
}


def _edge(addresses, frm, to, capacity):
    # Each hop moves the sender's own token
    return TrustEdge(
        from_address=addresses[frm],
        to_address=addresses[to],
        token_owner=addresses[frm],
        capacity=capacity
    )


@pytest.fixture
def addresses():
    """Named test addresses."""
    return dict(TEST_ADDRESSES)


@pytest.fixture
def config():
    """Test configuration."""
    return FlowConfig(max_steps=10)


@pytest.fixture
def make_edge(addresses):
    """Factory for trust edges between named test addresses."""
    def factory(frm, to, capacity):
        return _edge(addresses, frm, to, capacity)
    return factory


@pytest.fixture
def diamond_edges(make_edge):
    """Two disjoint paths a -> b -> d (10) and a -> c -> d (5)."""
    return [
        make_edge('a', 'b', 10),
        make_edge('b', 'd', 10),
        make_edge('a', 'c', 5),
        make_edge('c', 'd', 5),
    ]


@pytest.fixture
def chain_edges(make_edge):
    """Single route a -> b -> c -> d -> e -> f needing five hops."""
    names = ['a', 'b', 'c', 'd', 'e', 'f']
    return [make_edge(frm, to, 100) for frm, to in zip(names, names[1:])]
