"""
Transfers module for the Circles flow engine.

This module plans transitive transfers at address level on top of the
pathfinding core.
"""

from .transitive import (
    TransitiveTransfer,
    build_network,
    find_transitive_transfer,
    get_max_transferable_amount,
)

__all__ = [
    "TransitiveTransfer",
    "build_network",
    "find_transitive_transfer",
    "get_max_transferable_amount",
]
