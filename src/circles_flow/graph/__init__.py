"""
Graph module for the Circles flow engine.

Index-based flow network primitives: the BFS queue, capacitated edges and
the network that shares each edge between its two endpoints.
"""

from .queue import Queue
from .flow_network import FlowEdge, FlowNetwork

__all__ = [
    "Queue",
    "FlowEdge",
    "FlowNetwork",
]
