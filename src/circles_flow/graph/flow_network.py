"""Capacitated flow network over dense integer node indices."""

import logging
from typing import Iterable, List, Optional, Set, Tuple

from ..core.exceptions import InvalidTopologyError

logger = logging.getLogger(__name__)


class FlowEdge:
    """
    One directed capacitated edge ``v -> w`` moving ``token_owner``'s token.

    The edge does no bounds checking on flow updates; callers must never
    push more than ``residual_capacity_to`` allows.
    """

    __slots__ = (
        "v",                # from node
        "w",                # to node
        "capacity",
        "flow",
        "token_owner",
        "commit_sequence",  # order in which flow last became positive
    )

    def __init__(self, v: int, w: int, capacity: int, token_owner: str) -> None:
        self.v = v
        self.w = w
        self.capacity = capacity
        self.flow = 0
        self.token_owner = token_owner
        self.commit_sequence: Optional[int] = None

    def from_node(self) -> int:
        return self.v

    def to_node(self) -> int:
        return self.w

    def other(self, node: int) -> int:
        return self.w if node == self.v else self.v

    def residual_capacity_to(self, node: int) -> int:
        """Amount that can still move toward ``node`` along this edge.

        Toward ``v`` this is the flow that can be cancelled.
        """
        if node == self.v:
            return self.flow
        return self.capacity - self.flow

    def add_residual_flow_to(self, node: int, delta: int) -> None:
        if node == self.v:
            self.flow -= delta
        elif node == self.w:
            self.flow += delta

    def __repr__(self) -> str:
        return (
            f"FlowEdge({self.v}->{self.w}, cap={self.capacity}, "
            f"flow={self.flow}, token_owner={self.token_owner})"
        )


class FlowNetwork:
    """Flow network holding edges in an arena addressed by integer id.

    Each node's adjacency stores edge ids in insertion order, so a single
    edge is reachable from both of its endpoints and a flow update through
    either side is seen by the other.
    """

    def __init__(self, V: int):
        if isinstance(V, bool) or not isinstance(V, int) or V < 1:
            raise InvalidTopologyError(
                f"Network needs at least one node, got {V}", field='V', value=V
            )
        self.V = V
        self._edges: List[FlowEdge] = []
        self._adjacency: List[List[int]] = [[] for _ in range(V)]
        self._keys: Set[Tuple[int, int, str]] = set()

    @classmethod
    def from_edges(
        cls,
        V: int,
        edges: Iterable[Tuple[int, int, str, int]]
    ) -> 'FlowNetwork':
        """Build a network from ``(from, to, token_owner, capacity)`` tuples."""
        network = cls(V)
        for v, w, token_owner, capacity in edges:
            network.add_edge(v, w, capacity, token_owner)
        logger.debug(f"Built flow network with {network.V} nodes and {network.E} edges")
        return network

    @property
    def E(self) -> int:
        return len(self._edges)

    def check_node(self, node: int, name: str = 'node') -> None:
        if isinstance(node, bool) or not isinstance(node, int) or not 0 <= node < self.V:
            raise InvalidTopologyError(
                f"{name} index {node} is out of range 0..{self.V - 1}",
                field=name,
                value=node
            )

    def add_edge(self, v: int, w: int, capacity: int, token_owner: str) -> int:
        """Add edge ``v -> w`` and return its id.

        Raises:
            InvalidTopologyError: Out-of-range index, self loop, bad capacity
                or a duplicate ``(v, w, token_owner)`` edge
        """
        self.check_node(v, 'from')
        self.check_node(w, 'to')

        if v == w:
            raise InvalidTopologyError(f"Self loop on node {v}", field='to', value=w)

        if isinstance(capacity, bool) or not isinstance(capacity, int):
            raise InvalidTopologyError(
                f"Capacity must be an integer: {capacity!r}", field='capacity', value=capacity
            )
        if capacity < 0:
            raise InvalidTopologyError(
                f"Capacity must not be negative: {capacity}", field='capacity', value=capacity
            )

        key = (v, w, token_owner)
        if key in self._keys:
            raise InvalidTopologyError(
                f"Duplicate edge {v} -> {w} for token owner {token_owner}",
                details={'from': v, 'to': w, 'token_owner': token_owner}
            )
        self._keys.add(key)

        edge_id = len(self._edges)
        self._edges.append(FlowEdge(v, w, capacity, token_owner))
        self._adjacency[v].append(edge_id)
        self._adjacency[w].append(edge_id)
        return edge_id

    def edge(self, edge_id: int) -> FlowEdge:
        return self._edges[edge_id]

    def edges(self) -> List[FlowEdge]:
        return list(self._edges)

    def adjacency(self, node: int) -> List[FlowEdge]:
        """Edges touching ``node`` in insertion order."""
        return [self._edges[edge_id] for edge_id in self._adjacency[node]]

    def find_edge(self, v: int, w: int) -> Optional[FlowEdge]:
        # Linear scan; trust fan-out per account is small
        for edge_id in self._adjacency[v]:
            edge = self._edges[edge_id]
            if edge.other(v) == w:
                return edge
        return None

    def total_flow_into(self, node: int) -> int:
        return sum(e.flow for e in self.adjacency(node) if e.w == node)

    def total_flow_out_of(self, node: int) -> int:
        return sum(e.flow for e in self.adjacency(node) if e.v == node)
