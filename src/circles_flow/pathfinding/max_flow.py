"""Edmonds-Karp maximum flow over a trust network snapshot."""

import logging
from enum import Enum
from typing import List, Optional, Tuple

from ..core.config import FlowConfig
from ..core.exceptions import IterationLimitError, ValidationError
from ..graph.flow_network import FlowEdge, FlowNetwork
from ..graph.queue import Queue

logger = logging.getLogger(__name__)


class SolverState(str, Enum):
    """Lifecycle of a max-flow computation."""
    SEARCHING = "searching"
    AUGMENTING = "augmenting"
    DONE = "done"


class MaxFlowSolver:
    """
    Computes the maximum flow from ``source`` to ``sink``.

    Augmenting paths are found by breadth-first search over residual
    capacities, so each augmentation uses a shortest path (in hops) and ties
    are broken by adjacency insertion order. Flow is written into the
    network's edges; the solver owns the network until it is done.

    Once augmentation stops, circulations left among positive-flow edges are
    cancelled so the final flow is acyclic.
    """

    def __init__(
        self,
        network: FlowNetwork,
        source: int,
        sink: int,
        config: Optional[FlowConfig] = None,
        limit: Optional[int] = None
    ):
        """Initialize the solver.

        Args:
            network: Freshly built flow network
            source: Index of the sending node
            sink: Index of the receiving node
            config: Flow configuration (sentinel and iteration guard)
            limit: Stop once this much flow has been pushed

        Raises:
            InvalidTopologyError: Source or sink out of range
            ValidationError: Negative or non-integer limit
        """
        network.check_node(source, 'source')
        network.check_node(sink, 'sink')

        if limit is not None and (isinstance(limit, bool) or not isinstance(limit, int) or limit < 0):
            raise ValidationError(f"Flow limit must be a non-negative integer: {limit!r}",
                                  field='limit', value=limit)

        self.network = network
        self.source = source
        self.sink = sink
        self.config = config or FlowConfig()
        self.limit = limit

        self.value = 0
        self.state = SolverState.SEARCHING
        self.augmentations = 0

        self._marked: List[bool] = []
        self._edge_to: List[Optional[FlowEdge]] = []
        self._sequence = 0

    def solve(self) -> int:
        """Push flow until no augmenting path remains and return the value.

        Calling it again after completion returns the same value.

        Raises:
            IterationLimitError: More augmentations than the configured guard
        """
        if self.state == SolverState.DONE:
            return self.value

        if self.source == self.sink:
            self.state = SolverState.DONE
            return self.value

        guard = self.config.augmentation_limit(self.network.V, self.network.E)

        while not self._limit_reached() and self._has_augmenting_path():
            if self.augmentations >= guard:
                raise IterationLimitError(
                    f"Max flow exceeded {guard} augmentations",
                    limit=guard,
                    details={'source': self.source, 'sink': self.sink, 'value': self.value}
                )

            self.state = SolverState.AUGMENTING
            path = self._augmenting_path()
            bottleneck = self._bottleneck(path)

            for edge, node in path:
                self._push(edge, node, bottleneck)

            self.value += bottleneck
            self.augmentations += 1
            logger.debug(
                f"Augmentation {self.augmentations}: pushed {bottleneck} over "
                f"{len(path)} edges, total {self.value}"
            )

        self._cancel_circulations()
        self.state = SolverState.DONE

        logger.info(
            f"Max flow {self.source} -> {self.sink}: {self.value} "
            f"after {self.augmentations} augmentations"
        )
        return self.value

    def _limit_reached(self) -> bool:
        return self.limit is not None and self.value >= self.limit

    def _has_augmenting_path(self) -> bool:
        """Breadth-first search for a path with positive residual capacity."""
        self.state = SolverState.SEARCHING
        self._marked = [False] * self.network.V
        self._edge_to = [None] * self.network.V

        queue = Queue()
        queue.enqueue(self.source)
        self._marked[self.source] = True

        while not queue.is_empty():
            v = queue.dequeue()

            for edge in self.network.adjacency(v):
                w = edge.other(v)

                if not self._marked[w] and edge.residual_capacity_to(w) > 0:
                    self._edge_to[w] = edge
                    self._marked[w] = True

                    if w == self.sink:
                        return True

                    queue.enqueue(w)

        return False

    def _augmenting_path(self) -> List[Tuple[FlowEdge, int]]:
        """Edges of the last found path with the node each one leads to,
        ordered from source to sink."""
        path = []
        node = self.sink
        while node != self.source:
            edge = self._edge_to[node]
            path.append((edge, node))
            node = edge.other(node)
        path.reverse()
        return path

    def _bottleneck(self, path: List[Tuple[FlowEdge, int]]) -> int:
        # Seeded with the largest token amount instead of the first edge
        bottleneck = self.config.max_flow_sentinel
        for edge, node in path:
            bottleneck = min(bottleneck, edge.residual_capacity_to(node))
        if self.limit is not None:
            bottleneck = min(bottleneck, self.limit - self.value)
        return bottleneck

    def _push(self, edge: FlowEdge, node: int, delta: int) -> None:
        had_flow = edge.flow > 0
        edge.add_residual_flow_to(node, delta)

        if edge.flow == 0:
            edge.commit_sequence = None
        elif not had_flow:
            edge.commit_sequence = self._sequence
            self._sequence += 1

    def _cancel_circulations(self) -> None:
        # Every pass zeroes at least one edge, so this ends after at most E passes
        cycle = self._find_flow_cycle()
        while cycle:
            delta = min(edge.flow for edge in cycle)
            for edge in cycle:
                self._push(edge, edge.v, delta)
            logger.debug(f"Cancelled circulation of {delta} over {len(cycle)} edges")
            cycle = self._find_flow_cycle()

    def _find_flow_cycle(self) -> List[FlowEdge]:
        """Return the edges of one directed cycle among positive-flow edges."""
        outgoing: List[List[FlowEdge]] = [[] for _ in range(self.network.V)]
        for edge in self.network.edges():
            if edge.flow > 0:
                outgoing[edge.v].append(edge)

        # 0 = unvisited, 1 = on the DFS stack, 2 = finished
        color = [0] * self.network.V

        for start in range(self.network.V):
            if color[start]:
                continue

            color[start] = 1
            stack = [(start, iter(outgoing[start]))]
            path_edges: List[FlowEdge] = []

            while stack:
                node, remaining = stack[-1]
                advanced = False

                for edge in remaining:
                    if color[edge.w] == 1:
                        index = next(i for i, (n, _) in enumerate(stack) if n == edge.w)
                        return path_edges[index:] + [edge]
                    if color[edge.w] == 0:
                        color[edge.w] = 1
                        path_edges.append(edge)
                        stack.append((edge.w, iter(outgoing[edge.w])))
                        advanced = True
                        break

                if not advanced:
                    color[node] = 2
                    stack.pop()
                    if path_edges:
                        path_edges.pop()

        return []

    def _reachable_from_source(self) -> List[bool]:
        reachable = [False] * self.network.V
        reachable[self.source] = True

        queue = Queue()
        queue.enqueue(self.source)

        while not queue.is_empty():
            v = queue.dequeue()
            for edge in self.network.adjacency(v):
                w = edge.other(v)
                if not reachable[w] and edge.residual_capacity_to(w) > 0:
                    reachable[w] = True
                    queue.enqueue(w)

        return reachable

    def in_cut(self, node: int) -> bool:
        """True if ``node`` is on the source side of the minimum cut."""
        self.network.check_node(node)
        self.solve()
        return self._reachable_from_source()[node]

    def min_cut(self) -> List[FlowEdge]:
        """Edges crossing from the source side to the sink side of the cut.

        Their capacities sum to the max-flow value when no limit was set.
        """
        self.solve()
        reachable = self._reachable_from_source()
        return [
            edge for edge in self.network.edges()
            if reachable[edge.v] and not reachable[edge.w]
        ]


def max_flow(
    network: FlowNetwork,
    source: int,
    sink: int,
    config: Optional[FlowConfig] = None
) -> int:
    """Convenience function returning the max-flow value."""
    return MaxFlowSolver(network, source, sink, config).solve()
