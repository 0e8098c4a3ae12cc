"""Transfer step synthesis and plan checks for the Circles flow engine."""

import heapq
import logging
from typing import Dict, List, Sequence

from ..core.types import TransferStep
from ..core.exceptions import PathfindingError, ValidationError
from ..graph.flow_network import FlowEdge
from .max_flow import MaxFlowSolver, SolverState

logger = logging.getLogger(__name__)


class TransferStepSynthesizer:
    """
    Turns the final edge flows of a solved network into transfer steps.

    One step is emitted per edge carrying flow. Steps follow the order in
    which their flow was committed, except that no edge leaving an account
    is emitted before every edge paying into that account. Replaying the
    steps in order therefore never asks an account to forward value it has
    not received yet.
    """

    def __init__(self, solver: MaxFlowSolver, labels: Sequence[str]):
        """Initialize the synthesizer.

        Args:
            solver: Solver that has reached its DONE state
            labels: Address of every node, indexed by node

        Raises:
            ValidationError: Label count does not match the network
            PathfindingError: Solver has not finished
        """
        if len(labels) != solver.network.V:
            raise ValidationError(
                f"Expected {solver.network.V} node labels, got {len(labels)}",
                field='labels'
            )
        if solver.state != SolverState.DONE:
            raise PathfindingError("Transfer steps requested before max flow was solved")

        self.solver = solver
        self.labels = list(labels)

    def synthesize(self) -> List[TransferStep]:
        network = self.solver.network
        flow_edges = [edge for edge in network.edges() if edge.flow > 0]

        outgoing: List[List[FlowEdge]] = [[] for _ in range(network.V)]
        pending_inflows = [0] * network.V
        for edge in flow_edges:
            outgoing[edge.v].append(edge)
            pending_inflows[edge.w] += 1

        ready: List = []
        seen = 0

        def release(node: int) -> None:
            nonlocal seen
            for edge in outgoing[node]:
                heapq.heappush(ready, (edge.commit_sequence, seen, edge))
                seen += 1

        for node in range(network.V):
            if node == self.solver.source or pending_inflows[node] == 0:
                release(node)

        steps: List[TransferStep] = []
        while ready:
            _, _, edge = heapq.heappop(ready)
            steps.append(TransferStep(
                from_address=self.labels[edge.v],
                to_address=self.labels[edge.w],
                token_owner=edge.token_owner,
                value=edge.flow
            ))

            pending_inflows[edge.w] -= 1
            if pending_inflows[edge.w] == 0 and edge.w != self.solver.source:
                release(edge.w)

        if len(steps) != len(flow_edges):
            raise PathfindingError(
                f"Could only order {len(steps)} of {len(flow_edges)} transfer steps",
                details={'steps': len(steps), 'flow_edges': len(flow_edges)}
            )

        logger.debug(f"Synthesized {len(steps)} transfer steps")
        return steps


def synthesize_transfer_steps(solver: MaxFlowSolver, labels: Sequence[str]) -> List[TransferStep]:
    """Convenience wrapper around TransferStepSynthesizer."""
    return TransferStepSynthesizer(solver, labels).synthesize()


def terminal_value(steps: Sequence[TransferStep], sink: str) -> int:
    """Total value the steps deliver to ``sink``."""
    sink = sink.lower()
    return sum(step.value for step in steps if step.to_address == sink)


def assert_no_netted_flow_mismatch(
    steps: Sequence[TransferStep],
    source: str,
    sink: str
) -> None:
    """
    Assert that the steps conserve flow.

    The source must be a net sender, the sink a net receiver and every other
    address must forward exactly what it receives.

    Raises:
        PathfindingError: If flow is not properly balanced
    """
    source = source.lower()
    sink = sink.lower()
    net_flow = _compute_netted_flow(steps)

    for addr, balance in net_flow.items():
        is_source = addr == source
        is_sink = addr == sink

        if is_source and balance >= 0:
            raise PathfindingError(f"Source {addr} should be net negative, got {balance}")

        if is_sink and balance <= 0:
            raise PathfindingError(f"Sink {addr} should be net positive, got {balance}")

        is_intermediate = not is_source and not is_sink
        if is_intermediate and balance != 0:
            raise PathfindingError(f"Vertex {addr} is unbalanced: {balance}")


def assert_executable_order(steps: Sequence[TransferStep], source: str) -> None:
    """
    Assert that replaying the steps in order never overdraws an account.

    Every address except the source starts with a zero balance. Balances are
    kept per address rather than per token, since each hop swaps the value
    into the next account's token.

    Raises:
        PathfindingError: If a step sends more than its sender has received
    """
    source = source.lower()
    balances: Dict[str, int] = {}

    for i, step in enumerate(steps):
        if step.from_address != source:
            available = balances.get(step.from_address, 0)
            if available < step.value:
                raise PathfindingError(
                    f"Step {i} sends {step.value} from {step.from_address} "
                    f"which only holds {available}",
                    details={'step': i}
                )
            balances[step.from_address] = available - step.value

        balances[step.to_address] = balances.get(step.to_address, 0) + step.value


def _compute_netted_flow(steps: Sequence[TransferStep]) -> Dict[str, int]:
    """
    Compute the net flow for each address.

    Returns:
        Dict mapping addresses to net flow (positive = net receiver, negative = net sender)
    """
    net_flow: Dict[str, int] = {}

    for step in steps:
        net_flow[step.from_address] = net_flow.get(step.from_address, 0) - step.value
        net_flow[step.to_address] = net_flow.get(step.to_address, 0) + step.value

    return net_flow
