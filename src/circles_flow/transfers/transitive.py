"""Transitive transfer planning over a trust network snapshot."""

import logging
import re
from typing import Any, Iterable, List, Mapping, Optional, Sequence, Tuple, Union

from ..core.config import FlowConfig
from ..core.types import TrustEdge, TransferPlan, TransferStatus, _validate_address
from ..core.exceptions import CirclesFlowError, PathfindingError, ValidationError
from ..graph.flow_network import FlowNetwork
from ..pathfinding.max_flow import MaxFlowSolver
from ..pathfinding.path_processor import (
    synthesize_transfer_steps,
    assert_no_netted_flow_mismatch,
    assert_executable_order,
)

logger = logging.getLogger(__name__)

EdgeInput = Union[TrustEdge, Mapping[str, Any]]

SOURCE_INDEX = 0
SINK_INDEX = 1

_DECIMAL_INTEGER = re.compile(r"-?[0-9]+")


def _check_address(addr: Any, name: str) -> str:
    try:
        return _validate_address(addr)
    except ValueError:
        raise ValidationError(f"Invalid {name}: {addr}", field=name, value=addr)


def _coerce_edges(edges: Iterable[EdgeInput]) -> List[TrustEdge]:
    coerced = []
    for edge in edges:
        if isinstance(edge, TrustEdge):
            coerced.append(edge)
            continue
        try:
            coerced.append(TrustEdge(**edge))
        except (TypeError, ValueError) as e:
            raise ValidationError(f"Invalid trust edge {edge!r}: {e}", field='edges', value=edge)
    return coerced


def build_network(
    edges: Iterable[EdgeInput],
    from_addr: str,
    to_addr: str
) -> Tuple[FlowNetwork, List[str]]:
    """
    Build a flow network from address-level trust edges.

    Nodes are numbered by first appearance, with the sender at index 0 and
    the receiver at index 1, so the same snapshot always yields the same
    network.

    Args:
        edges: Trust edges with precomputed capacities
        from_addr: Sender address
        to_addr: Receiver address

    Returns:
        Tuple of (flow network, node labels indexed by node)

    Raises:
        InvalidTopologyError: Duplicate edge or self loop
    """
    trust_edges = _coerce_edges(edges)

    labels = [from_addr.lower(), to_addr.lower()]
    index = {addr: i for i, addr in enumerate(labels)}

    for edge in trust_edges:
        for addr in (edge.from_address, edge.to_address):
            if addr not in index:
                index[addr] = len(labels)
                labels.append(addr)

    network = FlowNetwork.from_edges(len(labels), [
        (index[edge.from_address], index[edge.to_address], edge.token_owner, edge.capacity)
        for edge in trust_edges
    ])

    return network, labels


class TransitiveTransfer:
    """Plans transfers routed through trusted intermediaries."""

    def __init__(self, config: Optional[FlowConfig] = None):
        """Initialize transitive transfer planning with configuration.

        Args:
            config: Flow configuration
        """
        self.config = config or FlowConfig()

    def _validate_transfer_params(
        self,
        from_addr: str,
        to_addr: str,
        amount: Union[int, str]
    ) -> int:
        """Validate transfer parameters.

        Args:
            from_addr: Source address
            to_addr: Destination address
            amount: Transfer amount

        Returns:
            Amount as integer

        Raises:
            ValidationError: Invalid parameters
        """
        # Validate addresses
        from_addr = _check_address(from_addr, 'from_addr')
        to_addr = _check_address(to_addr, 'to_addr')

        # Validate amount, accepting only integers and decimal integer strings
        if isinstance(amount, str) and _DECIMAL_INTEGER.fullmatch(amount):
            amount_int = int(amount)
        elif isinstance(amount, int) and not isinstance(amount, bool):
            amount_int = amount
        else:
            raise ValidationError("Amount must be a valid integer", field='amount', value=amount)
        if amount_int <= 0:
            raise ValidationError("Amount must be positive", field='amount', value=amount)

        # Check addresses are different
        if from_addr == to_addr:
            raise ValidationError("Source and destination addresses must be different")

        return amount_int

    def _validate_max_steps(self, max_steps: Optional[int]) -> int:
        if max_steps is None:
            return self.config.max_steps
        if isinstance(max_steps, bool) or not isinstance(max_steps, int) or max_steps < 1:
            raise ValidationError("max_steps must be a positive integer",
                                  field='max_steps', value=max_steps)
        return max_steps

    def find_transitive_transfer(
        self,
        from_addr: str,
        to_addr: str,
        value: Union[int, str],
        edges: Sequence[EdgeInput],
        max_steps: Optional[int] = None
    ) -> TransferPlan:
        """Find the transfer steps moving ``value`` from sender to receiver.

        Args:
            from_addr: Sender address
            to_addr: Receiver address
            value: Amount to transfer
            edges: Trust network snapshot with precomputed capacities
            max_steps: Step budget, defaults to the configured one

        Returns:
            TransferPlan whose status tells success, insufficient flow or an
            exceeded step budget apart

        Raises:
            ValidationError: Invalid parameters
            InvalidTopologyError: Malformed trust network
            IterationLimitError: Solver guard tripped
        """
        # Normalize addresses
        from_addr = from_addr.lower() if isinstance(from_addr, str) else from_addr
        to_addr = to_addr.lower() if isinstance(to_addr, str) else to_addr

        # Validate inputs
        value = self._validate_transfer_params(from_addr, to_addr, value)
        max_steps = self._validate_max_steps(max_steps)
        edges = _coerce_edges(edges)

        logger.info(f"Finding transitive transfer: {from_addr} -> {to_addr}, amount: {value}")

        try:
            # 1. Unconstrained max flow
            network, labels = build_network(edges, from_addr, to_addr)
            solver = MaxFlowSolver(network, SOURCE_INDEX, SINK_INDEX, self.config)
            max_flow_value = solver.solve()

            plan_args = dict(
                from_address=from_addr,
                to_address=to_addr,
                requested_value=value,
                max_flow_value=max_flow_value,
                max_steps=max_steps
            )

            if max_flow_value < value:
                logger.warning(f"Insufficient flow: max flow {max_flow_value} < requested {value}")
                return TransferPlan(status=TransferStatus.INSUFFICIENT_FLOW, **plan_args)

            # 2. Route exactly the requested value on a fresh network
            if self.config.trim_to_requested_value and max_flow_value > value:
                network, labels = build_network(edges, from_addr, to_addr)
                solver = MaxFlowSolver(network, SOURCE_INDEX, SINK_INDEX, self.config, limit=value)
                solver.solve()

            # 3. Order the steps and check them
            steps = synthesize_transfer_steps(solver, labels)
            assert_no_netted_flow_mismatch(steps, from_addr, to_addr)
            assert_executable_order(steps, from_addr)

            if len(steps) > max_steps:
                logger.warning(f"Transfer plan needs {len(steps)} steps, limit is {max_steps}")
                return TransferPlan(
                    status=TransferStatus.STEP_LIMIT_EXCEEDED,
                    required_steps=len(steps),
                    **plan_args
                )

            logger.info(f"Found transfer plan with {len(steps)} steps, max flow: {max_flow_value}")
            return TransferPlan(
                status=TransferStatus.SUCCESS,
                required_steps=len(steps),
                transfer_steps=steps,
                **plan_args
            )

        except Exception as e:
            logger.error(f"Transitive transfer failed: {e}")
            if isinstance(e, CirclesFlowError):
                raise
            else:
                raise PathfindingError(
                    f"Unexpected error during transfer: {e}",
                    from_addr=from_addr,
                    to_addr=to_addr,
                    amount=value
                )

    def get_max_transferable_amount(
        self,
        from_addr: str,
        to_addr: str,
        edges: Sequence[EdgeInput]
    ) -> int:
        """Get maximum transferable amount between addresses.

        Raises:
            ValidationError: Invalid parameters
            InvalidTopologyError: Malformed trust network
        """
        # Validate and normalize addresses
        from_addr = _check_address(from_addr, 'from_addr')
        to_addr = _check_address(to_addr, 'to_addr')

        logger.info(f"Getting max transferable amount: {from_addr} -> {to_addr}")

        if from_addr == to_addr:
            return 0

        network, _ = build_network(edges, from_addr, to_addr)
        max_amount = MaxFlowSolver(network, SOURCE_INDEX, SINK_INDEX, self.config).solve()

        logger.info(f"Max transferable amount: {max_amount}")
        return max_amount


# Convenience functions for simple usage
def find_transitive_transfer(
    config: Optional[FlowConfig],
    from_addr: str,
    to_addr: str,
    value: Union[int, str],
    edges: Sequence[EdgeInput],
    **kwargs
) -> TransferPlan:
    """Convenience function for transitive transfer planning."""
    return TransitiveTransfer(config).find_transitive_transfer(
        from_addr, to_addr, value, edges, **kwargs
    )


def get_max_transferable_amount(
    config: Optional[FlowConfig],
    from_addr: str,
    to_addr: str,
    edges: Sequence[EdgeInput]
) -> int:
    """Convenience function for max flow between two addresses."""
    return TransitiveTransfer(config).get_max_transferable_amount(from_addr, to_addr, edges)
