"""
Pathfinding module for the Circles flow engine.

This module computes max flow over a trust network, turns the flow into
ordered transfer steps and derives edge capacities from trust limits.
"""

from .max_flow import MaxFlowSolver, SolverState, max_flow
from .path_processor import (
    TransferStepSynthesizer,
    synthesize_transfer_steps,
    terminal_value,
    assert_no_netted_flow_mismatch,
    assert_executable_order,
)
from .capacity import derive_capacity, trust_limit_cap, send_limit

__all__ = [
    "MaxFlowSolver",
    "SolverState",
    "max_flow",
    "TransferStepSynthesizer",
    "synthesize_transfer_steps",
    "terminal_value",
    "assert_no_netted_flow_mismatch",
    "assert_executable_order",
    "derive_capacity",
    "trust_limit_cap",
    "send_limit",
]
