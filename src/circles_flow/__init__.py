"""
Circles Flow

Max-flow pathfinding for the Circles trust network: computes how much value
can move between two accounts through trusted intermediaries and the
ordered transfer steps that move it.
"""

__version__ = "0.1.0"

# Core configuration and types
from .core.config import FlowConfig, MAX_TOKEN_AMOUNT
from .core.types import (
    TrustEdge,
    TransferStep,
    TransferStatus,
    TransferPlan,
)

# Flow network
from .graph import Queue, FlowEdge, FlowNetwork

# Max flow and transfer steps
from .pathfinding.max_flow import MaxFlowSolver, SolverState, max_flow
from .pathfinding.path_processor import (
    TransferStepSynthesizer,
    synthesize_transfer_steps,
    terminal_value,
    assert_no_netted_flow_mismatch,
    assert_executable_order,
)

# Capacity derivation
from .pathfinding.capacity import derive_capacity, trust_limit_cap, send_limit

# Transfer planning
from .transfers.transitive import (
    TransitiveTransfer,
    build_network,
    find_transitive_transfer,
    get_max_transferable_amount,
)

# Exceptions
from .core.exceptions import (
    CirclesFlowError,
    ConfigurationError,
    ValidationError,
    InvalidTopologyError,
    PathfindingError,
    InsufficientFlowError,
    StepLimitExceededError,
    IterationLimitError,
)

# Main exports for public API
__all__ = [
    # Version info
    "__version__",

    # Configuration
    "FlowConfig",
    "MAX_TOKEN_AMOUNT",

    # Core types
    "TrustEdge",
    "TransferStep",
    "TransferStatus",
    "TransferPlan",

    # Flow network
    "Queue",
    "FlowEdge",
    "FlowNetwork",

    # Max flow
    "MaxFlowSolver",
    "SolverState",
    "max_flow",

    # Transfer steps
    "TransferStepSynthesizer",
    "synthesize_transfer_steps",
    "terminal_value",
    "assert_no_netted_flow_mismatch",
    "assert_executable_order",

    # Capacity derivation
    "derive_capacity",
    "trust_limit_cap",
    "send_limit",

    # Transfer planning
    "TransitiveTransfer",
    "build_network",
    "find_transitive_transfer",
    "get_max_transferable_amount",

    # Exceptions
    "CirclesFlowError",
    "ConfigurationError",
    "ValidationError",
    "InvalidTopologyError",
    "PathfindingError",
    "InsufficientFlowError",
    "StepLimitExceededError",
    "IterationLimitError",
]
