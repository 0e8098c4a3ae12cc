"""
Core module for the Circles flow engine.

This module contains the fundamental types, configuration and exceptions
shared by the graph, pathfinding and transfer layers.
"""

from .config import FlowConfig, MAX_TOKEN_AMOUNT, DEFAULT_MAX_STEPS
from .types import (
    TrustEdge,
    TransferStep,
    TransferStatus,
    TransferPlan,
)
from .exceptions import (
    CirclesFlowError,
    ConfigurationError,
    ValidationError,
    InvalidTopologyError,
    PathfindingError,
    InsufficientFlowError,
    StepLimitExceededError,
    IterationLimitError,
)

__all__ = [
    # Configuration
    "FlowConfig",
    "MAX_TOKEN_AMOUNT",
    "DEFAULT_MAX_STEPS",

    # Core types
    "TrustEdge",
    "TransferStep",
    "TransferStatus",
    "TransferPlan",

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
