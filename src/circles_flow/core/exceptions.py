"""Custom exceptions for the Circles flow engine."""

from typing import Optional, Any, Dict


class CirclesFlowError(Exception):
    """Base exception for all Circles flow errors."""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}


class ConfigurationError(CirclesFlowError):
    """Configuration is invalid or missing."""
    pass


class ValidationError(CirclesFlowError):
    """Input validation failed."""

    def __init__(
        self,
        message: str,
        field: Optional[str] = None,
        value: Optional[Any] = None,
        details: Optional[Dict[str, Any]] = None
    ):
        super().__init__(message, details)
        self.field = field
        self.value = value


class InvalidTopologyError(ValidationError):
    """Trust graph input is malformed (duplicate edge, bad index or capacity)."""
    pass


class PathfindingError(CirclesFlowError):
    """Pathfinding operation failed."""

    def __init__(
        self,
        message: str,
        from_addr: Optional[str] = None,
        to_addr: Optional[str] = None,
        amount: Optional[int] = None,
        details: Optional[Dict[str, Any]] = None
    ):
        super().__init__(message, details)
        self.from_addr = from_addr
        self.to_addr = to_addr
        self.amount = amount


class InsufficientFlowError(PathfindingError):
    """Maximum flow through the trust graph is below the requested value."""

    def __init__(
        self,
        message: str,
        max_flow: int = 0,
        **kwargs
    ):
        super().__init__(message, **kwargs)
        self.max_flow = max_flow


class StepLimitExceededError(PathfindingError):
    """A feasible flow exists but its transfer plan needs too many steps."""

    def __init__(
        self,
        message: str,
        max_steps: Optional[int] = None,
        step_count: Optional[int] = None,
        **kwargs
    ):
        super().__init__(message, **kwargs)
        self.max_steps = max_steps
        self.step_count = step_count


class IterationLimitError(CirclesFlowError):
    """The max-flow solver exceeded its augmentation guard."""

    def __init__(
        self,
        message: str,
        limit: Optional[int] = None,
        details: Optional[Dict[str, Any]] = None
    ):
        super().__init__(message, details)
        self.limit = limit
