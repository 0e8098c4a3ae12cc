"""Configuration management for the Circles flow engine."""

import os
from dataclasses import dataclass
from typing import Optional

from .exceptions import ConfigurationError

# Largest amount an ERC-20 balance can hold (uint256)
MAX_TOKEN_AMOUNT = 2 ** 256 - 1

DEFAULT_MAX_STEPS = 30


def _env_bool(value: str) -> bool:
    return value.strip().lower() in ('1', 'true', 'yes', 'on')


@dataclass(frozen=True)
class FlowConfig:
    """Configuration for max-flow pathfinding and transfer plan synthesis."""
    max_steps: int = DEFAULT_MAX_STEPS
    max_flow_sentinel: int = MAX_TOKEN_AMOUNT
    max_augmentations: Optional[int] = None
    trim_to_requested_value: bool = True

    def __post_init__(self):
        if isinstance(self.max_steps, bool) or not isinstance(self.max_steps, int) or self.max_steps < 1:
            raise ConfigurationError(
                f"max_steps must be a positive integer: {self.max_steps}",
                details={'field': 'max_steps'}
            )
        if isinstance(self.max_flow_sentinel, bool) or not isinstance(self.max_flow_sentinel, int) \
                or self.max_flow_sentinel < 1:
            raise ConfigurationError(
                f"max_flow_sentinel must be a positive integer: {self.max_flow_sentinel}",
                details={'field': 'max_flow_sentinel'}
            )
        if self.max_augmentations is not None and (
                isinstance(self.max_augmentations, bool)
                or not isinstance(self.max_augmentations, int)
                or self.max_augmentations < 1):
            raise ConfigurationError(
                f"max_augmentations must be a positive integer or None: {self.max_augmentations}",
                details={'field': 'max_augmentations'}
            )

    def augmentation_limit(self, node_count: int, edge_count: int) -> int:
        """Upper bound on augmentations for a network of the given size.

        Edmonds-Karp needs at most V * E augmentations, so the default guard
        only trips on malformed input.
        """
        if self.max_augmentations is not None:
            return self.max_augmentations
        return node_count * edge_count + 1

    @classmethod
    def from_env(cls) -> 'FlowConfig':
        """Load configuration from environment variables."""
        try:
            augmentations = os.environ.get('CIRCLES_FLOW_MAX_AUGMENTATIONS')
            return cls(
                max_steps=int(os.environ.get('CIRCLES_FLOW_MAX_STEPS', str(DEFAULT_MAX_STEPS))),
                max_flow_sentinel=int(os.environ.get('CIRCLES_FLOW_MAX_FLOW_SENTINEL', str(MAX_TOKEN_AMOUNT))),
                max_augmentations=int(augmentations) if augmentations else None,
                trim_to_requested_value=_env_bool(
                    os.environ.get('CIRCLES_FLOW_TRIM_TO_REQUESTED_VALUE', 'true')
                )
            )
        except ValueError as e:
            raise ConfigurationError(f"Invalid flow configuration in environment: {e}")

    @classmethod
    def unbounded(cls) -> 'FlowConfig':
        """Configuration that returns the full max-flow allocation untrimmed."""
        return cls(trim_to_requested_value=False)
