"""Unit tests for FlowConfig."""

import dataclasses

import pytest

from circles_flow.core.config import FlowConfig, MAX_TOKEN_AMOUNT, DEFAULT_MAX_STEPS
from circles_flow.core.exceptions import ConfigurationError


class TestFlowConfig:
    """Test configuration defaults and validation."""

    def test_defaults(self):
        """Defaults use the uint256 sentinel and trim to the requested value."""
        config = FlowConfig()
        assert config.max_steps == DEFAULT_MAX_STEPS
        assert config.max_flow_sentinel == MAX_TOKEN_AMOUNT == 2 ** 256 - 1
        assert config.max_augmentations is None
        assert config.trim_to_requested_value is True

    def test_frozen(self):
        """Configuration is immutable."""
        config = FlowConfig()
        with pytest.raises(dataclasses.FrozenInstanceError):
            config.max_steps = 5

    def test_unbounded(self):
        """The unbounded preset keeps the full allocation."""
        assert FlowConfig.unbounded().trim_to_requested_value is False

    @pytest.mark.parametrize("kwargs", [
        {'max_steps': 0},
        {'max_steps': '3'},
        {'max_steps': True},
        {'max_flow_sentinel': 0},
        {'max_flow_sentinel': float('inf')},
        {'max_augmentations': 0},
        {'max_augmentations': 2.5},
    ])
    def test_invalid_values(self, kwargs):
        """Invalid values raise ConfigurationError."""
        with pytest.raises(ConfigurationError):
            FlowConfig(**kwargs)

    def test_augmentation_limit(self):
        """The guard defaults to the Edmonds-Karp bound."""
        assert FlowConfig().augmentation_limit(4, 5) == 21
        assert FlowConfig(max_augmentations=7).augmentation_limit(4, 5) == 7


class TestFromEnv:
    """Test loading configuration from the environment."""

    def test_from_env_defaults(self, monkeypatch):
        """Missing variables fall back to defaults."""
        for name in ('CIRCLES_FLOW_MAX_STEPS', 'CIRCLES_FLOW_MAX_FLOW_SENTINEL',
                     'CIRCLES_FLOW_MAX_AUGMENTATIONS', 'CIRCLES_FLOW_TRIM_TO_REQUESTED_VALUE'):
            monkeypatch.delenv(name, raising=False)

        assert FlowConfig.from_env() == FlowConfig()

    def test_from_env_values(self, monkeypatch):
        """Variables override defaults."""
        monkeypatch.setenv('CIRCLES_FLOW_MAX_STEPS', '5')
        monkeypatch.setenv('CIRCLES_FLOW_MAX_FLOW_SENTINEL', '1000')
        monkeypatch.setenv('CIRCLES_FLOW_MAX_AUGMENTATIONS', '50')
        monkeypatch.setenv('CIRCLES_FLOW_TRIM_TO_REQUESTED_VALUE', 'false')

        config = FlowConfig.from_env()
        assert config == FlowConfig(
            max_steps=5,
            max_flow_sentinel=1000,
            max_augmentations=50,
            trim_to_requested_value=False
        )

    def test_from_env_invalid(self, monkeypatch):
        """Unparseable variables raise ConfigurationError."""
        monkeypatch.setenv('CIRCLES_FLOW_MAX_STEPS', 'many')
        with pytest.raises(ConfigurationError):
            FlowConfig.from_env()
