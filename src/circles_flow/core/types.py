"""Core type definitions for the Circles flow engine."""

import re
from enum import Enum
from typing import List
from pydantic import BaseModel, ConfigDict, field_validator

from .exceptions import InsufficientFlowError, StepLimitExceededError


_ADDRESS = re.compile(r"0[xX][0-9a-fA-F]{40}")


def _validate_address(v):
    if not isinstance(v, str) or not _ADDRESS.fullmatch(v):
        raise ValueError(f'Invalid Ethereum address: {v}')
    return v.lower()


def _validate_amount(v, name):
    if isinstance(v, bool) or not isinstance(v, int):
        raise ValueError(f'{name} must be an integer: {v!r}')
    if v < 0:
        raise ValueError(f'{name} must not be negative: {v}')
    return v


class TrustEdge(BaseModel):
    """One capacitated edge of a trust network snapshot.

    ``capacity`` is the amount of ``token_owner``'s token that can move from
    ``from_address`` to ``to_address``, already combined from the trust limit
    and the spendable balance by the snapshot collaborator.
    """
    model_config = ConfigDict(frozen=True)

    from_address: str
    to_address: str
    token_owner: str
    capacity: int

    @field_validator('from_address', 'to_address', 'token_owner', mode='before')
    @classmethod
    def validate_address(cls, v):
        return _validate_address(v)

    @field_validator('capacity', mode='before')
    @classmethod
    def validate_capacity(cls, v):
        return _validate_amount(v, 'capacity')


class TransferStep(BaseModel):
    """Represents a single transfer step in a payment flow."""
    model_config = ConfigDict(frozen=True)

    from_address: str
    to_address: str
    token_owner: str
    value: int

    @field_validator('from_address', 'to_address', 'token_owner', mode='before')
    @classmethod
    def validate_address(cls, v):
        return _validate_address(v)

    @field_validator('value', mode='before')
    @classmethod
    def validate_value(cls, v):
        _validate_amount(v, 'value')
        if v == 0:
            raise ValueError('value must be positive')
        return v


class TransferStatus(str, Enum):
    """Outcome of a transitive transfer request."""
    SUCCESS = "success"
    INSUFFICIENT_FLOW = "insufficient_flow"
    STEP_LIMIT_EXCEEDED = "step_limit_exceeded"


class TransferPlan(BaseModel):
    """Result of a transitive transfer request.

    ``transfer_steps`` is only populated on success; a rejected plan is never
    returned truncated.
    """
    model_config = ConfigDict(frozen=True)

    status: TransferStatus
    from_address: str
    to_address: str
    requested_value: int
    max_flow_value: int
    max_steps: int
    required_steps: int = 0
    transfer_steps: List[TransferStep] = []

    @field_validator('from_address', 'to_address', mode='before')
    @classmethod
    def validate_address(cls, v):
        return _validate_address(v)

    @property
    def ok(self) -> bool:
        return self.status == TransferStatus.SUCCESS

    @property
    def step_count(self) -> int:
        return len(self.transfer_steps)

    def raise_for_status(self) -> None:
        """Raise the typed exception matching a non-success status."""
        if self.status == TransferStatus.INSUFFICIENT_FLOW:
            raise InsufficientFlowError(
                f"Max flow {self.max_flow_value} is below requested value {self.requested_value}",
                max_flow=self.max_flow_value,
                from_addr=self.from_address,
                to_addr=self.to_address,
                amount=self.requested_value
            )
        if self.status == TransferStatus.STEP_LIMIT_EXCEEDED:
            raise StepLimitExceededError(
                f"Transfer plan exceeds the limit of {self.max_steps} steps",
                max_steps=self.max_steps,
                step_count=self.required_steps,
                from_addr=self.from_address,
                to_addr=self.to_address,
                amount=self.requested_value
            )
