"""Edge capacity derivation from trust limits and balances.

The snapshot collaborator computes one capacity per trust edge before the
flow network is built. These helpers follow the Hub's send limit rule so
every collaborator derives capacities the same way.
"""

from ..core.exceptions import ValidationError

NO_LIMIT_PERCENTAGE = 0
MAX_LIMIT_PERCENTAGE = 100


def _check_amount(value: int, name: str) -> None:
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValidationError(f"{name} must be an integer", field=name, value=value)
    if value < 0:
        raise ValidationError(f"{name} must not be negative", field=name, value=value)


def _check_percentage(limit_percentage: int) -> None:
    if isinstance(limit_percentage, bool) or not isinstance(limit_percentage, int) \
            or not NO_LIMIT_PERCENTAGE <= limit_percentage <= MAX_LIMIT_PERCENTAGE:
        raise ValidationError(
            f"limit_percentage must be between {NO_LIMIT_PERCENTAGE} and {MAX_LIMIT_PERCENTAGE}",
            field='limit_percentage',
            value=limit_percentage
        )


def derive_capacity(trust_limit_cap: int, spendable_balance: int) -> int:
    """Capacity of an edge: the smaller of the trust cap and the sender's balance."""
    _check_amount(trust_limit_cap, 'trust_limit_cap')
    _check_amount(spendable_balance, 'spendable_balance')
    return min(trust_limit_cap, spendable_balance)


def trust_limit_cap(
    limit_percentage: int,
    receiver_token_balance: int,
    receiver_held_balance: int
) -> int:
    """
    How much more of a trusted token the receiver accepts.

    Args:
        limit_percentage: Trust limit the receiver granted, 0..100
        receiver_token_balance: Receiver's balance of their own token
        receiver_held_balance: Amount of the trusted token the receiver already holds

    Returns:
        Remaining amount the receiver accepts, never negative
    """
    _check_percentage(limit_percentage)
    _check_amount(receiver_token_balance, 'receiver_token_balance')
    _check_amount(receiver_held_balance, 'receiver_held_balance')

    max_accepted = receiver_token_balance * limit_percentage // MAX_LIMIT_PERCENTAGE
    return max(0, max_accepted - receiver_held_balance)


def send_limit(
    limit_percentage: int,
    sender_balance: int,
    receiver_token_balance: int,
    receiver_held_balance: int,
    sends_receivers_token: bool = False
) -> int:
    """
    Amount of one token that can move from sender to receiver.

    A receiver always takes back their own token in full; any other token is
    bounded by the trust limit and by what the sender holds.
    """
    _check_percentage(limit_percentage)
    _check_amount(sender_balance, 'sender_balance')

    if limit_percentage == NO_LIMIT_PERCENTAGE:
        return 0
    if sends_receivers_token:
        return sender_balance

    cap = trust_limit_cap(limit_percentage, receiver_token_balance, receiver_held_balance)
    return derive_capacity(cap, sender_balance)
