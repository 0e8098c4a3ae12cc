#!/usr/bin/env python3
"""
Transitive Transfer Example

This example demonstrates planning a transfer through trusted intermediaries:
- Deriving edge capacities from trust limits and balances
- Computing the maximum transferable amount
- Building an ordered transfer plan
- Handling insufficient flow and step budget results
"""

import logging

from circles_flow import (
    FlowConfig,
    TrustEdge,
    TransitiveTransfer,
    TransferStatus,
    send_limit,
    CirclesFlowError,
)

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)

ALICE = "0x1111111111111111111111111111111111111111"
BOB = "0x2222222222222222222222222222222222222222"
CAROL = "0x3333333333333333333333333333333333333333"
DAVE = "0x4444444444444444444444444444444444444444"

FRECKLES = 10 ** 18


def snapshot():
    """Trust network snapshot with capacities derived from trust limits."""
    return [
        # Bob trusts Alice 50%, holds 100 CRC of his own and none of Alice's
        TrustEdge(from_address=ALICE, to_address=BOB, token_owner=ALICE,
                  capacity=send_limit(50, 80 * FRECKLES, 100 * FRECKLES, 0)),
        TrustEdge(from_address=BOB, to_address=DAVE, token_owner=BOB,
                  capacity=send_limit(100, 100 * FRECKLES, 60 * FRECKLES, 0)),
        TrustEdge(from_address=ALICE, to_address=CAROL, token_owner=ALICE,
                  capacity=send_limit(20, 80 * FRECKLES, 100 * FRECKLES, 5 * FRECKLES)),
        TrustEdge(from_address=CAROL, to_address=DAVE, token_owner=CAROL,
                  capacity=send_limit(100, 30 * FRECKLES, 100 * FRECKLES, 0)),
    ]


def example_max_transferable_amount(client, edges):
    """Show the unconstrained maximum flow."""
    print("\n=== Max Transferable Amount ===")
    max_amount = client.get_max_transferable_amount(ALICE, DAVE, edges)
    print(f"Alice can send up to {max_amount / FRECKLES} CRC to Dave")


def example_transfer_plan(client, edges):
    """Plan a transfer and print its steps."""
    print("\n=== Transfer Plan ===")
    plan = client.find_transitive_transfer(ALICE, DAVE, 60 * FRECKLES, edges)

    if plan.status != TransferStatus.SUCCESS:
        print(f"Transfer rejected: {plan.status.value}")
        return

    for i, step in enumerate(plan.transfer_steps):
        print(f"  Step {i + 1}: {step.from_address} -> {step.to_address} "
              f"({step.value / FRECKLES} CRC of {step.token_owner})")


def example_rejections(edges):
    """Show the insufficient flow and step budget outcomes."""
    print("\n=== Rejected Plans ===")
    client = TransitiveTransfer(FlowConfig(max_steps=1))

    plan = client.find_transitive_transfer(ALICE, DAVE, 500 * FRECKLES, edges)
    print(f"Asking for 500 CRC: {plan.status.value} (max flow {plan.max_flow_value / FRECKLES})")

    plan = client.find_transitive_transfer(ALICE, DAVE, 10 * FRECKLES, edges)
    print(f"Asking for 10 CRC with one step: {plan.status.value} "
          f"(needs {plan.required_steps} steps)")

    try:
        plan.raise_for_status()
    except CirclesFlowError as e:
        print(f"raise_for_status: {e}")


def main():
    client = TransitiveTransfer(FlowConfig.from_env())
    edges = snapshot()

    example_max_transferable_amount(client, edges)
    example_transfer_plan(client, edges)
    example_rejections(edges)


if __name__ == "__main__":
    main()
