"""Local stand-in for the hosted gateway.

Issues Razorpay-shaped order ids without any network call. Used for local
development (`GATEWAY_MODE=sandbox`) and end-to-end tests.
"""

import secrets

from payorder.services.gateway.base import GatewayOrder, OrderGateway


class SandboxGateway(OrderGateway):
    """Issues `order_<hex>` ids and remembers the calls it received."""

    name = "sandbox"

    def __init__(self) -> None:
        self.calls: list[dict] = []

    async def create_order(self, amount: int, currency: str, receipt: str) -> GatewayOrder:
        self.calls.append({"amount": amount, "currency": currency, "receipt": receipt})
        return GatewayOrder(
            id=f"order_{secrets.token_hex(7)}",
            amount=amount,
            currency=currency,
            status="created",
            receipt=receipt,
        )
