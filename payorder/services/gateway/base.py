"""Gateway contract and the order shape it returns."""

from abc import ABC, abstractmethod

from pydantic import BaseModel


class GatewayOrder(BaseModel):
    """Order as issued by the gateway. Never modified by this service."""

    id: str
    amount: int
    currency: str
    status: str
    receipt: str | None = None


class OrderGateway(ABC):
    """Order-creation side of a hosted payment gateway."""

    name: str = "gateway"

    @abstractmethod
    async def create_order(self, amount: int, currency: str, receipt: str) -> GatewayOrder:
        """Create one order; raise `UpstreamFailure` or `ConfigurationError` on failure."""
