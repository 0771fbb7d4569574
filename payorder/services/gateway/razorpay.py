"""Razorpay orders API client.

Talks to `POST {api_url}/orders` with basic auth `(key_id, key_secret)`.
Each call is bounded by the configured timeout and is not retried here.
"""

import httpx
from pydantic import ValidationError

from payorder.common.config import Settings
from payorder.common.errors import ConfigurationError, UpstreamFailure
from payorder.services.gateway.base import GatewayOrder, OrderGateway


def _error_description(resp: httpx.Response) -> str:
    """Pull Razorpay's `error.description` out of an error body when present."""

    try:
        body = resp.json()
    except ValueError:
        return resp.text[:200]
    if isinstance(body, dict) and isinstance(body.get("error"), dict):
        return str(body["error"].get("description") or body["error"].get("code") or "")
    return str(body)[:200]


class RazorpayGateway(OrderGateway):
    """Creates orders through the hosted Razorpay API."""

    name = "razorpay"

    def __init__(self, settings: Settings, transport: httpx.AsyncBaseTransport | None = None) -> None:
        self.settings = settings
        self.transport = transport

    async def create_order(self, amount: int, currency: str, receipt: str) -> GatewayOrder:
        if not self.settings.gateway_credentials_loaded:
            raise ConfigurationError("gateway credentials not configured")

        payload = {"amount": amount, "currency": currency, "receipt": receipt}
        try:
            async with httpx.AsyncClient(
                base_url=self.settings.razorpay_api_url,
                auth=(self.settings.razorpay_key_id, self.settings.key_secret),
                timeout=self.settings.gateway_timeout_seconds,
                transport=self.transport,
            ) as client:
                resp = await client.post("/orders", json=payload)
        except httpx.TimeoutException as exc:
            raise UpstreamFailure("gateway request timed out") from exc
        except httpx.HTTPError as exc:
            raise UpstreamFailure(f"gateway request failed: {exc.__class__.__name__}") from exc

        if resp.status_code >= 400:
            raise UpstreamFailure(
                f"gateway rejected order (status={resp.status_code}): {_error_description(resp)}",
                status_code=resp.status_code,
            )
        try:
            order = GatewayOrder.model_validate(resp.json())
        except (ValueError, ValidationError) as exc:
            raise UpstreamFailure("gateway order response malformed") from exc
        if not order.id:
            raise UpstreamFailure("gateway order response missing id")
        return order
