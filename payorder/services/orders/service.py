"""Order issuance against the payment gateway."""

import re
from time import perf_counter

from payorder.common.config import Settings
from payorder.common.errors import ConfigurationError, UpstreamFailure, ValidationFailure
from payorder.common.logging import log_context, logger
from payorder.common.metrics import gateway_latency_seconds, order_failures_total, orders_created_total
from payorder.common.results import Result
from payorder.services.gateway.base import OrderGateway
from payorder.services.orders.receipts import new_receipt

CURRENCY_RE = re.compile(r"^[A-Z]{3}$")


class OrderService:
    """Validates order requests and forwards them to the gateway."""

    def __init__(self, settings: Settings, gateway: OrderGateway) -> None:
        self.settings = settings
        self.gateway = gateway

    def _validate(self, amount, currency: str | None) -> tuple[int, str]:
        # bool is an int subclass; True must not become a 1-paise order.
        if isinstance(amount, bool) or not isinstance(amount, int):
            raise ValidationFailure("amount", "amount must be an integer in the smallest currency unit")
        if amount <= 0:
            raise ValidationFailure("amount", "amount must be positive")
        if currency is None:
            currency = self.settings.default_currency
        if not isinstance(currency, str) or not CURRENCY_RE.match(currency):
            raise ValidationFailure("currency", "currency must be a three-letter ISO 4217 code")
        return amount, currency

    async def create_order(self, amount, currency: str | None = None) -> Result:
        """Create one gateway order.

        Returns `Result` with the issued `GatewayOrder` as value, or a
        validation/upstream/configuration outcome. Nothing is sent to the
        gateway when validation fails.
        """

        try:
            amount, currency = self._validate(amount, currency)
        except ValidationFailure as exc:
            order_failures_total.labels(service=self.settings.service_name, outcome="validation_error").inc()
            logger.info("create_order_rejected field=%s reason=%s", exc.field, exc.message)
            return Result.validation_error(exc.field, exc.message)

        receipt = new_receipt()
        start = perf_counter()
        try:
            order = await self.gateway.create_order(amount=amount, currency=currency, receipt=receipt)
        except ConfigurationError as exc:
            order_failures_total.labels(service=self.settings.service_name, outcome="configuration_error").inc()
            logger.error("create_order_failed receipt=%s error=%s", receipt, exc)
            return Result.configuration_error(str(exc))
        except UpstreamFailure as exc:
            order_failures_total.labels(service=self.settings.service_name, outcome="upstream_error").inc()
            logger.error("create_order_failed receipt=%s error=%s", receipt, exc.cause)
            return Result.upstream_error(exc.cause)
        finally:
            gateway_latency_seconds.labels(
                service=self.settings.service_name,
                operation="create_order",
            ).observe(max(0.0, perf_counter() - start))

        orders_created_total.labels(service=self.settings.service_name, currency=currency).inc()
        with log_context(order_id=order.id):
            logger.info(
                "order_created order_id=%s receipt=%s amount=%s currency=%s gateway=%s",
                order.id,
                receipt,
                amount,
                currency,
                self.gateway.name,
            )
        return Result.success(order)
