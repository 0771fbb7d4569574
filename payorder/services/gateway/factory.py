"""Pick the gateway implementation from settings."""

from payorder.common.config import Settings
from payorder.services.gateway.base import OrderGateway
from payorder.services.gateway.razorpay import RazorpayGateway
from payorder.services.gateway.sandbox import SandboxGateway


def build_gateway(settings: Settings) -> OrderGateway:
    if settings.gateway_mode == "sandbox":
        return SandboxGateway()
    return RazorpayGateway(settings)
