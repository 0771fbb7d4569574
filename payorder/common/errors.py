"""Error taxonomy for order issuance and payment verification.

A signature mismatch is a normal outcome and has no exception here.
"""


class PaymentCoreError(Exception):
    """Base class for errors raised by the payment order core."""


class ValidationFailure(PaymentCoreError):
    """Request input is missing or malformed; no gateway call was made."""

    def __init__(self, field: str, message: str) -> None:
        super().__init__(f"{field}: {message}")
        self.field = field
        self.message = message


class UpstreamFailure(PaymentCoreError):
    """The gateway was unreachable, rejected the call, or answered garbage."""

    def __init__(self, cause: str, status_code: int | None = None) -> None:
        super().__init__(cause)
        self.cause = cause
        self.status_code = status_code


class ConfigurationError(PaymentCoreError):
    """Credentials or the shared secret are missing."""
