"""API request/response schemas for payment verification."""

from pydantic import BaseModel, Field


class VerifyPaymentRequest(BaseModel):
    """Payload accepted by `POST /api/verify-payment`.

    Format checks on the ids and the signature happen in the verification
    service so that they are reported as validation errors, not mismatches.
    """

    payment_id: str
    order_id: str
    signature: str


class VerificationResult(BaseModel):
    success: bool
    message: str | None = None
    already_processed: bool | None = None
    field: str | None = None
