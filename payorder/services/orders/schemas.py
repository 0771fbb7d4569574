"""API request/response schemas for order creation."""

from pydantic import BaseModel, Field


class CreateOrderRequest(BaseModel):
    """Payload accepted by `POST /api/create-order`.

    `amount` is in the smallest currency unit (paise, cents) and must be a JSON
    integer; `true`, `"100"` and `100.0` are rejected rather than coerced.
    """

    amount: int = Field(gt=0, strict=True)
    currency: str | None = Field(default=None, pattern=r"^[A-Z]{3}$")


class CreateOrderResponse(BaseModel):
    success: bool
    order_id: str | None = None
    message: str | None = None
    field: str | None = None
