"""HTTP surface for order creation and payment verification.

`create_app` wires explicit settings, gateway and processed-payment store into
the services so tests can build an app with fakes.
"""

from time import perf_counter
from uuid import uuid4

from fastapi import APIRouter, FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from payorder.common.config import Settings
from payorder.common.logging import logger, trace_id_ctx
from payorder.common.metrics import http_request_duration_seconds, http_requests_total, metrics_response
from payorder.common.results import Outcome, Result
from payorder.services.gateway.base import OrderGateway
from payorder.services.gateway.factory import build_gateway
from payorder.services.orders.schemas import CreateOrderRequest, CreateOrderResponse
from payorder.services.orders.service import OrderService
from payorder.services.verification.schemas import VerificationResult, VerifyPaymentRequest
from payorder.services.verification.service import VerificationService
from payorder.services.verification.store import ProcessedPaymentStore, build_store

CREATE_ORDER_FAILED = "Failed to create order"
INVALID_ORDER_REQUEST = "Invalid order request"
INVALID_SIGNATURE = "Invalid payment signature"
INVALID_VERIFICATION_REQUEST = "Invalid verification request"
VERIFY_FAILED = "Failed to verify payment"

router = APIRouter(prefix="/api", tags=["payments"])


def _failure(status_code: int, message: str, field: str | None = None) -> JSONResponse:
    body = {"success": False, "message": message}
    if field is not None:
        body["field"] = field
    return JSONResponse(status_code=status_code, content=body)


def order_response(result: Result):
    """Map an order-service result onto the HTTP contract."""

    if result.ok:
        return CreateOrderResponse(success=True, order_id=result.value.id)
    if result.outcome is Outcome.VALIDATION_ERROR:
        return _failure(422, INVALID_ORDER_REQUEST, result.field)
    return _failure(500, CREATE_ORDER_FAILED)


def verification_response(result: Result):
    """Map a verification-service result onto the HTTP contract."""

    if result.ok:
        return result.value
    if result.outcome is Outcome.SIGNATURE_MISMATCH:
        return _failure(400, INVALID_SIGNATURE)
    if result.outcome is Outcome.VALIDATION_ERROR:
        return _failure(422, INVALID_VERIFICATION_REQUEST, result.field)
    return _failure(500, VERIFY_FAILED)


@router.post("/create-order", response_model=CreateOrderResponse, response_model_exclude_none=True)
async def create_order(req: CreateOrderRequest, request: Request):
    """Create a gateway order and return its id."""

    service: OrderService = request.app.state.order_service
    result = await service.create_order(req.amount, req.currency)
    return order_response(result)


@router.post("/verify-payment", response_model=VerificationResult, response_model_exclude_none=True)
def verify_payment(req: VerifyPaymentRequest, request: Request):
    """Check the gateway signature of a completed payment."""

    service: VerificationService = request.app.state.verification_service
    result = service.verify_payment(req)
    return verification_response(result)


async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Render schema errors in the same envelope as service validation errors."""

    errors = exc.errors()
    first = errors[0] if errors else {}
    loc = first.get("loc", ())
    # json_invalid locs end in a character offset, not a field name.
    if first.get("type") == "json_invalid" or len(loc) < 2:
        field = "body"
    else:
        field = str(loc[-1])
    message = INVALID_VERIFICATION_REQUEST if request.url.path.endswith("verify-payment") else INVALID_ORDER_REQUEST
    logger.info("request_rejected path=%s field=%s", request.url.path, field)
    return _failure(422, message, field)


def create_app(
    settings: Settings,
    gateway: OrderGateway | None = None,
    store: ProcessedPaymentStore | None = None,
) -> FastAPI:
    """Build the FastAPI app around explicit collaborators."""

    app = FastAPI(title="payorder")
    app.state.settings = settings
    app.state.order_service = OrderService(settings, gateway or build_gateway(settings))
    app.state.verification_service = VerificationService(settings, store or build_store(settings))

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_methods=["GET", "POST"],
        allow_headers=["Content-Type"],
    )

    @app.middleware("http")
    async def request_context_middleware(request: Request, call_next):
        """Bind a correlation id, set the CSP header and record request metrics."""

        trace_token = trace_id_ctx.set(request.headers.get("x-correlation-id") or str(uuid4()))
        start = perf_counter()
        route = request.url.path
        method = request.method
        status_code = 500
        try:
            response = await call_next(request)
            status_code = response.status_code
            route_obj = request.scope.get("route")
            if route_obj is not None and getattr(route_obj, "path", None):
                route = route_obj.path
            response.headers["Content-Security-Policy"] = settings.content_security_policy
            return response
        finally:
            trace_id_ctx.reset(trace_token)
            elapsed = max(0.0, perf_counter() - start)
            http_request_duration_seconds.labels(
                service=settings.service_name,
                route=route,
                method=method,
            ).observe(elapsed)
            http_requests_total.labels(
                service=settings.service_name,
                route=route,
                method=method,
                status_code=str(status_code),
            ).inc()

    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.include_router(router)

    @app.get("/health")
    def health():
        """Container health probe endpoint."""

        return {"status": "ok"}

    @app.get("/metrics")
    def metrics():
        """Prometheus scrape endpoint."""

        return metrics_response()

    return app
