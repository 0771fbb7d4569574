"""End-to-end HTTP flows against the app with the sandbox gateway."""

import httpx
from fastapi.testclient import TestClient

from payorder.common.config import Settings
from payorder.services.api.app import create_app
from payorder.services.gateway.razorpay import RazorpayGateway
from payorder.services.verification.signature import expected_signature


def _create_order(client, amount=50000, currency="INR") -> str:
    resp = client.post("/api/create-order", json={"amount": amount, "currency": currency})
    assert resp.status_code == 200
    body = resp.json()
    assert body["success"] is True
    assert body["order_id"]
    return body["order_id"]


def test_health(client):
    resp = client.get("/health")
    assert resp.status_code == 200
    assert resp.json() == {"status": "ok"}


def test_create_and_verify_payment(client, settings):
    """50000 paise INR order, correctly signed confirmation verifies."""

    order_id = _create_order(client)
    signature = expected_signature(order_id, "pay_PID", settings.key_secret)

    resp = client.post(
        "/api/verify-payment",
        json={"payment_id": "pay_PID", "order_id": order_id, "signature": signature},
    )

    assert resp.status_code == 200
    assert resp.json() == {"success": True, "message": "Payment verified successfully"}


def test_altered_signature_is_rejected(client, settings):
    order_id = _create_order(client)
    signature = expected_signature(order_id, "pay_PID", settings.key_secret)
    altered = signature[:10] + ("a" if signature[10] != "a" else "b") + signature[11:]

    resp = client.post(
        "/api/verify-payment",
        json={"payment_id": "pay_PID", "order_id": order_id, "signature": altered},
    )

    assert resp.status_code == 400
    assert resp.json() == {"success": False, "message": "Invalid payment signature"}


def test_negative_amount_never_reaches_gateway(client, gateway):
    resp = client.post("/api/create-order", json={"amount": -5, "currency": "INR"})

    assert resp.status_code == 422
    assert resp.json() == {"success": False, "message": "Invalid order request", "field": "amount"}
    assert gateway.calls == []


def test_missing_currency_defaults(client, gateway):
    resp = client.post("/api/create-order", json={"amount": 100})

    assert resp.status_code == 200
    assert gateway.calls[0]["currency"] == "INR"


def test_lowercase_currency_rejected(client, gateway):
    resp = client.post("/api/create-order", json={"amount": 100, "currency": "inr"})

    assert resp.status_code == 422
    assert resp.json()["field"] == "currency"
    assert gateway.calls == []


def test_verify_missing_field_is_validation_error(client):
    resp = client.post("/api/verify-payment", json={"payment_id": "pay_1", "order_id": "order_1"})

    assert resp.status_code == 422
    assert resp.json() == {"success": False, "message": "Invalid verification request", "field": "signature"}


def test_verify_non_hex_signature_is_validation_error(client):
    resp = client.post(
        "/api/verify-payment",
        json={"payment_id": "pay_1", "order_id": "order_1", "signature": "zz-not-hex"},
    )

    assert resp.status_code == 422
    assert resp.json()["field"] == "signature"


def test_repeat_verification_reports_already_processed(client, settings):
    order_id = _create_order(client)
    body = {
        "payment_id": "pay_repeat",
        "order_id": order_id,
        "signature": expected_signature(order_id, "pay_repeat", settings.key_secret),
    }

    first = client.post("/api/verify-payment", json=body)
    second = client.post("/api/verify-payment", json=body)

    assert first.status_code == 200
    assert "already_processed" not in first.json()
    assert second.status_code == 200
    assert second.json() == {"success": True, "message": "Payment already verified", "already_processed": True}


def test_gateway_failure_is_generic_500(settings, store):
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(401, json={"error": {"code": "BAD_REQUEST_ERROR", "description": "auth failed"}})

    app = create_app(settings, gateway=RazorpayGateway(settings, transport=httpx.MockTransport(handler)), store=store)
    resp = TestClient(app).post("/api/create-order", json={"amount": 50000, "currency": "INR"})

    assert resp.status_code == 500
    assert resp.json() == {"success": False, "message": "Failed to create order"}


def test_verify_without_secret_is_500(gateway, store):
    settings = Settings(_env_file=None, razorpay_key_id="rzp_test_key", razorpay_key_secret=None)
    app = create_app(settings, gateway=gateway, store=store)
    resp = TestClient(app).post(
        "/api/verify-payment",
        json={"payment_id": "pay_1", "order_id": "order_1", "signature": "ab" * 32},
    )

    assert resp.status_code == 500
    assert resp.json() == {"success": False, "message": "Failed to verify payment"}


def test_security_headers_and_cors(client):
    resp = client.get("/health", headers={"Origin": "https://app.example.com"})

    assert "Content-Security-Policy" in resp.headers
    assert resp.headers["access-control-allow-origin"] == "*"


def test_metrics_endpoint(client):
    client.get("/health")
    resp = client.get("/metrics")

    assert resp.status_code == 200
    assert "http_requests_total" in resp.text


def test_non_integer_amounts_rejected_without_coercion(client, gateway):
    """JSON true, numeric strings and floats are not turned into paise."""

    for bad in (True, "100", 100.0):
        resp = client.post("/api/create-order", json={"amount": bad, "currency": "INR"})

        assert resp.status_code == 422
        assert resp.json() == {"success": False, "message": "Invalid order request", "field": "amount"}
    assert gateway.calls == []


def test_malformed_json_reports_body(client, gateway):
    resp = client.post(
        "/api/create-order",
        content=b'{"amount": 500, "currency": ',
        headers={"Content-Type": "application/json"},
    )

    assert resp.status_code == 422
    assert resp.json() == {"success": False, "message": "Invalid order request", "field": "body"}
    assert gateway.calls == []
