"""Drive create-order -> sign -> verify-payment against a running instance.

Run against a server started with `GATEWAY_MODE=sandbox` and the same
`RAZORPAY_KEY_SECRET` passed here.
"""

import argparse
import os
import secrets
import time

import httpx

from payorder.services.verification.signature import expected_signature


def check(label: str, resp: httpx.Response, expected_status: int) -> bool:
    """Print one step result and return whether it matched expectations."""

    ok = resp.status_code == expected_status
    print(f"{label}: status={resp.status_code} expected={expected_status} ok={ok} body={resp.text}")
    return ok


def run(base_url: str, secret: str, amount: int, currency: str) -> bool:
    started = time.perf_counter()
    results = []
    with httpx.Client(base_url=base_url, timeout=10.0) as client:
        resp = client.post("/api/create-order", json={"amount": amount, "currency": currency})
        results.append(check("create-order", resp, 200))
        if resp.status_code != 200:
            return False
        order_id = resp.json()["order_id"]
        payment_id = f"pay_smoke_{secrets.token_hex(7)}"
        signature = expected_signature(order_id, payment_id, secret)

        tampered = ("0" if signature[0] != "0" else "1") + signature[1:]
        resp = client.post(
            "/api/verify-payment",
            json={"payment_id": payment_id, "order_id": order_id, "signature": tampered},
        )
        results.append(check("verify-payment (tampered)", resp, 400))

        resp = client.post(
            "/api/verify-payment",
            json={"payment_id": payment_id, "order_id": order_id, "signature": signature},
        )
        results.append(check("verify-payment (valid)", resp, 200))

        resp = client.post("/api/create-order", json={"amount": -5, "currency": currency})
        results.append(check("create-order (negative amount)", resp, 422))

    print(f"elapsed_ms={(time.perf_counter() - started) * 1000:.2f}")
    return all(results)


if __name__ == "__main__":
    parser = argparse.ArgumentParser()
    parser.add_argument("--base-url", default="http://localhost:5001")
    parser.add_argument("--secret", default=os.getenv("RAZORPAY_KEY_SECRET"))
    parser.add_argument("--amount", type=int, default=50000)
    parser.add_argument("--currency", default="INR")
    args = parser.parse_args()
    if not args.secret:
        raise SystemExit("Provide --secret or set RAZORPAY_KEY_SECRET")
    raise SystemExit(0 if run(args.base_url, args.secret, args.amount, args.currency) else 1)
