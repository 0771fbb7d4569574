"""Compute a gateway-style payment signature for manual verify-payment testing."""

import argparse
import json
import os
import secrets

from payorder.services.verification.signature import expected_signature


def main() -> None:
    """Parse CLI args and print a ready-to-post verify-payment body."""

    parser = argparse.ArgumentParser(description="Sign order_id|payment_id with the gateway secret.")
    parser.add_argument("--order-id", required=True)
    parser.add_argument("--payment-id", default=None, help="Defaults to a random pay_test_* id")
    parser.add_argument(
        "--secret",
        default=os.getenv("RAZORPAY_KEY_SECRET"),
        help="Shared secret (defaults to RAZORPAY_KEY_SECRET)",
    )
    args = parser.parse_args()

    if not args.secret:
        raise SystemExit("Provide --secret or set RAZORPAY_KEY_SECRET")

    payment_id = args.payment_id or f"pay_test_{secrets.token_hex(7)}"
    body = {
        "payment_id": payment_id,
        "order_id": args.order_id,
        "signature": expected_signature(args.order_id, payment_id, args.secret),
    }
    print(json.dumps(body, indent=2))


if __name__ == "__main__":
    main()
