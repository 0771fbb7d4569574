"""Gateway payment signature: HMAC-SHA256 over `order_id|payment_id`.

The message order and the `|` delimiter are fixed by the gateway; any other
layout produces signatures that never verify.
"""

import hashlib
import hmac

from payorder.common.errors import ConfigurationError

DELIMITER = "|"


def canonical_message(order_id: str, payment_id: str) -> str:
    return f"{order_id}{DELIMITER}{payment_id}"


def expected_signature(order_id: str, payment_id: str, secret: str) -> str:
    """Lowercase hex HMAC-SHA256 of the canonical message under `secret`."""

    if not secret:
        raise ConfigurationError("payment signing secret not configured")
    return hmac.new(
        secret.encode("utf-8"),
        canonical_message(order_id, payment_id).encode("utf-8"),
        hashlib.sha256,
    ).hexdigest()


def verify(payment_id: str, order_id: str, signature: str, secret: str) -> bool:
    """Return True iff `signature` equals the expected signature.

    Comparison is `hmac.compare_digest` on bytes: its running time does not
    depend on where the inputs first differ, and inputs of different length
    compare unequal without looking at content. A mismatch returns False;
    only a missing secret raises.
    """

    expected = expected_signature(order_id, payment_id, secret)
    return hmac.compare_digest(signature.encode("utf-8"), expected.encode("utf-8"))
