"""Payment confirmation checks: input format, signature, then double-processing."""

import re

import redis

from payorder.common.config import Settings
from payorder.common.errors import ConfigurationError, ValidationFailure
from payorder.common.logging import log_context, logger
from payorder.common.metrics import duplicate_verifications_total, payment_verifications_total
from payorder.common.results import Result
from payorder.services.verification.schemas import VerificationResult, VerifyPaymentRequest
from payorder.services.verification.signature import DELIMITER, verify
from payorder.services.verification.store import ProcessedPaymentStore

HEX_RE = re.compile(r"^[0-9a-fA-F]+$")

VERIFIED_MESSAGE = "Payment verified successfully"
ALREADY_VERIFIED_MESSAGE = "Payment already verified"


def validate_verification_request(req: VerifyPaymentRequest) -> None:
    """Raise `ValidationFailure` for the first malformed field."""

    for field in ("payment_id", "order_id"):
        value = getattr(req, field)
        if not value or not value.strip():
            raise ValidationFailure(field, f"{field} must not be empty")
        if DELIMITER in value:
            raise ValidationFailure(field, f"{field} must not contain '{DELIMITER}'")
    if not req.signature:
        raise ValidationFailure("signature", "signature must not be empty")
    if not HEX_RE.match(req.signature):
        raise ValidationFailure("signature", "signature must be hex-encoded")


class VerificationService:
    """Checks gateway payment signatures and records verified payment ids."""

    def __init__(self, settings: Settings, store: ProcessedPaymentStore) -> None:
        self.settings = settings
        self.store = store

    def _count(self, outcome: str) -> None:
        payment_verifications_total.labels(service=self.settings.service_name, outcome=outcome).inc()

    def _claim(self, req: VerifyPaymentRequest) -> bool:
        try:
            return self.store.claim(req.payment_id, req.order_id)
        except redis.RedisError as exc:
            logger.warning("processed_store_unavailable payment_id=%s error=%s", req.payment_id, exc)
            return True

    def verify_payment(self, req: VerifyPaymentRequest) -> Result:
        """Verify one payment confirmation.

        `OK` carries a `VerificationResult`; repeated confirmations of the same
        payment id come back as `OK` with `already_processed=True`.
        """

        with log_context(payment_id=req.payment_id, order_id=req.order_id):
            return self._verify(req)

    def _verify(self, req: VerifyPaymentRequest) -> Result:
        try:
            validate_verification_request(req)
        except ValidationFailure as exc:
            self._count("validation_error")
            logger.info("verify_payment_rejected field=%s reason=%s", exc.field, exc.message)
            return Result.validation_error(exc.field, exc.message)

        try:
            valid = verify(req.payment_id, req.order_id, req.signature, self.settings.key_secret)
        except ConfigurationError as exc:
            self._count("configuration_error")
            logger.error("verify_payment_failed error=%s", exc)
            return Result.configuration_error(str(exc))

        if not valid:
            self._count("signature_mismatch")
            logger.warning(
                "signature_mismatch order_id=%s payment_id=%s",
                req.order_id,
                req.payment_id,
            )
            return Result.signature_mismatch()

        if not self._claim(req):
            self._count("duplicate")
            duplicate_verifications_total.labels(service=self.settings.service_name).inc()
            logger.info("payment_already_verified payment_id=%s", req.payment_id)
            return Result.success(
                VerificationResult(success=True, message=ALREADY_VERIFIED_MESSAGE, already_processed=True)
            )

        self._count("verified")
        logger.info("payment_verified order_id=%s payment_id=%s", req.order_id, req.payment_id)
        return Result.success(VerificationResult(success=True, message=VERIFIED_MESSAGE))
