"""Payment use cases."""

from hotdel_refund_ms.features.payments.application.use_cases.verify_payment import (
    PaymentStatusView,
    PaymentVerificationService,
    VerificationOutcome,
)

__all__ = ["PaymentStatusView", "PaymentVerificationService", "VerificationOutcome"]
