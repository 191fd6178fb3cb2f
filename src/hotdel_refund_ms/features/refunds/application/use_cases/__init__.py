"""Refund use cases."""

from hotdel_refund_ms.features.refunds.application.use_cases.cancel_order import (
    CancellationOutcome,
    CancellationService,
)
from hotdel_refund_ms.features.refunds.application.use_cases.check_eligibility import (
    EligibilityCheck,
    EligibilityCheckService,
)

__all__ = [
    "CancellationOutcome",
    "CancellationService",
    "EligibilityCheck",
    "EligibilityCheckService",
]
