"""Refund domain value objects."""

from dataclasses import dataclass
from decimal import Decimal
from typing import Any

from hotdel_refund_ms.features.refunds.domain.enums import EligibilityReason, RefundKind


@dataclass(frozen=True)
class EligibilityResult:
    """Verdict of the eligibility evaluator."""

    eligible: bool
    hours_since_order: float
    reason: EligibilityReason


@dataclass(frozen=True)
class PolicyRow:
    """One row of the refund policy matrix."""

    refund_kind: RefundKind
    refunds_total: bool
    discount_percent: int
    timeline_label: str
    refund_description: str


@dataclass(frozen=True)
class RefundDecision:
    """Concrete refund/compensation outcome for one cancellation request."""

    eligible: bool
    refund_kind: RefundKind
    refund_amount: Decimal
    discount_percent: int
    timeline_label: str
    reason: EligibilityReason
    hours_since_order: float

    def to_dict(self) -> dict[str, Any]:
        """Convert to the camelCase shape used by the API."""
        return {
            "eligible": self.eligible,
            "refundKind": self.refund_kind.value,
            "refundAmount": str(self.refund_amount),
            "discountPercent": self.discount_percent,
            "timelineLabel": self.timeline_label,
            "reason": self.reason.value,
            "hoursSinceOrder": self.hours_since_order,
        }
