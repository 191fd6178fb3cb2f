"""Refund domain: policy table, eligibility and resolution."""

from hotdel_refund_ms.features.refunds.domain.eligibility import EligibilityEvaluator
from hotdel_refund_ms.features.refunds.domain.entities import (
    EligibilityResult,
    PolicyRow,
    RefundDecision,
)
from hotdel_refund_ms.features.refunds.domain.enums import (
    EligibilityReason,
    NotificationTemplate,
    RefundKind,
)
from hotdel_refund_ms.features.refunds.domain.policy import PolicyTable
from hotdel_refund_ms.features.refunds.domain.resolver import RefundResolver

__all__ = [
    "EligibilityEvaluator",
    "EligibilityResult",
    "PolicyRow",
    "RefundDecision",
    "EligibilityReason",
    "NotificationTemplate",
    "RefundKind",
    "PolicyTable",
    "RefundResolver",
]
