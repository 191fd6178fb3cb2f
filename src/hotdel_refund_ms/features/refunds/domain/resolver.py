"""Refund resolver: eligibility verdict plus policy row."""

from datetime import datetime
from decimal import Decimal

from hotdel_refund_ms.features.orders.domain.entities import Order
from hotdel_refund_ms.features.orders.domain.enums import ActingRole
from hotdel_refund_ms.features.refunds.domain.eligibility import EligibilityEvaluator
from hotdel_refund_ms.features.refunds.domain.entities import RefundDecision
from hotdel_refund_ms.features.refunds.domain.enums import RefundKind
from hotdel_refund_ms.features.refunds.domain.policy import (
    NOT_ELIGIBLE_TIMELINE,
    PolicyTable,
)


class RefundResolver:
    """Produce the refund/compensation decision for a cancellation request."""

    def __init__(
        self,
        policy: PolicyTable | None = None,
        evaluator: EligibilityEvaluator | None = None,
    ) -> None:
        self.policy = policy or PolicyTable()
        self.evaluator = evaluator or EligibilityEvaluator(self.policy.window_hours)

    def resolve(
        self, order: Order, acting_role: ActingRole, now: datetime
    ) -> RefundDecision:
        verdict = self.evaluator.evaluate(order, acting_role, now)

        if not verdict.eligible:
            return RefundDecision(
                eligible=False,
                refund_kind=RefundKind.NONE,
                refund_amount=Decimal("0"),
                discount_percent=0,
                timeline_label=NOT_ELIGIBLE_TIMELINE,
                reason=verdict.reason,
                hours_since_order=verdict.hours_since_order,
            )

        row = self.policy.lookup(order.payment_method, acting_role)
        return RefundDecision(
            eligible=True,
            refund_kind=row.refund_kind,
            refund_amount=order.total_amount if row.refunds_total else Decimal("0"),
            discount_percent=row.discount_percent,
            timeline_label=row.timeline_label,
            reason=verdict.reason,
            hours_since_order=verdict.hours_since_order,
        )
