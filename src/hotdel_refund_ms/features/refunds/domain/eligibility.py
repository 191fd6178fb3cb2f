"""Cancellation eligibility evaluator."""

from datetime import datetime

from hotdel_refund_ms.features.orders.domain.entities import Order, as_utc
from hotdel_refund_ms.features.orders.domain.enums import ActingRole
from hotdel_refund_ms.features.refunds.domain.entities import EligibilityResult
from hotdel_refund_ms.features.refunds.domain.enums import EligibilityReason
from hotdel_refund_ms.features.refunds.domain.policy import (
    HOTEL_CANCELLATION_WINDOW_HOURS,
)
from hotdel_refund_ms.shared.domain.exceptions import InvalidTimestampError

SECONDS_PER_HOUR = 3600.0


class EligibilityEvaluator:
    """
    Decide whether an order may still be cancelled by a given party.

    Sellers may withdraw an order at any time. Hotels may cancel only while
    strictly less than ``window_hours`` have elapsed since placement.
    """

    def __init__(self, window_hours: float = HOTEL_CANCELLATION_WINDOW_HOURS) -> None:
        self.window_hours = window_hours

    def hours_since_order(self, order: Order, now: datetime) -> float:
        now = as_utc(now)
        if now < order.placed_at:
            raise InvalidTimestampError(order.placed_at.isoformat(), now.isoformat())
        return (now - order.placed_at).total_seconds() / SECONDS_PER_HOUR

    def evaluate(
        self, order: Order, acting_role: ActingRole, now: datetime
    ) -> EligibilityResult:
        hours = self.hours_since_order(order, now)

        if acting_role is ActingRole.SELLER:
            return EligibilityResult(True, hours, EligibilityReason.SELLER_CANCELLATION)

        if hours < self.window_hours:
            return EligibilityResult(True, hours, EligibilityReason.WITHIN_24_HOURS)
        return EligibilityResult(False, hours, EligibilityReason.AFTER_24_HOURS)
