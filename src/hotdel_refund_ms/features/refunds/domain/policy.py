"""Refund policy table.

The single source for both the refund decisions this service enforces and
the policy document it discloses on ``GET /refund/policy``.
"""

from collections.abc import Mapping
from types import MappingProxyType
from typing import Any

from hotdel_refund_ms.features.orders.domain.enums import ActingRole, PaymentMethod
from hotdel_refund_ms.features.refunds.domain.entities import PolicyRow
from hotdel_refund_ms.features.refunds.domain.enums import RefundKind
from hotdel_refund_ms.shared.domain.exceptions import PolicyLookupError

HOTEL_CANCELLATION_WINDOW_HOURS = 24.0

NOT_ELIGIBLE_TIMELINE = "N/A"

DEFAULT_POLICY: Mapping[tuple[PaymentMethod, ActingRole], PolicyRow] = MappingProxyType(
    {
        (PaymentMethod.CASH_ON_DELIVERY, ActingRole.SELLER): PolicyRow(
            refund_kind=RefundKind.COMPENSATION_CREDIT,
            refunds_total=False,
            discount_percent=10,
            timeline_label="Immediate",
            refund_description="No payment processed, no refund needed",
        ),
        (PaymentMethod.CASH_ON_DELIVERY, ActingRole.HOTEL): PolicyRow(
            refund_kind=RefundKind.NONE,
            refunds_total=False,
            discount_percent=0,
            timeline_label="N/A",
            refund_description="No payment processed, no refund needed",
        ),
        (PaymentMethod.ONLINE, ActingRole.SELLER): PolicyRow(
            refund_kind=RefundKind.IMMEDIATE_REFUND,
            refunds_total=True,
            discount_percent=15,
            timeline_label="Within 24 hours",
            refund_description="Full refund to original payment method",
        ),
        (PaymentMethod.ONLINE, ActingRole.HOTEL): PolicyRow(
            refund_kind=RefundKind.STANDARD_REFUND,
            refunds_total=True,
            discount_percent=0,
            timeline_label="Within 3 business days",
            refund_description="Full refund to original payment method",
        ),
    }
)

_AFTER_WINDOW_REASONS = {
    PaymentMethod.CASH_ON_DELIVERY: "Order processing has begun",
    PaymentMethod.ONLINE: "Payment processed and order being prepared",
}


class PolicyTable:
    """Static lookup of refund outcome by (payment method, acting role)."""

    def __init__(
        self,
        rows: Mapping[tuple[PaymentMethod, ActingRole], PolicyRow] = DEFAULT_POLICY,
        window_hours: float = HOTEL_CANCELLATION_WINDOW_HOURS,
    ) -> None:
        missing = [
            (method, role)
            for method in PaymentMethod
            for role in ActingRole
            if (method, role) not in rows
        ]
        if missing:
            method, role = missing[0]
            raise PolicyLookupError(method.value, role.value)

        self._rows = MappingProxyType(dict(rows))
        self.window_hours = window_hours

    def lookup(self, payment_method: PaymentMethod, role: ActingRole) -> PolicyRow:
        """Return the row for an eligible cancellation."""
        try:
            return self._rows[(payment_method, role)]
        except KeyError:
            raise PolicyLookupError(
                getattr(payment_method, "value", str(payment_method)),
                getattr(role, "value", str(role)),
            ) from None

    def disclosure(self, support_contact: str) -> dict[str, Any]:
        """Render the public refund policy document from the same rows."""
        document: dict[str, Any] = {}
        for method in PaymentMethod:
            hotel = self.lookup(method, ActingRole.HOTEL)
            seller = self.lookup(method, ActingRole.SELLER)
            document[method.value] = {
                "hotelCancellation": {
                    "withinWindow": {
                        "allowed": True,
                        "refundKind": hotel.refund_kind.value,
                        "refund": hotel.refund_description,
                        "discountPercent": hotel.discount_percent,
                        "timeline": hotel.timeline_label,
                    },
                    "afterWindow": {
                        "allowed": False,
                        "reason": _AFTER_WINDOW_REASONS[method],
                        "action": "Order will be delivered as scheduled",
                    },
                },
                "sellerCancellation": {
                    "allowed": True,
                    "refundKind": seller.refund_kind.value,
                    "refund": seller.refund_description,
                    "discountPercent": seller.discount_percent,
                    "compensation": (
                        f"{seller.discount_percent}% discount on next order"
                        if seller.discount_percent
                        else None
                    ),
                    "timeline": seller.timeline_label,
                },
            }

        window = f"{self.window_hours:g} hours from order placement"
        document["generalTerms"] = {
            "cancellationWindow": window,
            "refundMethods": "Original payment method only",
            "supportContact": support_contact,
            "businessDays": "Monday to Friday, excluding public holidays",
            "timezone": "UTC",
        }
        return document
