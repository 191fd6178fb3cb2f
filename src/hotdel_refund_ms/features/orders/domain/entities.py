"""Order domain entity."""

from dataclasses import dataclass, replace
from datetime import datetime, timezone
from decimal import Decimal
from typing import Any

from hotdel_refund_ms.features.orders.domain.enums import (
    ActingRole,
    OrderStatus,
    PaymentMethod,
    PaymentStatus,
    RefundStatus,
)


def utc_now() -> datetime:
    """Canonical clock: an aware UTC instant."""
    return datetime.now(timezone.utc)


def as_utc(value: datetime) -> datetime:
    """Interpret naive datetimes as UTC and convert aware ones to UTC."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


@dataclass(frozen=True)
class OrderItem:
    """Line item; only the seller reference matters to this service."""

    product_id: str
    seller_id: str
    quantity: int = 1
    price: Decimal = Decimal("0")


@dataclass(frozen=True)
class Order:
    """Order entity as seen by the refund and payment flows.

    Instances are immutable snapshots; state changes go through the order
    store's compare-and-set operations, which return a fresh snapshot.
    """

    id: str
    hotel_id: str
    total_amount: Decimal
    payment_method: PaymentMethod
    placed_at: datetime
    status: OrderStatus = OrderStatus.PLACED
    items: tuple[OrderItem, ...] = ()

    # Cancellation
    cancelled_by: ActingRole | None = None
    cancelled_at: datetime | None = None
    cancellation_reason: str | None = None

    # Payment
    payment_status: PaymentStatus = PaymentStatus.PENDING
    payment_reference: str | None = None
    payment_signature: str | None = None
    paid_at: datetime | None = None

    # Refund
    refund_status: RefundStatus = RefundStatus.NOT_APPLICABLE
    refund_amount: Decimal = Decimal("0")
    refund_reference: str | None = None
    compensation_discount_percent: int = 0

    # Billing contact for notifications
    billing_email: str | None = None
    billing_name: str | None = None

    def __post_init__(self) -> None:
        if self.total_amount <= 0:
            raise ValueError("total_amount must be positive")
        object.__setattr__(self, "placed_at", as_utc(self.placed_at))
        if (self.cancelled_by is None) != (self.status is not OrderStatus.CANCELLED):
            raise ValueError("cancelled_by must be set iff status is cancelled")

    @property
    def seller_ids(self) -> set[str]:
        return {item.seller_id for item in self.items}

    @property
    def is_paid(self) -> bool:
        return self.payment_status is PaymentStatus.PAID

    def with_changes(self, **changes: Any) -> "Order":
        """Return a copy with ``changes`` applied. ``placed_at`` is immutable."""
        if "placed_at" in changes and as_utc(changes["placed_at"]) != self.placed_at:
            raise ValueError("placed_at cannot change after creation")
        return replace(self, **changes)

    def summary(self) -> dict[str, Any]:
        """Public view used in API responses."""
        return {
            "id": self.id,
            "status": self.status.value,
            "paymentMethod": self.payment_method.value,
            "paymentStatus": self.payment_status.value,
            "totalAmount": str(self.total_amount),
            "placedAt": self.placed_at.isoformat(),
            "cancelledBy": self.cancelled_by.value if self.cancelled_by else None,
            "cancelledAt": self.cancelled_at.isoformat() if self.cancelled_at else None,
            "cancellationReason": self.cancellation_reason,
            "refundStatus": self.refund_status.value,
            "refundAmount": str(self.refund_amount),
            "compensationDiscountPercent": self.compensation_discount_percent,
        }


@dataclass(frozen=True)
class ActorIdentity:
    """Authenticated caller, decoded from the marketplace-issued token."""

    id: str
    role: str
    email: str | None = None
