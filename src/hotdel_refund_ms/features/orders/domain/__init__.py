"""Order domain entities and value objects."""

from hotdel_refund_ms.features.orders.domain.entities import (
    ActorIdentity,
    Order,
    OrderItem,
    as_utc,
    utc_now,
)
from hotdel_refund_ms.features.orders.domain.enums import (
    ActingRole,
    OrderStatus,
    PaymentMethod,
    PaymentStatus,
    RefundStatus,
)

__all__ = [
    "ActorIdentity",
    "Order",
    "OrderItem",
    "as_utc",
    "utc_now",
    "ActingRole",
    "OrderStatus",
    "PaymentMethod",
    "PaymentStatus",
    "RefundStatus",
]
