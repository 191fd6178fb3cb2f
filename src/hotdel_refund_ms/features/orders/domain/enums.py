"""Order domain enums.

Values match the strings stored by the marketplace API in the shared
``orders`` table.
"""

from enum import Enum


class OrderStatus(str, Enum):
    """Order lifecycle. CANCELLED and FULFILLED are terminal."""

    PLACED = "placed"
    CANCELLED = "cancelled"
    FULFILLED = "fulfilled"

    @property
    def is_terminal(self) -> bool:
        return self is not OrderStatus.PLACED


class PaymentMethod(str, Enum):
    """How the hotel pays for the order."""

    CASH_ON_DELIVERY = "cash_on_delivery"
    ONLINE = "online"


class PaymentStatus(str, Enum):
    """Settlement state of the order's payment."""

    PENDING = "pending"
    PAID = "paid"
    REFUNDED = "refunded"


class RefundStatus(str, Enum):
    """Progress of the refund issued on cancellation."""

    NOT_APPLICABLE = "not_applicable"
    PENDING = "pending"
    PROCESSED = "processed"
    FAILED = "failed"


class ActingRole(str, Enum):
    """Party initiating a cancellation."""

    HOTEL = "hotel"
    SELLER = "seller"
