"""Refund domain enums."""

from enum import Enum


class RefundKind(str, Enum):
    """What the customer gets back when an order is cancelled."""

    NONE = "none"
    COMPENSATION_CREDIT = "compensation_credit"
    IMMEDIATE_REFUND = "immediate_refund"
    STANDARD_REFUND = "standard_refund"

    @property
    def returns_money(self) -> bool:
        return self in (RefundKind.IMMEDIATE_REFUND, RefundKind.STANDARD_REFUND)


class EligibilityReason(str, Enum):
    """Why a cancellation is or is not allowed."""

    SELLER_CANCELLATION = "seller_cancellation"
    WITHIN_24_HOURS = "within_24_hours"
    AFTER_24_HOURS = "after_24_hours"
    ORDER_NOT_PLACED = "order_not_placed"


class NotificationTemplate(str, Enum):
    """Notification templates, one per (payment method, outcome)."""

    COD_HOTEL_CANCELLED = "cod_hotel_cancelled"
    COD_HOTEL_REJECTED = "cod_hotel_rejected"
    COD_SELLER_CANCELLED = "cod_seller_cancelled"
    ONLINE_HOTEL_CANCELLED = "online_hotel_cancelled"
    ONLINE_HOTEL_REJECTED = "online_hotel_rejected"
    ONLINE_SELLER_CANCELLED = "online_seller_cancelled"
