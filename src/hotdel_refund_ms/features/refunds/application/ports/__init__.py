"""Refund application ports."""

from hotdel_refund_ms.features.refunds.application.ports.side_effect_ports import (
    DiscountLedgerPort,
    NotificationPort,
    RefundGatewayPort,
    RefundResult,
)

__all__ = [
    "DiscountLedgerPort",
    "NotificationPort",
    "RefundGatewayPort",
    "RefundResult",
]
