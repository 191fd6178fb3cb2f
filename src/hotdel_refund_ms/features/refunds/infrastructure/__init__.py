"""Refund infrastructure module."""

from hotdel_refund_ms.features.refunds.infrastructure.collaborator_factory import (
    get_discount_ledger,
    get_notifier,
    get_refund_gateway,
)

__all__ = ["get_discount_ledger", "get_notifier", "get_refund_gateway"]
