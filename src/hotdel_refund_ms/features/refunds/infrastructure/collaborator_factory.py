"""Refund collaborator factory - Dependency injection."""

from functools import lru_cache

from hotdel_refund_ms.features.refunds.application.ports import (
    DiscountLedgerPort,
    NotificationPort,
    RefundGatewayPort,
)
from hotdel_refund_ms.features.refunds.infrastructure.adapters import (
    HttpNotificationDispatcher,
    InMemoryDiscountLedger,
    LoggingNotificationDispatcher,
    MockRefundGateway,
)
from hotdel_refund_ms.shared.core.settings import get_settings


@lru_cache
def get_notifier() -> NotificationPort:
    """
    Get the notification dispatcher based on configuration.

    Factory function for dependency injection.
    """
    settings = get_settings()

    match settings.notification_backend:
        case "http":
            return HttpNotificationDispatcher()
        case _:
            return LoggingNotificationDispatcher()


@lru_cache
def get_refund_gateway() -> RefundGatewayPort:
    """Get the refund gateway. Only the mock gateway exists."""
    return MockRefundGateway()


@lru_cache
def get_discount_ledger() -> DiscountLedgerPort:
    """Get the process-wide discount ledger."""
    return InMemoryDiscountLedger()
