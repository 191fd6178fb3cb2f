"""Refund side-effect adapters."""

from hotdel_refund_ms.features.refunds.infrastructure.adapters.discount_ledger import (
    DiscountGrant,
    InMemoryDiscountLedger,
)
from hotdel_refund_ms.features.refunds.infrastructure.adapters.mock_refund_gateway import (
    MockRefundGateway,
)
from hotdel_refund_ms.features.refunds.infrastructure.adapters.notification_dispatchers import (
    HttpNotificationDispatcher,
    LoggingNotificationDispatcher,
)

__all__ = [
    "DiscountGrant",
    "InMemoryDiscountLedger",
    "MockRefundGateway",
    "HttpNotificationDispatcher",
    "LoggingNotificationDispatcher",
]
