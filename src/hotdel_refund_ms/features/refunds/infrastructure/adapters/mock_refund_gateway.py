"""Mock Refund Gateway Adapter - For development and testing."""

import secrets
from collections import deque
from decimal import Decimal

from hotdel_refund_ms.features.orders.domain.entities import Order
from hotdel_refund_ms.features.refunds.application.ports import (
    RefundGatewayPort,
    RefundResult,
)
from hotdel_refund_ms.shared.core.logging import get_logger

logger = get_logger(__name__)


class MockRefundGateway(RefundGatewayPort):
    """
    Mock refund gateway.

    Refunds always succeed against orders settled through the mock payment
    gateway. The last ``history_size`` refunds are kept in ``issued``,
    newest last.
    """

    def __init__(self, history_size: int = 100) -> None:
        self.issued: deque[dict[str, str]] = deque(maxlen=history_size)

    @property
    def provider_name(self) -> str:
        """Get the provider name."""
        return "mock"

    async def issue_refund(self, order: Order, amount: Decimal) -> RefundResult:
        """Refund a mock payment."""
        if not order.payment_reference:
            return RefundResult(
                success=False,
                error_message=f"Order {order.id} has no settled payment to refund",
            )

        if amount <= 0 or amount > order.total_amount:
            return RefundResult(
                success=False,
                error_message=f"Refund amount {amount} is outside 0..{order.total_amount}",
            )

        refund_id = f"mock_re_{secrets.token_hex(8)}"
        self.issued.append(
            {
                "refund_id": refund_id,
                "order_id": order.id,
                "payment_id": order.payment_reference,
                "amount": str(amount),
            }
        )
        logger.info(
            "mock_refund_issued",
            order_id=order.id,
            refund_id=refund_id,
            amount=str(amount),
        )

        return RefundResult(success=True, refund_id=refund_id)
