"""Order repository for database operations."""

from typing import Any, Optional

from sqlalchemy import select, update
from sqlalchemy.ext.asyncio import AsyncSession

from hotdel_refund_ms.features.orders.application.ports import OrderStorePort
from hotdel_refund_ms.features.orders.domain.entities import Order
from hotdel_refund_ms.features.orders.domain.enums import (
    OrderStatus,
    PaymentStatus,
    RefundStatus,
)
from hotdel_refund_ms.shared.core.logging import get_logger
from hotdel_refund_ms.shared.infrastructure.database.models import (
    OrderModel,
    column_values,
)

logger = get_logger(__name__)


class OrderRepository(OrderStorePort):
    """
    Order repository using async SQLAlchemy.

    Conditional updates (``UPDATE ... WHERE status = :expected``) give the
    row-level compare-and-set that keeps cancellation and settlement
    at-most-once across concurrent requests.
    """

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def load(self, order_id: str) -> Optional[Order]:
        """
        Get an order by its ID.

        Args:
            order_id: ID of the order

        Returns:
            Order if found, None otherwise
        """
        result = await self._session.execute(
            select(OrderModel)
            .where(OrderModel.id == order_id)
            .execution_options(populate_existing=True)
        )
        model = result.scalar_one_or_none()
        return model.to_domain() if model else None

    async def add(self, order: Order) -> Order:
        """
        Insert a new order.

        Args:
            order: Order domain entity to persist

        Returns:
            The persisted order entity
        """
        model = OrderModel.from_domain(order)
        self._session.add(model)
        await self._session.flush()
        await self._session.commit()
        await self._session.refresh(model)
        logger.info("order_committed", order_id=model.id)
        return model.to_domain()

    async def compare_and_set_status(
        self,
        order_id: str,
        expected: OrderStatus,
        new: OrderStatus,
        fields: dict[str, Any] | None = None,
    ) -> Optional[Order]:
        """
        Conditionally move an order to a new status.

        Args:
            order_id: ID of the order
            expected: Status the row must currently have
            new: Status to write
            fields: Extra columns to write in the same statement

        Returns:
            Updated order, or None if no row matched
        """
        result = await self._session.execute(
            update(OrderModel)
            .where(OrderModel.id == order_id, OrderModel.status == expected.value)
            .values(status=new.value, **column_values(fields or {}))
        )
        return await self._finish_conditional_update(order_id, result.rowcount)

    async def compare_and_set_payment_status(
        self,
        order_id: str,
        expected: PaymentStatus,
        new: PaymentStatus,
        fields: dict[str, Any] | None = None,
    ) -> Optional[Order]:
        """
        Conditionally settle (or otherwise move) an order's payment.

        The row must still be placed and have ``expected`` payment status.
        """
        result = await self._session.execute(
            update(OrderModel)
            .where(
                OrderModel.id == order_id,
                OrderModel.status == OrderStatus.PLACED.value,
                OrderModel.payment_status == expected.value,
            )
            .values(payment_status=new.value, **column_values(fields or {}))
        )
        return await self._finish_conditional_update(order_id, result.rowcount)

    async def record_refund(
        self,
        order_id: str,
        refund_status: RefundStatus,
        refund_reference: str | None = None,
    ) -> Optional[Order]:
        """Record refund progress for a cancelled order."""
        result = await self._session.execute(
            update(OrderModel)
            .where(OrderModel.id == order_id)
            .values(refund_status=refund_status.value, refund_reference=refund_reference)
        )
        return await self._finish_conditional_update(order_id, result.rowcount)

    async def _finish_conditional_update(
        self, order_id: str, rowcount: int
    ) -> Optional[Order]:
        if rowcount == 0:
            await self._session.rollback()
            return None

        # Commit now so side effects only ever follow a durable change
        await self._session.commit()
        return await self.load(order_id)
