"""In-memory order store - For development and testing."""

import asyncio
from typing import Any

from hotdel_refund_ms.features.orders.application.ports import OrderStorePort
from hotdel_refund_ms.features.orders.domain.entities import Order
from hotdel_refund_ms.features.orders.domain.enums import (
    OrderStatus,
    PaymentStatus,
    RefundStatus,
)
from hotdel_refund_ms.shared.core.logging import get_logger

logger = get_logger(__name__)


class InMemoryOrderStore(OrderStorePort):
    """
    Order store kept in a process-local dict.

    A single asyncio lock guards every read-modify-write so the
    compare-and-set contract holds for concurrent tasks in one event loop.
    """

    def __init__(self, orders: list[Order] | None = None) -> None:
        self._orders: dict[str, Order] = {o.id: o for o in orders or []}
        self._lock = asyncio.Lock()

    async def load(self, order_id: str) -> Order | None:
        return self._orders.get(order_id)

    async def add(self, order: Order) -> Order:
        async with self._lock:
            self._orders[order.id] = order
        logger.debug("order_stored", order_id=order.id, store="memory")
        return order

    async def compare_and_set_status(
        self,
        order_id: str,
        expected: OrderStatus,
        new: OrderStatus,
        fields: dict[str, Any] | None = None,
    ) -> Order | None:
        async with self._lock:
            current = self._orders.get(order_id)
            if current is None or current.status is not expected:
                return None
            updated = current.with_changes(status=new, **(fields or {}))
            self._orders[order_id] = updated
            return updated

    async def compare_and_set_payment_status(
        self,
        order_id: str,
        expected: PaymentStatus,
        new: PaymentStatus,
        fields: dict[str, Any] | None = None,
    ) -> Order | None:
        async with self._lock:
            current = self._orders.get(order_id)
            if (
                current is None
                or current.status is not OrderStatus.PLACED
                or current.payment_status is not expected
            ):
                return None
            updated = current.with_changes(payment_status=new, **(fields or {}))
            self._orders[order_id] = updated
            return updated

    async def record_refund(
        self,
        order_id: str,
        refund_status: RefundStatus,
        refund_reference: str | None = None,
    ) -> Order | None:
        async with self._lock:
            current = self._orders.get(order_id)
            if current is None:
                return None
            updated = current.with_changes(
                refund_status=refund_status,
                refund_reference=refund_reference,
            )
            self._orders[order_id] = updated
            return updated
