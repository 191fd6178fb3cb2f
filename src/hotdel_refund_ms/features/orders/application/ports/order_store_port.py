"""Order store port (interface) - Repository Pattern."""

from abc import ABC, abstractmethod
from typing import Any

from hotdel_refund_ms.features.orders.domain.entities import Order
from hotdel_refund_ms.features.orders.domain.enums import (
    OrderStatus,
    PaymentStatus,
    RefundStatus,
)


class OrderStorePort(ABC):
    """
    Abstract interface over the marketplace's order records.

    Implementations:
    - OrderRepository (async SQLAlchemy, shared database)
    - InMemoryOrderStore (development and tests)

    Every write is a compare-and-set so that concurrent cancellations or
    settlements of the same order serialize on the record: exactly one
    caller wins, the others get ``None`` back.
    """

    @abstractmethod
    async def load(self, order_id: str) -> Order | None:
        """Load an order snapshot, or None if it does not exist."""
        pass

    @abstractmethod
    async def add(self, order: Order) -> Order:
        """Persist a new order (used by seeding and tests)."""
        pass

    @abstractmethod
    async def compare_and_set_status(
        self,
        order_id: str,
        expected: OrderStatus,
        new: OrderStatus,
        fields: dict[str, Any] | None = None,
    ) -> Order | None:
        """
        Move ``status`` from ``expected`` to ``new`` and apply ``fields``.

        Returns the updated order, or None if the order is missing or its
        status no longer equals ``expected``.
        """
        pass

    @abstractmethod
    async def compare_and_set_payment_status(
        self,
        order_id: str,
        expected: PaymentStatus,
        new: PaymentStatus,
        fields: dict[str, Any] | None = None,
    ) -> Order | None:
        """
        Move ``payment_status`` from ``expected`` to ``new`` while the order
        is still placed, applying ``fields``.

        Returns the updated order, or None if the precondition failed.
        """
        pass

    @abstractmethod
    async def record_refund(
        self,
        order_id: str,
        refund_status: RefundStatus,
        refund_reference: str | None = None,
    ) -> Order | None:
        """Record the outcome of a refund issued after cancellation."""
        pass
