"""Order infrastructure module."""

from hotdel_refund_ms.features.orders.infrastructure.authorizer import (
    OrderOwnershipAuthorizer,
)
from hotdel_refund_ms.features.orders.infrastructure.memory_store import (
    InMemoryOrderStore,
)
from hotdel_refund_ms.features.orders.infrastructure.repository import (
    OrderRepository,
)

__all__ = ["OrderOwnershipAuthorizer", "InMemoryOrderStore", "OrderRepository"]
