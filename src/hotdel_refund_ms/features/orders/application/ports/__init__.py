"""Order application ports."""

from hotdel_refund_ms.features.orders.application.ports.authorization_port import (
    AuthorizationPort,
)
from hotdel_refund_ms.features.orders.application.ports.order_store_port import (
    OrderStorePort,
)

__all__ = ["AuthorizationPort", "OrderStorePort"]
