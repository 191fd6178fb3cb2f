"""Authorization port - decides whether an actor may act on an order."""

from abc import ABC, abstractmethod

from hotdel_refund_ms.features.orders.domain.entities import ActorIdentity, Order
from hotdel_refund_ms.features.orders.domain.enums import ActingRole


class AuthorizationPort(ABC):
    """Ownership check consumed by cancellation and payment verification."""

    @abstractmethod
    def owns_order(self, actor: ActorIdentity, order: Order, role: ActingRole) -> bool:
        """
        Return True if ``actor`` owns or operates ``order`` as ``role``.

        A hotel must be the order's placer; a seller must sell at least one
        item in the order.
        """
        pass
