"""Side-effect ports (interfaces) - Adapter Pattern.

Everything behind these ports runs after the cancellation is committed and
is best-effort: a failure is reported, never rolled back.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from decimal import Decimal

from hotdel_refund_ms.features.orders.domain.entities import Order
from hotdel_refund_ms.features.refunds.domain.entities import RefundDecision
from hotdel_refund_ms.features.refunds.domain.enums import NotificationTemplate


@dataclass
class RefundResult:
    """Result from a refund operation."""

    success: bool
    refund_id: str | None = None
    error_message: str | None = None


class NotificationPort(ABC):
    """
    Dispatches customer notifications.

    Implementations:
    - HttpNotificationDispatcher (marketplace notification service)
    - LoggingNotificationDispatcher (development)
    """

    @abstractmethod
    async def send(
        self,
        template_id: NotificationTemplate,
        order: Order,
        decision: RefundDecision,
    ) -> bool:
        """Send a notification. Returns True if it was accepted for delivery."""
        pass


class RefundGatewayPort(ABC):
    """Issues money back to the original payment method."""

    @property
    @abstractmethod
    def provider_name(self) -> str:
        """Get the provider name."""
        pass

    @abstractmethod
    async def issue_refund(self, order: Order, amount: Decimal) -> RefundResult:
        """Refund ``amount`` of ``order``'s settled payment."""
        pass


class DiscountLedgerPort(ABC):
    """Records compensation discounts granted to hotels."""

    @abstractmethod
    async def grant(self, hotel_id: str, percent: int, order_id: str) -> bool:
        """Grant ``percent`` off the hotel's next order. Returns True on success."""
        pass
