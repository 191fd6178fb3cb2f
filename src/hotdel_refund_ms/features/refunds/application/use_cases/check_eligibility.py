"""Refund use case - Check cancellation eligibility."""

from collections.abc import Callable
from dataclasses import dataclass
from datetime import datetime

from hotdel_refund_ms.features.orders.application.ports import (
    AuthorizationPort,
    OrderStorePort,
)
from hotdel_refund_ms.features.orders.domain.entities import (
    ActorIdentity,
    Order,
    utc_now,
)
from hotdel_refund_ms.features.orders.domain.enums import ActingRole, OrderStatus
from hotdel_refund_ms.features.refunds.domain.entities import RefundDecision
from hotdel_refund_ms.features.refunds.domain.enums import EligibilityReason
from hotdel_refund_ms.features.refunds.domain.resolver import RefundResolver
from hotdel_refund_ms.shared.domain.exceptions import (
    ForbiddenError,
    InvalidRequestError,
    OrderNotFoundError,
)


@dataclass
class EligibilityCheck:
    """Read-only answer to "could I cancel this order right now?"."""

    order: Order
    acting_role: ActingRole
    eligible: bool
    hours_since_order: float
    reason: EligibilityReason
    decision: RefundDecision


class EligibilityCheckService:
    """
    Use case for the cancellation pre-check.

    Evaluates the same rules as the cancellation itself without
    touching the order.
    """

    def __init__(
        self,
        orders: OrderStorePort,
        authorizer: AuthorizationPort,
        resolver: RefundResolver | None = None,
        clock: Callable[[], datetime] = utc_now,
    ) -> None:
        self._orders = orders
        self._authorizer = authorizer
        self._resolver = resolver or RefundResolver()
        self._clock = clock

    async def check(self, order_id: str, actor: ActorIdentity) -> EligibilityCheck:
        """Check eligibility for ``actor`` in the role carried by their token."""
        try:
            acting_role = ActingRole(actor.role)
        except ValueError:
            raise InvalidRequestError(
                f"Role '{actor.role}' cannot cancel orders"
            ) from None

        order = await self._orders.load(order_id)
        if order is None:
            raise OrderNotFoundError(order_id)

        if not self._authorizer.owns_order(actor, order, acting_role):
            raise ForbiddenError(order_id, acting_role.value)

        decision = self._resolver.resolve(order, acting_role, self._clock())

        if order.status is not OrderStatus.PLACED:
            return EligibilityCheck(
                order=order,
                acting_role=acting_role,
                eligible=False,
                hours_since_order=decision.hours_since_order,
                reason=EligibilityReason.ORDER_NOT_PLACED,
                decision=decision,
            )

        return EligibilityCheck(
            order=order,
            acting_role=acting_role,
            eligible=decision.eligible,
            hours_since_order=decision.hours_since_order,
            reason=decision.reason,
            decision=decision,
        )
