"""Refund use case - Cancel order."""

from collections.abc import Callable
from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal

from hotdel_refund_ms.features.orders.application.ports import (
    AuthorizationPort,
    OrderStorePort,
)
from hotdel_refund_ms.features.orders.domain.entities import (
    ActorIdentity,
    Order,
    utc_now,
)
from hotdel_refund_ms.features.orders.domain.enums import (
    ActingRole,
    OrderStatus,
    PaymentMethod,
    PaymentStatus,
    RefundStatus,
)
from hotdel_refund_ms.features.refunds.application.ports import (
    DiscountLedgerPort,
    NotificationPort,
    RefundGatewayPort,
)
from hotdel_refund_ms.features.refunds.domain.entities import RefundDecision
from hotdel_refund_ms.features.refunds.domain.enums import NotificationTemplate
from hotdel_refund_ms.features.refunds.domain.resolver import RefundResolver
from hotdel_refund_ms.shared.core.logging import get_logger
from hotdel_refund_ms.shared.domain.exceptions import (
    AlreadyCancelledError,
    ForbiddenError,
    OrderNotFoundError,
)

logger = get_logger(__name__)

CANCELLED_TEMPLATES = {
    (PaymentMethod.CASH_ON_DELIVERY, ActingRole.HOTEL): NotificationTemplate.COD_HOTEL_CANCELLED,
    (PaymentMethod.CASH_ON_DELIVERY, ActingRole.SELLER): NotificationTemplate.COD_SELLER_CANCELLED,
    (PaymentMethod.ONLINE, ActingRole.HOTEL): NotificationTemplate.ONLINE_HOTEL_CANCELLED,
    (PaymentMethod.ONLINE, ActingRole.SELLER): NotificationTemplate.ONLINE_SELLER_CANCELLED,
}

REJECTED_TEMPLATES = {
    PaymentMethod.CASH_ON_DELIVERY: NotificationTemplate.COD_HOTEL_REJECTED,
    PaymentMethod.ONLINE: NotificationTemplate.ONLINE_HOTEL_REJECTED,
}

CANCELLATION_REASONS = {
    ActingRole.HOTEL: "Cancelled by hotel within 24 hours",
    ActingRole.SELLER: "Cancelled by seller due to unforeseen circumstances",
}


@dataclass
class CancellationOutcome:
    """Result of a cancellation request.

    ``cancelled`` is False for the not-eligible path, in which case ``order``
    is the untouched snapshot. The side-effect flags are None when the
    effect did not apply to this order.
    """

    order: Order
    decision: RefundDecision
    cancelled: bool
    email_sent: bool = False
    refund_issued: bool | None = None
    discount_granted: bool | None = None


class CancellationService:
    """
    Use case for cancelling an order.

    Orchestrates permission checks, refund resolution, the atomic status
    change and the best-effort side effects that follow it.
    """

    def __init__(
        self,
        orders: OrderStorePort,
        authorizer: AuthorizationPort,
        notifier: NotificationPort,
        refund_gateway: RefundGatewayPort,
        discount_ledger: DiscountLedgerPort,
        resolver: RefundResolver | None = None,
        clock: Callable[[], datetime] = utc_now,
    ) -> None:
        self._orders = orders
        self._authorizer = authorizer
        self._notifier = notifier
        self._refund_gateway = refund_gateway
        self._discount_ledger = discount_ledger
        self._resolver = resolver or RefundResolver()
        self._clock = clock

    async def cancel(
        self,
        order_id: str,
        acting_role: ActingRole,
        actor: ActorIdentity,
    ) -> CancellationOutcome:
        """
        Cancel an order on behalf of ``actor`` acting as ``acting_role``.

        1. Load the order and reject if it is no longer placed
        2. Reject actors that do not own the order in the claimed role
        3. Resolve the refund decision
        4. Not eligible: return without mutating anything
        5. Eligible: compare-and-set to cancelled, then run side effects
        """
        order = await self._orders.load(order_id)
        if order is None:
            raise OrderNotFoundError(order_id)

        if order.status.is_terminal:
            raise AlreadyCancelledError(order_id, order.status.value)

        if not self._authorizer.owns_order(actor, order, acting_role):
            logger.warning(
                "cancellation_forbidden",
                order_id=order_id,
                actor_id=actor.id,
                role=acting_role.value,
            )
            raise ForbiddenError(order_id, acting_role.value)

        decision = self._resolver.resolve(order, acting_role, self._clock())

        if not decision.eligible:
            logger.info(
                "cancellation_not_eligible",
                order_id=order_id,
                role=acting_role.value,
                reason=decision.reason.value,
                hours_since_order=round(decision.hours_since_order, 3),
            )
            email_sent = await self._notify(
                REJECTED_TEMPLATES[order.payment_method], order, decision
            )
            return CancellationOutcome(
                order=order,
                decision=decision,
                cancelled=False,
                email_sent=email_sent,
            )

        cancelled = await self._orders.compare_and_set_status(
            order_id,
            expected=OrderStatus.PLACED,
            new=OrderStatus.CANCELLED,
            fields=self._cancellation_fields(order, acting_role, decision),
        )
        if cancelled is None:
            # Another request won the race
            current = await self._orders.load(order_id)
            if current is None:
                raise OrderNotFoundError(order_id)
            raise AlreadyCancelledError(order_id, current.status.value)

        logger.info(
            "order_cancelled",
            order_id=order_id,
            role=acting_role.value,
            refund_kind=decision.refund_kind.value,
            refund_amount=str(decision.refund_amount),
            discount_percent=decision.discount_percent,
        )

        outcome = CancellationOutcome(order=cancelled, decision=decision, cancelled=True)

        if cancelled.refund_status is RefundStatus.PENDING:
            outcome.refund_issued = await self._issue_refund(outcome, decision.refund_amount)

        if decision.discount_percent:
            outcome.discount_granted = await self._grant_discount(
                cancelled, decision.discount_percent
            )

        outcome.email_sent = await self._notify(
            CANCELLED_TEMPLATES[(cancelled.payment_method, acting_role)],
            outcome.order,
            decision,
        )
        return outcome

    def _cancellation_fields(
        self,
        order: Order,
        acting_role: ActingRole,
        decision: RefundDecision,
    ) -> dict:
        fields = {
            "cancelled_by": acting_role,
            "cancelled_at": self._clock(),
            "cancellation_reason": CANCELLATION_REASONS[acting_role],
            "compensation_discount_percent": decision.discount_percent,
        }

        # Only money that was actually collected goes back
        if decision.refund_kind.returns_money and order.is_paid:
            fields.update(
                payment_status=PaymentStatus.REFUNDED,
                refund_status=RefundStatus.PENDING,
                refund_amount=decision.refund_amount,
            )
        else:
            fields.update(
                refund_status=RefundStatus.NOT_APPLICABLE,
                refund_amount=Decimal("0"),
            )
        return fields

    async def _issue_refund(self, outcome: CancellationOutcome, amount: Decimal) -> bool:
        order = outcome.order
        try:
            result = await self._refund_gateway.issue_refund(order, amount)
        except Exception:
            logger.exception("refund_issue_error", order_id=order.id)
            result = None

        succeeded = bool(result and result.success)
        status = RefundStatus.PROCESSED if succeeded else RefundStatus.FAILED
        try:
            recorded = await self._orders.record_refund(
                order.id, status, result.refund_id if result else None
            )
        except Exception:
            logger.exception("refund_record_error", order_id=order.id)
            recorded = None

        if recorded is not None:
            outcome.order = recorded

        log = logger.info if succeeded else logger.warning
        log(
            "refund_issued" if succeeded else "refund_failed",
            order_id=order.id,
            provider=self._refund_gateway.provider_name,
            refund_id=result.refund_id if result else None,
            error=result.error_message if result else None,
        )
        return succeeded

    async def _grant_discount(self, order: Order, percent: int) -> bool:
        try:
            granted = await self._discount_ledger.grant(order.hotel_id, percent, order.id)
        except Exception:
            logger.exception("discount_grant_error", order_id=order.id)
            return False

        if not granted:
            logger.warning("discount_not_granted", order_id=order.id, percent=percent)
        return granted

    async def _notify(
        self,
        template: NotificationTemplate,
        order: Order,
        decision: RefundDecision,
    ) -> bool:
        try:
            sent = await self._notifier.send(template, order, decision)
        except Exception:
            logger.exception("notification_error", order_id=order.id, template=template.value)
            return False

        if not sent:
            logger.warning("notification_not_sent", order_id=order.id, template=template.value)
        return sent
