"""Payment use case - Verify a mock gateway payment."""

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
    PaymentMethod,
    PaymentStatus,
)
from hotdel_refund_ms.features.payments.domain.entities import PaymentAttempt
from hotdel_refund_ms.features.payments.domain.enums import GatewayMethod
from hotdel_refund_ms.features.payments.domain.simulator import (
    MockPaymentSigner,
    Reporter,
)
from hotdel_refund_ms.shared.core.logging import get_logger
from hotdel_refund_ms.shared.domain.exceptions import (
    ConflictingPaymentError,
    ForbiddenError,
    InvalidPaymentSignatureError,
    OrderNotFoundError,
    OrderNotPayableError,
)

logger = get_logger(__name__)


@dataclass
class VerificationOutcome:
    """Result of a verification; ``already_settled`` marks an idempotent replay."""

    order: Order
    payment_id: str
    already_settled: bool = False


@dataclass
class PaymentStatusView:
    """Payment state of one order."""

    order_id: str
    payment_status: PaymentStatus
    payment_id: str | None
    paid_at: datetime | None
    amount: Decimal


class PaymentVerificationService:
    """
    Use case for settling an order from a successful gateway attempt.

    An order is settled at most once. Replaying the same payment id is a
    no-op success; a different payment id for a settled order is a conflict.
    """

    def __init__(
        self,
        orders: OrderStorePort,
        authorizer: AuthorizationPort,
        signer: MockPaymentSigner,
        verify_signature: bool = True,
        clock: Callable[[], datetime] = utc_now,
    ) -> None:
        self._orders = orders
        self._authorizer = authorizer
        self._signer = signer
        self._verify_signature = verify_signature
        self._clock = clock

    async def verify(
        self,
        order_id: str,
        payment_id: str,
        method: GatewayMethod,
        signature: str | None,
        actor: ActorIdentity,
    ) -> VerificationOutcome:
        """
        Verify a payment claimed by the placing hotel.

        1. Load the order and check the caller placed it
        2. Check the gateway signature when enabled
        3. Settle with a compare-and-set on the payment status
        """
        order = await self._load_owned(order_id, actor)

        if self._verify_signature and not self._signer.verify(
            order_id, payment_id, signature or ""
        ):
            logger.warning("payment_signature_rejected", order_id=order_id, payment_id=payment_id)
            raise InvalidPaymentSignatureError("signature does not match payment")

        replay = self._settled_outcome(order, payment_id)
        if replay is not None:
            return replay

        settled = await self._orders.compare_and_set_payment_status(
            order_id,
            expected=PaymentStatus.PENDING,
            new=PaymentStatus.PAID,
            fields={
                "payment_reference": payment_id,
                "payment_signature": signature,
                "paid_at": self._clock(),
                "payment_method": PaymentMethod.ONLINE,
            },
        )
        if settled is None:
            # Lost a race with another settlement or a cancellation
            current = await self._orders.load(order_id)
            if current is None:
                raise OrderNotFoundError(order_id)
            replay = self._settled_outcome(current, payment_id)
            if replay is not None:
                return replay
            raise OrderNotPayableError(order_id, current.status.value)

        logger.info(
            "payment_verified",
            order_id=order_id,
            payment_id=payment_id,
            method=method.value,
            amount=str(settled.total_amount),
        )
        return VerificationOutcome(order=settled, payment_id=payment_id)

    async def status(self, order_id: str, actor: ActorIdentity) -> PaymentStatusView:
        order = await self._load_owned(order_id, actor)
        return PaymentStatusView(
            order_id=order.id,
            payment_status=order.payment_status,
            payment_id=order.payment_reference,
            paid_at=order.paid_at,
            amount=order.total_amount,
        )

    def reporter(self, actor: ActorIdentity) -> Reporter:
        """Success reporter that settles simulator attempts on behalf of ``actor``."""

        async def report(attempt: PaymentAttempt) -> VerificationOutcome:
            return await self.verify(
                attempt.order_id,
                attempt.reference_id or "",
                attempt.method,
                attempt.signature,
                actor,
            )

        return report

    async def _load_owned(self, order_id: str, actor: ActorIdentity) -> Order:
        order = await self._orders.load(order_id)
        if order is None:
            raise OrderNotFoundError(order_id)
        if not self._authorizer.owns_order(actor, order, ActingRole.HOTEL):
            raise ForbiddenError(order_id, ActingRole.HOTEL.value)
        return order

    @staticmethod
    def _settled_outcome(order: Order, payment_id: str) -> VerificationOutcome | None:
        """Idempotency rule; None means the order still awaits settlement."""
        if order.payment_reference or order.payment_status is not PaymentStatus.PENDING:
            if order.payment_reference == payment_id:
                return VerificationOutcome(
                    order=order, payment_id=payment_id, already_settled=True
                )
            raise ConflictingPaymentError(order.id, order.payment_reference or "unknown")

        if order.status.is_terminal:
            raise OrderNotPayableError(order.id, order.status.value)
        return None
