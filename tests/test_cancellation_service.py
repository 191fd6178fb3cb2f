import asyncio
from decimal import Decimal

import pytest

from hotdel_refund_ms.features.orders.domain import (
    ActingRole,
    ActorIdentity,
    OrderStatus,
    PaymentMethod,
    PaymentStatus,
    RefundStatus,
)
from hotdel_refund_ms.features.orders.infrastructure import (
    InMemoryOrderStore,
    OrderOwnershipAuthorizer,
)
from hotdel_refund_ms.features.refunds.application.ports import (
    NotificationPort,
    RefundGatewayPort,
    RefundResult,
)
from hotdel_refund_ms.features.refunds.application.use_cases import (
    CancellationService,
    EligibilityCheckService,
)
from hotdel_refund_ms.features.refunds.domain import (
    EligibilityReason,
    NotificationTemplate,
    RefundKind,
)
from hotdel_refund_ms.features.refunds.infrastructure.adapters import (
    InMemoryDiscountLedger,
    LoggingNotificationDispatcher,
    MockRefundGateway,
)
from hotdel_refund_ms.shared.domain.exceptions import (
    AlreadyCancelledError,
    ForbiddenError,
    InvalidRequestError,
    OrderNotFoundError,
)

from conftest import NOW


class RecordingNotifier(NotificationPort):
    def __init__(self) -> None:
        self.templates: list[NotificationTemplate] = []

    async def send(self, template_id, order, decision):  # type: ignore[override]
        self.templates.append(template_id)
        return True


class BrokenNotifier(NotificationPort):
    async def send(self, template_id, order, decision):  # type: ignore[override]
        raise RuntimeError("smtp relay unavailable")


class DecliningRefundGateway(RefundGatewayPort):
    @property
    def provider_name(self) -> str:
        return "declining"

    async def issue_refund(self, order, amount):  # type: ignore[override]
        return RefundResult(success=False, error_message="card network timeout")


class InterleavingStore(InMemoryOrderStore):
    """Yields to the event loop after every read so concurrent tasks interleave."""

    async def load(self, order_id):  # type: ignore[override]
        order = await super().load(order_id)
        await asyncio.sleep(0)
        return order


def build_service(store, notifier=None, refund_gateway=None, ledger=None):
    return CancellationService(
        store,
        OrderOwnershipAuthorizer(),
        notifier or RecordingNotifier(),
        refund_gateway or MockRefundGateway(),
        ledger or InMemoryDiscountLedger(),
        clock=lambda: NOW,
    )


@pytest.mark.asyncio
async def test_hotel_cancels_cod_order_within_window(make_order, hotel):
    store = InMemoryOrderStore([make_order(hours_ago=5)])
    notifier = RecordingNotifier()

    outcome = await build_service(store, notifier).cancel("ord_1", ActingRole.HOTEL, hotel)

    assert outcome.cancelled is True
    assert outcome.order.status is OrderStatus.CANCELLED
    assert outcome.order.cancelled_by is ActingRole.HOTEL
    assert outcome.order.cancelled_at == NOW
    assert outcome.order.refund_status is RefundStatus.NOT_APPLICABLE
    assert outcome.decision.refund_kind is RefundKind.NONE
    assert outcome.email_sent is True
    assert outcome.refund_issued is None
    assert outcome.discount_granted is None
    assert notifier.templates == [NotificationTemplate.COD_HOTEL_CANCELLED]

    stored = await store.load("ord_1")
    assert stored.status is OrderStatus.CANCELLED


@pytest.mark.asyncio
async def test_seller_cancels_paid_online_order(make_order, seller):
    order = make_order(
        hours_ago=40,
        payment_method=PaymentMethod.ONLINE,
        payment_status=PaymentStatus.PAID,
        payment_reference="pay_abc123",
    )
    store = InMemoryOrderStore([order])
    ledger = InMemoryDiscountLedger()
    notifier = RecordingNotifier()

    outcome = await build_service(store, notifier, ledger=ledger).cancel(
        "ord_1", ActingRole.SELLER, seller
    )

    assert outcome.decision.refund_kind is RefundKind.IMMEDIATE_REFUND
    assert outcome.decision.refund_amount == Decimal("1200.00")
    assert outcome.order.payment_status is PaymentStatus.REFUNDED
    assert outcome.order.refund_amount == Decimal("1200.00")
    assert outcome.order.refund_status is RefundStatus.PROCESSED
    assert outcome.order.refund_reference.startswith("mock_re_")
    assert outcome.order.compensation_discount_percent == 15
    assert outcome.refund_issued is True
    assert outcome.discount_granted is True
    assert [g.percent for g in ledger.grants_for("hotel_1")] == [15]
    assert notifier.templates == [NotificationTemplate.ONLINE_SELLER_CANCELLED]


@pytest.mark.asyncio
async def test_unpaid_online_order_has_nothing_to_refund(make_order, hotel):
    store = InMemoryOrderStore([make_order(hours_ago=2, payment_method=PaymentMethod.ONLINE)])

    outcome = await build_service(store).cancel("ord_1", ActingRole.HOTEL, hotel)

    assert outcome.decision.refund_kind is RefundKind.STANDARD_REFUND
    assert outcome.order.refund_status is RefundStatus.NOT_APPLICABLE
    assert outcome.order.refund_amount == Decimal("0")
    assert outcome.refund_issued is None


@pytest.mark.asyncio
async def test_hotel_after_window_leaves_order_untouched(make_order, hotel):
    order = make_order(hours_ago=30)
    store = InMemoryOrderStore([order])
    notifier = RecordingNotifier()

    outcome = await build_service(store, notifier).cancel("ord_1", ActingRole.HOTEL, hotel)

    assert outcome.cancelled is False
    assert outcome.decision.eligible is False
    assert outcome.decision.reason is EligibilityReason.AFTER_24_HOURS
    assert await store.load("ord_1") == order
    assert notifier.templates == [NotificationTemplate.COD_HOTEL_REJECTED]


@pytest.mark.asyncio
async def test_second_cancellation_is_rejected(make_order, hotel, seller):
    store = InMemoryOrderStore([make_order(hours_ago=1)])
    service = build_service(store)

    await service.cancel("ord_1", ActingRole.HOTEL, hotel)

    with pytest.raises(AlreadyCancelledError) as exc_info:
        await service.cancel("ord_1", ActingRole.SELLER, seller)

    assert "cancelled" in str(exc_info.value)
    stored = await store.load("ord_1")
    assert stored.cancelled_by is ActingRole.HOTEL


@pytest.mark.asyncio
async def test_fulfilled_order_cannot_be_cancelled(make_order, seller):
    store = InMemoryOrderStore([make_order(status=OrderStatus.FULFILLED)])

    with pytest.raises(AlreadyCancelledError) as exc_info:
        await build_service(store).cancel("ord_1", ActingRole.SELLER, seller)

    assert exc_info.value.status == "fulfilled"


@pytest.mark.parametrize(
    "actor, role",
    [
        (ActorIdentity(id="hotel_2", role="hotel"), ActingRole.HOTEL),
        (ActorIdentity(id="seller_9", role="seller"), ActingRole.SELLER),
        (ActorIdentity(id="seller_1", role="seller"), ActingRole.HOTEL),
        (ActorIdentity(id="hotel_1", role="hotel"), ActingRole.SELLER),
    ],
)
@pytest.mark.asyncio
async def test_non_owners_are_forbidden(make_order, actor, role):
    order = make_order(hours_ago=1)
    store = InMemoryOrderStore([order])

    with pytest.raises(ForbiddenError):
        await build_service(store).cancel("ord_1", role, actor)

    assert await store.load("ord_1") == order


@pytest.mark.asyncio
async def test_unknown_order(hotel):
    with pytest.raises(OrderNotFoundError):
        await build_service(InMemoryOrderStore()).cancel("missing", ActingRole.HOTEL, hotel)


@pytest.mark.asyncio
async def test_notification_failure_does_not_undo_cancellation(make_order, hotel):
    store = InMemoryOrderStore([make_order(hours_ago=1)])

    outcome = await build_service(store, BrokenNotifier()).cancel(
        "ord_1", ActingRole.HOTEL, hotel
    )

    assert outcome.cancelled is True
    assert outcome.email_sent is False
    assert (await store.load("ord_1")).status is OrderStatus.CANCELLED


@pytest.mark.asyncio
async def test_refund_failure_is_recorded_not_rolled_back(make_order, hotel):
    order = make_order(
        hours_ago=3,
        payment_method=PaymentMethod.ONLINE,
        payment_status=PaymentStatus.PAID,
        payment_reference="pay_abc123",
    )
    store = InMemoryOrderStore([order])

    outcome = await build_service(store, refund_gateway=DecliningRefundGateway()).cancel(
        "ord_1", ActingRole.HOTEL, hotel
    )

    assert outcome.refund_issued is False
    stored = await store.load("ord_1")
    assert stored.status is OrderStatus.CANCELLED
    assert stored.refund_status is RefundStatus.FAILED


@pytest.mark.asyncio
async def test_concurrent_cancellations_apply_once(make_order, hotel, seller):
    store = InterleavingStore([make_order(hours_ago=1)])
    ledger = InMemoryDiscountLedger()
    service = build_service(store, ledger=ledger)

    results = await asyncio.gather(
        service.cancel("ord_1", ActingRole.HOTEL, hotel),
        service.cancel("ord_1", ActingRole.SELLER, seller),
        return_exceptions=True,
    )

    outcomes = [r for r in results if not isinstance(r, Exception)]
    errors = [r for r in results if isinstance(r, Exception)]
    assert len(outcomes) == 1
    assert len(errors) == 1
    assert isinstance(errors[0], AlreadyCancelledError)

    stored = await store.load("ord_1")
    assert stored.cancelled_by is outcomes[0].order.cancelled_by


@pytest.mark.asyncio
async def test_logging_dispatcher_records_payload(make_order, seller):
    store = InMemoryOrderStore([make_order(hours_ago=5)])
    notifier = LoggingNotificationDispatcher()

    await build_service(store, notifier).cancel("ord_1", ActingRole.SELLER, seller)

    [payload] = notifier.sent
    assert payload["template"] == "cod_seller_cancelled"
    assert payload["recipient"]["email"] == "purchasing@grandhotel.example"
    assert payload["decision"]["discountPercent"] == 10


def build_checker(store):
    return EligibilityCheckService(store, OrderOwnershipAuthorizer(), clock=lambda: NOW)


@pytest.mark.asyncio
async def test_check_reports_without_mutating(make_order, hotel):
    order = make_order(hours_ago=23.5)
    store = InMemoryOrderStore([order])

    check = await build_checker(store).check("ord_1", hotel)

    assert check.eligible is True
    assert check.acting_role is ActingRole.HOTEL
    assert check.reason is EligibilityReason.WITHIN_24_HOURS
    assert check.hours_since_order == pytest.approx(23.5)
    assert await store.load("ord_1") == order


@pytest.mark.asyncio
async def test_check_on_cancelled_order(make_order, seller):
    store = InMemoryOrderStore(
        [make_order(status=OrderStatus.CANCELLED, cancelled_by=ActingRole.HOTEL)]
    )

    check = await build_checker(store).check("ord_1", seller)

    assert check.eligible is False
    assert check.reason is EligibilityReason.ORDER_NOT_PLACED


@pytest.mark.asyncio
async def test_check_rejects_roles_that_cannot_cancel(make_order):
    store = InMemoryOrderStore([make_order()])

    with pytest.raises(InvalidRequestError):
        await build_checker(store).check("ord_1", ActorIdentity(id="admin_1", role="admin"))
