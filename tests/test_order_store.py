from decimal import Decimal

import pytest

from hotdel_refund_ms.features.orders.domain import (
    ActingRole,
    ActorIdentity,
    OrderStatus,
    PaymentStatus,
    RefundStatus,
)
from hotdel_refund_ms.features.orders.infrastructure import (
    InMemoryOrderStore,
    OrderOwnershipAuthorizer,
)


def test_order_requires_positive_total(make_order):
    with pytest.raises(ValueError):
        make_order(total_amount=Decimal("0"))


def test_cancelled_by_is_set_iff_cancelled(make_order):
    with pytest.raises(ValueError):
        make_order(status=OrderStatus.CANCELLED)
    with pytest.raises(ValueError):
        make_order(cancelled_by=ActingRole.HOTEL)


def test_placed_at_is_immutable(make_order, now):
    order = make_order()

    with pytest.raises(ValueError):
        order.with_changes(placed_at=now)
    assert order.with_changes(placed_at=order.placed_at) == order


def test_seller_ids(make_order):
    assert make_order().seller_ids == {"seller_1", "seller_2"}


@pytest.mark.asyncio
async def test_compare_and_set_status(make_order):
    store = InMemoryOrderStore()
    await store.add(make_order())

    updated = await store.compare_and_set_status(
        "ord_1",
        expected=OrderStatus.PLACED,
        new=OrderStatus.CANCELLED,
        fields={"cancelled_by": ActingRole.SELLER},
    )
    assert updated.status is OrderStatus.CANCELLED

    again = await store.compare_and_set_status(
        "ord_1",
        expected=OrderStatus.PLACED,
        new=OrderStatus.CANCELLED,
        fields={"cancelled_by": ActingRole.HOTEL},
    )
    assert again is None
    assert (await store.load("ord_1")).cancelled_by is ActingRole.SELLER


@pytest.mark.asyncio
async def test_payment_compare_and_set_requires_placed_order(make_order):
    store = InMemoryOrderStore(
        [make_order(status=OrderStatus.CANCELLED, cancelled_by=ActingRole.HOTEL)]
    )

    result = await store.compare_and_set_payment_status(
        "ord_1", expected=PaymentStatus.PENDING, new=PaymentStatus.PAID
    )

    assert result is None


@pytest.mark.asyncio
async def test_record_refund(make_order):
    store = InMemoryOrderStore([make_order()])

    updated = await store.record_refund("ord_1", RefundStatus.PROCESSED, "mock_re_1")

    assert updated.refund_status is RefundStatus.PROCESSED
    assert updated.refund_reference == "mock_re_1"
    assert await store.record_refund("missing", RefundStatus.FAILED) is None


@pytest.mark.parametrize(
    "actor, role, allowed",
    [
        (ActorIdentity("hotel_1", "hotel"), ActingRole.HOTEL, True),
        (ActorIdentity("hotel_2", "hotel"), ActingRole.HOTEL, False),
        (ActorIdentity("seller_1", "seller"), ActingRole.SELLER, True),
        (ActorIdentity("seller_2", "seller"), ActingRole.SELLER, True),
        (ActorIdentity("seller_3", "seller"), ActingRole.SELLER, False),
        (ActorIdentity("hotel_1", "seller"), ActingRole.HOTEL, False),
    ],
)
def test_ownership_authorizer(make_order, actor, role, allowed):
    assert OrderOwnershipAuthorizer().owns_order(actor, make_order(), role) is allowed
