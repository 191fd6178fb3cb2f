"""Pytest bootstrap configuration.

Ensure mandatory environment variables are set before test collection
and module imports that depend on application settings.
"""
import os

os.environ.setdefault("JWT_SECRET", "test-jwt-secret")
os.environ.setdefault("ORDER_STORE", "memory")
os.environ.setdefault("NOTIFICATION_BACKEND", "log")
os.environ.setdefault("MOCK_SIGNATURE_SECRET", "test-mock-secret")

from datetime import datetime, timedelta, timezone
from decimal import Decimal

import pytest

from hotdel_refund_ms.features.orders.domain import (
    ActorIdentity,
    Order,
    OrderItem,
    PaymentMethod,
)

NOW = datetime(2025, 3, 10, 12, 0, tzinfo=timezone.utc)


@pytest.fixture
def now() -> datetime:
    return NOW


@pytest.fixture
def make_order():
    """Build an order placed ``hours_ago`` hours before NOW."""

    def _make(hours_ago: float = 1.0, **overrides) -> Order:
        fields = {
            "id": "ord_1",
            "hotel_id": "hotel_1",
            "total_amount": Decimal("1200.00"),
            "payment_method": PaymentMethod.CASH_ON_DELIVERY,
            "placed_at": NOW - timedelta(hours=hours_ago),
            "items": (
                OrderItem("prod_1", "seller_1", 2, Decimal("400.00")),
                OrderItem("prod_2", "seller_2", 1, Decimal("400.00")),
            ),
            "billing_email": "purchasing@grandhotel.example",
            "billing_name": "Grand Hotel",
        }
        fields.update(overrides)
        return Order(**fields)

    return _make


@pytest.fixture
def hotel() -> ActorIdentity:
    return ActorIdentity(id="hotel_1", role="hotel", email="purchasing@grandhotel.example")


@pytest.fixture
def seller() -> ActorIdentity:
    return ActorIdentity(id="seller_2", role="seller")
