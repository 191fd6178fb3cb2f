import jwt
import pytest
from fastapi.testclient import TestClient

from hotdel_refund_ms.app import create_app
from hotdel_refund_ms.features.orders.domain import PaymentMethod
from hotdel_refund_ms.features.orders.infrastructure import InMemoryOrderStore
from hotdel_refund_ms.features.payments.infrastructure import get_payment_signer
from hotdel_refund_ms.features.refunds.infrastructure import (
    get_discount_ledger,
    get_notifier,
    get_refund_gateway,
)
from hotdel_refund_ms.features.refunds.infrastructure.adapters import (
    InMemoryDiscountLedger,
    LoggingNotificationDispatcher,
    MockRefundGateway,
)
from hotdel_refund_ms.shared.core.settings import get_settings
from hotdel_refund_ms.shared.presentation.dependencies import get_clock, get_order_store

from conftest import NOW


def token(sub: str, role: str) -> str:
    settings = get_settings()
    return jwt.encode({"sub": sub, "role": role}, settings.jwt_secret, algorithm=settings.jwt_algorithm)


def auth(sub: str = "hotel_1", role: str = "hotel") -> dict[str, str]:
    return {"Authorization": f"Bearer {token(sub, role)}"}


@pytest.fixture
def store(make_order):
    return InMemoryOrderStore(
        [
            make_order(hours_ago=5),
            make_order(hours_ago=30, id="ord_late"),
            make_order(hours_ago=2, id="ord_online", payment_method=PaymentMethod.ONLINE),
        ]
    )


@pytest.fixture
def client(store):
    app = create_app()
    app.dependency_overrides[get_order_store] = lambda: store
    app.dependency_overrides[get_clock] = lambda: (lambda: NOW)
    app.dependency_overrides[get_notifier] = LoggingNotificationDispatcher
    app.dependency_overrides[get_refund_gateway] = MockRefundGateway
    app.dependency_overrides[get_discount_ledger] = InMemoryDiscountLedger
    return TestClient(app)


def test_health(client):
    assert client.get("/health").json()["status"] == "healthy"
    assert client.get("/").json()["status"] == "running"


def test_policy_is_public(client):
    response = client.get("/refund/policy")

    assert response.status_code == 200
    policy = response.json()["policy"]
    assert policy["generalTerms"]["supportContact"] == get_settings().support_contact
    assert policy["online"]["sellerCancellation"]["discountPercent"] == 15


def test_check_eligibility(client):
    response = client.get("/refund/check/ord_1", headers=auth())

    assert response.status_code == 200
    body = response.json()
    assert body["eligible"] is True
    assert body["actingRole"] == "hotel"
    assert body["reason"] == "within_24_hours"
    assert body["hoursSinceOrder"] == pytest.approx(5)
    assert body["order"]["status"] == "placed"


def test_hotel_cancellation_then_repeat(client):
    response = client.post("/refund/cancel/hotel/ord_1", headers=auth())

    assert response.status_code == 200
    body = response.json()
    assert body["success"] is True
    assert body["order"]["status"] == "cancelled"
    assert body["order"]["cancelledBy"] == "hotel"
    assert body["decision"]["refundKind"] == "none"
    assert body["emailSent"] is True

    repeat = client.post("/refund/cancel/hotel/ord_1", headers=auth())
    assert repeat.status_code == 409
    assert repeat.json()["success"] is False


def test_hotel_cancellation_after_window_is_a_normal_result(client):
    response = client.post("/refund/cancel/hotel/ord_late", headers=auth())

    assert response.status_code == 200
    body = response.json()
    assert body["success"] is False
    assert body["eligible"] is False
    assert body["reason"] == "after_24_hours"
    assert body["hoursSinceOrder"] == pytest.approx(30)
    assert body["order"] is None


def test_seller_cancellation_grants_discount(client):
    response = client.post("/refund/cancel/seller/ord_1", headers=auth("seller_1", "seller"))

    assert response.status_code == 200
    body = response.json()
    assert body["decision"]["refundKind"] == "compensation_credit"
    assert body["decision"]["discountPercent"] == 10
    assert body["discountGranted"] is True
    assert body["order"]["compensationDiscountPercent"] == 10


def test_missing_and_invalid_tokens(client):
    assert client.post("/refund/cancel/hotel/ord_1").status_code == 401

    bad = client.post(
        "/refund/cancel/hotel/ord_1",
        headers={"Authorization": "Bearer not-a-jwt"},
    )
    assert bad.status_code == 401
    assert bad.json()["success"] is False


def test_wrong_role_is_forbidden(client):
    response = client.post("/refund/cancel/hotel/ord_1", headers=auth("seller_1", "seller"))

    assert response.status_code == 403


def test_unknown_order(client):
    assert client.post("/refund/cancel/hotel/nope", headers=auth()).status_code == 404


def test_verify_payment_is_idempotent(client):
    signature = get_payment_signer().sign("ord_online", "pay_42")
    body = {"orderId": "ord_online", "paymentId": "pay_42", "method": "upi", "signature": signature}

    first = client.post("/payment/mock/verify", json=body, headers=auth())
    assert first.status_code == 200
    assert first.json()["alreadySettled"] is False
    assert first.json()["order"]["paymentStatus"] == "paid"

    replay = client.post("/payment/mock/verify", json=body, headers=auth())
    assert replay.status_code == 200
    assert replay.json()["alreadySettled"] is True

    other = dict(body, paymentId="pay_43", signature=get_payment_signer().sign("ord_online", "pay_43"))
    assert client.post("/payment/mock/verify", json=other, headers=auth()).status_code == 409

    status = client.get("/payment/mock/status/ord_online", headers=auth())
    assert status.json()["paymentStatus"] == "paid"
    assert status.json()["paymentId"] == "pay_42"
    assert status.json()["amount"] == "1200.00"


def test_verify_payment_rejects_bad_signature(client):
    body = {"orderId": "ord_online", "paymentId": "pay_42", "method": "card", "signature": "sig_1"}

    response = client.post("/payment/mock/verify", json=body, headers=auth())

    assert response.status_code == 401


def test_verify_payment_validates_body(client):
    body = {"orderId": "ord_online", "paymentId": "pay_42", "method": "wallet"}

    assert client.post("/payment/mock/verify", json=body, headers=auth()).status_code == 422


def test_payment_methods(client):
    body = client.get("/payment/mock/methods").json()

    assert len(body["methods"]) == 3
    assert len(body["banks"]) == 6
