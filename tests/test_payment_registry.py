import pytest

from hotdel_refund_ms.features.payments.domain import (
    CardCredential,
    NetbankingCredential,
    PaymentMethodRegistry,
    UpiCredential,
)
from hotdel_refund_ms.shared.domain.exceptions import UnknownBankError


def card(number: str) -> CardCredential:
    return CardCredential(number=number, expiry="12/29", cvv="123", holder_name="Asha Rao")


@pytest.mark.parametrize(
    "number",
    ["4111 1111 1111 1111", "4111111111111111", "4242424242424242", " 4242 4242 4242 4242 "],
)
def test_accepted_cards_ignore_whitespace(number):
    assert PaymentMethodRegistry().accepts_card(card(number)) is True


@pytest.mark.parametrize("number", ["4111 1111 1111 1112", "5555 5555 5555 4444", "4111"])
def test_other_cards_are_declined(number):
    assert PaymentMethodRegistry().accepts_card(card(number)) is False


@pytest.mark.parametrize("handle", ["success@paytm", "SUCCESS@PAYTM", "  payment@gpay ", "Payment@GPay"])
def test_accepted_upi_handles_are_case_insensitive(handle):
    assert PaymentMethodRegistry().accepts_upi(UpiCredential(handle)) is True


@pytest.mark.parametrize("handle", ["fail@paytm", "success@gpay", "success"])
def test_other_upi_handles_are_declined(handle):
    assert PaymentMethodRegistry().accepts_upi(UpiCredential(handle)) is False


@pytest.mark.parametrize(
    "bank_id, user_id, password",
    [
        ("sbi", "demo123", "pass123"),
        ("hdfc", "hdfc456", "hdfc@123"),
        ("icici", "icici789", "icici#456"),
        ("axis", "axis101", "axis$789"),
        ("kotak", "kotak202", "kotak&321"),
        ("pnb", "pnb303", "pnb*654"),
    ],
)
def test_each_bank_accepts_its_demo_login(bank_id, user_id, password):
    credential = NetbankingCredential(bank_id, user_id, password)

    assert PaymentMethodRegistry().accepts_netbanking(credential) is True


@pytest.mark.parametrize(
    "bank_id, user_id, password",
    [
        ("sbi", "demo123", "wrong"),
        ("sbi", "DEMO123", "pass123"),
        ("hdfc", "demo123", "pass123"),
        ("pnb", "pnb303", "pnb*654 "),
    ],
)
def test_netbanking_requires_exact_match_for_that_bank(bank_id, user_id, password):
    credential = NetbankingCredential(bank_id, user_id, password)

    assert PaymentMethodRegistry().accepts_netbanking(credential) is False


def test_unknown_bank():
    with pytest.raises(UnknownBankError):
        PaymentMethodRegistry().accepts_netbanking(NetbankingCredential("yesbank", "u", "p"))


def test_allow_lists_are_injectable():
    registry = PaymentMethodRegistry(cards=["5555 5555 5555 4444"], upi_handles=["qa@upi"])

    assert registry.accepts_card(card("5555555555554444")) is True
    assert registry.accepts_card(card("4111 1111 1111 1111")) is False
    assert registry.accepts_upi(UpiCredential("QA@upi")) is True


def test_describe_hides_credentials():
    description = PaymentMethodRegistry().describe()

    assert [m["id"] for m in description["methods"]] == ["card", "upi", "netbanking"]
    assert [b["id"] for b in description["banks"]] == ["sbi", "hdfc", "icici", "axis", "kotak", "pnb"]
    assert all(set(b) == {"id", "name"} for b in description["banks"])
