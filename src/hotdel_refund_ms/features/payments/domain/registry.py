"""Allow-lists of the mock payment gateway.

The gateway never talks to a card network: acceptance is decided purely by
membership in these lists.
"""

from collections.abc import Iterable
from dataclasses import dataclass
from typing import Any

from hotdel_refund_ms.features.payments.domain.entities import (
    CardCredential,
    NetbankingCredential,
    UpiCredential,
)
from hotdel_refund_ms.features.payments.domain.enums import GatewayMethod
from hotdel_refund_ms.shared.domain.exceptions import UnknownBankError


@dataclass(frozen=True)
class Bank:
    """A bank offered for net banking, with its single demo login."""

    id: str
    name: str
    user_id: str
    password: str


DEFAULT_CARDS = ("4111 1111 1111 1111", "4242 4242 4242 4242")

DEFAULT_UPI_HANDLES = ("success@paytm", "payment@gpay")

DEFAULT_BANKS = (
    Bank("sbi", "State Bank of India", "demo123", "pass123"),
    Bank("hdfc", "HDFC Bank", "hdfc456", "hdfc@123"),
    Bank("icici", "ICICI Bank", "icici789", "icici#456"),
    Bank("axis", "Axis Bank", "axis101", "axis$789"),
    Bank("kotak", "Kotak Mahindra Bank", "kotak202", "kotak&321"),
    Bank("pnb", "Punjab National Bank", "pnb303", "pnb*654"),
)

METHOD_DESCRIPTIONS = {
    GatewayMethod.CARD: ("Credit/Debit Card", "Visa, Mastercard, Rupay"),
    GatewayMethod.UPI: ("UPI", "Pay using UPI ID"),
    GatewayMethod.NETBANKING: ("Net Banking", "All major banks"),
}


class PaymentMethodRegistry:
    """Acceptance predicates over injectable allow-lists."""

    def __init__(
        self,
        cards: Iterable[str] = DEFAULT_CARDS,
        upi_handles: Iterable[str] = DEFAULT_UPI_HANDLES,
        banks: Iterable[Bank] = DEFAULT_BANKS,
    ) -> None:
        self._cards = frozenset("".join(c.split()) for c in cards)
        self._upi_handles = frozenset(h.strip().lower() for h in upi_handles)
        self._banks = {bank.id: bank for bank in banks}

    @classmethod
    def from_settings(cls, settings: Any) -> "PaymentMethodRegistry":
        return cls(
            cards=settings.mock_accepted_cards,
            upi_handles=settings.mock_accepted_upi_handles,
        )

    def bank(self, bank_id: str) -> Bank:
        try:
            return self._banks[bank_id]
        except KeyError:
            raise UnknownBankError(bank_id) from None

    def accepts_card(self, credential: CardCredential) -> bool:
        return credential.normalized_number in self._cards

    def accepts_upi(self, credential: UpiCredential) -> bool:
        return credential.normalized_handle in self._upi_handles

    def accepts_netbanking(self, credential: NetbankingCredential) -> bool:
        bank = self.bank(credential.bank_id)
        return credential.user_id == bank.user_id and credential.password == bank.password

    def describe(self) -> dict[str, Any]:
        """Methods and banks for display. Credentials are not exposed."""
        return {
            "methods": [
                {"id": method.value, "name": name, "description": description}
                for method, (name, description) in METHOD_DESCRIPTIONS.items()
            ],
            "banks": [{"id": b.id, "name": b.name} for b in self._banks.values()],
        }
