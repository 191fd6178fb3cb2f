"""Mock payment gateway entities."""

from dataclasses import dataclass, fields
from decimal import Decimal

from hotdel_refund_ms.features.payments.domain.enums import AttemptOutcome, GatewayMethod


def _blank_fields(credential: object) -> list[str]:
    return [
        f.name
        for f in fields(credential)
        if not str(getattr(credential, f.name) or "").strip()
    ]


@dataclass(frozen=True)
class CardCredential:
    """Card details as typed into the gateway form."""

    number: str
    expiry: str
    cvv: str
    holder_name: str

    @property
    def normalized_number(self) -> str:
        return "".join(self.number.split())

    def missing_fields(self) -> list[str]:
        return _blank_fields(self)


@dataclass(frozen=True)
class UpiCredential:
    """UPI virtual payment address."""

    handle: str

    @property
    def normalized_handle(self) -> str:
        return self.handle.strip().lower()

    def missing_fields(self) -> list[str]:
        return _blank_fields(self)


@dataclass(frozen=True)
class NetbankingCredential:
    """Internet banking login for the selected bank."""

    bank_id: str
    user_id: str
    password: str

    def missing_fields(self) -> list[str]:
        return _blank_fields(self)


Credential = CardCredential | UpiCredential | NetbankingCredential


@dataclass(frozen=True)
class PaymentAttempt:
    """One submission through the mock gateway.

    ``reference_id`` and ``signature`` are set only when accepted,
    ``decline_reason`` only when declined.
    """

    order_id: str
    amount: Decimal
    method: GatewayMethod
    credential: Credential
    outcome: AttemptOutcome = AttemptOutcome.PENDING
    reference_id: str | None = None
    signature: str | None = None
    decline_reason: str | None = None
