"""Mock payment gateway domain."""

from hotdel_refund_ms.features.payments.domain.entities import (
    CardCredential,
    NetbankingCredential,
    PaymentAttempt,
    UpiCredential,
)
from hotdel_refund_ms.features.payments.domain.enums import (
    AttemptOutcome,
    GatewayEvent,
    GatewayMethod,
    GatewayState,
)
from hotdel_refund_ms.features.payments.domain.registry import (
    Bank,
    PaymentMethodRegistry,
)
from hotdel_refund_ms.features.payments.domain.simulator import (
    DECLINE_REASON,
    MockPaymentSigner,
    PaymentGatewaySimulator,
    transition,
)

__all__ = [
    "CardCredential",
    "NetbankingCredential",
    "PaymentAttempt",
    "UpiCredential",
    "AttemptOutcome",
    "GatewayEvent",
    "GatewayMethod",
    "GatewayState",
    "Bank",
    "PaymentMethodRegistry",
    "DECLINE_REASON",
    "MockPaymentSigner",
    "PaymentGatewaySimulator",
    "transition",
]
