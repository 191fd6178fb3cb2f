"""Payment infrastructure module."""

from hotdel_refund_ms.features.payments.infrastructure.gateway_factory import (
    create_simulator,
    get_payment_registry,
    get_payment_signer,
)

__all__ = ["create_simulator", "get_payment_registry", "get_payment_signer"]
