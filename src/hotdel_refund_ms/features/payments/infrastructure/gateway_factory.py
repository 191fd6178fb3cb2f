"""Mock gateway factory - Dependency injection."""

import asyncio
from decimal import Decimal
from functools import lru_cache

from hotdel_refund_ms.features.payments.domain.registry import PaymentMethodRegistry
from hotdel_refund_ms.features.payments.domain.simulator import (
    MockPaymentSigner,
    PaymentGatewaySimulator,
    Reporter,
    Sleep,
)
from hotdel_refund_ms.shared.core.settings import get_settings


@lru_cache
def get_payment_registry() -> PaymentMethodRegistry:
    """Registry built from the configured allow-lists."""
    return PaymentMethodRegistry.from_settings(get_settings())


@lru_cache
def get_payment_signer() -> MockPaymentSigner:
    """Signer keyed with the configured mock gateway secret."""
    return MockPaymentSigner(get_settings().mock_signature_secret)


def create_simulator(
    order_id: str,
    amount: Decimal,
    on_success: Reporter | None = None,
    on_failure: Reporter | None = None,
    sleep: Sleep = asyncio.sleep,
) -> PaymentGatewaySimulator:
    """Open a checkout session with the configured delays."""
    settings = get_settings()
    return PaymentGatewaySimulator(
        order_id,
        amount,
        get_payment_registry(),
        get_payment_signer(),
        processing_delay=settings.gateway_processing_delay_seconds,
        confirmation_delay=settings.gateway_confirmation_delay_seconds,
        sleep=sleep,
        on_success=on_success,
        on_failure=on_failure,
    )
