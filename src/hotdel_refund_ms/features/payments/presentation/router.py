"""Mock payment gateway API router."""

from collections.abc import Callable
from datetime import datetime
from typing import Annotated

from fastapi import APIRouter, Depends

from hotdel_refund_ms.features.orders.application.ports import (
    AuthorizationPort,
    OrderStorePort,
)
from hotdel_refund_ms.features.orders.domain.entities import ActorIdentity
from hotdel_refund_ms.features.payments.application.use_cases import (
    PaymentVerificationService,
)
from hotdel_refund_ms.features.payments.domain.registry import PaymentMethodRegistry
from hotdel_refund_ms.features.payments.domain.simulator import MockPaymentSigner
from hotdel_refund_ms.features.payments.infrastructure import (
    get_payment_registry,
    get_payment_signer,
)
from hotdel_refund_ms.features.payments.presentation.dto import (
    PaymentMethodsResponse,
    PaymentStatusResponse,
    PaymentVerifyRequest,
    PaymentVerifyResponse,
)
from hotdel_refund_ms.shared.core.settings import get_settings
from hotdel_refund_ms.shared.presentation.auth import get_current_actor
from hotdel_refund_ms.shared.presentation.dependencies import (
    get_authorizer,
    get_clock,
    get_order_store,
)

router = APIRouter()


def get_verification_service(
    orders: Annotated[OrderStorePort, Depends(get_order_store)],
    authorizer: Annotated[AuthorizationPort, Depends(get_authorizer)],
    signer: Annotated[MockPaymentSigner, Depends(get_payment_signer)],
    clock: Annotated[Callable[[], datetime], Depends(get_clock)],
) -> PaymentVerificationService:
    """Dependency for getting the verification use case."""
    return PaymentVerificationService(
        orders,
        authorizer,
        signer,
        verify_signature=get_settings().mock_verify_signature,
        clock=clock,
    )


@router.post(
    "/verify",
    response_model=PaymentVerifyResponse,
    summary="Verify a mock gateway payment",
    description="""
    Settle an order from a successful mock gateway attempt.

    - Only the hotel that placed the order may settle it
    - Replaying the same payment id is a no-op (`alreadySettled`)
    - A different payment id for a settled order is rejected with 409
    """,
)
async def verify_payment(
    request: PaymentVerifyRequest,
    actor: Annotated[ActorIdentity, Depends(get_current_actor)],
    service: Annotated[PaymentVerificationService, Depends(get_verification_service)],
) -> PaymentVerifyResponse:
    """Verify a payment and mark the order paid."""
    outcome = await service.verify(
        request.order_id,
        request.payment_id,
        request.method,
        request.signature,
        actor,
    )
    return PaymentVerifyResponse(
        message=(
            "Payment already verified"
            if outcome.already_settled
            else "Payment verified successfully"
        ),
        payment_id=outcome.payment_id,
        already_settled=outcome.already_settled,
        order=outcome.order.summary(),
    )


@router.get(
    "/status/{order_id}",
    response_model=PaymentStatusResponse,
    summary="Get payment status of an order",
)
async def get_payment_status(
    order_id: str,
    actor: Annotated[ActorIdentity, Depends(get_current_actor)],
    service: Annotated[PaymentVerificationService, Depends(get_verification_service)],
) -> PaymentStatusResponse:
    """Get the payment status of an order."""
    view = await service.status(order_id, actor)
    return PaymentStatusResponse(
        order_id=view.order_id,
        payment_status=view.payment_status.value,
        payment_id=view.payment_id,
        paid_at=view.paid_at,
        amount=str(view.amount),
    )


@router.get(
    "/methods",
    response_model=PaymentMethodsResponse,
    summary="List mock gateway methods",
)
async def list_payment_methods(
    registry: Annotated[PaymentMethodRegistry, Depends(get_payment_registry)],
) -> PaymentMethodsResponse:
    """Methods and banks offered by the mock gateway."""
    return PaymentMethodsResponse(**registry.describe())
