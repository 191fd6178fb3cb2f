"""Refund API router."""

from collections.abc import Callable
from datetime import datetime
from typing import Annotated

from fastapi import APIRouter, Depends

from hotdel_refund_ms.features.orders.application.ports import (
    AuthorizationPort,
    OrderStorePort,
)
from hotdel_refund_ms.features.orders.domain.entities import ActorIdentity
from hotdel_refund_ms.features.orders.domain.enums import ActingRole
from hotdel_refund_ms.features.refunds.application.ports import (
    DiscountLedgerPort,
    NotificationPort,
    RefundGatewayPort,
)
from hotdel_refund_ms.features.refunds.application.use_cases import (
    CancellationOutcome,
    CancellationService,
    EligibilityCheckService,
)
from hotdel_refund_ms.features.refunds.domain.policy import PolicyTable
from hotdel_refund_ms.features.refunds.infrastructure import (
    get_discount_ledger,
    get_notifier,
    get_refund_gateway,
)
from hotdel_refund_ms.features.refunds.presentation.dto import (
    CancellationResponse,
    EligibilityCheckResponse,
    PolicyResponse,
)
from hotdel_refund_ms.shared.core.settings import get_settings
from hotdel_refund_ms.shared.presentation.auth import get_current_actor
from hotdel_refund_ms.shared.presentation.dependencies import (
    get_authorizer,
    get_clock,
    get_order_store,
)

router = APIRouter()

SUCCESS_MESSAGES = {
    ActingRole.HOTEL: "Order cancelled successfully",
    ActingRole.SELLER: "Order cancelled by seller",
}

NOT_ELIGIBLE_MESSAGE = (
    "Cancellation window has expired. "
    "Orders can only be cancelled within 24 hours of placement."
)


def get_cancellation_service(
    orders: Annotated[OrderStorePort, Depends(get_order_store)],
    authorizer: Annotated[AuthorizationPort, Depends(get_authorizer)],
    notifier: Annotated[NotificationPort, Depends(get_notifier)],
    refund_gateway: Annotated[RefundGatewayPort, Depends(get_refund_gateway)],
    discount_ledger: Annotated[DiscountLedgerPort, Depends(get_discount_ledger)],
    clock: Annotated[Callable[[], datetime], Depends(get_clock)],
) -> CancellationService:
    """Dependency for getting the cancellation use case."""
    return CancellationService(
        orders,
        authorizer,
        notifier,
        refund_gateway,
        discount_ledger,
        clock=clock,
    )


def get_eligibility_service(
    orders: Annotated[OrderStorePort, Depends(get_order_store)],
    authorizer: Annotated[AuthorizationPort, Depends(get_authorizer)],
    clock: Annotated[Callable[[], datetime], Depends(get_clock)],
) -> EligibilityCheckService:
    """Dependency for getting the eligibility pre-check use case."""
    return EligibilityCheckService(orders, authorizer, clock=clock)


def to_response(outcome: CancellationOutcome, acting_role: ActingRole) -> CancellationResponse:
    decision = outcome.decision
    if not outcome.cancelled:
        return CancellationResponse(
            success=False,
            eligible=False,
            message=NOT_ELIGIBLE_MESSAGE,
            reason=decision.reason.value,
            hours_since_order=round(decision.hours_since_order, 3),
            decision=decision.to_dict(),
            email_sent=outcome.email_sent,
        )

    return CancellationResponse(
        success=True,
        eligible=True,
        message=SUCCESS_MESSAGES[acting_role],
        reason=decision.reason.value,
        hours_since_order=round(decision.hours_since_order, 3),
        order=outcome.order.summary(),
        decision=decision.to_dict(),
        email_sent=outcome.email_sent,
        refund_issued=outcome.refund_issued,
        discount_granted=outcome.discount_granted,
    )


@router.get(
    "/check/{order_id}",
    response_model=EligibilityCheckResponse,
    summary="Check cancellation eligibility",
    description="Evaluate whether the caller could cancel the order now, without cancelling it.",
)
async def check_eligibility(
    order_id: str,
    actor: Annotated[ActorIdentity, Depends(get_current_actor)],
    service: Annotated[EligibilityCheckService, Depends(get_eligibility_service)],
) -> EligibilityCheckResponse:
    """Check whether an order can still be cancelled."""
    check = await service.check(order_id, actor)
    return EligibilityCheckResponse(
        eligible=check.eligible,
        acting_role=check.acting_role.value,
        hours_since_order=round(check.hours_since_order, 3),
        reason=check.reason.value,
        order=check.order.summary(),
        policy=check.decision.to_dict(),
    )


@router.post(
    "/cancel/hotel/{order_id}",
    response_model=CancellationResponse,
    summary="Cancel an order as the placing hotel",
    description="""
    Hotels may cancel within 24 hours of placing the order.

    - Online orders that were paid are refunded in full
    - After the window the order is left untouched and `success` is false
    """,
)
async def cancel_as_hotel(
    order_id: str,
    actor: Annotated[ActorIdentity, Depends(get_current_actor)],
    service: Annotated[CancellationService, Depends(get_cancellation_service)],
) -> CancellationResponse:
    """Cancel an order on behalf of the hotel that placed it."""
    outcome = await service.cancel(order_id, ActingRole.HOTEL, actor)
    return to_response(outcome, ActingRole.HOTEL)


@router.post(
    "/cancel/seller/{order_id}",
    response_model=CancellationResponse,
    summary="Cancel an order as a seller",
    description="""
    Sellers of any item in the order may cancel it at any time.

    - Cash on delivery: the hotel receives a 10% discount on its next order
    - Online: full refund plus a 15% discount on the next order
    """,
)
async def cancel_as_seller(
    order_id: str,
    actor: Annotated[ActorIdentity, Depends(get_current_actor)],
    service: Annotated[CancellationService, Depends(get_cancellation_service)],
) -> CancellationResponse:
    """Cancel an order on behalf of one of its sellers."""
    outcome = await service.cancel(order_id, ActingRole.SELLER, actor)
    return to_response(outcome, ActingRole.SELLER)


@router.get(
    "/policy",
    response_model=PolicyResponse,
    summary="Get the refund policy",
)
async def get_refund_policy() -> PolicyResponse:
    """Public refund policy, rendered from the enforced policy table."""
    policy = PolicyTable().disclosure(get_settings().support_contact)
    return PolicyResponse(policy=policy)
