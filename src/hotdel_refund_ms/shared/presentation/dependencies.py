"""Shared FastAPI dependencies: order store, authorization and clock."""

from collections.abc import AsyncGenerator, Callable
from datetime import datetime
from functools import lru_cache

from hotdel_refund_ms.features.orders.application.ports import (
    AuthorizationPort,
    OrderStorePort,
)
from hotdel_refund_ms.features.orders.domain.entities import utc_now
from hotdel_refund_ms.features.orders.infrastructure import (
    InMemoryOrderStore,
    OrderOwnershipAuthorizer,
    OrderRepository,
)
from hotdel_refund_ms.shared.core.settings import get_settings
from hotdel_refund_ms.shared.infrastructure.database import session_scope


@lru_cache
def get_memory_order_store() -> InMemoryOrderStore:
    """Process-wide in-memory store used when ``ORDER_STORE=memory``."""
    return InMemoryOrderStore()


async def get_order_store() -> AsyncGenerator[OrderStorePort, None]:
    """Dependency for getting the configured order store."""
    settings = get_settings()

    match settings.order_store:
        case "memory":
            yield get_memory_order_store()
        case _:
            async with session_scope() as session:
                yield OrderRepository(session)


def get_authorizer() -> AuthorizationPort:
    """Dependency for getting the order authorizer."""
    return OrderOwnershipAuthorizer()


def get_clock() -> Callable[[], datetime]:
    """Dependency for the canonical clock."""
    return utc_now
