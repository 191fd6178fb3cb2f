"""In-memory compensation discount ledger."""

import asyncio
from dataclasses import dataclass
from datetime import datetime

from hotdel_refund_ms.features.orders.domain.entities import utc_now
from hotdel_refund_ms.features.refunds.application.ports import DiscountLedgerPort
from hotdel_refund_ms.shared.core.logging import get_logger

logger = get_logger(__name__)


@dataclass(frozen=True)
class DiscountGrant:
    """A discount owed to a hotel on its next order."""

    hotel_id: str
    percent: int
    order_id: str
    granted_at: datetime


class InMemoryDiscountLedger(DiscountLedgerPort):
    """
    Ledger of granted compensation discounts.

    One grant per cancelled order; a repeated grant for the same order is
    accepted without adding a second entry.
    """

    def __init__(self) -> None:
        self._grants: dict[str, DiscountGrant] = {}
        self._lock = asyncio.Lock()

    async def grant(self, hotel_id: str, percent: int, order_id: str) -> bool:
        if not 0 < percent <= 100:
            logger.warning("discount_rejected", order_id=order_id, percent=percent)
            return False

        async with self._lock:
            if order_id not in self._grants:
                self._grants[order_id] = DiscountGrant(
                    hotel_id=hotel_id,
                    percent=percent,
                    order_id=order_id,
                    granted_at=utc_now(),
                )

        logger.info("discount_granted", hotel_id=hotel_id, order_id=order_id, percent=percent)
        return True

    def grants_for(self, hotel_id: str) -> list[DiscountGrant]:
        """All grants held by ``hotel_id``, oldest first."""
        return sorted(
            (g for g in self._grants.values() if g.hotel_id == hotel_id),
            key=lambda g: g.granted_at,
        )
