"""Notification dispatchers."""

from collections import deque
from typing import Any

import httpx

from hotdel_refund_ms.features.orders.domain.entities import Order
from hotdel_refund_ms.features.refunds.application.ports import NotificationPort
from hotdel_refund_ms.features.refunds.domain.entities import RefundDecision
from hotdel_refund_ms.features.refunds.domain.enums import NotificationTemplate
from hotdel_refund_ms.shared.core.logging import get_logger
from hotdel_refund_ms.shared.core.settings import get_settings

logger = get_logger(__name__)


def build_payload(
    template_id: NotificationTemplate,
    order: Order,
    decision: RefundDecision,
) -> dict[str, Any]:
    """Build the notification request body."""
    return {
        "template": template_id.value,
        "recipient": {
            "email": order.billing_email,
            "name": order.billing_name,
            "hotelId": order.hotel_id,
        },
        "order": order.summary(),
        "decision": decision.to_dict(),
    }


class HttpNotificationDispatcher(NotificationPort):
    """
    Posts notifications to the marketplace notification service.

    Delivery itself (templating, SMTP) is owned by that service.
    """

    def __init__(
        self,
        base_url: str | None = None,
        timeout: float | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        settings = get_settings()
        self._url = base_url or settings.notification_service_url
        self._timeout = timeout or settings.notification_timeout
        self._transport = transport

    async def send(
        self,
        template_id: NotificationTemplate,
        order: Order,
        decision: RefundDecision,
    ) -> bool:
        if not order.billing_email:
            logger.warning(
                "notification_skipped",
                order_id=order.id,
                template=template_id.value,
                reason="no billing email",
            )
            return False

        payload = build_payload(template_id, order, decision)

        try:
            async with httpx.AsyncClient(
                timeout=self._timeout, transport=self._transport
            ) as client:
                response = await client.post(
                    self._url,
                    json=payload,
                    headers={"Content-Type": "application/json"},
                )
        except httpx.TimeoutException:
            logger.warning("notification_timeout", order_id=order.id, url=self._url)
            return False
        except httpx.RequestError as e:
            logger.warning("notification_request_error", order_id=order.id, error=str(e))
            return False

        if response.is_success:
            logger.info(
                "notification_sent",
                order_id=order.id,
                template=template_id.value,
                status_code=response.status_code,
            )
            return True

        logger.warning(
            "notification_rejected",
            order_id=order.id,
            template=template_id.value,
            status_code=response.status_code,
            body=response.text[:200],
        )
        return False


class LoggingNotificationDispatcher(NotificationPort):
    """Writes notifications to the log instead of sending them (development).

    Only the most recent ``history_size`` payloads are kept in ``sent``.
    """

    def __init__(self, history_size: int = 100) -> None:
        self.sent: deque[dict[str, Any]] = deque(maxlen=history_size)

    async def send(
        self,
        template_id: NotificationTemplate,
        order: Order,
        decision: RefundDecision,
    ) -> bool:
        payload = build_payload(template_id, order, decision)
        self.sent.append(payload)
        logger.info(
            "notification_logged",
            order_id=order.id,
            template=template_id.value,
            recipient=order.billing_email,
        )
        return True
