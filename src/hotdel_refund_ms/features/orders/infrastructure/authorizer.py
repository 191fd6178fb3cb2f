"""Order ownership authorizer."""

from hotdel_refund_ms.features.orders.application.ports import AuthorizationPort
from hotdel_refund_ms.features.orders.domain.entities import ActorIdentity, Order
from hotdel_refund_ms.features.orders.domain.enums import ActingRole


class OrderOwnershipAuthorizer(AuthorizationPort):
    """Authorize from the order record itself: placer hotel or item seller."""

    def owns_order(self, actor: ActorIdentity, order: Order, role: ActingRole) -> bool:
        if actor.role != role.value:
            return False

        match role:
            case ActingRole.HOTEL:
                return actor.id == order.hotel_id
            case ActingRole.SELLER:
                return actor.id in order.seller_ids
            case _:
                return False
