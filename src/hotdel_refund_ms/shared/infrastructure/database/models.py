"""Order ORM model for SQLAlchemy."""

from decimal import Decimal
from typing import Any

from sqlalchemy import (
    Column,
    DateTime,
    Integer,
    Numeric,
    String,
    Text,
    func,
)
from sqlalchemy.dialects.postgresql import JSONB

from hotdel_refund_ms.shared.infrastructure.database.connection import Base
from hotdel_refund_ms.features.orders.domain.entities import Order, OrderItem
from hotdel_refund_ms.features.orders.domain.enums import (
    ActingRole,
    OrderStatus,
    PaymentMethod,
    PaymentStatus,
    RefundStatus,
)


class OrderModel(Base):
    """
    Order ORM model.

    Maps to the 'orders' table in the shared marketplace database. The
    marketplace API creates rows; this service only reads them and applies
    cancellation and settlement updates.
    """

    __tablename__ = "orders"

    id = Column("order_id", String(64), primary_key=True)
    hotel_id = Column("hotel_id", String(64), nullable=False, index=True)
    items = Column(JSONB, nullable=False, default=list)

    total_amount = Column(Numeric(12, 2), nullable=False)
    payment_method = Column(
        String(32),
        nullable=False,
        default=PaymentMethod.CASH_ON_DELIVERY.value,
    )

    # Set once by the marketplace at creation, stored in UTC
    placed_at = Column("ordered_at", DateTime(timezone=True), nullable=False)

    status = Column(String(20), nullable=False, default=OrderStatus.PLACED.value)

    # Cancellation
    cancelled_by = Column(String(20), nullable=True)
    cancelled_at = Column(DateTime(timezone=True), nullable=True)
    cancellation_reason = Column(Text, nullable=True)

    # Payment
    payment_status = Column(
        String(20),
        nullable=False,
        default=PaymentStatus.PENDING.value,
    )
    payment_reference = Column(String(255), nullable=True)
    payment_signature = Column(String(255), nullable=True)
    paid_at = Column(DateTime(timezone=True), nullable=True)

    # Refund
    refund_status = Column(
        String(20),
        nullable=False,
        default=RefundStatus.NOT_APPLICABLE.value,
    )
    refund_amount = Column(Numeric(12, 2), nullable=False, default=0)
    refund_reference = Column(String(255), nullable=True)
    compensation_discount_percent = Column(Integer, nullable=False, default=0)

    # Billing contact
    billing_email = Column(String(255), nullable=True)
    billing_name = Column(String(255), nullable=True)

    updated_at = Column(
        DateTime(timezone=True),
        server_default=func.now(),
        onupdate=func.now(),
        nullable=False,
    )

    def to_domain(self) -> Order:
        """Convert ORM model to domain entity."""
        return Order(
            id=self.id,
            hotel_id=self.hotel_id,
            items=tuple(
                OrderItem(
                    product_id=str(item.get("product_id", "")),
                    seller_id=str(item.get("seller_id", "")),
                    quantity=int(item.get("quantity", 1)),
                    price=Decimal(str(item.get("price", 0))),
                )
                for item in self.items or []
            ),
            total_amount=Decimal(str(self.total_amount)),
            payment_method=PaymentMethod(self.payment_method),
            placed_at=self.placed_at,
            status=OrderStatus(self.status),
            cancelled_by=ActingRole(self.cancelled_by) if self.cancelled_by else None,
            cancelled_at=self.cancelled_at,
            cancellation_reason=self.cancellation_reason,
            payment_status=PaymentStatus(self.payment_status),
            payment_reference=self.payment_reference,
            payment_signature=self.payment_signature,
            paid_at=self.paid_at,
            refund_status=RefundStatus(self.refund_status),
            refund_amount=Decimal(str(self.refund_amount or 0)),
            refund_reference=self.refund_reference,
            compensation_discount_percent=self.compensation_discount_percent or 0,
            billing_email=self.billing_email,
            billing_name=self.billing_name,
        )

    @classmethod
    def from_domain(cls, order: Order) -> "OrderModel":
        """Create ORM model from domain entity."""
        return cls(
            id=order.id,
            hotel_id=order.hotel_id,
            items=[
                {
                    "product_id": item.product_id,
                    "seller_id": item.seller_id,
                    "quantity": item.quantity,
                    "price": str(item.price),
                }
                for item in order.items
            ],
            placed_at=order.placed_at,
            **column_values(
                {
                    "total_amount": order.total_amount,
                    "payment_method": order.payment_method,
                    "status": order.status,
                    "cancelled_by": order.cancelled_by,
                    "cancelled_at": order.cancelled_at,
                    "cancellation_reason": order.cancellation_reason,
                    "payment_status": order.payment_status,
                    "payment_reference": order.payment_reference,
                    "payment_signature": order.payment_signature,
                    "paid_at": order.paid_at,
                    "refund_status": order.refund_status,
                    "refund_amount": order.refund_amount,
                    "refund_reference": order.refund_reference,
                    "compensation_discount_percent": order.compensation_discount_percent,
                    "billing_email": order.billing_email,
                    "billing_name": order.billing_name,
                }
            ),
        )


def column_values(fields: dict[str, Any]) -> dict[str, Any]:
    """Convert domain field values (enums) to plain column values."""
    return {
        name: value.value if hasattr(value, "value") else value
        for name, value in fields.items()
    }
