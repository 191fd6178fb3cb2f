"""Payment DTOs for API requests/responses."""

from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from hotdel_refund_ms.features.payments.domain.enums import GatewayMethod


class PaymentVerifyRequest(BaseModel):
    """Successful attempt reported by the mock gateway."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        json_schema_extra={
            "example": {
                "orderId": "665f1c2e9b1e8a0012a4b7c1",
                "paymentId": "pay_4f1d2c3b4a5968778695a4b3",
                "method": "card",
                "signature": "9c1f...e2",
            }
        },
    )

    order_id: str = Field(..., min_length=1, description="Order being paid")
    payment_id: str = Field(..., min_length=1, description="Gateway payment id")
    method: GatewayMethod = Field(..., description="Method used at the gateway")
    signature: str | None = Field(None, description="Gateway HMAC signature")

    @field_validator("method", mode="before")
    @classmethod
    def parse_method(cls, v: Any) -> Any:
        """Parse method to lowercase."""
        if isinstance(v, str):
            return v.strip().lower()
        return v


class PaymentVerifyResponse(BaseModel):
    """Verification result."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    success: bool = True
    message: str
    payment_id: str
    already_settled: bool
    order: dict[str, Any]


class PaymentStatusResponse(BaseModel):
    """Payment state of an order."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    success: bool = True
    order_id: str
    payment_status: str
    payment_id: str | None = None
    paid_at: datetime | None = None
    amount: str


class PaymentMethodsResponse(BaseModel):
    """Methods and banks offered by the mock gateway."""

    success: bool = True
    methods: list[dict[str, str]]
    banks: list[dict[str, str]]
