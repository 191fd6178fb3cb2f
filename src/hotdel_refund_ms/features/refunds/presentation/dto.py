"""Refund DTOs for API responses."""

from typing import Any

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Response model serialized with camelCase keys."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class EligibilityCheckResponse(CamelModel):
    """Cancellation pre-check for the calling actor."""

    success: bool = True
    eligible: bool
    acting_role: str
    hours_since_order: float
    reason: str
    order: dict[str, Any]
    policy: dict[str, Any]


class CancellationResponse(CamelModel):
    """Result of a cancellation request.

    The not-eligible variant carries ``success=False`` with the reason and
    elapsed hours; it is a normal result, not an error.
    """

    success: bool
    eligible: bool
    message: str
    reason: str
    hours_since_order: float
    order: dict[str, Any] | None = None
    decision: dict[str, Any] | None = None
    email_sent: bool = False
    refund_issued: bool | None = None
    discount_granted: bool | None = None


class PolicyResponse(CamelModel):
    """Public refund policy document."""

    success: bool = True
    policy: dict[str, Any]
