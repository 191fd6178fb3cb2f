"""Shared domain module - Exceptions and types."""

from hotdel_refund_ms.shared.domain.exceptions import (
    RefundServiceError,
    InvalidRequestError,
    InvalidTimestampError,
    IncompleteCredentialsError,
    UnknownBankError,
    InvalidTransitionError,
    AuthenticationError,
    ForbiddenError,
    OrderNotFoundError,
    AlreadyCancelledError,
    ConflictingPaymentError,
    OrderNotPayableError,
    InvalidPaymentSignatureError,
    PolicyLookupError,
)

__all__ = [
    "RefundServiceError",
    "InvalidRequestError",
    "InvalidTimestampError",
    "IncompleteCredentialsError",
    "UnknownBankError",
    "InvalidTransitionError",
    "AuthenticationError",
    "ForbiddenError",
    "OrderNotFoundError",
    "AlreadyCancelledError",
    "ConflictingPaymentError",
    "OrderNotPayableError",
    "InvalidPaymentSignatureError",
    "PolicyLookupError",
]
