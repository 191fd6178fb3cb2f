"""Shared presentation layer."""

from hotdel_refund_ms.shared.presentation.auth import get_current_actor
from hotdel_refund_ms.shared.presentation.exception_handlers import (
    register_exception_handlers,
)

__all__ = ["get_current_actor", "register_exception_handlers"]
