"""Payment presentation layer."""

from hotdel_refund_ms.features.payments.presentation.router import router

__all__ = ["router"]
