"""Refund presentation layer."""

from hotdel_refund_ms.features.refunds.presentation.router import router

__all__ = ["router"]
