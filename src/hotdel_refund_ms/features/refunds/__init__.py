"""Refunds feature: cancellation eligibility, refund resolution and application."""
