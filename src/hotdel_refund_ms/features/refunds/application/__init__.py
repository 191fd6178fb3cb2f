"""Refund application layer."""
