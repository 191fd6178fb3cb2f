"""Payments feature: mock payment gateway and settlement."""
