"""Orders feature: the order record as seen by refunds and payments."""
