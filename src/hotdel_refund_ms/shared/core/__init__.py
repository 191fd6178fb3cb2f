"""Service configuration and logging."""
