"""Shared kernel: settings, logging, exceptions, persistence and HTTP glue."""
