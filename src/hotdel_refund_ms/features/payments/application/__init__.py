"""Payment application layer."""
