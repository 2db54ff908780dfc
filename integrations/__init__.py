"""Market data integrations."""
