"""Request-scoped models and static reference data."""
