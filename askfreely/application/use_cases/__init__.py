"""Use cases (one class per operation)."""
