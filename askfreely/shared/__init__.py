"""Shared utilities and logging. No business logic."""
