"""Adapters binding the reconciliation engine to external systems."""
