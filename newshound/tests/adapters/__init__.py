"""Integration tests for Newshound adapters."""
