"""Permission adapters."""
