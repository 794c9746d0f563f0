"""User use cases."""
