"""Day use cases."""
