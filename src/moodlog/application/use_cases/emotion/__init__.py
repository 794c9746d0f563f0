"""Emotion use cases."""
