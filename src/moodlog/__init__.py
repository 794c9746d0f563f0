"""moodlog - emotion journaling policy and consistency engine."""

__version__ = "0.1.0"
