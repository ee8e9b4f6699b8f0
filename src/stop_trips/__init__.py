"""Browse a stop's trips of the day, one trip at a time."""

__version__ = "0.1.0"
