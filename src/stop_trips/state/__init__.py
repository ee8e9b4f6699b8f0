"""State management."""

from stop_trips.state.store import StateStore

__all__ = ["StateStore"]
