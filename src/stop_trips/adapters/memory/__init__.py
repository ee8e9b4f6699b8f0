"""In-memory adapters."""

from stop_trips.adapters.memory.history_repository import AccessRecord, InMemoryHistoryRepository

__all__ = ["AccessRecord", "InMemoryHistoryRepository"]
