"""Contracts (protocols) for in-process components."""

from stop_trips.domain.contracts.observable import ObservableValue

__all__ = ["ObservableValue"]
