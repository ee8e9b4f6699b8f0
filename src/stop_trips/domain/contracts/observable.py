"""Protocol for observable values."""

from collections.abc import AsyncIterator, Callable
from typing import Protocol, TypeVar

T = TypeVar("T")


class ObservableValue(Protocol[T]):
    """A value that can be read at any time and observed for changes."""

    @property
    def value(self) -> T:
        """Return the latest published value."""
        ...

    def subscribe(self, listener: Callable[[T], None]) -> Callable[[], None]:
        """Call `listener` with every new value.

        Args:
            listener: Callback invoked synchronously after each update.

        Returns:
            A callable that removes the subscription.
        """
        ...

    def stream(self) -> AsyncIterator[T]:
        """Iterate over the current value followed by every later one."""
        ...
