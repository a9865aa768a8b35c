"""Current-value observable used by the state store and caches."""

import logging
from collections.abc import Callable
from typing import Generic, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")


class Subject(Generic[T]):
    """Holds one value and pushes every published value to subscribers.

    New subscribers are called synchronously with the current value. The held value is handed out as is,
    so collections returned by ``value`` are the live backing store and must not be mutated by callers.
    """

    def __init__(self, initial: T) -> None:
        """Initialize with the value replayed to the first subscribers.

        Args:
            initial: Starting value.

        """
        self._value = initial
        self._subscribers: list[Callable[[T], None]] = []

    @property
    def value(self) -> T:
        """Current value."""
        return self._value

    def publish(self, value: T) -> None:
        """Replace the current value and notify every subscriber."""
        self._value = value
        for callback in list(self._subscribers):
            self._notify(callback, value)

    def subscribe(self, callback: Callable[[T], None]) -> Callable[[], None]:
        """Register a callback, call it with the current value, and return an unsubscribe handle."""
        self._subscribers.append(callback)
        self._notify(callback, self._value)

        def unsubscribe() -> None:
            if callback in self._subscribers:
                self._subscribers.remove(callback)

        return unsubscribe

    @staticmethod
    def _notify(callback: Callable[[T], None], value: T) -> None:
        try:
            callback(value)
        except Exception:
            logger.exception("Subscriber failed")
