"""Observable value that notifies subscribers on change."""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import Any, Generic, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")

Subscriber = Callable[[Any], None]


class Observable(Generic[T]):
    """A mutable value with change notification.

    Subscribers are called synchronously with the new value whenever it
    changes. A subscriber raising an exception is logged and skipped; it never
    prevents the update or the remaining notifications.
    """

    def __init__(self, value: T | None = None, *, label: str | None = None) -> None:
        self._value = value
        self._label = label
        self._subscribers: list[Subscriber] = []

    @property
    def value(self) -> T | None:
        return self._value

    @property
    def label(self) -> str | None:
        return self._label

    def subscribe(self, callback: Subscriber) -> Callable[[], None]:
        """Register a callback; returns a function that unsubscribes it."""
        self._subscribers.append(callback)

        def unsubscribe() -> None:
            if callback in self._subscribers:
                self._subscribers.remove(callback)

        return unsubscribe

    def set(self, value: T | None) -> None:
        if value == self._value:
            return
        self._value = value
        for callback in list(self._subscribers):
            try:
                callback(value)
            except Exception as e:
                logger.error(f"Observable subscriber failed for {self._label or 'value'}: {e}")

    def set_numeric(self, value: Any) -> None:
        """Coerce ``value`` to a number and store it.

        Raises:
            ValueError: If the value is not numeric
        """
        if isinstance(value, bool):
            raise ValueError(f"Not a numeric value: {value!r}")
        if isinstance(value, (int, float)):
            self.set(value)  # type: ignore[arg-type]
            return
        text = str(value).strip()
        try:
            self.set(int(text))  # type: ignore[arg-type]
        except ValueError:
            self.set(float(text))  # type: ignore[arg-type]

    def __repr__(self) -> str:
        return f"Observable({self._label or ''}={self._value!r})"
