"""Observable values for the model layer.

A ``Property`` holds one value and notifies its listeners synchronously,
in registration order, whenever the value changes. Listeners receive
``(new_value, old_value)``.
"""

from __future__ import annotations

from typing import Callable, Generic, List, TypeVar

T = TypeVar("T")

Listener = Callable[[T, T], None]


class Property(Generic[T]):
    def __init__(self, value: T):
        self._initial = value
        self._value = value
        self._listeners: List[Listener] = []

    @property
    def value(self) -> T:
        return self._value

    @value.setter
    def value(self, value: T) -> None:
        self.set(value)

    def get(self) -> T:
        return self._value

    def set(self, value: T) -> None:
        if value == self._value and type(value) is type(self._value):
            return
        old = self._value
        self._value = value
        # Copy so listeners may unlink themselves while being notified.
        for listener in list(self._listeners):
            listener(value, old)

    def reset(self) -> None:
        self.set(self._initial)

    def link(self, listener: Listener) -> None:
        """Register ``listener`` and call it immediately with the current value."""
        self._listeners.append(listener)
        listener(self._value, None)

    def lazy_link(self, listener: Listener) -> None:
        """Register ``listener`` for future changes only."""
        self._listeners.append(listener)

    def unlink(self, listener: Listener) -> None:
        if listener in self._listeners:
            self._listeners.remove(listener)

    def has_listener(self, listener: Listener) -> bool:
        return listener in self._listeners

    def __repr__(self) -> str:
        return f"Property({self._value!r})"
