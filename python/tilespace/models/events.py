"""Minimal push-notification channel used by sessions, searches and players."""

from __future__ import annotations

from typing import Callable, Generic, TypeVar

T = TypeVar("T")


class Subject(Generic[T]):
    """Holds callbacks and pushes each emitted value to all of them in order."""

    def __init__(self) -> None:
        self._callbacks: list[Callable[[T], None]] = []

    def subscribe(self, callback: Callable[[T], None]) -> Callable[[], None]:
        """Register *callback*; call the returned function to unsubscribe."""
        self._callbacks.append(callback)

        def unsubscribe() -> None:
            if callback in self._callbacks:
                self._callbacks.remove(callback)

        return unsubscribe

    def emit(self, value: T) -> None:
        for callback in list(self._callbacks):
            callback(value)

    def clear(self) -> None:
        self._callbacks.clear()

    def __len__(self) -> int:
        return len(self._callbacks)
