"""Minimal observer support for renderer-agnostic state machines."""

import logging
from abc import ABC, abstractmethod
from collections.abc import Callable
from typing import Generic, TypeVar

logger = logging.getLogger(__name__)

SnapshotT = TypeVar("SnapshotT")


class Observable(ABC, Generic[SnapshotT]):
    """Notifies subscribers with a snapshot after every applied change."""

    def __init__(self) -> None:
        self._listeners: list[Callable[[SnapshotT], None]] = []

    def subscribe(self, listener: Callable[[SnapshotT], None]) -> Callable[[], None]:
        """Register a listener and return a function that removes it."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    @abstractmethod
    def snapshot(self) -> SnapshotT:
        """Return the state passed to listeners."""

    def _notify(self) -> None:
        if not self._listeners:
            return
        snapshot = self.snapshot()
        for listener in list(self._listeners):
            try:
                listener(snapshot)
            except Exception:
                logger.exception("State listener failed")
