"""Published entities and listener interface used by the sensor component."""

from __future__ import annotations

from collections.abc import Callable
from typing import Any


class Entity:
    """A value that is published to subscribers, like a number, select or sensor."""

    def __init__(self, name: str = "") -> None:
        self.name = name
        self.state: Any = None
        self.has_state = False
        self._callbacks: list[Callable[[Any], None]] = []

    def publish_state(self, state: Any) -> None:
        """Store ``state`` and notify every subscriber."""
        self.state = state
        self.has_state = True
        for callback in self._callbacks:
            callback(state)

    def add_on_state_callback(self, callback: Callable[[Any], None]) -> None:
        """Call ``callback`` with the new state whenever one is published."""
        self._callbacks.append(callback)


class Listener:
    """Receives speed and velocity readings; both hooks do nothing by default."""

    def on_speed(self, speed: float) -> None:
        """Handle a new speed reading."""

    def on_velocity(self, velocity: float) -> None:
        """Handle a new velocity reading."""