"""Select entities that forward user choices to the LD2415H component."""

from __future__ import annotations

from .component import LD2415H
from .entities import Entity
from .protocol import SAMPLE_RATE_LABELS, TRACKING_MODE_LABELS


class SampleRateSelect(Entity):
    """Chooses the sensor's sampling rate by label."""

    def __init__(self, parent: LD2415H, name: str = "Sample Rate") -> None:
        super().__init__(name)
        self.parent = parent
        parent.sample_rate_selector = self

    @property
    def options(self) -> list[str]:
        """Labels this select accepts."""
        return list(SAMPLE_RATE_LABELS)

    def control(self, value: str) -> None:
        """Publish ``value`` and apply it; unknown labels raise KeyError."""
        self.publish_state(value)
        self.parent.set_sample_rate(self.state)


class TrackingModeSelect(Entity):
    """Chooses the sensor's tracking mode by label."""

    def __init__(self, parent: LD2415H, name: str = "Tracking Mode") -> None:
        super().__init__(name)
        self.parent = parent
        parent.tracking_mode_selector = self

    @property
    def options(self) -> list[str]:
        """Labels this select accepts."""
        return list(TRACKING_MODE_LABELS)

    def control(self, value: str) -> None:
        """Publish ``value`` and apply it; unknown labels raise KeyError."""
        self.publish_state(value)
        self.parent.set_tracking_mode(self.state)