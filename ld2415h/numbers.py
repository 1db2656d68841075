"""Number entities that forward user changes to the LD2415H component."""

from __future__ import annotations

from collections.abc import Callable

from .component import LD2415H
from .entities import Entity


class ParentedNumber(Entity):
    """A number entity whose changes are applied to its parent component."""

    def __init__(self, parent: LD2415H, setter: Callable[[float], None], name: str = "") -> None:
        super().__init__(name)
        self.parent = parent
        self._setter = setter

    def control(self, value: float) -> None:
        """Publish ``value`` and pass it on to the parent component."""
        self.publish_state(value)
        self._setter(value)


class MinSpeedThresholdNumber(ParentedNumber):
    """Minimum speed the sensor reports, in km/h."""

    def __init__(self, parent: LD2415H, name: str = "Minimum Speed Threshold") -> None:
        super().__init__(parent, parent.set_min_speed_threshold, name)
        parent.min_speed_threshold_number = self


class CompensationAngleNumber(ParentedNumber):
    """Angle compensation applied by the sensor."""

    def __init__(self, parent: LD2415H, name: str = "Compensation Angle") -> None:
        super().__init__(parent, parent.set_compensation_angle, name)
        parent.compensation_angle_number = self


class SensitivityNumber(ParentedNumber):
    """Detection sensitivity of the sensor."""

    def __init__(self, parent: LD2415H, name: str = "Sensitivity") -> None:
        super().__init__(parent, parent.set_sensitivity, name)
        parent.sensitivity_number = self


class VibrationCorrectionNumber(ParentedNumber):
    """Anti-vibration compensation of the sensor."""

    def __init__(self, parent: LD2415H, name: str = "Vibration Correction") -> None:
        super().__init__(parent, parent.set_vibration_correction, name)
        parent.vibration_correction_number = self


class RelayTriggerDurationNumber(ParentedNumber):
    """How long the relay stays triggered."""

    def __init__(self, parent: LD2415H, name: str = "Relay Trigger Duration") -> None:
        super().__init__(parent, parent.set_relay_trigger_duration, name)
        parent.relay_trigger_duration_number = self


class RelayTriggerSpeedNumber(ParentedNumber):
    """Speed at which the relay is triggered, in km/h."""

    def __init__(self, parent: LD2415H, name: str = "Relay Trigger Speed") -> None:
        super().__init__(parent, parent.set_relay_trigger_speed, name)
        parent.relay_trigger_speed_number = self