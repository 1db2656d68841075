"""Listener that publishes speed and velocity readings to sensor entities."""

from __future__ import annotations

import logging

from .entities import Entity, Listener

_LOGGER = logging.getLogger(__name__)


class LD2415HSensor(Listener):
    """Publishes readings to its sensors whenever they change."""

    def __init__(self, speed_sensor: Entity | None = None, velocity_sensor: Entity | None = None) -> None:
        self.speed_sensor = speed_sensor
        self.velocity_sensor = velocity_sensor

    def dump_config(self) -> list[str]:
        """Log the configured sensors and return the logged lines."""
        lines = ["LD2415H Sensor:"]
        for kind, sensor in (("Speed", self.speed_sensor), ("Velocity", self.velocity_sensor)):
            if sensor is not None:
                lines.append(f"  {kind} '{sensor.name}'")
        for line in lines:
            _LOGGER.info("%s", line)
        return lines

    def on_speed(self, speed: float) -> None:
        """Publish ``speed`` if it differs from the last published value."""
        _publish_if_changed(self.speed_sensor, speed)

    def on_velocity(self, velocity: float) -> None:
        """Publish ``velocity`` if it differs from the last published value."""
        _publish_if_changed(self.velocity_sensor, velocity)


def _publish_if_changed(sensor: Entity | None, value: float) -> None:
    if sensor is not None and sensor.state != value:
        sensor.publish_state(value)