"""LD2415H radar component: parses sensor output and pushes configuration changes."""

from __future__ import annotations

import logging
from collections.abc import Callable
from enum import Enum, auto

from .entities import Entity, Listener
from .protocol import (
    NEGOTIATION_MODE_LABELS,
    SAMPLE_RATE_LABELS,
    TRACKING_MODE_LABELS,
    UNIT_OF_MEASURE_LABELS,
    LineAssembler,
    NegotiationMode,
    TrackingMode,
    UnitOfMeasure,
    anti_vib_comp_command,
    get_config_command,
    label_for,
    mode_rate_uom_command,
    negotiation_mode_from_int,
    parse_config,
    parse_firmware,
    parse_speed,
    relay_duration_speed_command,
    speed_angle_sense_command,
    tracking_mode_from_int,
    unit_of_measure_from_int,
)

_LOGGER = logging.getLogger(__name__)

# Config parameter -> (component attribute, number entity attribute)
_NUMBER_PARAMS = {
    "1": ("min_speed_threshold", "min_speed_threshold_number"),
    "2": ("compensation_angle", "compensation_angle_number"),
    "3": ("sensitivity", "sensitivity_number"),
    "7": ("vibration_correction", "vibration_correction_number"),
    "8": ("relay_trigger_duration", "relay_trigger_duration_number"),
    "9": ("relay_trigger_speed", "relay_trigger_speed_number"),
}


class _Update(Enum):
    SPEED_ANGLE_SENSE = auto()
    MODE_RATE_UOM = auto()
    ANTI_VIB_COMP = auto()
    RELAY_DURATION_SPEED = auto()
    CONFIG = auto()


def _byte(value: float) -> int:
    number = int(value)
    if not 0 <= number <= 0xFF:
        raise ValueError(f"value {value!r} does not fit in one byte")
    return number


def _publish(entity: Entity | None, state: object) -> None:
    if entity is not None:
        entity.publish_state(state)


class LD2415H:
    """Drives an LD2415H sensor through a byte-writing callable."""

    def __init__(
        self,
        write: Callable[[bytes], object],
        *,
        speed_sensor: Entity | None = None,
        velocity_sensor: Entity | None = None,
    ) -> None:
        self._write = write
        self.speed_sensor = speed_sensor
        self.velocity_sensor = velocity_sensor

        self.min_speed_threshold_number: Entity | None = None
        self.compensation_angle_number: Entity | None = None
        self.sensitivity_number: Entity | None = None
        self.vibration_correction_number: Entity | None = None
        self.relay_trigger_duration_number: Entity | None = None
        self.relay_trigger_speed_number: Entity | None = None
        self.sample_rate_selector: Entity | None = None
        self.tracking_mode_selector: Entity | None = None

        self.min_speed_threshold = 1
        self.compensation_angle = 0
        self.sensitivity = 10
        self.tracking_mode = TrackingMode.APPROACHING_AND_RETREATING
        self.sample_rate = 1
        self.unit_of_measure = UnitOfMeasure.KPH
        self.vibration_correction = 18
        self.relay_trigger_duration = 0
        self.relay_trigger_speed = 1
        self.negotiation_mode = NegotiationMode.CUSTOM_AGREEMENT

        self.firmware = ""
        self.speed = 0.0
        self.velocity = 0.0

        self._pending = {
            _Update.SPEED_ANGLE_SENSE,
            _Update.MODE_RATE_UOM,
            _Update.ANTI_VIB_COMP,
            _Update.RELAY_DURATION_SPEED,
        }
        self._assembler = LineAssembler()
        self._received = bytearray()
        self._listeners: list[Listener] = []

    def setup(self) -> None:
        """Request the sensor's configuration on the next loop."""
        self._pending.add(_Update.CONFIG)

    def dump_config(self) -> list[str]:
        """Log the current configuration and return the logged lines."""
        lines = [
            "LD2415H:",
            f"  Firmware: {self.firmware}",
            f"  Minimum Speed Threshold: {self.min_speed_threshold} KPH",
            f"  Compensation Angle: {self.compensation_angle}",
            f"  Sensitivity: {self.sensitivity}",
            f"  Tracking Mode: {label_for(TRACKING_MODE_LABELS, self.tracking_mode)}",
            f"  Sampling Rate: {label_for(SAMPLE_RATE_LABELS, self.sample_rate)}",
            f"  Unit of Measure: {label_for(UNIT_OF_MEASURE_LABELS, self.unit_of_measure)}",
            f"  Vibration Correction: {self.vibration_correction}",
            f"  Relay Trigger Duration: {self.relay_trigger_duration}",
            f"  Relay Trigger Speed: {self.relay_trigger_speed} KPH",
            f"  Negotiation Mode: {label_for(NEGOTIATION_MODE_LABELS, self.negotiation_mode)}",
        ]
        for line in lines:
            _LOGGER.info("%s", line)
        return lines

    def register_listener(self, listener: Listener) -> None:
        """Add a listener for speed and velocity readings."""
        self._listeners.append(listener)

    def feed(self, data: bytes) -> None:
        """Queue bytes received from the sensor for the next loop."""
        self._received.extend(data)

    def loop(self) -> None:
        """Process received bytes, then send at most one pending command."""
        data = bytes(self._received)
        self._received.clear()
        for byte in data:
            line = self._assembler.feed(byte)
            if line is not None:
                _LOGGER.debug("Response Received:: %s", line)
                self.handle_line(line)

        for update in _Update:
            if update in self._pending:
                self._pending.discard(update)
                _LOGGER.debug("Issuing %s", update.name)
                self._issue_command(self._command_for(update))
                return

    def handle_line(self, line: str) -> None:
        """Dispatch one complete response line from the sensor."""
        kind = line[:1]
        if kind == "N":
            try:
                self.firmware = parse_firmware(line)
            except ValueError as error:
                _LOGGER.error("%s", error)
        elif kind == "X":
            for key, value in parse_config(line):
                self._apply_config_param(key, value)
            _LOGGER.debug("Configuration received:")
            self.dump_config()
        elif kind == "V":
            try:
                speed, velocity = parse_speed(line)
            except ValueError as error:
                _LOGGER.error("%s", error)
                return
            self._publish_speed(speed, velocity)
        else:
            _LOGGER.error("Unknown Response: %s", line)

    def set_min_speed_threshold(self, speed: float) -> None:
        self.min_speed_threshold = _byte(speed)
        self._pending.add(_Update.SPEED_ANGLE_SENSE)

    def set_compensation_angle(self, angle: float) -> None:
        self.compensation_angle = _byte(angle)
        self._pending.add(_Update.SPEED_ANGLE_SENSE)

    def set_sensitivity(self, sensitivity: float) -> None:
        self.sensitivity = _byte(sensitivity)
        self._pending.add(_Update.SPEED_ANGLE_SENSE)

    def set_tracking_mode(self, mode: str | int) -> None:
        """Set the tracking mode by label or raw value; unknown labels raise KeyError."""
        if isinstance(mode, str):
            self.set_tracking_mode(TRACKING_MODE_LABELS[mode])
            _publish(self.tracking_mode_selector, mode)
            return
        self.tracking_mode = tracking_mode_from_int(_byte(mode))
        self._pending.add(_Update.MODE_RATE_UOM)

    def set_sample_rate(self, rate: str | int) -> None:
        """Set the sample rate by label or raw value; unknown labels raise KeyError."""
        if isinstance(rate, str):
            self.set_sample_rate(SAMPLE_RATE_LABELS[rate])
            _publish(self.sample_rate_selector, rate)
            return
        _LOGGER.debug("set_sample_rate: %s", int(rate))
        self.sample_rate = _byte(rate)
        self._pending.add(_Update.MODE_RATE_UOM)

    def set_vibration_correction(self, correction: float) -> None:
        self.vibration_correction = _byte(correction)
        self._pending.add(_Update.ANTI_VIB_COMP)

    def set_relay_trigger_duration(self, duration: float) -> None:
        self.relay_trigger_duration = _byte(duration)
        self._pending.add(_Update.RELAY_DURATION_SPEED)

    def set_relay_trigger_speed(self, speed: float) -> None:
        self.relay_trigger_speed = _byte(speed)
        self._pending.add(_Update.RELAY_DURATION_SPEED)

    def _command_for(self, update: _Update) -> bytes:
        if update is _Update.SPEED_ANGLE_SENSE:
            return speed_angle_sense_command(self.min_speed_threshold, self.compensation_angle, self.sensitivity)
        if update is _Update.MODE_RATE_UOM:
            return mode_rate_uom_command(self.tracking_mode, self.sample_rate)
        if update is _Update.ANTI_VIB_COMP:
            return anti_vib_comp_command(self.vibration_correction)
        if update is _Update.RELAY_DURATION_SPEED:
            return relay_duration_speed_command(self.relay_trigger_duration, self.relay_trigger_speed)
        return get_config_command()

    def _issue_command(self, command: bytes) -> None:
        _LOGGER.debug("  %s", command.hex(" "))
        # The response buffer may hold a partial line; start fresh.
        self._assembler.clear()
        self._write(command)

    def _publish_speed(self, speed: float, velocity: float) -> None:
        self.speed = speed
        self.velocity = velocity
        _LOGGER.debug("Speed updated: %f KPH", speed)
        for listener in self._listeners:
            listener.on_speed(speed)
            listener.on_velocity(velocity)
        _publish(self.speed_sensor, speed)
        _publish(self.velocity_sensor, velocity)

    def _apply_config_param(self, key: str, value: int) -> None:
        if key in _NUMBER_PARAMS:
            attribute, number = _NUMBER_PARAMS[key]
            setattr(self, attribute, value)
            _publish(getattr(self, number), value)
        elif key == "4":
            self.tracking_mode = tracking_mode_from_int(value)
            _publish(self.tracking_mode_selector, label_for(TRACKING_MODE_LABELS, self.tracking_mode))
        elif key == "5":
            self.sample_rate = value
            _publish(self.sample_rate_selector, label_for(SAMPLE_RATE_LABELS, self.sample_rate))
        elif key == "6":
            self.unit_of_measure = unit_of_measure_from_int(value)
        elif key == "0":
            self.negotiation_mode = negotiation_mode_from_int(value)
        else:
            _LOGGER.debug("Unknown Parameter X%s:%02x", key, value)