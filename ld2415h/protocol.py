"""Wire protocol of the LD2415H radar speed sensor: enums, commands and response parsing."""

from __future__ import annotations

import logging
import re
from collections.abc import Mapping
from enum import IntEnum

_LOGGER = logging.getLogger(__name__)

RESPONSE_BUFFER_SIZE = 64
FIRMWARE_MAX_LENGTH = 20

_HEADER = (0x43, 0x46)
_TRAILER = (0x0D, 0x0A)
_IGNORED_BYTES = frozenset({0x00, 0xFF, 0x0D})
_LINE_END = 0x0A

_FLOAT_PREFIX = re.compile(r"\s*([+-]?(?:\d+(?:\.\d*)?|\.\d+)(?:[eE][+-]?\d+)?)")
_HEX_PREFIX = re.compile(r"\s*([+-]?)(?:0[xX])?([0-9a-fA-F]+)")
_CONFIG_DELIMITERS = re.compile(r"[: ]+")


class NegotiationMode(IntEnum):
    CUSTOM_AGREEMENT = 0x01
    STANDARD_PROTOCOL = 0x02


class SampleRate(IntEnum):
    SAMPLE_RATE_22FPS = 0x00
    SAMPLE_RATE_11FPS = 0x01
    SAMPLE_RATE_6FPS = 0x02


class TrackingMode(IntEnum):
    APPROACHING_AND_RETREATING = 0x00
    APPROACHING = 0x01
    RETREATING = 0x02


class UnitOfMeasure(IntEnum):
    KPH = 0x00
    MPH = 0x01
    MPS = 0x02


NEGOTIATION_MODE_LABELS: Mapping[str, int] = {
    "Custom Agreement": NegotiationMode.CUSTOM_AGREEMENT,
    "Standard Protocol": NegotiationMode.STANDARD_PROTOCOL,
}

SAMPLE_RATE_LABELS: Mapping[str, int] = {
    "~22 fps": SampleRate.SAMPLE_RATE_22FPS,
    "~11 fps": SampleRate.SAMPLE_RATE_11FPS,
    "~6 fps": SampleRate.SAMPLE_RATE_6FPS,
}

TRACKING_MODE_LABELS: Mapping[str, int] = {
    "Approaching and Retreating": TrackingMode.APPROACHING_AND_RETREATING,
    "Approaching": TrackingMode.APPROACHING,
    "Retreating": TrackingMode.RETREATING,
}

UNIT_OF_MEASURE_LABELS: Mapping[str, int] = {
    "km/h": UnitOfMeasure.KPH,
    "mph": UnitOfMeasure.MPH,
    "m/s": UnitOfMeasure.MPS,
}


class LineAssembler:
    """Collects bytes from the sensor into newline-terminated response lines."""

    def __init__(self, capacity: int = RESPONSE_BUFFER_SIZE) -> None:
        self._capacity = capacity
        self._buffer = bytearray()

    @property
    def pending(self) -> str:
        """Characters received since the last complete line."""
        return self._buffer.decode("latin-1")

    def feed(self, byte: int) -> str | None:
        """Add one byte; return the completed line when a newline arrives."""
        if byte in _IGNORED_BYTES:
            return None
        if byte == _LINE_END:
            if not self._buffer:
                return None
            line = self._buffer.decode("latin-1")
            self.clear()
            return line
        # One slot is reserved for the terminator, as in a C string buffer.
        if len(self._buffer) < self._capacity - 1:
            self._buffer.append(byte)
        return None

    def clear(self) -> None:
        """Drop any partially received line."""
        self._buffer.clear()


def label_for(mapping: Mapping[str, int], value: int) -> str:
    """Return the label whose value is ``value``, or ``"Unknown"``."""
    return next((label for label in sorted(mapping) if mapping[label] == value), "Unknown")


def tracking_mode_from_int(value: int) -> TrackingMode:
    """Convert a raw value, falling back to approaching-and-retreating."""
    try:
        return TrackingMode(value)
    except ValueError:
        _LOGGER.error("Invalid TrackingMode:%s", value)
        return TrackingMode.APPROACHING_AND_RETREATING


def unit_of_measure_from_int(value: int) -> UnitOfMeasure:
    """Convert a raw value, falling back to km/h."""
    try:
        return UnitOfMeasure(value)
    except ValueError:
        _LOGGER.error("Invalid UnitOfMeasure:%s", value)
        return UnitOfMeasure.KPH


def negotiation_mode_from_int(value: int) -> NegotiationMode:
    """Convert a raw value, falling back to the custom agreement."""
    try:
        return NegotiationMode(value)
    except ValueError:
        _LOGGER.error("Invalid NegotiationMode:%s", value)
        return NegotiationMode.CUSTOM_AGREEMENT


def _command(code: int, *params: int) -> bytes:
    return bytes((*_HEADER, code, *params, *_TRAILER))


def speed_angle_sense_command(min_speed_threshold: int, compensation_angle: int, sensitivity: int) -> bytes:
    """Command setting the minimum speed, compensation angle and sensitivity."""
    return _command(0x01, min_speed_threshold, compensation_angle, sensitivity)


def mode_rate_uom_command(tracking_mode: int, sample_rate: int) -> bytes:
    """Command setting the tracking mode and sample rate."""
    return _command(0x02, tracking_mode, sample_rate, 0x00)


def anti_vib_comp_command(vibration_correction: int) -> bytes:
    """Command setting the anti-vibration compensation."""
    return _command(0x03, vibration_correction, 0x00, 0x00)


def relay_duration_speed_command(relay_trigger_duration: int, relay_trigger_speed: int) -> bytes:
    """Command setting the relay trigger duration and speed."""
    return _command(0x04, relay_trigger_duration, relay_trigger_speed, 0x00)


def get_config_command() -> bytes:
    """Command asking the sensor to report its configuration."""
    return bytes((*_HEADER, 0x07, *([0x00] * 10)))


def _float_prefix(text: str) -> float:
    match = _FLOAT_PREFIX.match(text)
    return float(match.group(1)) if match else 0.0


def _hex_prefix(text: str) -> int | None:
    match = _HEX_PREFIX.match(text)
    if match is None:
        return None
    value = int(match.group(2), 16)
    return (-value if match.group(1) == "-" else value) & 0xFF


def parse_firmware(line: str) -> str:
    """Extract the firmware version from a line such as ``No.:20230801E v5.0``."""
    _, colon, firmware = line.partition(":")
    if not colon:
        raise ValueError("Firmware value invalid.")
    return firmware[:FIRMWARE_MAX_LENGTH]


def parse_speed(line: str) -> tuple[float, float]:
    """Parse a line such as ``V+001.9`` into ``(speed, velocity)``."""
    index = line.find("V")
    if index < 0:
        raise ValueError("Speed value invalid.")
    signed = line[index + 1 :]
    return _float_prefix(signed[1:]), _float_prefix(signed)


def parse_config(line: str) -> list[tuple[str, int]]:
    """Parse a configuration line into ``(parameter, value)`` pairs.

    The parameter is the character after ``X``; parsing stops at the first
    token of the wrong length, and malformed parameters are skipped.
    """
    tokens = iter([token for token in _CONFIG_DELIMITERS.split(line) if token])
    params: list[tuple[str, int]] = []
    for key in tokens:
        if len(key) != 2:
            _LOGGER.error("Configuration key length invalid.")
            break
        value = next(tokens, None)
        if value is None or len(value) != 2:
            _LOGGER.error("Configuration value length invalid.")
            break
        if key[0] != "X":
            _LOGGER.error("Invalid Parameter %s:%s", key, value)
            continue
        number = _hex_prefix(value)
        if number is None:
            _LOGGER.error("Invalid Parameter %s:%s", key, value)
            continue
        params.append((key[1], number))
    return params