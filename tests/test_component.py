import logging

import pytest

from ld2415h.component import LD2415H
from ld2415h.entities import Entity, Listener
from ld2415h.protocol import (
    NegotiationMode,
    TrackingMode,
    UnitOfMeasure,
    anti_vib_comp_command,
    get_config_command,
    mode_rate_uom_command,
    relay_duration_speed_command,
    speed_angle_sense_command,
)

CONFIG_EXAMPLE = b"X1:01 X2:00 X3:05 X4:01 X5:00 X6:00 X7:05 X8:03 X9:01 X0:01\r\n"


class _Recorder(Listener):
    def __init__(self):
        self.events = []

    def on_speed(self, speed):
        self.events.append(("speed", speed))

    def on_velocity(self, velocity):
        self.events.append(("velocity", velocity))


@pytest.fixture
def writes():
    return []


@pytest.fixture
def device(writes):
    return LD2415H(writes.append)


def _drain(device):
    for _ in range(6):
        device.loop()


def test_loop_issues_startup_commands_in_order(device, writes):
    for _ in range(5):
        device.loop()
    assert writes == [
        speed_angle_sense_command(1, 0, 10),
        mode_rate_uom_command(TrackingMode.APPROACHING_AND_RETREATING, 1),
        anti_vib_comp_command(18),
        relay_duration_speed_command(0, 1),
    ]


def test_setup_requests_config(device, writes):
    _drain(device)
    device.setup()
    device.loop()
    assert writes[-1] == get_config_command()


def test_setter_triggers_command(device, writes):
    _drain(device)
    device.set_sensitivity(7)
    device.loop()
    assert writes[-1] == speed_angle_sense_command(1, 0, 7)


def test_relay_setters_share_one_command(device, writes):
    _drain(device)
    count = len(writes)
    device.set_relay_trigger_duration(3)
    device.set_relay_trigger_speed(4)
    _drain(device)
    assert writes[count:] == [relay_duration_speed_command(3, 4)]


def test_setter_rejects_out_of_range(device):
    with pytest.raises(ValueError):
        device.set_min_speed_threshold(300)


def test_set_tracking_mode_by_label(device, writes):
    device.tracking_mode_selector = Entity()
    _drain(device)
    device.set_tracking_mode("Retreating")
    device.loop()
    assert device.tracking_mode is TrackingMode.RETREATING
    assert device.tracking_mode_selector.state == "Retreating"
    assert writes[-1] == mode_rate_uom_command(TrackingMode.RETREATING, 1)


def test_set_tracking_mode_unknown_label(device):
    with pytest.raises(KeyError):
        device.set_tracking_mode("Sideways")


def test_set_tracking_mode_invalid_int_defaults(device):
    device.set_tracking_mode(TrackingMode.APPROACHING)
    device.set_tracking_mode(9)
    assert device.tracking_mode is TrackingMode.APPROACHING_AND_RETREATING


def test_set_sample_rate_by_label(device):
    device.sample_rate_selector = Entity()
    device.set_sample_rate("~6 fps")
    assert device.sample_rate == 2
    assert device.sample_rate_selector.state == "~6 fps"


def test_speed_line_reaches_listeners_and_sensors(writes):
    speed_sensor, velocity_sensor = Entity(), Entity()
    device = LD2415H(writes.append, speed_sensor=speed_sensor, velocity_sensor=velocity_sensor)
    recorder = _Recorder()
    device.register_listener(recorder)
    device.feed(b"V+001.9\r\n")
    device.loop()
    assert recorder.events == [("speed", 1.9), ("velocity", 1.9)]
    assert speed_sensor.state == 1.9
    assert velocity_sensor.state == device.velocity


def test_config_line_updates_state_and_entities(device):
    device.min_speed_threshold_number = Entity()
    device.relay_trigger_duration_number = Entity()
    device.tracking_mode_selector = Entity()
    device.sample_rate_selector = Entity()
    device.feed(CONFIG_EXAMPLE)
    device.loop()
    assert device.sensitivity == 5
    assert device.vibration_correction == 5
    assert device.tracking_mode is TrackingMode.APPROACHING
    assert device.unit_of_measure is UnitOfMeasure.KPH
    assert device.negotiation_mode is NegotiationMode.CUSTOM_AGREEMENT
    assert device.min_speed_threshold_number.state == 1
    assert device.relay_trigger_duration_number.state == 3
    assert device.tracking_mode_selector.state == "Approaching"
    assert device.sample_rate_selector.state == "~22 fps"


def test_firmware_line_appears_in_dump(device):
    device.handle_line("No.:20230801E v5.0")
    assert device.firmware == "20230801E v5.0"
    assert "  Firmware: 20230801E v5.0" in device.dump_config()


def test_dump_config_defaults(device):
    lines = device.dump_config()
    assert lines[0] == "LD2415H:"
    assert "  Tracking Mode: Approaching and Retreating" in lines
    assert "  Negotiation Mode: Custom Agreement" in lines


def test_unknown_response_is_logged(device, caplog):
    with caplog.at_level(logging.ERROR):
        device.handle_line("Q123")
    assert "Unknown Response: Q123" in caplog.text
    assert device.speed == 0.0


def test_issuing_command_discards_partial_line(device, writes):
    device.feed(b"V+00")
    device.loop()
    device.feed(b"1.9\n")
    device.loop()
    assert device.speed == 0.0
    assert len(writes) == 2