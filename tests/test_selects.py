import pytest

from ld2415h.component import LD2415H
from ld2415h.protocol import SampleRate, TrackingMode, mode_rate_uom_command
from ld2415h.selects import SampleRateSelect, TrackingModeSelect


def make_parent():
    written = []
    return LD2415H(written.append), written


def test_sample_rate_select_sets_parent():
    parent, _ = make_parent()
    select = SampleRateSelect(parent)
    select.control("~6 fps")
    assert parent.sample_rate == SampleRate.SAMPLE_RATE_6FPS
    assert select.state == "~6 fps"


def test_tracking_mode_select_sets_parent():
    parent, _ = make_parent()
    select = TrackingModeSelect(parent)
    select.control("Retreating")
    assert parent.tracking_mode is TrackingMode.RETREATING
    assert select.state == "Retreating"


def test_selects_attach_to_parent():
    parent, _ = make_parent()
    rate = SampleRateSelect(parent)
    mode = TrackingModeSelect(parent)
    assert parent.sample_rate_selector is rate
    assert parent.tracking_mode_selector is mode


def test_unknown_sample_rate_raises():
    parent, _ = make_parent()
    with pytest.raises(KeyError):
        SampleRateSelect(parent).control("~99 fps")


def test_unknown_tracking_mode_raises():
    parent, _ = make_parent()
    with pytest.raises(KeyError):
        TrackingModeSelect(parent).control("Sideways")


def test_options_list_labels():
    parent, _ = make_parent()
    assert set(SampleRateSelect(parent).options) == {"~22 fps", "~11 fps", "~6 fps"}
    assert set(TrackingModeSelect(parent).options) == {
        "Approaching and Retreating",
        "Approaching",
        "Retreating",
    }


@pytest.mark.parametrize("label", ["~22 fps", "~11 fps", "~6 fps"])
def test_every_sample_rate_option_is_accepted(label):
    parent, _ = make_parent()
    select = SampleRateSelect(parent)
    select.control(label)
    assert select.state == label


def test_mode_rate_command_sent_after_control():
    parent, written = make_parent()
    TrackingModeSelect(parent).control("Approaching")
    SampleRateSelect(parent).control("~22 fps")
    parent.loop()
    parent.loop()
    assert mode_rate_uom_command(TrackingMode.APPROACHING, SampleRate.SAMPLE_RATE_22FPS) in written


def test_config_response_publishes_labels():
    parent, _ = make_parent()
    mode = TrackingModeSelect(parent)
    rate = SampleRateSelect(parent)
    parent.handle_line("X4:01 X5:02")
    assert mode.state == "Approaching"
    assert rate.state == "~6 fps"