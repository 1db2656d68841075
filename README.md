# ld2415h

Protocol handling and device state for the HLK-LD2415H speed radar. This is a
module that reports target speed over a serial line.

The package does not open a serial port. It takes the bytes you read from the
radar and passes command frames to a write callable that you supply. You can
use it with any transport: pyserial, a socket bridge, or a recorded capture.

## Installation

```
pip install ld2415h
```

The test suite needs the `test` extra:

```
pip install "ld2415h[test]"
pytest
```

## Modules

### `ld2415h.protocol`

- **Enums:** `TrackingMode`, `SampleRate`, `UnitOfMeasure` and `NegotiationMode`.
- **Label mappings:** `TRACKING_MODE_LABELS`, `SAMPLE_RATE_LABELS`, `UNIT_OF_MEASURE_LABELS` and `NEGOTIATION_MODE_LABELS`.
  - `label_for(mapping, value)` looks up a label and returns `"Unknown"` when nothing matches.
- **Lenient converters:** `tracking_mode_from_int`, `unit_of_measure_from_int` and `negotiation_mode_from_int`.
  - Each one logs an invalid value.
  - It then falls back to a default: approaching and retreating, km/h, or custom agreement.
- **Command frame builders:** each returns `bytes`.
  - `speed_angle_sense_command`
  - `mode_rate_uom_command`
  - `anti_vib_comp_command`
  - `relay_duration_speed_command`
  - `get_config_command`
- **`LineAssembler`:** turns the byte stream into response lines.
  - `feed(byte)` returns a complete line when a newline arrives, and `None` otherwise.
  - NUL, `0xFF` and carriage returns are ignored.
  - A line keeps at most 63 characters.
  - `clear()` drops a partial line.
  - The `pending` property shows what has been received so far.
- **Parsers:**
  - `parse_speed(line)` returns `(speed, velocity)`. Speed is unsigned and velocity keeps its sign.
  - `parse_firmware(line)` returns the text after the first `:`, cut to 20 characters.
  - `parse_config(line)` returns a list of `(parameter, value)` pairs from a line such as `X1:01 X2:00 ...`. Values are hexadecimal.
  - `parse_speed` and `parse_firmware` raise `ValueError` for malformed lines.

### `ld2415h.component`

`LD2415H(write, *, speed_sensor=None, velocity_sensor=None)` keeps the radar's configuration. It queues the commands that bring the device in line with that configuration, and it dispatches the speed, firmware and configuration responses that come back.

- `feed(data)` queues received bytes.
- `loop()` first parses every queued line. It then writes at most one pending command, in this order:
  1. speed/angle/sensitivity
  2. mode/rate
  3. anti-vibration
  4. relay
  5. configuration request
- All four settings commands are pending on construction.
- `setup()` adds the configuration request.
- `handle_line(line)` dispatches a single complete line.
- Settings methods:
  - `set_min_speed_threshold`
  - `set_compensation_angle`
  - `set_sensitivity`
  - `set_vibration_correction`
  - `set_relay_trigger_duration`
  - `set_relay_trigger_speed`
  - `set_tracking_mode`
  - `set_sample_rate`

  These store the value and mark the matching command as pending.
- Values must fit in one byte; anything else raises `ValueError`.
- `set_tracking_mode` and `set_sample_rate` also accept a label. An unknown label raises `KeyError`.
- `dump_config()` logs the configuration and returns the logged lines.
- `register_listener(listener)` adds a `Listener` that receives every reading.
- `speed_sensor` and `velocity_sensor` are entities that get every reading published to them.

### `ld2415h.entities`

- `Entity(name)` is a value holder with these members:
  - `state`
  - `has_state`
  - `publish_state(state)`
  - `add_on_state_callback(callback)`
- `Listener` has the hooks `on_speed` and `on_velocity`. Both do nothing by default.

### `ld2415h.numbers` and `ld2415h.selects`

These modules provide adjustable settings that attach themselves to an `LD2415H` when constructed:

- `MinSpeedThresholdNumber`
- `CompensationAngleNumber`
- `SensitivityNumber`
- `VibrationCorrectionNumber`
- `RelayTriggerDurationNumber`
- `RelayTriggerSpeedNumber`
- `SampleRateSelect`
- `TrackingModeSelect`

Their `control(value)` publishes the value and forwards it to the component. The selects list their labels in `options`.

When the radar reports its configuration, the component publishes the reported values to whichever of these are attached.

### `ld2415h.sensor`

`LD2415HSensor(speed_sensor=None, velocity_sensor=None)` is a `Listener`. It publishes speed and velocity to its entities only when the value changes. Its `dump_config()` returns the configured sensors.

## Parsing responses directly

```python
from ld2415h.protocol import LineAssembler, parse_speed

assembler = LineAssembler()
for byte in b"V-001.9\r\n":
    line = assembler.feed(byte)
    if line is not None:
        speed, velocity = parse_speed(line)
        print(speed, velocity)  # 1.9 -1.9
```

## Driving the device

```python
from ld2415h.component import LD2415H
from ld2415h.entities import Entity
from ld2415h.numbers import SensitivityNumber
from ld2415h.sensor import LD2415HSensor

sent = []
radar = LD2415H(sent.append)  # pass serial_port.write in real use
radar.setup()

sensitivity = SensitivityNumber(radar)
sensitivity.control(8)

speed = Entity("Speed")
radar.register_listener(LD2415HSensor(speed_sensor=speed))

radar.feed(b"V+012.4\r\n")
radar.loop()        # parses the reading, then sends one pending command
print(speed.state)  # 12.4
print(sent[0].hex(" "))
```

Call `loop()` repeatedly. Each call sends at most one command.

## What it does not do

The package has no command-line tool. It does not open or read a serial port. It does not run a loop of its own. The caller supplies the transport and decides when to call `loop()`.