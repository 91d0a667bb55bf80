# scopepost

Post-processing for sample data from a digital storage oscilloscope. It also
has a few helpers for formatting values, parsing firmware images and describing
USB status.

## What it does

- **Unit formatting** (`scopepost.printutils`)
  - `value_to_string` turns a number into text with a unit prefix, such as
    `"2.500 ms"`, for the units in `Unit`.
  - `string_to_value` parses such text back into a number. It raises
    `ValueError` when the text holds no number.
  - `hex_dump` turns bytes into space-separated lower-case hex.
  - `hex_parse` decodes that hex again. It stops at the first malformed pair
    or after `length` bytes.
- **Settings** (`scopepost.postsettings`)
  - The `MathMode` and `WindowFunction` enums.
  - Their display names, from `math_mode_string` and `window_function_string`.
  - `get_math_mode`, which reads the mode from a channel's
    `coupling_or_math_index`.
  - The `PostProcessingSettings` dataclass. By default it uses a Hamming
    window, a reference level of 0 dB and a limit of -60 dB.
- **Results** (`scopepost.ppresult`)
  - `PPResult` holds one `DataChannel` per channel. Each `DataChannel` keeps
    `SampleValues` for the voltage and for the spectrum, and also holds vpp,
    dc, ac, rms, dB and frequency.
  - `Processor` is the abstract base class for a stage of the pipeline.
- **Pipeline** (`scopepost.postprocessing`)
  - `PostProcessing.input` takes an acquisition object with the attributes
    `data`, `samplerate`, `trigger_position`, `live_trigger` and `clipped`.
  - It builds a `PPResult` from that object and runs every processor added with
    `register_processor`, in the order they were added.
  - It then calls every callback added with `connect`, and returns the result.
- **Processors**
  - `MathChannelGenerator` (`scopepost.mathchannel`) fills the channel that
    comes after the physical channels. It adds, subtracts or multiplies CH1 and
    CH2, or gives the AC part of CH1 or CH2. The result is negated when the
    channel is inverted.
  - `SpectrumGenerator` (`scopepost.spectrum`) applies a window
    (`window_coefficients`) and computes a spectrum in dB, clipped at the
    limit. It also computes the peak-to-peak value of the visible part of the
    trace, the DC, AC and RMS levels, and a frequency estimate. The frequency
    comes either from the spectrum peak or from an autocorrelation.
  - `GraphGenerator` (`scopepost.graphs`) builds `(x, y, 0.0)` vertex lists for
    drawing.
    - In `GraphFormat.TY` mode the x axis is time.
    - In XY mode it plots the channel pairs 0/1, 2/3 and so on against each
      other.
    - It raises `RuntimeError` for more than `MAX_SAMPLE_COUNT` samples.
- **Intel HEX images** (`scopepost.ihex`)
  - `parse_ihex` merges data records into `Segment`s of at most 1023 bytes.
    Lines starting with `#` are comments.
  - `external_check_for` returns the test that `parse_ihex` uses to mark a
    segment as external RAM, for the EZ-USB FX, FX2 or FX2LP.
  - `select_segments` picks the segments one loader stage writes, chosen by
    `RamMode`.
  - Errors raise `IHexError`.
- **FX3 boot images** (`scopepost.fx3image`)
  - `parse_fx3_image` checks the `CY` header, the sections and the checksum,
    and returns an `Fx3Image`.
  - `Fx3Image.blocks` splits the sections into write-sized blocks.
  - Errors raise `Fx3ImageError`.
- **USB status text** (`scopepost.usbstatus`)
  - `libusb_error_string` describes the `UsbError` codes.
  - `DeviceListEntry.status` gives `"Ready"`, `"Firmware upload"`,
    `"Cannot connect"` or the entry's error message.
  - The module also defines the transfer timeout, attempt and endpoint
    constants.

## What it does not do

This package does not talk to hardware. It does not find USB devices, open
them, make bulk or control transfers, or upload firmware. `ihex` and
`fx3image` only parse and check images. There is no graphical interface, no
command-line program, and no settings file storage: settings live in memory.
The processors read channel settings from a `scope` object you supply. For each
channel that object needs `voltage` and `spectrum` lists with `used`, `offset`,
`inverted`, `magnitude` and `coupling_or_math_index`. It also needs a
`horizontal` part with `format`, `timebase` and `frequencybase`, and a
`gain(channel)` method.

## Installation

```
pip install .
```

To also install the test dependencies:

```
pip install ".[test]"
```

## Example

```python
from scopepost.printutils import Unit, value_to_string, string_to_value

print(value_to_string(0.0025, Unit.SECONDS, 3))
print(string_to_value("10 kHz", Unit.HERTZ))
```

```python
from scopepost.ihex import parse_ihex, external_check_for, FxType

with open("firmware.hex") as fh:
    segments = parse_ihex(fh, external_check_for(FxType.FX2LP))
for segment in segments:
    print(hex(segment.address), len(segment.data), segment.external)
```

## Running the tests

```
pytest
```