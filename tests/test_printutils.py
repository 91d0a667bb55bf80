import pytest

from scopepost.printutils import Unit, hex_dump, hex_parse, string_to_value, value_to_string


@pytest.mark.parametrize(
    "value, unit, suffix",
    [
        (2e-6, Unit.VOLTS, " µV"),
        (0.2, Unit.VOLTS, " mV"),
        (12.0, Unit.VOLTS, " V"),
        (-3.0, Unit.DECIBEL, " dB"),
        (3e-10, Unit.SECONDS, " ps"),
        (4e-8, Unit.SECONDS, " ns"),
        (2e-5, Unit.SECONDS, " µs"),
        (0.5, Unit.SECONDS, " ms"),
        (30.0, Unit.SECONDS, " s"),
        (120.0, Unit.SECONDS, " min"),
        (7200.0, Unit.SECONDS, " h"),
        (500.0, Unit.HERTZ, " Hz"),
        (2.5e4, Unit.HERTZ, " kHz"),
        (3e7, Unit.HERTZ, " MHz"),
        (2e9, Unit.HERTZ, " GHz"),
        (500.0, Unit.SAMPLES, " S"),
        (2.5e4, Unit.SAMPLES, " kS"),
        (3e7, Unit.SAMPLES, " MS"),
        (2e9, Unit.SAMPLES, " GS"),
    ],
)
def test_suffix_selection(value, unit, suffix):
    assert value_to_string(value, unit).endswith(suffix)


def test_pinned_volts():
    assert value_to_string(1.5, Unit.VOLTS) == "1.5 V"


ROUND_TRIP = [
    (1.5e-6, Unit.VOLTS),
    (0.25, Unit.VOLTS),
    (-0.3, Unit.VOLTS),
    (12.0, Unit.VOLTS),
    (-12.5, Unit.DECIBEL),
    (3e-10, Unit.SECONDS),
    (4e-8, Unit.SECONDS),
    (2e-5, Unit.SECONDS),
    (2.5e-3, Unit.SECONDS),
    (30.0, Unit.SECONDS),
    (150.0, Unit.SECONDS),
    (9000.0, Unit.SECONDS),
    (500.0, Unit.HERTZ),
    (2.5e4, Unit.HERTZ),
    (3.3e7, Unit.HERTZ),
    (2e9, Unit.HERTZ),
    (750.0, Unit.SAMPLES),
    (1.2e4, Unit.SAMPLES),
    (4e6, Unit.SAMPLES),
]


@pytest.mark.parametrize("value, unit", ROUND_TRIP)
def test_round_trip_automatic(value, unit):
    assert string_to_value(value_to_string(value, unit), unit) == pytest.approx(value, rel=1e-5)


@pytest.mark.parametrize("value, unit", ROUND_TRIP)
def test_round_trip_with_precision(value, unit):
    text = value_to_string(value, unit, 4)
    assert string_to_value(text, unit) == pytest.approx(value, rel=1e-3)


def test_precision_zero_gives_integer():
    text = value_to_string(2.6, Unit.VOLTS, 0)
    assert "." not in text
    assert text.endswith(" V")


def test_unsupported_unit_formats_empty():
    assert value_to_string(1.0, Unit.COUNT) == ""


def test_string_to_value_prefixes():
    assert string_to_value("3 k", Unit.HERTZ) == pytest.approx(3 * 1e3)
    assert string_to_value("2 min", Unit.SECONDS) == pytest.approx(2 * 60)
    assert string_to_value("2 m", Unit.SECONDS) == pytest.approx(2 * 1e-3)
    assert string_to_value("4 µV", Unit.VOLTS) == pytest.approx(4 * 1e-6)
    assert string_to_value("7 dB", Unit.DECIBEL) == pytest.approx(7.0)


def test_string_to_value_exponent():
    assert string_to_value("2.5e3 Hz", Unit.HERTZ) == pytest.approx(float("2.5e3"))
    assert string_to_value("-1e-3 V", Unit.VOLTS) == pytest.approx(float("-1e-3"))


@pytest.mark.parametrize("text", ["", "abc", "V", "-"])
def test_string_to_value_rejects_bad_numbers(text):
    with pytest.raises(ValueError):
        string_to_value(text, Unit.VOLTS)


def test_string_to_value_rejects_unsupported_unit():
    with pytest.raises(ValueError):
        string_to_value("1", Unit.COUNT)


def test_hex_dump_format():
    assert hex_dump(bytes([0x01, 0xAB])) == " 01 ab"


def test_hex_round_trip():
    data = bytes(range(0, 256, 7))
    assert hex_parse(hex_dump(data)) == data


def test_hex_parse_respects_length():
    data = bytes([9, 8, 7, 6])
    assert hex_parse(hex_dump(data), 2) == data[:2]


def test_hex_parse_stops_at_error():
    assert hex_parse("01zz02", 5) == bytes.fromhex("01")


def test_hex_parse_empty():
    assert hex_parse("", 4) == b""