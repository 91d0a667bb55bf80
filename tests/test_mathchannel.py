from dataclasses import dataclass, field

import pytest

from scopepost.mathchannel import MathChannelGenerator
from scopepost.postsettings import MathMode
from scopepost.ppresult import PPResult


@dataclass
class _Voltage:
    used: bool = False
    inverted: bool = False
    coupling_or_math_index: int = 0


@dataclass
class _Spectrum:
    used: bool = False


@dataclass
class _Scope:
    voltage: list = field(default_factory=lambda: [_Voltage(), _Voltage(), _Voltage()])
    spectrum: list = field(default_factory=lambda: [_Spectrum(), _Spectrum(), _Spectrum()])


def _result(ch1, ch2, interval=0.25):
    result = PPResult(3)
    result.modify_data(0).voltage.sample = list(ch1)
    result.modify_data(0).voltage.interval = interval
    result.modify_data(1).voltage.sample = list(ch2)
    result.modify_data(1).voltage.interval = interval * 2
    return result


def _run(mode, ch1, ch2, inverted=False, used=True):
    scope = _Scope()
    scope.voltage[2] = _Voltage(used=used, inverted=inverted, coupling_or_math_index=int(mode))
    result = _result(ch1, ch2)
    MathChannelGenerator(scope, 2).process(result)
    return result.data(2).voltage


CH1 = [1.5, -2.0, 3.25, 0.5]


def test_unused_math_channel_is_left_alone():
    voltage = _run(MathMode.ADD_CH1_CH2, CH1, CH1, used=False)
    assert voltage.sample == []


def test_spectrum_use_enables_math_channel():
    scope = _Scope()
    scope.voltage[2] = _Voltage(used=False, coupling_or_math_index=int(MathMode.MUL_CH1_CH2))
    scope.spectrum[2] = _Spectrum(used=True)
    result = _result(CH1, [1.0] * 4)
    MathChannelGenerator(scope, 2).process(result)
    assert result.data(2).voltage.sample == CH1


def test_add_zero_channel_gives_first_channel():
    voltage = _run(MathMode.ADD_CH1_CH2, CH1, [0.0] * 4)
    assert voltage.sample == CH1


def test_binary_uses_first_channel_interval():
    voltage = _run(MathMode.ADD_CH1_CH2, CH1, CH1)
    assert voltage.interval == 0.25


def test_subtractions_are_opposite():
    ch2 = [0.5, 1.0, -1.0, 2.0]
    forward = _run(MathMode.SUB_CH2_FROM_CH1, CH1, ch2).sample
    backward = _run(MathMode.SUB_CH1_FROM_CH2, CH1, ch2).sample
    assert [a + b for a, b in zip(forward, backward)] == [0.0] * 4


def test_multiply_by_ones_is_identity():
    assert _run(MathMode.MUL_CH1_CH2, CH1, [1.0] * 4).sample == CH1


def test_binary_length_is_shorter_channel():
    voltage = _run(MathMode.ADD_CH1_CH2, CH1, [0.0, 0.0])
    assert len(voltage.sample) == 2


def test_binary_with_empty_channel_does_nothing():
    voltage = _run(MathMode.ADD_CH1_CH2, CH1, [])
    assert voltage.sample == []


def test_inverted_negates_result():
    ch2 = [0.5, 1.0, -1.0, 2.0]
    normal = _run(MathMode.ADD_CH1_CH2, CH1, ch2).sample
    inverted = _run(MathMode.ADD_CH1_CH2, CH1, ch2, inverted=True).sample
    assert inverted == [-value for value in normal]


def test_ac_ch1_removes_mean():
    voltage = _run(MathMode.AC_CH1, CH1, [9.0, 9.0])
    assert len(voltage.sample) == len(CH1)
    assert sum(voltage.sample) == pytest.approx(0.0, abs=1e-12)
    assert voltage.sample[1] - voltage.sample[0] == pytest.approx(CH1[1] - CH1[0])
    assert voltage.interval == 0.25


def test_ac_ch2_uses_second_channel():
    ch2 = [3.0, 3.0, 3.0]
    voltage = _run(MathMode.AC_CH2, CH1, ch2)
    assert voltage.sample == [0.0, 0.0, 0.0]
    assert voltage.interval == 0.5


def test_ac_inverted_negates():
    normal = _run(MathMode.AC_CH1, CH1, CH1).sample
    inverted = _run(MathMode.AC_CH1, CH1, CH1, inverted=True).sample
    assert inverted == pytest.approx([-value for value in normal])


def test_invalid_math_index_raises():
    scope = _Scope()
    scope.voltage[2] = _Voltage(used=True, coupling_or_math_index=42)
    with pytest.raises(ValueError):
        MathChannelGenerator(scope, 2).process(_result(CH1, CH1))