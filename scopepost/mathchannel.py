"""Computes the math channel from the first two physical channels."""

from __future__ import annotations

from collections.abc import Callable
from typing import Any

from .postsettings import MathMode, get_math_mode
from .ppresult import PPResult, Processor

__all__ = ["MathChannelGenerator"]

_BINARY: dict[MathMode, Callable[[float, float], float]] = {
    MathMode.ADD_CH1_CH2: lambda a, b: a + b,
    MathMode.SUB_CH2_FROM_CH1: lambda a, b: a - b,
    MathMode.SUB_CH1_FROM_CH2: lambda a, b: b - a,
    # e.g. voltage times current over a 1 Ω shunt gives momentary power
    MathMode.MUL_CH1_CH2: lambda a, b: a * b,
}


class MathChannelGenerator(Processor):
    """Fills the channel after the physical ones with the selected math operation."""

    def __init__(self, scope: Any, physical_channels: int) -> None:
        self.scope = scope
        self.physical_channels = physical_channels

    def process(self, result: PPResult) -> None:
        math_index = self.physical_channels
        voltage_settings = self.scope.voltage[math_index]
        if not voltage_settings.used and not self.scope.spectrum[math_index].used:
            return

        target = result.modify_data(math_index)
        sign = -1.0 if voltage_settings.inverted else 1.0
        mode = get_math_mode(voltage_settings)

        if mode < MathMode.AC_CH1:
            first = result.data(0).voltage
            second = result.data(1).voltage
            if not first.sample or not second.sample:
                return
            calculate = _BINARY[mode]
            target.voltage.interval = first.interval
            target.voltage.sample = [sign * calculate(a, b) for a, b in zip(first.sample, second.sample)]
            return

        # unary operation: remove the DC component ("AC coupling")
        source = result.data(1 if mode == MathMode.AC_CH2 else 0).voltage
        target.voltage.interval = source.interval
        if not source.sample:
            target.voltage.sample = []
            return
        average = sum(source.sample) / len(source.sample)
        target.voltage.sample = [sign * (value - average) for value in source.sample]