"""Turns analysed sample data into vertex lists ready for drawing."""

from __future__ import annotations

from enum import IntEnum
from typing import Any

from .ppresult import ChannelGraph, PPResult, Processor, SampleValues

__all__ = ["GraphFormat", "GraphGenerator", "DIVS_TIME", "MAX_SAMPLE_COUNT"]

DIVS_TIME = 10.0  # horizontal divisions of the screen
MAX_SAMPLE_COUNT = 500000


class GraphFormat(IntEnum):
    """Graph layout: time on the x axis, or channel pairs plotted against each other."""

    TY = 0
    XY = 1


_EMPTY = SampleValues()


def _resize(graphs: list[ChannelGraph], size: int) -> None:
    del graphs[size:]
    graphs.extend([] for _ in range(size - len(graphs)))


def _voltage_samples(channel: int, result: PPResult, scope: Any) -> SampleValues:
    data = result.data(channel)
    if not scope.voltage[channel].used or data is None:
        return _EMPTY
    return data.voltage


def _spectrum_samples(channel: int, result: PPResult, scope: Any) -> SampleValues:
    data = result.data(channel)
    if not scope.spectrum[channel].used or data is None:
        return _EMPTY
    return data.spectrum


def _check_count(samples: list[float]) -> None:
    if len(samples) > MAX_SAMPLE_COUNT:
        raise RuntimeError("Sample count too high!")


class GraphGenerator(Processor):
    """Generates vertex lists for the voltage and spectrum traces."""

    def __init__(self, scope: Any) -> None:
        self.scope = scope
        self.ready = False

    def process(self, result: PPResult) -> None:
        if self.scope.horizontal.format == GraphFormat.TY:
            self.ready = True
            self._generate_ty_voltage(result)
            self._generate_ty_spectrum(result)
        else:
            self.generate_graphs_xy(result, self.scope)

    def _generate_ty_voltage(self, result: PPResult) -> None:
        scope = self.scope
        _resize(result.va_channel_voltage, len(scope.voltage))
        for channel, settings in enumerate(scope.voltage):
            samples = _voltage_samples(channel, result, scope)
            if not samples.sample:
                result.va_channel_voltage[channel] = []
                continue
            _check_count(samples.sample)
            factor = samples.interval / scope.horizontal.timebase
            gain = scope.gain(channel)
            offset = settings.offset
            result.va_channel_voltage[channel] = [
                (position * factor - DIVS_TIME / 2, value / gain + offset, 0.0)
                for position, value in enumerate(samples.sample[result.skip_samples :])
            ]

    def _generate_ty_spectrum(self, result: PPResult) -> None:
        scope = self.scope
        self.ready = True
        _resize(result.va_channel_spectrum, len(scope.spectrum))
        for channel, settings in enumerate(scope.spectrum):
            samples = _spectrum_samples(channel, result, scope)
            if not samples.sample:
                result.va_channel_spectrum[channel] = []
                continue
            _check_count(samples.sample)
            factor = samples.interval / scope.horizontal.frequencybase
            magnitude = settings.magnitude
            offset = settings.offset
            result.va_channel_spectrum[channel] = [
                (position * factor - DIVS_TIME / 2, value / magnitude + offset, 0.0)
                for position, value in enumerate(samples.sample)
            ]

    def generate_graphs_xy(self, result: PPResult, scope: Any) -> None:
        """Plot each channel pair (0/1, 2/3, …) against each other."""
        channel_total = len(scope.voltage)
        _resize(result.va_channel_voltage, channel_total)
        for graph in result.va_channel_spectrum:
            graph.clear()

        for x_channel in range(0, channel_total, 2):
            y_channel = x_channel + 1
            if y_channel == channel_total:
                result.va_channel_voltage[x_channel] = []
                continue
            x_samples = _voltage_samples(x_channel, result, scope)
            y_samples = _voltage_samples(y_channel, result, scope)
            if not x_samples.sample or not y_samples.sample:
                result.va_channel_voltage[x_channel] = []
                result.va_channel_voltage[y_channel] = []
                continue
            x_gain = scope.gain(x_channel)
            y_gain = scope.gain(y_channel)
            x_offset = scope.voltage[x_channel].offset
            y_offset = scope.voltage[y_channel].offset
            result.va_channel_voltage[x_channel] = [
                (x / x_gain + x_offset, y / y_gain + y_offset, 0.0)
                for x, y in zip(x_samples.sample, y_samples.sample)
            ]