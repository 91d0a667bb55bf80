"""Spectrum, level and frequency analysis of the acquired channels."""

from __future__ import annotations

import math
from collections.abc import Callable
from typing import Any

import numpy as np

from .graphs import DIVS_TIME
from .postsettings import PostProcessingSettings, WindowFunction
from .ppresult import PPResult, Processor

__all__ = ["SpectrumGenerator", "window_coefficients"]

_INT_MAX = 2147483647.0
_INT_MIN = -2147483648.0

_WindowFormula = Callable[[np.ndarray, int, int], np.ndarray]


def _cos(factor: float, pos: np.ndarray, end: int) -> np.ndarray:
    return np.cos(factor * math.pi * pos / end)


def _lanczos(pos: np.ndarray, n: int, end: int) -> np.ndarray:
    x = (2.0 * pos / end - 1.0) * math.pi
    with np.errstate(divide="ignore", invalid="ignore"):
        return np.where(x == 0, 1.0, np.sin(x) / x)


def _gauss(pos: np.ndarray, n: int, end: int) -> np.ndarray:
    sigma = 0.5
    w = (pos - n / 2.0) / (sigma * n / 2.0)
    return np.exp(-(w * w))


_WINDOWS: dict[WindowFunction, _WindowFormula] = {
    WindowFunction.HAMMING: lambda pos, n, end: 0.54 - 0.46 * _cos(2.0, pos, end),
    WindowFunction.HANN: lambda pos, n, end: 0.5 * (1.0 - _cos(2.0, pos, end)),
    WindowFunction.COSINE: lambda pos, n, end: np.sin(math.pi * pos / end),
    WindowFunction.LANCZOS: _lanczos,
    WindowFunction.BARTLETT: lambda pos, n, end: 2.0 / end * (end // 2 - np.abs(pos - end / 2.0)),
    WindowFunction.TRIANGULAR: lambda pos, n, end: 2.0 / n * (n // 2 - np.abs(pos - end / 2.0)),
    WindowFunction.GAUSS: _gauss,
    # the position ratio is an integer quotient, as in the reference formula
    WindowFunction.BARTLETTHANN: lambda pos, n, end: (
        0.62 - 0.48 * np.abs(np.floor(pos / end) - 0.5) - 0.38 * _cos(2.0, pos, end)
    ),
    WindowFunction.BLACKMAN: lambda pos, n, end: (
        (1 - 0.16) / 2 - 0.5 * _cos(2.0, pos, end) + 0.16 / 2 * _cos(4.0, pos, end)
    ),
    WindowFunction.NUTTALL: lambda pos, n, end: (
        0.355768
        - 0.487396 * _cos(2.0, pos, end)
        + 0.144232 * _cos(4.0, pos, end)
        - 0.012604 * _cos(6.0, pos, end)
    ),
    WindowFunction.BLACKMANHARRIS: lambda pos, n, end: (
        0.35875
        - 0.48829 * _cos(2.0, pos, end)
        + 0.14128 * _cos(4.0, pos, end)
        - 0.01168 * _cos(6.0, pos, end)
    ),
    WindowFunction.BLACKMANNUTTALL: lambda pos, n, end: (
        0.3635819
        - 0.4891775 * _cos(2.0, pos, end)
        + 0.1365995 * _cos(4.0, pos, end)
        - 0.0106411 * _cos(6.0, pos, end)
    ),
    WindowFunction.FLATTOP: lambda pos, n, end: (
        1.0
        - 1.93 * _cos(2.0, pos, end)
        + 1.29 * _cos(4.0, pos, end)
        - 0.388 * _cos(6.0, pos, end)
        + 0.028 * _cos(8.0, pos, end)
    ),
}


def window_coefficients(window: WindowFunction, length: int) -> np.ndarray:
    """Return the DFT window of ``length`` points, ready to multiply the samples.

    The window is normalised to the area of the rectangular window and scaled
    by sqrt(0.5), so a 1 V sine shows as -3 dBV. Unknown windows are
    rectangular. Raises ValueError for fewer than two points.
    """
    if length < 2:
        raise ValueError("a window needs at least two points")
    end = length - 1
    pos = np.arange(length, dtype=float)
    formula = _WINDOWS.get(window)
    if formula is None:
        coefficients = np.ones(length)
    else:
        coefficients = np.asarray(formula(pos, length, end), dtype=float)
    weight = length / coefficients.sum()
    weight *= math.sqrt(0.5)
    return coefficients * weight


def _log10(value: float) -> float:
    return -math.inf if value == 0 else math.log10(value)


class SpectrumGenerator(Processor):
    """Calculates spectrum, levels and frequency of every channel."""

    def __init__(self, scope: Any, postprocessing: PostProcessingSettings) -> None:
        self.scope = scope
        self.postprocessing = postprocessing
        self._last_window: WindowFunction | None = None
        self._last_length = 0
        self._window: np.ndarray | None = None

    def _window_for(self, length: int) -> np.ndarray:
        window = self.postprocessing.spectrum_window
        if self._window is None or self._last_window != window or self._last_length != length:
            self._window = window_coefficients(window, length)
            self._last_window = window
            self._last_length = length
        return self._window

    def process(self, result: PPResult) -> None:
        settings = self.postprocessing
        for channel in range(result.channel_count()):
            data = result.modify_data(channel)
            if not data.voltage.sample:
                data.spectrum.interval = 0.0
                data.spectrum.sample = []
                continue

            samples = np.asarray(data.voltage.sample, dtype=float)
            count = samples.size
            window = self._window_for(count)
            interval = data.voltage.interval

            data.spectrum.interval = 1.0 / interval / count
            dft_length = count // 2

            # peak-to-peak of the displayed part of the trace
            skip = result.skip_samples
            right = min(int(skip + DIVS_TIME * self.scope.horizontal.timebase / interval), count)
            visible = samples[skip:right]
            low, high = _INT_MAX, _INT_MIN
            if visible.size:
                low = min(low, float(visible.min()))
                high = max(high, float(visible.max()))
            data.vpp = high - low

            dc = float(samples.mean())
            data.dc = dc
            ac_samples = samples - dc
            ac2 = float(np.mean(ac_samples * ac_samples))
            data.ac = math.sqrt(ac2)
            data.rms = math.sqrt(dc * dc + ac2)
            data.dB = 10.0 * _log10(ac2) - settings.spectrum_reference

            transform = np.fft.rfft(window * ac_samples)
            power = np.empty(dft_length + 1)
            power[0] = transform[0].real ** 2
            power[1:dft_length] = np.abs(transform[1:dft_length]) ** 2
            power[dft_length] = transform[dft_length].real ** 2

            # autocorrelation via the inverse transform of the power spectrum
            norm = 1.0 / dft_length / dft_length
            correlation = np.fft.irfft(power * norm, count) * count
            peak_corr_pos = self._correlation_peak(correlation, count)

            offset = -settings.spectrum_reference - 20 * math.log10(dft_length)
            offset_limit = settings.spectrum_limit - settings.spectrum_reference
            with np.errstate(divide="ignore"):
                levels = 10 * np.log10(power) + offset
            levels = np.maximum(levels, offset_limit)
            data.spectrum.sample = levels.tolist()

            best = int(np.argmax(levels))
            peak_freq_pos = best if levels[best] > offset_limit else 0

            if (
                peak_freq_pos > peak_corr_pos
                or peak_freq_pos > 100
                or peak_corr_pos < 100
                or peak_corr_pos > count // 4
            ):
                data.frequency = data.spectrum.interval * peak_freq_pos
            else:
                data.frequency = 1.0 / (interval * peak_corr_pos)

    @staticmethod
    def _correlation_peak(correlation: np.ndarray, count: int) -> int:
        """Leftmost correlation maximum that is followed by a negative minimum."""
        peak = 0
        min_corr = 0.0
        max_corr = 0.0
        max_pos = 0
        for position in range(count // 2, 1, -1):
            value = correlation[position]
            if value > max_corr:
                max_corr = value
                max_pos = position
                min_corr = 0.0
            elif value < min_corr:
                min_corr = value
                max_corr = 0.0
                peak = max_pos
        return peak