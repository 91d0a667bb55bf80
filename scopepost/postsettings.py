"""Settings and enumerations for the post-processing stage."""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum
from typing import Any

__all__ = [
    "MathMode",
    "WindowFunction",
    "PostProcessingSettings",
    "get_math_mode",
    "math_mode_string",
    "window_function_string",
]


class MathMode(IntEnum):
    """Operations available for the math channel."""

    ADD_CH1_CH2 = 0
    SUB_CH2_FROM_CH1 = 1
    SUB_CH1_FROM_CH2 = 2
    MUL_CH1_CH2 = 3
    AC_CH1 = 4
    AC_CH2 = 5


class WindowFunction(IntEnum):
    """Window functions applied to the samples before the DFT."""

    RECTANGULAR = 0
    HAMMING = 1
    HANN = 2
    COSINE = 3
    LANCZOS = 4
    BARTLETT = 5
    TRIANGULAR = 6
    GAUSS = 7
    BARTLETTHANN = 8
    BLACKMAN = 9
    NUTTALL = 10
    BLACKMANHARRIS = 11
    BLACKMANNUTTALL = 12
    FLATTOP = 13


@dataclass
class PostProcessingSettings:
    """Spectrum analysis options."""

    spectrum_window: WindowFunction = WindowFunction.HAMMING
    spectrum_reference: float = 0.0  # reference level in dBu
    spectrum_limit: float = -60.0  # lowest magnitude shown


def get_math_mode(channel_settings: Any) -> MathMode:
    """Return the math mode stored in a channel's ``coupling_or_math_index``."""
    return MathMode(channel_settings.coupling_or_math_index)


_MATH_MODE_NAMES = {
    MathMode.ADD_CH1_CH2: "CH1 + CH2",
    MathMode.SUB_CH2_FROM_CH1: "CH1 - CH2",
    MathMode.SUB_CH1_FROM_CH2: "CH2 - CH1",
    MathMode.MUL_CH1_CH2: "CH1 * CH2",
    MathMode.AC_CH1: "CH1 AC",
    MathMode.AC_CH2: "CH2 AC",
}

_WINDOW_NAMES = {
    WindowFunction.RECTANGULAR: "Rectangular",
    WindowFunction.HAMMING: "Hamming",
    WindowFunction.HANN: "Hann",
    WindowFunction.COSINE: "Cosine",
    WindowFunction.LANCZOS: "Lanczos",
    WindowFunction.BARTLETT: "Bartlett",
    WindowFunction.TRIANGULAR: "Triangular",
    WindowFunction.GAUSS: "Gauss",
    WindowFunction.BARTLETTHANN: "Bartlett-Hann",
    WindowFunction.BLACKMAN: "Blackman",
    WindowFunction.NUTTALL: "Nuttall",
    WindowFunction.BLACKMANHARRIS: "Blackman-Harris",
    WindowFunction.BLACKMANNUTTALL: "Blackman-Nuttall",
    WindowFunction.FLATTOP: "Flat top",
}


def math_mode_string(mode: MathMode) -> str:
    """Label for a math mode; empty for an unknown one."""
    return _MATH_MODE_NAMES.get(mode, "")


def window_function_string(window: WindowFunction) -> str:
    """Label for a window function; empty for an unknown one."""
    return _WINDOW_NAMES.get(window, "")