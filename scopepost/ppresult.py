"""Containers for the results of the post-processing pipeline."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field

__all__ = ["SampleValues", "DataChannel", "PPResult", "Processor", "Vertex", "ChannelGraph"]

Vertex = tuple[float, float, float]
ChannelGraph = list[Vertex]


@dataclass
class SampleValues:
    """A run of equally spaced sample values."""

    sample: list[float] = field(default_factory=list)
    interval: float = 0.0  # distance between two samples


@dataclass
class DataChannel:
    """Analysed data of one channel."""

    voltage: SampleValues = field(default_factory=SampleValues)  # time domain, volts
    spectrum: SampleValues = field(default_factory=SampleValues)  # frequency domain, dB
    valid: bool = True  # not clipped, no dropouts
    vpp: float = 0.0  # peak-to-peak voltage of the displayed part
    rms: float = 0.0  # total rms, sqrt(dc² + ac²)
    dc: float = 0.0  # DC bias
    ac: float = 0.0  # rms of the AC component
    dB: float = 0.0  # AC rms as dB
    frequency: float = 0.0  # signal frequency


class PPResult:
    """Post-processing results for all channels of one acquisition."""

    def __init__(self, channel_count: int) -> None:
        self._analyzed: list[DataChannel] = [DataChannel() for _ in range(channel_count)]
        self.software_trigger_triggered = False
        self.skip_samples = 0  # samples to skip so the triggered trace starts on screen
        self.va_channel_spectrum: list[ChannelGraph] = []
        self.va_channel_voltage: list[ChannelGraph] = []

    def data(self, channel: int) -> DataChannel | None:
        """Analysed data of ``channel``, or None when there is no such channel."""
        if not 0 <= channel < len(self._analyzed):
            return None
        return self._analyzed[channel]

    def modify_data(self, channel: int) -> DataChannel:
        """Analysed data of ``channel`` for changing; raises IndexError if absent."""
        if not 0 <= channel < len(self._analyzed):
            raise IndexError(f"no channel {channel}")
        return self._analyzed[channel]

    def sample_count(self) -> int:
        """Number of voltage samples of the first channel."""
        if not self._analyzed:
            raise IndexError("result holds no channels")
        return len(self._analyzed[0].voltage.sample)

    def channel_count(self) -> int:
        """Number of channels held."""
        return len(self._analyzed)


class Processor(ABC):
    """A stage of the post-processing pipeline."""

    @abstractmethod
    def process(self, result: PPResult) -> None:
        """Work on ``result`` in place."""