"""Runs registered processors over each new acquisition."""

from __future__ import annotations

from collections.abc import Callable
from typing import Any

from .ppresult import PPResult, Processor

__all__ = ["PostProcessing"]


class PostProcessing:
    """Manages the processors of the pipeline.

    Every call to :meth:`input` builds a fresh :class:`PPResult`, lets each
    processor work on it in the order of registration and hands the result
    to every connected callback.
    """

    def __init__(self, channel_count: int) -> None:
        self.channel_count = channel_count
        self._processors: list[Processor] = []
        self._listeners: list[Callable[[PPResult], Any]] = []

    def register_processor(self, processor: Processor) -> None:
        """Append a processor; the first registered runs first."""
        self._processors.append(processor)

    def connect(self, callback: Callable[[PPResult], Any]) -> None:
        """Call ``callback`` with every finished result."""
        self._listeners.append(callback)

    def input(self, samples: Any) -> PPResult:
        """Process one acquisition and return the finished result.

        ``samples`` provides ``data`` (one sample list per channel),
        ``samplerate``, ``trigger_position``, ``live_trigger`` and the
        ``clipped`` bit mask.
        """
        result = PPResult(self.channel_count)
        self._convert(samples, result)
        for processor in self._processors:
            processor.process(result)
        for listener in self._listeners:
            listener(result)
        return result

    @staticmethod
    def _convert(source: Any, destination: PPResult) -> None:
        if source.trigger_position >= 0:
            destination.software_trigger_triggered = source.live_trigger
            destination.skip_samples = source.trigger_position
        else:
            destination.software_trigger_triggered = False
            destination.skip_samples = 0

        for channel, raw in enumerate(source.data):
            if not raw:
                continue
            channel_data = destination.modify_data(channel)
            channel_data.voltage.interval = 1.0 / source.samplerate
            channel_data.voltage.sample = list(raw)
            channel_data.valid = not (source.clipped & (1 << channel))