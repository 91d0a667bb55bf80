"""Intel HEX firmware images for Cypress EZ-USB microcontrollers.

The image is split into memory segments. Each segment is marked as on-chip
or external RAM, so that a first or second stage loader can write it.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Callable, Iterable
from dataclasses import dataclass
from enum import Enum, IntEnum

__all__ = [
    "IHexError",
    "FxType",
    "RamMode",
    "Segment",
    "RW_INTERNAL",
    "RW_MEMORY",
    "MAX_SEGMENT_SIZE",
    "fx_is_external",
    "fx2_is_external",
    "fx2lp_is_external",
    "external_check_for",
    "parse_ihex",
    "select_segments",
]

_log = logging.getLogger(__name__)

RW_INTERNAL = 0xA0  # vendor request the hardware loader implements
RW_MEMORY = 0xA3  # vendor request of a second stage loader

MAX_SEGMENT_SIZE = 1023  # merged records never grow beyond this

ExternalCheck = Callable[[int, int], bool]

_HEX_PREFIX = re.compile(r"[0-9a-fA-F]+")


class IHexError(ValueError):
    """The image cannot be parsed or a segment cannot be written."""


class FxType(IntEnum):
    """The EZ-USB chip family."""

    FX = 0  # Anchorchips EZ-USB or Cypress EZ-USB FX
    FX2 = 2  # USB 2.0 versions
    FX2LP = 3  # updated FX2
    FX3 = 4  # USB 3.0 versions


class RamMode(Enum):
    """Which segments a loader stage writes."""

    INTERNAL_ONLY = "internal_only"  # hardware first stage loader
    SKIP_INTERNAL = "skip_internal"  # first phase of a second stage loader
    SKIP_EXTERNAL = "skip_external"  # second phase of a second stage loader


@dataclass(frozen=True)
class Segment:
    """A contiguous block of image bytes."""

    address: int
    data: bytes
    external: bool = False

    @property
    def opcode(self) -> int:
        """Vendor request used to write this segment."""
        return RW_MEMORY if self.external else RW_INTERNAL


def fx_is_external(addr: int, length: int) -> bool:
    """True if the range touches external RAM of an EZ-USB or EZ-USB FX."""
    # with 8 KB RAM, 0x0000-0x1b3f can be written
    if addr <= 0x1B3F:
        return addr + length > 0x1B40
    return True


def fx2_is_external(addr: int, length: int) -> bool:
    """True if the range touches external RAM of an EZ-USB FX2."""
    if addr <= 0x1FFF:
        return addr + length > 0x2000
    if 0xE000 <= addr <= 0xE1FF:
        return addr + length > 0xE200
    return True


def fx2lp_is_external(addr: int, length: int) -> bool:
    """True if the range touches external RAM of an EZ-USB FX2LP."""
    if addr <= 0x3FFF:
        return addr + length > 0x4000
    if 0xE000 <= addr <= 0xE1FF:
        return addr + length > 0xE200
    return True


def external_check_for(fx_type: FxType | int) -> ExternalCheck:
    """Return the external-memory test for a chip family.

    FX3 chips take a different image format and raise ValueError.
    """
    if fx_type == FxType.FX3:
        raise ValueError("FX3 devices load Cypress images, not Intel HEX")
    if fx_type == FxType.FX2LP:
        return fx2lp_is_external
    if fx_type == FxType.FX2:
        return fx2_is_external
    return fx_is_external


def _hex_field(text: str) -> int:
    """Value of the leading hex digits of ``text``; 0 when there are none."""
    match = _HEX_PREFIX.match(text)
    return int(match.group(), 16) if match else 0


def parse_ihex(lines: Iterable[str] | str, is_external: ExternalCheck | None = None) -> list[Segment]:
    """Parse an Intel HEX image into merged memory segments.

    Lines starting with ``#`` are comments. Contiguous data records are
    merged into segments of at most :data:`MAX_SEGMENT_SIZE` bytes. Parsing
    stops at the end-of-file record; a missing one is only logged.
    Raises IHexError for malformed or unsupported records.
    """
    if isinstance(lines, str):
        lines = lines.splitlines()

    segments: list[Segment] = []
    buffer = bytearray()
    data_addr = 0
    first_line = True

    def flush() -> None:
        external = is_external(data_addr, len(buffer)) if is_external else False
        segments.append(Segment(data_addr, bytes(buffer), external))

    saw_eof = False
    for raw in lines:
        if raw.startswith("#"):
            continue
        if not raw.startswith(":"):
            raise IHexError(f"not an ihex record: {raw!r}")
        line = raw.split("\n", 1)[0]

        length = _hex_field(line[1:3])
        offset = _hex_field(line[3:7])
        if first_line:
            data_addr = offset
            first_line = False
        record_type = _hex_field(line[7:9]) & 0xFF

        if record_type == 1:
            saw_eof = True
            break
        if record_type != 0:
            raise IHexError(f"unsupported record type: {record_type}")
        if length * 2 + 11 > len(line):
            raise IHexError("record too short")

        if buffer and (offset != data_addr + len(buffer) or len(buffer) + length > MAX_SEGMENT_SIZE):
            flush()
            data_addr = offset
            buffer.clear()

        buffer.extend(_hex_field(line[9 + 2 * index : 11 + 2 * index]) for index in range(length))

    if not saw_eof:
        _log.warning("EOF without EOF record")

    if buffer:
        flush()
    return segments


def select_segments(segments: Iterable[Segment], mode: RamMode) -> list[Segment]:
    """Return the segments a loader stage in ``mode`` writes.

    In INTERNAL_ONLY mode an external segment raises IHexError, as the
    hardware loader cannot reach external memory.
    """
    selected: list[Segment] = []
    for segment in segments:
        if mode is RamMode.INTERNAL_ONLY:
            if segment.external:
                raise IHexError(
                    f"can't write {len(segment.data)} bytes external memory at 0x{segment.address:08x}"
                )
        elif mode is RamMode.SKIP_INTERNAL:
            if not segment.external:
                continue
        elif mode is RamMode.SKIP_EXTERNAL:
            if segment.external:
                continue
        else:
            raise ValueError(f"unknown RAM mode {mode!r}")
        selected.append(segment)
    return selected