"""Cypress FX3 firmware images, the boot format loaded into FX3 RAM.

An image starts with the ``CY`` signature, a control byte and an image
type. Then come sections of 32-bit words, each with a length and a load
address. A section of length zero ends the list, and its address is the
program entry point. A 32-bit checksum of all section words follows.
"""

from __future__ import annotations

import struct
from collections.abc import Iterator
from dataclasses import dataclass

__all__ = [
    "Fx3ImageError",
    "Fx3Chunk",
    "Fx3Image",
    "parse_fx3_image",
    "IMAGE_NORMAL",
    "IMAGE_SECURITY",
    "IMAGE_VID_PID",
    "MAX_BLOCK_SIZE",
]

IMAGE_NORMAL = 0xB0  # normal firmware binary with checksum
IMAGE_SECURITY = 0xB1  # security binary, not supported
IMAGE_VID_PID = 0xB2  # VID:PID image, not supported

MAX_BLOCK_SIZE = 4096  # largest block written with one control transfer

_WORD = struct.Struct("<I")
_SECTION_HEADER = struct.Struct("<II")
_MASK32 = 0xFFFFFFFF


class Fx3ImageError(ValueError):
    """The data is not a loadable FX3 firmware image."""


@dataclass(frozen=True)
class Fx3Chunk:
    """Bytes to be written at a RAM address."""

    address: int
    data: bytes


@dataclass(frozen=True)
class Fx3Image:
    """A parsed FX3 firmware image."""

    image_control: int
    chunks: tuple[Fx3Chunk, ...]
    entry_point: int
    checksum: int

    @property
    def is_data(self) -> bool:
        """True for a data image, False for an executable one."""
        return bool(self.image_control & 0x01)

    def blocks(self, block_size: int = MAX_BLOCK_SIZE) -> Iterator[Fx3Chunk]:
        """Split every section into blocks of at most ``block_size`` bytes."""
        if block_size <= 0:
            raise ValueError("block size must be positive")
        for chunk in self.chunks:
            for start in range(0, len(chunk.data), block_size):
                yield Fx3Chunk(
                    (chunk.address + start) & _MASK32,
                    chunk.data[start : start + block_size],
                )


def _check_header(header: bytes) -> int:
    if len(header) < 4:
        raise Fx3ImageError("could not read image header")
    if header[0:2] != b"CY":
        raise Fx3ImageError("image doesn't have a CYpress signature")
    image_type = header[3]
    if image_type == IMAGE_SECURITY:
        raise Fx3ImageError("security binary image is not currently supported")
    if image_type == IMAGE_VID_PID:
        raise Fx3ImageError("VID:PID image is not currently supported")
    if image_type != IMAGE_NORMAL:
        raise Fx3ImageError(f"invalid image type 0x{image_type:02X}")
    return header[2]


def parse_fx3_image(data: bytes) -> Fx3Image:
    """Parse and verify an FX3 firmware image.

    Raises Fx3ImageError for a bad header, a truncated image or a checksum
    that does not match the section words.
    """
    data = bytes(data)
    image_control = _check_header(data[:4])

    position = 4
    checksum = 0
    chunks: list[Fx3Chunk] = []
    while True:
        if position + _SECTION_HEADER.size > len(data):
            raise Fx3ImageError("could not read image")
        word_count, address = _SECTION_HEADER.unpack_from(data, position)
        position += _SECTION_HEADER.size
        if word_count == 0:
            entry_point = address
            break
        byte_count = word_count * 4
        if position + byte_count > len(data):
            raise Fx3ImageError("could not read image")
        section = data[position : position + byte_count]
        position += byte_count
        checksum = (checksum + sum(word for (word,) in _WORD.iter_unpack(section))) & _MASK32
        chunks.append(Fx3Chunk(address, section))

    if position + _WORD.size > len(data):
        raise Fx3ImageError("checksum error")
    (expected,) = _WORD.unpack_from(data, position)
    if expected != checksum:
        raise Fx3ImageError("checksum error")

    return Fx3Image(image_control, tuple(chunks), entry_point, checksum)