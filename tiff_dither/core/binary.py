"""Byte-order aware integer reads and TIFF header parsing."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from tiff_dither.core.errors import NotATiff, require


class Endianness(str, Enum):
    LITTLE = "little"
    BIG = "big"


BIG_ENDIAN_MAGIC = b"\x4d\x4d\x00\x2a"  # "MM", 42
LITTLE_ENDIAN_MAGIC = b"\x49\x49\x2a\x00"  # "II", 42
HEADER_SIZE = 8


@dataclass(frozen=True)
class TiffHeader:
    endianness: Endianness
    ifd_offset: int


def read_u16(data: bytes, offset: int, endianness: Endianness) -> int:
    """Read an unsigned 16-bit integer. Bounds are the caller's problem."""
    b0 = data[offset]
    b1 = data[offset + 1]
    if endianness == Endianness.BIG:
        return (b0 << 8) | b1
    return (b1 << 8) | b0


def read_u32(data: bytes, offset: int, endianness: Endianness) -> int:
    """Read an unsigned 32-bit integer. Bounds are the caller's problem."""
    b0, b1, b2, b3 = data[offset : offset + 4]
    if endianness == Endianness.BIG:
        return (b0 << 24) | (b1 << 16) | (b2 << 8) | b3
    return (b3 << 24) | (b2 << 16) | (b1 << 8) | b0


def read_uint(data: bytes, offset: int, width: int, endianness: Endianness) -> int:
    """Read an unsigned integer of ``width`` bytes (0 to 4)."""
    chunk = data[offset : offset + width]
    if endianness == Endianness.LITTLE:
        chunk = chunk[::-1]
    value = 0
    for byte in chunk:
        value = (value << 8) | byte
    return value


def detect_endianness(data: bytes) -> Endianness:
    """Identify the byte order from the first four bytes.

    Raises:
        NotATiff: the prefix is neither ``MM\\x00*`` nor ``II*\\x00``.
    """
    prefix = bytes(data[:4])
    if prefix == BIG_ENDIAN_MAGIC:
        return Endianness.BIG
    if prefix == LITTLE_ENDIAN_MAGIC:
        return Endianness.LITTLE
    raise NotATiff(prefix)


def read_header(data: bytes) -> TiffHeader:
    """Validate the magic and read the offset of the first IFD."""
    endianness = detect_endianness(data)
    require(data, 0, HEADER_SIZE, "header")
    return TiffHeader(endianness=endianness, ifd_offset=read_u32(data, 4, endianness))
