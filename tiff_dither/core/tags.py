"""Decoding of 12-byte IFD records into directory entries.

A record is laid out as::

    0..2   tag id
    2..4   field type
    4..8   element count
    8..12  value, or offset of the value when it needs more than 4 bytes

The count and the field type decide how the last four bytes are read.
Offsets and 4-byte values follow the stream byte order. Smaller values are
left-justified in the slot: their meaningful bytes come first in file order
and are read in the stream byte order, and the padding after them is
dropped.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum

from tiff_dither.core.binary import Endianness, read_u16, read_u32, read_uint
from tiff_dither.core.errors import UnknownFieldType, require
from tiff_dither.core.fieldtypes import element_width

RECORD_SIZE = 12
SLOT_OFFSET = 8
SLOT_SIZE = 4


class TagId(IntEnum):
    IMAGE_WIDTH = 256
    IMAGE_HEIGHT = 257
    BITS_PER_SAMPLE = 258
    COMPRESSION = 259
    PHOTOMETRIC = 262
    STRIP_OFFSETS = 273
    SAMPLES_PER_PIXEL = 277
    ROWS_PER_STRIP = 278
    STRIP_BYTE_COUNTS = 279


TAG_NAMES: dict[int, str] = {
    TagId.IMAGE_WIDTH: "ImageWidth",
    TagId.IMAGE_HEIGHT: "ImageHeight",
    TagId.BITS_PER_SAMPLE: "BitsPerSample",
    TagId.COMPRESSION: "Compression",
    TagId.PHOTOMETRIC: "Photometric",
    TagId.STRIP_OFFSETS: "StripOffsets",
    TagId.SAMPLES_PER_PIXEL: "SamplesPerPixel",
    TagId.ROWS_PER_STRIP: "RowsPerStrip",
    TagId.STRIP_BYTE_COUNTS: "StripByteCounts",
}


def tag_name(tag_id: int) -> str:
    return TAG_NAMES.get(tag_id, f"Unknown({tag_id})")


@dataclass(frozen=True)
class DirectoryEntry:
    """One decoded IFD record."""

    tag_id: int
    field_type: int
    count: int
    value_or_offset: int

    @property
    def size(self) -> int:
        """Total size of the tag's data in bytes."""
        return element_width(self.field_type) * self.count

    @property
    def is_inline(self) -> bool:
        return self.size <= SLOT_SIZE


def _resolve_slot(record: bytes, size: int, endianness: Endianness) -> int:
    if size >= SLOT_SIZE:
        return read_u32(record, SLOT_OFFSET, endianness)
    if size == 2:
        return read_u16(record, SLOT_OFFSET, endianness)
    if size == 1:
        return record[SLOT_OFFSET]
    # 3 bytes (e.g. a short ASCII string) or an empty tag
    return read_uint(record, SLOT_OFFSET, size, endianness)


def decode_tag(record: bytes, endianness: Endianness) -> DirectoryEntry:
    """Decode one 12-byte IFD record.

    Args:
        record: at least 12 bytes; only the first 12 are used.
        endianness: byte order of the stream.

    Raises:
        TruncatedInput: fewer than 12 bytes were given.
        UnknownFieldType: the field type is not a TIFF 6.0 type.
    """
    require(record, 0, RECORD_SIZE, "IFD entry")
    tag_id = read_u16(record, 0, endianness)
    field_type = read_u16(record, 2, endianness)
    count = read_u32(record, 4, endianness)

    try:
        width = element_width(field_type)
    except UnknownFieldType:
        raise UnknownFieldType(field_type, tag_id) from None

    return DirectoryEntry(
        tag_id=tag_id,
        field_type=field_type,
        count=count,
        value_or_offset=_resolve_slot(record, width * count, endianness),
    )
