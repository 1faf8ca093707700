"""Image File Directory walking."""

from __future__ import annotations

from tiff_dither.core.binary import Endianness, read_u16, read_uint
from tiff_dither.core.errors import require
from tiff_dither.core.fieldtypes import element_width
from tiff_dither.core.tags import RECORD_SIZE, DirectoryEntry, decode_tag, tag_name

COUNT_SIZE = 2


def read_directory(
    data: bytes, offset: int, endianness: Endianness
) -> list[DirectoryEntry]:
    """Read the IFD whose 2-byte entry count sits at ``offset``.

    Entries come back in file order, which is not necessarily tag order.
    The first bad record aborts the whole directory.
    """
    require(data, offset, COUNT_SIZE, "IFD entry count")
    num_entries = read_u16(data, offset, endianness)

    start = offset + COUNT_SIZE
    require(data, start, num_entries * RECORD_SIZE, "IFD entries")

    entries: list[DirectoryEntry] = []
    for i in range(num_entries):
        pos = start + i * RECORD_SIZE
        entries.append(decode_tag(data[pos : pos + RECORD_SIZE], endianness))
    return entries


def entry_values(
    entry: DirectoryEntry, data: bytes, endianness: Endianness
) -> tuple[int, ...]:
    """All values of an integer-typed entry, whether inline or at its offset."""
    width = element_width(entry.field_type)
    if entry.is_inline:
        raw = entry.value_or_offset.to_bytes(entry.size, endianness.value)
    else:
        start = entry.value_or_offset
        require(data, start, entry.size, f"{tag_name(entry.tag_id)} values")
        raw = data[start : start + entry.size]
    return tuple(read_uint(raw, i * width, width, endianness) for i in range(entry.count))
