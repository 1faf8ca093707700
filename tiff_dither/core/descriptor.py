"""Fold directory entries into the image geometry the pixel loader needs."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable

from tiff_dither.core.binary import Endianness
from tiff_dither.core.directory import entry_values
from tiff_dither.core.errors import MissingRequiredTag
from tiff_dither.core.tags import DirectoryEntry, TagId


@dataclass(frozen=True)
class ImageDescriptor:
    """Geometry and format of the image. Absent tags leave a field at 0 or empty."""

    width: int = 0
    height: int = 0
    rows_per_strip: int = 0
    strip_offset: int = 0
    strip_byte_count: int = 0
    samples_per_pixel: int = 0
    compression: int = 0
    photometric: int = 0
    bits_per_sample: tuple[int, ...] = ()

    @property
    def pixel_count(self) -> int:
        return self.width * self.height


_FIELDS: dict[int, str] = {
    TagId.IMAGE_WIDTH: "width",
    TagId.IMAGE_HEIGHT: "height",
    TagId.ROWS_PER_STRIP: "rows_per_strip",
    TagId.STRIP_OFFSETS: "strip_offset",
    TagId.STRIP_BYTE_COUNTS: "strip_byte_count",
    TagId.SAMPLES_PER_PIXEL: "samples_per_pixel",
    TagId.COMPRESSION: "compression",
    TagId.PHOTOMETRIC: "photometric",
}

REQUIRED_TAGS = (TagId.IMAGE_WIDTH, TagId.IMAGE_HEIGHT, TagId.STRIP_OFFSETS)


def build_descriptor(
    entries: Iterable[DirectoryEntry],
    data: bytes = b"",
    endianness: Endianness = Endianness.LITTLE,
) -> ImageDescriptor:
    """Build the descriptor from the directory.

    Values are taken as inline: a single-strip image keeps all of these
    tags in their 4-byte slot. BitsPerSample is the exception, since it
    holds one SHORT per sample and moves out to ``data`` once there are
    three samples. Unknown tags are skipped and a repeated tag keeps its
    last value.

    Raises:
        MissingRequiredTag: width, height or strip offset never appeared.
        TruncatedInput: the BitsPerSample values lie outside ``data``.
    """
    values: dict[str, object] = {}
    seen: set[int] = set()
    for entry in entries:
        if entry.tag_id == TagId.BITS_PER_SAMPLE:
            values["bits_per_sample"] = entry_values(entry, data, endianness)
            continue
        field = _FIELDS.get(entry.tag_id)
        if field is None:
            continue
        values[field] = entry.value_or_offset
        seen.add(entry.tag_id)

    missing = [int(tag) for tag in REQUIRED_TAGS if tag not in seen]
    if missing:
        raise MissingRequiredTag(missing)
    return ImageDescriptor(**values)
