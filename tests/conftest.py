"""Shared fixtures: hand-built TIFF files in either byte order."""

import struct

import pytest

SHORT = 3
LONG = 4


def pack_entry(order: str, tag: int, field_type: int, count: int, value: int) -> bytes:
    """Pack one 12-byte IFD record with a left-justified inline value."""
    prefix = "<" if order == "little" else ">"
    head = struct.pack(prefix + "HHI", tag, field_type, count)
    if field_type == SHORT and count == 1:
        return head + struct.pack(prefix + "HH", value, 0)
    if field_type == 1 and count == 1:
        return head + bytes([value, 0, 0, 0])
    return head + struct.pack(prefix + "I", value)


def build_tiff(
    width: int,
    height: int,
    pixels: bytes,
    samples_per_pixel: int = 3,
    order: str = "little",
    extra: list[tuple[int, int, int, int]] | None = None,
    skip: tuple[int, ...] = (),
    compression: int = 1,
    rows_per_strip: int | None = None,
    bits_per_sample: int = 8,
) -> bytes:
    """Header, then the pixel strip at offset 8, then the IFD.

    ``extra`` holds additional (tag, type, count, value) records; ``skip``
    drops standard tags by id.
    """
    prefix = "<" if order == "little" else ">"
    magic = b"II*\x00" if order == "little" else b"MM\x00*"
    strip_offset = 8
    ifd_offset = strip_offset + len(pixels)
    ifd_offset += ifd_offset % 2  # IFDs start on a word boundary

    records = [
        (256, SHORT, 1, width),
        (257, SHORT, 1, height),
        (258, SHORT, 1, bits_per_sample),
        (259, SHORT, 1, compression),
        (262, SHORT, 1, 2 if samples_per_pixel >= 3 else 1),
        (273, LONG, 1, strip_offset),
        (277, SHORT, 1, samples_per_pixel),
        (278, SHORT, 1, rows_per_strip if rows_per_strip is not None else height),
        (279, LONG, 1, len(pixels)),
    ]
    records = [r for r in records if r[0] not in skip] + list(extra or [])

    out = bytearray(magic + struct.pack(prefix + "I", ifd_offset))
    out += pixels
    out += b"\x00" * (ifd_offset - len(out))
    out += struct.pack(prefix + "H", len(records))
    for record in records:
        out += pack_entry(order, *record)
    out += struct.pack(prefix + "I", 0)  # no next IFD
    return bytes(out)


@pytest.fixture
def make_tiff():
    return build_tiff


@pytest.fixture
def make_entry():
    return pack_entry


@pytest.fixture(params=["little", "big"])
def order(request):
    return request.param
