"""TIFF decoding session and single-strip pixel loading.

``decode_tiff`` runs header → directory → descriptor over a whole-file
buffer. ``load_pixels`` then pulls the interleaved 8-bit samples of the
one strip the descriptor points at.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path

import numpy as np

from tiff_dither.core.binary import Endianness, TiffHeader, read_header
from tiff_dither.core.descriptor import ImageDescriptor, build_descriptor
from tiff_dither.core.directory import read_directory
from tiff_dither.core.errors import UnsupportedImage, require
from tiff_dither.core.report import Diagnostics
from tiff_dither.core.tags import DirectoryEntry

logger = logging.getLogger(__name__)

NO_COMPRESSION = 1
SAMPLE_BITS = 8


@dataclass(frozen=True)
class DecodedTiff:
    """Everything read from the header and the first IFD."""

    header: TiffHeader
    entries: tuple[DirectoryEntry, ...]
    descriptor: ImageDescriptor

    @property
    def endianness(self) -> Endianness:
        return self.header.endianness


def read_file(path: str | Path) -> bytes:
    """Load a whole file into memory."""
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"File not found: {path}")
    data = path.read_bytes()
    logger.debug("Read %d bytes from %s", len(data), path)
    return data


def decode_tiff(data: bytes, diagnostics: Diagnostics | None = None) -> DecodedTiff:
    """Decode the header, first IFD and image descriptor.

    Raises:
        NotATiff: bad magic; nothing past the first four bytes is read.
        UnknownFieldType, TruncatedInput, MissingRequiredTag: see errors.
    """
    diagnostics = diagnostics or Diagnostics()

    header = read_header(data)
    diagnostics.on_header(header)

    entries = read_directory(data, header.ifd_offset, header.endianness)
    diagnostics.on_directory(entries)

    descriptor = build_descriptor(entries, data, header.endianness)
    diagnostics.on_descriptor(descriptor)

    logger.debug(
        "Decoded %s TIFF: %dx%d, %d entries",
        header.endianness.value,
        descriptor.width,
        descriptor.height,
        len(entries),
    )
    return DecodedTiff(header=header, entries=tuple(entries), descriptor=descriptor)


def samples_per_pixel(descriptor: ImageDescriptor) -> int:
    """SamplesPerPixel, with the TIFF default of 1 when the tag is absent."""
    return descriptor.samples_per_pixel or 1


def load_pixels(data: bytes, descriptor: ImageDescriptor) -> np.ndarray:
    """Read the strip as a (height, width, samples) uint8 array.

    Raises:
        UnsupportedImage: compressed data, more than one strip, or samples
            that are not 8 bits wide.
        TruncatedInput: the strip runs past the end of the buffer.
    """
    if descriptor.compression not in (0, NO_COMPRESSION):
        raise UnsupportedImage(
            f"Compressed TIFF not supported (compression={descriptor.compression})"
        )
    if any(bits != SAMPLE_BITS for bits in descriptor.bits_per_sample):
        raise UnsupportedImage(
            f"Only 8-bit samples are supported (bits per sample "
            f"{', '.join(map(str, descriptor.bits_per_sample))})"
        )
    if 0 < descriptor.rows_per_strip < descriptor.height:
        raise UnsupportedImage(
            f"Multiple strips not supported (rows per strip "
            f"{descriptor.rows_per_strip} < height {descriptor.height})"
        )

    spp = samples_per_pixel(descriptor)
    length = descriptor.pixel_count * spp
    if length == 0:
        return np.zeros((descriptor.height, descriptor.width, spp), dtype=np.uint8)
    require(data, descriptor.strip_offset, length, "pixel data")

    start = descriptor.strip_offset
    strip = np.frombuffer(data, dtype=np.uint8, count=length, offset=start)
    logger.debug("Loaded %d samples from offset %d", length, start)
    return strip.reshape(descriptor.height, descriptor.width, spp).copy()
