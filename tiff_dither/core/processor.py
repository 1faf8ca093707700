"""Image processing pipeline.

Decode → load strip → greyscale → invert → dither.
"""

from __future__ import annotations

import hashlib
import logging
from dataclasses import dataclass
from pathlib import Path

import numpy as np

from tiff_dither.core.descriptor import ImageDescriptor
from tiff_dither.core.dither import DitherMethod, dither
from tiff_dither.core.greyscale import GreyMode, to_greyscale
from tiff_dither.core.reader import DecodedTiff, decode_tiff, load_pixels, read_file
from tiff_dither.core.report import Diagnostics

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Settings:
    """Processing settings that affect output."""

    method: DitherMethod = DitherMethod.FLOYD_STEINBERG
    grey_mode: GreyMode = GreyMode.RMS
    invert: bool = False

    def hash(self) -> str:
        """Deterministic hash for cache keying."""
        data = f"{self.method.value}:{self.grey_mode.value}:{self.invert}"
        return hashlib.md5(data.encode()).hexdigest()[:12]


@dataclass
class ProcessedImage:
    """Result of running one TIFF through the pipeline."""

    decoded: DecodedTiff
    raster: np.ndarray  # (height, width) uint8, values 0 or 255
    settings: Settings

    @property
    def descriptor(self) -> ImageDescriptor:
        return self.decoded.descriptor

    @property
    def width(self) -> int:
        return self.descriptor.width

    @property
    def height(self) -> int:
        return self.descriptor.height


def greyscale_from_bytes(
    data: bytes,
    settings: Settings,
    diagnostics: Diagnostics | None = None,
) -> tuple[DecodedTiff, np.ndarray]:
    """Decode and reduce to the single-channel raster the ditherers take."""
    decoded = decode_tiff(data, diagnostics)
    pixels = load_pixels(data, decoded.descriptor)
    grey = to_greyscale(pixels, settings.grey_mode)
    if settings.invert:
        np.subtract(255, grey, out=grey)
    return decoded, grey


def process_bytes(
    data: bytes,
    settings: Settings | None = None,
    diagnostics: Diagnostics | None = None,
) -> ProcessedImage:
    """Run a whole-file buffer through the full pipeline."""
    settings = settings or Settings()
    decoded, grey = greyscale_from_bytes(data, settings, diagnostics)

    logger.debug("Dithering %dx%d raster with %s", grey.shape[1], grey.shape[0], settings.method.value)
    dither(grey, settings.method)
    return ProcessedImage(decoded=decoded, raster=grey, settings=settings)


def process_file(
    path: str | Path,
    settings: Settings | None = None,
    diagnostics: Diagnostics | None = None,
) -> ProcessedImage:
    """Read ``path`` and process it."""
    return process_bytes(read_file(path), settings, diagnostics)
