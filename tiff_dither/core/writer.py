"""Save a bilevel raster as raw bytes or as a 1-bit image.

Raw output is the plain ``width * height`` byte dump. Every other format is
written by Pillow from a mode "1" image, which gives a proper bilevel TIFF
for ``.tif``/``.tiff``.
"""

from __future__ import annotations

import logging
from pathlib import Path

import numpy as np
from PIL import Image

logger = logging.getLogger(__name__)

RAW_SUFFIXES = (".raw", ".gray")
IMAGE_FORMATS = {
    ".tif": "TIFF",
    ".tiff": "TIFF",
    ".png": "PNG",
    ".bmp": "BMP",
    ".pbm": "PPM",
    ".gif": "GIF",
}
SUPPORTED_SUFFIXES = RAW_SUFFIXES + tuple(IMAGE_FORMATS)


def _check_bilevel(raster: np.ndarray) -> None:
    if raster.ndim != 2 or raster.dtype != np.uint8:
        raise ValueError(f"Expected a 2D uint8 raster, got {raster.dtype} {raster.shape}")
    if not np.isin(raster, (0, 255)).all():
        raise ValueError("Raster is not bilevel (values other than 0 and 255)")


def to_bilevel_image(raster: np.ndarray) -> Image.Image:
    """Wrap a 0/255 raster as a mode "1" Pillow image."""
    _check_bilevel(raster)
    grey = Image.fromarray(np.ascontiguousarray(raster))
    return grey.convert("1", dither=Image.Dither.NONE)


def save_raw(raster: np.ndarray, output_path: Path) -> None:
    _check_bilevel(raster)
    output_path.write_bytes(raster.tobytes())


def save_image(raster: np.ndarray, output_path: Path) -> None:
    fmt = IMAGE_FORMATS[output_path.suffix.lower()]
    to_bilevel_image(raster).save(str(output_path), format=fmt)


def save_output(raster: np.ndarray, output_path: str | Path) -> Path:
    """Save in the format determined by the output file extension."""
    output_path = Path(output_path)
    suffix = output_path.suffix.lower()
    if suffix in RAW_SUFFIXES:
        save_raw(raster, output_path)
    elif suffix in IMAGE_FORMATS:
        save_image(raster, output_path)
    else:
        raise ValueError(
            f"Unsupported output format: {suffix or '(none)'} "
            f"(expected one of {', '.join(SUPPORTED_SUFFIXES)})"
        )
    logger.debug("Wrote %dx%d raster to %s", raster.shape[1], raster.shape[0], output_path)
    return output_path


def default_output_path(input_path: Path, suffix: str = ".tif") -> Path:
    """``<stem>_dithered<suffix>`` beside the input."""
    return input_path.parent / f"{input_path.stem}_dithered{suffix}"
