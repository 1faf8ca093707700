"""Bilevel dithering of 8-bit greyscale rasters.

All methods work in place on a 2D ``uint8`` array and leave only the values
0 and 255 behind. The input array is returned for convenience.
"""

from __future__ import annotations

from enum import Enum

import numpy as np

THRESHOLD = 128
BLACK = 0
WHITE = 255


class DitherMethod(str, Enum):
    FLOYD_STEINBERG = "floyd-steinberg"
    FORWARD = "forward"
    THRESHOLD = "threshold"


def _clamp(v: int) -> int:
    if v < 0:
        return 0
    if v > 255:
        return 255
    return v


def _quantize(v: int) -> int:
    return BLACK if v < THRESHOLD else WHITE


def _check_raster(raster: np.ndarray) -> None:
    if raster.ndim != 2:
        raise ValueError(f"Expected a 2D raster, got shape {raster.shape}")
    if raster.dtype != np.uint8:
        raise ValueError(f"Expected a uint8 raster, got {raster.dtype}")


def floyd_steinberg(raster: np.ndarray) -> np.ndarray:
    """Apply Floyd-Steinberg error diffusion in place.

    Pixels are visited top to bottom, left to right. Each one is thresholded
    at 128 and its error is pushed to the unvisited neighbours with weights
    7/16 (east), 3/16 (south-west), 5/16 (south) and 1/16 (south-east).
    Weighted errors are computed as ``(error * w) >> 4``, so negative errors
    round towards minus infinity, and every neighbour is clamped to
    [0, 255] after the addition.

    Args:
        raster: 2D uint8 array of shape (height, width). Mutated.

    Returns:
        The same array, now containing only 0 and 255.
    """
    _check_raster(raster)
    if raster.size == 0:
        return raster
    h, w = raster.shape
    # Two rows of Python ints at a time; each row is written back when done
    row = raster[0].tolist()

    for y in range(h):
        below = raster[y + 1].tolist() if y + 1 < h else None
        for x in range(w):
            observed = row[x]
            quantized = _quantize(observed)
            error = observed - quantized
            row[x] = quantized
            if error == 0:
                continue

            if x + 1 < w:
                row[x + 1] = _clamp(row[x + 1] + ((error * 7) >> 4))
            if below is None:
                continue
            if x > 0:
                below[x - 1] = _clamp(below[x - 1] + ((error * 3) >> 4))
            below[x] = _clamp(below[x] + ((error * 5) >> 4))
            if x + 1 < w:
                below[x + 1] = _clamp(below[x + 1] + (error >> 4))

        raster[y] = row
        row = below

    return raster


def forward_dither(raster: np.ndarray) -> np.ndarray:
    """One-dimensional forward error carry, in place.

    The raster is walked as one flat sequence. Each sample gets the whole
    error of the previous one added before thresholding, so the error
    carries over from the end of one row to the start of the next.
    """
    _check_raster(raster)
    error = 0
    for y in range(raster.shape[0]):
        row = raster[y].tolist()
        for x, sample in enumerate(row):
            value = sample + error
            row[x] = _quantize(value)
            error = value - row[x]
        raster[y] = row
    return raster


def threshold(raster: np.ndarray) -> np.ndarray:
    """Threshold at 128 without diffusing any error."""
    _check_raster(raster)
    raster[...] = np.where(raster < THRESHOLD, BLACK, WHITE)
    return raster


_METHODS = {
    DitherMethod.FLOYD_STEINBERG: floyd_steinberg,
    DitherMethod.FORWARD: forward_dither,
    DitherMethod.THRESHOLD: threshold,
}


def dither(raster: np.ndarray, method: DitherMethod = DitherMethod.FLOYD_STEINBERG) -> np.ndarray:
    """Dither ``raster`` in place with the given method."""
    return _METHODS[DitherMethod(method)](raster)
