"""Reduce loaded pixels to one 8-bit channel."""

from __future__ import annotations

from enum import Enum

import numpy as np
from PIL import Image


class GreyMode(str, Enum):
    RMS = "rms"
    LUMA = "luma"


def _rms(rgb: np.ndarray) -> np.ndarray:
    """sqrt((r^2 + g^2 + b^2) / 3), truncated."""
    f = rgb.astype(np.float64)
    grey = np.sqrt((f[..., 0] ** 2 + f[..., 1] ** 2 + f[..., 2] ** 2) / 3.0)
    return grey.astype(np.uint8)


def _luma(rgb: np.ndarray) -> np.ndarray:
    """ITU-R 601-2 luma, as Pillow computes it for mode "L"."""
    img = Image.fromarray(np.ascontiguousarray(rgb, dtype=np.uint8))
    return np.array(img.convert("L"), dtype=np.uint8)


def to_greyscale(pixels: np.ndarray, mode: GreyMode = GreyMode.RMS) -> np.ndarray:
    """Convert a (height, width, samples) array to a (height, width) uint8 raster.

    One-channel input is copied as is. With two channels (grey + alpha)
    the first is used. With three or more, the first three are taken as
    RGB and reduced with ``mode``; extra samples such as alpha are ignored.
    The result is always a fresh array the caller may mutate.
    """
    if pixels.ndim == 2:
        return pixels.astype(np.uint8, copy=True)
    if pixels.ndim != 3:
        raise ValueError(f"Expected (height, width, samples) pixels, got {pixels.shape}")

    samples = pixels.shape[2]
    if samples in (1, 2):
        return np.ascontiguousarray(pixels[..., 0], dtype=np.uint8).copy()

    rgb = pixels[..., :3]
    if GreyMode(mode) == GreyMode.LUMA:
        return _luma(rgb)
    return _rms(rgb)
