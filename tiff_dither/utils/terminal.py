"""Sizing a raster preview to the terminal."""

from __future__ import annotations


def fit_to_cells(
    img_width: int,
    img_height: int,
    max_cols: int,
    max_rows: int,
) -> tuple[int, int]:
    """Pixel size of a half-block preview that fits in the given cells.

    Each character cell shows one pixel across and two down, which keeps
    the aspect ratio of the image on a terminal whose cells are about twice
    as tall as they are wide. Images are never scaled up.

    Returns:
        (pixel_width, pixel_height), or (0, 0) for an empty image.
    """
    max_cols = max(max_cols, 1)
    max_px_h = max(max_rows, 1) * 2
    if img_width <= 0 or img_height <= 0:
        return 0, 0

    scale = min(max_cols / img_width, max_px_h / img_height, 1.0)
    px_w = max(1, int(img_width * scale))
    px_h = max(1, int(img_height * scale))
    return px_w, px_h
