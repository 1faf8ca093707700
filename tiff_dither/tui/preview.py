"""Bilevel raster preview widget for the TUI."""

from __future__ import annotations

import numpy as np
from rich.text import Text
from textual.app import ComposeResult
from textual.events import Resize
from textual.widget import Widget
from textual.widgets import Static

from tiff_dither.core.processor import ProcessedImage
from tiff_dither.utils.terminal import fit_to_cells

# (top pixel white, bottom pixel white) -> character
HALF_BLOCKS = {
    (False, False): " ",
    (True, False): "▀",
    (False, True): "▄",
    (True, True): "█",
}

EMPTY_MESSAGE = "No image loaded."


def resample(raster: np.ndarray, width: int, height: int) -> np.ndarray:
    """Nearest-neighbour resample of a 2D raster to (height, width)."""
    src_h, src_w = raster.shape
    if (src_w, src_h) == (width, height):
        return raster
    ys = (np.arange(height) * src_h // max(height, 1)).clip(0, src_h - 1)
    xs = (np.arange(width) * src_w // max(width, 1)).clip(0, src_w - 1)
    return raster[ys[:, None], xs[None, :]]


def raster_to_lines(raster: np.ndarray) -> list[str]:
    """Render a bilevel raster as half-block text, two pixel rows per line.

    White pixels are drawn, black ones left blank. An odd last row is
    paired with a black row.
    """
    white = raster >= 128
    h = white.shape[0]
    lines = []
    for y in range(0, h, 2):
        top = white[y]
        bottom = white[y + 1] if y + 1 < h else np.zeros_like(top)
        lines.append("".join(HALF_BLOCKS[(bool(t), bool(b))] for t, b in zip(top, bottom)))
    return lines


class RasterPreview(Widget):
    """Shows the dithered raster scaled to fit the widget."""

    DEFAULT_CSS = """
    RasterPreview {
        width: 1fr;
        height: 1fr;
        overflow: auto;
        background: $surface;
    }

    RasterPreview #preview-content {
        width: auto;
        height: auto;
    }
    """

    def __init__(self, **kwargs) -> None:
        super().__init__(**kwargs)
        self._image: ProcessedImage | None = None

    def compose(self) -> ComposeResult:
        yield Static(EMPTY_MESSAGE, id="preview-content")

    def update_image(self, image: ProcessedImage) -> None:
        """Show a newly processed image."""
        self._image = image
        self._redraw()

    def on_resize(self, event: Resize) -> None:
        if self._image is not None:
            self._redraw()

    def _redraw(self) -> None:
        image = self._image
        content = self.query_one("#preview-content", Static)
        if image is None or image.raster.size == 0:
            content.update(EMPTY_MESSAGE)
            return

        cols = self.size.width or 80
        rows = self.size.height or 24
        px_w, px_h = fit_to_cells(image.width, image.height, max_cols=cols, max_rows=rows)
        small = resample(image.raster, px_w, px_h)
        content.update(Text("\n".join(raster_to_lines(small))))

    @property
    def current_image(self) -> ProcessedImage | None:
        return self._image
