"""Main Textual application: directory table plus dithered preview."""

from __future__ import annotations

from pathlib import Path

from textual import work
from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.containers import Horizontal
from textual.widgets import Footer, Header, Static
from textual.worker import get_current_worker

from tiff_dither.core.errors import TiffDecodeError
from tiff_dither.core.processor import ProcessedImage, Settings, process_bytes
from tiff_dither.core.reader import read_file
from tiff_dither.core.writer import default_output_path, save_output
from tiff_dither.tui.controls import ControlPanel
from tiff_dither.tui.directory import DirectoryView
from tiff_dither.tui.preview import RasterPreview
from tiff_dither.utils.cache import ResultCache


class TiffViewerApp(App):
    """Interactive viewer for one TIFF."""

    TITLE = "tiff-dither"
    CSS = """
    #main-area {
        height: 1fr;
        width: 1fr;
    }

    #status-bar {
        height: 1;
        background: $panel;
        padding: 0 1;
        color: $text-muted;
    }
    """

    BINDINGS = [
        Binding("q", "quit", "Quit", priority=True),
        Binding("m", "cycle_method", "Method"),
        Binding("g", "cycle_grey", "Greyscale"),
        Binding("i", "toggle_invert", "Invert"),
        Binding("s", "save", "Save"),
        Binding("tab", "toggle_panel", "Toggle Panel"),
    ]

    def __init__(self, input_path: str, **kwargs) -> None:
        super().__init__(**kwargs)
        self._input_path = Path(input_path).resolve()
        self._data: bytes | None = None
        self._settings = Settings()
        self._cache = ResultCache(max_size=16)
        self._panel_visible = True

    def compose(self) -> ComposeResult:
        yield Header()
        with Horizontal(id="main-area"):
            yield DirectoryView(id="directory")
            yield RasterPreview()
            yield ControlPanel(self._settings, id="control-panel")
        yield Static("Ready", id="status-bar")
        yield Footer()

    def on_mount(self) -> None:
        self.title = f"tiff-dither - {self._input_path.name}"
        try:
            self._data = read_file(self._input_path)
        except OSError as e:
            self._update_status(f"Error: {e}")
            return
        self._render_image()

    def _update_status(self, text: str) -> None:
        self.query_one("#status-bar", Static).update(text)

    @work(thread=True, exclusive=True, group="preview")
    def _render_image(self) -> None:
        """Decode and dither in a background thread."""
        if self._data is None:
            return

        worker = get_current_worker()
        settings = self._settings
        key = str(self._input_path)

        cached = self._cache.get(key, settings.hash())
        if cached is not None:
            if not worker.is_cancelled:
                self.call_from_thread(self._display, cached)
            return

        self.call_from_thread(self._update_status, f"Dithering ({settings.method.value})...")
        try:
            processed = process_bytes(self._data, settings)
        except TiffDecodeError as e:
            if not worker.is_cancelled:
                self.call_from_thread(self._update_status, f"Error [{e.code}]: {e}")
            return

        self._cache.put(key, settings.hash(), processed)
        if not worker.is_cancelled:
            self.call_from_thread(self._display, processed)

    def _display(self, image: ProcessedImage) -> None:
        """Show a processed image (called on main thread)."""
        self.query_one(DirectoryView).show(image.decoded.entries, image.descriptor)
        self.query_one(RasterPreview).update_image(image)
        s = image.settings
        self._update_status(
            f"{image.width}x{image.height} {image.decoded.endianness.value}-endian | "
            f"{s.method.value}, {s.grey_mode.value}{', inverted' if s.invert else ''}"
        )

    # --- Actions ---

    def action_cycle_method(self) -> None:
        self.query_one(ControlPanel).cycle_method()

    def action_cycle_grey(self) -> None:
        self.query_one(ControlPanel).cycle_grey_mode()

    def action_toggle_invert(self) -> None:
        self.query_one(ControlPanel).toggle_invert()

    def action_toggle_panel(self) -> None:
        panel = self.query_one(ControlPanel)
        self._panel_visible = not self._panel_visible
        panel.display = self._panel_visible

    def action_save(self) -> None:
        image = self.query_one(RasterPreview).current_image
        if image is None:
            self._update_status("Nothing to save")
            return
        out = default_output_path(self._input_path)
        try:
            save_output(image.raster, out)
        except (OSError, ValueError) as e:
            self._update_status(f"Save error: {e}")
            return
        self._update_status(f"Saved to {out}")

    # --- Message handlers ---

    def on_control_panel_settings_changed(self, event: ControlPanel.SettingsChanged) -> None:
        self._settings = event.settings
        self._render_image()


def run_app(input_path: str) -> None:
    """Launch the TUI application."""
    app = TiffViewerApp(input_path=input_path)
    app.run()
