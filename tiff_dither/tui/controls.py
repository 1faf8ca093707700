"""Settings control panel for the TUI."""

from __future__ import annotations

from textual.app import ComposeResult
from textual.containers import Vertical
from textual.message import Message
from textual.widget import Widget
from textual.widgets import Checkbox, Label, Select, Static

from tiff_dither.core.dither import DitherMethod
from tiff_dither.core.greyscale import GreyMode
from tiff_dither.core.processor import Settings


def _next_member(current, members: list):
    return members[(members.index(current) + 1) % len(members)]


class ControlPanel(Widget):
    """Settings panel for the dither method, greyscale mode and invert."""

    DEFAULT_CSS = """
    ControlPanel {
        width: 30;
        height: 1fr;
        background: $panel;
        padding: 1;
        border-left: solid $accent;
    }

    ControlPanel Label {
        margin-top: 1;
        color: $text-muted;
    }

    ControlPanel Select {
        width: 100%;
    }

    ControlPanel Checkbox {
        margin-top: 1;
    }

    ControlPanel #panel-title {
        text-style: bold;
        color: $text;
        margin-bottom: 1;
    }
    """

    class SettingsChanged(Message):
        """Posted when any setting changes."""
        def __init__(self, settings: Settings) -> None:
            super().__init__()
            self.settings = settings

    def __init__(self, settings: Settings | None = None, **kwargs) -> None:
        super().__init__(**kwargs)
        self._settings = settings or Settings()

    def compose(self) -> ComposeResult:
        with Vertical():
            yield Static("Settings", id="panel-title")

            yield Label("Dither method")
            yield Select(
                [(m.value, m.value) for m in DitherMethod],
                value=self._settings.method.value,
                allow_blank=False,
                id="method-select",
            )

            yield Label("Greyscale")
            yield Select(
                [(g.value, g.value) for g in GreyMode],
                value=self._settings.grey_mode.value,
                allow_blank=False,
                id="grey-select",
            )

            yield Checkbox("Invert", value=self._settings.invert, id="invert-check")

    @property
    def settings(self) -> Settings:
        return self._settings

    def _update_settings(self, **overrides) -> None:
        """Create new settings with overrides and emit change."""
        self._settings = Settings(
            method=overrides.get("method", self._settings.method),
            grey_mode=overrides.get("grey_mode", self._settings.grey_mode),
            invert=overrides.get("invert", self._settings.invert),
        )
        self.post_message(self.SettingsChanged(self._settings))

    def on_select_changed(self, event: Select.Changed) -> None:
        if event.value is Select.BLANK:
            return
        if event.select.id == "method-select":
            method = DitherMethod(event.value)
            if method != self._settings.method:
                self._update_settings(method=method)
        elif event.select.id == "grey-select":
            grey_mode = GreyMode(event.value)
            if grey_mode != self._settings.grey_mode:
                self._update_settings(grey_mode=grey_mode)

    def on_checkbox_changed(self, event: Checkbox.Changed) -> None:
        if event.checkbox.id == "invert-check" and event.value != self._settings.invert:
            self._update_settings(invert=event.value)

    # Keyboard shortcuts go through the widgets so they stay in sync.

    def cycle_method(self) -> None:
        nxt = _next_member(self._settings.method, list(DitherMethod))
        self.query_one("#method-select", Select).value = nxt.value

    def cycle_grey_mode(self) -> None:
        nxt = _next_member(self._settings.grey_mode, list(GreyMode))
        self.query_one("#grey-select", Select).value = nxt.value

    def toggle_invert(self) -> None:
        self.query_one("#invert-check", Checkbox).toggle()
