"""IFD table widget for the TUI."""

from __future__ import annotations

from typing import Sequence

from textual.app import ComposeResult
from textual.widget import Widget
from textual.widgets import DataTable, Static

from tiff_dither.core.descriptor import ImageDescriptor
from tiff_dither.core.fieldtypes import field_type_name
from tiff_dither.core.tags import DirectoryEntry, tag_name

COLUMNS = ("Tag", "Name", "Type", "Count", "Value/Offset", "Kind")


class DirectoryView(Widget):
    """The decoded directory, one row per entry in file order."""

    DEFAULT_CSS = """
    DirectoryView {
        width: 64;
        height: 1fr;
        border-right: solid $accent;
    }

    DirectoryView DataTable {
        height: 1fr;
    }

    DirectoryView #directory-summary {
        height: auto;
        padding: 0 1;
        color: $text-muted;
    }
    """

    def compose(self) -> ComposeResult:
        yield DataTable(id="directory-table", cursor_type="row", zebra_stripes=True)
        yield Static("", id="directory-summary")

    def on_mount(self) -> None:
        self.query_one(DataTable).add_columns(*COLUMNS)

    def show(self, entries: Sequence[DirectoryEntry], descriptor: ImageDescriptor) -> None:
        table = self.query_one(DataTable)
        table.clear()
        for entry in entries:
            table.add_row(
                str(entry.tag_id),
                tag_name(entry.tag_id),
                field_type_name(entry.field_type),
                str(entry.count),
                str(entry.value_or_offset),
                "value" if entry.is_inline else "offset",
            )
        self.query_one("#directory-summary", Static).update(
            f"{descriptor.width}x{descriptor.height}, "
            f"{descriptor.samples_per_pixel or 1} sample(s)/pixel, "
            f"strip at {descriptor.strip_offset} ({descriptor.strip_byte_count} bytes)"
        )
