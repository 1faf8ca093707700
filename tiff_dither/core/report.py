"""Decode diagnostics.

The decoder reports to a ``Diagnostics`` object at three checkpoints:
after the header is validated, after the directory is read and after the
descriptor is built. The base class ignores everything;
``ConsoleDiagnostics`` prints rich tables.
"""

from __future__ import annotations

from typing import Sequence

from rich.console import Console
from rich.table import Table

from tiff_dither.core.binary import Endianness, TiffHeader
from tiff_dither.core.descriptor import ImageDescriptor
from tiff_dither.core.fieldtypes import field_type_name
from tiff_dither.core.tags import DirectoryEntry, tag_name


class Diagnostics:
    """Checkpoint hooks. Override the ones you need."""

    def on_header(self, header: TiffHeader) -> None:
        pass

    def on_directory(self, entries: Sequence[DirectoryEntry]) -> None:
        pass

    def on_descriptor(self, descriptor: ImageDescriptor) -> None:
        pass


def byte_order_label(endianness: Endianness) -> str:
    return "Little-Endian" if endianness == Endianness.LITTLE else "Big-Endian"


def directory_table(entries: Sequence[DirectoryEntry]) -> Table:
    """Render the IFD as a table, one row per entry in file order."""
    table = Table(title=f"Image File Directory ({len(entries)} entries)")
    table.add_column("#", justify="right")
    table.add_column("Tag", justify="right")
    table.add_column("Name")
    table.add_column("Type")
    table.add_column("Count", justify="right")
    table.add_column("Value/Offset", justify="right")
    table.add_column("Size", justify="right")
    table.add_column("Kind")

    for i, entry in enumerate(entries):
        table.add_row(
            str(i),
            str(entry.tag_id),
            tag_name(entry.tag_id),
            field_type_name(entry.field_type),
            str(entry.count),
            str(entry.value_or_offset),
            str(entry.size),
            "value" if entry.is_inline else "offset",
        )
    return table


def descriptor_table(descriptor: ImageDescriptor) -> Table:
    table = Table(title="Image", show_header=False)
    table.add_column("Field")
    table.add_column("Value", justify="right")
    for label, value in (
        ("Image width", descriptor.width),
        ("Image height", descriptor.height),
        ("Samples per pixel", descriptor.samples_per_pixel),
        ("Bits per sample", ", ".join(map(str, descriptor.bits_per_sample)) or "-"),
        ("Rows per strip", descriptor.rows_per_strip),
        ("Strip offset", descriptor.strip_offset),
        ("Strip byte count", descriptor.strip_byte_count),
        ("Compression", descriptor.compression),
        ("Photometric", descriptor.photometric),
        (
            "Width * Height * Samples",
            descriptor.pixel_count * max(descriptor.samples_per_pixel, 1),
        ),
    ):
        table.add_row(label, str(value))
    return table


class ConsoleDiagnostics(Diagnostics):
    """Print each checkpoint to a rich console (stderr by default)."""

    def __init__(self, console: Console | None = None) -> None:
        self.console = console or Console(stderr=True)

    def on_header(self, header: TiffHeader) -> None:
        self.console.print(
            f"It's a [bold]{byte_order_label(header.endianness)}[/bold] TIFF, "
            f"first IFD at offset {header.ifd_offset}."
        )

    def on_directory(self, entries: Sequence[DirectoryEntry]) -> None:
        self.console.print(directory_table(entries))

    def on_descriptor(self, descriptor: ImageDescriptor) -> None:
        self.console.print(descriptor_table(descriptor))
