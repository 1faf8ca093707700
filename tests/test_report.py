"""Tests for decode diagnostics."""

from rich.console import Console

from tiff_dither.core.binary import Endianness, TiffHeader
from tiff_dither.core.descriptor import ImageDescriptor
from tiff_dither.core.reader import decode_tiff
from tiff_dither.core.report import (
    ConsoleDiagnostics,
    Diagnostics,
    byte_order_label,
    descriptor_table,
    directory_table,
)
from tiff_dither.core.tags import DirectoryEntry


def _console():
    return Console(record=True, width=160, color_system=None)


class TestDiagnostics:
    def test_base_class_is_silent(self, make_tiff):
        # Nothing to assert beyond "does not raise"
        decode_tiff(make_tiff(2, 2, bytes(12)), Diagnostics())

    def test_console_reports_every_checkpoint(self, make_tiff):
        console = _console()
        decode_tiff(make_tiff(2, 2, bytes(12), order="big"), ConsoleDiagnostics(console))
        text = console.export_text()
        assert "Big-Endian" in text
        assert "Image File Directory (9 entries)" in text
        assert "StripOffsets" in text
        assert "Image width" in text


class TestTables:
    def test_directory_rows(self):
        entries = [
            DirectoryEntry(256, 3, 1, 640),
            DirectoryEntry(258, 3, 3, 500),
        ]
        console = _console()
        console.print(directory_table(entries))
        text = console.export_text()
        assert "ImageWidth" in text
        assert "BitsPerSample" in text
        assert "offset" in text
        assert "value" in text

    def test_descriptor_summary(self):
        console = _console()
        console.print(descriptor_table(ImageDescriptor(width=4, height=3, samples_per_pixel=3)))
        text = console.export_text()
        assert "Width * Height * Samples" in text
        assert "36" in text

    def test_byte_order_label(self):
        assert byte_order_label(Endianness.LITTLE) == "Little-Endian"
        assert byte_order_label(TiffHeader(Endianness.BIG, 8).endianness) == "Big-Endian"
