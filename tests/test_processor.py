"""Tests for the processing pipeline."""

import numpy as np
import pytest

from tiff_dither.core.dither import DitherMethod
from tiff_dither.core.errors import NotATiff
from tiff_dither.core.greyscale import GreyMode
from tiff_dither.core.processor import (
    ProcessedImage,
    Settings,
    greyscale_from_bytes,
    process_bytes,
    process_file,
)


def _grey_rgb(values):
    """Interleaved RGB bytes where every pixel is (v, v, v)."""
    return bytes(v for v in values for _ in range(3))


class TestSettings:
    def test_default_settings(self):
        s = Settings()
        assert s.method == DitherMethod.FLOYD_STEINBERG
        assert s.grey_mode == GreyMode.RMS
        assert s.invert is False

    def test_hash_deterministic(self):
        assert Settings().hash() == Settings().hash()

    def test_hash_changes_with_settings(self):
        assert Settings().hash() != Settings(method=DitherMethod.THRESHOLD).hash()
        assert Settings().hash() != Settings(invert=True).hash()


class TestProcessBytes:
    def test_two_by_two_end_to_end(self, make_tiff, order):
        data = make_tiff(2, 2, _grey_rgb([100, 150, 200, 50]), order=order)
        result = process_bytes(data)
        assert isinstance(result, ProcessedImage)
        assert result.raster.tolist() == [[0, 255], [255, 0]]
        assert (result.width, result.height) == (2, 2)

    def test_single_channel_source(self, make_tiff):
        data = make_tiff(3, 2, bytes([128] * 6), samples_per_pixel=1)
        result = process_bytes(data)
        assert result.raster.tolist() == [[255, 0, 255], [0, 255, 0]]

    def test_threshold_method(self, make_tiff):
        data = make_tiff(2, 2, _grey_rgb([100, 150, 200, 50]))
        result = process_bytes(data, Settings(method=DitherMethod.THRESHOLD))
        assert result.raster.tolist() == [[0, 255], [255, 0]]

    def test_invert(self, make_tiff):
        data = make_tiff(1, 2, _grey_rgb([0, 255]))
        result = process_bytes(data, Settings(invert=True))
        assert result.raster.tolist() == [[255], [0]]

    def test_greyscale_stage(self, make_tiff):
        data = make_tiff(1, 1, bytes([255, 0, 0]))
        _, grey = greyscale_from_bytes(data, Settings())
        assert grey.tolist() == [[147]]
        _, luma = greyscale_from_bytes(data, Settings(grey_mode=GreyMode.LUMA))
        assert luma.tolist() == [[76]]

    def test_output_is_bilevel(self, make_tiff):
        rng = np.random.default_rng(5)
        data = make_tiff(8, 6, rng.integers(0, 256, 8 * 6 * 3, dtype=np.uint8).tobytes())
        for method in DitherMethod:
            raster = process_bytes(data, Settings(method=method)).raster
            assert raster.shape == (6, 8)
            assert set(np.unique(raster).tolist()) <= {0, 255}

    def test_errors_propagate(self):
        with pytest.raises(NotATiff):
            process_bytes(b"\x00\x00\x00\x00")


class TestProcessFile:
    def test_reads_from_disk(self, tmp_path, make_tiff):
        path = tmp_path / "in.tif"
        path.write_bytes(make_tiff(2, 2, _grey_rgb([100, 150, 200, 50]), order="big"))
        result = process_file(path)
        assert result.raster.tolist() == [[0, 255], [255, 0]]
        assert result.decoded.endianness.value == "big"

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            process_file(tmp_path / "missing.tif")
