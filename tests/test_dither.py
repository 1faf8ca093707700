"""Tests for the bilevel ditherers."""

import numpy as np
import pytest

from tiff_dither.core.dither import (
    DitherMethod,
    dither,
    floyd_steinberg,
    forward_dither,
    threshold,
)


def _raster(rows):
    return np.array(rows, dtype=np.uint8)


def _pixelwise_floyd_steinberg(raster):
    """Straight per-pixel diffusion over a list copy, for cross-checking."""
    img = raster.astype(int).tolist()
    h, w = len(img), len(img[0])
    for y in range(h):
        for x in range(w):
            old = img[y][x]
            new = 0 if old < 128 else 255
            img[y][x] = new
            err = old - new
            for dx, dy, weight in ((1, 0, 7), (-1, 1, 3), (0, 1, 5), (1, 1, 1)):
                nx, ny = x + dx, y + dy
                if 0 <= nx < w and ny < h:
                    img[ny][nx] = min(255, max(0, img[ny][nx] + ((err * weight) >> 4)))
    return img


class TestFloydSteinberg:
    def test_two_by_two_scenario(self):
        raster = _raster([[100, 150], [200, 50]])
        floyd_steinberg(raster)
        assert raster.tolist() == [[0, 255], [255, 0]]

    def test_mutates_in_place(self):
        raster = _raster([[100, 150], [200, 50]])
        result = floyd_steinberg(raster)
        assert result is raster

    def test_single_pixel_thresholded(self):
        for value, expected in ((0, 0), (127, 0), (128, 255), (255, 255)):
            raster = _raster([[value]])
            floyd_steinberg(raster)
            assert raster.tolist() == [[expected]]

    def test_single_row(self):
        # 100 -> 0 (err 100, +43 east); 143 -> 255 (err -112, -49 east); 51 -> 0
        raster = _raster([[100, 100, 100]])
        floyd_steinberg(raster)
        assert raster.tolist() == [[0, 255, 0]]

    def test_single_column(self):
        # 100 -> 0, south gets 500 >> 4 = 31; 131 -> 255, south gets (-124 * 5) >> 4 = -39
        raster = _raster([[100], [100], [100]])
        floyd_steinberg(raster)
        assert raster.tolist() == [[0], [255], [0]]

    def test_mid_grey_checkerboard(self):
        raster = _raster([[128, 128, 128], [128, 128, 128]])
        floyd_steinberg(raster)
        assert raster.tolist() == [[255, 0, 255], [0, 255, 0]]

    def test_negative_error_rounds_down(self):
        # err -62 east: (-62 * 7) >> 4 == -28 (floor of -27.125), so 155 -> 127
        raster = _raster([[193, 155]])
        floyd_steinberg(raster)
        assert raster.tolist() == [[255, 0]]

    def test_clamps_high(self):
        # 250 + 55 would overflow a byte; clamped to 255, so no error follows
        raster = _raster([[127, 250, 128]])
        floyd_steinberg(raster)
        assert raster.tolist() == [[0, 255, 255]]

    def test_clamps_low(self):
        # 5 - 56 clamps to 0 instead of wrapping around
        raster = _raster([[128, 5, 127]])
        floyd_steinberg(raster)
        assert raster.tolist() == [[255, 0, 0]]

    def test_bilevel_input_unchanged(self):
        rng = np.random.default_rng(7)
        raster = rng.choice(np.array([0, 255], dtype=np.uint8), size=(9, 13))
        expected = raster.copy()
        floyd_steinberg(raster)
        np.testing.assert_array_equal(raster, expected)

    def test_output_only_two_values(self):
        rng = np.random.default_rng(0)
        raster = rng.integers(0, 256, size=(20, 30), dtype=np.uint8)
        floyd_steinberg(raster)
        assert set(np.unique(raster).tolist()) <= {0, 255}

    def test_deterministic(self):
        rng = np.random.default_rng(1)
        source = rng.integers(0, 256, size=(16, 16), dtype=np.uint8)
        a, b = source.copy(), source.copy()
        floyd_steinberg(a)
        floyd_steinberg(b)
        np.testing.assert_array_equal(a, b)

    def test_mean_roughly_preserved(self):
        raster = np.full((32, 32), 64, dtype=np.uint8)
        floyd_steinberg(raster)
        assert abs(raster.mean() - 64) < 16

    def test_matches_pixelwise_diffusion(self):
        rng = np.random.default_rng(21)
        raster = rng.integers(0, 256, size=(23, 31), dtype=np.uint8)
        expected = _pixelwise_floyd_steinberg(raster)
        assert floyd_steinberg(raster.copy()).tolist() == expected

    def test_view_written_through(self):
        base = np.full((4, 6), 200, dtype=np.uint8)
        view = base[:, ::2]
        floyd_steinberg(view)
        assert set(np.unique(base[:, ::2]).tolist()) <= {0, 255}
        assert (base[:, 1::2] == 200).all()

    def test_large_raster(self):
        raster = np.full((400, 400), 100, dtype=np.uint8)
        out = floyd_steinberg(raster)
        assert out is raster
        assert abs(out.mean() - 100) < 8

    def test_empty_raster(self):
        raster = np.zeros((0, 5), dtype=np.uint8)
        floyd_steinberg(raster)
        assert raster.shape == (0, 5)

    def test_rejects_wrong_dtype(self):
        with pytest.raises(ValueError, match="uint8"):
            floyd_steinberg(np.zeros((2, 2), dtype=np.float64))

    def test_rejects_wrong_shape(self):
        with pytest.raises(ValueError, match="2D"):
            floyd_steinberg(np.zeros((2, 2, 3), dtype=np.uint8))


class TestForwardDither:
    def test_row(self):
        # 100 -> 0 (err 100); 200 -> 255 (err -55); 45 -> 0
        raster = _raster([[100, 100, 100]])
        forward_dither(raster)
        assert raster.tolist() == [[0, 255, 0]]

    def test_error_carries_across_rows(self):
        raster = _raster([[100], [100]])
        forward_dither(raster)
        assert raster.tolist() == [[0], [255]]

    def test_non_contiguous_view(self):
        base = np.full((4, 4), 100, dtype=np.uint8)
        view = base[:, ::2]
        forward_dither(view)
        assert view.tolist() == [[0, 255], [0, 255], [0, 0], [255, 0]]
        assert base[0, 0] == 0 and base[0, 2] == 255


class TestThreshold:
    def test_threshold(self):
        raster = _raster([[0, 127, 128, 255]])
        threshold(raster)
        assert raster.tolist() == [[0, 0, 255, 255]]


class TestDispatch:
    @pytest.mark.parametrize("method", list(DitherMethod))
    def test_all_methods_bilevel(self, method):
        raster = np.linspace(0, 255, 60).astype(np.uint8).reshape(6, 10)
        dither(raster, method)
        assert set(np.unique(raster).tolist()) <= {0, 255}

    def test_accepts_string(self):
        raster = _raster([[100, 150], [200, 50]])
        dither(raster, "floyd-steinberg")
        assert raster.tolist() == [[0, 255], [255, 0]]

    def test_default_is_floyd_steinberg(self):
        a = _raster([[128, 128, 128], [128, 128, 128]])
        dither(a)
        assert a.tolist() == [[255, 0, 255], [0, 255, 0]]
