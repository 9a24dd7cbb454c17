"""Unit tests for QrImagePreprocessor.

Covers grayscale conversion of every supported layout, Otsu
binarization and the low-contrast guard.
"""
import cv2
import numpy as np
import pytest

from qrcore.qr.qr_image_preprocessor import QrImagePreprocessor


class TestToGray:
    """Test suite for grayscale conversion."""

    def test_grayscale_passthrough(self, markerImage):
        gray = QrImagePreprocessor.toGray(markerImage)
        assert gray.shape == markerImage.shape
        assert np.array_equal(gray, markerImage)

    def test_bgr_input(self, markerImage):
        bgr = cv2.cvtColor(markerImage, cv2.COLOR_GRAY2BGR)
        gray = QrImagePreprocessor.toGray(bgr)
        assert gray.ndim == 2
        assert np.array_equal(gray, markerImage)

    def test_bgra_input(self, markerImage):
        bgra = cv2.cvtColor(markerImage, cv2.COLOR_GRAY2BGRA)
        gray = QrImagePreprocessor.toGray(bgra)
        assert gray.ndim == 2
        assert np.array_equal(gray, markerImage)

    def test_single_channel_input(self, markerImage):
        gray = QrImagePreprocessor.toGray(markerImage[:, :, np.newaxis])
        assert gray.ndim == 2
        assert gray.flags["C_CONTIGUOUS"]
        assert np.array_equal(gray, markerImage)


class TestBinarize:
    """Test suite for dark mask generation."""

    def test_dark_modules_are_true(self, markerImage):
        mask = QrImagePreprocessor().binarize(markerImage)
        assert mask.dtype == bool
        assert mask.shape == markerImage.shape
        assert mask[50, 50]          # outer ring of the top-left marker
        assert not mask[60, 60]      # light ring
        assert mask[80, 80]          # marker center
        assert not mask[10, 10]      # margin

    def test_uniform_image_has_no_dark_pixels(self, blankImage):
        mask = QrImagePreprocessor().binarize(blankImage)
        assert not mask.any()

    def test_low_contrast_guard(self, markerImage):
        flat = np.where(markerImage == 0, 200, 210).astype(np.uint8)
        preprocessor = QrImagePreprocessor(minContrast=20)
        assert not preprocessor.binarize(flat).any()

        preprocessor.setMinContrast(5)
        assert preprocessor.binarize(flat)[80, 80]

    def test_full_mode_keeps_markers(self, markerImage):
        preprocessor = QrImagePreprocessor(mode="full")
        mask = preprocessor.binarize(markerImage)
        assert mask[80, 80]
        assert not mask[10, 10]


class TestConfiguration:
    """Test suite for mode handling."""

    def test_default_mode(self):
        assert QrImagePreprocessor().mode == "minimal"

    @pytest.mark.parametrize("mode", ["minimal", "full"])
    def test_set_supported_mode(self, mode):
        preprocessor = QrImagePreprocessor()
        preprocessor.setMode(mode)
        assert preprocessor.mode == mode

    def test_invalid_mode_keeps_current(self):
        preprocessor = QrImagePreprocessor(mode="full")
        preprocessor.setMode("aggressive")
        assert preprocessor.mode == "full"

    def test_invalid_initial_mode_falls_back(self):
        assert QrImagePreprocessor(mode="unknown").mode == "minimal"
