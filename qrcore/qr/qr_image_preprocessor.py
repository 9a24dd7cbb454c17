"""
QR Image Preprocessor Module.

This module prepares images for finder-pattern scanning and rectification.
Converts any supported input to grayscale and binarizes it into a dark mask.

Supports two modes:
- "minimal": Grayscale → Otsu threshold (fast)
- "full": Grayscale → Denoise → Otsu threshold (thorough)

Follows the Single Responsibility Principle (SRP) from SOLID.
"""

import logging
from typing import Optional

import cv2
import numpy as np


class QrImagePreprocessor:
    """
    Image preprocessor for QR code detection.

    Produces the boolean dark mask the finder scanner walks over.
    Images without enough contrast give an all-light mask, so a
    uniform image can never contain a finder pattern.

    Modes:
    - "minimal": Otsu only (for clean images)
    - "full": Median blur before Otsu (for noisy images)
    """

    # Supported preprocessing modes
    MODE_MINIMAL = "minimal"
    MODE_FULL = "full"
    SUPPORTED_MODES = [MODE_MINIMAL, MODE_FULL]

    # Minimum gray level spread for an image to be binarized
    DEFAULT_MIN_CONTRAST = 20

    def __init__(
        self,
        mode: str = "minimal",
        minContrast: int = DEFAULT_MIN_CONTRAST,
        logger: Optional[logging.Logger] = None
    ):
        """
        Initialize QrImagePreprocessor.

        Args:
            mode: Preprocessing mode ("minimal" or "full").
            minContrast: Minimum (max - min) gray level spread. Flatter
                        images are treated as containing no dark pixels.
            logger: Logger instance for debug output.
        """
        self._logger = logger or logging.getLogger(__name__)
        self._mode = self.MODE_MINIMAL
        self._minContrast = minContrast
        self.setMode(mode)

        self._logger.debug(
            f"QrImagePreprocessor initialized "
            f"(mode={self._mode}, minContrast={minContrast})"
        )

    @property
    def mode(self) -> str:
        """Get current preprocessing mode."""
        return self._mode

    @property
    def minContrast(self) -> int:
        """Get the minimum contrast required for binarization."""
        return self._minContrast

    @staticmethod
    def toGray(image: np.ndarray) -> np.ndarray:
        """
        Convert an image to a single-channel uint8 array.

        Args:
            image: Grayscale, BGR or BGRA image.

        Returns:
            Grayscale image (a view of the input when already grayscale).
        """
        if image.ndim == 2:
            return np.ascontiguousarray(image)

        channels = image.shape[2]
        if channels == 1:
            return np.ascontiguousarray(image[:, :, 0])
        if channels == 4:
            return cv2.cvtColor(image, cv2.COLOR_BGRA2GRAY)
        return cv2.cvtColor(image, cv2.COLOR_BGR2GRAY)

    def binarize(self, image: np.ndarray) -> np.ndarray:
        """
        Binarize an image for finder-pattern scanning.

        Args:
            image: Input image (grayscale, BGR or BGRA).

        Returns:
            Boolean mask, True where the pixel is dark.
        """
        gray = self.toGray(image)

        if gray.size == 0:
            return np.zeros(gray.shape, dtype=bool)

        contrast = int(gray.max()) - int(gray.min())
        if contrast < self._minContrast:
            self._logger.debug(
                f"Binarize: contrast {contrast} < {self._minContrast}, no dark pixels"
            )
            return np.zeros(gray.shape, dtype=bool)

        if self._mode == self.MODE_FULL:
            gray = self._applyDenoise(gray)

        gray = np.ascontiguousarray(gray)
        threshold, _ = cv2.threshold(gray, 0, 255, cv2.THRESH_BINARY + cv2.THRESH_OTSU)
        self._logger.debug(f"Binarize: Otsu threshold={threshold:.0f}")

        # THRESH_BINARY keeps pixels above the threshold light
        return gray <= threshold

    def _applyDenoise(self, gray: np.ndarray) -> np.ndarray:
        """
        Apply median blur for denoising.

        Args:
            gray: Input grayscale image.

        Returns:
            Denoised image.
        """
        result = cv2.medianBlur(np.ascontiguousarray(gray), 3)
        self._logger.debug("Denoise: median blur (kernel=3)")
        return result

    # ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
    # Configuration Methods
    # ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━

    def setMode(self, mode: str) -> None:
        """
        Set preprocessing mode.

        Args:
            mode: "minimal" or "full"
        """
        if mode in self.SUPPORTED_MODES:
            self._mode = mode
            self._logger.debug(f"Preprocessing mode set to: {mode}")
        else:
            self._logger.warning(
                f"Invalid mode '{mode}', keeping current mode: {self._mode}"
            )

    def setMinContrast(self, minContrast: int) -> None:
        """
        Set the minimum contrast for binarization.

        Args:
            minContrast: Gray level spread (0-255).
        """
        self._minContrast = minContrast
        self._logger.debug(f"Minimum contrast set to: {minContrast}")
