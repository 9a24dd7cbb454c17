"""
ZXing Symbol Decoder Implementation.

This module decodes rectified QR symbols using the zxing-cpp library.
zxing-cpp is a high-performance C++ implementation with Python bindings.

Follows the Single Responsibility Principle (SRP) from SOLID.
"""

import logging
from typing import Optional

import cv2

from qrcore.interfaces.rectifier_interface import RectifiedSymbol
from qrcore.interfaces.symbol_decoder_interface import ISymbolDecoder


class ZxingSymbolDecoder(ISymbolDecoder):
    """
    Symbol decoder using zxing-cpp library.

    The rectified symbol is padded with a white quiet zone first, since
    the rectifier crops the code exactly at its boundary.
    """

    def __init__(
        self,
        tryRotate: bool = True,
        tryDownscale: bool = True,
        quietZoneRatio: float = 0.2,
        logger: Optional[logging.Logger] = None
    ):
        """
        Initialize ZxingSymbolDecoder.

        Args:
            tryRotate: Try rotated symbols (90/270 degrees)
            tryDownscale: Try downscaled versions for better detection
            quietZoneRatio: White border added on each side, as a fraction of the symbol size
            logger: Logger instance for debug output
        """
        self._tryRotate = tryRotate
        self._tryDownscale = tryDownscale
        self._quietZoneRatio = quietZoneRatio
        self._logger = logger or logging.getLogger(__name__)
        self._zxingcpp = None

        self._logger.info(
            f"ZxingSymbolDecoder initialized "
            f"(tryRotate={tryRotate}, tryDownscale={tryDownscale})"
        )

    def _ensureZxing(self) -> None:
        """Lazily import zxing-cpp module."""
        if self._zxingcpp is None:
            try:
                import zxingcpp
                self._zxingcpp = zxingcpp
                self._logger.info("zxing-cpp module loaded successfully")
            except ImportError as e:
                self._logger.error(
                    f"Failed to import zxing-cpp. "
                    f"Please install: pip install zxing-cpp. Error: {e}"
                )
                raise

    def decode(self, symbol: RectifiedSymbol) -> str:
        """
        Decode a rectified symbol.

        Args:
            symbol: Rectified binary QR code

        Returns:
            Decoded text, or "" if nothing could be decoded
        """
        self._ensureZxing()

        border = int(round(symbol.size * self._quietZoneRatio))
        padded = cv2.copyMakeBorder(
            symbol.image, border, border, border, border,
            cv2.BORDER_CONSTANT, value=255
        )

        try:
            barcodes = self._zxingcpp.read_barcodes(
                padded,
                formats=self._zxingcpp.BarcodeFormat.QRCode,
                try_rotate=self._tryRotate,
                try_downscale=self._tryDownscale
            )
        except Exception as e:
            self._logger.error(f"Error during symbol decoding: {e}")
            return ""

        for barcode in barcodes:
            if not barcode.valid:
                continue
            self._logger.debug(f"Symbol decoded: {barcode.text}")
            return barcode.text

        self._logger.debug("No decodable symbol")
        return ""

    def close(self) -> None:
        """Drop the module reference; it is re-imported on next use."""
        self._zxingcpp = None
