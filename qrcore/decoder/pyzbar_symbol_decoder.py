"""
Pyzbar Symbol Decoder Implementation.

This module decodes rectified QR symbols using the pyzbar library.
Follows the Single Responsibility Principle (SRP) and
Dependency Inversion Principle (DIP) from SOLID.
"""

import logging
from typing import List, Optional

import cv2
from pyzbar.pyzbar import decode, ZBarSymbol, Decoded

from qrcore.interfaces.rectifier_interface import RectifiedSymbol
from qrcore.interfaces.symbol_decoder_interface import ISymbolDecoder


class PyzbarSymbolDecoder(ISymbolDecoder):
    """
    Symbol decoder using pyzbar (zbar) library.
    """

    def __init__(
        self,
        quietZoneRatio: float = 0.2,
        logger: Optional[logging.Logger] = None
    ):
        """
        Initialize PyzbarSymbolDecoder.

        Args:
            quietZoneRatio: White border added on each side, as a fraction of the symbol size
            logger: Logger instance for debug output
        """
        self._quietZoneRatio = quietZoneRatio
        self._logger = logger or logging.getLogger(__name__)

    def decode(self, symbol: RectifiedSymbol) -> str:
        """
        Decode a rectified symbol.

        Args:
            symbol: Rectified binary QR code

        Returns:
            Decoded text, or "" if nothing could be decoded
        """
        border = int(round(symbol.size * self._quietZoneRatio))
        padded = cv2.copyMakeBorder(
            symbol.image, border, border, border, border,
            cv2.BORDER_CONSTANT, value=255
        )

        try:
            results: List[Decoded] = decode(padded, symbols=[ZBarSymbol.QRCODE])
        except Exception as e:
            self._logger.error(f"Error decoding symbol: {e}")
            return ""

        if not results:
            self._logger.debug("No decodable symbol")
            return ""

        text = results[0].data.decode("utf-8", errors="replace")
        self._logger.debug(f"Symbol decoded: {text}")
        return text
