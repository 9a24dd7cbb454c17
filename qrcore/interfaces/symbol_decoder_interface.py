"""
Symbol Decoder Interface Module.

Contract for the external library that turns a rectified QR symbol into text.
"""

from abc import ABC, abstractmethod

from qrcore.interfaces.rectifier_interface import RectifiedSymbol


class ISymbolDecoder(ABC):
    """
    Interface for symbol decoders.
    
    Implementations wrap a third-party QR decoding library.
    """
    
    @abstractmethod
    def decode(self, symbol: RectifiedSymbol) -> str:
        """
        Decode a rectified symbol.
        
        Args:
            symbol: Rectified binary QR code
            
        Returns:
            Decoded UTF-8 text, or "" if nothing could be decoded
        """
        pass
    
    def close(self) -> None:
        """Release library resources. Default: nothing to release."""
        pass
