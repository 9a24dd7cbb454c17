"""
QR Detector Interface Module.

This module defines the interface and data classes for QR code detection.
Follows the Interface Segregation Principle (ISP) from SOLID.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, List, Optional, Tuple

import numpy as np

from qrcore.interfaces.quadrangle_estimator_interface import Quadrangle


@dataclass
class QrDetectionResult:
    """
    Result of a combined detect and decode call.
    
    Attributes:
        text: Decoded content ("" if not found or not decodable)
        quadrangle: Detected quadrangle, None if not found
        straightQrCode: Rectified binary symbol, None if not found
        detected: Whether a quadrangle was found
    """
    text: str
    quadrangle: Optional[Quadrangle] = None
    straightQrCode: Optional[np.ndarray] = None
    detected: bool = False
    
    @property
    def polygon(self) -> List[Tuple[float, float]]:
        """Four corners [(x,y), ...], empty if not found."""
        if self.quadrangle is None:
            return []
        return list(self.quadrangle.points)
    
    @property
    def rect(self) -> Tuple[int, int, int, int]:
        """Bounding rectangle (left, top, width, height)."""
        if self.quadrangle is None:
            return (0, 0, 0, 0)
        return self.quadrangle.boundingRect()


class IQrCodeDetector(ABC):
    """
    Interface for a QR code detector.
    
    Detection locates the quadrangle; decoding rectifies the quadrangle
    and reads the encoded text.
    """
    
    @abstractmethod
    def setEpsX(self, epsX: float) -> None:
        """
        Set the epsilon of the horizontal 1:1:3:1:1 scan.
        
        Args:
            epsX: Fractional tolerance of each run length
        """
        pass
    
    @abstractmethod
    def setEpsY(self, epsY: float) -> None:
        """
        Set the epsilon of the vertical 1:1:3:1:1 scan.
        
        Args:
            epsY: Fractional tolerance of each run length
        """
        pass
    
    @abstractmethod
    def detect(self, image: np.ndarray) -> Tuple[bool, Optional[Quadrangle]]:
        """
        Detect a QR code and return the quadrangle containing it.
        
        Args:
            image: Grayscale or BGR image containing (or not) a QR code
            
        Returns:
            (True, Quadrangle) if found, (False, None) otherwise
        """
        pass
    
    @abstractmethod
    def decode(self, image: np.ndarray, points: Any) -> str:
        """
        Decode the QR code inside a quadrangle.
        
        Args:
            image: Grayscale or BGR image containing the QR code
            points: Quadrangle found by detect() (or any 4-point layout)
            
        Returns:
            Decoded text, or "" if nothing could be decoded
        """
        pass
    
    @abstractmethod
    def detectAndDecode(self, image: np.ndarray) -> str:
        """
        Detect and decode in one call.
        
        Args:
            image: Grayscale or BGR image
            
        Returns:
            Decoded text, "" if not found or not decodable
        """
        pass
