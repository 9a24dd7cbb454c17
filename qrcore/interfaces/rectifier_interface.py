"""
Rectifier Interface Module.

Defines the rectified symbol produced for the decoder and the rectifier interface.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass

import numpy as np

from qrcore.interfaces.quadrangle_estimator_interface import Quadrangle


@dataclass
class RectifiedSymbol:
    """
    Perspective-corrected, binarized QR code.
    
    Attributes:
        image: Square uint8 image, 0 (dark) or 255 (light)
        homography: 3x3 matrix mapping source pixels to image pixels
        size: Side length of image in pixels
    """
    image: np.ndarray
    homography: np.ndarray
    size: int
    
    def __repr__(self) -> str:
        return f"RectifiedSymbol(size={self.size}, shape={self.image.shape})"


class IRectifier(ABC):
    """
    Interface for rectification of a quadrangle into a straight symbol.
    """
    
    @abstractmethod
    def rectify(self, image: np.ndarray, quadrangle: Quadrangle) -> RectifiedSymbol:
        """
        Warp the quadrangle region into an axis-aligned square and binarize it.
        
        Args:
            image: Source image (BGR or grayscale)
            quadrangle: Region to extract
            
        Returns:
            RectifiedSymbol
            
        Raises:
            GeometryError: If the quadrangle cannot define a homography.
        """
        pass
