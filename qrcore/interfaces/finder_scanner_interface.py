"""
Finder Scanner Interface Module.

This module defines the interface and data class for finder-pattern scanning.
Follows the Interface Segregation Principle (ISP) from SOLID.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Iterator, Tuple

import numpy as np


@dataclass(frozen=True)
class FinderHit:
    """
    Candidate position marker found by the scanner.
    
    Attributes:
        center: Marker center (x, y). Pixel i spans [i, i+1) on each axis.
        moduleSize: Apparent module size in pixels along the scan axes.
        confidence: 1 - worst fractional ratio deviation of both passes (0-1).
        row: Image row whose horizontal pass produced the hit (scan order).
    """
    center: Tuple[float, float]
    moduleSize: float
    confidence: float
    row: int = 0
    
    @property
    def x(self) -> float:
        return self.center[0]
    
    @property
    def y(self) -> float:
        return self.center[1]


class IFinderScanner(ABC):
    """
    Interface for finder-pattern scanners.
    
    Implementations look for the 1:1:3:1:1 dark/light run pattern of a
    QR position marker and yield every corroborated candidate.
    """
    
    @abstractmethod
    def scan(
        self,
        image: np.ndarray,
        epsX: float,
        epsY: float
    ) -> Iterator[FinderHit]:
        """
        Scan an image for finder patterns.
        
        Args:
            image: Input image (BGR or grayscale numpy array)
            epsX: Fractional ratio tolerance of the horizontal pass
            epsY: Fractional ratio tolerance of the vertical pass
            
        Returns:
            Lazy iterator of FinderHit in scan order
        """
        pass
