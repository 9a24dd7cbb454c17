"""
Marker Clusterer Interface Module.

Defines how scanner hits are grouped into the three corner markers of a code.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Iterable, Optional

from qrcore.interfaces.finder_scanner_interface import FinderHit


@dataclass(frozen=True)
class MarkerTriple:
    """
    Three position markers forming the L-shape of a QR code.
    
    Attributes:
        topLeft: Marker at the right-angle vertex
        topRight: Marker one leg away, clockwise from bottomLeft
        bottomLeft: Marker on the other leg
        score: Combined angular, leg-length and scale deviation (lower is better)
    """
    topLeft: FinderHit
    topRight: FinderHit
    bottomLeft: FinderHit
    score: float = 0.0
    
    @property
    def moduleSize(self) -> float:
        """Mean apparent module size of the three markers."""
        return (
            self.topLeft.moduleSize
            + self.topRight.moduleSize
            + self.bottomLeft.moduleSize
        ) / 3.0


class IMarkerClusterer(ABC):
    """
    Interface for marker clustering.
    
    Picks at most one L-shaped triple out of a set of finder hits.
    """
    
    @abstractmethod
    def cluster(self, hits: Iterable[FinderHit]) -> Optional[MarkerTriple]:
        """
        Group finder hits into the best-scoring marker triple.
        
        Args:
            hits: Finder hits in scan order
            
        Returns:
            MarkerTriple if a valid L-shape exists, None otherwise
        """
        pass
