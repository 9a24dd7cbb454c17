"""
Quadrangle Estimator Interface Module.

Defines the Quadrangle value type shared by detection and decoding,
and the interface that turns a marker triple into one.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Optional, Tuple

import numpy as np

from qrcore.exceptions import InvalidArgumentError
from qrcore.interfaces.marker_clusterer_interface import MarkerTriple


Point = Tuple[float, float]


@dataclass(frozen=True)
class Quadrangle:
    """
    Four vertices bounding a QR code in source-image coordinates.
    
    Points are ordered top-left, top-right, bottom-right, bottom-left of
    the code itself, which is clockwise on screen (y axis pointing down).
    This is the single in-core representation; use toArray()/fromArray()
    at the boundary for other shapes.
    
    Attributes:
        points: The four (x, y) vertices
    """
    points: Tuple[Point, Point, Point, Point]
    
    @classmethod
    def fromArray(cls, points: Any) -> "Quadrangle":
        """
        Build a Quadrangle from any 4-point layout.
        
        Accepts another Quadrangle, a (4, 2), (1, 4, 2) or (8,) array,
        or a sequence of four (x, y) pairs.
        
        Raises:
            InvalidArgumentError: If points is None or not four 2D points.
        """
        if isinstance(points, Quadrangle):
            return points
        if points is None:
            raise InvalidArgumentError("Quadrangle points must not be None")
        
        try:
            arr = np.asarray(points, dtype=np.float64).reshape(-1, 2)
        except (TypeError, ValueError) as e:
            raise InvalidArgumentError(f"Invalid quadrangle points: {e}") from e
        
        if arr.shape != (4, 2):
            raise InvalidArgumentError(
                f"Quadrangle needs exactly 4 points, got {arr.shape[0]}"
            )
        if not np.all(np.isfinite(arr)):
            raise InvalidArgumentError("Quadrangle points must be finite")
        
        return cls(points=tuple((float(x), float(y)) for x, y in arr))
    
    def toArray(self) -> np.ndarray:
        """Return the vertices as a (4, 2) float32 array."""
        return np.array(self.points, dtype=np.float32)
    
    @property
    def signedArea(self) -> float:
        """Shoelace area; positive for clockwise-on-screen winding."""
        arr = np.array(self.points, dtype=np.float64)
        x, y = arr[:, 0], arr[:, 1]
        return 0.5 * float(np.dot(x, np.roll(y, -1)) - np.dot(np.roll(x, -1), y))
    
    @property
    def area(self) -> float:
        return abs(self.signedArea)
    
    def isConvex(self) -> bool:
        """Check that all turns have the same, nonzero, direction."""
        arr = np.array(self.points, dtype=np.float64)
        edges = np.roll(arr, -1, axis=0) - arr
        nextEdges = np.roll(edges, -1, axis=0)
        crosses = edges[:, 0] * nextEdges[:, 1] - edges[:, 1] * nextEdges[:, 0]
        return bool(np.all(crosses > 0) or np.all(crosses < 0))
    
    def boundingRect(self) -> Tuple[int, int, int, int]:
        """Axis-aligned bounding rectangle (left, top, width, height)."""
        xs = [p[0] for p in self.points]
        ys = [p[1] for p in self.points]
        left, top = int(np.floor(min(xs))), int(np.floor(min(ys)))
        right, bottom = int(np.ceil(max(xs))), int(np.ceil(max(ys)))
        return (left, top, right - left, bottom - top)


class IQuadrangleEstimator(ABC):
    """
    Interface for quadrangle estimation from three position markers.
    """
    
    @abstractmethod
    def estimate(self, triple: MarkerTriple) -> Optional[Quadrangle]:
        """
        Compute the quadrangle enclosing the code.
        
        Args:
            triple: Located top-left, top-right and bottom-left markers
            
        Returns:
            Quadrangle, or None if the geometry is degenerate
        """
        pass
