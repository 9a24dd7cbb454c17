"""
Quadrangle Estimator Module.

Derives the quadrangle enclosing a QR code from its three position markers.
The fourth marker center follows from parallelogram completion; each marker
center sits 3.5 modules inside the outer corner of the code.

Follows the Single Responsibility Principle (SRP) from SOLID.
"""

import logging
from typing import Optional

import numpy as np

from qrcore.interfaces.marker_clusterer_interface import MarkerTriple
from qrcore.interfaces.quadrangle_estimator_interface import (
    IQuadrangleEstimator,
    Quadrangle
)


# Symbol sizes are 17 + 4 * version modules, version 1..40
MIN_DIMENSION = 21
MAX_DIMENSION = 177

# Distance from a marker center to the code's outer corner, in modules
MARKER_HALF_WIDTH = 3.5


def estimateDimension(legLength: float, moduleSize: float) -> int:
    """
    Estimate the number of modules per side of a symbol.

    Args:
        legLength: Mean distance between the top-left marker and the other two.
        moduleSize: Module size in pixels along the code axes.

    Returns:
        Nearest valid symbol size (21, 25, ..., 177).
    """
    if moduleSize <= 0:
        return MIN_DIMENSION
    raw = legLength / moduleSize + 7.0
    version = int(round((raw - 17.0) / 4.0))
    return int(np.clip(17 + 4 * version, MIN_DIMENSION, MAX_DIMENSION))


class QuadrangleEstimator(IQuadrangleEstimator):
    """
    Minimum-area quadrangle estimation from a marker triple.

    The module grid is rebuilt from the marker centers: the leg vectors
    span N - 7 modules, where N is the estimated symbol size. Extending
    the marker parallelogram by 3.5 modules on every side gives the
    outer boundary of the code.
    """

    def __init__(
        self,
        minArea: float = 1.0,
        logger: Optional[logging.Logger] = None
    ):
        """
        Initialize QuadrangleEstimator.

        Args:
            minArea: Smallest accepted quadrangle area in square pixels.
            logger: Logger instance for debug output.
        """
        self._minArea = minArea
        self._logger = logger or logging.getLogger(__name__)

    def estimate(self, triple: MarkerTriple) -> Optional[Quadrangle]:
        """
        Compute the quadrangle enclosing the code.

        Args:
            triple: Located top-left, top-right and bottom-left markers

        Returns:
            Quadrangle ordered TL, TR, BR, BL, or None if degenerate
        """
        topLeft = np.array(triple.topLeft.center, dtype=np.float64)
        topRight = np.array(triple.topRight.center, dtype=np.float64)
        bottomLeft = np.array(triple.bottomLeft.center, dtype=np.float64)
        bottomRight = topRight + bottomLeft - topLeft

        u = topRight - topLeft
        v = bottomLeft - topLeft
        lengthU, lengthV = float(np.linalg.norm(u)), float(np.linalg.norm(v))
        if lengthU == 0.0 or lengthV == 0.0:
            self._logger.debug("Degenerate marker triple (coincident centers)")
            return None

        # Scan-axis chords of a rotated marker are longer than its side
        moduleSize = triple.moduleSize * max(abs(u[0]), abs(u[1])) / lengthU
        dimension = estimateDimension((lengthU + lengthV) / 2.0, moduleSize)

        a = u / (dimension - 7)
        b = v / (dimension - 7)
        offset = MARKER_HALF_WIDTH

        corners = (
            topLeft - offset * (a + b),
            topRight + offset * (a - b),
            bottomRight + offset * (a + b),
            bottomLeft - offset * (a - b),
        )
        quadrangle = Quadrangle.fromArray(np.array(corners))

        if quadrangle.area < self._minArea or not quadrangle.isConvex():
            self._logger.debug(
                f"Degenerate quadrangle rejected (area={quadrangle.area:.2f})"
            )
            return None

        if quadrangle.signedArea < 0:
            self._logger.debug("Counter-clockwise quadrangle rejected")
            return None

        self._logger.debug(
            f"Quadrangle estimated: dimension={dimension}, "
            f"module={moduleSize:.2f}px, area={quadrangle.area:.1f}"
        )
        return quadrangle
