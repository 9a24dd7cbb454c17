"""
Perspective Rectifier Module

Extracts the quadrangle region of an image into an upright square and
binarizes it for the symbol decoder.

Follows SRP: Only handles rectification of a detected code.
"""

import logging
from typing import Optional

import cv2
import numpy as np

from qrcore.exceptions import GeometryError
from qrcore.interfaces.quadrangle_estimator_interface import Quadrangle
from qrcore.interfaces.rectifier_interface import IRectifier, RectifiedSymbol
from qrcore.qr.qr_image_preprocessor import QrImagePreprocessor


class PerspectiveRectifier(IRectifier):
    """
    Homography-based rectification with local adaptive thresholding.

    Logic:
        1. Validates the quadrangle (convex, nonzero area).
        2. Computes the homography mapping it onto an outputSize square.
        3. Resamples the grayscale source through it (bilinear, white border).
        4. Binarizes with a mean adaptive threshold whose block spans about
           a third of the side, wide enough to see both colors around
           every module of a marker.
    """

    DEFAULT_OUTPUT_SIZE = 420

    def __init__(
        self,
        outputSize: int = DEFAULT_OUTPUT_SIZE,
        thresholdOffset: float = 10.0,
        minArea: float = 1.0,
        logger: Optional[logging.Logger] = None
    ):
        """
        Initialize PerspectiveRectifier.

        Args:
            outputSize: Side of the rectified square in pixels.
            thresholdOffset: Constant subtracted from the local mean.
            minArea: Smallest accepted quadrangle area in square pixels.
            logger: Logger instance for debug output.
        """
        self._outputSize = max(int(outputSize), 3)
        self._thresholdOffset = thresholdOffset
        self._minArea = minArea
        self._logger = logger or logging.getLogger(__name__)

    @property
    def outputSize(self) -> int:
        return self._outputSize

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
        if quadrangle.area < self._minArea or not quadrangle.isConvex():
            raise GeometryError(
                f"Degenerate quadrangle (area={quadrangle.area:.3f}, "
                f"convex={quadrangle.isConvex()})"
            )

        size = self._outputSize
        srcPts = quadrangle.toArray()
        dstPts = np.array([
            [0, 0],
            [size, 0],
            [size, size],
            [0, size],
        ], dtype=np.float32)

        try:
            homography = cv2.getPerspectiveTransform(srcPts, dstPts)
        except cv2.error as e:
            raise GeometryError(f"Homography computation failed: {e}") from e

        determinant = float(np.linalg.det(homography))
        if not np.all(np.isfinite(homography)) or abs(determinant) < 1e-12:
            raise GeometryError(f"Singular homography (det={determinant:.3e})")

        gray = QrImagePreprocessor.toGray(image)
        warped = cv2.warpPerspective(
            gray,
            homography,
            (size, size),
            flags=cv2.INTER_LINEAR,
            borderMode=cv2.BORDER_CONSTANT,
            borderValue=255
        )

        blockSize = max((size // 3) | 1, 3)
        binary = cv2.adaptiveThreshold(
            warped,
            255,
            cv2.ADAPTIVE_THRESH_MEAN_C,
            cv2.THRESH_BINARY,
            blockSize,
            self._thresholdOffset
        )

        self._logger.debug(
            f"Rectified {size}x{size} (block={blockSize}, det={determinant:.3e})"
        )
        return RectifiedSymbol(image=binary, homography=homography, size=size)
