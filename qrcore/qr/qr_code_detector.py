"""
QR Code Detector Module.

Facade over the detection pipeline:
    detect:          scanner → clusterer → estimator → quadrangle
    decode:          rectifier → symbol decoder → text
    detectAndDecode: detect, then decode if something was found

The only state kept between calls is the pair of scan epsilons.
Instances are not thread-safe; serialize calls on a shared instance.
"""

import logging
from typing import Any, List, Optional, Tuple

import numpy as np

from qrcore.exceptions import InvalidArgumentError
from qrcore.finder.finder_pattern_scanner import FinderPatternScanner
from qrcore.finder.marker_clusterer import MarkerClusterer
from qrcore.geometry.perspective_rectifier import PerspectiveRectifier
from qrcore.geometry.quadrangle_estimator import QuadrangleEstimator
from qrcore.interfaces.finder_scanner_interface import FinderHit, IFinderScanner
from qrcore.interfaces.marker_clusterer_interface import IMarkerClusterer, MarkerTriple
from qrcore.interfaces.qr_detector_interface import IQrCodeDetector, QrDetectionResult
from qrcore.interfaces.quadrangle_estimator_interface import (
    IQuadrangleEstimator,
    Quadrangle
)
from qrcore.interfaces.rectifier_interface import IRectifier
from qrcore.interfaces.symbol_decoder_interface import ISymbolDecoder


class QRCodeDetector(IQrCodeDetector):
    """
    QR code detector with tunable finder-pattern epsilons.

    Use as a context manager (or call close()) to release the
    decoder backend deterministically:

        >>> with QRCodeDetector() as detector:
        ...     found, quadrangle = detector.detect(image)
        ...     text = detector.decode(image, quadrangle) if found else ""
    """

    DEFAULT_EPS_X = 0.2
    DEFAULT_EPS_Y = 0.2

    def __init__(
        self,
        scanner: Optional[IFinderScanner] = None,
        clusterer: Optional[IMarkerClusterer] = None,
        estimator: Optional[IQuadrangleEstimator] = None,
        rectifier: Optional[IRectifier] = None,
        decoder: Optional[ISymbolDecoder] = None,
        epsX: float = DEFAULT_EPS_X,
        epsY: float = DEFAULT_EPS_Y,
        logger: Optional[logging.Logger] = None
    ):
        """
        Initialize QRCodeDetector.

        Args:
            scanner: Finder-pattern scanner (default: FinderPatternScanner).
            clusterer: Marker clusterer (default: MarkerClusterer).
            estimator: Quadrangle estimator (default: QuadrangleEstimator).
            rectifier: Rectifier (default: PerspectiveRectifier).
            decoder: Symbol decoder (default: zxing-cpp backend).
            epsX: Horizontal scan epsilon.
            epsY: Vertical scan epsilon.
            logger: Logger instance for debug output.
        """
        self._logger = logger or logging.getLogger(__name__)
        self._scanner = scanner or FinderPatternScanner()
        self._clusterer = clusterer or MarkerClusterer()
        self._estimator = estimator or QuadrangleEstimator()
        self._rectifier = rectifier or PerspectiveRectifier()
        if decoder is None:
            from qrcore.decoder.zxing_symbol_decoder import ZxingSymbolDecoder
            decoder = ZxingSymbolDecoder()
        self._decoder = decoder
        self._epsX = epsX
        self._epsY = epsY
        self._closed = False

        self._logger.info(f"QRCodeDetector initialized (epsX={epsX}, epsY={epsY})")

    # ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
    # Lifetime
    # ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━

    def __enter__(self) -> "QRCodeDetector":
        return self

    def __exit__(self, excType, excValue, traceback) -> None:
        self.close()

    def close(self) -> None:
        """Release the decoder backend. Safe to call more than once."""
        if self._closed:
            return
        self._decoder.close()
        self._closed = True
        self._logger.debug("QRCodeDetector closed")

    @property
    def closed(self) -> bool:
        return self._closed

    # ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
    # Configuration
    # ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━

    def setEpsX(self, epsX: float) -> None:
        """Set the epsilon of the horizontal 1:1:3:1:1 scan."""
        self._epsX = epsX
        self._logger.debug(f"epsX set to: {epsX}")

    def setEpsY(self, epsY: float) -> None:
        """Set the epsilon of the vertical 1:1:3:1:1 scan."""
        self._epsY = epsY
        self._logger.debug(f"epsY set to: {epsY}")

    def getEpsX(self) -> float:
        return self._epsX

    def getEpsY(self) -> float:
        return self._epsY

    # ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
    # Detection
    # ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━

    def scanFinderHits(self, image: np.ndarray) -> List[FinderHit]:
        """
        Run the finder-pattern scanner alone.

        Args:
            image: Grayscale or BGR image

        Returns:
            All finder hits with the current epsilons, in scan order
        """
        self._ensureOpen()
        self._validateImage(image)
        return list(self._scanner.scan(image, self._epsX, self._epsY))

    def findMarkers(self, image: np.ndarray) -> Optional[MarkerTriple]:
        """
        Run scanner and clusterer.

        Args:
            image: Grayscale or BGR image

        Returns:
            Best MarkerTriple, or None if no L-shape was found
        """
        self._ensureOpen()
        self._validateImage(image)
        hits = self._scanner.scan(image, self._epsX, self._epsY)
        return self._clusterer.cluster(hits)

    def detect(self, image: np.ndarray) -> Tuple[bool, Optional[Quadrangle]]:
        """
        Detect a QR code and return the quadrangle containing it.

        Args:
            image: Grayscale or BGR image containing (or not) a QR code

        Returns:
            (True, Quadrangle) if found, (False, None) otherwise

        Raises:
            InvalidArgumentError: If image is None or malformed.
        """
        triple = self.findMarkers(image)
        if triple is None:
            self._logger.debug("No QR code detected")
            return False, None

        quadrangle = self._estimator.estimate(triple)
        if quadrangle is None:
            self._logger.debug("Marker triple rejected by quadrangle estimator")
            return False, None

        self._logger.debug(f"QR code detected at {quadrangle.points}")
        return True, quadrangle

    # ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
    # Decoding
    # ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━

    def decode(self, image: np.ndarray, points: Any) -> str:
        """
        Decode the QR code inside a quadrangle.

        "" is returned both when no symbol is present and when the
        symbol cannot be parsed; the two cases are not distinguished.

        Args:
            image: Grayscale or BGR image containing the QR code
            points: Quadrangle found by detect() (or any 4-point layout)

        Returns:
            Decoded text, or "" if nothing could be decoded

        Raises:
            InvalidArgumentError: If image or points are missing or malformed.
            GeometryError: If the points are too degenerate to rectify.
        """
        text, _ = self.decodeStraight(image, points)
        return text

    def decodeStraight(self, image: np.ndarray, points: Any) -> Tuple[str, np.ndarray]:
        """
        Decode and also return the rectified, binarized QR code.

        Args:
            image: Grayscale or BGR image containing the QR code
            points: Quadrangle found by detect() (or any 4-point layout)

        Returns:
            (text, straightQrCode)
        """
        self._ensureOpen()
        self._validateImage(image)
        quadrangle = Quadrangle.fromArray(points)

        symbol = self._rectifier.rectify(image, quadrangle)
        text = self._decoder.decode(symbol)
        return text, symbol.image

    def detectAndDecode(self, image: np.ndarray) -> str:
        """
        Detect and decode in one call.

        Args:
            image: Grayscale or BGR image

        Returns:
            Decoded text, "" if not found or not decodable
        """
        return self.detectAndDecodeFull(image).text

    def detectAndDecodeFull(self, image: np.ndarray) -> QrDetectionResult:
        """
        Detect and decode, keeping the quadrangle and the straight QR code.

        Decoding is skipped when nothing is detected.

        Args:
            image: Grayscale or BGR image

        Returns:
            QrDetectionResult
        """
        found, quadrangle = self.detect(image)
        if not found:
            return QrDetectionResult(text="", detected=False)

        text, straight = self.decodeStraight(image, quadrangle)
        return QrDetectionResult(
            text=text,
            quadrangle=quadrangle,
            straightQrCode=straight,
            detected=True
        )

    # ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
    # Validation
    # ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━

    def _ensureOpen(self) -> None:
        if self._closed:
            raise RuntimeError("QRCodeDetector is closed")

    @staticmethod
    def _validateImage(image: Any) -> None:
        """
        Reject images the pipeline cannot read.

        Raises:
            InvalidArgumentError: If image is None, empty, not uint8,
                or not a 1/3/4-channel 2D array.
        """
        if image is None:
            raise InvalidArgumentError("Image must not be None")
        if not isinstance(image, np.ndarray):
            raise InvalidArgumentError(
                f"Image must be a numpy array, got {type(image).__name__}"
            )
        if image.size == 0:
            raise InvalidArgumentError("Image is empty")
        if image.dtype != np.uint8:
            raise InvalidArgumentError(f"Image must be uint8, got {image.dtype}")
        if image.ndim == 3 and image.shape[2] in (1, 3, 4):
            return
        if image.ndim != 2:
            raise InvalidArgumentError(f"Unsupported image shape: {image.shape}")
