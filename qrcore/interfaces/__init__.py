"""Interfaces and data classes of the QR core."""

from qrcore.interfaces.finder_scanner_interface import FinderHit, IFinderScanner
from qrcore.interfaces.marker_clusterer_interface import MarkerTriple, IMarkerClusterer
from qrcore.interfaces.quadrangle_estimator_interface import (
    Quadrangle,
    IQuadrangleEstimator
)
from qrcore.interfaces.rectifier_interface import RectifiedSymbol, IRectifier
from qrcore.interfaces.symbol_decoder_interface import ISymbolDecoder
from qrcore.interfaces.qr_detector_interface import QrDetectionResult, IQrCodeDetector

__all__ = [
    "FinderHit",
    "IFinderScanner",
    "MarkerTriple",
    "IMarkerClusterer",
    "Quadrangle",
    "IQuadrangleEstimator",
    "RectifiedSymbol",
    "IRectifier",
    "ISymbolDecoder",
    "QrDetectionResult",
    "IQrCodeDetector",
]
