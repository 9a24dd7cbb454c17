# Core module for QR Locator
# Contains interfaces and implementations for scanning, clustering,
# quadrangle estimation, rectification and symbol decoding

from qrcore.exceptions import QrCoreError, InvalidArgumentError, GeometryError
from qrcore.interfaces.finder_scanner_interface import FinderHit
from qrcore.interfaces.marker_clusterer_interface import MarkerTriple
from qrcore.interfaces.quadrangle_estimator_interface import Quadrangle
from qrcore.interfaces.rectifier_interface import RectifiedSymbol
from qrcore.interfaces.qr_detector_interface import QrDetectionResult, IQrCodeDetector
from qrcore.qr.qr_code_detector import QRCodeDetector
from qrcore.qr.qr_detector_factory import createQrCodeDetector

__all__ = [
    "QrCoreError",
    "InvalidArgumentError",
    "GeometryError",
    "FinderHit",
    "MarkerTriple",
    "Quadrangle",
    "RectifiedSymbol",
    "QrDetectionResult",
    "IQrCodeDetector",
    "QRCodeDetector",
    "createQrCodeDetector",
]
