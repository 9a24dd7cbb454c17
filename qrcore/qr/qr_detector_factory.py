"""
QR Detector Factory Module.

Factory function for assembling a QRCodeDetector from plain parameters.
Every pipeline component is created here so callers (services, CLI)
only deal with configuration values.

Follows:
- DIP (Dependency Inversion): Returns IQrCodeDetector interface
- Factory Pattern: Encapsulates object creation logic
"""

import logging

from qrcore.decoder.symbol_decoder_factory import createSymbolDecoder
from qrcore.finder.finder_pattern_scanner import FinderPatternScanner
from qrcore.finder.marker_clusterer import MarkerClusterer
from qrcore.geometry.perspective_rectifier import PerspectiveRectifier
from qrcore.geometry.quadrangle_estimator import QuadrangleEstimator
from qrcore.qr.qr_code_detector import QRCodeDetector
from qrcore.qr.qr_image_preprocessor import QrImagePreprocessor


logger = logging.getLogger(__name__)


def createQrCodeDetector(
    epsX: float = QRCodeDetector.DEFAULT_EPS_X,
    epsY: float = QRCodeDetector.DEFAULT_EPS_Y,
    # Preprocessing params (prefixed with 'preprocessing')
    preprocessingMode: str = "minimal",
    preprocessingMinContrast: int = QrImagePreprocessor.DEFAULT_MIN_CONTRAST,
    # Clusterer params (prefixed with 'clusterer')
    clustererMergeRadius: float = 2.0,
    clustererAngleTolerance: float = 0.25,
    clustererLegTolerance: float = 0.3,
    clustererScaleTolerance: float = 0.5,
    clustererMaxCandidates: int = 30,
    # Rectifier params (prefixed with 'rectifier')
    rectifierOutputSize: int = PerspectiveRectifier.DEFAULT_OUTPUT_SIZE,
    rectifierThresholdOffset: float = 10.0,
    # Decoder params (prefixed with 'decoder')
    decoderBackend: str = "zxing",
    decoderTryRotate: bool = True,
    decoderTryDownscale: bool = True,
    decoderQuietZoneRatio: float = 0.2
) -> QRCodeDetector:
    """
    Factory function to create a fully wired QRCodeDetector.

    Args:
        epsX: Horizontal scan epsilon.
        epsY: Vertical scan epsilon.
        preprocessingMode: Binarization mode ("minimal" or "full").
        preprocessingMinContrast: Minimum gray spread to binarize at all.
        clustererMergeRadius: Hit merge distance in module sizes.
        clustererAngleTolerance: Maximum |cos| at the top-left marker.
        clustererLegTolerance: Maximum relative leg length difference.
        clustererScaleTolerance: Maximum relative module size spread.
        clustererMaxCandidates: Markers considered for triples.
        rectifierOutputSize: Side of the straight QR code in pixels.
        rectifierThresholdOffset: Adaptive threshold constant.
        decoderBackend: Symbol decoder backend ("zxing" or "pyzbar").
        decoderTryRotate: (zxing) Try rotated symbols.
        decoderTryDownscale: (zxing) Try downscaled symbols.
        decoderQuietZoneRatio: White border added before decoding.

    Returns:
        QRCodeDetector

    Raises:
        ValueError: If decoderBackend is not supported.
        ImportError: If the decoder library is not installed.

    Examples:
        >>> detector = createQrCodeDetector(epsX=0.25, decoderBackend="zxing")
    """
    preprocessor = QrImagePreprocessor(
        mode=preprocessingMode,
        minContrast=preprocessingMinContrast
    )

    decoder = createSymbolDecoder(
        backend=decoderBackend,
        zxingTryRotate=decoderTryRotate,
        zxingTryDownscale=decoderTryDownscale,
        quietZoneRatio=decoderQuietZoneRatio
    )

    logger.info(
        f"Creating QRCodeDetector "
        f"(epsX={epsX}, epsY={epsY}, preprocessing={preprocessingMode}, "
        f"decoder={decoderBackend})"
    )

    return QRCodeDetector(
        scanner=FinderPatternScanner(preprocessor=preprocessor),
        clusterer=MarkerClusterer(
            mergeRadius=clustererMergeRadius,
            angleTolerance=clustererAngleTolerance,
            legTolerance=clustererLegTolerance,
            scaleTolerance=clustererScaleTolerance,
            maxCandidates=clustererMaxCandidates
        ),
        estimator=QuadrangleEstimator(),
        rectifier=PerspectiveRectifier(
            outputSize=rectifierOutputSize,
            thresholdOffset=rectifierThresholdOffset
        ),
        decoder=decoder,
        epsX=epsX,
        epsY=epsY
    )
