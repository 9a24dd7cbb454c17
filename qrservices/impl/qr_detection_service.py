"""
QR Detection Service Implementation.

Wraps the QRCodeDetector facade with timing, logging and debug output.
Creates the detector from plain parameters using the core factory.

Follows:
- SRP: Only handles QR detection operations
- DIP: Depends on IQrCodeDetector abstraction (interface)
- Factory Pattern: Uses createQrCodeDetector() for wiring
"""

import time
from typing import Optional

import numpy as np

from qrcore.exceptions import InvalidArgumentError
from qrcore.interfaces.qr_detector_interface import QrDetectionResult
from qrcore.qr import QRCodeDetector, createQrCodeDetector
from qrservices.interfaces.base_service_interface import BaseService
from qrservices.impl.config_service import ConfigService
from qrservices.interfaces.qr_detection_service_interface import (
    IQrDetectionService,
    QrDetectionServiceResult
)


class QrDetectionService(IQrDetectionService, BaseService):
    """
    QR Detection Service Implementation.

    Detects the quadrangle of a QR code and decodes it. In debug mode
    the straight (rectified, binarized) code and a JSON summary are
    written for every frame with a detection.
    """

    SERVICE_NAME = "qr_detection"

    def __init__(
        self,
        # Basic settings
        enabled: bool = True,

        # Scan tolerances
        epsX: float = QRCodeDetector.DEFAULT_EPS_X,
        epsY: float = QRCodeDetector.DEFAULT_EPS_Y,

        # Preprocessing params (prefixed with 'preprocessing')
        preprocessingMode: str = "minimal",
        preprocessingMinContrast: int = 20,

        # Clusterer params (prefixed with 'clusterer')
        clustererMergeRadius: float = 2.0,
        clustererAngleTolerance: float = 0.25,
        clustererLegTolerance: float = 0.3,
        clustererScaleTolerance: float = 0.5,
        clustererMaxCandidates: int = 30,

        # Rectifier params (prefixed with 'rectifier')
        rectifierOutputSize: int = 420,
        rectifierThresholdOffset: float = 10.0,

        # Decoder params (prefixed with 'decoder')
        decoderBackend: str = "zxing",
        decoderTryRotate: bool = True,
        decoderTryDownscale: bool = True,
        decoderQuietZoneRatio: float = 0.2,

        # Debug settings
        debugBasePath: str = "output/debug",
        debugEnabled: bool = False,

        # Pre-built detector (skips the factory)
        detector: Optional[QRCodeDetector] = None
    ):
        """
        Initialize QrDetectionService.

        Args:
            enabled: Whether QR detection is enabled.
            epsX: Horizontal finder-pattern epsilon.
            epsY: Vertical finder-pattern epsilon.
            preprocessingMode: Binarization mode ("minimal" or "full").
            preprocessingMinContrast: Minimum gray spread to binarize.
            clustererMergeRadius: Hit merge distance in module sizes.
            clustererAngleTolerance: Maximum |cos| at the top-left marker.
            clustererLegTolerance: Maximum relative leg length difference.
            clustererScaleTolerance: Maximum relative module size spread.
            clustererMaxCandidates: Markers considered for triples.
            rectifierOutputSize: Side of the straight QR code.
            rectifierThresholdOffset: Adaptive threshold constant.
            decoderBackend: Symbol decoder backend ("zxing" or "pyzbar").
            decoderTryRotate: (zxing) Try rotated symbols.
            decoderTryDownscale: (zxing) Try downscaled symbols.
            decoderQuietZoneRatio: White border added before decoding.
            debugBasePath: Base path for debug output.
            debugEnabled: Whether to save debug output.
            detector: Detector to use instead of building one.
        """
        BaseService.__init__(
            self,
            serviceName=self.SERVICE_NAME,
            debugBasePath=debugBasePath,
            debugEnabled=debugEnabled
        )

        if detector is None:
            detector = createQrCodeDetector(
                epsX=epsX,
                epsY=epsY,
                preprocessingMode=preprocessingMode,
                preprocessingMinContrast=preprocessingMinContrast,
                clustererMergeRadius=clustererMergeRadius,
                clustererAngleTolerance=clustererAngleTolerance,
                clustererLegTolerance=clustererLegTolerance,
                clustererScaleTolerance=clustererScaleTolerance,
                clustererMaxCandidates=clustererMaxCandidates,
                rectifierOutputSize=rectifierOutputSize,
                rectifierThresholdOffset=rectifierThresholdOffset,
                decoderBackend=decoderBackend,
                decoderTryRotate=decoderTryRotate,
                decoderTryDownscale=decoderTryDownscale,
                decoderQuietZoneRatio=decoderQuietZoneRatio
            )

        self._detector = detector
        self._enabled = enabled
        self._decoderBackend = decoderBackend

        self._logger.info(
            f"QrDetectionService initialized "
            f"(epsX={detector.getEpsX()}, epsY={detector.getEpsY()}, "
            f"decoder={decoderBackend})"
        )

    @classmethod
    def fromConfig(cls, configService: ConfigService) -> "QrDetectionService":
        """
        Build the service from a config service.

        Args:
            configService: Loaded configuration.

        Returns:
            QrDetectionService
        """
        clusterer = configService.getClustererConfig()
        return cls(
            enabled=configService.isQrDetectionEnabled(),
            epsX=configService.getEpsX(),
            epsY=configService.getEpsY(),
            preprocessingMode=configService.getPreprocessingMode(),
            preprocessingMinContrast=configService.getMinContrast(),
            clustererMergeRadius=clusterer["mergeRadius"],
            clustererAngleTolerance=clusterer["angleTolerance"],
            clustererLegTolerance=clusterer["legTolerance"],
            clustererScaleTolerance=clusterer["scaleTolerance"],
            clustererMaxCandidates=clusterer["maxCandidates"],
            rectifierOutputSize=configService.getRectifierOutputSize(),
            rectifierThresholdOffset=configService.getRectifierThresholdOffset(),
            decoderBackend=configService.getDecoderBackend(),
            decoderTryRotate=configService.isDecoderTryRotate(),
            decoderTryDownscale=configService.isDecoderTryDownscale(),
            decoderQuietZoneRatio=configService.getQuietZoneRatio(),
            debugBasePath=configService.getDebugBasePath(),
            debugEnabled=configService.isDebugEnabled()
        )

    @property
    def detector(self) -> QRCodeDetector:
        return self._detector

    def detectQr(
        self,
        image: np.ndarray,
        frameId: str
    ) -> QrDetectionServiceResult:
        """
        Detect and decode a QR code in an image.

        Timing covers detection and decoding; debug saving is excluded.

        Args:
            image: Input image (BGR or grayscale).
            frameId: Frame identifier.

        Returns:
            QrDetectionServiceResult with detection result.
        """
        startTime = time.perf_counter()

        if not self._enabled:
            return QrDetectionServiceResult(
                qrData=None,
                frameId=frameId,
                success=False,
                processingTimeMs=self._measureTime(startTime),
                errorMessage="QR detection disabled"
            )

        try:
            qrResult = self._detector.detectAndDecodeFull(image)
        except InvalidArgumentError as e:
            self._logger.warning(f"[{frameId}] Invalid input: {e}")
            return QrDetectionServiceResult(
                qrData=None,
                frameId=frameId,
                success=False,
                processingTimeMs=self._measureTime(startTime),
                errorMessage=str(e)
            )
        except Exception as e:
            self._logger.error(f"[{frameId}] QR detection failed: {e}")
            return QrDetectionServiceResult(
                qrData=None,
                frameId=frameId,
                success=False,
                processingTimeMs=self._measureTime(startTime),
                errorMessage=str(e)
            )

        # Measure time BEFORE debug saving
        processingTimeMs = self._measureTime(startTime)

        if not qrResult.detected:
            self._logger.warning(
                f"[{frameId}] No QR code detected (time={processingTimeMs:.2f}ms)"
            )
            return QrDetectionServiceResult(
                qrData=qrResult,
                frameId=frameId,
                success=False,
                processingTimeMs=processingTimeMs
            )

        self._saveDebugOutput(frameId, qrResult, processingTimeMs)
        self._logTiming(frameId, processingTimeMs)

        if qrResult.text:
            self._logger.info(f"[{frameId}] QR decoded: {qrResult.text}")
        else:
            self._logger.warning(f"[{frameId}] QR detected but not decoded")

        return QrDetectionServiceResult(
            qrData=qrResult,
            frameId=frameId,
            success=True,
            processingTimeMs=processingTimeMs
        )

    def setEnabled(self, enabled: bool) -> None:
        """Enable or disable QR detection."""
        self._enabled = enabled
        self._logger.info(f"QR detection {'enabled' if enabled else 'disabled'}")

    def isEnabled(self) -> bool:
        """Check if QR detection is enabled."""
        return self._enabled

    def setEpsX(self, epsX: float) -> None:
        """Set the horizontal finder-pattern epsilon."""
        self._detector.setEpsX(epsX)
        self._logger.info(f"epsX set to: {epsX}")

    def setEpsY(self, epsY: float) -> None:
        """Set the vertical finder-pattern epsilon."""
        self._detector.setEpsY(epsY)
        self._logger.info(f"epsY set to: {epsY}")

    def shutdown(self) -> None:
        """Release the detector."""
        self._detector.close()
        self._logger.info("QrDetectionService shut down")

    def _saveDebugOutput(
        self,
        frameId: str,
        qrResult: QrDetectionResult,
        processingTimeMs: float
    ) -> None:
        """Save the straight QR code and a JSON summary."""
        if not self._debugEnabled:
            return

        self._saveDebugImage(frameId, qrResult.straightQrCode, "straight")

        data = {
            "frameId": frameId,
            "text": qrResult.text,
            "polygon": qrResult.polygon,
            "rect": qrResult.rect,
            "epsX": self._detector.getEpsX(),
            "epsY": self._detector.getEpsY(),
            "decoder": self._decoderBackend,
            "processingTimeMs": processingTimeMs
        }
        self._saveDebugJson(frameId, data, "qr")
