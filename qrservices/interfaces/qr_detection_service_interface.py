"""
QR Detection Service Interface Module.

Defines the interface for timed QR detection over frames or files.

Follows:
- SRP: Only handles QR detection operations
- DIP: Depends on IQrCodeDetector abstraction from core layer
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Dict, Optional

import numpy as np

from qrcore.interfaces.qr_detector_interface import QrDetectionResult


@dataclass
class QrDetectionServiceResult:
    """
    Result of the QR detection service.

    Attributes:
        qrData: Detection result, None if the call failed or the service is disabled.
        frameId: Frame identifier for debug output.
        success: True when a QR code was detected (its text may still be "").
        processingTimeMs: Time taken for detection and decoding.
        errorMessage: Error description if the call failed.
    """
    qrData: Optional[QrDetectionResult]
    frameId: str
    success: bool
    processingTimeMs: float = 0.0
    errorMessage: str = ""

    def toDict(self) -> Dict[str, Any]:
        """JSON-friendly summary (no image data)."""
        qr = self.qrData
        return {
            "frameId": self.frameId,
            "success": self.success,
            "detected": bool(qr and qr.detected),
            "text": qr.text if qr else "",
            "polygon": [list(p) for p in qr.polygon] if qr else [],
            "rect": list(qr.rect) if qr else [0, 0, 0, 0],
            "processingTimeMs": round(self.processingTimeMs, 3),
            "errorMessage": self.errorMessage,
        }


class IQrDetectionService(ABC):
    """
    Interface for QR detection operations.
    """

    @abstractmethod
    def detectQr(
        self,
        image: np.ndarray,
        frameId: str
    ) -> QrDetectionServiceResult:
        """
        Detect and decode a QR code in an image.

        Args:
            image: Input image (BGR or grayscale).
            frameId: Frame identifier for logging and debug output.

        Returns:
            QrDetectionServiceResult: Detection result with metadata.
        """
        pass

    @abstractmethod
    def setEnabled(self, enabled: bool) -> None:
        """Enable or disable QR detection."""
        pass

    @abstractmethod
    def isEnabled(self) -> bool:
        """Check if QR detection is enabled."""
        pass
