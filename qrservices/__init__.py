# Services module for QR Locator
# Configuration and timed, debug-aware QR detection on top of qrcore

from qrservices.impl import ConfigService, QrDetectionService
from qrservices.interfaces import QrDetectionServiceResult

__all__ = [
    "ConfigService",
    "QrDetectionService",
    "QrDetectionServiceResult",
]
