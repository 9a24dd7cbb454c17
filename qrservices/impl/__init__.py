"""
Services Implementation Package.

Exports all service implementations of the QR Locator.
"""

from qrservices.impl.config_service import ConfigService
from qrservices.impl.qr_detection_service import QrDetectionService


__all__ = [
    "ConfigService",
    "QrDetectionService",
]
