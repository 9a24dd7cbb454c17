"""
Services Interfaces Package.

Exports all service interfaces of the QR Locator.
"""

from qrservices.interfaces.base_service_interface import IBaseService, BaseService
from qrservices.interfaces.config_service_interface import IConfigService
from qrservices.interfaces.qr_detection_service_interface import (
    QrDetectionServiceResult,
    IQrDetectionService
)


__all__ = [
    # Base
    "IBaseService",
    "BaseService",
    # Config
    "IConfigService",
    # QR Detection
    "QrDetectionServiceResult",
    "IQrDetectionService",
]
