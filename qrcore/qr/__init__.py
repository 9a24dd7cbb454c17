"""QR Detection module."""

from qrcore.qr.qr_image_preprocessor import QrImagePreprocessor
from qrcore.qr.qr_code_detector import QRCodeDetector
from qrcore.qr.qr_detector_factory import createQrCodeDetector

__all__ = [
    'QrImagePreprocessor',
    'QRCodeDetector',
    'createQrCodeDetector'
]
