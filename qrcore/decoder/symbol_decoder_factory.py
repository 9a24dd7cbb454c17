"""
Symbol Decoder Factory Module.

Factory function for creating symbol decoder instances based on backend selection.
Supports ZXing-cpp and pyzbar backends.

Follows:
- OCP (Open/Closed Principle): Easy to extend with new backends
- DIP (Dependency Inversion): Returns ISymbolDecoder interface
- Factory Pattern: Encapsulates object creation logic
"""

import logging
from typing import List

from qrcore.interfaces.symbol_decoder_interface import ISymbolDecoder


logger = logging.getLogger(__name__)


def createSymbolDecoder(
    backend: str = "zxing",
    # ZXing params (prefixed with 'zxing')
    zxingTryRotate: bool = True,
    zxingTryDownscale: bool = True,
    # Shared params
    quietZoneRatio: float = 0.2
) -> ISymbolDecoder:
    """
    Factory function to create a symbol decoder based on backend.

    Supports:
    - "zxing": ZXing-cpp backend (fast, cross-platform)
    - "pyzbar": pyzbar backend (requires the zbar shared library)

    Args:
        backend: Backend name ("zxing" or "pyzbar").
        zxingTryRotate: (zxing) Try rotated symbols (90/270 degrees).
        zxingTryDownscale: (zxing) Try downscaled versions.
        quietZoneRatio: White border added around the rectified symbol.

    Returns:
        ISymbolDecoder: Decoder instance implementing ISymbolDecoder interface.

    Raises:
        ValueError: If backend is invalid or not supported.
        ImportError: If required library is not installed.

    Examples:
        >>> decoder = createSymbolDecoder(backend="zxing", zxingTryRotate=False)
        >>> decoder = createSymbolDecoder(backend="pyzbar")
    """
    # Normalize backend name
    backend = backend.lower().strip()

    # Validate backend
    supportedBackends = getSupportedDecoderBackends()
    if backend not in supportedBackends:
        errorMsg = (
            f"Invalid decoder backend: '{backend}'. "
            f"Supported backends: {supportedBackends}"
        )
        logger.error(errorMsg)
        raise ValueError(errorMsg)

    if backend == "pyzbar":
        return _createPyzbarDecoder(quietZoneRatio=quietZoneRatio)

    return _createZxingDecoder(
        zxingTryRotate=zxingTryRotate,
        zxingTryDownscale=zxingTryDownscale,
        quietZoneRatio=quietZoneRatio
    )


def _createZxingDecoder(
    zxingTryRotate: bool,
    zxingTryDownscale: bool,
    quietZoneRatio: float
) -> ISymbolDecoder:
    """
    Create ZXing symbol decoder instance.

    Raises:
        ImportError: If zxing-cpp is not installed.
    """
    try:
        import zxingcpp  # noqa: F401
        from qrcore.decoder.zxing_symbol_decoder import ZxingSymbolDecoder

        logger.info(
            f"Creating ZXing symbol decoder "
            f"(tryRotate={zxingTryRotate}, tryDownscale={zxingTryDownscale})"
        )

        return ZxingSymbolDecoder(
            tryRotate=zxingTryRotate,
            tryDownscale=zxingTryDownscale,
            quietZoneRatio=quietZoneRatio
        )

    except ImportError as e:
        errorMsg = (
            "ZXing-cpp is not installed. "
            "Install with: pip install zxing-cpp"
        )
        logger.error(errorMsg)
        logger.error(f"Import error details: {e}")
        raise ImportError(errorMsg) from e


def _createPyzbarDecoder(quietZoneRatio: float) -> ISymbolDecoder:
    """
    Create pyzbar symbol decoder instance.

    Raises:
        ImportError: If pyzbar or the zbar shared library is missing.
    """
    try:
        from qrcore.decoder.pyzbar_symbol_decoder import PyzbarSymbolDecoder

        logger.info("Creating pyzbar symbol decoder")

        return PyzbarSymbolDecoder(quietZoneRatio=quietZoneRatio)

    except ImportError as e:
        errorMsg = (
            "pyzbar is not available. "
            "Install with: pip install pyzbar (and the zbar shared library)"
        )
        logger.error(errorMsg)
        logger.error(f"Import error details: {e}")
        raise ImportError(errorMsg) from e


def getSupportedDecoderBackends() -> List[str]:
    """
    Get list of supported decoder backend names.

    Returns:
        List[str]: List of backend names ["zxing", "pyzbar"].
    """
    return ["zxing", "pyzbar"]


def isDecoderBackendAvailable(backend: str) -> bool:
    """
    Check if a decoder backend is available (library installed).

    Args:
        backend: Backend name ("zxing" or "pyzbar").

    Returns:
        bool: True if backend library is installed and available.
    """
    backend = backend.lower().strip()

    if backend == "zxing":
        try:
            import zxingcpp  # noqa: F401
            return True
        except ImportError:
            return False

    elif backend == "pyzbar":
        try:
            from pyzbar import pyzbar  # noqa: F401
            return True
        except ImportError:
            return False

    return False
