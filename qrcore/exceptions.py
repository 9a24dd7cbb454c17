"""
QR Core Exceptions Module.

Errors raised by the detection pipeline.
"Not found" and "nothing decoded" are regular results, not exceptions.
"""


class QrCoreError(Exception):
    """Base class for all errors raised by the QR core."""


class InvalidArgumentError(QrCoreError, ValueError):
    """Raised at the API boundary for a missing or malformed image or point set."""


class GeometryError(QrCoreError, RuntimeError):
    """
    Raised when a quadrangle is too degenerate to rectify.

    The detection path never produces such a quadrangle, so seeing this
    means the points came from elsewhere or an internal invariant broke.
    """
