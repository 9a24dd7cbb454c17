"""Pytest configuration and shared fixtures for the QR locator.

Provides synthetic test images (position-marker layouts and real QR
codes), rotation helpers and a temporary configuration file.
"""
import sys
import json
import logging
from pathlib import Path
from typing import Sequence, Tuple

import cv2
import numpy as np
import pytest

# Add the project root to Python path
PROJECT_ROOT = Path(__file__).parent.parent
sys.path.insert(0, str(PROJECT_ROOT))

from qrcore.interfaces.rectifier_interface import RectifiedSymbol
from qrcore.interfaces.symbol_decoder_interface import ISymbolDecoder


# Configure logging for tests
logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
    handlers=[logging.StreamHandler()]
)


QR_TEXT = "HELLO-123"
MODULE_SIZE = 10
MARGIN = 45


class QrImageGenerator:
    """Utility class for generating QR test images."""

    @staticmethod
    def markerModules(dimension: int = 21) -> np.ndarray:
        """
        Module grid with only the three position markers set.

        Returns:
            (dimension, dimension) boolean array, True = dark.
        """
        modules = np.zeros((dimension, dimension), dtype=bool)
        for top, left in ((0, 0), (0, dimension - 7), (dimension - 7, 0)):
            block = np.ones((7, 7), dtype=bool)
            block[1:6, 1:6] = False
            block[2:5, 2:5] = True
            modules[top:top + 7, left:left + 7] = block
        return modules

    @staticmethod
    def qrModules(text: str = QR_TEXT) -> np.ndarray:
        """Module grid of a real version 1 QR code (requires qrcode)."""
        qrcode = pytest.importorskip("qrcode")
        code = qrcode.QRCode(
            version=1,
            error_correction=qrcode.constants.ERROR_CORRECT_M,
            border=0
        )
        code.add_data(text)
        code.make(fit=False)
        return np.array(code.get_matrix(), dtype=bool)

    @staticmethod
    def render(
        modules: np.ndarray,
        moduleSize: int = MODULE_SIZE,
        margin: int = MARGIN,
        canvasSize: Tuple[int, int] = None
    ) -> np.ndarray:
        """
        Draw a module grid on a white grayscale canvas.

        Args:
            modules: Boolean module grid.
            moduleSize: Pixels per module.
            margin: Offset of the code's top-left pixel on both axes.
            canvasSize: (width, height), default leaves margin on all sides.

        Returns:
            uint8 grayscale image.
        """
        side = modules.shape[0] * moduleSize
        if canvasSize is None:
            canvasSize = (side + 2 * margin, side + 2 * margin)
        width, height = canvasSize

        canvas = np.full((height, width), 255, dtype=np.uint8)
        code = np.where(modules, 0, 255).astype(np.uint8)
        code = np.repeat(np.repeat(code, moduleSize, axis=0), moduleSize, axis=1)
        canvas[margin:margin + side, margin:margin + side] = code
        return canvas

    @staticmethod
    def codeCorners(
        dimension: int = 21,
        moduleSize: int = MODULE_SIZE,
        margin: int = MARGIN
    ) -> np.ndarray:
        """Outer corners TL, TR, BR, BL of a rendered code."""
        end = margin + dimension * moduleSize
        return np.array(
            [[margin, margin], [end, margin], [end, end], [margin, end]],
            dtype=np.float64
        )

    @staticmethod
    def rotate(image: np.ndarray, angle: float) -> Tuple[np.ndarray, np.ndarray]:
        """
        Rotate an image around its center on a white background.

        Returns:
            (rotated image, 2x3 affine matrix in OpenCV pixel-center coordinates)
        """
        height, width = image.shape[:2]
        matrix = cv2.getRotationMatrix2D((width / 2.0 - 0.5, height / 2.0 - 0.5), angle, 1.0)
        rotated = cv2.warpAffine(
            image, matrix, (width, height),
            flags=cv2.INTER_LINEAR,
            borderMode=cv2.BORDER_CONSTANT,
            borderValue=255
        )
        return rotated, matrix

    @staticmethod
    def transformPoints(points: np.ndarray, matrix: np.ndarray) -> np.ndarray:
        """Apply an affine matrix to pixel-edge coordinates."""
        centers = np.asarray(points, dtype=np.float64) - 0.5
        ones = np.ones((centers.shape[0], 1))
        moved = np.hstack([centers, ones]) @ matrix.T
        return moved + 0.5


class StubSymbolDecoder(ISymbolDecoder):
    """Returns a fixed text when the symbol has dark pixels, "" otherwise."""

    def __init__(self, text: str = "STUB"):
        self.text = text
        self.decodeCalls = 0
        self.closeCalls = 0

    def decode(self, symbol: RectifiedSymbol) -> str:
        self.decodeCalls += 1
        return self.text if np.any(symbol.image == 0) else ""

    def close(self) -> None:
        self.closeCalls += 1


def assertQuadrangleClose(
    points: Sequence[Tuple[float, float]],
    expected: np.ndarray,
    tolerance: float
) -> None:
    """Assert that every expected corner has a detected corner nearby."""
    detected = np.asarray(points, dtype=np.float64)
    for corner in expected:
        distances = np.linalg.norm(detected - corner, axis=1)
        assert distances.min() <= tolerance, (
            f"No corner near {corner.tolist()}: {detected.tolist()}"
        )


@pytest.fixture
def stubDecoder():
    """Symbol decoder that needs no third-party backend."""
    return StubSymbolDecoder()


@pytest.fixture(scope="session")
def projectRoot():
    """Provide project root directory path."""
    return PROJECT_ROOT


@pytest.fixture
def assertCorners():
    """Provide the corner comparison helper."""
    return assertQuadrangleClose


@pytest.fixture
def imageGenerator():
    """Provide test image generator utility."""
    return QrImageGenerator


@pytest.fixture
def markerImage():
    """Three position markers of a 21-module code on a 300x300 canvas."""
    return QrImageGenerator.render(QrImageGenerator.markerModules())


@pytest.fixture
def qrImage():
    """Real version 1 QR code encoding QR_TEXT on a 300x300 canvas."""
    return QrImageGenerator.render(QrImageGenerator.qrModules())


@pytest.fixture
def qrText() -> str:
    """Text encoded by qrImage."""
    return QR_TEXT


@pytest.fixture
def blankImage():
    """Uniform white image."""
    return np.full((300, 300), 255, dtype=np.uint8)


@pytest.fixture
def expectedCorners() -> np.ndarray:
    """Outer corners of the code in markerImage and qrImage."""
    return QrImageGenerator.codeCorners()


@pytest.fixture
def configFile(tmp_path) -> Path:
    """Write a complete configuration file and return its path."""
    config = {
        "app": {"enabled": True, "imageExtensions": [".png"]},
        "debug": {"enabled": False, "basePath": str(tmp_path / "debug")},
        "qr_detector": {"epsX": 0.3, "epsY": 0.25},
        "preprocessing": {"mode": "full", "minContrast": 30},
        "clusterer": {"mergeRadius": 3.0, "maxCandidates": 10},
        "rectifier": {"outputSize": 210, "thresholdOffset": 5.0},
        "decoder": {"backend": "ZXing", "zxingTryRotate": False, "quietZoneRatio": 0.1}
    }
    path = tmp_path / "application_config.json"
    path.write_text(json.dumps(config), encoding="utf-8")
    return path
