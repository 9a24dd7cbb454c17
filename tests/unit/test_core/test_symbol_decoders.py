"""Unit tests for symbol decoder backends and their factory.

Backend tests are skipped when the decoding library is not installed.
"""
import numpy as np
import pytest

from qrcore.decoder.symbol_decoder_factory import (
    createSymbolDecoder,
    getSupportedDecoderBackends,
    isDecoderBackendAvailable
)
from qrcore.geometry.perspective_rectifier import PerspectiveRectifier
from qrcore.interfaces.quadrangle_estimator_interface import Quadrangle
from qrcore.interfaces.rectifier_interface import RectifiedSymbol


@pytest.fixture
def qrSymbol(qrImage, expectedCorners):
    return PerspectiveRectifier().rectify(qrImage, Quadrangle.fromArray(expectedCorners))


@pytest.fixture
def blankSymbol():
    image = np.full((420, 420), 255, dtype=np.uint8)
    return RectifiedSymbol(image=image, homography=np.eye(3), size=420)


class TestSymbolDecoderFactory:
    """Test suite for createSymbolDecoder and backend queries."""

    def test_supported_backends(self):
        assert getSupportedDecoderBackends() == ["zxing", "pyzbar"]

    def test_unknown_backend(self):
        with pytest.raises(ValueError, match="Invalid decoder backend"):
            createSymbolDecoder(backend="opencv")

    def test_unknown_backend_not_available(self):
        assert isDecoderBackendAvailable("opencv") is False

    def test_backend_name_is_normalized(self):
        pytest.importorskip("zxingcpp")
        from qrcore.decoder.zxing_symbol_decoder import ZxingSymbolDecoder

        decoder = createSymbolDecoder(backend="  ZXing ")
        assert isinstance(decoder, ZxingSymbolDecoder)
        assert isDecoderBackendAvailable("zxing")


class TestZxingSymbolDecoder:
    """Test suite for the zxing-cpp backend."""

    @pytest.fixture
    def decoder(self):
        pytest.importorskip("zxingcpp")
        from qrcore.decoder.zxing_symbol_decoder import ZxingSymbolDecoder
        return ZxingSymbolDecoder()

    def test_decodes_rectified_code(self, decoder, qrSymbol, qrText):
        assert decoder.decode(qrSymbol) == qrText

    def test_blank_symbol_gives_empty_text(self, decoder, blankSymbol):
        assert decoder.decode(blankSymbol) == ""

    def test_usable_after_close(self, decoder, qrSymbol, qrText):
        decoder.close()
        assert decoder.decode(qrSymbol) == qrText


class TestPyzbarSymbolDecoder:
    """Test suite for the pyzbar backend."""

    @pytest.fixture
    def decoder(self):
        pytest.importorskip("pyzbar.pyzbar")
        return createSymbolDecoder(backend="pyzbar", quietZoneRatio=0.25)

    def test_decodes_rectified_code(self, decoder, qrSymbol, qrText):
        assert decoder.decode(qrSymbol) == qrText

    def test_blank_symbol_gives_empty_text(self, decoder, blankSymbol):
        assert decoder.decode(blankSymbol) == ""
