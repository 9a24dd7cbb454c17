"""Unit tests for QrDetectionService.

The service is built around a QRCodeDetector with a stub symbol
decoder so the tests do not depend on a decoding library.
"""
import json

import numpy as np
import pytest

from qrcore.qr.qr_code_detector import QRCodeDetector
from qrservices.impl.config_service import ConfigService
from qrservices.impl.qr_detection_service import QrDetectionService


@pytest.fixture
def service(stubDecoder, tmp_path):
    qrService = QrDetectionService(
        detector=QRCodeDetector(decoder=stubDecoder),
        debugBasePath=str(tmp_path / "debug")
    )
    yield qrService
    qrService.shutdown()


class TestDetectQr:
    """Test suite for detectQr results."""

    def test_detected_code(self, service, markerImage):
        result = service.detectQr(markerImage, "frame_001")
        assert result.success
        assert result.frameId == "frame_001"
        assert result.qrData.detected
        assert result.qrData.text == "STUB"
        assert result.processingTimeMs >= 0.0
        assert result.errorMessage == ""

    def test_nothing_detected(self, service, blankImage):
        result = service.detectQr(blankImage, "blank")
        assert not result.success
        assert result.qrData is not None
        assert not result.qrData.detected
        assert result.errorMessage == ""

    def test_invalid_image(self, service):
        result = service.detectQr(None, "none")
        assert not result.success
        assert result.qrData is None
        assert "None" in result.errorMessage

    def test_unexpected_error_is_reported(self, service, markerImage):
        service.shutdown()
        result = service.detectQr(markerImage, "closed")
        assert not result.success
        assert "closed" in result.errorMessage

    def test_disabled(self, service, markerImage, stubDecoder):
        service.setEnabled(False)
        assert not service.isEnabled()
        result = service.detectQr(markerImage, "off")
        assert not result.success
        assert result.errorMessage == "QR detection disabled"
        assert stubDecoder.decodeCalls == 0

    def test_epsilons_reach_detector(self, service):
        service.setEpsX(0.3)
        service.setEpsY(0.15)
        assert service.detector.getEpsX() == pytest.approx(0.3)
        assert service.detector.getEpsY() == pytest.approx(0.15)


class TestResultSerialization:
    """Test suite for QrDetectionServiceResult.toDict."""

    def test_detected_dict(self, service, markerImage):
        data = service.detectQr(markerImage, "frame").toDict()
        assert data["frameId"] == "frame"
        assert data["detected"] is True
        assert data["text"] == "STUB"
        assert len(data["polygon"]) == 4
        assert data["rect"][2] > 0
        json.dumps(data)

    def test_failed_dict(self, service):
        data = service.detectQr(None, "bad").toDict()
        assert data["detected"] is False
        assert data["text"] == ""
        assert data["polygon"] == []
        assert data["rect"] == [0, 0, 0, 0]


class TestDebugOutput:
    """Test suite for debug artifacts."""

    def test_no_output_when_disabled(self, service, markerImage, tmp_path):
        service.detectQr(markerImage, "quiet")
        assert not (tmp_path / "debug" / "qr_detection").exists()

    def test_output_when_enabled(self, service, markerImage, tmp_path):
        service.setDebugEnabled(True)
        service.detectQr(markerImage, "loud")

        debugDir = tmp_path / "debug" / "qr_detection"
        assert service.getDebugPath() == debugDir
        assert (debugDir / "straight_loud.png").is_file()

        data = json.loads((debugDir / "qr_loud.json").read_text(encoding="utf-8"))
        assert data["frameId"] == "loud"
        assert data["text"] == "STUB"
        assert len(data["polygon"]) == 4
        assert data["epsX"] == pytest.approx(0.2)

    def test_no_output_without_detection(self, service, blankImage, tmp_path):
        service.setDebugEnabled(True)
        service.detectQr(blankImage, "empty")
        assert list((tmp_path / "debug" / "qr_detection").iterdir()) == []


class TestFromConfig:
    """Test suite for building the service from configuration."""

    def test_from_config(self, configFile):
        pytest.importorskip("zxingcpp")
        service = QrDetectionService.fromConfig(ConfigService(str(configFile)))
        try:
            assert service.getServiceName() == "qr_detection"
            assert service.isEnabled()
            assert service.detector.getEpsX() == pytest.approx(0.3)
            assert service.detector.getEpsY() == pytest.approx(0.25)
        finally:
            service.shutdown()

    def test_unknown_backend(self):
        with pytest.raises(ValueError):
            QrDetectionService(decoderBackend="opencv")

    def test_shutdown_closes_detector(self, service, stubDecoder):
        service.shutdown()
        assert service.detector.closed
        assert stubDecoder.closeCalls == 1


class TestRealDecoding:
    """Service round trip with the default decoder backend."""

    def test_decodes_code(self, qrImage, qrText):
        pytest.importorskip("zxingcpp")
        service = QrDetectionService()
        try:
            result = service.detectQr(np.ascontiguousarray(qrImage), "real")
            assert result.success
            assert result.qrData.text == qrText
        finally:
            service.shutdown()
