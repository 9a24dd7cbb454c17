"""
Base Service Interface Module.

Shared contract and helpers for QR Locator services: a service name for
logging, a per-service debug directory and timing utilities.

Follows:
- ISP (Interface Segregation Principle): Minimal base interface
- DIP (Dependency Inversion Principle): Callers depend on abstractions
"""

from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any, Dict, Optional
import json
import logging
import time

import cv2


class IBaseService(ABC):
    """
    Base interface for all services.

    A service is identified by name; the name doubles as logger name
    and as the debug sub-directory.
    """

    @abstractmethod
    def getServiceName(self) -> str:
        """
        Get the service name.

        Returns:
            str: Service name (e.g., "qr_detection")
        """
        pass

    @abstractmethod
    def setDebugEnabled(self, enabled: bool) -> None:
        """
        Toggle writing of debug artifacts.

        Args:
            enabled: True to write debug artifacts.
        """
        pass

    @abstractmethod
    def isDebugEnabled(self) -> bool:
        """Check whether debug artifacts are written."""
        pass


class BaseService(IBaseService):
    """
    Helper base class for services.

    Debug artifacts go to <debugBasePath>/<serviceName>/ and are only
    written while debug is enabled. Failures to write them are logged
    and never interrupt processing.
    """

    def __init__(
        self,
        serviceName: str,
        debugBasePath: str = "output/debug",
        debugEnabled: bool = False
    ):
        """
        Initialize BaseService.

        Args:
            serviceName: Service name, used for the logger and debug folder.
            debugBasePath: Root folder of all debug artifacts.
            debugEnabled: Write debug artifacts from the start.
        """
        self._serviceName = serviceName
        self._debugPath = Path(debugBasePath) / serviceName
        self._logger = logging.getLogger(serviceName)
        self._debugEnabled = False
        if debugEnabled:
            self.setDebugEnabled(True)

    def getServiceName(self) -> str:
        return self._serviceName

    def getDebugPath(self) -> Path:
        """Folder receiving this service's debug artifacts."""
        return self._debugPath

    def setDebugEnabled(self, enabled: bool) -> None:
        if enabled:
            self._debugPath.mkdir(parents=True, exist_ok=True)
        self._debugEnabled = enabled
        self._logger.info(f"Debug output {'on' if enabled else 'off'} ({self._debugPath})")

    def isDebugEnabled(self) -> bool:
        return self._debugEnabled

    # ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
    # Debug Artifacts
    # ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━

    def _debugFile(self, frameId: str, prefix: str, extension: str) -> Path:
        """Artifact path: <prefix>_<frameId>.<extension>, or <frameId>.<extension>."""
        stem = f"{prefix}_{frameId}" if prefix else frameId
        return self._debugPath / f"{stem}.{extension}"

    def _saveDebugImage(self, frameId: str, image: Any, prefix: str = "") -> Optional[str]:
        """
        Write an image artifact as PNG.

        Args:
            frameId: Frame identifier.
            image: numpy image; None is skipped.
            prefix: Artifact kind, e.g. "straight".

        Returns:
            Written path, or None when skipped or failed.
        """
        if not self._debugEnabled or image is None:
            return None

        target = self._debugFile(frameId, prefix, "png")
        try:
            written = cv2.imwrite(str(target), image)
        except cv2.error as e:
            self._logger.warning(f"[{frameId}] Debug image not written: {e}")
            return None
        if not written:
            self._logger.warning(f"[{frameId}] Debug image not written: {target}")
            return None

        self._logger.debug(f"[{frameId}] Debug image: {target}")
        return str(target)

    def _saveDebugJson(self, frameId: str, data: Dict, prefix: str = "") -> Optional[str]:
        """
        Write a JSON artifact. Values JSON cannot encode are written with str().

        Returns:
            Written path, or None when skipped or failed.
        """
        if not self._debugEnabled:
            return None

        target = self._debugFile(frameId, prefix, "json")
        try:
            target.write_text(
                json.dumps(data, indent=2, ensure_ascii=False, default=str),
                encoding="utf-8"
            )
        except OSError as e:
            self._logger.warning(f"[{frameId}] Debug JSON not written: {e}")
            return None

        self._logger.debug(f"[{frameId}] Debug JSON: {target}")
        return str(target)

    # ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
    # Timing
    # ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━

    def _logTiming(self, frameId: str, processingTimeMs: float) -> None:
        self._logger.info(f"[{frameId}] {self._serviceName} took {processingTimeMs:.2f}ms")

    @staticmethod
    def _measureTime(startTime: float) -> float:
        """Milliseconds elapsed since a time.perf_counter() reading."""
        return (time.perf_counter() - startTime) * 1000
