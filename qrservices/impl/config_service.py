"""
Config Service Implementation.

Reads config/application_config.json and exposes one getter per detector
setting. Every getter has a default matching the library defaults, so a
partial file (or an empty object) is a valid configuration.

Follows:
- SRP: Only handles configuration management
- DIP: Services receive settings through IConfigService getters
"""

import json
import logging
from pathlib import Path
from typing import Any, Dict

from qrservices.interfaces.config_service_interface import IConfigService


logger = logging.getLogger(__name__)


class ConfigService(IConfigService):
    """
    JSON-backed IConfigService.

    Sections: app, debug, qr_detector, preprocessing, clusterer,
    rectifier, decoder.
    """

    def __init__(self, configPath: str = "config/application_config.json"):
        """
        Initialize ConfigService.

        Args:
            configPath: JSON configuration file.

        Raises:
            RuntimeError: If the file is missing, unreadable or not a JSON object.
        """
        self._config: Dict[str, Any] = {}
        self._configPath = Path(configPath)
        self._debugEnabled = False

        if not self.loadConfig(configPath):
            raise RuntimeError(f"Failed to load configuration from: {configPath}")

    def loadConfig(self, configPath: str) -> bool:
        """Replace the current configuration with the content of a JSON file."""
        path = Path(configPath)
        try:
            config = json.loads(path.read_text(encoding="utf-8"))
        except FileNotFoundError:
            logger.error(f"Config file not found: {path}")
            return False
        except json.JSONDecodeError as e:
            logger.error(f"Config file {path} is not valid JSON: {e}")
            return False
        except OSError as e:
            logger.error(f"Config file {path} could not be read: {e}")
            return False

        if not isinstance(config, dict):
            logger.error(f"Config root must be an object: {path}")
            return False

        self._config = config
        self._configPath = path
        self._debugEnabled = bool(self.get("debug.enabled", False))

        logger.info(f"Configuration loaded: {path.resolve()}")
        return True

    # ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
    # Generic Access
    # ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━

    def get(self, key: str, default: Any = None) -> Any:
        """
        Look up a dotted key; default when any level is missing or null.

        Examples:
            get("qr_detector.epsX") -> 0.2
            get("decoder.backend") -> "zxing"
        """
        node: Any = self._config
        for name in key.split("."):
            if not isinstance(node, dict) or node.get(name) is None:
                return default
            node = node[name]
        return node

    def getSection(self, sectionName: str) -> Dict[str, Any]:
        section = self._config.get(sectionName)
        return dict(section) if isinstance(section, dict) else {}

    def getAllConfig(self) -> Dict[str, Any]:
        """Shallow copy of the loaded configuration."""
        return dict(self._config)

    # ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
    # Debug Settings
    # ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━

    def getDebugBasePath(self) -> str:
        return self.get("debug.basePath", "output/debug")

    def isDebugEnabled(self) -> bool:
        return self._debugEnabled

    def setDebugEnabled(self, enabled: bool) -> None:
        """Override debug.enabled for this process."""
        self._debugEnabled = enabled
        logger.info(f"Debug output {'on' if enabled else 'off'}")

    # ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
    # App Settings
    # ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━

    def isQrDetectionEnabled(self) -> bool:
        """Check if QR detection is enabled."""
        return self.get("app.enabled", True)

    def getSupportedExtensions(self) -> list:
        """Get image file extensions picked up from input directories."""
        return self.get(
            "app.imageExtensions",
            [".jpg", ".jpeg", ".png", ".bmp", ".tiff", ".webp"]
        )

    # ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
    # Detector Settings
    # ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━

    def getEpsX(self) -> float:
        """Get horizontal finder-pattern epsilon."""
        return self.get("qr_detector.epsX", 0.2)

    def getEpsY(self) -> float:
        """Get vertical finder-pattern epsilon."""
        return self.get("qr_detector.epsY", 0.2)

    def getPreprocessingMode(self) -> str:
        """Get binarization mode ("minimal" or "full")."""
        return self.get("preprocessing.mode", "minimal")

    def getMinContrast(self) -> int:
        """Get minimum gray spread for binarization."""
        return self.get("preprocessing.minContrast", 20)

    def getClustererConfig(self) -> Dict[str, Any]:
        """
        Get marker clusterer settings.

        Returns:
            Dict with keys: mergeRadius, angleTolerance, legTolerance,
            scaleTolerance, maxCandidates.
        """
        defaults = {
            "mergeRadius": 2.0,
            "angleTolerance": 0.25,
            "legTolerance": 0.3,
            "scaleTolerance": 0.5,
            "maxCandidates": 30
        }
        defaults.update(self.getSection("clusterer"))
        return defaults

    def getRectifierOutputSize(self) -> int:
        """Get side of the straight QR code in pixels."""
        return self.get("rectifier.outputSize", 420)

    def getRectifierThresholdOffset(self) -> float:
        """Get adaptive threshold constant."""
        return self.get("rectifier.thresholdOffset", 10.0)

    def getDecoderBackend(self) -> str:
        """
        Get symbol decoder backend.

        Returns:
            str: Backend name ("zxing" or "pyzbar"), default "zxing".
        """
        return str(self.get("decoder.backend", "zxing")).lower()

    def isDecoderTryRotate(self) -> bool:
        """Check if the decoder tries rotated symbols."""
        return self.get("decoder.zxingTryRotate", True)

    def isDecoderTryDownscale(self) -> bool:
        """Check if the decoder tries downscaled symbols."""
        return self.get("decoder.zxingTryDownscale", True)

    def getQuietZoneRatio(self) -> float:
        """Get quiet zone added around the straight QR code."""
        return self.get("decoder.quietZoneRatio", 0.2)
