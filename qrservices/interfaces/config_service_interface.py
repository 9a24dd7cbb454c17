"""
Config Service Interface Module.

Defines the interface for centralized configuration management.
The config service loads and provides access to all detector settings.

Follows:
- SRP: Only handles configuration management
- DIP: Other services depend on this abstraction
"""

from abc import ABC, abstractmethod
from typing import Any, Dict


class IConfigService(ABC):
    """
    Interface for configuration management.

    Supports dot notation for nested config access.
    """

    @abstractmethod
    def loadConfig(self, configPath: str) -> bool:
        """
        Load configuration from a JSON file.

        Args:
            configPath: Path to the configuration file.

        Returns:
            bool: True if loaded successfully, False otherwise.
        """
        pass

    @abstractmethod
    def get(self, key: str, default: Any = None) -> Any:
        """
        Get a configuration value by key.

        Supports dot notation for nested access:
        - "qr_detector.epsX" -> config["qr_detector"]["epsX"]

        Args:
            key: Configuration key (supports dot notation).
            default: Default value if key not found.

        Returns:
            Configuration value or default.
        """
        pass

    @abstractmethod
    def getSection(self, sectionName: str) -> Dict[str, Any]:
        """
        Get all configuration of one section.

        Args:
            sectionName: Section name (e.g., "rectifier").

        Returns:
            Configuration dictionary, empty if the section is missing.
        """
        pass

    @abstractmethod
    def isDebugEnabled(self) -> bool:
        """Check if debug mode is enabled."""
        pass

    @abstractmethod
    def setDebugEnabled(self, enabled: bool) -> None:
        """Enable or disable debug mode at runtime."""
        pass

    @abstractmethod
    def getDebugBasePath(self) -> str:
        """Get base path for debug output."""
        pass
