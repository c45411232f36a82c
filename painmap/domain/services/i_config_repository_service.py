# painmap/domain/services/i_config_repository_service.py
"""
Settings of the pain map: display scale, transparency threshold, default
intensity and view, image and capture paths, logging.
"""
from abc import ABC, abstractmethod
from typing import Dict, Any

from painmap.domain.common.result import Result
from painmap.domain.models.hotspot import View


class IConfigRepository(ABC):
    """Key-value settings store; the typed getters fall back to safe defaults."""

    @abstractmethod
    def load_config(self, force_reload: bool = False) -> Result[Dict[str, Any]]:
        """
        Return all settings, reading them from disk when needed.

        Args:
            force_reload: Read from disk even when a cached copy exists
        """
        pass

    @abstractmethod
    def save_config(self, config: Dict[str, Any]) -> Result[bool]:
        """Replace all settings on disk with ``config``."""
        pass

    @abstractmethod
    def get_setting(self, key: str, default: Any = None) -> Any:
        """Get a setting, or the default if the key is missing."""
        pass

    @abstractmethod
    def set_setting(self, key: str, value: Any) -> Result[bool]:
        """Set a setting and persist the configuration."""
        pass

    @abstractmethod
    def get_display_scale(self) -> float:
        """Scale factor applied to the body image when it is drawn."""
        pass

    @abstractmethod
    def get_alpha_threshold(self) -> int:
        """Alpha values below this are treated as background."""
        pass

    @abstractmethod
    def get_default_intensity(self) -> int:
        """Intensity given to newly placed pain marks."""
        pass

    @abstractmethod
    def get_default_view(self) -> View:
        """Body view shown when the pain-mapping step opens."""
        pass

    @abstractmethod
    def get_image_path(self, view: str) -> str:
        """Path of the silhouette image for a body view."""
        pass
