# painmap/domain/services/i_raster_service.py
"""
Raster buffer interfaces.

A raster buffer is an offscreen copy of a body silhouette at its natural
resolution, used only to tell whether a pixel belongs to the body.
"""
from abc import ABC, abstractmethod
from typing import Any

from painmap.domain.common.result import Result
from painmap.domain.models.coordinate_space import Size


class IRasterBuffer(ABC):
    """Pixel alpha lookup for one decoded image."""

    @property
    @abstractmethod
    def natural_size(self) -> Size:
        pass

    @abstractmethod
    def alpha_at(self, x: int, y: int) -> int:
        """
        Alpha (0-255) of the pixel at natural coordinates.

        Raises:
            IndexError: If the pixel is outside the image
        """
        pass


class IRasterService(ABC):
    """Builds raster buffers from image sources."""

    @abstractmethod
    def load_from_file(self, path: str) -> Result[IRasterBuffer]:
        pass

    @abstractmethod
    def load_from_bytes(self, data: bytes) -> Result[IRasterBuffer]:
        pass

    @abstractmethod
    def from_image(self, image: Any) -> Result[IRasterBuffer]:
        """Build a buffer from an already decoded image."""
        pass
