# painmap/infrastructure/raster/pil_raster_service.py
"""
Raster buffers built with the Python Imaging Library (PIL).

The alpha channel is copied into a numpy array once, when the image is
decoded; lookups afterwards are plain array indexing.
"""
import io
from typing import Any

import numpy as np
from PIL import Image, UnidentifiedImageError

from painmap.domain.common.errors import ResourceError, ValidationError
from painmap.domain.common.result import Result
from painmap.domain.models.coordinate_space import Size
from painmap.domain.services.i_logger_service import ILoggerService
from painmap.domain.services.i_raster_service import IRasterBuffer, IRasterService


class PilRasterBuffer(IRasterBuffer):
    """Alpha mask of one decoded image at its natural resolution."""

    def __init__(self, image: Image.Image):
        rgba = image if image.mode == "RGBA" else image.convert("RGBA")
        self._alpha = np.asarray(rgba.getchannel("A"), dtype=np.uint8)
        height, width = self._alpha.shape
        self._natural_size = Size(width, height)

    @property
    def natural_size(self) -> Size:
        return self._natural_size

    def alpha_at(self, x: int, y: int) -> int:
        height, width = self._alpha.shape
        if not (0 <= x < width and 0 <= y < height):
            raise IndexError(f"Pixel ({x}, {y}) is outside a {width}x{height} raster")
        return int(self._alpha[y, x])


class PilRasterService(IRasterService):
    """Decodes silhouette images into raster buffers."""

    def __init__(self, logger: ILoggerService):
        self.logger = logger

    def load_from_file(self, path: str) -> Result[IRasterBuffer]:
        """
        Decode an image file.

        Args:
            path: Path of the silhouette image

        Returns:
            Result containing the raster buffer on success
        """
        try:
            with Image.open(path) as image:
                image.load()
                return self.from_image(image)
        except (OSError, UnidentifiedImageError) as e:
            error = ResourceError(
                message=f"Failed to load body image: {e}",
                details={"path": path},
                inner_error=e
            )
            self.logger.error(str(error))
            return Result.fail(error)

    def load_from_bytes(self, data: bytes) -> Result[IRasterBuffer]:
        try:
            with Image.open(io.BytesIO(data)) as image:
                image.load()
                return self.from_image(image)
        except (OSError, UnidentifiedImageError) as e:
            error = ResourceError(
                message=f"Failed to decode body image: {e}",
                details={"size": len(data)},
                inner_error=e
            )
            self.logger.error(str(error))
            return Result.fail(error)

    def from_image(self, image: Any) -> Result[IRasterBuffer]:
        if not isinstance(image, Image.Image):
            return Result.fail(ValidationError(
                message="Expected a PIL image",
                details={"type": type(image).__name__}
            ))
        if image.width == 0 or image.height == 0:
            return Result.fail(ResourceError(
                message="Body image has no pixels",
                details={"size": f"{image.width}x{image.height}"}
            ))

        buffer = PilRasterBuffer(image)
        self.logger.debug(f"Raster ready with size {image.width}x{image.height}")
        return Result.ok(buffer)
