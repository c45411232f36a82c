# painmap/infrastructure/capture/qt_capture_service.py
"""
Qt-native capture of the rendered body map.

The widget is grabbed into a QPixmap, converted to a PIL Image through an
in-memory PNG and written into a directory scoped to the form session.
"""
import io
import os
import re
import time
from typing import Optional, Union

from PIL import Image
from PySide6.QtCore import QBuffer, QByteArray, QIODevice
from PySide6.QtGui import QPixmap
from PySide6.QtWidgets import QWidget

from painmap.domain.common.errors import ResourceError, UIError, ValidationError
from painmap.domain.common.result import Result
from painmap.domain.models.hotspot import View
from painmap.domain.services.i_capture_service import IPainMapCaptureService
from painmap.domain.services.i_logger_service import ILoggerService

_UNSAFE_SESSION_CHARS = re.compile(r"[^a-zA-Z0-9_-]")


def sanitize_session_id(form_session_id: str) -> str:
    return _UNSAFE_SESSION_CHARS.sub("", form_session_id or "")


class QtPainMapCaptureService(IPainMapCaptureService):
    """
    Saves pain map captures as PNG files.

    Files land in ``<capture_dir>/<session id>/pain-map-<view>-<epoch ms>.png``.
    """

    def __init__(self, logger: ILoggerService, capture_dir: str):
        """
        Args:
            logger: Logger service for logging
            capture_dir: Root directory of the assessment files
        """
        self.logger = logger
        self.capture_dir = capture_dir

    def capture_widget(self, widget: QWidget) -> Result[Image.Image]:
        try:
            pixmap = widget.grab()
            if pixmap.isNull():
                return Result.fail(UIError(
                    message="Failed to capture pain map, resulting pixmap is null",
                    details={"widget": type(widget).__name__}
                ))

            image = self._qpixmap_to_pil(pixmap)
            if image is None:
                return Result.fail(UIError(
                    message="Failed to convert QPixmap to PIL Image",
                    details={"widget": type(widget).__name__}
                ))

            self.logger.debug(f"Pain map captured with size {image.width}x{image.height}")
            return Result.ok(image)
        except RuntimeError as e:
            # Raised by Qt when the underlying C++ widget is already deleted
            error = UIError(message="Failed to capture pain map", inner_error=e)
            self.logger.error(f"{error}: {e}")
            return Result.fail(error)

    def _qpixmap_to_pil(self, pixmap: QPixmap) -> Optional[Image.Image]:
        """Convert QPixmap to PIL Image using an intermediate PNG buffer."""
        byte_array = QByteArray()
        buffer = QBuffer(byte_array)
        buffer.open(QIODevice.OpenModeFlag.WriteOnly)
        saved = pixmap.save(buffer, "PNG")
        buffer.close()
        if not saved:
            return None

        image = Image.open(io.BytesIO(byte_array.data()))
        image.load()
        return image

    def save_pain_map(self, image: Image.Image, view: Union[View, str], form_session_id: str) -> Result[str]:
        view = View.parse(view)
        session_dir_name = sanitize_session_id(form_session_id)
        if not session_dir_name:
            return Result.fail(ValidationError(
                message="Form session id is empty after sanitizing",
                details={"form_session_id": form_session_id}
            ))

        filename = f"pain-map-{view.value}-{int(time.time() * 1000)}.png"
        session_dir = os.path.join(self.capture_dir, session_dir_name)
        path = os.path.join(session_dir, filename)

        def write_png() -> None:
            os.makedirs(session_dir, exist_ok=True)
            image.save(path, format="PNG")

        result = Result.from_operation(
            write_png, self.logger, ResourceError, "Failed to save pain map", path=path
        )
        if result.is_failure:
            return Result.fail(result.error)

        relative_path = f"{session_dir_name}/{filename}"
        self.logger.info("Pain map saved", view=view.value, path=relative_path)
        return Result.ok(relative_path)

    def capture_and_save(self, widget: QWidget, view: Union[View, str], form_session_id: str) -> Result[str]:
        return self.capture_widget(widget).and_then(
            lambda image: self.save_pain_map(image, view, form_session_id)
        )
