# painmap/presentation/components/body_map_widget.py
"""
Clickable body silhouette with the pain marker overlay.

Shows the image of the active view, routes left clicks either to an
existing marker (select it) or to the pain mapping service (add a mark), and
paints one coloured dot per pain area of the view.
"""
from typing import Optional, Union

from PySide6.QtCore import QPointF, QRectF, QSize, Qt, Signal
from PySide6.QtGui import QBrush, QColor, QMouseEvent, QPainter, QPen, QPixmap
from PySide6.QtWidgets import QSizePolicy, QWidget

from painmap.domain.models.coordinate_space import Point, Size
from painmap.domain.models.hotspot import View
from painmap.domain.models.intensity import intensity_color
from painmap.domain.services.i_config_repository_service import IConfigRepository
from painmap.domain.services.i_logger_service import ILoggerService
from painmap.domain.services.i_pain_mapping_service import IPainMappingService
from painmap.domain.services.i_raster_service import IRasterBuffer, IRasterService

BASE_IMAGE_WIDTH = 384  # Width of the silhouette before the display scale is applied
PLACEHOLDER_SIZE = QSize(384, 768)
MARKER_DIAMETER = 12
MARKER_HIT_RADIUS = 8
SELECTED_MARKER_COLOR = QColor("#0284c7")


class BodyMapWidget(QWidget):
    """Body map canvas for one view at a time."""

    pain_area_added = Signal(str)  # record id
    selection_changed = Signal(object)  # record id or None

    def __init__(self, mapping_service: IPainMappingService, raster_service: IRasterService,
                 config_repository: IConfigRepository, logger: ILoggerService,
                 parent: Optional[QWidget] = None):
        super().__init__(parent)
        self.mapping_service = mapping_service
        self.raster_service = raster_service
        self.config_repository = config_repository
        self.logger = logger

        self._pixmap: Optional[QPixmap] = None
        self._raster: Optional[IRasterBuffer] = None

        self.setCursor(Qt.CursorShape.PointingHandCursor)
        self.setSizePolicy(QSizePolicy.Policy.Fixed, QSizePolicy.Policy.Fixed)
        self.load_view(self.mapping_service.current_view)

    @property
    def raster(self) -> Optional[IRasterBuffer]:
        return self._raster

    def set_view(self, view: Union[View, str]) -> None:
        """Switch the body view; the selection is cleared."""
        self.mapping_service.set_view(view)
        self.load_view(self.mapping_service.current_view)
        self.selection_changed.emit(None)

    def load_view(self, view: View) -> None:
        """
        Load the silhouette and its raster for a view.

        When the image cannot be loaded a placeholder is drawn and clicks do
        nothing until a later load succeeds.
        """
        path = self.config_repository.get_image_path(view.value)
        pixmap = QPixmap(path)
        if pixmap.isNull():
            self.logger.warning("Body image could not be loaded", view=view.value, path=path)
            self._pixmap = None
            self._raster = None
        else:
            self._pixmap = pixmap
            self._raster = self.raster_service.load_from_file(path).value_or(None)

        self.setFixedSize(self.sizeHint())
        self.update()

    def displayed_size(self) -> Size:
        """Size of the silhouette as drawn, in widget pixels."""
        scale = self.mapping_service.display_scale
        if self._pixmap is None:
            return Size(PLACEHOLDER_SIZE.width() * scale, PLACEHOLDER_SIZE.height() * scale)
        width = BASE_IMAGE_WIDTH * scale
        height = width * self._pixmap.height() / self._pixmap.width()
        return Size(width, height)

    def sizeHint(self) -> QSize:
        size = self.displayed_size()
        return QSize(int(round(size.width)), int(round(size.height)))

    def mousePressEvent(self, event: QMouseEvent) -> None:
        if event.button() != Qt.MouseButton.LeftButton:
            return

        position = event.position()
        point = Point(position.x(), position.y())

        hit = self.mapping_service.hit_test(point, MARKER_HIT_RADIUS)
        if hit is not None:
            self.mapping_service.select(hit.id)
            self.selection_changed.emit(hit.id)
            self.update()
            return

        record = self.mapping_service.handle_click(point, self.displayed_size(), self._raster)
        if record is None:
            return

        self.pain_area_added.emit(record.id)
        self.selection_changed.emit(record.id)
        self.update()

    def paintEvent(self, event) -> None:
        painter = QPainter(self)
        painter.setRenderHint(QPainter.RenderHint.Antialiasing)

        size = self.displayed_size()
        target = QRectF(0, 0, size.width, size.height)
        if self._pixmap is not None:
            painter.drawPixmap(target, self._pixmap, QRectF(self._pixmap.rect()))
        else:
            painter.fillRect(target, QColor("#f1f5f9"))
            painter.setPen(QColor("#64748b"))
            painter.drawText(target, Qt.AlignmentFlag.AlignCenter, "Body image unavailable")

        selected = self.mapping_service.selected_record()
        for record in self.mapping_service.visible_records():
            self._draw_marker(painter, record, selected is not None and selected.id == record.id)

        painter.end()

    def _draw_marker(self, painter: QPainter, record, is_selected: bool) -> None:
        position = self.mapping_service.marker_position(record)
        radius = MARKER_DIAMETER / 2

        if is_selected:
            painter.setPen(QPen(SELECTED_MARKER_COLOR, 2))
        else:
            painter.setPen(QPen(QColor("white"), 1))
        painter.setBrush(QBrush(QColor(intensity_color(record.intensity))))
        painter.drawEllipse(QPointF(position.x, position.y), radius, radius)
