# painmap/infrastructure/mapping/pain_mapping_service.py
"""
Pain mapping service.

Glue between the body map widget, the resolver and the pain area store.
"""
import math
from typing import List, Optional, Union

from painmap.domain.common.errors import ValidationError
from painmap.domain.common.result import Result
from painmap.domain.models.coordinate_space import (
    Point, Size, displayed_to_reference, reference_to_displayed
)
from painmap.domain.models.hotspot import View
from painmap.domain.models.pain_area import (
    DEFAULT_INTENSITY, PainAreaRecord, new_pain_area_id
)
from painmap.domain.services.i_hotspot_resolver_service import IHotspotResolver
from painmap.domain.services.i_logger_service import ILoggerService
from painmap.domain.services.i_pain_area_store_service import IPainAreaStore
from painmap.domain.services.i_pain_mapping_service import IPainMappingService
from painmap.domain.services.i_raster_service import IRasterBuffer


class PainMappingService(IPainMappingService):
    """Turns clicks into pain areas and tracks the active view and selection."""

    def __init__(self, resolver: IHotspotResolver, store: IPainAreaStore, logger: ILoggerService,
                 display_scale: float = 0.85, default_intensity: int = DEFAULT_INTENSITY,
                 initial_view: Union[View, str] = View.BACK):
        """
        Initialize the service.

        Args:
            resolver: Hotspot resolver
            store: Pain area store of the session
            logger: Logger service
            display_scale: Scale the body image is drawn at; record coordinates
                are stored divided by it
            default_intensity: Intensity of newly placed marks
            initial_view: View shown first
        """
        if display_scale <= 0:
            raise ValueError(f"Display scale must be positive, got {display_scale}")
        self.resolver = resolver
        self.store = store
        self.logger = logger
        self._display_scale = display_scale
        self._default_intensity = default_intensity
        self._current_view = View.parse(initial_view)
        self._selected_id: Optional[str] = None

    @property
    def current_view(self) -> View:
        return self._current_view

    @property
    def display_scale(self) -> float:
        return self._display_scale

    def set_view(self, view: Union[View, str]) -> None:
        self._current_view = View.parse(view)
        self._selected_id = None
        self.logger.debug("Body view changed", view=self._current_view.value)

    def handle_click(self, click: Point, displayed: Size,
                     raster: Optional[IRasterBuffer]) -> Optional[PainAreaRecord]:
        match = self.resolver.resolve(click, displayed, self._current_view, raster)
        if match is None:
            return None

        record = PainAreaRecord(
            id=new_pain_area_id(),
            region=match.display_name,
            intensity=self._default_intensity,
            coordinates=displayed_to_reference(click, self._display_scale),
            origin_view=match.view,
            source_group_id=match.group_id,
            is_detail=match.is_detail_variant
        )
        result = self.store.add(record)
        if result.is_failure:
            self.logger.error(f"Failed to add pain area: {result.error}")
            return None

        self._selected_id = record.id
        return record

    def select(self, record_id: Optional[str]) -> Optional[PainAreaRecord]:
        record = self.store.get(record_id) if record_id else None
        self._selected_id = record.id if record else None
        return record

    def clear_selection(self) -> None:
        self._selected_id = None

    def selected_record(self) -> Optional[PainAreaRecord]:
        if self._selected_id is None:
            return None
        record = self.store.get(self._selected_id)
        if record is None:
            self._selected_id = None
        return record

    def change_selected_intensity(self, value: int) -> Result[PainAreaRecord]:
        if self._selected_id is None:
            return Result.fail(ValidationError(message="No pain area selected"))
        return self.store.set_intensity(self._selected_id, value)

    def remove(self, record_id: str) -> bool:
        removed = self.store.remove(record_id)
        if self._selected_id == record_id:
            self._selected_id = None
        return removed

    def visible_records(self) -> List[PainAreaRecord]:
        return self.store.filter_by_view(self._current_view)

    def marker_position(self, record: PainAreaRecord) -> Point:
        return reference_to_displayed(record.coordinates, self._display_scale)

    def hit_test(self, point: Point, radius: float) -> Optional[PainAreaRecord]:
        # Later markers are drawn on top, so search from the end
        for record in reversed(self.visible_records()):
            position = self.marker_position(record)
            if math.hypot(point.x - position.x, point.y - position.y) <= radius:
                return record
        return None
