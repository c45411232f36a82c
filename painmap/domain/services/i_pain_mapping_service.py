# painmap/domain/services/i_pain_mapping_service.py
"""
Pain mapping service interface.

Coordinates the resolver and the store for the pain-mapping step: turns
clicks into records, tracks the active view and the selected record.
"""
from abc import ABC, abstractmethod
from typing import List, Optional, Union

from painmap.domain.common.result import Result
from painmap.domain.models.coordinate_space import Point, Size
from painmap.domain.models.hotspot import View
from painmap.domain.models.pain_area import PainAreaRecord
from painmap.domain.services.i_raster_service import IRasterBuffer


class IPainMappingService(ABC):

    @property
    @abstractmethod
    def current_view(self) -> View:
        pass

    @property
    @abstractmethod
    def display_scale(self) -> float:
        pass

    @abstractmethod
    def set_view(self, view: Union[View, str]) -> None:
        """Switch the active view and clear the selection."""
        pass

    @abstractmethod
    def handle_click(self, click: Point, displayed: Size,
                     raster: Optional[IRasterBuffer]) -> Optional[PainAreaRecord]:
        """
        Resolve a click and store a new pain area for it.

        Returns:
            The new (selected) record, or None when the click did not match
        """
        pass

    @abstractmethod
    def select(self, record_id: Optional[str]) -> Optional[PainAreaRecord]:
        pass

    @abstractmethod
    def clear_selection(self) -> None:
        pass

    @abstractmethod
    def selected_record(self) -> Optional[PainAreaRecord]:
        pass

    @abstractmethod
    def change_selected_intensity(self, value: int) -> Result[PainAreaRecord]:
        pass

    @abstractmethod
    def remove(self, record_id: str) -> bool:
        pass

    @abstractmethod
    def visible_records(self) -> List[PainAreaRecord]:
        """Records of the current view, in store order."""
        pass

    @abstractmethod
    def marker_position(self, record: PainAreaRecord) -> Point:
        """Where a record's marker is drawn, in displayed pixels."""
        pass

    @abstractmethod
    def hit_test(self, point: Point, radius: float) -> Optional[PainAreaRecord]:
        """Topmost visible record whose marker lies within radius of point."""
        pass
