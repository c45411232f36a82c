# painmap/domain/services/i_hotspot_resolver_service.py
from abc import ABC, abstractmethod
from typing import Optional, Union

from painmap.domain.models.coordinate_space import Point, Size
from painmap.domain.models.hotspot import HotspotMatch, View
from painmap.domain.services.i_raster_service import IRasterBuffer


class IHotspotResolver(ABC):
    """Turns a click on the body image into a hotspot match."""

    @abstractmethod
    def resolve(self, click: Point, displayed: Size, view: Union[View, str],
                raster: Optional[IRasterBuffer]) -> Optional[HotspotMatch]:
        """
        Resolve a click to the nearest hotspot.

        Args:
            click: Click position in displayed pixels
            displayed: Size of the image as displayed
            view: Active body view
            raster: Raster of the displayed image, or None while it is loading

        Returns:
            The match, or None when the click is outside the image, lands on a
            transparent pixel, the raster is not ready or the catalog is empty
        """
        pass
