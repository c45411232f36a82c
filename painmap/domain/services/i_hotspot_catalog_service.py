# painmap/domain/services/i_hotspot_catalog_service.py
from abc import ABC, abstractmethod
from typing import Tuple, Union

from painmap.domain.models.hotspot import HotspotDefinition, View


class IHotspotCatalog(ABC):
    """Read-only table of anatomical hotspots per body view."""

    @abstractmethod
    def list_hotspots(self, view: Union[View, str]) -> Tuple[HotspotDefinition, ...]:
        """
        Get the hotspots of a view in authored order.

        Raises:
            ValueError: If view is not "front" or "back"
        """
        pass
