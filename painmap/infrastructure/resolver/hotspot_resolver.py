# painmap/infrastructure/resolver/hotspot_resolver.py
"""
Nearest-centroid hotspot resolution with a transparency mask.

A click is accepted only if it lies inside the displayed image and on a
pixel of the body silhouette. It is then assigned to the hotspot whose
bounding-box centre is closest.
"""
import math
from typing import Optional, Union

from painmap.domain.models.coordinate_space import (
    Point, Size, displayed_to_natural, round_half_up
)
from painmap.domain.models.hotspot import HotspotMatch, View
from painmap.domain.services.i_hotspot_catalog_service import IHotspotCatalog
from painmap.domain.services.i_hotspot_resolver_service import IHotspotResolver
from painmap.domain.services.i_logger_service import ILoggerService
from painmap.domain.services.i_raster_service import IRasterBuffer

DEFAULT_ALPHA_THRESHOLD = 10


class HotspotResolver(IHotspotResolver):
    """Resolves clicks against an IHotspotCatalog."""

    def __init__(self, catalog: IHotspotCatalog, logger: ILoggerService,
                 alpha_threshold: int = DEFAULT_ALPHA_THRESHOLD):
        """
        Args:
            catalog: Hotspot table
            logger: Logger service
            alpha_threshold: Pixels with alpha below this are background
        """
        self.catalog = catalog
        self.logger = logger
        self.alpha_threshold = alpha_threshold

    def resolve(self, click: Point, displayed: Size, view: Union[View, str],
                raster: Optional[IRasterBuffer]) -> Optional[HotspotMatch]:
        view = View.parse(view)

        if displayed.is_empty or not displayed.contains(click):
            self.logger.debug("Click outside displayed image bounds",
                              x=click.x, y=click.y, width=displayed.width, height=displayed.height)
            return None

        if not self._is_on_body(click, displayed, raster):
            return None

        return self._nearest_hotspot(click, displayed, view)

    def _is_on_body(self, click: Point, displayed: Size, raster: Optional[IRasterBuffer]) -> bool:
        """Sample the raster pixel under the click; False unless it is opaque enough."""
        if raster is None or raster.natural_size.is_empty:
            self.logger.debug("Raster not ready, ignoring click")
            return False

        natural_size = raster.natural_size
        natural = displayed_to_natural(click, displayed, natural_size)
        pixel_x = round_half_up(natural.x)
        pixel_y = round_half_up(natural.y)

        # A click on the right or bottom edge rounds to one past the last pixel
        if not (0 <= pixel_x < natural_size.width and 0 <= pixel_y < natural_size.height):
            self.logger.debug("Mapped click is outside the natural image", x=pixel_x, y=pixel_y)
            return False

        alpha = raster.alpha_at(pixel_x, pixel_y)
        if alpha < self.alpha_threshold:
            self.logger.debug("Click on transparent pixel", x=pixel_x, y=pixel_y, alpha=alpha)
            return False
        return True

    def _nearest_hotspot(self, click: Point, displayed: Size, view: View) -> Optional[HotspotMatch]:
        """
        Pick the hotspot whose centre is closest to the click.

        Ties are broken by catalog order: a later hotspot replaces the current
        best only when it is strictly closer, so among equally distant
        hotspots the first one defined wins.
        """
        hotspots = self.catalog.list_hotspots(view)
        if not hotspots:
            self.logger.warning("No hotspots defined for view", view=view.value)
            return None

        best = None
        best_distance = math.inf
        for hotspot in hotspots:
            center = hotspot.bounding_box.center_in(displayed)
            distance = math.hypot(click.x - center.x, click.y - center.y)
            if distance < best_distance:
                best = hotspot
                best_distance = distance

        self.logger.debug("Click resolved", view=view.value, region=best.display_name,
                          group=best.group_id, distance=round(best_distance, 2))
        return HotspotMatch(
            display_name=best.display_name,
            group_id=best.group_id,
            is_detail_variant=best.is_detail_variant,
            view=view,
            click=click,
            distance=best_distance
        )
