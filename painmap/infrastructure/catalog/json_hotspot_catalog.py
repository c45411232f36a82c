# painmap/infrastructure/catalog/json_hotspot_catalog.py
"""
Hotspot catalog backed by the JSON table shipped in ``painmap/data``.

The table is read once; afterwards the catalog only hands out tuples of
frozen HotspotDefinition objects, so nothing downstream can modify it.
"""
import json
import os
from types import MappingProxyType
from typing import Any, Dict, Iterable, Mapping, Optional, Tuple, Union

from painmap.domain.common.errors import ConfigurationError
from painmap.domain.common.result import Result
from painmap.domain.models.hotspot import BoundingBox, HotspotDefinition, View
from painmap.domain.services.i_hotspot_catalog_service import IHotspotCatalog
from painmap.domain.services.i_logger_service import ILoggerService

DEFAULT_CATALOG_PATH = os.path.join(
    os.path.dirname(os.path.dirname(os.path.dirname(os.path.abspath(__file__)))),
    "data", "hotspots.json"
)


def hotspot_from_dict(entry: Dict[str, Any]) -> HotspotDefinition:
    """
    Build a hotspot from one table entry.

    Raises:
        KeyError: If a required field is missing
        ValueError: If a coordinate is outside [0, 1]
    """
    return HotspotDefinition(
        group_id=int(entry["group_id"]),
        display_name=str(entry["name"]),
        bounding_box=BoundingBox(
            x=float(entry["x"]),
            y=float(entry["y"]),
            width=float(entry["width"]),
            height=float(entry["height"])
        ),
        is_detail_variant=bool(entry.get("detail", False))
    )


class JsonHotspotCatalog(IHotspotCatalog):
    """Immutable hotspot table keyed by body view."""

    def __init__(self, hotspots: Mapping[View, Iterable[HotspotDefinition]],
                 logger: Optional[ILoggerService] = None):
        self.logger = logger
        self._hotspots = MappingProxyType({
            view: tuple(hotspots.get(view, ())) for view in View
        })

    @classmethod
    def load(cls, logger: ILoggerService, path: Optional[str] = None) -> Result['JsonHotspotCatalog']:
        """
        Read the hotspot table.

        Args:
            logger: Logger service
            path: JSON file to read; the packaged table when omitted

        Returns:
            Result containing the catalog, or a ConfigurationError
        """
        path = path or DEFAULT_CATALOG_PATH
        try:
            with open(path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            error = ConfigurationError(
                message=f"Failed to read hotspot table: {e}",
                details={"path": path},
                inner_error=e
            )
            logger.error(str(error))
            return Result.fail(error)

        if not isinstance(data, dict):
            error = ConfigurationError(
                message="Hotspot table must be a JSON object keyed by view",
                details={"path": path}
            )
            logger.error(str(error))
            return Result.fail(error)

        hotspots = {}
        for view in View:
            entries = data.get(view.value, [])
            try:
                hotspots[view] = tuple(hotspot_from_dict(entry) for entry in entries)
            except (KeyError, TypeError, ValueError) as e:
                error = ConfigurationError(
                    message=f"Invalid hotspot entry in {view.value} view: {e}",
                    details={"path": path, "view": view.value},
                    inner_error=e
                )
                logger.error(str(error))
                return Result.fail(error)

        logger.info("Hotspot table loaded", path=path,
                    front=len(hotspots[View.FRONT]), back=len(hotspots[View.BACK]))
        return Result.ok(cls(hotspots, logger))

    def list_hotspots(self, view: Union[View, str]) -> Tuple[HotspotDefinition, ...]:
        return self._hotspots[View.parse(view)]
