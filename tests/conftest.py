"""
Test Configuration and Fixtures for the Pain Map
================================================

Fixtures shared by all test modules: a mock logger, hand-built and packaged
hotspot catalogs, small PIL rasters and the session services.
"""

import os
import sys
from unittest.mock import MagicMock

import pytest
from PIL import Image

# Add parent directory to path so the painmap package imports without installing
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from painmap.domain.models.coordinate_space import Point
from painmap.domain.models.hotspot import BoundingBox, HotspotDefinition, View
from painmap.domain.models.pain_area import PainAreaRecord
from painmap.domain.services.i_logger_service import ILoggerService
from painmap.infrastructure.catalog.json_hotspot_catalog import JsonHotspotCatalog
from painmap.infrastructure.form.assessment_form_state import AssessmentFormState
from painmap.infrastructure.raster.pil_raster_service import PilRasterBuffer
from painmap.infrastructure.store.pain_area_store import InMemoryPainAreaStore


@pytest.fixture
def logger():
    """Logger double; assertions can inspect the calls."""
    return MagicMock(spec=ILoggerService)


@pytest.fixture
def small_catalog(logger):
    """
    Five hotspots with easy centres.

    Front (normalized centres): Chest (0.5, 0.25), Left Knee (0.6, 0.75),
    Right Knee (0.4, 0.75). Back: Lower Back (0.5, 0.45), Left Heel
    (0.6, 0.925, detail).
    """
    return JsonHotspotCatalog({
        View.FRONT: [
            HotspotDefinition(1, "Chest", BoundingBox(0.4, 0.2, 0.2, 0.1)),
            HotspotDefinition(2, "Left Knee", BoundingBox(0.55, 0.7, 0.1, 0.1)),
            HotspotDefinition(3, "Right Knee", BoundingBox(0.35, 0.7, 0.1, 0.1)),
        ],
        View.BACK: [
            HotspotDefinition(10, "Lower Back", BoundingBox(0.4, 0.4, 0.2, 0.1)),
            HotspotDefinition(30, "Left Heel", BoundingBox(0.55, 0.9, 0.1, 0.05), is_detail_variant=True),
        ],
    }, logger)


@pytest.fixture
def packaged_catalog(logger):
    result = JsonHotspotCatalog.load(logger)
    assert result.is_success, result.error if result.is_failure else None
    return result.value


@pytest.fixture
def opaque_raster():
    """100x200 raster, fully opaque."""
    return PilRasterBuffer(Image.new("RGBA", (100, 200), (200, 120, 100, 255)))


@pytest.fixture
def raster_with_hole():
    """100x100 opaque raster whose pixel (50, 50) is fully transparent."""
    image = Image.new("RGBA", (100, 100), (200, 120, 100, 255))
    image.putpixel((50, 50), (0, 0, 0, 0))
    return PilRasterBuffer(image)


@pytest.fixture
def store(logger):
    return InMemoryPainAreaStore(logger)


@pytest.fixture
def form_state(logger):
    return AssessmentFormState(logger, form_session_id="session-1700000000000-abc1234")


@pytest.fixture
def make_record():
    """Factory for pain area records with sensible defaults."""
    counter = {"next": 0}

    def _make(record_id=None, region="Lower Back", intensity=5, view=View.BACK,
              group_id=10, is_detail=False, x=100.0, y=200.0, free_text=None):
        counter["next"] += 1
        return PainAreaRecord(
            id=record_id or f"point-test-{counter['next']}",
            region=region,
            intensity=intensity,
            coordinates=Point(x, y),
            origin_view=view,
            source_group_id=group_id,
            is_detail=is_detail,
            free_text=free_text
        )

    return _make
