"""
Qt Component Tests
==================

Pain map capture, the body map widget and the composition root. Runs on the
offscreen Qt platform; skipped where PySide6 is not installed.
"""

import os
import re
from unittest.mock import MagicMock

import pytest

os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

pytest.importorskip("PySide6")

from PIL import Image
from PySide6.QtCore import QPoint, Qt
from PySide6.QtTest import QTest
from PySide6.QtWidgets import QApplication, QLabel

from painmap.domain.common.errors import ValidationError
from painmap.domain.models.hotspot import View
from painmap.domain.services.i_capture_service import IPainMapCaptureService
from painmap.domain.services.i_config_repository_service import IConfigRepository
from painmap.domain.services.i_form_state_service import IAssessmentFormState
from painmap.domain.services.i_hotspot_catalog_service import IHotspotCatalog
from painmap.domain.services.i_pain_area_store_service import IPainAreaStore
from painmap.domain.services.i_pain_mapping_service import IPainMappingService
from painmap.infrastructure.capture.qt_capture_service import QtPainMapCaptureService, sanitize_session_id
from painmap.infrastructure.mapping.pain_mapping_service import PainMappingService
from painmap.infrastructure.raster.pil_raster_service import PilRasterService
from painmap.infrastructure.resolver.hotspot_resolver import HotspotResolver
from painmap.presentation.components.body_map_widget import BodyMapWidget

pytestmark = pytest.mark.gui


@pytest.fixture(scope="module")
def qapp():
    app = QApplication.instance() or QApplication([])
    yield app


@pytest.fixture
def capture_service(tmp_path, logger):
    return QtPainMapCaptureService(logger, str(tmp_path / "uploads"))


@pytest.fixture
def body_image(tmp_path):
    """Opaque 100x200 silhouette saved as PNG."""
    path = tmp_path / "body.png"
    Image.new("RGBA", (100, 200), (220, 180, 160, 255)).save(path)
    return str(path)


@pytest.fixture
def mapping_service(small_catalog, store, logger):
    return PainMappingService(HotspotResolver(small_catalog, logger), store, logger,
                              display_scale=0.85, initial_view=View.FRONT)


def _config_for(image_path):
    config = MagicMock(spec=IConfigRepository)
    config.get_image_path.return_value = image_path
    return config


@pytest.mark.parametrize("raw, expected", [
    ("session-1700000000000-abc1234", "session-1700000000000-abc1234"),
    ("../etc/passwd", "etcpasswd"),
    ("a b;c", "abc"),
    (None, ""),
])
def test_sanitize_session_id(raw, expected):
    assert sanitize_session_id(raw) == expected


def test_save_pain_map_writes_png_in_session_dir(capture_service, tmp_path):
    result = capture_service.save_pain_map(Image.new("RGBA", (10, 10)), "front", "session-1/x")

    assert result.is_success
    assert re.fullmatch(r"session-1x/pain-map-front-\d+\.png", result.value)
    assert os.path.isfile(tmp_path / "uploads" / result.value)


def test_save_pain_map_rejects_empty_session_id(capture_service):
    result = capture_service.save_pain_map(Image.new("RGBA", (10, 10)), View.BACK, "../")

    assert result.is_failure
    assert isinstance(result.error, ValidationError)


def test_save_pain_map_reports_write_failures(tmp_path, logger):
    blocker = tmp_path / "blocker"
    blocker.write_text("not a directory")
    service = QtPainMapCaptureService(logger, str(blocker))

    result = service.save_pain_map(Image.new("RGBA", (10, 10)), View.FRONT, "session-1")

    assert result.is_failure
    logger.error.assert_called_once()


def test_capture_and_save_widget(qapp, capture_service, tmp_path):
    widget = QLabel("pain map")
    widget.resize(60, 40)

    result = capture_service.capture_and_save(widget, View.BACK, "session-2")

    assert result.is_success
    with Image.open(tmp_path / "uploads" / result.value) as saved:
        assert saved.size[0] > 0 and saved.size[1] > 0


@pytest.mark.integration
def test_body_map_click_adds_and_then_selects(qapp, mapping_service, store, logger, body_image):
    widget = BodyMapWidget(mapping_service, PilRasterService(logger), _config_for(body_image), logger)
    added = MagicMock()
    widget.pain_area_added.connect(added)

    size = widget.displayed_size()
    assert size.width == pytest.approx(384 * 0.85)
    assert size.height == pytest.approx(size.width * 2)

    # Centre of the chest hotspot
    chest = QPoint(int(size.width * 0.5), int(size.height * 0.25))
    QTest.mouseClick(widget, Qt.MouseButton.LeftButton, Qt.KeyboardModifier.NoModifier, chest)

    assert len(store) == 1
    record = store.list_all()[0]
    assert record.region == "Chest"
    added.assert_called_once_with(record.id)

    # A second click on the marker selects it instead of adding another
    mapping_service.clear_selection()
    QTest.mouseClick(widget, Qt.MouseButton.LeftButton, Qt.KeyboardModifier.NoModifier, chest)

    assert len(store) == 1
    assert mapping_service.selected_record() is record


def test_body_map_without_image_ignores_clicks(qapp, mapping_service, store, logger, tmp_path):
    widget = BodyMapWidget(mapping_service, PilRasterService(logger),
                           _config_for(str(tmp_path / "missing.png")), logger)

    QTest.mouseClick(widget, Qt.MouseButton.LeftButton, Qt.KeyboardModifier.NoModifier, QPoint(100, 100))

    assert len(store) == 0
    logger.warning.assert_called()


def test_body_map_view_switch_clears_selection(qapp, mapping_service, logger, body_image):
    widget = BodyMapWidget(mapping_service, PilRasterService(logger), _config_for(body_image), logger)
    changes = MagicMock()
    widget.selection_changed.connect(changes)

    widget.set_view("back")

    assert mapping_service.current_view is View.BACK
    changes.assert_called_once_with(None)


@pytest.mark.integration
def test_initialize_app_wires_services(tmp_path, make_record):
    from painmap.application.app import initialize_app

    container = initialize_app(config_file=str(tmp_path / "config.json"), log_to_file=False)

    catalog = container.resolve(IHotspotCatalog)
    assert len(catalog.list_hotspots(View.FRONT)) == 134

    mapping = container.resolve(IPainMappingService)
    assert mapping is container.resolve(IPainMappingService)
    assert mapping.display_scale == 0.85
    assert mapping.current_view is View.BACK

    capture = container.resolve(IPainMapCaptureService)
    assert capture is not container.resolve(IPainMapCaptureService)
    assert container.resolve(IConfigRepository).get_setting("capture_dir") == capture.capture_dir

    # The form mirrors the shared store
    form_state = container.resolve(IAssessmentFormState)
    store = container.resolve(IPainAreaStore)
    assert form_state.is_pain_mapping_complete() is False
    store.add(make_record(record_id="point-1"))
    assert [area["id"] for area in form_state.pain_areas] == ["point-1"]


def test_initialize_app_fails_without_catalog(tmp_path):
    from painmap.application.app import initialize_app

    config_file = tmp_path / "config.json"
    config_file.write_text('{"catalog_path": "%s"}' % (tmp_path / "missing.json").as_posix())

    with pytest.raises(RuntimeError):
        initialize_app(config_file=str(config_file), log_to_file=False)


@pytest.mark.integration
def test_pain_mapping_window_saves_both_views(qapp, tmp_path, body_image, make_record):
    import json

    from painmap.application.app import initialize_app
    from painmap.presentation.components.pain_mapping_window import PainMappingWindow

    config_file = tmp_path / "config.json"
    config_file.write_text(json.dumps({
        "front_image": body_image,
        "back_image": body_image,
        "capture_dir": str(tmp_path / "uploads"),
    }))
    container = initialize_app(config_file=str(config_file), log_to_file=False)
    window = PainMappingWindow(container)

    store = container.resolve(IPainAreaStore)
    store.add(make_record(record_id="point-1", intensity=7))
    assert len(window.pain_area_list._rows) == 1

    window.save_pain_maps()

    form_state = container.resolve(IAssessmentFormState)
    session = form_state.form_session_id
    assert re.fullmatch(rf"{session}/pain-map-front-\d+\.png", form_state.get_pain_map_image(View.FRONT))
    assert re.fullmatch(rf"{session}/pain-map-back-\d+\.png", form_state.get_pain_map_image(View.BACK))
    assert container.resolve(IPainMappingService).current_view is View.BACK

    window.close()


@pytest.mark.integration
def test_pain_mapping_window_edits_notes_of_selected_area(qapp, tmp_path, body_image, make_record):
    import json

    from painmap.application.app import initialize_app
    from painmap.presentation.components.pain_mapping_window import PainMappingWindow

    config_file = tmp_path / "config.json"
    config_file.write_text(json.dumps({"front_image": body_image, "back_image": body_image}))
    container = initialize_app(config_file=str(config_file), log_to_file=False)
    window = PainMappingWindow(container)
    store = container.resolve(IPainAreaStore)
    store.add(make_record(record_id="point-1", free_text="dull"))

    container.resolve(IPainMappingService).select("point-1")
    window.body_map.selection_changed.emit("point-1")
    panel = window.intensity_panel
    assert panel.note_edit.text() == "dull"

    panel.note_edit.setText("  worse at night ")
    panel.note_edit.editingFinished.emit()

    assert store.get("point-1").free_text == "worse at night"
    area = container.resolve(IAssessmentFormState).pain_areas[0]
    assert area["notes"].endswith("; worse at night")

    window.close()
