# painmap/presentation/components/pain_mapping_window.py
"""
Pain mapping step of the intake form.

Hosts the view toggle, the body map, the intensity panel and the list of
reported pain areas, and saves a capture of both views into the form.
"""
from PySide6.QtWidgets import (
    QButtonGroup, QHBoxLayout, QLabel, QMainWindow, QMessageBox, QPushButton,
    QRadioButton, QScrollArea, QVBoxLayout, QWidget
)

from painmap.domain.common.di_container import DIContainer
from painmap.domain.models.hotspot import View
from painmap.domain.services.i_capture_service import IPainMapCaptureService
from painmap.domain.services.i_config_repository_service import IConfigRepository
from painmap.domain.services.i_form_state_service import IAssessmentFormState
from painmap.domain.services.i_logger_service import ILoggerService
from painmap.domain.services.i_pain_area_store_service import IPainAreaStore
from painmap.domain.services.i_pain_mapping_service import IPainMappingService
from painmap.domain.services.i_raster_service import IRasterService
from painmap.presentation.components.body_map_widget import BodyMapWidget
from painmap.presentation.components.intensity_panel import IntensityPanel
from painmap.presentation.components.pain_area_list import PainAreaListWidget

INSTRUCTIONS = (
    "Click on the body diagram to mark where you feel pain. "
    "Click an existing mark to adjust its intensity."
)


class PainMappingWindow(QMainWindow):
    """Main window of the pain mapping step."""

    def __init__(self, container: DIContainer):
        super().__init__()
        self.logger = container.resolve(ILoggerService)
        self.config_repository = container.resolve(IConfigRepository)
        self.store = container.resolve(IPainAreaStore)
        self.mapping_service = container.resolve(IPainMappingService)
        self.form_state = container.resolve(IAssessmentFormState)
        self.capture_service = container.resolve(IPainMapCaptureService)

        self.setWindowTitle("Pain Mapping")

        central = QWidget()
        layout = QVBoxLayout(central)

        header = QHBoxLayout()
        title = QLabel("Pain Mapping")
        title.setStyleSheet("font-size: 14pt; font-weight: bold;")
        header.addWidget(title)
        header.addStretch()

        self.front_radio = QRadioButton("Front")
        self.back_radio = QRadioButton("Back")
        self.view_group = QButtonGroup(self)
        self.view_group.addButton(self.front_radio)
        self.view_group.addButton(self.back_radio)
        if self.mapping_service.current_view is View.FRONT:
            self.front_radio.setChecked(True)
        else:
            self.back_radio.setChecked(True)
        self.front_radio.toggled.connect(self._on_view_toggled)
        header.addWidget(self.front_radio)
        header.addWidget(self.back_radio)
        layout.addLayout(header)

        instructions = QLabel(INSTRUCTIONS)
        instructions.setWordWrap(True)
        layout.addWidget(instructions)

        self.body_map = BodyMapWidget(
            mapping_service=self.mapping_service,
            raster_service=container.resolve(IRasterService),
            config_repository=self.config_repository,
            logger=self.logger
        )
        self.body_map.selection_changed.connect(self._on_selection_changed)

        scroll = QScrollArea()
        scroll.setWidget(self.body_map)
        scroll.setWidgetResizable(False)
        layout.addWidget(scroll, 1)

        self.intensity_panel = IntensityPanel()
        self.intensity_panel.intensity_changed.connect(self._on_intensity_changed)
        self.intensity_panel.note_edited.connect(self._on_note_edited)
        self.intensity_panel.done.connect(self._on_done)
        layout.addWidget(self.intensity_panel)

        self.pain_area_list = PainAreaListWidget()
        self.pain_area_list.remove_requested.connect(self._on_remove_requested)
        layout.addWidget(self.pain_area_list)

        self.save_btn = QPushButton("Save pain maps")
        self.save_btn.clicked.connect(self.save_pain_maps)
        layout.addWidget(self.save_btn)

        self.setCentralWidget(central)
        self.statusBar().showMessage("Ready")

        self.store.register_observer(self._on_pain_areas_changed)
        self.pain_area_list.set_records(self.store.list_all())

    def closeEvent(self, event):
        self.store.unregister_observer(self._on_pain_areas_changed)
        super().closeEvent(event)

    def _on_view_toggled(self, front_checked: bool) -> None:
        view = View.FRONT if front_checked else View.BACK
        self.body_map.set_view(view)

    def _on_selection_changed(self, record_id) -> None:
        self.intensity_panel.show_record(self.mapping_service.selected_record())

    def _on_intensity_changed(self, value: int) -> None:
        result = self.mapping_service.change_selected_intensity(value)
        if result.is_failure:
            self.statusBar().showMessage(result.error.message, 5000)
            return
        self.body_map.update()

    def _on_note_edited(self, text: str) -> None:
        record = self.mapping_service.selected_record()
        if record is None:
            return
        result = self.store.set_free_text(record.id, text)
        if result.is_failure:
            self.statusBar().showMessage(result.error.message, 5000)

    def _on_done(self) -> None:
        self.mapping_service.clear_selection()
        self.intensity_panel.show_record(None)
        self.body_map.update()

    def _on_remove_requested(self, record_id: str) -> None:
        self.mapping_service.remove(record_id)
        self.intensity_panel.show_record(self.mapping_service.selected_record())
        self.body_map.update()

    def _on_pain_areas_changed(self, records) -> None:
        self.pain_area_list.set_records(records)

    def save_pain_maps(self) -> None:
        """Capture both body views and attach the files to the form."""
        shown_view = self.mapping_service.current_view
        selected = self.mapping_service.selected_record()
        # Captures are taken without the selection outline
        self.mapping_service.clear_selection()

        failures = []
        for view in (View.FRONT, View.BACK):
            self.body_map.set_view(view)
            result = self.capture_service.capture_and_save(
                self.body_map, view, self.form_state.form_session_id
            )
            if result.is_success:
                self.form_state.set_pain_map_image(view, result.value)
            else:
                failures.append(f"{view.value}: {result.error.message}")

        self.body_map.set_view(shown_view)
        if selected is not None and selected.origin_view is shown_view:
            self.mapping_service.select(selected.id)
        self._on_selection_changed(None)

        if failures:
            QMessageBox.warning(self, "Pain Map", "Some pain maps could not be saved:\n" + "\n".join(failures))
            return
        self.statusBar().showMessage("Pain maps saved", 5000)
