# painmap/presentation/components/intensity_panel.py
from typing import Optional

from PySide6.QtCore import Qt, Signal
from PySide6.QtWidgets import QFrame, QHBoxLayout, QLabel, QLineEdit, QPushButton, QSlider, QVBoxLayout, QWidget

from painmap.domain.models.intensity import intensity_color
from painmap.domain.models.pain_area import MAX_INTENSITY, MIN_INTENSITY, PainAreaRecord


class IntensityPanel(QFrame):
    """Slider and note field for the selected pain area."""

    intensity_changed = Signal(int)
    note_edited = Signal(str)
    done = Signal()

    def __init__(self, parent: Optional[QWidget] = None):
        super().__init__(parent)
        self.setFrameShape(QFrame.Shape.StyledPanel)

        layout = QVBoxLayout(self)

        self.title_label = QLabel()
        self.title_label.setAlignment(Qt.AlignmentFlag.AlignCenter)
        self.title_label.setStyleSheet("font-weight: bold;")
        layout.addWidget(self.title_label)

        slider_layout = QHBoxLayout()
        slider_layout.addWidget(QLabel(str(MIN_INTENSITY)))
        # The slider range is the valid intensity range
        self.slider = QSlider(Qt.Orientation.Horizontal)
        self.slider.setRange(MIN_INTENSITY, MAX_INTENSITY)
        self.slider.setSingleStep(1)
        self.slider.setPageStep(1)
        self.slider.valueChanged.connect(self._on_slider_changed)
        slider_layout.addWidget(self.slider, 1)
        slider_layout.addWidget(QLabel(str(MAX_INTENSITY)))
        layout.addLayout(slider_layout)

        self.value_label = QLabel()
        self.value_label.setAlignment(Qt.AlignmentFlag.AlignCenter)
        layout.addWidget(self.value_label)

        self.note_edit = QLineEdit()
        self.note_edit.setPlaceholderText("Notes (optional)")
        self.note_edit.editingFinished.connect(self._on_note_edited)
        layout.addWidget(self.note_edit)

        self.done_btn = QPushButton("Done")
        self.done_btn.clicked.connect(self.done.emit)
        layout.addWidget(self.done_btn)

        self.hide()

    def show_record(self, record: Optional[PainAreaRecord]) -> None:
        """Show the panel for a record, or hide it for None."""
        if record is None:
            self.hide()
            return

        self.title_label.setText(f"Adjust Intensity: {record.region}")
        self.slider.blockSignals(True)
        self.slider.setValue(record.intensity)
        self.slider.blockSignals(False)
        self._show_value(record.intensity)
        self.note_edit.setText(record.free_text or "")
        self.show()

    def _on_slider_changed(self, value: int) -> None:
        self._show_value(value)
        self.intensity_changed.emit(value)

    def _on_note_edited(self) -> None:
        self.note_edited.emit(self.note_edit.text())

    def _show_value(self, value: int) -> None:
        self.value_label.setText(str(value))
        self.value_label.setStyleSheet(
            f"color: {intensity_color(value)}; font-size: 16pt; font-weight: bold;"
        )
