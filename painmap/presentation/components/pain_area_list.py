# painmap/presentation/components/pain_area_list.py
from typing import List, Optional

from PySide6.QtCore import Signal
from PySide6.QtWidgets import QGroupBox, QHBoxLayout, QLabel, QPushButton, QVBoxLayout, QWidget

from painmap.domain.models.intensity import intensity_color
from painmap.domain.models.pain_area import PainAreaRecord


class PainAreaListWidget(QGroupBox):
    """List of every pain area of the session, both views."""

    remove_requested = Signal(str)  # record id

    def __init__(self, parent: Optional[QWidget] = None):
        super().__init__("Selected Pain Areas:", parent)
        self._layout = QVBoxLayout(self)
        self._rows: List[QWidget] = []
        self.hide()

    def set_records(self, records: List[PainAreaRecord]) -> None:
        for row in self._rows:
            self._layout.removeWidget(row)
            row.deleteLater()
        self._rows = [self._build_row(record) for record in records]
        for row in self._rows:
            self._layout.addWidget(row)
        self.setVisible(bool(records))

    def _build_row(self, record: PainAreaRecord) -> QWidget:
        row = QWidget(self)
        layout = QHBoxLayout(row)
        layout.setContentsMargins(0, 0, 0, 0)

        bullet = QLabel(row)
        bullet.setFixedSize(10, 10)
        bullet.setStyleSheet(
            f"background-color: {intensity_color(record.intensity)}; "
            "border: 1px solid #ccc; border-radius: 5px;"
        )
        layout.addWidget(bullet)

        text = QLabel(f"{record.region}: Intensity {record.intensity} ({record.notes})", row)
        text.setWordWrap(True)
        layout.addWidget(text, 1)

        remove_btn = QPushButton("×", row)
        remove_btn.setToolTip("Remove pain point")
        remove_btn.setFixedWidth(24)
        remove_btn.setStyleSheet("color: #ef4444;")
        remove_btn.clicked.connect(lambda _checked=False, record_id=record.id: self.remove_requested.emit(record_id))
        layout.addWidget(remove_btn)
        return row
