"""Saved blocks table with per-day totals and the export menu.

Hidden while there are no saved blocks.  The export menu only emits
signals; the main window does the file and URL work.
"""

from __future__ import annotations

from PyQt6.QtCore import Qt, pyqtSignal
from PyQt6.QtWidgets import (
    QWidget, QVBoxLayout, QHBoxLayout, QLabel, QPushButton, QMenu,
    QTableWidget, QTableWidgetItem, QHeaderView, QAbstractItemView,
)

from ..blocks import SessionLogEntry, daily_summaries
from ..export.formatter import (
    CSV_HEADER, EXPORT_TARGET_LABELS, ExportTarget,
    format_duration, format_timestamp,
)


def _summary_text(entries: list[SessionLogEntry]) -> str:
    lines = [
        f"{s.label}: {format_duration(s.total_seconds)} "
        f"({s.entry_count} block{'s' if s.entry_count != 1 else ''})"
        for s in daily_summaries(entries)
    ]
    return "\n".join(lines)


class BlocksPanel(QWidget):
    """Table of saved blocks."""

    export_csv_requested = pyqtSignal()
    export_markdown_requested = pyqtSignal()
    export_app_requested = pyqtSignal(object)  # ExportTarget

    def __init__(self, parent: QWidget | None = None) -> None:
        super().__init__(parent)
        self._entries: list[SessionLogEntry] = []
        self._build_ui()
        self.set_entries([])

    # ── build ─────────────────────────────────────────────────────────

    def _build_ui(self) -> None:
        layout = QVBoxLayout(self)
        layout.setContentsMargins(0, 8, 0, 0)
        layout.setSpacing(6)

        header = QLabel("Saved Blocks")
        header.setObjectName("sectionHeader")
        layout.addWidget(header)

        self._table = QTableWidget(0, len(CSV_HEADER), self)
        self._table.setHorizontalHeaderLabels(list(CSV_HEADER))
        self._table.setEditTriggers(QAbstractItemView.EditTrigger.NoEditTriggers)
        self._table.verticalHeader().setVisible(False)
        self._table.horizontalHeader().setSectionResizeMode(
            QHeaderView.ResizeMode.Stretch,
        )
        layout.addWidget(self._table)

        self._summary_label = QLabel(self)
        self._summary_label.setObjectName("summaryLabel")
        layout.addWidget(self._summary_label)

        row = QHBoxLayout()
        row.addStretch(1)
        self._export_btn = QPushButton("Export", self)
        self._export_menu = self._build_export_menu()
        self._export_btn.setMenu(self._export_menu)
        row.addWidget(self._export_btn)
        layout.addLayout(row)

    def _build_export_menu(self) -> QMenu:
        menu = QMenu(self)
        csv_action = menu.addAction("Export as CSV")
        csv_action.triggered.connect(lambda _checked=False: self.export_csv_requested.emit())
        md_action = menu.addAction("Export as Markdown")
        md_action.triggered.connect(lambda _checked=False: self.export_markdown_requested.emit())
        for target in ExportTarget:
            action = menu.addAction(f"Export to {EXPORT_TARGET_LABELS[target]}")
            action.triggered.connect(
                lambda _checked=False, t=target: self.export_app_requested.emit(t)
            )
        return menu

    # ── data ──────────────────────────────────────────────────────────

    def set_entries(self, entries: list[SessionLogEntry]) -> None:
        self._entries = list(entries)
        self._table.setRowCount(len(self._entries))
        for row, entry in enumerate(self._entries):
            cells = (
                format_timestamp(entry.timestamp),
                format_duration(entry.duration),
                entry.title,
                entry.notes,
            )
            for col, text in enumerate(cells):
                item = QTableWidgetItem(text)
                item.setFlags(item.flags() & ~Qt.ItemFlag.ItemIsEditable)
                self._table.setItem(row, col, item)
        self._table.resizeRowsToContents()
        self._summary_label.setText(_summary_text(self._entries))
        self.setVisible(bool(self._entries))

    @property
    def entries(self) -> list[SessionLogEntry]:
        return list(self._entries)

    @property
    def row_count(self) -> int:
        return self._table.rowCount()

    @property
    def summary_text(self) -> str:
        return self._summary_label.text()

    @property
    def export_menu(self) -> QMenu:
        return self._export_menu
