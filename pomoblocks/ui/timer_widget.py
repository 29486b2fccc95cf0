"""Timer card: countdown, mode switch, controls, and the save form.

Layout (top → bottom):
    - Countdown label
    - 25 min / 50 min switch
    - Start/Pause, Reset, Sound buttons
    - Block title + notes inputs
    - Save button and the "please log in" hint
"""

from __future__ import annotations

from PyQt6.QtCore import Qt, pyqtSignal
from PyQt6.QtWidgets import (
    QWidget, QVBoxLayout, QHBoxLayout, QLabel, QPushButton,
    QLineEdit, QPlainTextEdit, QCheckBox, QFrame,
)

from ..export.formatter import format_duration
from ..timer.engine import TimerEngine, SessionMode

LOGIN_HINT = "Please log in to save blocks"


class TimerWidget(QWidget):
    """The countdown card bound to a ``TimerEngine``."""

    sound_toggled = pyqtSignal(bool)

    def __init__(
        self,
        engine: TimerEngine,
        parent: QWidget | None = None,
        *,
        sound_enabled: bool = True,
    ) -> None:
        super().__init__(parent)
        self._engine = engine
        self._sound_enabled = sound_enabled
        self._logged_in = False
        self._build_ui()
        self._connect_signals()
        self._refresh_display(engine.remaining)
        self._on_running_changed(engine.is_running)
        self._refresh_sound_button()
        self.set_logged_in(False)

    # ── build ─────────────────────────────────────────────────────────────

    def _build_ui(self) -> None:
        root = QVBoxLayout(self)
        root.setContentsMargins(0, 0, 0, 0)

        card = QFrame(self)
        card.setObjectName("card")
        root.addWidget(card)

        layout = QVBoxLayout(card)
        layout.setContentsMargins(24, 20, 24, 20)
        layout.setSpacing(12)

        self._time_label = QLabel(card)
        self._time_label.setObjectName("timeLabel")
        self._time_label.setAlignment(Qt.AlignmentFlag.AlignCenter)
        layout.addWidget(self._time_label)

        mode_row = QHBoxLayout()
        mode_row.setAlignment(Qt.AlignmentFlag.AlignCenter)
        mode_row.addWidget(QLabel("25 min", card))
        self._mode_switch = QCheckBox("50 min", card)
        self._mode_switch.setChecked(self._engine.mode == SessionMode.LONG)
        mode_row.addWidget(self._mode_switch)
        layout.addLayout(mode_row)

        btn_row = QHBoxLayout()
        btn_row.setSpacing(12)
        btn_row.setAlignment(Qt.AlignmentFlag.AlignCenter)
        self._start_pause_btn = QPushButton("Start", card)
        self._start_pause_btn.setObjectName("primaryButton")
        self._reset_btn = QPushButton("Reset", card)
        self._sound_btn = QPushButton(card)
        btn_row.addWidget(self._start_pause_btn)
        btn_row.addWidget(self._reset_btn)
        btn_row.addWidget(self._sound_btn)
        layout.addLayout(btn_row)

        self._title_input = QLineEdit(card)
        self._title_input.setPlaceholderText("Block Title")
        layout.addWidget(self._title_input)

        self._notes_input = QPlainTextEdit(card)
        self._notes_input.setPlaceholderText("Notes")
        self._notes_input.setFixedHeight(80)
        layout.addWidget(self._notes_input)

        self._save_btn = QPushButton("Save Block", card)
        self._save_btn.setObjectName("saveButton")
        layout.addWidget(self._save_btn, alignment=Qt.AlignmentFlag.AlignCenter)

        self._hint_label = QLabel(LOGIN_HINT, card)
        self._hint_label.setObjectName("hintLabel")
        self._hint_label.setAlignment(Qt.AlignmentFlag.AlignCenter)
        layout.addWidget(self._hint_label)

    def _connect_signals(self) -> None:
        self._start_pause_btn.clicked.connect(self._engine.toggle)
        self._reset_btn.clicked.connect(self._engine.reset)
        self._sound_btn.clicked.connect(self._on_sound_clicked)
        self._mode_switch.toggled.connect(self._on_mode_toggled)
        self._save_btn.clicked.connect(self._on_save_clicked)

        self._engine.tick.connect(self._refresh_display)
        self._engine.running_changed.connect(self._on_running_changed)
        self._engine.block_saved.connect(self._clear_inputs)
        self._engine.mode_changed.connect(self._on_engine_mode_changed)

    # ── public ────────────────────────────────────────────────────────────

    def set_logged_in(self, logged_in: bool) -> None:
        self._logged_in = logged_in
        self._save_btn.setEnabled(logged_in)
        self._hint_label.setVisible(not logged_in)

    @property
    def title(self) -> str:
        return self._title_input.text()

    @property
    def notes(self) -> str:
        return self._notes_input.toPlainText()

    @property
    def time_text(self) -> str:
        return self._time_label.text()

    # ── slots ─────────────────────────────────────────────────────────────

    def _refresh_display(self, remaining: int) -> None:
        self._time_label.setText(format_duration(remaining))

    def _on_running_changed(self, running: bool) -> None:
        self._start_pause_btn.setText("Pause" if running else "Start")

    def _on_mode_toggled(self, checked: bool) -> None:
        self._engine.set_mode(SessionMode.LONG if checked else SessionMode.SHORT)

    def _on_engine_mode_changed(self, mode: SessionMode) -> None:
        self._mode_switch.blockSignals(True)
        self._mode_switch.setChecked(mode == SessionMode.LONG)
        self._mode_switch.blockSignals(False)

    def _on_sound_clicked(self) -> None:
        self._sound_enabled = not self._sound_enabled
        self._refresh_sound_button()
        self.sound_toggled.emit(self._sound_enabled)

    def _refresh_sound_button(self) -> None:
        self._sound_btn.setText("Sound On" if self._sound_enabled else "Sound Off")

    def _on_save_clicked(self) -> None:
        self._engine.save(self.title, self.notes)

    def _clear_inputs(self, _entry: object = None) -> None:
        self._title_input.clear()
        self._notes_input.clear()
