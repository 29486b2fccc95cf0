"""Main application window for PomoBlocks."""

from __future__ import annotations

import logging
from pathlib import Path

from PyQt6.QtCore import Qt, QUrl
from PyQt6.QtGui import QDesktopServices
from PyQt6.QtWidgets import (
    QMainWindow, QWidget, QVBoxLayout, QHBoxLayout, QLabel,
    QPushButton, QFileDialog, QDialog, QScrollArea,
)

from .blocks import (
    SessionLogEntry, UserSession, current_user, load_entries, login, logout,
)
from .timer.engine import TimerEngine, SessionMode
from .export.formatter import (
    CSV_FILENAME, MARKDOWN_FILENAME, ExportTarget,
    export_url, write_csv, write_markdown,
)
from .ui.timer_widget import TimerWidget
from .ui.blocks_panel import BlocksPanel
from .ui.login_dialog import LoginDialog
from .ui.styles import build_stylesheet
from .settings import Settings, load_settings, save_settings
from .audio.sounds import SoundManager

logger = logging.getLogger(__name__)

STATUS_TIMEOUT_MS = 4000


class PomoBlocksApp(QMainWindow):
    """Main application window."""

    def __init__(self, *, sound_manager: SoundManager | None = None) -> None:
        super().__init__()
        self.setWindowTitle("Pomodoro Timer")
        self.setStyleSheet(build_stylesheet())

        # ── settings ──────────────────────────────────────────────────
        self._settings: Settings = load_settings()
        self.resize(self._settings.window_width, self._settings.window_height)
        if self._settings.window_x is not None and self._settings.window_y is not None:
            self.move(self._settings.window_x, self._settings.window_y)

        # ── engine + sound ────────────────────────────────────────────
        mode = SessionMode.LONG if self._settings.long_session else SessionMode.SHORT
        self._timer_engine = TimerEngine(self, mode=mode)

        self._sound_manager = sound_manager or SoundManager(parent=self)
        self._sound_manager.set_volume(self._settings.sound_volume)
        self._sound_manager.set_enabled(self._settings.sound_enabled)

        self._user: UserSession | None = current_user()

        # ── layout ────────────────────────────────────────────────────
        central = QWidget()
        self.setCentralWidget(central)
        root_layout = QVBoxLayout(central)
        root_layout.setContentsMargins(16, 12, 16, 12)
        root_layout.setSpacing(8)

        root_layout.addWidget(self._build_top_bar(central))

        scroll = QScrollArea(central)
        scroll.setWidgetResizable(True)
        scroll.setFrameShape(QScrollArea.Shape.NoFrame)
        body = QWidget(scroll)
        body_layout = QVBoxLayout(body)
        body_layout.setContentsMargins(0, 0, 0, 0)

        self._timer_widget = TimerWidget(
            self._timer_engine, body,
            sound_enabled=self._settings.sound_enabled,
        )
        body_layout.addWidget(self._timer_widget)

        self._blocks_panel = BlocksPanel(body)
        body_layout.addWidget(self._blocks_panel)
        body_layout.addStretch(1)

        scroll.setWidget(body)
        root_layout.addWidget(scroll)

        self._connect_signals()
        self._refresh_user()
        self.refresh_blocks()

    # ── build ─────────────────────────────────────────────────────────

    def _build_top_bar(self, parent: QWidget) -> QWidget:
        bar = QWidget(parent)
        row = QHBoxLayout(bar)
        row.setContentsMargins(0, 0, 0, 0)

        title = QLabel("Pomodoro Timer", bar)
        title.setObjectName("appTitle")
        row.addWidget(title)
        row.addStretch(1)

        self._welcome_label = QLabel(bar)
        row.addWidget(self._welcome_label)

        self._account_btn = QPushButton(bar)
        self._account_btn.clicked.connect(self._on_account_clicked)
        row.addWidget(self._account_btn)
        return bar

    def _connect_signals(self) -> None:
        engine = self._timer_engine
        engine.session_completed.connect(self._on_session_completed)
        engine.block_saved.connect(self._on_block_saved)
        engine.save_blocked.connect(self._on_save_blocked)
        engine.save_failed.connect(self._show_status)
        engine.mode_changed.connect(self._on_mode_changed)

        self._timer_widget.sound_toggled.connect(self._on_sound_toggled)

        self._blocks_panel.export_csv_requested.connect(self._on_export_csv)
        self._blocks_panel.export_markdown_requested.connect(self._on_export_markdown)
        self._blocks_panel.export_app_requested.connect(self.open_in_app)

    # ── public ────────────────────────────────────────────────────────

    @property
    def timer_engine(self) -> TimerEngine:
        return self._timer_engine

    @property
    def user(self) -> UserSession | None:
        return self._user

    def refresh_blocks(self) -> list[SessionLogEntry]:
        entries = load_entries()
        self._blocks_panel.set_entries(entries)
        return entries

    def log_in(self, identifier: str, password: str = "") -> UserSession:
        self._user = login(identifier, password)
        self._refresh_user()
        return self._user

    def log_out(self) -> None:
        logout()
        self._user = None
        self._refresh_user()

    def export_csv_to(self, path: Path | str) -> Path:
        written = write_csv(path, load_entries())
        logger.info("Exported blocks to %s", written)
        self.statusBar().showMessage(f"Exported {written.name}", STATUS_TIMEOUT_MS)
        return written

    def export_markdown_to(self, path: Path | str) -> Path:
        written = write_markdown(path, load_entries())
        logger.info("Exported blocks to %s", written)
        self.statusBar().showMessage(f"Exported {written.name}", STATUS_TIMEOUT_MS)
        return written

    def open_in_app(self, target: ExportTarget) -> str:
        """Hand the Markdown export to a note-taking app by URL scheme."""
        url = export_url(target, load_entries())
        if not QDesktopServices.openUrl(QUrl(url)):
            logger.warning("No handler for %s export", target.value)
            self.statusBar().showMessage(
                f"Could not open {target.value}", STATUS_TIMEOUT_MS,
            )
        return url

    # ── slots ─────────────────────────────────────────────────────────

    def _refresh_user(self) -> None:
        logged_in = self._user is not None
        self._welcome_label.setText(
            f"Welcome, {self._user.username}" if logged_in else ""
        )
        self._welcome_label.setVisible(logged_in)
        self._account_btn.setText("Logout" if logged_in else "Log in")
        self._timer_widget.set_logged_in(logged_in)

    def _on_account_clicked(self) -> None:
        if self._user is not None:
            self.log_out()
            return
        dialog = LoginDialog(self)
        if dialog.exec() == QDialog.DialogCode.Accepted and dialog.identifier():
            self.log_in(dialog.identifier(), dialog.password())

    def _on_session_completed(self) -> None:
        self._sound_manager.play("session_complete")

    def _on_block_saved(self, _entry: SessionLogEntry) -> None:
        self.refresh_blocks()
        self._sound_manager.play("block_saved")

    def _on_save_blocked(self) -> None:
        self._show_status("Please log in to save blocks")

    def _show_status(self, message: str) -> None:
        self.statusBar().showMessage(message, STATUS_TIMEOUT_MS)

    def _persist_settings(self) -> None:
        try:
            save_settings(self._settings)
        except OSError as exc:
            logger.warning("Could not write settings: %s", exc)
            self._show_status("Could not save settings")

    def _on_mode_changed(self, mode: SessionMode) -> None:
        self._settings.long_session = mode == SessionMode.LONG
        self._persist_settings()

    def _on_sound_toggled(self, enabled: bool) -> None:
        self._sound_manager.set_enabled(enabled)
        self._settings.sound_enabled = enabled
        self._persist_settings()

    def _on_export_csv(self) -> None:
        path, _ = QFileDialog.getSaveFileName(
            self, "Export as CSV", CSV_FILENAME, "CSV files (*.csv)",
        )
        if path:
            self.export_csv_to(path)

    def _on_export_markdown(self) -> None:
        path, _ = QFileDialog.getSaveFileName(
            self, "Export as Markdown", MARKDOWN_FILENAME, "Markdown files (*.md)",
        )
        if path:
            self.export_markdown_to(path)

    # ── window events ─────────────────────────────────────────────────

    def closeEvent(self, event) -> None:  # type: ignore[override]
        self._timer_engine.pause()
        geo = self.geometry()
        self._settings.window_x = geo.x()
        self._settings.window_y = geo.y()
        self._settings.window_width = geo.width()
        self._settings.window_height = geo.height()
        self._persist_settings()
        super().closeEvent(event)

    def keyPressEvent(self, event) -> None:  # type: ignore[override]
        if event.key() == Qt.Key.Key_Escape and self._timer_engine.is_running:
            self._timer_engine.reset()
            return
        super().keyPressEvent(event)
