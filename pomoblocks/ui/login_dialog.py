"""Local login prompt.  Nothing is verified; the password is discarded."""

from __future__ import annotations

from PyQt6.QtWidgets import (
    QDialog, QDialogButtonBox, QFormLayout, QLineEdit, QWidget,
)


class LoginDialog(QDialog):

    def __init__(self, parent: QWidget | None = None) -> None:
        super().__init__(parent)
        self.setWindowTitle("Log in")
        self.setModal(True)

        form = QFormLayout(self)

        self._identifier_input = QLineEdit(self)
        self._identifier_input.setPlaceholderText("Email or username")
        form.addRow("Email or username", self._identifier_input)

        self._password_input = QLineEdit(self)
        self._password_input.setEchoMode(QLineEdit.EchoMode.Password)
        form.addRow("Password", self._password_input)

        self._buttons = QDialogButtonBox(
            QDialogButtonBox.StandardButton.Ok
            | QDialogButtonBox.StandardButton.Cancel,
            parent=self,
        )
        self._buttons.accepted.connect(self.accept)
        self._buttons.rejected.connect(self.reject)
        form.addRow(self._buttons)

        self._identifier_input.textChanged.connect(self._update_ok_state)
        self._update_ok_state()

    def identifier(self) -> str:
        return self._identifier_input.text().strip()

    def password(self) -> str:
        return self._password_input.text()

    def _update_ok_state(self) -> None:
        ok = self._buttons.button(QDialogButtonBox.StandardButton.Ok)
        ok.setEnabled(bool(self.identifier()))
