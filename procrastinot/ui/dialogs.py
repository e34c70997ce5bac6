from __future__ import annotations

from PySide6.QtWidgets import (
    QDialog,
    QHBoxLayout,
    QLabel,
    QLineEdit,
    QPushButton,
    QVBoxLayout,
)


class CriteriaInputDialog(QDialog):
    def __init__(self, placeholder: str, parent=None):
        super().__init__(parent)
        self.setWindowTitle("Filter")
        self.setFixedWidth(360)

        title = QLabel("Enter filter criteria")
        title.setStyleSheet("font-size: 14px; font-weight: 600;")

        self.input = QLineEdit()
        self.input.setPlaceholderText(placeholder)
        self.input.returnPressed.connect(self.accept)

        submit_button = QPushButton("Submit")
        submit_button.clicked.connect(self.accept)

        cancel_button = QPushButton("Cancel")
        cancel_button.setProperty("variant", "ghost")
        cancel_button.clicked.connect(self.reject)

        buttons = QHBoxLayout()
        buttons.addStretch()
        buttons.addWidget(cancel_button)
        buttons.addWidget(submit_button)

        layout = QVBoxLayout(self)
        layout.addWidget(title)
        layout.addWidget(self.input)
        layout.addLayout(buttons)

        self.input.setFocus()

    def value(self) -> str:
        return self.input.text().strip()

    @classmethod
    def ask(cls, placeholder: str, parent=None) -> str | None:
        dialog = cls(placeholder, parent)
        if dialog.exec() != QDialog.Accepted:
            return None
        return dialog.value()
