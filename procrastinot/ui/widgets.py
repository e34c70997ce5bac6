from __future__ import annotations

from PySide6.QtCore import Qt
from PySide6.QtWidgets import (
    QComboBox,
    QHBoxLayout,
    QLabel,
    QSizePolicy,
    QWidget,
)

from procrastinot.domain.countdown import EXPIRED_LABEL
from procrastinot.domain.enums import STATUS_LABELS, TaskStatus
from procrastinot.services.task_board import TaskView


class TaskItemWidget(QWidget):
    """One task row: text | due date | countdown | status selector."""

    def __init__(self, view: TaskView, on_status_change, on_delete_request, parent=None):
        super().__init__(parent)
        self.task = view.task
        self._on_status_change = on_status_change
        self._on_delete_request = on_delete_request

        self.setObjectName("TaskCard")
        self.setAttribute(Qt.WA_StyledBackground, True)
        self.setSizePolicy(QSizePolicy.Expanding, QSizePolicy.Fixed)
        self.setProperty("completed", view.completed)
        self.setContextMenuPolicy(Qt.CustomContextMenu)
        self.customContextMenuRequested.connect(self._handle_context_menu)

        layout = QHBoxLayout(self)
        layout.setContentsMargins(12, 8, 12, 8)
        layout.setSpacing(12)

        title = QLabel(view.task.text)
        title.setProperty("class", "task-title")
        title.setWordWrap(True)
        title.setSizePolicy(QSizePolicy.Expanding, QSizePolicy.Preferred)

        meta_parts = [f"Due: {view.task.due_date}"]
        if view.task.tags:
            meta_parts.append(", ".join(f"#{tag}" for tag in view.task.tags))
        meta = QLabel(" | ".join(meta_parts))
        meta.setProperty("class", "task-meta")

        self.countdown_label = QLabel()
        self.countdown_label.setProperty("class", "countdown")
        self.set_countdown(view.countdown)

        self.status_combo = QComboBox()
        for status in TaskStatus:
            self.status_combo.addItem(STATUS_LABELS[status], status.value)
        self.status_combo.setCurrentIndex(self.status_combo.findData(view.status.value))
        self.status_combo.currentIndexChanged.connect(self._handle_status_change)

        layout.addWidget(title, 1)
        layout.addWidget(meta)
        layout.addWidget(self.countdown_label)
        layout.addWidget(self.status_combo)

    def set_countdown(self, text: str) -> None:
        self.countdown_label.setText(text)
        self.countdown_label.setProperty("expired", text == EXPIRED_LABEL)
        self.countdown_label.style().unpolish(self.countdown_label)
        self.countdown_label.style().polish(self.countdown_label)

    def _handle_status_change(self, _index: int) -> None:
        status = self.status_combo.currentData()
        if status and status != self.task.status.value:
            self._on_status_change(self.task.id, status)

    def _handle_context_menu(self, _pos) -> None:
        self._on_delete_request(self.task)
