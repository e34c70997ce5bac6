from __future__ import annotations

import logging

from PySide6.QtCore import QDate, Qt
from PySide6.QtGui import QKeySequence, QShortcut
from PySide6.QtWidgets import (
    QDateEdit,
    QFrame,
    QHBoxLayout,
    QLabel,
    QLineEdit,
    QMessageBox,
    QPushButton,
    QScrollArea,
    QVBoxLayout,
    QWidget,
)

from procrastinot.config import SETTINGS
from procrastinot.domain.entities import Task
from procrastinot.domain.errors import PersistenceError, ValidationError
from procrastinot.services.task_board import TaskBoard, TaskView
from procrastinot.services.task_store import TaskStore

from .dialogs import CriteriaInputDialog
from .timers import qt_timer_factory
from .widgets import TaskItemWidget

logger = logging.getLogger(__name__)


class MainWindow(QWidget):
    def __init__(self, store: TaskStore):
        super().__init__()
        self.setWindowTitle("Procrastinot")
        self.resize(960, 680)

        self._task_widgets: dict[str, TaskItemWidget] = {}

        main_layout = QVBoxLayout(self)
        main_layout.setContentsMargins(12, 12, 12, 12)
        main_layout.setSpacing(10)

        main_layout.addWidget(self._build_filter_row())
        main_layout.addWidget(self._build_add_row())
        main_layout.addWidget(self._build_task_list(), 1)

        self.board = TaskBoard(
            store,
            self,
            qt_timer_factory(self),
            interval_ms=SETTINGS.countdown_interval_ms,
        )
        self._run(self.board.open)

        QShortcut(QKeySequence("Ctrl+N"), self, self.task_input.setFocus)

    def _build_filter_row(self) -> QWidget:
        frame = QFrame()
        frame.setObjectName("FilterRow")
        layout = QHBoxLayout(frame)
        layout.setContentsMargins(0, 0, 0, 0)
        layout.setSpacing(8)

        for text, handler in [
            ("Filter by Date", self.filter_by_date),
            ("Filter by Status", self.filter_by_status),
            ("Filter by Tags", self.filter_by_tags),
        ]:
            button = QPushButton(text)
            button.clicked.connect(handler)
            layout.addWidget(button)

        reset_button = QPushButton("Reset Filters")
        reset_button.setProperty("variant", "ghost")
        reset_button.clicked.connect(self.reset_filters)
        layout.addWidget(reset_button)

        self.criteria_label = QLabel()
        self.criteria_label.setProperty("class", "task-meta")
        layout.addWidget(self.criteria_label, 1)
        return frame

    def _build_add_row(self) -> QWidget:
        frame = QFrame()
        frame.setObjectName("AddTaskRow")
        layout = QHBoxLayout(frame)
        layout.setContentsMargins(0, 0, 0, 0)
        layout.setSpacing(8)

        self.task_input = QLineEdit()
        self.task_input.setPlaceholderText("Enter task")
        self.task_input.returnPressed.connect(self.add_task)

        self.due_input = QDateEdit()
        self.due_input.setCalendarPopup(True)
        self.due_input.setDisplayFormat("yyyy-MM-dd")
        self.due_input.setDate(QDate.currentDate())

        self.tags_input = QLineEdit()
        self.tags_input.setPlaceholderText("Add tags")

        add_button = QPushButton("Add Task")
        add_button.clicked.connect(self.add_task)

        layout.addWidget(self.task_input, 2)
        layout.addWidget(self.due_input)
        layout.addWidget(self.tags_input, 1)
        layout.addWidget(add_button)
        return frame

    def _build_task_list(self) -> QWidget:
        container = QWidget()
        container.setObjectName("TaskListContainer")
        self.task_layout = QVBoxLayout(container)
        self.task_layout.setContentsMargins(0, 0, 0, 0)
        self.task_layout.setSpacing(6)
        self.task_layout.addStretch()

        scroll = QScrollArea()
        scroll.setWidgetResizable(True)
        scroll.setHorizontalScrollBarPolicy(Qt.ScrollBarAlwaysOff)
        scroll.setWidget(container)
        return scroll

    # Display interface used by TaskBoard.

    def clear(self) -> None:
        self._task_widgets.clear()
        while self.task_layout.count() > 1:
            item = self.task_layout.takeAt(0)
            widget = item.widget()
            if widget:
                widget.hide()
                widget.deleteLater()

    def show_task(self, view: TaskView) -> None:
        widget = TaskItemWidget(view, self.change_status, self.confirm_delete)
        self._task_widgets[view.task.id] = widget
        self.task_layout.insertWidget(self.task_layout.count() - 1, widget)

    def show_completed_header(self, count: int) -> None:
        header = QLabel(f"Completed Tasks ({count})")
        header.setProperty("class", "panel-title")
        line = QFrame()
        line.setFrameShape(QFrame.HLine)
        self.task_layout.insertWidget(self.task_layout.count() - 1, header)
        self.task_layout.insertWidget(self.task_layout.count() - 1, line)

    def update_countdown(self, task_id: str, text: str) -> None:
        widget = self._task_widgets.get(task_id)
        if widget:
            widget.set_countdown(text)

    # User actions.

    def filter_by_date(self) -> None:
        value = CriteriaInputDialog.ask("Enter due date (YYYY-MM-DD)", self)
        if value is not None:
            self._run(self.board.filter_by_due_date, value)

    def filter_by_status(self) -> None:
        value = CriteriaInputDialog.ask("Enter status", self)
        if value:
            self._run(self.board.filter_by_status, value)

    def filter_by_tags(self) -> None:
        value = CriteriaInputDialog.ask("Enter tags (comma-separated)", self)
        if value:
            self._run(self.board.filter_by_tags, value)

    def reset_filters(self) -> None:
        self._run(self.board.reset_filters)

    def add_task(self) -> None:
        text = self.task_input.text().strip()
        due_date = self.due_input.date().toPython().isoformat()
        if self._run(self.board.add_task, text, due_date, self.tags_input.text()):
            self.task_input.clear()
            self.tags_input.clear()

    def change_status(self, task_id: str, status: str) -> None:
        self._run(self.board.change_status, task_id, status)

    def confirm_delete(self, task: Task) -> None:
        confirm = QMessageBox.question(
            self,
            "Confirm",
            f'Delete this task?\n"{task.text}"',
        )
        if confirm != QMessageBox.Yes:
            return
        self._run(self.board.delete_task, task.id)

    def closeEvent(self, event) -> None:  # type: ignore[override]
        self.board.close()
        super().closeEvent(event)

    def _run(self, action, *args) -> bool:
        try:
            action(*args)
        except ValidationError as exc:
            QMessageBox.warning(self, "Invalid task", str(exc))
            return False
        except PersistenceError as exc:
            logger.error("Persistence failed: %s", exc)
            QMessageBox.critical(self, "Storage error", str(exc))
            return False
        self._update_criteria_label()
        return True

    def _update_criteria_label(self) -> None:
        criteria = self.board.criteria
        parts = []
        if criteria.status:
            parts.append(f"status: {criteria.status}")
        if criteria.tags:
            parts.append(f"tags: {', '.join(criteria.tags)}")
        if criteria.due_date:
            parts.append(f"due: {criteria.due_date}")
        self.criteria_label.setText(" • ".join(parts))
