from __future__ import annotations

from PySide6.QtCore import QDate, Qt
from PySide6.QtWidgets import (
    QComboBox,
    QDateEdit,
    QHBoxLayout,
    QLabel,
    QLineEdit,
    QPushButton,
    QSizePolicy,
    QVBoxLayout,
    QWidget,
)

from app.domain.dates import NO_DUE_DATE_LABEL, due_label, is_overdue
from app.domain.entities import MAX_DESCRIPTION_LENGTH, Task
from app.domain.enums import Priority

from .theme import OVERDUE_COLOR, PRIORITY_COLORS

PRIORITY_OPTIONS = [priority.value for priority in Priority]


def to_qdate(iso_date: str) -> QDate:
    return QDate.fromString(iso_date, "yyyy-MM-dd")


def from_qdate(value: QDate) -> str:
    return value.toString("yyyy-MM-dd") if value.isValid() else ""


class TaskItemWidget(QWidget):
    """One task row. Every edit is forwarded as ``(task_id, raw value)``."""

    def __init__(
        self,
        task: Task,
        today: str,
        on_toggle,
        on_delete,
        on_description,
        on_priority,
        on_due_date,
        parent=None,
    ):
        super().__init__(parent)
        self.task = task
        self._on_description = on_description
        self._on_due_date = on_due_date

        self.setObjectName("TaskCard")
        self.setAttribute(Qt.WA_StyledBackground, True)
        self.setSizePolicy(QSizePolicy.Expanding, QSizePolicy.Fixed)
        self.setProperty("done", task.completed)

        layout = QHBoxLayout(self)
        layout.setContentsMargins(12, 8, 12, 8)
        layout.setSpacing(8)

        main = QVBoxLayout()
        main.setSpacing(4)

        self.description_input = QLineEdit(task.description)
        self.description_input.setMaxLength(MAX_DESCRIPTION_LENGTH)
        self.description_input.editingFinished.connect(self._commit_description)

        state = QLabel("Status: Completed" if task.completed else "Status: In progress")
        state.setProperty("class", "task-state")

        meta = QHBoxLayout()
        meta.setSpacing(8)
        badge = QLabel(due_label(task, today))
        badge.setProperty("class", "due-badge")
        if is_overdue(task, today):
            badge.setStyleSheet(f"color: {OVERDUE_COLOR}; font-weight: 600;")

        earliest = min(today, task.due_date) if task.due_date else today
        # One day before the earliest selectable date stands for "no due date".
        self._no_due_date = to_qdate(earliest).addDays(-1)
        self._committed_due_date = task.due_date

        self.due_input = QDateEdit()
        self.due_input.setCalendarPopup(True)
        self.due_input.setDisplayFormat("MM/dd/yyyy")
        self.due_input.setMinimumDate(self._no_due_date)
        self.due_input.setSpecialValueText(NO_DUE_DATE_LABEL)
        self.due_input.setDate(to_qdate(task.due_date) if task.due_date else self._no_due_date)
        self.due_input.editingFinished.connect(self._commit_due_date)
        self.due_input.calendarWidget().clicked.connect(self._commit_due_date)

        clear_due = QPushButton("Clear")
        clear_due.setProperty("variant", "ghost")
        clear_due.setEnabled(bool(task.due_date))
        clear_due.clicked.connect(lambda: self._on_due_date(task.id, ""))

        meta.addWidget(badge)
        meta.addWidget(self.due_input)
        meta.addWidget(clear_due)
        meta.addStretch()

        main.addWidget(self.description_input)
        main.addWidget(state)
        main.addLayout(meta)

        self.priority_combo = QComboBox()
        for label in PRIORITY_OPTIONS:
            self.priority_combo.addItem(label, label)
        self.priority_combo.setCurrentIndex(self.priority_combo.findData(task.priority.value))
        self.priority_combo.setStyleSheet(
            f"border-left: 4px solid {PRIORITY_COLORS.get(task.priority.value, '#9CA3AF')};"
        )
        self.priority_combo.currentIndexChanged.connect(
            lambda _: on_priority(task.id, self.priority_combo.currentData())
        )

        toggle_button = QPushButton("Undo" if task.completed else "Complete")
        toggle_button.setProperty("variant", "secondary")
        toggle_button.clicked.connect(lambda: on_toggle(task.id))

        delete_button = QPushButton("Delete")
        delete_button.setProperty("variant", "danger")
        delete_button.clicked.connect(lambda: on_delete(task.id))

        actions = QVBoxLayout()
        actions.setSpacing(4)
        actions.addWidget(toggle_button)
        actions.addWidget(delete_button)

        layout.addLayout(main, 1)
        layout.addWidget(self.priority_combo, 0, Qt.AlignTop)
        layout.addLayout(actions)

    def _commit_description(self) -> None:
        value = self.description_input.text()
        if value != self.task.description:
            self._on_description(self.task.id, value)

    def _commit_due_date(self, value: QDate | None = None) -> None:
        if value is None:
            value = self.due_input.date()
        iso_date = "" if value == self._no_due_date else from_qdate(value)
        if iso_date == self._committed_due_date:
            return
        self._committed_due_date = iso_date
        self._on_due_date(self.task.id, iso_date)
