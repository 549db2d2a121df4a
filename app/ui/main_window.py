from __future__ import annotations

from PySide6.QtCore import Qt, QTimer
from PySide6.QtGui import QKeySequence, QShortcut
from PySide6.QtWidgets import (
    QApplication,
    QButtonGroup,
    QCheckBox,
    QComboBox,
    QDateEdit,
    QFrame,
    QHBoxLayout,
    QLabel,
    QLineEdit,
    QListWidget,
    QListWidgetItem,
    QMessageBox,
    QPushButton,
    QRadioButton,
    QVBoxLayout,
    QWidget,
)

from app.domain.entities import MAX_DESCRIPTION_LENGTH
from app.domain.enums import ALL_PRIORITIES, Priority, SortMode, StatusFilter, Theme
from app.domain.errors import PersistenceError, TaskError
from app.domain.filters import TaskFilters
from app.domain.queries import reconcile_filters
from app.services.task_store import TaskStore
from app.services.theme_service import ThemeService

from .theme import apply_palette, system_prefers_dark
from .widgets import PRIORITY_OPTIONS, TaskItemWidget, from_qdate, to_qdate

STATUS_FILTERS = [
    ("All", StatusFilter.ALL),
    ("Active", StatusFilter.ACTIVE),
    ("Completed", StatusFilter.COMPLETED),
]

PRIORITY_FILTERS = [("All priorities", ALL_PRIORITIES)] + [
    (priority.value, priority.value) for priority in Priority
]

SORT_OPTIONS = [
    ("Newest first", SortMode.NEWEST),
    ("Oldest first", SortMode.OLDEST),
    ("Priority: high to low", SortMode.PRIORITY_DESC),
    ("Priority: low to high", SortMode.PRIORITY_ASC),
    ("Due date: soonest", SortMode.DUE_SOON),
    ("Due date: latest", SortMode.DUE_LATE),
]

EMPTY_STORE_TEXT = "No tasks yet. Add your first task above."
EMPTY_FILTER_TEXT = "No tasks match the current filters."


class MainWindow(QWidget):
    def __init__(self, store: TaskStore, themes: ThemeService):
        super().__init__()
        self.setWindowTitle("FocusBoard")
        self.resize(880, 720)

        self.store = store
        self.themes = themes
        self.filters = TaskFilters()
        self.theme = themes.get_theme() or (Theme.DARK if system_prefers_dark() else Theme.LIGHT)

        layout = QVBoxLayout(self)
        layout.setContentsMargins(16, 16, 16, 16)
        layout.setSpacing(12)

        layout.addLayout(self._build_header())
        layout.addWidget(self._build_composer())
        layout.addLayout(self._build_toolbar())

        self.task_list = QListWidget()
        self.task_list.setObjectName("TaskList")
        self.task_list.setSpacing(8)
        self.task_list.setHorizontalScrollBarPolicy(Qt.ScrollBarAlwaysOff)

        self.empty_label = QLabel("")
        self.empty_label.setProperty("class", "empty-state")
        self.empty_label.setAlignment(Qt.AlignCenter)

        layout.addWidget(self.task_list, 1)
        layout.addWidget(self.empty_label)

        self._apply_theme(self.theme)
        self.refresh_tasks()

        QShortcut(QKeySequence("Ctrl+N"), self, self.description_input.setFocus)

    def _build_header(self) -> QHBoxLayout:
        header = QHBoxLayout()
        title = QLabel("FocusBoard")
        title.setProperty("class", "panel-title")

        self.stats_label = QLabel("")
        self.stats_label.setProperty("class", "stats-badge")

        self.theme_button = QPushButton("")
        self.theme_button.setProperty("variant", "ghost")
        self.theme_button.clicked.connect(self.toggle_theme)

        header.addWidget(title)
        header.addStretch()
        header.addWidget(self.stats_label)
        header.addWidget(self.theme_button)
        return header

    def _build_composer(self) -> QWidget:
        frame = QFrame()
        frame.setObjectName("Composer")
        layout = QVBoxLayout(frame)
        layout.setContentsMargins(12, 10, 12, 10)
        layout.setSpacing(8)

        input_row = QHBoxLayout()
        self.description_input = QLineEdit()
        self.description_input.setPlaceholderText("What needs to be done?")
        self.description_input.setMaxLength(MAX_DESCRIPTION_LENGTH)
        self.description_input.returnPressed.connect(self.add_task)

        add_button = QPushButton("Add task")
        add_button.clicked.connect(self.add_task)

        input_row.addWidget(self.description_input, 1)
        input_row.addWidget(add_button)

        options_row = QHBoxLayout()
        self.priority_group = QButtonGroup(self)
        for label in PRIORITY_OPTIONS:
            radio = QRadioButton(label)
            radio.setProperty("priority", label)
            radio.setChecked(label == Priority.HIGH.value)
            self.priority_group.addButton(radio)
            options_row.addWidget(radio)

        self.due_toggle = QCheckBox("Due date")
        self.due_toggle.toggled.connect(self._on_due_toggled)

        self.due_input = QDateEdit()
        self.due_input.setCalendarPopup(True)
        self.due_input.setDisplayFormat("MM/dd/yyyy")
        self.due_input.setEnabled(False)

        options_row.addStretch()
        options_row.addWidget(self.due_toggle)
        options_row.addWidget(self.due_input)

        layout.addLayout(input_row)
        layout.addLayout(options_row)
        self._reset_due_input()
        return frame

    def _build_toolbar(self) -> QHBoxLayout:
        toolbar = QHBoxLayout()
        self.status_buttons: dict[StatusFilter, QPushButton] = {}
        for label, key in STATUS_FILTERS:
            button = QPushButton(label)
            button.setCheckable(True)
            button.setProperty("variant", "secondary")
            button.clicked.connect(lambda _checked=False, key=key: self.set_status_filter(key))
            self.status_buttons[key] = button
            toolbar.addWidget(button)

        toolbar.addStretch()

        self.priority_filter = QComboBox()
        for label, value in PRIORITY_FILTERS:
            self.priority_filter.addItem(label, value)
        self.priority_filter.currentIndexChanged.connect(self._on_view_controls_changed)

        self.sort_combo = QComboBox()
        for label, value in SORT_OPTIONS:
            self.sort_combo.addItem(label, value.value)
        self.sort_combo.currentIndexChanged.connect(self._on_view_controls_changed)

        toolbar.addWidget(self.priority_filter)
        toolbar.addWidget(self.sort_combo)
        self._sync_filter_controls()
        return toolbar

    def refresh_tasks(self) -> None:
        today = self.store.today()
        visible = self.store.visible_tasks(self.filters)
        self.task_list.clear()

        for task in visible:
            item = QListWidgetItem()
            item.setData(Qt.UserRole, task.id)
            widget = TaskItemWidget(
                task,
                today,
                on_toggle=self.toggle_task,
                on_delete=self.delete_task,
                on_description=self.update_description,
                on_priority=self.update_priority,
                on_due_date=self.update_due_date,
            )
            self.task_list.addItem(item)
            self.task_list.setItemWidget(item, widget)
            item.setSizeHint(widget.sizeHint())

        summary = self.store.summary()
        self.stats_label.setText(
            f"Total: {summary.total} • Active: {summary.active} • Done: {summary.done}"
        )

        if summary.total == 0:
            self.empty_label.setText(EMPTY_STORE_TEXT)
        elif not visible:
            self.empty_label.setText(EMPTY_FILTER_TEXT)
        self.empty_label.setVisible(not visible)

    def add_task(self) -> None:
        button = self.priority_group.checkedButton()
        priority = button.property("priority") if button else None
        due_date = from_qdate(self.due_input.date()) if self.due_toggle.isChecked() else ""

        try:
            task = self.store.add(self.description_input.text(), priority, due_date)
        except PersistenceError as exc:
            # The task is already in the list; only the save failed.
            QMessageBox.warning(self, "FocusBoard", exc.message)
            task = exc.task
        except TaskError as exc:
            QMessageBox.warning(self, "FocusBoard", exc.message)
            self.refresh_tasks()
            return

        self.filters = reconcile_filters(task, self.filters)
        self._sync_filter_controls()
        self.description_input.clear()
        self.due_toggle.setChecked(False)
        self._reset_due_input()
        self.description_input.setFocus()
        self.refresh_tasks()
        self.task_list.scrollToTop()

    def toggle_task(self, task_id: int) -> None:
        self._mutate(lambda: self.store.toggle_complete(task_id))

    def delete_task(self, task_id: int) -> None:
        self._mutate(lambda: self.store.remove(task_id))

    def update_description(self, task_id: int, value: str) -> None:
        self._mutate(lambda: self.store.update_description(task_id, value))

    def update_priority(self, task_id: int, value: str) -> None:
        self._mutate(lambda: self.store.update_priority(task_id, value))

    def update_due_date(self, task_id: int, value: str) -> None:
        self._mutate(lambda: self.store.update_due_date(task_id, value))

    def set_status_filter(self, status: StatusFilter) -> None:
        self.filters = TaskFilters.from_raw(status, self.filters.priority, self.filters.sort_mode)
        self._sync_filter_controls()
        self.refresh_tasks()

    def toggle_theme(self) -> None:
        self._apply_theme(self.themes.toggle(self.theme))

    def _on_view_controls_changed(self, _index: int) -> None:
        self.filters = TaskFilters.from_raw(
            self.filters.status,
            self.priority_filter.currentData(),
            self.sort_combo.currentData(),
        )
        self.refresh_tasks()

    def _on_due_toggled(self, checked: bool) -> None:
        self.due_input.setEnabled(checked)

    def _reset_due_input(self) -> None:
        today = to_qdate(self.store.today())
        self.due_input.setMinimumDate(today)
        self.due_input.setDate(today)

    def _sync_filter_controls(self) -> None:
        for key, button in self.status_buttons.items():
            button.setChecked(key == self.filters.status)
        for combo, value in (
            (self.priority_filter, str(self.filters.priority)),
            (self.sort_combo, self.filters.sort_mode.value),
        ):
            index = combo.findData(value)
            if index >= 0 and index != combo.currentIndex():
                combo.blockSignals(True)
                combo.setCurrentIndex(index)
                combo.blockSignals(False)

    def _apply_theme(self, theme: Theme) -> None:
        self.theme = theme
        app = QApplication.instance()
        if app is not None:
            apply_palette(app, theme)
        label = "Switch to light mode" if theme == Theme.DARK else "Switch to dark mode"
        self.theme_button.setText(label)
        self.theme_button.setToolTip(label)

    def _run(self, action):
        try:
            return action()
        except TaskError as exc:
            QMessageBox.warning(self, "FocusBoard", exc.message)
            return None

    def _mutate(self, action) -> None:
        self._run(action)
        # Rebuild after the emitting row widget has returned from its signal handler.
        QTimer.singleShot(0, self.refresh_tasks)
