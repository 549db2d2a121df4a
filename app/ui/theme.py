from __future__ import annotations

from PySide6.QtCore import Qt
from PySide6.QtGui import QColor, QGuiApplication, QPalette
from PySide6.QtWidgets import QApplication

from app.domain.enums import Theme

PALETTES = {
    Theme.DARK: {
        QPalette.Window: "#0F172A",
        QPalette.WindowText: "#E6EDF3",
        QPalette.Base: "#111827",
        QPalette.AlternateBase: "#1B2230",
        QPalette.Text: "#E6EDF3",
        QPalette.Button: "#202A3B",
        QPalette.ButtonText: "#E6EDF3",
        QPalette.ToolTipBase: "#1B2230",
        QPalette.ToolTipText: "#E6EDF3",
        QPalette.Highlight: "#2563EB",
        QPalette.HighlightedText: "#FFFFFF",
    },
    Theme.LIGHT: {
        QPalette.Window: "#F8FAFC",
        QPalette.WindowText: "#0F172A",
        QPalette.Base: "#FFFFFF",
        QPalette.AlternateBase: "#EEF2F7",
        QPalette.Text: "#0F172A",
        QPalette.Button: "#E2E8F0",
        QPalette.ButtonText: "#0F172A",
        QPalette.ToolTipBase: "#FFFFFF",
        QPalette.ToolTipText: "#0F172A",
        QPalette.Highlight: "#2563EB",
        QPalette.HighlightedText: "#FFFFFF",
    },
}

PRIORITY_COLORS = {
    "High": "#E57B63",
    "Medium": "#E0B25B",
    "Low": "#7CC4A1",
}

OVERDUE_COLOR = "#E24A4A"


def apply_palette(app: QApplication, theme: Theme) -> None:
    palette = QPalette()
    for role, color in PALETTES[theme].items():
        palette.setColor(role, QColor(color))
    app.setPalette(palette)


def system_prefers_dark() -> bool:
    hints = QGuiApplication.styleHints()
    color_scheme = getattr(hints, "colorScheme", None)
    if color_scheme is None:
        return False
    return color_scheme() == Qt.ColorScheme.Dark
