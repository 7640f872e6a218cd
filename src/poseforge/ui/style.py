"""Dark QSS theme. Emerald marks pose and AI controls, amber the shape
coefficients, purple the camera."""

PALETTE = {
    "bg": "#050505",
    "panel": "#0f1012",
    "raised": "#1a1b1f",
    "line": "#26282e",
    "text": "#e5e7eb",
    "muted": "#6b7280",
    "emerald": "#10b981",
    "emerald_light": "#34d399",
    "emerald_dark": "#059669",
    "amber": "#f59e0b",
    "purple": "#a855f7",
    "red": "#ef4444",
}

_MONO = '"SF Mono", "Fira Code", Consolas, monospace'

_TEMPLATE = """
QMainWindow, QWidget { background: %(bg)s; color: %(text)s; font-size: 12px; }
QLabel { background: transparent; }
QLabel#titleLabel { font-size: 15px; font-weight: 700; }
QLabel#noteLabel { color: %(muted)s; font-size: 10px; }
QLabel#sliderLabel { color: %(muted)s; font-size: 10px; font-weight: 700; }
QLabel#valueLabel { color: %(amber)s; font-family: %(mono)s; font-size: 10px; }

QLabel#sectionLabel {
    color: %(muted)s; font-size: 10px; font-weight: 800; letter-spacing: 2px;
    border-left: 2px solid %(emerald)s; padding: 4px 0 2px 6px; margin: 8px 0 4px 0;
}
QLabel#sectionLabel[tone="shape"] { border-left-color: %(amber)s; }
QLabel#sectionLabel[tone="view"] { border-left-color: %(purple)s; }

QPushButton {
    background: %(raised)s; border: 1px solid %(line)s; border-radius: 4px;
    padding: 5px 12px; min-height: 22px; font-size: 11px;
}
QPushButton:hover { border-color: %(emerald)s; }
QPushButton:pressed { background: %(emerald_dark)s; color: %(bg)s; }
QPushButton:disabled { color: %(muted)s; border-color: %(line)s; }
QPushButton#primaryButton {
    background: %(emerald)s; color: black; font-weight: 800; letter-spacing: 1px; min-height: 32px;
}
QPushButton#primaryButton:hover { background: %(emerald_light)s; }
QPushButton#primaryButton:disabled { background: %(raised)s; color: %(muted)s; }
QPushButton#resetButton { background: %(panel)s; color: %(red)s; border-color: %(red)s; }

QSlider::groove:horizontal { height: 4px; background: %(raised)s; border-radius: 2px; }
QSlider::sub-page:horizontal { background: %(emerald)s; border-radius: 2px; }
QSlider::handle:horizontal {
    background: %(emerald)s; width: 12px; margin: -5px 0; border-radius: 6px;
}

QPlainTextEdit, QDoubleSpinBox {
    background: %(raised)s; border: 1px solid %(line)s; border-radius: 6px; padding: 4px;
}
QPlainTextEdit:focus, QDoubleSpinBox:focus { border-color: %(emerald)s; }

QTabWidget::pane { background: %(panel)s; border: 1px solid %(line)s; border-top: none; }
QTabBar::tab {
    background: %(bg)s; color: %(muted)s; border: 1px solid %(line)s; border-bottom: none;
    padding: 5px 10px; min-width: 40px; font-size: 9px; font-weight: 800;
}
QTabBar::tab:selected { background: %(panel)s; color: %(emerald)s; border-bottom: 2px solid %(emerald)s; }
QTabBar::tab:hover:!selected { color: %(text)s; }

QScrollArea, QScrollArea > QWidget > QWidget { background: %(panel)s; border: none; }
QScrollBar:vertical { background: %(bg)s; width: 8px; }
QScrollBar::handle:vertical { background: %(line)s; min-height: 30px; border-radius: 4px; }
QScrollBar::add-line:vertical, QScrollBar::sub-line:vertical { height: 0; }

QWidget#controlPanel { background: %(panel)s; border-right: 1px solid %(line)s; }

QStatusBar {
    background: %(bg)s; color: %(muted)s; border-top: 1px solid %(line)s;
    font-family: %(mono)s; font-size: 10px;
}
QStatusBar::item { border: none; }
QLabel#busyLabel { color: %(emerald)s; font-weight: 700; }

QWidget#busyOverlay { background: rgba(5, 5, 5, 170); }
QLabel#busyMessage { color: %(emerald)s; font-size: 14px; font-weight: 700; letter-spacing: 2px; }
"""


def build_stylesheet(palette: dict[str, str]) -> str:
    return _TEMPLATE % dict(palette, mono=_MONO)


DARK_THEME = build_stylesheet(PALETTE)
