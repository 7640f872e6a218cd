"""Main window: control panel beside the GL viewport."""

from PySide6.QtCore import QTimer
from PySide6.QtGui import QAction, QFont
from PySide6.QtWidgets import (
    QHBoxLayout, QLabel, QMainWindow, QMessageBox, QSizePolicy, QStatusBar, QWidget,
)

from poseforge.core.events import EventBus, EventType
from poseforge.core.state import StateManager
from poseforge.rendering.gl_widget import GLViewport
from poseforge.ui.control_panel import ControlPanel
from poseforge.ui.dialogs import ask_export_parameters, ask_open_parameters, ask_snapshot_path
from poseforge.ui.style import DARK_THEME
from poseforge.ui.widgets.busy_overlay import BusyOverlay


class MainWindow(QMainWindow):
    """Main application window.

    Layout: [ControlPanel | GLViewport]
    with status bar at bottom showing joint count, FPS and AI activity.
    """

    def __init__(
        self,
        event_bus: EventBus,
        state: StateManager,
        gl_widget: GLViewport,
        ai_enabled: bool = True,
        parent=None,
    ):
        super().__init__(parent)
        self.event_bus = event_bus
        self.state = state
        self.gl_widget = gl_widget

        self.setWindowTitle("PoseForge - SMPL-X Pose Editor")
        self.resize(1400, 900)
        self.setStyleSheet(DARK_THEME)

        central = QWidget()
        self.setCentralWidget(central)
        main_layout = QHBoxLayout(central)
        main_layout.setContentsMargins(0, 0, 0, 0)
        main_layout.setSpacing(0)

        self.control_panel = ControlPanel(event_bus, state, ai_enabled=ai_enabled)
        main_layout.addWidget(self.control_panel)

        gl_widget.setSizePolicy(QSizePolicy.Policy.Expanding, QSizePolicy.Policy.Expanding)
        main_layout.addWidget(gl_widget)

        # Status bar
        self.status_bar = QStatusBar()
        self.setStatusBar(self.status_bar)
        mono = QFont("monospace", 9)

        self.busy_label = QLabel("")
        self.busy_label.setObjectName("busyLabel")
        self.joint_label = QLabel(f"Joints: {gl_widget.rig.skeleton.joint_count}")
        self.joint_label.setFont(mono)
        self.fps_label = QLabel("FPS: 0")
        self.fps_label.setFont(mono)

        self.status_bar.addPermanentWidget(self.busy_label)
        self.status_bar.addPermanentWidget(self.joint_label)
        self.status_bar.addPermanentWidget(self.fps_label)

        self._build_menu_bar()

        self.busy_overlay = BusyOverlay(gl_widget)

        event_bus.subscribe(EventType.AI_BUSY_CHANGED, self._on_busy_changed)
        event_bus.subscribe(EventType.NOTIFY, self._on_notify)

        # Status update timer (2Hz)
        self._status_timer = QTimer(self)
        self._status_timer.timeout.connect(self._update_status)
        self._status_timer.start(500)
        self._frame_count_at_last_update = 0

    def _build_menu_bar(self) -> None:
        menu_bar = self.menuBar()

        # ── File menu ──
        file_menu = menu_bar.addMenu("&File")

        open_action = QAction("Open Parameters...", self)
        open_action.setShortcut("Ctrl+O")
        open_action.triggered.connect(self._open_parameters)
        file_menu.addAction(open_action)

        export_action = QAction("Export Parameters...", self)
        export_action.setShortcut("Ctrl+E")
        export_action.triggered.connect(self._export_parameters)
        file_menu.addAction(export_action)

        snapshot_action = QAction("Save Snapshot...", self)
        snapshot_action.setShortcut("Ctrl+Shift+S")
        snapshot_action.triggered.connect(self._save_snapshot)
        file_menu.addAction(snapshot_action)

        file_menu.addSeparator()

        quit_action = QAction("Quit", self)
        quit_action.setShortcut("Ctrl+Q")
        quit_action.triggered.connect(self.close)
        file_menu.addAction(quit_action)

    def _open_parameters(self) -> None:
        path = ask_open_parameters(self)
        if path:
            self.event_bus.publish(EventType.FILE_IMPORT_REQUESTED, path=path)

    def _export_parameters(self) -> None:
        path = ask_export_parameters(self)
        if path:
            self.event_bus.publish(EventType.FILE_EXPORT_REQUESTED, path=path)

    def _save_snapshot(self) -> None:
        path = ask_snapshot_path(self)
        if path:
            self.event_bus.publish(EventType.SNAPSHOT_REQUESTED, path=path)

    def _on_busy_changed(self, busy: bool, **kw) -> None:
        self.busy_label.setText("AI: working" if busy else "")
        if busy:
            self.busy_overlay.show_busy()
        else:
            self.busy_overlay.hide_busy()

    def _on_notify(self, message: str, error: bool = False, **kw) -> None:
        self.status_bar.showMessage(message, 5000)
        if error:
            QMessageBox.warning(self, "PoseForge", message)

    def _update_status(self) -> None:
        frames = self.state.frame_count - self._frame_count_at_last_update
        fps = frames * 2  # Timer fires at 2Hz
        self._frame_count_at_last_update = self.state.frame_count
        self.fps_label.setText(f"FPS: {fps}")
        self.state.fps = fps

    def resizeEvent(self, event):
        super().resizeEvent(event)
        # Keep the busy overlay sized to the viewport
        if hasattr(self, "busy_overlay"):
            self.busy_overlay.setGeometry(self.gl_widget.rect())
