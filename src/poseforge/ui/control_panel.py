"""Left control panel: header actions plus a QTabWidget with five tabs."""

from PySide6.QtWidgets import QHBoxLayout, QLabel, QPushButton, QTabWidget, QVBoxLayout, QWidget

from poseforge.core.events import EventBus, EventType
from poseforge.core.state import StateManager
from poseforge.ui.tabs.ai_tab import AITab
from poseforge.ui.tabs.camera_tab import CameraTab
from poseforge.ui.tabs.data_tab import DataTab
from poseforge.ui.tabs.pose_tab import PoseTab
from poseforge.ui.tabs.shape_tab import ShapeTab


class ControlPanel(QWidget):
    """Tabs: Pose, Shape, View, AI, Data. Width ~320px."""

    def __init__(
        self,
        event_bus: EventBus,
        state: StateManager,
        ai_enabled: bool = True,
        parent=None,
    ):
        super().__init__(parent)
        self.event_bus = event_bus
        self.state = state

        self.setObjectName("controlPanel")
        self.setFixedWidth(320)

        layout = QVBoxLayout(self)
        layout.setContentsMargins(0, 0, 0, 0)
        layout.setSpacing(0)

        # ── Header ──
        header = QHBoxLayout()
        header.setContentsMargins(10, 8, 10, 8)
        title = QLabel("SMPL-X Pro")
        title.setObjectName("titleLabel")
        header.addWidget(title)
        header.addStretch()

        randomize_btn = QPushButton("Randomize")
        randomize_btn.setToolTip("Random shape, pose, hands and expression")
        randomize_btn.clicked.connect(lambda: event_bus.publish(EventType.PARAMS_RANDOMIZE))
        header.addWidget(randomize_btn)

        reset_btn = QPushButton("Reset")
        reset_btn.setObjectName("resetButton")
        reset_btn.setToolTip("Reset all parameters to zero")
        reset_btn.clicked.connect(lambda: event_bus.publish(EventType.PARAMS_RESET))
        header.addWidget(reset_btn)

        header_widget = QWidget()
        header_widget.setLayout(header)
        layout.addWidget(header_widget)

        # ── Tabs ──
        self.tabs = QTabWidget()
        self.tabs.setDocumentMode(True)

        self.pose_tab = PoseTab(event_bus, state)
        self.shape_tab = ShapeTab(event_bus, state)
        self.camera_tab = CameraTab(event_bus, state)
        self.ai_tab = AITab(event_bus, state, ai_enabled=ai_enabled)
        self.data_tab = DataTab(event_bus, state)

        self.tabs.addTab(self.pose_tab, "POSE")
        self.tabs.addTab(self.shape_tab, "SHAPE")
        self.tabs.addTab(self.camera_tab, "VIEW")
        self.tabs.addTab(self.ai_tab, "AI")
        self.tabs.addTab(self.data_tab, "DATA")

        layout.addWidget(self.tabs)
