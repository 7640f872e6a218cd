"""View tab: field of view and camera position."""

from PySide6.QtWidgets import QDoubleSpinBox, QFormLayout, QPushButton, QWidget

from poseforge.constants import FOV_SLIDER_RANGE
from poseforge.core.events import EventBus, EventType
from poseforge.core.state import CameraConfig, StateManager
from poseforge.ui.tabs.scroll_tab import ScrollTab
from poseforge.ui.widgets.section_label import SectionLabel
from poseforge.ui.widgets.slider_row import SliderRow


class CameraTab(ScrollTab):
    """Publishes ``CAMERA_FOV_SET``, ``CAMERA_POSITION_SET`` and
    ``CAMERA_RESET``; follows ``CAMERA_CHANGED``."""

    def __init__(self, event_bus: EventBus, state: StateManager, parent=None) -> None:
        super().__init__(event_bus, state, parent)
        self._syncing = False

        self._layout.addWidget(SectionLabel("Camera Matrix", tone="view"))
        lo, hi = FOV_SLIDER_RANGE
        self._fov = SliderRow("FOV", lo, hi, state.camera.fov, step=1.0, decimals=0, label_width=40)
        self._fov.value_changed.connect(
            lambda v: self._bus.publish(EventType.CAMERA_FOV_SET, fov=round(v))
        )
        self._layout.addWidget(self._fov)

        form = QFormLayout()
        self._spins: list[QDoubleSpinBox] = []
        for axis, axis_name in enumerate("XYZ"):
            spin = QDoubleSpinBox()
            spin.setRange(-100.0, 100.0)
            spin.setSingleStep(0.1)
            spin.setDecimals(2)
            spin.valueChanged.connect(lambda v, a=axis: self._on_spin(a, v))
            form.addRow(f"{axis_name}-Pos", spin)
            self._spins.append(spin)
        form_widget = QWidget()
        form_widget.setLayout(form)
        self._layout.addWidget(form_widget)

        reset_btn = QPushButton("Reset View")
        reset_btn.clicked.connect(lambda: self._bus.publish(EventType.CAMERA_RESET))
        self._layout.addWidget(reset_btn)
        self._layout.addStretch()

        self._on_camera_changed(state.camera)
        event_bus.subscribe(EventType.CAMERA_CHANGED, self._on_camera_changed)

    def _on_spin(self, axis: int, value: float) -> None:
        if not self._syncing:
            self._bus.publish(EventType.CAMERA_POSITION_SET, axis=axis, value=value)

    def _on_camera_changed(self, camera: CameraConfig, **kw) -> None:
        self._syncing = True
        try:
            self._fov.set_value(camera.fov)
            for spin, value in zip(self._spins, camera.position):
                spin.setValue(value)
        finally:
            self._syncing = False
