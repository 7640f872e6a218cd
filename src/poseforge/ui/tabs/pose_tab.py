"""Pose tab: three axis-angle sliders per body joint."""

from PySide6.QtWidgets import QHBoxLayout, QLabel, QWidget

from poseforge.body.joint_table import JOINT_NAMES
from poseforge.constants import POSE_SLIDER_RANGE
from poseforge.core.events import EventBus, EventType
from poseforge.core.state import PoseParameters, StateManager
from poseforge.ui.tabs.scroll_tab import ScrollTab
from poseforge.ui.widgets.section_label import SectionLabel
from poseforge.ui.widgets.slider_row import SliderRow


class PoseTab(ScrollTab):
    """Slider edits publish ``POSE_COMPONENT_SET`` for ``body_pose``.

    Sliders follow ``PARAMS_CHANGED`` silently, so external updates
    (import, randomize, AI) never echo back as edits.
    """

    def __init__(self, event_bus: EventBus, state: StateManager, parent=None) -> None:
        super().__init__(event_bus, state, parent)
        self._sliders: list[SliderRow] = []

        self._layout.addWidget(SectionLabel("Standard Joints"))
        lo, hi = POSE_SLIDER_RANGE
        for i, name in enumerate(JOINT_NAMES):
            header = QHBoxLayout()
            title = QLabel(name)
            title.setObjectName("sliderLabel")
            ident = QLabel(f"ID {i}")
            ident.setObjectName("noteLabel")
            header.addWidget(title)
            header.addStretch()
            header.addWidget(ident)
            header_widget = QWidget()
            header_widget.setLayout(header)
            self._layout.addWidget(header_widget)

            for axis, axis_name in enumerate("XYZ"):
                index = i * 3 + axis
                row = SliderRow(axis_name, lo, hi, 0.0, step=0.01)
                row.value_changed.connect(
                    lambda v, idx=index: self._bus.publish(
                        EventType.POSE_COMPONENT_SET, field="body_pose", index=idx, value=v,
                    )
                )
                self._layout.addWidget(row)
                self._sliders.append(row)

        self._layout.addStretch()
        self.sync_from_params(state.params)
        event_bus.subscribe(EventType.PARAMS_CHANGED, self._on_params_changed)

    def sync_from_params(self, params: PoseParameters) -> None:
        for row, value in zip(self._sliders, params.body_pose):
            row.set_value(value)

    def _on_params_changed(self, params: PoseParameters, **kw) -> None:
        self.sync_from_params(params)
