"""Shape tab: one slider per shape coefficient."""

from poseforge.constants import BETA_SLIDER_RANGE, NUM_BETAS
from poseforge.core.events import EventBus, EventType
from poseforge.core.state import PoseParameters, StateManager
from poseforge.ui.tabs.scroll_tab import ScrollTab
from poseforge.ui.widgets.section_label import SectionLabel
from poseforge.ui.widgets.slider_row import SliderRow


class ShapeTab(ScrollTab):
    """Edits ``betas``. Only the first two visibly change the skeleton
    (stature and width); the rest are carried for export."""

    def __init__(self, event_bus: EventBus, state: StateManager, parent=None) -> None:
        super().__init__(event_bus, state, parent)
        self._sliders: list[SliderRow] = []

        self._layout.addWidget(SectionLabel("Linear Blend Shapes", tone="shape"))
        lo, hi = BETA_SLIDER_RANGE
        for i in range(NUM_BETAS):
            row = SliderRow(f"β{i}", lo, hi, 0.0, step=0.01, decimals=3)
            row.value_changed.connect(
                lambda v, idx=i: self._bus.publish(
                    EventType.POSE_COMPONENT_SET, field="betas", index=idx, value=v,
                )
            )
            self._layout.addWidget(row)
            self._sliders.append(row)

        self._layout.addStretch()
        self._on_params_changed(state.params)
        event_bus.subscribe(EventType.PARAMS_CHANGED, self._on_params_changed)

    def _on_params_changed(self, params: PoseParameters, **kw) -> None:
        for row, value in zip(self._sliders, params.betas):
            row.set_value(value)
