"""AI tab: describe a pose in words and have it synthesized."""

from PySide6.QtWidgets import QLabel, QPlainTextEdit, QPushButton

from poseforge.core.events import EventBus, EventType
from poseforge.core.state import StateManager
from poseforge.ui.tabs.scroll_tab import ScrollTab
from poseforge.ui.widgets.section_label import SectionLabel


class AITab(ScrollTab):
    """Publishes ``AI_POSE_REQUESTED`` with the prompt text.

    The Synthesize button is disabled while ``AI_BUSY_CHANGED`` reports an
    outstanding request. Blank prompts are ignored.
    """

    def __init__(
        self,
        event_bus: EventBus,
        state: StateManager,
        ai_enabled: bool = True,
        parent=None,
    ) -> None:
        super().__init__(event_bus, state, parent)

        self._layout.addWidget(SectionLabel("AI Generator"))

        self._prompt = QPlainTextEdit()
        self._prompt.setPlaceholderText(
            "Describe a pose... (e.g. 'A ballerina performing a pirouette')"
        )
        self._prompt.setFixedHeight(160)
        self._layout.addWidget(self._prompt)

        self._button = QPushButton("SYNTHESIZE POSE")
        self._button.setObjectName("primaryButton")
        self._button.clicked.connect(self._on_synthesize)
        self._layout.addWidget(self._button)

        if not ai_enabled:
            note = QLabel(
                "No API key found (GEMINI_API_KEY). Requests will return a neutral pose."
            )
            note.setObjectName("noteLabel")
            note.setWordWrap(True)
            self._layout.addWidget(note)

        self._layout.addStretch()
        self._set_busy(state.ai_busy)
        event_bus.subscribe(EventType.AI_BUSY_CHANGED, self._on_busy_changed)

    @property
    def prompt(self) -> str:
        return self._prompt.toPlainText().strip()

    def _on_synthesize(self) -> None:
        prompt = self.prompt
        if not prompt:
            return
        self._bus.publish(EventType.AI_POSE_REQUESTED, prompt=prompt)

    def _on_busy_changed(self, busy: bool, **kw) -> None:
        self._set_busy(busy)

    def _set_busy(self, busy: bool) -> None:
        self._button.setEnabled(not busy)
        self._button.setText("SYNTHESIZING..." if busy else "SYNTHESIZE POSE")
