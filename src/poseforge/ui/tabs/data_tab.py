"""Data tab: parameter file import/export and snapshots."""

from PySide6.QtWidgets import QLabel, QPushButton

from poseforge.core.events import EventBus, EventType
from poseforge.core.state import StateManager
from poseforge.ui.dialogs import ask_export_parameters, ask_open_parameters, ask_snapshot_path
from poseforge.ui.tabs.scroll_tab import ScrollTab
from poseforge.ui.widgets.section_label import SectionLabel

FORMATS_NOTE = (
    ".JSON  parameter object (any subset of fields)\n"
    ".NPZ   NumPy archive (first frame is used)\n"
    ".PKL   not supported; convert to .npz"
)


class DataTab(ScrollTab):
    def __init__(self, event_bus: EventBus, state: StateManager, parent=None) -> None:
        super().__init__(event_bus, state, parent)

        self._layout.addWidget(SectionLabel("Model Files (.json / .npz)"))

        open_btn = QPushButton("Open Parameters...")
        open_btn.clicked.connect(self._on_open)
        self._layout.addWidget(open_btn)

        export_btn = QPushButton("Export Parameters...")
        export_btn.clicked.connect(self._on_export)
        self._layout.addWidget(export_btn)

        self._layout.addWidget(SectionLabel("Compatible Formats"))
        note = QLabel(FORMATS_NOTE)
        note.setObjectName("noteLabel")
        self._layout.addWidget(note)

        self._layout.addWidget(SectionLabel("Viewport"))
        snap_btn = QPushButton("Export Snapshot...")
        snap_btn.clicked.connect(self._on_snapshot)
        self._layout.addWidget(snap_btn)

        self._layout.addStretch()

    def _on_open(self) -> None:
        path = ask_open_parameters(self)
        if path:
            self._bus.publish(EventType.FILE_IMPORT_REQUESTED, path=path)

    def _on_export(self) -> None:
        path = ask_export_parameters(self)
        if path:
            self._bus.publish(EventType.FILE_EXPORT_REQUESTED, path=path)

    def _on_snapshot(self) -> None:
        path = ask_snapshot_path(self)
        if path:
            self._bus.publish(EventType.SNAPSHOT_REQUESTED, path=path)
