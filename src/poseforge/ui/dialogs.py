"""File dialogs shared by the File menu and the Data tab."""

from PySide6.QtWidgets import QFileDialog, QWidget

OPEN_FILTER = "SMPL-X Parameters (*.json *.npz *.pkl);;JSON (*.json);;NumPy Archive (*.npz);;All Files (*)"


def ask_open_parameters(parent: QWidget) -> str:
    path, _ = QFileDialog.getOpenFileName(parent, "Open Parameters", "", OPEN_FILTER)
    return path


def ask_export_parameters(parent: QWidget) -> str:
    path, _ = QFileDialog.getSaveFileName(
        parent, "Export Parameters", "smplx_params.json", "JSON (*.json);;All Files (*)",
    )
    return path


def ask_snapshot_path(parent: QWidget) -> str:
    path, _ = QFileDialog.getSaveFileName(
        parent, "Save Snapshot", "poseforge_snapshot.png", "PNG Image (*.png);;All Files (*)",
    )
    return path
