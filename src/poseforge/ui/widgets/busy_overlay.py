"""Semi-transparent overlay shown over the viewport while work is pending."""

from PySide6.QtCore import Qt
from PySide6.QtWidgets import QLabel, QProgressBar, QVBoxLayout, QWidget


class BusyOverlay(QWidget):
    """Dark overlay with a message and an indeterminate progress bar.

    Mouse events pass through so the viewport stays orbitable while an AI
    request is in flight.
    """

    def __init__(self, parent: QWidget | None = None) -> None:
        super().__init__(parent)
        self.setObjectName("busyOverlay")
        self.setAttribute(Qt.WidgetAttribute.WA_TransparentForMouseEvents, True)
        self.setAttribute(Qt.WidgetAttribute.WA_StyledBackground, True)

        layout = QVBoxLayout(self)
        layout.setAlignment(Qt.AlignmentFlag.AlignCenter)
        layout.setSpacing(12)

        self._message = QLabel("SYNTHESIZING POSE...")
        self._message.setObjectName("busyMessage")
        self._message.setAlignment(Qt.AlignmentFlag.AlignCenter)
        layout.addWidget(self._message)

        progress = QProgressBar()
        progress.setRange(0, 0)  # indeterminate
        progress.setFixedWidth(240)
        progress.setFixedHeight(6)
        progress.setTextVisible(False)
        layout.addWidget(progress, alignment=Qt.AlignmentFlag.AlignCenter)

        self.hide()

    def show_busy(self, message: str | None = None) -> None:
        if message:
            self._message.setText(message.upper())
        if self.parent():
            self.setGeometry(self.parent().rect())
        self.show()
        self.raise_()

    def hide_busy(self) -> None:
        self.hide()
