"""One parameter component as label, slider and numeric readout."""

from PySide6.QtCore import QSignalBlocker, Qt, Signal
from PySide6.QtWidgets import QHBoxLayout, QLabel, QSlider, QWidget

_RIGHT = Qt.AlignmentFlag.AlignRight | Qt.AlignmentFlag.AlignVCenter


class SliderRow(QWidget):
    """A float slider over ``[lo, hi]`` quantised to *step*.

    ``value_changed`` fires only for user drags; :meth:`set_value` is
    silent, so tabs can mirror state without echoing it back.
    """

    value_changed = Signal(float)

    def __init__(self, label: str, lo: float = -1.0, hi: float = 1.0, default: float = 0.0,
                 step: float = 0.01, decimals: int = 2, label_width: int = 28, parent=None):
        super().__init__(parent)
        self._lo, self._hi, self._step = lo, hi, step
        self._fmt = f"{{:.{decimals}f}}"

        name = QLabel(label)
        name.setObjectName("sliderLabel")
        name.setFixedWidth(label_width)
        name.setAlignment(_RIGHT)

        self._slider = QSlider(Qt.Orientation.Horizontal)
        ticks = max(1, round((hi - lo) / step))
        self._slider.setRange(0, ticks)
        self._slider.setPageStep(max(1, ticks // 20))
        self._slider.valueChanged.connect(self._on_moved)

        self._readout = QLabel()
        self._readout.setObjectName("valueLabel")
        self._readout.setFixedWidth(44)
        self._readout.setAlignment(_RIGHT)

        row = QHBoxLayout(self)
        row.setContentsMargins(0, 1, 0, 1)
        row.setSpacing(6)
        row.addWidget(name)
        row.addWidget(self._slider, 1)
        row.addWidget(self._readout)

        self.set_value(default)

    @property
    def value(self) -> float:
        return self._lo + self._slider.value() * self._step

    def set_value(self, value: float) -> None:
        value = min(self._hi, max(self._lo, value))
        with QSignalBlocker(self._slider):
            self._slider.setValue(round((value - self._lo) / self._step))
        self._readout.setText(self._fmt.format(value))

    def _on_moved(self, tick: int) -> None:
        value = self._lo + tick * self._step
        self._readout.setText(self._fmt.format(value))
        self.value_changed.emit(value)
