"""Section heading with a coloured left rule."""

from PySide6.QtWidgets import QLabel


class SectionLabel(QLabel):
    """Uppercase section heading styled by the ``#sectionLabel`` QSS rule.

    *tone* selects the rule colour (``"shape"``, ``"view"`` or the default
    accent).
    """

    def __init__(self, text: str, tone: str = "", parent=None) -> None:
        super().__init__(text.upper(), parent)
        self.setObjectName("sectionLabel")
        if tone:
            self.setProperty("tone", tone)
