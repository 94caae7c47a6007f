"""8×8 character screen, polled from the CPU display every 100 ms."""
from PySide6.QtWidgets import QWidget, QLabel, QVBoxLayout
from PySide6.QtGui import QFontDatabase
from PySide6.QtCore import QTimer


class ScreenPanel(QWidget):
    def __init__(self, cpu, parent=None):
        super().__init__(parent)
        self.cpu = cpu
        self.label = QLabel()
        font = QFontDatabase.systemFont(QFontDatabase.FixedFont)
        font.setPointSize(18)
        self.label.setFont(font)

        layout = QVBoxLayout(self)
        layout.addWidget(self.label)
        layout.addStretch(1)

        self.timer = QTimer(self)
        self.timer.timeout.connect(self.refresh)
        self.timer.start(100)  # ms
        self.refresh()

    def refresh(self):
        self.label.setText(self.cpu.display.render())
