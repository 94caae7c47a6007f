import sys

from PySide6.QtWidgets import QMainWindow, QDockWidget, QApplication, QInputDialog
from PySide6.QtCore import Qt

from hexcpu.console import LoggingSink
from hexcpu.cpu_core import CPU
from .register_panel import RegisterPanel
from .memory_panel import MemoryPanel
from .screen_panel import ScreenPanel
from .control_panel import ControlPanel


class MainWindow(QMainWindow):
    def __init__(self, program=None):
        super().__init__()
        self.cpu = CPU(sink=LoggingSink(), keyboard=self.ask_keyboard)
        self.setWindowTitle("Hex Microcomputer Simulator")

        # 중앙 위젯: 메모리
        self.memory_panel = MemoryPanel(self.cpu)
        self.setCentralWidget(self.memory_panel)

        # Dock 1 : 레지스터
        reg_dock = QDockWidget("Registers", self)
        reg_dock.setWidget(RegisterPanel(self.cpu))
        self.addDockWidget(Qt.LeftDockWidgetArea, reg_dock)

        # Dock 2 : 화면
        screen_dock = QDockWidget("Screen", self)
        screen_dock.setWidget(ScreenPanel(self.cpu))
        self.addDockWidget(Qt.RightDockWidgetArea, screen_dock)

        # Dock 3 : 컨트롤
        self.control_panel = ControlPanel(self.cpu, self.memory_panel)
        ctrl_dock = QDockWidget("Control", self)
        ctrl_dock.setWidget(self.control_panel)
        self.addDockWidget(Qt.BottomDockWidgetArea, ctrl_dock)

        if program:
            self.control_panel.load_file(program)

    def ask_keyboard(self, prompt: str) -> str:
        """READ_KEYBOARD input; a cancelled dialog counts as empty input"""
        text, ok = QInputDialog.getText(self, "Keyboard", prompt)
        return text if ok else ""

    def closeEvent(self, event):
        if self.cpu.timer is not None:
            self.cpu.timer.stop()
        super().closeEvent(event)


def run(program=None) -> int:
    app = QApplication(sys.argv)
    mw = MainWindow(program)
    mw.resize(1280, 960)
    mw.show()
    return app.exec()


if __name__ == "__main__":
    sys.exit(run())
