from PySide6.QtWidgets import (QWidget, QPushButton, QHBoxLayout, QLabel,
                               QFileDialog, QCheckBox)
from PySide6.QtCore import QTimer

from hexcpu.cpu_core import CPUState
from hexcpu.errors import CPUError


class ControlPanel(QWidget):
    """
    Step / Run / Pause / Reset / Load buttons and a status label.
    Run drives cpu.step() from a QTimer and keeps the countdown timer ticking.
    """
    def __init__(self, cpu, mem_view, parent=None):
        super().__init__(parent)
        self.cpu = cpu
        self.mem_view = mem_view

        self.btn_load  = QPushButton("Load")
        self.btn_step  = QPushButton("Step")
        self.btn_run   = QPushButton("Run")
        self.btn_pause = QPushButton("Pause")
        self.btn_reset = QPushButton("Reset")
        self.chk_writable = QCheckBox("Writable ROM")
        self.status    = QLabel("Stopped")

        lay = QHBoxLayout(self)
        for b in (self.btn_load, self.btn_step, self.btn_run, self.btn_pause,
                  self.btn_reset, self.chk_writable, self.status):
            lay.addWidget(b)

        # connections
        self.btn_load.clicked.connect(self.choose_file)
        self.btn_step.clicked.connect(self.step_once)
        self.btn_run.clicked.connect(self.run)
        self.btn_pause.clicked.connect(self.pause)
        self.btn_reset.clicked.connect(self.reset)
        self.chk_writable.toggled.connect(self.set_writable)

        # timer for continuous run
        self.timer = QTimer(self)
        self.timer.timeout.connect(self.step_once)
        self.timer.setInterval(50)  # 20 Hz
        self._busy = False

    def choose_file(self):
        path, _ = QFileDialog.getOpenFileName(self, "Load program", "",
                                              "Binary (*.bin);;All files (*)")
        if path:
            self.load_file(path)

    def load_file(self, path):
        self.pause()
        try:
            count = self.cpu.load_program(path)
        except OSError as e:
            self.status.setText(f"Load failed: {e}")
            return
        self.mem_view.refresh()
        self.status.setText(f"Loaded {count} words")

    def step_once(self):
        # a READ_KEYBOARD dialog spins a nested event loop; do not re-enter
        if self._busy:
            return
        self._busy = True
        try:
            self.cpu.step()
        except CPUError as e:
            self.status.setText(str(e))
        else:
            self.status.setText(f"PC={self.cpu.rom.pc:03X}")
        finally:
            self._busy = False
        if self.cpu.state is CPUState.HALTED:
            self.pause()
            self.status.setText(
                str(self.cpu.fault) if self.cpu.fault
                else f"Halted: {self.cpu.halt_reason.value}")

    def run(self):
        if self.cpu.state is CPUState.HALTED:
            return
        if self.cpu.timer is not None:
            self.cpu.timer.start()
        self.timer.start()
        self.status.setText("Running")

    def pause(self):
        self.timer.stop()
        if self.cpu.timer is not None:
            self.cpu.timer.stop()
        if self.cpu.state is CPUState.RUNNING:
            self.status.setText("Paused")

    def set_writable(self, checked):
        self.cpu.rom.writable = checked

    def reset(self):
        self.pause()
        self.cpu.reset()
        self.cpu.rom.writable = self.chk_writable.isChecked()
        self.mem_view.refresh()
        self.status.setText("Reset OK")
