from PySide6.QtWidgets import QWidget, QLabel, QLineEdit, QGridLayout, QMessageBox
from PySide6.QtCore import Qt, QTimer, Slot
from hexcpu.registers import GENERAL_REGS, SPECIAL_REGS


class RegisterPanel(QWidget):
    """
    r0–r7, A, M, T and PC in a grid, refreshed every 200 ms.
    General registers can be edited directly (hex).
    """
    def __init__(self, cpu, parent=None):
        super().__init__(parent)
        self.cpu = cpu
        self.edits = []
        self.updating = False

        layout = QGridLayout(self)

        # 일반 레지스터 r0–r7
        for i in range(GENERAL_REGS):
            edit = QLineEdit()
            edit.setAlignment(Qt.AlignRight)
            edit.setObjectName(f"R{i}")
            edit.editingFinished.connect(self.register_edited)
            layout.addWidget(QLabel(f"r{i}"), i, 0)
            layout.addWidget(edit, i, 1)
            self.edits.append(edit)

        # 특수 레지스터 + PC
        for row, name in enumerate(SPECIAL_REGS + ["PC"], GENERAL_REGS):
            edit = QLineEdit()
            edit.setReadOnly(True)
            edit.setAlignment(Qt.AlignRight)
            layout.addWidget(QLabel(name), row, 0)
            layout.addWidget(edit, row, 1)
            self.edits.append(edit)

        layout.setColumnStretch(1, 1)

        self.timer = QTimer(self)
        self.timer.timeout.connect(self.update_view)
        self.timer.start(200)   # ms

    def update_view(self):
        self.updating = True
        values = self.cpu.reg.snapshot()
        for i in range(GENERAL_REGS):
            self.edits[i].setText(f"{values[f'R{i}']:X}")
        specials = [values["A"], values["M"], values["T"], self.cpu.rom.pc]
        for j, val in enumerate(specials, start=GENERAL_REGS):
            self.edits[j].setText(f"{val:X}")
        self.updating = False

    @Slot()
    def register_edited(self):
        if self.updating:
            return
        sender = self.sender()
        if not sender:
            return
        try:
            reg_idx = int(sender.objectName()[1:])
            self.cpu.reg[reg_idx] = int(sender.text(), 16)
        except ValueError:
            QMessageBox.warning(self, "Invalid Input",
                                "Please enter a valid hexadecimal value.")
