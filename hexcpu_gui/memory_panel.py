from PySide6.QtCore import QAbstractTableModel, Qt, QModelIndex, QTimer
from PySide6.QtWidgets import (QTableView, QWidget, QVBoxLayout, QLabel, QHBoxLayout,
                               QPushButton, QInputDialog, QMessageBox, QTextEdit,
                               QGroupBox, QComboBox)

from hexcpu.assembler import assemble, disassemble
from hexcpu.isa import format_word


class MemoryModel(QAbstractTableModel):
    """One store (program or data) as a two-column table: word and mnemonic."""
    def __init__(self, store, parent=None):
        super().__init__(parent)
        self.store = store

    def set_store(self, store):
        self.beginResetModel()
        self.store = store
        self.endResetModel()

    def rowCount(self, parent=QModelIndex()):
        return self.store.size

    def columnCount(self, parent=QModelIndex()):
        return 2

    def data(self, index, role=Qt.DisplayRole):
        if not index.isValid() or role not in (Qt.DisplayRole, Qt.EditRole):
            return None
        val = self.store.read(index.row())
        if index.column() == 0:
            return format_word(val)
        return disassemble(val)

    def headerData(self, section, orientation, role):
        if role != Qt.DisplayRole:
            return None
        if orientation == Qt.Vertical:
            return f"{section:03X}"
        return ("Value", "Mnemonic")[section]

    def flags(self, index):
        flags = Qt.ItemIsSelectable | Qt.ItemIsEnabled
        if index.column() == 0:
            flags |= Qt.ItemIsEditable
        return flags

    def setData(self, index, value, role):
        if role != Qt.EditRole or index.column() != 0:
            return False
        try:
            ok = self.store.write(index.row(), int(value, 16))
        except ValueError:
            return False
        if ok:
            self.dataChanged.emit(index, self.index(index.row(), 1), [Qt.DisplayRole])
        return ok


class MemoryPanel(QWidget):
    """Scrollable store view plus the assembler input."""
    def __init__(self, cpu, parent=None):
        super().__init__(parent)
        self.cpu = cpu
        self.start_address = 0

        layout = QVBoxLayout(self)

        # store selector
        top = QHBoxLayout()
        top.addWidget(QLabel("Store:"))
        self.store_box = QComboBox()
        self.store_box.addItems(["Program store", "Data store"])
        self.store_box.currentIndexChanged.connect(self.select_store)
        top.addWidget(self.store_box)
        self.btn_edit = QPushButton("Edit Address")
        self.btn_edit.clicked.connect(self.edit_address)
        top.addWidget(self.btn_edit)
        layout.addLayout(top)

        self.model = MemoryModel(cpu.rom, self)
        self.table_view = QTableView(self)
        self.table_view.setModel(self.model)
        self.table_view.setSelectionBehavior(QTableView.SelectRows)
        self.table_view.verticalHeader().setDefaultSectionSize(20)
        self.table_view.horizontalHeader().setStretchLastSection(True)
        layout.addWidget(self.table_view)

        # Assembly input group
        asm_group = QGroupBox("Assembly Input")
        asm_layout = QVBoxLayout()
        help_text = (
            "One instruction per line, ; starts a comment\n"
            "--------------------------------------------------\n"
            "• STORE r0, 72        ADD / SUBTRACT rX, rY, rZ\n"
            "• READ / WRITE / READ_KEYBOARD / READ_T / CONVERT_TO_BASE_TEN rX\n"
            "• JUMP 0x010          SET_A 0x064      SET_T 60\n"
            "• SKIP_EQUAL / SKIP_NOT_EQUAL / CONVERT_BYTE_TO_ASCII rX, rY\n"
            "• DRAW rX, row, col   SWITCH_MEMORY    HALT    .WORD 0xABCD\n"
        )
        asm_layout.addWidget(QLabel(help_text))
        self.asm_text = QTextEdit()
        self.asm_text.setPlaceholderText("Enter assembly instructions here, one per line")
        asm_layout.addWidget(self.asm_text)

        asm_controls = QHBoxLayout()
        self.btn_start_addr = QPushButton("Set Start Address")
        self.btn_start_addr.clicked.connect(self.set_start_address)
        asm_controls.addWidget(self.btn_start_addr)
        self.btn_assemble = QPushButton("Assemble and Load")
        self.btn_assemble.clicked.connect(self.assemble_and_load)
        asm_controls.addWidget(self.btn_assemble)
        asm_layout.addLayout(asm_controls)
        asm_group.setLayout(asm_layout)
        layout.addWidget(asm_group)

        # 주기적 새로고침
        self.timer = QTimer(self)
        self.timer.timeout.connect(self.refresh)
        self.timer.start(500)  # ms

    @property
    def store(self):
        return self.model.store

    def select_store(self, idx):
        self.model.set_store(self.cpu.rom if idx == 0 else self.cpu.ram)

    def refresh(self):
        self.model.layoutChanged.emit()

    def edit_address(self):
        last = self.store.size - 1
        addr, ok1 = QInputDialog.getInt(self, "Edit Memory",
                                        f"Enter address (0-{last}):", 0, 0, last)
        if not ok1:
            return
        value_str, ok2 = QInputDialog.getText(
            self, "Edit Memory", f"Enter new value for address {addr:03X} (hex):",
            text=format_word(self.store.read(addr)))
        if not ok2:
            return
        try:
            written = self.store.write(addr, int(value_str, 16))
        except ValueError:
            QMessageBox.warning(self, "Invalid Input",
                                "Please enter a valid hexadecimal value.")
            return
        if not written:
            QMessageBox.warning(self, "Write Refused",
                                "The program store is write-protected.")
        self.refresh()

    def set_start_address(self):
        last = self.cpu.rom.size - 1
        addr, ok = QInputDialog.getInt(self, "Assembly Start Address",
                                       f"Enter start address (0-{last}):",
                                       self.start_address, 0, last)
        if ok:
            self.start_address = addr

    def assemble_and_load(self):
        """Assemble the listing into the program store at the start address"""
        source = self.asm_text.toPlainText().strip()
        if not source:
            QMessageBox.warning(self, "Empty Input", "Please enter assembly code.")
            return
        try:
            words = assemble(source)
        except ValueError as e:
            QMessageBox.warning(self, "Assembly Errors",
                                "The following errors occurred:\n" + str(e))
            return
        count = self.cpu.rom.load_words(words, self.start_address)
        self.refresh()
        QMessageBox.information(
            self, "Assembly Complete",
            f"{count} words loaded starting at address {self.start_address:03X}")
