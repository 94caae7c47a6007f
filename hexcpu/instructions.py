"""
The sixteen instruction semantics.

Every fetched word becomes one ``Instruction``: a tagged value (``opcode``)
bound to the shared hardware. Execution is the fixed three-phase protocol
decode → perform → advance; ``perform`` looks the effect up in ``EFFECTS``.
"""
import logging
from dataclasses import dataclass, field
from typing import Callable, Dict, Optional

from .display import Display
from .errors import InvalidJumpError, OperandRangeError
from .isa import Opcode, Operands, decode_operands
from .memory import Memory, ProgramStore
from .registers import Registers

log = logging.getLogger(__name__)

Keyboard = Callable[[str], str]

KEYBOARD_PROMPT = "Enter hex digits (0-F, up to 2 digits): "
HEX_DIGITS = "0123456789ABCDEF"
MAX_ASCII = 0x7F
MAX_HEX_DIGIT = 0xF
MAX_SCREEN_POS = 7


def parse_hex_input(text: Optional[str]) -> int:
    """Keep the first two hex characters of ``text``; anything unusable is 0."""
    digits = "".join(c for c in (text or "").upper() if c in HEX_DIGITS)[:2]
    if not digits:
        return 0
    try:
        return int(digits, 16)
    except ValueError:
        return 0


def no_keyboard(prompt: str) -> str:
    return ""


@dataclass
class Instruction:
    code: str
    opcode: Opcode
    registers: Registers
    rom: ProgramStore
    ram: Memory
    display: Display
    keyboard: Keyboard = no_keyboard
    operands: Optional[Operands] = field(default=None)

    def execute(self) -> None:
        self.decode()
        self.perform()
        self.advance()

    def decode(self) -> Operands:
        self.operands = decode_operands(int(self.code, 16))
        return self.operands

    def perform(self) -> None:
        if self.operands is None:
            self.decode()
        EFFECTS[self.opcode](self)

    def advance(self) -> None:
        # JUMP already placed the program counter
        if self.opcode is not Opcode.JUMP:
            self.rom.increment_pc()

    @property
    def store(self) -> Memory:
        """Read/write target selected by the mode register"""
        return self.rom if self.registers.m == 1 else self.ram


# ───────────────────────────── effects ─────────────────────────────
def _store(ins: Instruction) -> None:
    ins.registers[ins.operands.x] = ins.operands.byte


def _add(ins: Instruction) -> None:
    op, reg = ins.operands, ins.registers
    reg[op.z] = reg[op.x] + reg[op.y]


def _subtract(ins: Instruction) -> None:
    op, reg = ins.operands, ins.registers
    reg[op.z] = reg[op.x] - reg[op.y]


def _read(ins: Instruction) -> None:
    ins.registers[ins.operands.x] = ins.store.read(ins.registers.a)


def _write(ins: Instruction) -> None:
    addr = ins.registers.a
    if not ins.store.write(addr, ins.registers[ins.operands.x]):
        log.debug("write to %s address %d refused", type(ins.store).__name__, addr)


def _jump(ins: Instruction) -> None:
    address = ins.operands.address
    if address % 2 != 0:
        raise InvalidJumpError(address)
    ins.rom.set_pc(address)


def _read_keyboard(ins: Instruction) -> None:
    value = parse_hex_input(ins.keyboard(KEYBOARD_PROMPT))
    ins.registers[ins.operands.x] = value
    log.debug("stored keyboard value %d (0x%X) in r%d", value, value, ins.operands.x)


def _switch_memory(ins: Instruction) -> None:
    ins.registers.toggle_m()


def _skip_equal(ins: Instruction) -> None:
    op, reg = ins.operands, ins.registers
    if reg[op.x] == reg[op.y]:
        ins.rom.increment_pc()


def _skip_not_equal(ins: Instruction) -> None:
    op, reg = ins.operands, ins.registers
    if reg[op.x] != reg[op.y]:
        ins.rom.increment_pc()


def _set_a(ins: Instruction) -> None:
    ins.registers.a = ins.operands.address


def _set_t(ins: Instruction) -> None:
    ins.registers.t = ins.operands.byte


def _read_t(ins: Instruction) -> None:
    ins.registers[ins.operands.x] = ins.registers.t


def _truncdiv(a: int, b: int) -> int:
    q = abs(a) // b
    return -q if a < 0 else q


def _convert_to_base_ten(ins: Instruction) -> None:
    value = ins.registers[ins.operands.x]
    hundreds = _truncdiv(value, 100)
    tens = _truncdiv(value - hundreds*100, 10)
    ones = value - hundreds*100 - tens*10
    addr, store = ins.registers.a, ins.store
    for offset, digit in enumerate((hundreds, tens, ones)):
        store.write(addr + offset, digit)


def _convert_byte_to_ascii(ins: Instruction) -> None:
    op = ins.operands
    digit = ins.registers[op.x]
    if not 0 <= digit <= MAX_HEX_DIGIT:
        raise OperandRangeError(f"r{op.x}", digit, MAX_HEX_DIGIT)
    ins.registers[op.y] = ord(HEX_DIGITS[digit])


def _draw(ins: Instruction) -> None:
    op = ins.operands
    code = ins.registers[op.x]
    row, col = op.y, op.z
    if not 0 <= code <= MAX_ASCII:
        raise OperandRangeError(f"r{op.x}", code, MAX_ASCII)
    if row > MAX_SCREEN_POS:
        raise OperandRangeError("row", row, MAX_SCREEN_POS)
    if col > MAX_SCREEN_POS:
        raise OperandRangeError("column", col, MAX_SCREEN_POS)
    ins.display.write_char(col, row, code)
    log.debug("drawing %r (ASCII %d) at row %d, column %d", chr(code), code, row, col)


EFFECTS: Dict[Opcode, Callable[[Instruction], None]] = {
    Opcode.STORE: _store,
    Opcode.ADD: _add,
    Opcode.SUBTRACT: _subtract,
    Opcode.READ: _read,
    Opcode.WRITE: _write,
    Opcode.JUMP: _jump,
    Opcode.READ_KEYBOARD: _read_keyboard,
    Opcode.SWITCH_MEMORY: _switch_memory,
    Opcode.SKIP_EQUAL: _skip_equal,
    Opcode.SKIP_NOT_EQUAL: _skip_not_equal,
    Opcode.SET_A: _set_a,
    Opcode.SET_T: _set_t,
    Opcode.READ_T: _read_t,
    Opcode.CONVERT_TO_BASE_TEN: _convert_to_base_ten,
    Opcode.CONVERT_BYTE_TO_ASCII: _convert_byte_to_ascii,
    Opcode.DRAW: _draw,
}
