"""
Instruction word layout.
─────────────────────────────────────────────────────
A word is 16 bits, always handled as 4 hex digits ``OXYZ``:
• O   : opcode (leading digit)
• X,Y,Z : operand nibbles
• YZ  : byte literal (STORE, SET_T)
• XYZ : 12-bit address / literal (JUMP, SET_A)
"""
from dataclasses import dataclass
from enum import IntEnum

WORD_MASK = 0xFFFF


class Opcode(IntEnum):
    STORE = 0x0
    ADD = 0x1
    SUBTRACT = 0x2
    READ = 0x3
    WRITE = 0x4
    JUMP = 0x5
    READ_KEYBOARD = 0x6
    SWITCH_MEMORY = 0x7
    SKIP_EQUAL = 0x8
    SKIP_NOT_EQUAL = 0x9
    SET_A = 0xA
    SET_T = 0xB
    READ_T = 0xC
    CONVERT_TO_BASE_TEN = 0xD
    CONVERT_BYTE_TO_ASCII = 0xE
    DRAW = 0xF


@dataclass(frozen=True)
class Operands:
    x: int
    y: int
    z: int

    @property
    def byte(self) -> int:
        return (self.y << 4) | self.z

    @property
    def address(self) -> int:
        return (self.x << 8) | (self.y << 4) | self.z


def format_word(word: int) -> str:
    """Render a word as 4 uppercase hex digits"""
    return f"{word & WORD_MASK:04X}"


def opcode_of(word: int) -> Opcode:
    return Opcode((word >> 12) & 0xF)


def decode_operands(word: int) -> Operands:
    return Operands(x=(word >> 8) & 0xF, y=(word >> 4) & 0xF, z=word & 0xF)


def encode(opcode: int, x: int = 0, y: int = 0, z: int = 0) -> int:
    return ((opcode & 0xF) << 12) | ((x & 0xF) << 8) | ((y & 0xF) << 4) | (z & 0xF)


def encode_byte(opcode: int, x: int, byte: int) -> int:
    return encode(opcode, x, (byte >> 4) & 0xF, byte & 0xF)


def encode_address(opcode: int, address: int) -> int:
    return ((opcode & 0xF) << 12) | (address & 0xFFF)
