"""
Minimal assembler (one instruction per line) and disassembler.

    STORE r0, 72        ; 0048
    DRAW  r0, 0, 0      ; F000   register, row, column
    HALT                ; 0000

Mnemonics are the opcode names (``SET_A``, ``SKIP_EQUAL`` …) plus ``HALT``
and ``.WORD <n>``. Numbers are decimal or ``0x`` hex; registers are ``r0``–``r7``.
"""
import re
from typing import Iterable, List

from .isa import Opcode, decode_operands, encode, encode_address, encode_byte, opcode_of

# operand shapes: r = register, n = nibble, b = byte, a = 12-bit address
FORMS = {
    Opcode.STORE: "rb",
    Opcode.ADD: "rrr",
    Opcode.SUBTRACT: "rrr",
    Opcode.READ: "r",
    Opcode.WRITE: "r",
    Opcode.JUMP: "a",
    Opcode.READ_KEYBOARD: "r",
    Opcode.SWITCH_MEMORY: "",
    Opcode.SKIP_EQUAL: "rr",
    Opcode.SKIP_NOT_EQUAL: "rr",
    Opcode.SET_A: "a",
    Opcode.SET_T: "b",
    Opcode.READ_T: "r",
    Opcode.CONVERT_TO_BASE_TEN: "r",
    Opcode.CONVERT_BYTE_TO_ASCII: "rr",
    Opcode.DRAW: "rnn",
}

BITS = {"r": 3, "n": 4, "b": 8, "a": 12}


def _num(tok: str, bits: int) -> int:
    """token → int, range-checked against an unsigned ``bits``-wide field"""
    base = 16 if tok.lower().startswith("0x") else 10
    v = int(tok, base)
    if not 0 <= v < (1 << bits):
        raise ValueError(f"value {tok} out of range for {bits}-bit field")
    return v


def _operand(tok: str, kind: str) -> int:
    if kind == "r":
        m = re.fullmatch(r"[rR](\d)", tok)
        if not m:
            raise ValueError(f"expected register, got {tok!r}")
        return _num(m.group(1), BITS["r"])
    return _num(tok, BITS[kind])


def assemble_line(line: str) -> int:
    """Single source line → 16-bit word. Raises ValueError on bad syntax."""
    line = re.sub(r";.*$", "", line).strip()
    if not line:
        raise ValueError("empty")

    mnemonic, *rest = line.split(None, 1)
    mnemonic = mnemonic.upper()
    rest = rest[0] if rest else ""
    args = [a.strip() for a in rest.split(",")] if rest.strip() else []

    if mnemonic == "HALT" and not args:
        return 0
    if mnemonic == ".WORD" and len(args) == 1:
        return _num(args[0], 16)

    try:
        opcode = Opcode[mnemonic]
    except KeyError:
        raise ValueError(f"unknown mnemonic {mnemonic}") from None

    form = FORMS[opcode]
    if len(args) != len(form):
        raise ValueError(f"{mnemonic} takes {len(form)} operand(s), got {len(args)}")
    values = [_operand(tok, kind) for tok, kind in zip(args, form)]

    if form == "a":
        return encode_address(opcode, values[0])
    if form == "b":
        return encode_byte(opcode, 0, values[0])
    if form == "rb":
        return encode_byte(opcode, values[0], values[1])
    return encode(opcode, *values)


def assemble(source: str) -> List[int]:
    """Assemble a whole listing. Blank and comment-only lines are skipped."""
    words, errors = [], []
    for i, line in enumerate(source.splitlines(), start=1):
        if not re.sub(r";.*$", "", line).strip():
            continue
        try:
            words.append(assemble_line(line))
        except ValueError as e:
            errors.append(f"line {i}: {e}")
    if errors:
        raise ValueError("\n".join(errors))
    return words


def to_bytes(words: Iterable[int]) -> bytes:
    """Program image: one big-endian byte pair per word"""
    out = bytearray()
    for w in words:
        out += bytes(((w >> 8) & 0xFF, w & 0xFF))
    return bytes(out)


def disassemble(word: int) -> str:
    word &= 0xFFFF
    if word == 0:
        return "HALT"
    opcode = opcode_of(word)
    op = decode_operands(word)
    form = FORMS[opcode]
    if form == "a":
        args = [f"0x{op.address:03X}"]
    elif form == "b":
        args = [str(op.byte)]
    elif form == "rb":
        args = [f"r{op.x}", str(op.byte)]
    else:
        nibbles = (op.x, op.y, op.z)
        args = [f"r{v}" if kind == "r" else str(v) for v, kind in zip(nibbles, form)]
    return f"{opcode.name} {', '.join(args)}".strip()
