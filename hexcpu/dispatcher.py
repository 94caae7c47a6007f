from typing import Optional

from .display import Display
from .errors import UnknownInstructionError
from .instructions import HEX_DIGITS, Instruction, Keyboard, no_keyboard
from .isa import Opcode
from .memory import Memory, ProgramStore
from .registers import Registers


def create_instruction(code: str,
                       registers: Registers,
                       rom: ProgramStore,
                       ram: Memory,
                       display: Display,
                       keyboard: Optional[Keyboard] = None) -> Instruction:
    """
    Build the handler for a 4-hex-digit instruction code. The leading digit
    selects the opcode; a new ``Instruction`` is returned for every call.
    Codes must be uppercase (``"A064"``), as the execution engine formats them.
    """
    if len(code) != 4 or any(c not in HEX_DIGITS for c in code):
        raise UnknownInstructionError(code)
    return Instruction(code, Opcode(int(code[0], 16)), registers, rom, ram, display,
                       keyboard or no_keyboard)
