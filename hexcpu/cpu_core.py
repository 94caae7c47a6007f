import logging
from enum import Enum
from pathlib import Path
from typing import Optional, Union

from .console import ExecutionSink, LoggingSink, console_keyboard
from .dispatcher import create_instruction
from .display import Display
from .errors import CPUError
from .instructions import Instruction, Keyboard
from .isa import WORD_MASK, Opcode, format_word
from .memory import Memory, ProgramStore
from .registers import Registers
from .timer import TIMER_HZ, CountdownTimer

log = logging.getLogger(__name__)


class CPUState(Enum):
    RUNNING = "running"
    HALTED = "halted"


class HaltReason(Enum):
    ZERO_WORD = "instruction 0000"
    END_OF_STORE = "program counter left the program store"
    FAULT = "fatal error"


class CPU:
    """
    Fetch-execute engine for the 16-bit hex microcomputer.
    ─────────────────────────────────────────────────────
    • fetch()  : read the word at PC as a 4-hex-digit code
    • step()   : one cycle (fetch → dispatch → decode/perform/advance)
    • run()    : step until HALTED, with the countdown timer ticking
    • reset()  : registers, stores and display back to power-on state
    """

    def __init__(self,
                 registers: Optional[Registers] = None,
                 rom: Optional[ProgramStore] = None,
                 ram: Optional[Memory] = None,
                 display: Optional[Display] = None,
                 sink: Optional[ExecutionSink] = None,
                 keyboard: Optional[Keyboard] = None,
                 timer_interval: Optional[float] = 1.0 / TIMER_HZ):
        self.reg = registers or Registers()
        self.rom = rom or ProgramStore()
        self.ram = ram or Memory()
        self.display = display or Display()
        self.sink = sink or LoggingSink()
        self.keyboard = keyboard or console_keyboard
        # None disables the countdown timer thread for the session
        self.timer = None
        if timer_interval is not None:
            self.timer = CountdownTimer(self.reg, on_render=self.render,
                                        interval=timer_interval)
        self.state = CPUState.RUNNING
        self.halt_reason: Optional[HaltReason] = None
        self.fault: Optional[CPUError] = None

    # ───────────────────────────── loading ────────────────────────────
    def load_bytes(self, data: bytes) -> int:
        count = self.rom.load_bytes(data)
        self.state = CPUState.RUNNING
        self.halt_reason = None
        self.fault = None
        log.info("loaded %d words", count)
        return count

    def load_program(self, path: Union[str, Path]) -> int:
        return self.load_bytes(Path(path).read_bytes())

    # ───────────────────────────── fetch ─────────────────────────────
    def fetch(self) -> str:
        """
        Current word at PC as 4 hex digits. A value outside 0..FFFF (written
        through a writable program store) is not masked; its longer code is
        rejected by the dispatcher as an unknown instruction.
        """
        word = self.rom.read(self.rom.pc)
        if 0 <= word <= WORD_MASK:
            return format_word(word)
        return f"{word:X}"

    def decode(self, code: str) -> Instruction:
        return create_instruction(code, self.reg, self.rom, self.ram,
                                  self.display, self.keyboard)

    # ───────────────────────────── runner ─────────────────────────────
    def step(self) -> Optional[Instruction]:
        """
        Execute one instruction. Returns it, or None once the CPU is halted.
        Fatal errors halt the CPU and propagate to the caller.
        """
        if self.state is CPUState.HALTED:
            return None
        pc = self.rom.pc
        if not 0 <= pc < self.rom.size:
            self._halt(HaltReason.END_OF_STORE)
            return None

        code = self.fetch()
        self.sink.instruction(pc, code)
        if self.rom.read(pc) == 0:
            self._halt(HaltReason.ZERO_WORD)
            return None

        try:
            instruction = self.decode(code)
            instruction.execute()
        except CPUError as e:
            self.fault = e
            self.sink.fault(pc, code, e)
            self._halt(HaltReason.FAULT)
            raise

        if instruction.opcode is Opcode.DRAW:
            self.render()
        if self.rom.pc >= self.rom.size:
            self._halt(HaltReason.END_OF_STORE)
        return instruction

    def run(self, max_steps: Optional[int] = None) -> CPUState:
        """
        Step until HALTED (or ``max_steps`` instructions have run). The
        countdown timer ticks for the duration of the call. Fatal errors are
        reported through the sink and left in ``self.fault``.
        """
        steps = 0
        if self.timer is not None:
            self.timer.start()
        try:
            while self.state is CPUState.RUNNING:
                if max_steps is not None and steps >= max_steps:
                    break
                try:
                    self.step()
                except CPUError:
                    break
                steps += 1
        finally:
            if self.timer is not None:
                self.timer.stop()
        return self.state

    def render(self) -> None:
        self.sink.render(self.display.render())

    def _halt(self, reason: HaltReason) -> None:
        self.state = CPUState.HALTED
        self.halt_reason = reason
        self.sink.halted(reason)
        self.render()

    def reset(self) -> None:
        """Registers, stores and display back to the power-on state"""
        if self.timer is not None:
            self.timer.stop()
        self.reg.reset()
        self.rom.clear()
        self.ram.clear()
        self.display.clear()
        self.state = CPUState.RUNNING
        self.halt_reason = None
        self.fault = None
