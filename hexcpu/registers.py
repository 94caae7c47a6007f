import threading
from dataclasses import dataclass, field
from typing import Dict, List

GENERAL_REGS = 8          # r0–r7
SPECIAL_REGS = ["A", "M", "T"]  # address, mode, countdown

A_MASK = 0xFFF
M_MASK = 0x1
T_MASK = 0xFF


@dataclass
class Registers:
    """
    Register file shared by the instruction handlers and the countdown timer.

    General registers hold plain integers and are never clamped. ``t`` is the
    only register written from a second thread, so every access to it goes
    through ``_t_lock``.
    """
    gpr: List[int] = field(default_factory=lambda: [0]*GENERAL_REGS)
    _a: int = 0
    _m: int = 0
    _t: int = 0
    _t_lock: threading.Lock = field(default_factory=threading.Lock,
                                    repr=False, compare=False)

    def __getitem__(self, idx: int) -> int:
        if 0 <= idx < GENERAL_REGS:
            return self.gpr[idx]
        return 0

    def __setitem__(self, idx: int, value: int) -> None:
        # nibbles 8..F name no register; the write is dropped
        if 0 <= idx < GENERAL_REGS:
            self.gpr[idx] = value

    @property
    def a(self) -> int:
        return self._a

    @a.setter
    def a(self, value: int) -> None:
        self._a = value & A_MASK

    @property
    def m(self) -> int:
        return self._m

    @m.setter
    def m(self, value: int) -> None:
        self._m = value & M_MASK

    @property
    def t(self) -> int:
        with self._t_lock:
            return self._t

    @t.setter
    def t(self, value: int) -> None:
        with self._t_lock:
            self._t = value & T_MASK

    def decrement_t(self) -> int:
        """Count ``t`` down by one unless it is already 0; return the new value."""
        with self._t_lock:
            if self._t > 0:
                self._t -= 1
            return self._t

    def toggle_m(self) -> None:
        self._m = 1 - self._m

    def reset(self) -> None:
        self.gpr = [0]*GENERAL_REGS
        self._a = 0
        self._m = 0
        self.t = 0

    def snapshot(self) -> Dict[str, int]:
        values = {f"R{i}": v for i, v in enumerate(self.gpr)}
        values.update(A=self.a, M=self.m, T=self.t)
        return values
