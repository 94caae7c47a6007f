from pathlib import Path
from typing import List, Union

MEM_SIZE = 4096  # Number of words in each store


def words_from_bytes(data: bytes) -> List[int]:
    """Pair bytes big-endian into 16-bit words. A trailing odd byte is dropped."""
    return [(data[i] << 8) | data[i + 1] for i in range(0, len(data) - 1, 2)]


class Memory:
    """Data store: 4096 read/write words. Out-of-range access never raises."""

    def __init__(self, size: int = MEM_SIZE):
        self.mem = [0]*size

    @property
    def size(self) -> int:
        return len(self.mem)

    def in_range(self, addr: int) -> bool:
        return 0 <= addr < len(self.mem)

    def read(self, addr: int) -> int:
        """Read a word; addresses outside the store read as 0"""
        if self.in_range(addr):
            return self.mem[addr]
        return 0

    def write(self, addr: int, value: int) -> bool:
        """Write a word; returns False (and drops the write) when out of range"""
        if self.in_range(addr):
            self.mem[addr] = value
            return True
        return False

    def dump(self, start: int = 0, length: int = 16) -> List[int]:
        end = min(start + length, len(self.mem))
        return self.mem[max(start, 0):end]

    def clear(self) -> None:
        self.mem = [0]*len(self.mem)


class ProgramStore(Memory):
    """
    Program store (ROM). Carries the program counter and a writability flag.
    Writes while not writable are refused with a False return value.
    """

    def __init__(self, size: int = MEM_SIZE):
        super().__init__(size)
        self.pc = 0
        self.writable = False

    def write(self, addr: int, value: int) -> bool:
        if not self.writable:
            return False
        return super().write(addr, value)

    def increment_pc(self) -> None:
        self.pc += 1

    def set_pc(self, addr: int) -> None:
        self.pc = addr

    def load_words(self, words: List[int], start: int = 0) -> int:
        """Place words from `start` on, bypassing write protection. Words
        past the end of the store are dropped."""
        words = list(words)[:max(len(self.mem) - start, 0)]
        self.mem[start:start + len(words)] = words
        return len(words)

    def load_bytes(self, data: bytes) -> int:
        """Load a program image starting at address 0. Returns the word count."""
        count = self.load_words(words_from_bytes(bytes(data)))
        self.pc = 0
        return count

    def load_program(self, path: Union[str, Path]) -> int:
        return self.load_bytes(Path(path).read_bytes())

    def hex_instruction(self, addr: int) -> str:
        return f"{self.read(addr) & 0xFFFF:04X}"

    def clear(self) -> None:
        super().clear()
        self.pc = 0
