"""8×8 character display. Cells hold integer character codes."""
import threading
from typing import List, Tuple

WIDTH = 8
HEIGHT = 8
CELLS = WIDTH * HEIGHT
SPACE = 32


class Display:
    """
    Frame buffer of 64 character codes, addressable by (column, row) or by a
    linear index ``row*8 + column``.

    The countdown timer renders from its own thread, so every buffer access
    holds ``_lock``; a render works on a snapshot taken under the lock.
    """

    def __init__(self):
        self._buf = [SPACE]*CELLS
        self._lock = threading.Lock()

    @staticmethod
    def is_valid_position(col: int, row: int) -> bool:
        return 0 <= col < WIDTH and 0 <= row < HEIGHT

    def write_char(self, col: int, row: int, code: int) -> None:
        if self.is_valid_position(col, row):
            with self._lock:
                self._buf[row*WIDTH + col] = code

    def write_linear(self, index: int, code: int) -> None:
        if 0 <= index < CELLS:
            with self._lock:
                self._buf[index] = code

    def read_char(self, col: int, row: int) -> int:
        if not self.is_valid_position(col, row):
            return 0
        with self._lock:
            return self._buf[row*WIDTH + col]

    def read_linear(self, index: int) -> int:
        if not 0 <= index < CELLS:
            return 0
        with self._lock:
            return self._buf[index]

    def clear(self) -> None:
        with self._lock:
            self._buf = [SPACE]*CELLS

    def frame_buffer(self) -> List[int]:
        """Copy of the 64 cells, row-major"""
        with self._lock:
            return list(self._buf)

    def set_frame_buffer(self, buf: List[int]) -> bool:
        if len(buf) != CELLS:
            return False
        with self._lock:
            self._buf = list(buf)
        return True

    @staticmethod
    def coords_to_index(col: int, row: int) -> int:
        if Display.is_valid_position(col, row):
            return row*WIDTH + col
        return -1

    @staticmethod
    def index_to_coords(index: int) -> Tuple[int, int]:
        if 0 <= index < CELLS:
            return index % WIDTH, index // WIDTH
        return -1, -1

    def rows(self) -> List[str]:
        """The screen as 8 strings of 8 characters; non-printables become '?'"""
        buf = self.frame_buffer()
        return ["".join(chr(c) if 32 <= c <= 126 else "?"
                        for c in buf[r*WIDTH:(r + 1)*WIDTH])
                for r in range(HEIGHT)]

    def render(self) -> str:
        lines = ["┌" + "─"*WIDTH + "┐"]
        lines += [f"│{row}│" for row in self.rows()]
        lines.append("└" + "─"*WIDTH + "┘")
        return "\n".join(lines)
