"""
Countdown timer: a background thread that decrements register T at 60 Hz and
asks for a display render every 60 ticks.
"""
import logging
import threading
from typing import Callable, Optional

from .registers import Registers

log = logging.getLogger(__name__)

TIMER_HZ = 60
RENDER_EVERY = 60


class CountdownTimer:
    def __init__(self, registers: Registers,
                 on_render: Optional[Callable[[], None]] = None,
                 interval: float = 1.0 / TIMER_HZ,
                 render_every: int = RENDER_EVERY):
        self.registers = registers
        self.on_render = on_render
        self.interval = interval
        self.render_every = render_every
        self.ticks = 0
        self._thread: Optional[threading.Thread] = None
        self._stop_event = threading.Event()

    # -- public API -------------------------------------------------------

    def start(self) -> None:
        """Start ticking. Calling it while already running does nothing."""
        if self.running:
            return
        # a thread left behind by a timed-out stop() keeps its own event
        self._stop_event = threading.Event()
        self.ticks = 0
        self._thread = threading.Thread(target=self._run, args=(self._stop_event,),
                                        daemon=True, name="hexcpu-timer")
        self._thread.start()

    def stop(self, timeout: float = 1.0) -> None:
        """Signal the thread to finish; waits at most ``timeout`` seconds."""
        self._stop_event.set()
        thread, self._thread = self._thread, None
        if thread is not None and thread is not threading.current_thread():
            thread.join(timeout=timeout)
            if thread.is_alive():
                log.warning("timer thread did not stop within %.1fs", timeout)
        self.ticks = 0

    @property
    def running(self) -> bool:
        return self._thread is not None and self._thread.is_alive()

    def tick(self) -> None:
        self.registers.decrement_t()
        self.ticks += 1
        if self.ticks >= self.render_every:
            self.ticks = 0
            log.debug("timer: T = %d", self.registers.t)
            if self.on_render is not None:
                self.on_render()

    def __enter__(self):
        self.start()
        return self

    def __exit__(self, *exc):
        self.stop()

    # -- internals --------------------------------------------------------

    def _run(self, stop_event: threading.Event) -> None:
        # Event.wait doubles as the sleep so stop() interrupts it immediately
        while not stop_event.wait(self.interval):
            self.tick()
