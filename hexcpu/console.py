"""
Observers for the execution engine and the console keyboard.

The engine never prints. It reports to an ``ExecutionSink``; pick
``LoggingSink`` (standard logging) or ``ConsoleSink`` (plain trace on stdout).
"""
import logging
import sys
from typing import Callable, Optional, TextIO


class ExecutionSink:
    """No-op base; override what you need."""

    def instruction(self, pc: int, code: str) -> None:
        pass

    def fault(self, pc: int, code: str, error: Exception) -> None:
        pass

    def render(self, text: str) -> None:
        pass

    def halted(self, reason) -> None:
        pass


class LoggingSink(ExecutionSink):
    def __init__(self, logger: Optional[logging.Logger] = None):
        self.log = logger or logging.getLogger("hexcpu.trace")

    def instruction(self, pc, code):
        self.log.debug("PC: %d, Instruction: %s", pc, code)

    def fault(self, pc, code, error):
        self.log.error("Program terminated at PC %d (%s): %s", pc, code, error)

    def render(self, text):
        self.log.info("Current screen:\n%s", text)

    def halted(self, reason):
        self.log.info("Program halted: %s", reason.value)


class ConsoleSink(ExecutionSink):
    """Plain-text trace, one line per executed instruction."""

    def __init__(self, out: Optional[TextIO] = None):
        self.out = out

    def _print(self, text: str) -> None:
        print(text, file=self.out or sys.stdout)

    def instruction(self, pc, code):
        self._print(f"PC: {pc}, Instruction: {code}")

    def fault(self, pc, code, error):
        self._print(f"Program terminated due to error at PC {pc} ({code}): {error}")

    def render(self, text):
        self._print(text)

    def halted(self, reason):
        self._print(f"Program halted: {reason.value}")


class RecordingSink(ExecutionSink):
    """Keeps every event in memory; used by the GUI status line and tests."""

    def __init__(self):
        self.events = []

    def instruction(self, pc, code):
        self.events.append(("instruction", pc, code))

    def fault(self, pc, code, error):
        self.events.append(("fault", pc, code, error))

    def render(self, text):
        self.events.append(("render", text))

    def halted(self, reason):
        self.events.append(("halted", reason))

    def of(self, kind: str):
        return [e for e in self.events if e[0] == kind]


def console_keyboard(prompt: str, reader: Optional[Callable[[str], str]] = None) -> str:
    """Read one line for READ_KEYBOARD; end of input counts as an empty line."""
    try:
        return (reader or input)(prompt)
    except EOFError:
        return ""
