"""Entry point for the hex microcomputer simulator.
Run `python main.py program.bin` for a console run, or `python main.py --gui`
to launch the PySide6 front-end."""
import argparse
import logging
import sys

from hexcpu.console import ConsoleSink, LoggingSink, console_keyboard
from hexcpu.cpu_core import CPU
from hexcpu.timer import TIMER_HZ


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(description="16-bit hex microcomputer simulator")
    p.add_argument("program", nargs="?", help="binary program image")
    p.add_argument("--gui", action="store_true", help="open the PySide6 window")
    p.add_argument("--writable-rom", action="store_true",
                   help="allow WRITE to the program store")
    p.add_argument("--max-steps", type=int, default=None,
                   help="stop after this many instructions")
    p.add_argument("--no-timer", action="store_true",
                   help="do not run the countdown timer thread")
    p.add_argument("--trace", action="store_true",
                   help="print every instruction instead of logging it")
    p.add_argument("--log-level", default="INFO",
                   choices=["DEBUG", "INFO", "WARNING", "ERROR"])
    return p


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(level=args.log_level,
                        format="%(asctime)s %(levelname)s %(name)s: %(message)s")

    if args.gui:
        from hexcpu_gui.main_window import run
        return run(args.program)

    path = args.program or console_keyboard("Type in the path to the rom file: ")
    cpu = CPU(sink=ConsoleSink() if args.trace else LoggingSink(),
              timer_interval=None if args.no_timer else 1.0 / TIMER_HZ)
    cpu.rom.writable = args.writable_rom
    try:
        cpu.load_program(path)
    except OSError as e:
        logging.error("cannot load %s: %s", path, e)
        return 2

    cpu.run(max_steps=args.max_steps)
    return 1 if cpu.fault is not None else 0


if __name__ == "__main__":
    sys.exit(main())
