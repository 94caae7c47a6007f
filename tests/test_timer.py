import threading
import time

from hexcpu.dispatcher import create_instruction
from hexcpu.display import Display
from hexcpu.memory import Memory, ProgramStore
from hexcpu.registers import Registers
from hexcpu.timer import CountdownTimer


def test_tick_decrements_until_zero():
    reg = Registers()
    reg.t = 2
    timer = CountdownTimer(reg)
    seen = []
    for _ in range(5):
        timer.tick()
        seen.append(reg.t)
    assert seen == [1, 0, 0, 0, 0]


def test_render_every_sixtieth_tick():
    renders = []
    timer = CountdownTimer(Registers(), on_render=lambda: renders.append(1))
    for _ in range(59):
        timer.tick()
    assert renders == []
    timer.tick()
    assert renders == [1]
    for _ in range(60):
        timer.tick()
    assert len(renders) == 2


def test_start_stop_idempotent():
    timer = CountdownTimer(Registers(), interval=0.001)
    timer.stop()
    timer.start()
    thread = timer._thread
    timer.start()
    assert timer._thread is thread
    assert timer.running
    timer.stop()
    timer.stop()
    assert not timer.running


def test_background_thread_counts_down():
    reg = Registers()
    reg.t = 5
    with CountdownTimer(reg, interval=0.001):
        deadline = time.monotonic() + 2.0
        while reg.t > 0 and time.monotonic() < deadline:
            time.sleep(0.005)
    assert reg.t == 0


def test_t_is_non_increasing_while_running():
    reg = Registers()
    reg.t = 40
    values = []
    with CountdownTimer(reg, interval=0.001):
        deadline = time.monotonic() + 0.2
        while time.monotonic() < deadline:
            values.append(reg.t)
    assert all(a >= b for a, b in zip(values, values[1:]))


def test_stop_does_not_wait_for_slow_render():
    def slow_render():
        time.sleep(5)

    timer = CountdownTimer(Registers(), on_render=slow_render,
                           interval=0.001, render_every=1)
    timer.start()
    time.sleep(0.05)
    started = time.monotonic()
    timer.stop(timeout=0.1)
    assert time.monotonic() - started < 1.0


def test_restart_after_timed_out_stop_runs_one_thread():
    first_render = threading.Event()
    renderers = set()

    def render():
        if not first_render.is_set():
            first_render.set()
            time.sleep(0.3)
            return
        renderers.add(threading.get_ident())

    timer = CountdownTimer(Registers(), on_render=render,
                           interval=0.001, render_every=1)
    timer.start()
    assert first_render.wait(1.0)
    timer.stop(timeout=0.01)
    timer.start()
    time.sleep(0.6)
    timer.stop()
    # the thread left behind must exit once its slow render returns
    assert len(renderers) == 1


def test_set_t_and_read_t_race_the_timer():
    reg, rom, ram, display = Registers(), ProgramStore(), Memory(), Display()

    def execute(code):
        create_instruction(code, reg, rom, ram, display).execute()

    windows = []
    with CountdownTimer(reg, interval=0.0005):
        for value in (0xFF, 0x80, 0x10, 0x03):
            execute(f"B0{value:02X}")
            seen = []
            for _ in range(200):
                execute("C100")
                seen.append(reg[1])
            windows.append((value, seen))

    for value, seen in windows:
        assert all(0 <= t <= 0xFF for t in seen)
        assert seen[0] <= value
        assert all(a >= b for a, b in zip(seen, seen[1:]))
