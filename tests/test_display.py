import threading

from hexcpu.display import Display


def test_initialized_with_spaces():
    d = Display()
    assert d.frame_buffer() == [32]*64


def test_coordinate_and_linear_addressing_agree():
    d = Display()
    d.write_char(3, 2, 65)
    assert d.read_linear(2*8 + 3) == 65
    d.write_linear(63, 66)
    assert d.read_char(7, 7) == 66


def test_out_of_range_is_soft():
    d = Display()
    d.write_char(8, 0, 65)
    d.write_char(0, -1, 65)
    d.write_linear(64, 65)
    assert d.frame_buffer() == [32]*64
    assert d.read_char(8, 8) == 0
    assert d.read_linear(-1) == 0


def test_coordinate_conversion():
    assert Display.coords_to_index(1, 1) == 9
    assert Display.coords_to_index(8, 1) == -1
    assert Display.index_to_coords(9) == (1, 1)
    assert Display.index_to_coords(64) == (-1, -1)


def test_render_border_and_unprintables():
    d = Display()
    d.write_char(0, 0, 72)
    d.write_char(1, 0, 200)
    d.write_char(2, 0, 10)
    lines = d.render().splitlines()
    assert lines[0] == "┌────────┐"
    assert lines[1] == "│H??     │"
    assert lines[-1] == "└────────┘"
    assert len(lines) == 10


def test_set_frame_buffer_requires_64_cells():
    d = Display()
    assert d.set_frame_buffer([65]*10) is False
    assert d.set_frame_buffer([65]*64) is True
    assert d.rows()[0] == "AAAAAAAA"
    d.clear()
    assert d.frame_buffer() == [32]*64


def test_render_while_another_thread_writes():
    d = Display()
    done = threading.Event()

    def writer():
        for i in range(5000):
            d.write_char(i % 8, (i // 8) % 8, 65 + i % 26)
            d.write_linear(i % 64, 200 if i % 3 else 48)
        done.set()

    frames = []
    t = threading.Thread(target=writer)
    t.start()
    while not done.is_set():
        frames.append(d.render())
    t.join()
    frames.append(d.render())

    for frame in frames:
        lines = frame.splitlines()
        assert len(lines) == 10
        assert all(len(line) == 10 for line in lines)
