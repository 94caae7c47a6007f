import pytest

from hexcpu.memory import MEM_SIZE, Memory, ProgramStore, words_from_bytes


def test_words_from_bytes_big_endian():
    assert words_from_bytes(bytes([0x12, 0x34, 0xAB, 0xCD])) == [0x1234, 0xABCD]


def test_trailing_odd_byte_is_dropped():
    assert words_from_bytes(bytes([0x12, 0x34, 0x56])) == [0x1234]
    assert words_from_bytes(b"") == []


def test_data_store_read_write():
    ram = Memory()
    assert ram.size == MEM_SIZE
    assert ram.write(10, 123)
    assert ram.read(10) == 123


@pytest.mark.parametrize("addr", [-1, MEM_SIZE, MEM_SIZE + 100, -4096])
def test_out_of_range_reads_zero_and_writes_are_dropped(addr):
    ram = Memory()
    ram.write(0, 1)
    ram.write(MEM_SIZE - 1, 2)
    assert ram.write(addr, 99) is False
    assert ram.read(addr) == 0
    assert ram.read(0) == 1 and ram.read(MEM_SIZE - 1) == 2


def test_program_store_is_write_protected_by_default():
    rom = ProgramStore()
    assert rom.writable is False
    assert rom.write(5, 0x1234) is False
    assert rom.read(5) == 0


def test_program_store_write_after_enabling():
    rom = ProgramStore()
    rom.write(5, 0x1234)
    rom.writable = True
    assert rom.write(5, 0x1234) is True
    assert rom.read(5) == 0x1234


def test_load_bytes_resets_pc_and_keeps_untouched_slots():
    rom = ProgramStore()
    rom.load_words([0x1111, 0x2222, 0x3333])
    rom.pc = 7
    assert rom.load_bytes(bytes([0xA0, 0x64, 0xFF])) == 1
    assert rom.pc == 0
    assert rom.read(0) == 0xA064
    assert rom.read(1) == 0x2222


def test_load_program_from_file(tmp_path):
    path = tmp_path / "prog.bin"
    path.write_bytes(bytes([0x00, 0x48, 0xF0, 0x00]))
    rom = ProgramStore()
    assert rom.load_program(path) == 2
    assert rom.hex_instruction(0) == "0048"
    assert rom.hex_instruction(1) == "F000"


def test_load_words_truncates_at_end_of_store():
    rom = ProgramStore()
    assert rom.load_words([1, 2, 3], start=MEM_SIZE - 2) == 2
    assert rom.read(MEM_SIZE - 1) == 2


def test_pc_helpers():
    rom = ProgramStore()
    rom.increment_pc()
    rom.increment_pc()
    assert rom.pc == 2
    rom.set_pc(100)
    assert rom.pc == 100


def test_dump_and_clear():
    ram = Memory()
    ram.write(1, 9)
    assert ram.dump(0, 3) == [0, 9, 0]
    ram.clear()
    assert ram.read(1) == 0
