import pytest

from hexcpu.assembler import assemble, assemble_line, disassemble, to_bytes


@pytest.mark.parametrize("line,word", [
    ("STORE r0, 72", 0x0048),
    ("ADD r0, r1, r2", 0x1012),
    ("SUBTRACT r3, r4, r5", 0x2345),
    ("READ r1", 0x3100),
    ("WRITE r2", 0x4200),
    ("JUMP 0x010", 0x5010),
    ("READ_KEYBOARD r4", 0x6400),
    ("SWITCH_MEMORY", 0x7000),
    ("SKIP_EQUAL r1, r2", 0x8120),
    ("SKIP_NOT_EQUAL r1, r2", 0x9120),
    ("SET_A 100", 0xA064),
    ("SET_T 60", 0xB03C),
    ("READ_T r5", 0xC500),
    ("CONVERT_TO_BASE_TEN r2", 0xD200),
    ("CONVERT_BYTE_TO_ASCII r1, r2", 0xE120),
    ("DRAW r0, 2, 5", 0xF025),
    ("halt", 0x0000),
    (".word 0xBEEF", 0xBEEF),
    ("  set_a 0x64   ; comment", 0xA064),
])
def test_assemble_line(line, word):
    assert assemble_line(line) == word


@pytest.mark.parametrize("line", [
    "NOPE r1", "STORE r0", "STORE r0, 256", "ADD r0, r1, r8", "DRAW r0, 16, 0",
    "JUMP 0x1000", "READ 3",
])
def test_assemble_line_rejects(line):
    with pytest.raises(ValueError):
        assemble_line(line)


def test_assemble_listing_reports_line_numbers():
    with pytest.raises(ValueError, match="line 3"):
        assemble("SET_A 1\n; note\nBAD\n")


def test_assemble_skips_blank_and_comment_lines():
    assert assemble("\n; hi\nSET_A 1\n\nHALT\n") == [0xA001, 0]


def test_to_bytes_big_endian():
    assert to_bytes([0x0048, 0xF000, 0]) == bytes([0x00, 0x48, 0xF0, 0x00, 0x00, 0x00])


@pytest.mark.parametrize("word,text", [
    (0x0000, "HALT"),
    (0x0048, "STORE r0, 72"),
    (0x1012, "ADD r0, r1, r2"),
    (0x5010, "JUMP 0x010"),
    (0x7000, "SWITCH_MEMORY"),
    (0xB03C, "SET_T 60"),
    (0xF025, "DRAW r0, 2, 5"),
])
def test_disassemble(word, text):
    assert disassemble(word) == text
    assert assemble_line(text) == word
