import main


def write(tmp_path, data):
    path = tmp_path / "prog.bin"
    path.write_bytes(bytes(data))
    return str(path)


def test_run_program_ok(tmp_path, capsys):
    path = write(tmp_path, [0x00, 0x48, 0xF0, 0x00, 0x00, 0x00])
    assert main.main([path, "--trace", "--no-timer"]) == 0
    out = capsys.readouterr().out
    assert "PC: 1, Instruction: F000" in out
    assert "│H       │" in out


def test_fault_exit_status(tmp_path):
    path = write(tmp_path, [0x50, 0x01])
    assert main.main([path, "--no-timer"]) == 1


def test_missing_file(tmp_path):
    assert main.main([str(tmp_path / "nope.bin"), "--no-timer"]) == 2


def test_prompts_for_path(tmp_path, monkeypatch):
    path = write(tmp_path, [0xA0, 0x64])
    monkeypatch.setattr("builtins.input", lambda prompt: path)
    assert main.main(["--no-timer"]) == 0


def test_max_steps(tmp_path):
    path = write(tmp_path, [0x50, 0x00])
    assert main.main([path, "--no-timer", "--max-steps", "5"]) == 0
