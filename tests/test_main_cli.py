import io
from pathlib import Path

import pytest

from tilebloom.constants import SAVE_HEADER
from tilebloom.main import main


@pytest.fixture(autouse=True)
def no_render(monkeypatch):
    monkeypatch.setenv("TILEBLOOM_RENDER", "0")
    monkeypatch.setenv("TILEBLOOM_SEED", "5")


@pytest.mark.parametrize("argv", [["-x"], ["a", "b"], ["-s"], ["extra"]])
def test_bad_arguments_exit_minus_one(argv):
    out = io.StringIO()
    assert main(argv, input_stream=io.StringIO("quit\n"), output=out) == -1
    assert "usage: tilebloom" in out.getvalue()


def test_quit_without_save_file():
    out = io.StringIO()
    assert main([], input_stream=io.StringIO("quit\n"), output=out) == 0
    assert "Provide next move in the format" in out.getvalue()


def test_quit_writes_new_save(tmp_path):
    path = Path(tmp_path) / "game.sav"
    assert main(["-s", str(path)], input_stream=io.StringIO("quit\n"), output=io.StringIO()) == 0
    lines = path.read_text(encoding="utf-8").splitlines()
    assert lines[0] == SAVE_HEADER
    assert lines[1:3] == ["#0", "#10"]
    assert len(lines) == 3 + 9


def test_saved_game_is_resumed(tmp_path):
    path = Path(tmp_path) / "game.sav"
    columns = ["f0000f"] + ["000000"] * 7 + ["f0000f"]
    path.write_text("\n".join([SAVE_HEADER, "#250", "#4", *columns]) + "\n", encoding="utf-8")

    assert main(["-s", str(path)], input_stream=io.StringIO("quit\n"), output=io.StringIO()) == 0

    lines = path.read_text(encoding="utf-8").splitlines()
    assert lines[1:] == ["#250", "#4", *columns]


def test_corrupt_save_exits_one(tmp_path):
    path = Path(tmp_path) / "game.sav"
    path.write_text("-WRONG HEADER-\n#1\n#1\n", encoding="utf-8")
    out = io.StringIO()
    assert main(["-s", str(path)], input_stream=io.StringIO("quit\n"), output=out) == 1
    assert out.getvalue() == "Error reading file; Invalid savefile syntax.\n"
    assert path.read_text(encoding="utf-8") == "-WRONG HEADER-\n#1\n#1\n"


def test_bad_configuration_exits_minus_one(monkeypatch):
    monkeypatch.setenv("TILEBLOOM_SEED", "not-a-number")
    assert main([], input_stream=io.StringIO("quit\n"), output=io.StringIO()) == -1


def test_missing_renderer_exits_two(monkeypatch):
    monkeypatch.setenv("TILEBLOOM_RENDER", "1")
    monkeypatch.setenv("TILEBLOOM_JGRAPH", "tilebloom-missing-jgraph")
    assert main([], input_stream=io.StringIO("quit\n"), output=io.StringIO()) == 2
