from __future__ import annotations

from pathlib import Path

import pytest

from tilebloom.constants import SAVE_HEADER
from tilebloom.errors import SaveFileCorrupt, SaveFileMissing
from tilebloom.events.bus import (
    EVENT_BOARD_INITIALIZED,
    EVENT_GAME_LOADED,
    EVENT_GAME_OVER,
    EVENT_GAME_SAVED,
    EVENT_QUIT_REQUESTED,
)
from tilebloom.systems.board_ops import cell_at, tile_grid
from tilebloom.systems.save_system import SaveSystem, decode_save, encode_save, read_save
from tilebloom.systems.turn_state_utils import get_or_create_session_state

from tests.helpers import make_game, paint, uniform_rows

ROWS = [
    "#rgbpyrg#",
    "rgbpyrgbp",
    "gbpyrgbpy",
    "bpyrgbpyr",
    "pyrgbpyrg",
    "#rgbpyrg#",
]
STAGES = [
    "001201200",
    "012012012",
    "120120120",
    "201201201",
    "012012012",
    "001201200",
]


def _valid_text(turns: str = "#7", score: str = "#120") -> str:
    columns = ["f0000f"] + ["000000"] * 7 + ["f0000f"]
    return "\n".join([SAVE_HEADER, score, turns, *columns]) + "\n"


def test_encode_uses_one_hex_digit_per_cell():
    bus, world, board = make_game()
    paint(world, uniform_rows('r'))
    session = get_or_create_session_state(world)
    session.score = 120
    session.turns_remaining = 7
    assert encode_save(world) == _valid_text()


def test_encode_maps_category_and_stage():
    bus, world, board = make_game()
    rows = uniform_rows('r')
    rows[1] = "rrrrpyrrr"
    stages = ["000000000"] * 6
    stages[1] = "000022000"
    paint(world, rows, stages)
    lines = encode_save(world).splitlines()
    # purple stage 2 -> 3*3+2 = 11, yellow stage 2 -> 3*4+2 = 14
    assert lines[3 + 4] == "0b0000"
    assert lines[3 + 5] == "0e0000"


def test_round_trip_preserves_board_and_counters():
    bus, world, board = make_game()
    paint(world, ROWS, STAGES)
    session = get_or_create_session_state(world)
    session.score = 4321
    session.turns_remaining = 3

    data = decode_save(encode_save(world))

    assert data.score == 4321 and data.turns_remaining == 3
    grid = tile_grid(world)
    for row in range(6):
        for col in range(9):
            cell = grid[row][col]
            expected = ('blocked', 0) if cell.blocked else (cell.type_name, cell.stage)
            assert data.layout[row][col] == expected


@pytest.mark.parametrize(
    "text",
    [
        "",
        "-JGRAPHFALL2021CULTICE SCORE\n#1\n#1\n",
        _valid_text().replace("#120", "120"),
        _valid_text().replace("#120", "#"),
        _valid_text().replace("#120", "#12a"),
        _valid_text(turns="#0"),
        _valid_text(turns="#11"),
        _valid_text(turns="#-1"),
        _valid_text().replace("f0000f\n000000", "f0000f\n00000", 1),
        _valid_text().replace("f0000f\n000000", "f0000f\n0000g0", 1),
        _valid_text().replace("f0000f\n000000", "f0000f\n00f000", 1),
        _valid_text().replace("f0000f\n000000", "00000f\n000000", 1),
        "\n".join(_valid_text().splitlines()[:-1]) + "\n",
    ],
)
def test_decode_rejects_malformed_saves(text):
    with pytest.raises(SaveFileCorrupt) as excinfo:
        decode_save(text)
    assert excinfo.value.message.startswith("Invalid savefile syntax")


def test_read_save_reports_missing_file(tmp_path):
    with pytest.raises(SaveFileMissing):
        read_save(Path(tmp_path) / "absent.txt")


def test_read_save_attaches_path(tmp_path):
    path = Path(tmp_path) / "bad.txt"
    path.write_text("not a save\n", encoding="utf-8")
    with pytest.raises(SaveFileCorrupt) as excinfo:
        read_save(path)
    assert excinfo.value.path == str(path)
    assert excinfo.value.line == 1


def test_load_restores_board_and_emits(tmp_path):
    path = Path(tmp_path) / "game.sav"
    path.write_text(_valid_text(), encoding="utf-8")
    bus, world, board = make_game()
    system = SaveSystem(world, bus, save_path=path)
    initialized, loaded = {}, {}
    bus.subscribe(EVENT_BOARD_INITIALIZED, lambda s, **k: initialized.update(k))
    bus.subscribe(EVENT_GAME_LOADED, lambda s, **k: loaded.update(k))

    assert system.load() is True

    session = get_or_create_session_state(world)
    assert session.score == 120 and session.turns_remaining == 7
    assert cell_at(world, 2, 4).type_name == 'red' and cell_at(world, 2, 4).active
    assert initialized == {"source": "save"}
    assert loaded == {"path": str(path)}


def test_load_missing_file_starts_fresh(tmp_path):
    bus, world, board = make_game()
    system = SaveSystem(world, bus, save_path=Path(tmp_path) / "new.sav")
    assert system.load() is False
    assert SaveSystem(world, bus).load() is False


def test_corrupt_save_leaves_state_untouched(tmp_path):
    path = Path(tmp_path) / "game.sav"
    path.write_text(_valid_text().replace(SAVE_HEADER, "WRONG HEADER"), encoding="utf-8")
    bus, world, board = make_game()
    paint(world, ROWS, STAGES)
    before = tile_grid(world)
    system = SaveSystem(world, bus, save_path=path)

    with pytest.raises(SaveFileCorrupt):
        system.load()

    assert tile_grid(world) == before
    assert get_or_create_session_state(world).turns_remaining == 10


def test_quit_writes_the_save(tmp_path):
    path = Path(tmp_path) / "game.sav"
    bus, world, board = make_game()
    paint(world, ROWS, STAGES)
    SaveSystem(world, bus, save_path=path)
    saved = {}
    bus.subscribe(EVENT_GAME_SAVED, lambda s, **k: saved.update(k))

    bus.emit(EVENT_QUIT_REQUESTED)

    assert saved == {"path": str(path)}
    assert path.read_text(encoding="utf-8") == encode_save(world)


def test_game_over_replaces_save_with_note(tmp_path):
    path = Path(tmp_path) / "game.sav"
    path.write_text(_valid_text(), encoding="utf-8")
    bus, world, board = make_game()
    SaveSystem(world, bus, save_path=path)

    bus.emit(EVENT_GAME_OVER, score=77)

    assert path.read_text(encoding="utf-8") == "SAVE COMPLETE, GAME OVER\nSCORE: 77\n"
