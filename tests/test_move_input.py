import pytest

from tilebloom.errors import InputFormatError
from tilebloom.systems.move_input import format_trail, is_quit_command, parse_move_text


def test_parse_move_returns_row_col_positions():
    assert parse_move_text("{(1,2),(2,2),(3,3)}") == [(2, 1), (2, 2), (3, 3)]


def test_parse_move_ignores_whitespace():
    assert parse_move_text(" { (1, 2) ,(2,2),\t(3,3) }\n") == [(2, 1), (2, 2), (3, 3)]


def test_single_point_parses_and_is_left_to_the_validator():
    assert parse_move_text("{(4,4)}") == [(4, 4)]


@pytest.mark.parametrize(
    "text",
    [
        "",
        "{}",
        "(1,2),(2,2),(3,3)",
        "{(1,2)(2,2),(3,3)}",
        "{(1,2),(2,2),(3,3),}",
        "{(a,2),(2,2),(3,3)}",
        "{(1;2),(2,2),(3,3)}",
        "{[1,2],(2,2),(3,3)}",
        "{(1,2);(2,2),(3,3)}",
        "{(10,2),(2,2)}",
    ],
)
def test_malformed_moves_raise(text):
    with pytest.raises(InputFormatError) as excinfo:
        parse_move_text(text)
    assert excinfo.value.message == "Format of move is incorrect."


def test_quit_commands_match_exactly():
    assert is_quit_command("quit\n")
    assert is_quit_command("Quit")
    assert not is_quit_command("QUIT")
    assert not is_quit_command(" quit")


def test_format_trail_uses_player_coordinates():
    assert format_trail([(2, 1), (2, 2)]) == "{(1,2),(2,2)}"
