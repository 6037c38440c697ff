import pytest

from stackconquer_cpu import board
from stackconquer_cpu.types import PLACE_STONE


def test_padded_board_frame():
    cells = board.padded_board(2, 1, padding=1, pad_marker="-")
    assert cells == [
        "-", "-", "-", "-",
        "-", "", "", "-",
        "-", "-", "-", "-",
    ]


def test_index_of():
    cols = board.row_length(5, 5)
    assert cols == 15
    assert board.index_of(6, 7, cols) == 97


def test_index_rejects_out_of_row():
    with pytest.raises(ValueError):
        board.index_of(0, 4, 4)


def test_tower_helpers():
    assert board.tower_height(board.EMPTY) == 0
    assert board.tower_height("-") == 0
    assert board.tower_height("122") == 3
    assert not board.is_playable("#", "#", "-")
    assert board.is_playable("1", "#", "-")


def test_place_stone_sentinel_is_reexported():
    assert board.PLACE_STONE == PLACE_STONE == -1
