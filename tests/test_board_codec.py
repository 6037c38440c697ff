import pytest

from stackconquer_cpu import board, board_codec


def test_encode_is_compact_and_row_major():
    assert board_codec.encode(["", "1", "22", "-"]) == '["","1","22","-"]'


def test_encode_is_deterministic():
    snapshot = board.padded_board(5, 5, padding=5, pad_marker="-")
    snapshot[82] = "12"
    first = board_codec.encode(snapshot)
    second = board_codec.encode(list(snapshot))
    assert first == second
    assert first.encode("utf-8") == second.encode("utf-8")


def test_encode_keeps_non_ascii_markers():
    assert board_codec.encode(["·", ""]) == '["·",""]'


def test_encode_rejects_unsupported_cells():
    with pytest.raises(board_codec.BoardCodecError):
        board_codec.encode(["", None])
    with pytest.raises(board_codec.BoardCodecError):
        board_codec.encode([True])


def test_decode_reverses_encode():
    snapshot = ["", "1", "#", "-"]
    assert board_codec.decode(board_codec.encode(snapshot)) == snapshot


def test_decode_rejects_non_array():
    with pytest.raises(board_codec.BoardCodecError):
        board_codec.decode('{"a": 1}')
    with pytest.raises(board_codec.BoardCodecError):
        board_codec.decode("[1,")


def test_encode_moves():
    assert board_codec.encode_moves(None) == "[]"
    assert board_codec.encode_moves([(-1, 1, 81), [83, 2, 82]]) == "[[-1,1,81],[83,2,82]]"
    with pytest.raises(board_codec.BoardCodecError):
        board_codec.encode_moves([[1, 2]])
