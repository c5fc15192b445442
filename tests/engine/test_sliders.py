from __future__ import annotations

from consolechess.engine.position import Position


def moves_at(b, square: str) -> set[str]:
    piece = b.get_piece(Position.from_algebraic(square))
    return {str(p) for p in piece.possible_moves(b.squares)}


def test_rook_basic_moves(build_board) -> None:
    b = build_board({"A1": "wR"})
    ms = moves_at(b, "A1")
    assert len(ms) == 14
    assert {"A2", "A8", "B1", "H1"}.issubset(ms)


def test_rook_stops_at_friend_and_takes_enemy(build_board) -> None:
    b = build_board({"D4": "wR", "D6": "wP", "F4": "bP"})
    ms = moves_at(b, "D4")
    assert "D5" in ms
    assert "D6" not in ms and "D7" not in ms
    assert "F4" in ms
    assert "G4" not in ms and "H4" not in ms


def test_bishop_basic_moves(build_board) -> None:
    b = build_board({"C1": "wB"})
    assert moves_at(b, "C1") == {"B2", "A3", "D2", "E3", "F4", "G5", "H6"}


def test_bishop_never_slides_through_pieces(build_board) -> None:
    b = build_board({"C1": "wB", "E3": "bN", "B2": "wP"})
    assert moves_at(b, "C1") == {"D2", "E3"}


def test_queen_is_union_of_rook_and_bishop(build_board) -> None:
    layout = {"D4": "wQ", "D7": "bP", "B6": "wP", "G4": "wN", "F2": "bB"}
    b = build_board(layout)
    queen = moves_at(b, "D4")

    as_rook = build_board({**layout, "D4": "wR"})
    as_bishop = build_board({**layout, "D4": "wB"})
    assert queen == moves_at(as_rook, "D4") | moves_at(as_bishop, "D4")
    assert "D7" in queen and "D8" not in queen
    assert "B6" not in queen and "C5" in queen
    assert "G4" not in queen and "F4" in queen
    assert "F2" in queen and "G1" not in queen


def test_sliders_include_first_blocker_only_if_enemy(build_board) -> None:
    for tag in ("wR", "wB", "wQ"):
        b = build_board({"D4": tag, "D6": "bP", "F6": "bP", "B4": "wP", "B2": "wP"})
        ms = moves_at(b, "D4")
        if tag in ("wR", "wQ"):
            assert "D6" in ms and "D7" not in ms
            assert "B4" not in ms and "A4" not in ms and "C4" in ms
        if tag in ("wB", "wQ"):
            assert "F6" in ms and "G7" not in ms
            assert "B2" not in ms and "A1" not in ms and "C3" in ms
