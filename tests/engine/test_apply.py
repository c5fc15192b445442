from __future__ import annotations

from consolechess.engine.board import Board
from consolechess.engine.piece import PieceKind
from consolechess.engine.position import Position


def sq(name: str) -> Position:
    return Position.from_algebraic(name)


def test_start_position_layout() -> None:
    b = Board.startpos()
    assert b.get_piece(sq("E1")).tag == "wK"
    assert b.get_piece(sq("D8")).tag == "bQ"
    assert b.get_piece(sq("A2")).tag == "wP"
    assert b.get_piece(sq("H7")).tag == "bP"
    assert b.get_piece(sq("E4")) is None
    assert len(list(b.pieces("w"))) == 16
    assert len(list(b.pieces("b"))) == 16
    assert b.captured_pieces == []
    assert not any(p.has_moved for p in b.pieces())


def test_start_position_has_no_checks() -> None:
    b = Board.startpos()
    assert not b.is_check("w")
    assert not b.is_check("b")
    assert not b.is_checkmate("w")
    assert not b.is_checkmate("b")


def test_pieces_know_their_squares() -> None:
    b = Board.startpos()
    for row in range(8):
        for column in range(8):
            piece = b.get_piece(Position(row, column))
            if piece is not None:
                assert piece.position == Position(row, column)


def test_move_pawn_e2_e4() -> None:
    b = Board.startpos()
    assert b.move_piece(sq("E2"), sq("E4")) is True
    pawn = b.get_piece(sq("E4"))
    assert pawn is not None
    assert pawn.kind is PieceKind.PAWN and pawn.color == "w"
    assert pawn.has_moved
    assert pawn.position == sq("E4")
    assert b.get_piece(sq("E2")) is None


def test_move_from_empty_square_fails_without_change() -> None:
    b = Board.startpos()
    before = b.snapshot()
    assert b.move_piece(sq("E4"), sq("E5")) is False
    assert b.snapshot() == before


def test_captures_recorded_in_order() -> None:
    b = Board.startpos()
    b.move_piece(sq("E2"), sq("E4"))
    b.move_piece(sq("D7"), sq("D5"))
    b.move_piece(sq("E4"), sq("D5"))  # exd5
    b.move_piece(sq("D8"), sq("D5"))  # Qxd5
    assert [p.tag for p in b.captured_pieces] == ["bP", "wP"]
    assert b.get_piece(sq("D5")).tag == "bQ"


def test_move_piece_does_not_check_legality() -> None:
    b = Board.startpos()
    # A rook cannot jump to the centre, but the board primitive does it anyway
    assert b.move_piece(sq("A1"), sq("D4"))
    assert b.get_piece(sq("D4")).tag == "wR"
    assert b.get_piece(sq("A1")) is None


def test_set_and_remove_piece() -> None:
    b = Board.empty()
    assert list(b.pieces()) == []
    rook = Board.startpos().get_piece(sq("A1"))
    b.set_piece(sq("C3"), rook)
    assert b.get_piece(sq("C3")) is rook
    assert rook.position == sq("C3")
    assert not rook.has_moved
    assert b.remove_piece(sq("C3")) is rook
    assert b.get_piece(sq("C3")) is None
    assert b.remove_piece(sq("C3")) is None


def test_find_king() -> None:
    b = Board.startpos()
    assert b.find_king("w") == sq("E1")
    assert b.find_king("b") == sq("E8")
    assert Board.empty().find_king("w") is None
