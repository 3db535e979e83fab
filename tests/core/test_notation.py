"""Tests for FEN and SAN notation."""

import pytest

from knightcore.core.board import Board
from knightcore.core.enums import Color, PieceType
from knightcore.core.errors import FormatError, IllegalMoveError
from knightcore.core.move import Move
from knightcore.core.move_validator import MoveValidator
from knightcore.core.notation import (
    STARTING_FEN,
    board_from_fen,
    board_to_fen,
    move_to_san,
    parse_san,
)
from knightcore.core.piece import Piece
from knightcore.core.position import Position


def sq(label: str) -> Position:
    return Position.from_label(label)


class TestFenParsing:
    def test_starting_side(self) -> None:
        board = board_from_fen(STARTING_FEN)
        assert board.side_to_move == Color.WHITE

    def test_starting_equals_initial(self) -> None:
        assert board_from_fen(STARTING_FEN) == Board.initial()

    def test_starting_kings(self) -> None:
        board = board_from_fen(STARTING_FEN)
        assert board[sq("e1")] == Piece(PieceType.KING, Color.WHITE)
        assert board[sq("e8")] == Piece(PieceType.KING, Color.BLACK)

    def test_en_passant_square(self) -> None:
        fen = "rnbqkbnr/pppppppp/8/8/4P3/8/PPPP1PPP/RNBQKBNR b KQkq e3 0 1"
        board = Board.decode(fen)
        assert board.en_passant == sq("e3")

    def test_partial_castling(self) -> None:
        board = board_from_fen("r3k2r/8/8/8/8/8/8/R3K2R w Kq - 0 1")
        assert board.can_castle_kingside(Color.WHITE)
        assert not board.can_castle_queenside(Color.WHITE)
        assert not board.can_castle_kingside(Color.BLACK)
        assert board.can_castle_queenside(Color.BLACK)

    def test_no_castling(self) -> None:
        board = board_from_fen("4k3/8/8/8/8/8/8/4K3 w - - 0 1")
        assert not board.can_castle_kingside(Color.WHITE)
        assert not board.can_castle_queenside(Color.BLACK)

    def test_four_fields_default_clocks(self) -> None:
        board = board_from_fen("4k3/8/8/8/8/8/8/4K3 b - -")
        assert board.halfmove_clock == 0
        assert board.fullmove_number == 1
        assert board.side_to_move == Color.BLACK

    def test_five_fields(self) -> None:
        board = board_from_fen("4k3/8/8/8/8/8/8/4K3 w - - 17")
        assert board.halfmove_clock == 17
        assert board.fullmove_number == 1

    def test_clocks(self) -> None:
        board = board_from_fen("4k3/8/8/8/8/8/8/4K3 w - - 42 87")
        assert board.halfmove_clock == 42
        assert board.fullmove_number == 87

    def test_decoded_pieces_unmoved(self) -> None:
        board = board_from_fen(STARTING_FEN)
        assert not any(board[p].has_moved for p in board.pieces(Color.WHITE))

    def test_history_empty(self) -> None:
        assert board_from_fen(STARTING_FEN).history == []

    def test_en_passant_for_black(self) -> None:
        board = board_from_fen("4k3/8/8/8/3Pp3/8/8/4K3 b - d3 0 1")
        assert board.en_passant == sq("d3")

    def test_bad_en_passant_cannot_remove_own_pawn(self) -> None:
        with pytest.raises(FormatError):
            board_from_fen("4k3/8/8/8/8/8/3PP3/4K3 w - e3 0 1")

    @pytest.mark.parametrize(
        "fen",
        [
            "",
            "rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBNR w KQkq",
            "rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP w KQkq - 0 1",
            "rnbqkbnr/pppppppp/9/8/8/8/PPPPPPPP/RNBQKBNR w KQkq - 0 1",
            "rnbqkbnr/pppppppp/7/8/8/8/PPPPPPPP/RNBQKBNR w KQkq - 0 1",
            "rnbqkbnr/ppppppppp/8/8/8/8/PPPPPPPP/RNBQKBNR w KQkq - 0 1",
            "rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBNX w KQkq - 0 1",
            "rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBNR x KQkq - 0 1",
            "rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBNR w KQkx - 0 1",
            "rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBNR w KKkq - 0 1",
            "rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBNR w KQkq e9 0 1",
            "rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBNR w KQkq - -1 1",
            "rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBNR w KQkq - 0 zero",
            "8/8/8/8/8/8/8/²K2k3 w - - 0 1",
            "4k3/8/8/8/8/8/8/4K3 w - - +5 1",
            "4k3/8/8/8/8/8/8/4K3 w - - 0 ٣",
            # en-passant target on the wrong rank for the side to move
            "4k3/8/8/8/8/8/3PP3/4K3 w - e3 0 1",
            "4k3/8/8/4p3/8/8/8/4K3 b - e6 0 1",
            # no enemy pawn behind the target, or the target is occupied
            "4k3/8/8/8/8/8/8/4K3 w - e6 0 1",
            "4k3/8/8/4P3/8/8/8/4K3 w - e6 0 1",
            "4k3/8/4n3/4p3/8/8/8/4K3 w - e6 0 1",
        ],
    )
    def test_malformed(self, fen: str) -> None:
        with pytest.raises(FormatError):
            board_from_fen(fen)


class TestFenSerialization:
    def test_starting_round_trip(self) -> None:
        assert board_to_fen(board_from_fen(STARTING_FEN)) == STARTING_FEN

    @pytest.mark.parametrize(
        "fen",
        [
            "r3k2r/p1ppqpb1/bn2pnp1/3PN3/1p2P3/2N2Q1p/PPPBBPPP/R3K2R w KQkq - 0 1",
            "8/2p5/3p4/KP5r/1R3p1k/8/4P1P1/8 w - - 0 1",
            "rnbqkbnr/ppp1pppp/8/3pP3/8/8/PPPP1PPP/RNBQKBNR w KQkq d6 0 3",
            "4k3/8/8/8/8/8/8/4K3 b - - 99 120",
        ],
    )
    def test_round_trip(self, fen: str) -> None:
        board = Board.decode(fen)
        assert board.encode() == fen
        assert Board.decode(board.encode()) == board

    def test_round_trip_after_moves(self, validator: MoveValidator) -> None:
        board = Board.initial()
        for label in ("e2e4", "c7c5", "g1f3", "d7d6", "f1b5", "c8d7", "e1g1"):
            validator.apply(board, Move.from_label(label))
        assert Board.decode(board.encode()) == board

    def test_four_field_input_encodes_six(self) -> None:
        board = board_from_fen("4k3/8/8/8/8/8/8/4K3 w - -")
        assert board.encode() == "4k3/8/8/8/8/8/8/4K3 w - - 0 1"


class TestSanGeneration:
    def test_pawn_push(self, validator: MoveValidator) -> None:
        board = Board.initial()
        assert move_to_san(board, Move.from_label("e2e4"), validator) == "e4"

    def test_knight_move(self, validator: MoveValidator) -> None:
        board = Board.initial()
        assert move_to_san(board, Move.from_label("g1f3"), validator) == "Nf3"

    def test_pawn_capture(self, validator: MoveValidator) -> None:
        board = Board.decode("rnbqkbnr/ppp1pppp/8/3p4/4P3/8/PPPP1PPP/RNBQKBNR w KQkq d6 0 2")
        assert move_to_san(board, Move.from_label("e4d5"), validator) == "exd5"

    def test_en_passant(self, validator: MoveValidator) -> None:
        board = Board.decode("rnbqkbnr/ppp1pppp/8/3pP3/8/8/PPPP1PPP/RNBQKBNR w KQkq d6 0 3")
        assert move_to_san(board, Move.from_label("e5d6"), validator) == "exd6"

    def test_piece_capture(self, validator: MoveValidator) -> None:
        board = Board.decode("4k3/8/8/3p4/8/8/8/3QK3 w - - 0 1")
        assert move_to_san(board, Move.from_label("d1d5"), validator) == "Qxd5"

    def test_castling(self, validator: MoveValidator) -> None:
        board = Board.decode("r3k2r/8/8/8/8/8/8/R3K2R w KQkq - 0 1")
        assert move_to_san(board, Move.from_label("e1g1"), validator) == "O-O"
        assert move_to_san(board, Move.from_label("e1c1"), validator) == "O-O-O"

    def test_castling_has_no_check_suffix(self, validator: MoveValidator) -> None:
        # Rook lands on f1 and checks the king on f8.
        board = Board.decode("5k2/8/8/8/8/8/8/4K2R w K - 0 1")
        assert move_to_san(board, Move.from_label("e1g1"), validator) == "O-O"

    def test_promotion(self, validator: MoveValidator) -> None:
        board = Board.decode("8/4P3/8/8/8/8/k7/4K3 w - - 0 1")
        assert move_to_san(board, Move.from_label("e7e8q"), validator) == "e8=Q"
        assert move_to_san(board, Move.from_label("e7e8n"), validator) == "e8=N"

    def test_check_suffix(self, validator: MoveValidator) -> None:
        board = Board.decode("4k3/8/8/8/8/8/8/R3K3 w Q - 0 1")
        assert move_to_san(board, Move.from_label("a1a8"), validator) == "Ra8+"

    def test_mate_suffix(self, validator: MoveValidator) -> None:
        board = Board.decode("6k1/5ppp/8/8/8/8/8/R5K1 w - - 0 1")
        assert move_to_san(board, Move.from_label("a1a8"), validator) == "Ra8#"

    def test_disambiguation_by_file(self, validator: MoveValidator) -> None:
        board = Board.decode("4k3/8/8/8/8/8/4K3/R6R w - - 0 1")
        assert move_to_san(board, Move.from_label("a1d1"), validator) == "Rad1"

    def test_disambiguation_by_rank(self, validator: MoveValidator) -> None:
        board = Board.decode("4k3/R7/8/8/8/8/8/R3K3 w - - 0 1")
        assert move_to_san(board, Move.from_label("a1a4"), validator) == "R1a4"

    def test_illegal_move_rejected(self, validator: MoveValidator) -> None:
        with pytest.raises(IllegalMoveError):
            move_to_san(Board.initial(), Move.from_label("e2e5"), validator)


class TestSanParsing:
    def test_pawn_push(self, validator: MoveValidator) -> None:
        move = parse_san(Board.initial(), "e4", validator)
        assert move.label == "e2e4"

    def test_knight(self, validator: MoveValidator) -> None:
        assert parse_san(Board.initial(), "Nf3", validator).label == "g1f3"

    def test_castling(self, validator: MoveValidator) -> None:
        board = Board.decode("r3k2r/8/8/8/8/8/8/R3K2R w KQkq - 0 1")
        assert parse_san(board, "O-O", validator).is_castle
        assert parse_san(board, "O-O-O", validator).to_pos == sq("c1")

    def test_promotion(self, validator: MoveValidator) -> None:
        board = Board.decode("8/4P3/8/8/8/8/k7/4K3 w - - 0 1")
        move = parse_san(board, "e8=R", validator)
        assert move.promotion == PieceType.ROOK

    def test_disambiguated(self, validator: MoveValidator) -> None:
        board = Board.decode("4k3/8/8/8/8/8/4K3/R6R w - - 0 1")
        assert parse_san(board, "Rhf1", validator).from_pos == sq("h1")

    def test_ambiguous(self, validator: MoveValidator) -> None:
        board = Board.decode("4k3/8/8/8/8/8/4K3/R6R w - - 0 1")
        with pytest.raises(IllegalMoveError):
            parse_san(board, "Rf1", validator)

    def test_illegal(self, validator: MoveValidator) -> None:
        with pytest.raises(IllegalMoveError):
            parse_san(Board.initial(), "e5", validator)

    @pytest.mark.parametrize("san", ["", "Z", "Nz9", "Nabcf3"])
    def test_unreadable(self, validator: MoveValidator, san: str) -> None:
        with pytest.raises(FormatError):
            parse_san(Board.initial(), san, validator)

    def test_suffixes_ignored(self, validator: MoveValidator) -> None:
        board = Board.decode("6k1/5ppp/8/8/8/8/8/R5K1 w - - 0 1")
        assert parse_san(board, "Ra8#", validator).to_pos == sq("a8")
