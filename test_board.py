import pytest

from loa.board import INITIAL_PIECES, Board, initial_board
from loa.moves import InvalidSquareError, Move
from loa.types import DIRECTIONS, M, Piece

E, B, W = Piece.EMPTY, Piece.BLACK, Piece.WHITE

# Legal black moves from the standard position, in enumeration order
INITIAL_BLACK_MOVES = [
    "b1-b3", "b1-d3", "b1-h1",
    "c1-c3", "c1-e3", "c1-a3",
    "d1-d3", "d1-f3", "d1-b3",
    "e1-e3", "e1-g3", "e1-c3",
    "f1-f3", "f1-h3", "f1-d3",
    "g1-g3", "g1-a1", "g1-e3",
    "b8-h8", "b8-d6", "b8-b6",
    "c8-e6", "c8-c6", "c8-a6",
    "d8-f6", "d8-d6", "d8-b6",
    "e8-g6", "e8-e6", "e8-c6",
    "f8-h6", "f8-f6", "f8-d6",
    "g8-g6", "g8-e6", "g8-a8",
]


def make_empty_board(turn=B):
    return Board([[E] * M for _ in range(M)], turn)


def place(board, squares, piece):
    for sq in squares:
        board.set(ord(sq[0]) - ord("a") + 1, int(sq[1]), piece)


def snapshot(board):
    return board.key(), board.moves_made()


def play_first_moves(board, plies):
    for _ in range(plies):
        board.make_move(next(board.legal_moves()))


def test_initial_position():
    board = initial_board()
    assert board.turn is B
    assert board.moves_made() == 0
    assert board.get("a1") is E
    assert board.get("b1") is B
    assert board.get(1, 2) is W
    assert board.get("h7") is W
    assert board.get("g8") is B
    assert board.count(B) == 12
    assert board.count(W) == 12


def test_get_rejects_bad_designator():
    with pytest.raises(InvalidSquareError):
        initial_board().get("j3")


def test_set_with_next_side():
    board = initial_board()
    board.set(4, 4, W, W)
    assert board.get("d4") is W
    assert board.turn is W
    board.set(4, 4, E)
    assert board.turn is W


def test_stale_move_is_illegal():
    board = initial_board()
    move = Move.parse("b1-b3", board)
    board.set(2, 1, W, W)
    assert not board.is_legal(move)
    with pytest.raises(AssertionError):
        board.make_move(move)
    assert board.get("b1") is W
    assert board.get("b3") is E
    assert board.moves_made() == 0


def test_move_with_stale_destination_is_illegal():
    board = initial_board()
    move = Move.parse("c1-a3", board)
    assert move.replaced is W
    board.set(1, 3, E)
    assert not board.is_legal(move)
    assert Move.parse("c1-a3", board) != move


def test_enumeration_matches_create_and_is_legal():
    board = initial_board()
    play_first_moves(board, 4)
    expected = []
    for row in range(1, M + 1):
        for col in range(1, M + 1):
            if board.get(col, row) is not board.turn:
                continue
            for direction in DIRECTIONS:
                pieces = board.piece_count_along(col, row, direction)
                move = Move.create(col, row, pieces, direction, board)
                if move is not None and board.is_legal(move):
                    expected.append(move)
    assert list(board.legal_moves()) == expected


def test_contents_must_be_square():
    with pytest.raises(ValueError):
        Board([[E] * M for _ in range(7)])


def test_line_length_rule():
    board = Board(INITIAL_PIECES, B)
    move = Move.parse("b1-b4", board)
    assert not board.is_legal(move)

    board.set(2, 2, B)
    assert board.is_legal(move)

    board.set(2, 3, B)
    assert not board.is_legal(move)


def test_legality_scenarios():
    board = Board(INITIAL_PIECES, B)
    move = Move.parse("b1-b4", board)
    assert not board.is_legal(move)
    board.set(2, 2, W)
    assert not board.is_legal(move)

    board.set(2, 3, B)
    board.turn = W
    move2 = Move.parse("a2-d5", board)
    # b3 is an enemy piece between origin and destination
    assert not board.is_legal(move2)
    board.set(2, 3, W)
    assert board.is_legal(move2)
    board.set(3, 4, W)
    assert not board.is_legal(move2)
    assert board.is_legal(Move.parse("a2-e6", board))


def test_cannot_move_opponent_piece_or_land_on_own():
    board = initial_board()
    assert not board.is_legal(Move.parse("a2-a4", board))
    # b1 east along row 1 lands on h1 over its own pieces; g1-h1 is wrong length
    assert board.is_legal(Move.parse("b1-h1", board))
    assert not board.is_legal(Move.parse("b1-c1", board))
    assert not board.is_legal(Move.parse("b1-c3", board))


def test_capture_on_destination():
    board = initial_board()
    move = Move.parse("c1-a3", board)
    assert board.is_legal(move)
    board.make_move(move)
    assert board.get("a3") is B
    assert board.get("c1") is E
    assert board.count(W) == 11
    assert board.turn is W


def test_initial_enumeration_order():
    board = initial_board()
    assert [str(m) for m in board.legal_moves()] == INITIAL_BLACK_MOVES


def test_enumeration_is_restartable():
    board = initial_board()
    first = list(board.legal_moves())
    assert list(board) == first
    assert board.has_legal_move()


def test_white_enumeration_starts_at_row_two():
    board = initial_board()
    board.turn = W
    moves = [str(m) for m in board.legal_moves()]
    assert moves[0].startswith("a2-")
    assert all(board.get(m.split("-")[0]) is W for m in moves)


def test_legal_moves_respect_line_rule():
    board = initial_board()
    for plies in range(8):
        for move in board.legal_moves():
            assert board.get(move.col1, move.row1) is not board.turn
            assert move.length() == board.piece_count_along(move.col0, move.row0, move.direction())
        board.make_move(next(board.legal_moves()))


def test_at_most_one_move_per_direction():
    board = initial_board()
    play_first_moves(board, 4)
    seen = set()
    for move in board.legal_moves():
        key = (move.origin, move.direction())
        assert key not in seen
        seen.add(key)


def test_make_retract_round_trip():
    board = initial_board()
    play_first_moves(board, 3)
    for move in list(board.legal_moves()):
        before = snapshot(board)
        grid = board.grid.copy()
        board.make_move(move)
        assert board.moves_made() == before[1] + 1
        board.retract()
        assert snapshot(board) == before
        assert (board.grid == grid).all()


def test_retract_restores_captured_piece():
    board = initial_board()
    board.make_move(Move.parse("c1-a3", board))
    board.retract()
    assert board.get("a3") is W
    assert board.get("c1") is B
    assert board.turn is B
    assert board == initial_board()


def test_retract_is_lifo():
    board = initial_board()
    first = Move.parse("b1-b3", board)
    board.make_move(first)
    second = next(board.legal_moves())
    board.make_move(second)
    assert board.history == (first, second)
    board.retract()
    assert board.history == (first,)
    board.retract()
    assert board == initial_board()


def test_retract_without_history_is_fatal():
    with pytest.raises(AssertionError):
        initial_board().retract()


def test_make_illegal_move_is_fatal():
    board = initial_board()
    with pytest.raises(AssertionError):
        board.make_move(Move.parse("b1-b4", board))


def test_copy_is_independent():
    board = initial_board()
    board.make_move(Move.parse("b1-b3", board))
    copy = board.copy()
    assert copy == board
    assert copy.history == board.history
    copy.retract()
    assert board.moves_made() == 1
    assert copy != board

    other = Board()
    other.copy_from(board)
    assert other == board and other.moves_made() == 1


def test_clear_resets():
    board = initial_board()
    board.make_move(Move.parse("b1-b3", board))
    board.clear()
    assert board == initial_board()
    assert board.moves_made() == 0


def test_empty_side_is_contiguous():
    board = make_empty_board()
    assert board.pieces_contiguous(B)
    assert board.pieces_contiguous(W)
    assert board.game_over()


def test_contiguity_scenarios():
    board = Board(INITIAL_PIECES, B)
    for c in range(1, 9):
        board.set(c, 1, E)
    for c, r in [(3, 3), (3, 4), (2, 3), (2, 6), (2, 4), (3, 4), (5, 7), (7, 7)]:
        board.set(c, r, B)
    assert not board.pieces_contiguous(B)
    board.set(3, 6, B)
    board.set(3, 7, B)
    assert not board.pieces_contiguous(B)
    board.set(3, 5, B)
    assert board.pieces_contiguous(B)
    board.set(3, 5, E)
    assert not board.pieces_contiguous(B)
    assert not board.pieces_contiguous(W)
    for c in range(2, 8):
        board.set(c, 7, W)
    assert board.pieces_contiguous(W)
    board.set(3, 1, W)
    assert not board.pieces_contiguous(W)
    board.set(2, 2, B)
    assert not board.pieces_contiguous(W)


def test_packed_block_wins():
    board = make_empty_board()
    place(board, ["c3", "d3", "e3", "f3", "c4", "d4", "e4", "f4", "c5", "d5", "e5", "f5"], B)
    place(board, ["a1", "h8", "a8", "h1"], W)
    assert board.pieces_contiguous(B)
    assert not board.pieces_contiguous(W)
    assert board.game_over()
    assert board.winner() is B


def test_diagonal_chain_is_contiguous():
    board = make_empty_board()
    place(board, ["a1", "b2", "c3", "d4", "e5", "f6", "g7", "h8"], B)
    place(board, ["a8", "c8"], W)
    assert board.pieces_contiguous(B)
    board.set(4, 4, E)
    assert not board.pieces_contiguous(B)


def test_initial_position_not_over():
    board = initial_board()
    assert not board.game_over()
    assert board.winner() is None


def test_simultaneous_contiguity_favours_mover():
    board = make_empty_board(W)
    place(board, ["a1", "a2"], B)
    place(board, ["h8", "h7"], W)
    # White to move means black made the last move
    assert board.winner() is B
    board.turn = B
    assert board.winner() is W


def test_single_side_contiguous_wins():
    board = make_empty_board(B)
    place(board, ["a1", "a2"], B)
    place(board, ["h8", "h6"], W)
    assert board.winner() is B


def test_dump_format():
    board = initial_board()
    expected = "\n".join(
        ["==="]
        + ["    - b b b b b b -"]
        + ["    w - - - - - - w"] * 6
        + ["    - b b b b b b -", "Next move: black", "==="]
    )
    assert board.dump() == expected
    assert str(board) == expected


def test_piece_count_along_counts_both_ways():
    board = initial_board()
    for d in DIRECTIONS:
        assert board.piece_count_along(4, 1, d) == board.piece_count_along(4, 1, d.inverse())
    # e4 is empty; the e-file holds e1 and e8
    assert board.piece_count_along(5, 4, DIRECTIONS[0]) == 2
