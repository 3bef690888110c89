from shakki.model import Color, Piece, PieceType, Position, User, ghost
from shakki.rules import king_in_danger, legal_moves, raw_moves, update_status


def empty_position():
    pos = Position()
    for square in pos:
        square.piece = ghost(square.x, square.y)
    for piece in pos.pieces:
        piece.assign(ghost(0, 0))
    return pos


def place(pos, index, kind, x, y):
    user = User.ENGINE if index < 16 else User.PLAYER
    color = Color.BLACK if index < 16 else Color.WHITE
    pos.pieces[index].assign(Piece(kind, color, x, y, user))
    pos.square(x, y).piece = pos.pieces[index].copy()
    return pos.pieces[index]


def coords(squares):
    return {(s.x, s.y) for s in squares}


def board_state(pos):
    return [(s.x, s.y, s.piece.copy()) for s in pos], [p.copy() for p in pos.pieces]


def test_start_position_has_twenty_moves_per_side():
    pos = Position()
    player = sum(len(legal_moves(pos, pos.pieces[i])) for i in range(16, 32))
    engine = sum(len(legal_moves(pos, pos.pieces[i])) for i in range(0, 16))
    assert player == 20
    assert engine == 20


def test_raw_moves_stay_on_board_and_avoid_own_pieces():
    pos = Position()
    for piece in pos.pieces:
        for sq in raw_moves(pos, piece):
            assert 0 <= sq.x < 8 and 0 <= sq.y < 8
            assert sq.piece.color != piece.color


def test_empty_piece_has_no_moves():
    pos = Position()
    assert raw_moves(pos, ghost(3, 3)) == []


def test_rook_on_empty_board_covers_row_and_column():
    pos = empty_position()
    rook = place(pos, 24, PieceType.ROOK, 3, 4)
    expected = {(x, 4) for x in range(8) if x != 3} | {(3, y) for y in range(8) if y != 4}
    assert coords(raw_moves(pos, rook)) == expected


def test_queen_moves_are_rook_and_bishop_moves():
    pos = empty_position()
    queen = place(pos, 30, PieceType.QUEEN, 3, 4)
    queen_moves = coords(raw_moves(pos, queen))

    rook_pos = empty_position()
    rook = place(rook_pos, 24, PieceType.ROOK, 3, 4)
    bishop_pos = empty_position()
    bishop = place(bishop_pos, 28, PieceType.BISHOP, 3, 4)
    assert queen_moves == coords(raw_moves(rook_pos, rook)) | coords(raw_moves(bishop_pos, bishop))


def test_knight_in_corner():
    pos = empty_position()
    knight = place(pos, 26, PieceType.KNIGHT, 0, 0)
    assert coords(raw_moves(pos, knight)) == {(1, 2), (2, 1)}


def test_slider_stops_at_pieces():
    pos = empty_position()
    rook = place(pos, 24, PieceType.ROOK, 3, 4)
    place(pos, 16, PieceType.PAWN, 3, 6)
    place(pos, 0, PieceType.PAWN, 3, 1)
    moves = coords(raw_moves(pos, rook))
    assert (3, 1) in moves
    assert (3, 5) in moves
    assert (3, 6) not in moves
    assert (3, 7) not in moves
    assert (3, 0) not in moves


def test_pawn_first_move_single_and_double():
    pos = Position()
    assert coords(raw_moves(pos, pos.pieces[20])) == {(4, 5), (4, 4)}
    assert coords(raw_moves(pos, pos.pieces[4])) == {(4, 2), (4, 3)}


def test_blocked_pawn_cannot_move():
    pos = empty_position()
    pawn = place(pos, 20, PieceType.PAWN, 4, 6)
    place(pos, 0, PieceType.PAWN, 4, 5)
    assert raw_moves(pos, pawn) == []


def test_pawn_captures_diagonally_only():
    pos = empty_position()
    pawn = place(pos, 20, PieceType.PAWN, 4, 4)
    place(pos, 0, PieceType.PAWN, 3, 3)
    place(pos, 1, PieceType.PAWN, 5, 3)
    place(pos, 2, PieceType.PAWN, 4, 3)
    assert coords(raw_moves(pos, pawn)) == {(3, 3), (5, 3)}


def test_en_passant_square_is_offered():
    pos = empty_position()
    pawn = place(pos, 20, PieceType.PAWN, 4, 3)
    assert (3, 2) not in coords(raw_moves(pos, pawn))
    pos.en_passant = pos.square(3, 2)
    assert (3, 2) in coords(raw_moves(pos, pawn))


def test_castling_targets_follow_flags():
    pos = empty_position()
    king = place(pos, 31, PieceType.KING, 4, 7)
    place(pos, 24, PieceType.ROOK, 0, 7)
    place(pos, 25, PieceType.ROOK, 7, 7)
    moves = coords(raw_moves(pos, king))
    assert {(6, 7), (2, 7)} <= moves

    pos.player_can_castle_k = False
    pos.player_can_castle_q = False
    moves = coords(raw_moves(pos, king))
    assert (6, 7) not in moves
    assert (2, 7) not in moves


def test_castling_blocked_by_piece_between():
    pos = empty_position()
    king = place(pos, 31, PieceType.KING, 4, 7)
    place(pos, 24, PieceType.ROOK, 0, 7)
    place(pos, 26, PieceType.KNIGHT, 1, 7)
    assert (2, 7) not in coords(raw_moves(pos, king))


def test_pinned_rook_stays_on_file():
    pos = empty_position()
    place(pos, 31, PieceType.KING, 4, 7)
    rook = place(pos, 24, PieceType.ROOK, 4, 5)
    place(pos, 8, PieceType.ROOK, 4, 0)
    raw = coords(raw_moves(pos, rook))
    legal = coords(legal_moves(pos, rook))
    assert any(x != 4 for x, _ in raw)
    assert all(x == 4 for x, _ in legal)
    assert (4, 0) in legal


def test_king_cannot_step_into_attack():
    pos = empty_position()
    king = place(pos, 31, PieceType.KING, 4, 7)
    place(pos, 8, PieceType.ROOK, 0, 6)
    assert coords(legal_moves(pos, king)) == {(3, 7), (5, 7)}


def test_king_may_capture_undefended_pawn():
    pos = empty_position()
    king = place(pos, 31, PieceType.KING, 4, 7)
    place(pos, 0, PieceType.PAWN, 4, 6)
    legal = coords(legal_moves(pos, king))
    assert (4, 6) in legal
    assert (3, 7) not in legal
    assert (5, 7) not in legal


def test_king_in_danger_restores_board():
    pos = empty_position()
    king = place(pos, 31, PieceType.KING, 4, 7)
    place(pos, 8, PieceType.ROOK, 0, 6)
    before = board_state(pos)
    assert king_in_danger(pos, pos.square(4, 6), king) is True
    assert king_in_danger(pos, pos.square(3, 7), king) is False
    assert board_state(pos) == before


def test_legal_moves_leave_board_unchanged():
    pos = Position()
    before = board_state(pos)
    for piece in pos.pieces:
        legal_moves(pos, piece)
    assert board_state(pos) == before


def test_legal_moves_are_subset_of_raw_moves():
    pos = Position()
    for piece in pos.pieces:
        assert coords(legal_moves(pos, piece)) <= coords(raw_moves(pos, piece))


def test_update_status_at_start():
    pos = Position()
    update_status(pos)
    assert not pos.player_in_check
    assert not pos.engine_in_check
    assert pos.player_can_castle_k and pos.player_can_castle_q
    assert pos.engine_can_castle_k and pos.engine_can_castle_q


def test_update_status_detects_check():
    pos = empty_position()
    place(pos, 31, PieceType.KING, 4, 7)
    place(pos, 8, PieceType.ROOK, 4, 0)
    update_status(pos)
    assert pos.player_in_check is True
    assert pos.player_can_castle_k is False
    assert pos.player_can_castle_q is False
    assert pos.engine_in_check is False


def test_update_status_after_king_moved():
    pos = Position()
    pos.player_king_moved = True
    update_status(pos)
    assert pos.player_can_castle_k is False
    assert pos.player_can_castle_q is False
    assert pos.engine_can_castle_k is True


def test_update_status_attacked_castling_path():
    pos = empty_position()
    place(pos, 31, PieceType.KING, 4, 7)
    place(pos, 24, PieceType.ROOK, 0, 7)
    place(pos, 25, PieceType.ROOK, 7, 7)
    place(pos, 8, PieceType.ROOK, 6, 0)
    update_status(pos)
    assert pos.player_can_castle_k is False
    assert pos.player_can_castle_q is True
    assert pos.player_in_check is False