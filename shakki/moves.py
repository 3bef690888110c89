"""Carrying out a move on the position and naming it."""

from __future__ import annotations

from .model import BOARD_SIZE, Piece, PieceType, Position, Square, User, ghost

_PIECE_NAMES = {
    PieceType.NONE: "",
    PieceType.PAWN: "Pawn",
    PieceType.ROOK: "Rook",
    PieceType.KING: "King",
    PieceType.QUEEN: "Queen",
    PieceType.KNIGHT: "Knight",
    PieceType.BISHOP: "Bishop",
}
_FILES = "ABCDEFGH"
_RANKS = "87654321"


def square_name(x: int, y: int) -> str:
    """Return the board name of square (x, y), such as ``"E4"``."""
    if not (0 <= x < BOARD_SIZE and 0 <= y < BOARD_SIZE):
        raise ValueError(f"square ({x}, {y}) is off the board")
    return _FILES[x] + _RANKS[y]


def _empty_square(position: Position, x: int, y: int) -> None:
    position.square(x, y).piece = ghost(x, y)


def _castle(position: Position, king: Piece, rook: Piece, queen_side: bool) -> str:
    rank = 7 if king.user is User.PLAYER else 0
    _empty_square(position, 4, rank)
    if queen_side:
        _empty_square(position, 0, rank)
        king.x -= 2
        rook.x += 3
        name = "0-0-0"
    else:
        _empty_square(position, 7, rank)
        king.x += 2
        rook.x -= 2
        name = "0-0"
    position.square(rook.x, rook.y).piece = rook.copy()
    position.square(king.x, king.y).piece = king.copy()
    return name


def execute_move(position: Position, piece: Piece, target: Square) -> str:
    """Move ``piece`` (a piece of the position) to ``target``, print and return the move's name."""
    target = target.copy()
    name = ""
    source_name = _PIECE_NAMES[piece.type]
    destination = square_name(target.x, target.y)
    player = piece.user is User.PLAYER

    if piece.type is PieceType.KING:
        if player:
            position.player_king_moved = True
            queen_rook, king_rook = position.pieces[24], position.pieces[25]
        else:
            position.engine_king_moved = True
            queen_rook, king_rook = position.pieces[8], position.pieces[9]
        if piece.x - 2 == target.x:
            name = _castle(position, piece, queen_rook, queen_side=True)
            source_name = ""
        if piece.x + 2 == target.x:
            name = _castle(position, piece, king_rook, queen_side=False)
            source_name = ""

    if piece.type is PieceType.ROOK:
        if player:
            if piece.x == 0:
                position.player_qside_rook_moved = True
            if piece.x == 7:
                position.player_kside_rook_moved = True
        else:
            if piece.x == 0:
                position.engine_qside_rook_moved = True
            if piece.x == 7:
                position.engine_kside_rook_moved = True

    if piece.type is PieceType.PAWN:
        passant = position.en_passant
        if passant is not None and (target.x, target.y) == (passant.x, passant.y):
            victim_y = target.y + 1 if player else target.y - 1
            position.set_piece(ghost(target.x, victim_y), target.x, victim_y)
            _empty_square(position, target.x, victim_y)

        if player and piece.y == 6 and target.y == 4:
            position.en_passant = position.square_at(piece.x, 5)
        elif not player and piece.y == 1 and target.y == 3:
            position.en_passant = position.square_at(piece.x, 2)
        else:
            position.en_passant = None
    else:
        position.en_passant = None

    if not target.piece.is_empty:
        for captured in position.pieces:
            if captured.x == target.x and captured.y == target.y:
                captured.assign(ghost(captured.x, captured.y))

    _empty_square(position, piece.x, piece.y)
    piece.x = target.x
    piece.y = target.y
    position.square(piece.x, piece.y).piece = piece.copy()

    name = f"{name}{source_name} to {destination}"
    print(name)
    return name