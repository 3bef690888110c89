"""Move generation, legality filtering and check/castling bookkeeping."""

from __future__ import annotations

from typing import Iterator

from .model import (
    ENGINE_INDICES,
    PLAYER_INDICES,
    Piece,
    PieceType,
    Position,
    Square,
    User,
    ghost,
)

_KNIGHT_STEPS = tuple(
    (dx, dy)
    for dx in range(-2, 3)
    for dy in range(-2, 3)
    if dx != 0 and dy != 0 and abs(dx) != abs(dy)
)
_KING_STEPS = tuple(
    (dx, dy) for dx in range(-1, 2) for dy in range(-1, 2) if (dx, dy) != (0, 0)
)
_BISHOP_DIRECTIONS = ((1, 1), (1, -1), (-1, 1), (-1, -1))
_ROOK_DIRECTIONS = ((1, 0), (0, 1), (-1, 0), (0, -1))


def _opponent_indices(piece: Piece) -> range:
    return ENGINE_INDICES if piece.user is User.PLAYER else PLAYER_INDICES


def _jump(position: Position, piece: Piece, dx: int, dy: int) -> Iterator[Square]:
    square = position.square_at(piece.x + dx, piece.y + dy)
    if square is not None and (square.piece.is_empty or square.piece.color != piece.color):
        yield square.copy()


def _slide(position: Position, piece: Piece, dx: int, dy: int) -> Iterator[Square]:
    for distance in range(1, 8):
        square = position.square_at(piece.x + distance * dx, piece.y + distance * dy)
        if square is None:
            return
        if square.piece.is_empty:
            yield square.copy()
            continue
        if square.piece.color != piece.color:
            yield square.copy()
        return


def _castle(position: Position, piece: Piece, kingside: bool) -> Iterator[Square]:
    step = 1 if kingside else -1
    reach = 4 if kingside else 5
    for distance in range(1, reach):
        square = position.square_at(piece.x + distance * step, piece.y)
        if square is None or square.piece.is_empty:
            continue
        if square.piece.type is not PieceType.ROOK:
            return
        destination = position.square_at(piece.x + 2 * step, piece.y)
        if destination is not None:
            yield destination.copy()


def _pawn(position: Position, piece: Piece, player: bool) -> Iterator[Square]:
    if player:
        forward = -1
        if piece.y == 6:
            two = position.square(piece.x, 4)
            if two.piece.is_empty and position.square(piece.x, 5).piece.is_empty:
                yield two.copy()
    else:
        forward = 1
        if piece.y == 1:
            two = position.square(piece.x, 3)
            if two.piece.is_empty and position.square(piece.x, 2).piece.is_empty:
                yield two.copy()

    for dx in (forward, 0, -forward):
        square = position.square_at(piece.x + dx, piece.y + forward)
        if square is None:
            continue
        if dx == 0:
            if square.piece.is_empty:
                yield square.copy()
        elif not square.piece.is_empty and square.piece.color != piece.color:
            yield square.copy()

    passant = position.en_passant
    if (
        passant is not None
        and passant.y == piece.y + forward
        and passant.x in (piece.x + 1, piece.x - 1)
    ):
        yield passant.copy()


def raw_moves(position: Position, piece: Piece) -> list[Square]:
    """Return the squares ``piece`` could reach, ignoring whether its king is left in check."""
    kind = piece.type
    moves: list[Square] = []
    if kind is PieceType.PAWN:
        moves.extend(_pawn(position, piece, piece.user is User.PLAYER))
    elif kind is PieceType.KNIGHT:
        for dx, dy in _KNIGHT_STEPS:
            moves.extend(_jump(position, piece, dx, dy))
    elif kind is PieceType.QUEEN:
        for dx, dy in _KING_STEPS:
            moves.extend(_slide(position, piece, dx, dy))
    elif kind is PieceType.KING:
        for dx, dy in _KING_STEPS:
            moves.extend(_jump(position, piece, dx, dy))
        if piece.user is User.PLAYER:
            can_k, can_q = position.player_can_castle_k, position.player_can_castle_q
        else:
            can_k, can_q = position.engine_can_castle_k, position.engine_can_castle_q
        if can_k:
            moves.extend(_castle(position, piece, True))
        if can_q:
            moves.extend(_castle(position, piece, False))
    elif kind is PieceType.BISHOP:
        for dx, dy in _BISHOP_DIRECTIONS:
            moves.extend(_slide(position, piece, dx, dy))
    elif kind is PieceType.ROOK:
        for dx, dy in _ROOK_DIRECTIONS:
            moves.extend(_slide(position, piece, dx, dy))
    return moves


def _attacks_king(position: Position, piece: Piece) -> bool:
    return any(sq.piece.type is PieceType.KING for sq in raw_moves(position, piece))


def king_in_danger(position: Position, square: Square, piece: Piece) -> bool:
    """Tell whether the king ``piece`` would be attacked after moving to ``square``."""
    target = position.square(square.x, square.y)
    origin = position.square(piece.x, piece.y)
    saved = target.piece
    target.piece = piece.copy()
    origin.piece = ghost(piece.x, piece.y)
    try:
        return any(
            _attacks_king(position, position.pieces[index])
            for index in _opponent_indices(piece)
        )
    finally:
        target.piece = saved
        origin.piece = piece.copy()


def _exposes_king(position: Position, piece: Piece, move: Square) -> bool:
    target = position.square(move.x, move.y)
    origin = position.square(piece.x, piece.y)
    saved = target.piece
    target.piece = piece.copy()
    origin.piece = ghost(piece.x, piece.y)
    try:
        for index in _opponent_indices(piece):
            opponent = position.pieces[index]
            # a piece taken by the trial move cannot attack
            if position.square(opponent.x, opponent.y).piece.user == piece.user:
                continue
            if _attacks_king(position, opponent):
                return True
        return False
    finally:
        target.piece = saved
        origin.piece = piece.copy()


def legal_moves(position: Position, piece: Piece) -> list[Square]:
    """Return the moves of ``piece`` that do not leave its own king attacked."""
    candidates = raw_moves(position, piece)
    if piece.type is PieceType.KING:
        return [
            move
            for move in candidates
            if not king_in_danger(position, position.square(move.x, move.y), piece)
        ]
    return [move for move in candidates if not _exposes_king(position, piece, move)]


def update_status(position: Position) -> None:
    """Recompute the check and castling-availability flags of both sides."""
    position.player_can_castle_k = True
    position.player_can_castle_q = True
    position.player_in_check = False

    for index in ENGINE_INDICES:
        for move in raw_moves(position, position.pieces[index]):
            if move.piece.type is PieceType.KING:
                position.player_in_check = True
                position.player_can_castle_q = False
                position.player_can_castle_k = False

            if position.player_king_moved:
                position.player_can_castle_q = False
                position.player_can_castle_k = False
                continue

            spot = (move.x, move.y)
            if position.player_kside_rook_moved:
                position.player_can_castle_k = False
            elif spot in ((5, 7), (6, 7)):
                position.player_can_castle_k = False

            if position.player_qside_rook_moved:
                position.player_can_castle_q = False
            elif spot in ((1, 7), (2, 7)):
                position.player_can_castle_q = False

    position.engine_can_castle_k = True
    position.engine_can_castle_q = True
    position.engine_in_check = False

    for index in PLAYER_INDICES:
        for move in raw_moves(position, position.pieces[index]):
            if move.piece.type is PieceType.KING:
                position.engine_in_check = True
                position.engine_can_castle_k = False
                position.engine_can_castle_q = False

            if position.engine_king_moved:
                position.engine_can_castle_k = False
                position.engine_can_castle_q = False
                continue

            spot = (move.x, move.y)
            if position.engine_kside_rook_moved:
                position.engine_can_castle_k = False
            elif spot in ((5, 0), (6, 7)):
                position.engine_can_castle_k = False

            if position.engine_qside_rook_moved:
                position.engine_can_castle_q = False
            elif spot in ((1, 0), (2, 0)):
                position.player_can_castle_q = False