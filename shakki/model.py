"""Board model: pieces, squares, game flags and the 8x8 position."""

from __future__ import annotations

import dataclasses
from dataclasses import dataclass, field
from enum import Enum, IntEnum
from typing import Iterator

BOARD_SIZE = 8
PIECE_COUNT = 32

# Layout of Position.pieces:
#  0-7   engine pawns
#  8-15  engine pieces
# 16-23  player pawns
# 24-31  player pieces
ENGINE_INDICES = range(0, 16)
PLAYER_INDICES = range(16, 32)

_BACK_RANK = (
    ("ROOK", 0),
    ("ROOK", 7),
    ("KNIGHT", 1),
    ("KNIGHT", 6),
    ("BISHOP", 2),
    ("BISHOP", 5),
    ("QUEEN", 3),
    ("KING", 4),
)


class PieceType(IntEnum):
    PAWN = 0
    ROOK = 1
    KNIGHT = 2
    BISHOP = 3
    QUEEN = 4
    KING = 5
    NONE = 6


class Color(IntEnum):
    BLACK = 0
    WHITE = 1
    UNDEFINED = 2


class User(IntEnum):
    PLAYER = 0
    ENGINE = 1
    GHOST = 2


class GameStatus(Enum):
    GAME_ON = "game_on"
    VICTORY = "victory"
    DEFEAT = "defeat"
    DRAW = "draw"
    END = "end"


@dataclass
class Piece:
    """A chess piece, or an empty marker when ``type`` is NONE."""

    type: PieceType
    color: Color
    x: int
    y: int
    user: User

    @property
    def is_empty(self) -> bool:
        return self.type is PieceType.NONE

    def copy(self) -> Piece:
        return dataclasses.replace(self)

    def assign(self, other: Piece) -> None:
        """Overwrite every field of this piece with those of ``other``."""
        self.type = other.type
        self.color = other.color
        self.x = other.x
        self.y = other.y
        self.user = other.user


def ghost(x: int, y: int) -> Piece:
    """Return the empty placeholder piece for square (x, y)."""
    return Piece(PieceType.NONE, Color.UNDEFINED, x, y, User.GHOST)


@dataclass
class Square:
    """One board square; ``piece`` is a copy of what stands on it."""

    x: int
    y: int
    piece: Piece

    def copy(self) -> Square:
        return Square(self.x, self.y, self.piece.copy())


@dataclass
class Settings:
    player_color: Color = Color.WHITE
    engine_color: Color = Color.BLACK
    show_enemy_legal_moves: bool = True


@dataclass
class MinMax:
    """An evaluation paired with the best move found for it."""

    evaluation: float = 4.0
    best_move: tuple[Piece, Square] | None = None


@dataclass(frozen=True)
class _Snapshot:
    squares: tuple[tuple[Square, ...], ...]
    pieces: tuple[Piece, ...]


@dataclass
class Position:
    """The whole game state: squares, the 32 pieces and the rule flags."""

    settings: Settings = field(default_factory=Settings)

    def __init__(self, settings: Settings | None = None) -> None:
        self.settings = settings if settings is not None else Settings()
        self.squares: list[list[Square]] = [
            [Square(x, y, ghost(x, y)) for y in range(BOARD_SIZE)]
            for x in range(BOARD_SIZE)
        ]
        self.pieces: list[Piece] = [ghost(0, 0) for _ in range(PIECE_COUNT)]

        self.state = GameStatus.GAME_ON
        self.player_turn = True
        self.en_passant: Square | None = None

        self.player_king_moved = False
        self.player_qside_rook_moved = False
        self.player_kside_rook_moved = False
        self.engine_king_moved = False
        self.engine_qside_rook_moved = False
        self.engine_kside_rook_moved = False

        self.player_can_castle_k = True
        self.player_can_castle_q = True
        self.engine_can_castle_k = True
        self.engine_can_castle_q = True

        self.player_in_check = False
        self.engine_in_check = False
        self.in_promotion = False

        self.reset()
        self.player_turn = self.settings.player_color is Color.WHITE

    def __iter__(self) -> Iterator[Square]:
        for column in self.squares:
            yield from column

    def reset(self) -> None:
        """Put every piece on its starting square."""
        engine_color = Color.BLACK
        player_color = Color.WHITE

        for file in range(BOARD_SIZE):
            self.pieces[file] = Piece(PieceType.PAWN, engine_color, file, 1, User.ENGINE)
            self.pieces[16 + file] = Piece(PieceType.PAWN, player_color, file, 6, User.PLAYER)

        for offset, (name, file) in enumerate(_BACK_RANK):
            kind = PieceType[name]
            self.pieces[8 + offset] = Piece(kind, engine_color, file, 0, User.ENGINE)
            self.pieces[24 + offset] = Piece(kind, player_color, file, 7, User.PLAYER)

        for piece in self.pieces:
            self.squares[piece.x][piece.y].piece = piece.copy()

        for y in range(2, 6):
            for x in range(BOARD_SIZE):
                self.squares[x][y].piece = ghost(x, y)

    def square(self, x: int, y: int) -> Square:
        """Return square (x, y); raise IndexError when it is off the board."""
        if not (0 <= x < BOARD_SIZE and 0 <= y < BOARD_SIZE):
            raise IndexError(f"square ({x}, {y}) is off the board")
        return self.squares[x][y]

    def square_at(self, x: int, y: int) -> Square | None:
        """Return square (x, y), or None when it is off the board."""
        if 0 <= x < BOARD_SIZE and 0 <= y < BOARD_SIZE:
            return self.squares[x][y]
        return None

    def set_piece(self, piece: Piece, x: int, y: int) -> None:
        """Give every piece standing at (x, y) the type, colour and owner of ``piece``."""
        for target in self.pieces:
            if target.x == x and target.y == y:
                target.color = piece.color
                target.type = piece.type
                target.user = piece.user

    def find_piece(self, piece: Piece) -> Piece:
        """Return the stored piece matching ``piece``; the player's king if none does."""
        for candidate in self.pieces:
            if (
                candidate.x == piece.x
                and candidate.y == piece.y
                and candidate.user == piece.user
                and candidate.type == piece.type
            ):
                return candidate
        return self.pieces[PIECE_COUNT - 1]

    def reset_flags(self) -> None:
        """Return castling, check, state and turn flags to their starting values."""
        self.player_king_moved = False
        self.engine_king_moved = False
        self.player_qside_rook_moved = False
        self.player_kside_rook_moved = False
        self.engine_qside_rook_moved = False
        self.engine_kside_rook_moved = False
        self.player_can_castle_k = True
        self.player_can_castle_q = True
        self.engine_can_castle_k = True
        self.engine_can_castle_q = True
        self.player_in_check = False
        self.engine_in_check = False
        self.state = GameStatus.GAME_ON
        self.player_turn = self.settings.player_color is Color.WHITE

    def snapshot(self) -> _Snapshot:
        """Return an independent copy of the squares and pieces."""
        return _Snapshot(
            squares=tuple(tuple(sq.copy() for sq in column) for column in self.squares),
            pieces=tuple(piece.copy() for piece in self.pieces),
        )

    def restore(self, snapshot: _Snapshot) -> None:
        """Bring squares and pieces back to a snapshot, keeping object identity."""
        for column, saved_column in zip(self.squares, snapshot.squares):
            for square, saved in zip(column, saved_column):
                square.piece = saved.piece.copy()
        for piece, saved_piece in zip(self.pieces, snapshot.pieces):
            piece.assign(saved_piece)