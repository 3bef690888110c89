"""Turn handling, selection, promotion and the move console of a game."""

from __future__ import annotations

from dataclasses import dataclass

from .model import (
    BOARD_SIZE,
    GameStatus,
    PieceType,
    Position,
    Settings,
    Square,
    User,
)
from .moves import execute_move
from .rules import legal_moves, update_status

_PROMOTION_CHOICES = (
    PieceType.QUEEN,
    PieceType.ROOK,
    PieceType.KNIGHT,
    PieceType.BISHOP,
)


def square_from_point(px: int, py: int, width: int, height: int) -> tuple[int, int]:
    """Map a window point to board coordinates.

    The board takes the left part of the window; a point right of it
    selects the last file of its rank.
    """
    x = px * 10 // width
    y = py * 8 // height
    if not 0 <= y < BOARD_SIZE:
        raise ValueError(f"point ({px}, {py}) is outside the board rows")
    if 0 <= x < BOARD_SIZE:
        return x, y
    return BOARD_SIZE - 1, y


@dataclass(frozen=True)
class ConsoleLine:
    """One line of console output and whose turn produced it."""

    text: str
    player_turn: bool


class Game:
    """A two-sided game driven by square clicks and per-frame updates."""

    def __init__(self, settings: Settings | None = None) -> None:
        self.position = Position(settings)
        self.selected: Square | None = None
        self.original: Square | None = None
        self.legal_moves: list[Square] = []
        self.piece_selected = False
        self.console: list[ConsoleLine] = []

    @property
    def _side(self) -> User:
        return User.PLAYER if self.position.player_turn else User.ENGINE

    def click(self, x: int, y: int) -> None:
        """Select square (x, y); selecting a piece of the side to move shows its moves."""
        if self.position.in_promotion:
            return
        square = self.position.square(x, y)
        self.selected = square
        if not square.piece.is_empty and square.piece.user is self._side:
            self.original = square
            self.legal_moves = legal_moves(self.position, square.piece)
            self.piece_selected = True

    def promote(self, kind: PieceType) -> bool:
        """Turn the pawn awaiting promotion into ``kind``; return whether one was waiting."""
        if kind not in _PROMOTION_CHOICES:
            raise ValueError(f"cannot promote to {kind!r}")
        if not self.position.in_promotion or self.selected is None:
            return False
        real = self.position.find_piece(self.selected.piece)
        real.type = kind
        self.selected.piece = real.copy()
        self.position.in_promotion = False
        self.position.player_turn = not self.position.player_turn
        return True

    def all_moves(self) -> list[Square]:
        """Return every legal move of the side to move."""
        side = self._side
        indices = range(16, 32) if side is User.PLAYER else range(0, 16)
        pieces = [self.position.pieces[index].copy() for index in indices]
        return [
            move
            for piece in pieces
            if not piece.is_empty and piece.user is side
            for move in legal_moves(self.position, piece)
        ]

    def update(self) -> None:
        """Advance the game one step: detect its end or play the selected move."""
        position = self.position
        if position.state is not GameStatus.GAME_ON:
            return
        update_status(position)

        if not self.all_moves():
            if position.player_turn:
                in_check = position.player_in_check
                position.state = GameStatus.DEFEAT if in_check else GameStatus.DRAW
            else:
                in_check = position.engine_in_check
                position.state = GameStatus.VICTORY if in_check else GameStatus.DRAW
            self._update_console()
            return

        if (
            self.selected is not None
            and self.selected is not self.original
            and self.piece_selected
            and self.legal_moves
        ):
            target = next(
                (
                    move
                    for move in self.legal_moves
                    if (move.x, move.y) == (self.selected.x, self.selected.y)
                ),
                None,
            )
            if target is None:
                self.piece_selected = False
            else:
                self._execute(target)

    def reset(self) -> None:
        """Start a new game."""
        self.position.reset()
        self.position.reset_flags()
        self.position.en_passant = None
        self.position.in_promotion = False
        self.original = None
        self.selected = None
        self.legal_moves = []
        self.piece_selected = False
        self.console.clear()

    def _execute(self, target: Square) -> None:
        position = self.position
        side = self._side
        for piece in position.pieces:
            if piece.is_empty or piece.user is not side:
                continue
            if self.original is not position.square(piece.x, piece.y):
                continue
            if piece.type is PieceType.PAWN and target.y in (0, BOARD_SIZE - 1):
                position.in_promotion = True
            name = execute_move(position, piece, target)
            self.legal_moves = []
            self._update_console(name)
            if not position.in_promotion:
                self.piece_selected = False
                position.player_turn = not position.player_turn
            return

    def _update_console(self, move_name: str = "") -> None:
        position = self.position
        state = position.state
        if state is GameStatus.GAME_ON:
            self._write(move_name)
        elif state is GameStatus.VICTORY:
            self._write("Checkmate! You won!")
            position.state = GameStatus.END
        elif state is GameStatus.DEFEAT:
            self._write("Checkmate! You lost.")
            position.state = GameStatus.END
        elif state is GameStatus.DRAW:
            self._write("Draw!")
            position.state = GameStatus.END
        if position.state is GameStatus.END:
            self._write("Hit 'R' to play again.")

    def _write(self, text: str) -> None:
        self.console.append(ConsoleLine(text, self.position.player_turn))