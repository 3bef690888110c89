"""Window, drawing and the event loop of the chess board."""

from __future__ import annotations

import argparse
from pathlib import Path

import pygame

from .game import Game, square_from_point
from .model import BOARD_SIZE, Color, Piece, PieceType

FPS = 60

BACKGROUND = (64, 64, 64)
DARK_SQUARE = (64, 48, 0)
LIGHT_SQUARE = (128, 64, 0)
SELECTED_COLOR = (0, 0, 255)
LEGAL_MOVE_COLOR = (255, 0, 0)
HOVER_COLOR = (0, 255, 0)
PROMOTION_COLOR = (128, 128, 128)
PLAYER_TEXT_COLOR = (255, 255, 0)
ENGINE_TEXT_COLOR = (0, 255, 255)
COLOR_KEY = (0, 255, 255)

FONT_FILE = Path("Fonts") / "mytype.ttf"
FONT_SIZE = 14
TOOLTIPS_FILE = Path("Other") / "tooltips.png"
CONSOLE_LINE_HEIGHT = 18

_PIECE_LETTERS = {
    PieceType.BISHOP: "b",
    PieceType.KNIGHT: "h",
    PieceType.KING: "k",
    PieceType.PAWN: "p",
    PieceType.QUEEN: "q",
    PieceType.ROOK: "r",
}

_PROMOTION_KEYS = {
    pygame.K_1: PieceType.QUEEN,
    pygame.K_2: PieceType.ROOK,
    pygame.K_3: PieceType.KNIGHT,
    pygame.K_4: PieceType.BISHOP,
}


def board_layout(width: int, height: int) -> dict[tuple[int, int], pygame.Rect]:
    """Return the screen rectangle of every board square for a window size."""
    tile_width = width // 8 * 0.8
    tile_height = height // 8
    return {
        (x, y): pygame.Rect(int(x * tile_width), y * tile_height, int(tile_width), tile_height)
        for x in range(BOARD_SIZE)
        for y in range(BOARD_SIZE)
    }


def square_color(x: int, y: int) -> tuple[int, int, int]:
    """Return the fill colour of board square (x, y)."""
    return DARK_SQUARE if (x + y) % 2 else LIGHT_SQUARE


def piece_image_name(piece: Piece) -> str | None:
    """Return the image file name drawn for ``piece``, or None for an empty square."""
    letter = _PIECE_LETTERS.get(piece.type)
    if letter is None:
        return None
    prefix = "b" if piece.color is Color.BLACK else "w"
    return f"{prefix}{letter}.png"


def console_position(width: int, height: int, index: int, count: int) -> tuple[int, int]:
    """Return the top-left corner of console line ``index`` out of ``count`` lines."""
    if not 0 <= index < count:
        raise IndexError(f"console line {index} out of range for {count} lines")
    x = width - width // 5
    y = height - 25 - CONSOLE_LINE_HEIGHT * (count - index)
    return x, y


def promotion_canvas(width: int, height: int) -> pygame.Rect:
    """Return the rectangle of the promotion panel."""
    return pygame.Rect(width // 8, height // 5, width // 4 * 3, height // 2)


class Display:
    """Draws a game onto a surface and turns window events into game actions."""

    def __init__(
        self,
        game: Game,
        width: int = 800,
        height: int = 600,
        assets: str | Path = "Assets",
    ) -> None:
        self.game = game
        self.assets = Path(assets)
        self.mouse_pos = (0, 0)
        self.should_close = False
        self._window = False
        self._images: dict[str, pygame.Surface | None] = {}
        self._font: pygame.font.Font | None = None
        self._font_loaded = False
        self.width = 0
        self.height = 0
        self.surface = pygame.Surface((1, 1))
        self.layout: dict[tuple[int, int], pygame.Rect] = {}
        self.resize(width, height)

    def resize(self, width: int, height: int) -> None:
        """Adopt a new window size."""
        if width <= 0 or height <= 0:
            raise ValueError(f"invalid window size {width}x{height}")
        self.width = width
        self.height = height
        window = pygame.display.get_surface() if self._window else None
        if window is not None and window.get_size() == (width, height):
            self.surface = window
        elif self._window:
            self.surface = pygame.display.set_mode((width, height), pygame.RESIZABLE)
        else:
            self.surface = pygame.Surface((width, height))
        self.layout = board_layout(width, height)

    def handle_event(self, event: pygame.event.Event) -> None:
        """Apply one window event to the display and the game."""
        kind = event.type
        key = getattr(event, "key", None) if kind == pygame.KEYDOWN else None

        if kind == pygame.VIDEORESIZE:
            self.resize(event.w, event.h)

        if kind == pygame.QUIT or key == pygame.K_ESCAPE:
            self.should_close = True

        if kind == pygame.MOUSEMOTION:
            self.mouse_pos = tuple(event.pos)

        if not self.game.position.in_promotion:
            if kind == pygame.MOUSEBUTTONDOWN:
                self.mouse_pos = tuple(event.pos)
                try:
                    x, y = square_from_point(*self.mouse_pos, self.width, self.height)
                except ValueError:
                    pass
                else:
                    self.game.click(x, y)
        elif key in _PROMOTION_KEYS:
            self.game.promote(_PROMOTION_KEYS[key])

        if key == pygame.K_r:
            self.game.reset()

    def draw(self) -> None:
        """Draw the whole scene onto the surface."""
        surface = self.surface
        game = self.game
        surface.fill(BACKGROUND)

        self._draw_console()

        for (x, y), rect in self.layout.items():
            surface.fill(square_color(x, y), rect)

        if game.selected is not None:
            surface.fill(SELECTED_COLOR, self.layout[(game.selected.x, game.selected.y)])

        if game.selected is not None and game.piece_selected:
            for move in game.legal_moves:
                surface.fill(LEGAL_MOVE_COLOR, self.layout[(move.x, move.y)])

        for rect in self.layout.values():
            if rect.collidepoint(self.mouse_pos):
                surface.fill(HOVER_COLOR, rect)

        for piece in game.position.pieces:
            name = piece_image_name(piece)
            if name is None:
                continue
            image = self._image(name)
            if image is None:
                continue
            rect = self.layout[(piece.x, piece.y)]
            surface.blit(pygame.transform.scale(image, rect.size), rect)

        if game.position.in_promotion:
            canvas = promotion_canvas(self.width, self.height)
            surface.fill(PROMOTION_COLOR, canvas)
            tooltips = self._image(str(TOOLTIPS_FILE))
            if tooltips is not None:
                surface.blit(pygame.transform.scale(tooltips, canvas.size), canvas)

    def run(self) -> None:
        """Open the window and play until it is closed."""
        pygame.init()
        try:
            self._window = True
            pygame.display.set_caption("Chess")
            self.resize(self.width, self.height)
            clock = pygame.time.Clock()
            while not self.should_close:
                for event in pygame.event.get():
                    self.handle_event(event)
                self.game.update()
                self.draw()
                pygame.display.flip()
                clock.tick(FPS)
        finally:
            self._window = False
            pygame.quit()

    def _candidates(self, relative: str | Path) -> list[Path]:
        path = self.assets / relative
        return [path, Path("..") / path]

    def _image(self, relative: str) -> pygame.Surface | None:
        if relative in self._images:
            return self._images[relative]
        image = None
        error = ""
        for path in self._candidates(relative):
            try:
                image = pygame.image.load(str(path))
            except (pygame.error, OSError) as exc:
                error = str(exc)
                continue
            image.set_colorkey(COLOR_KEY)
            break
        else:
            print(f"Unable to load image: {self.assets / relative} {error}")
        self._images[relative] = image
        return image

    def _console_font(self) -> pygame.font.Font | None:
        if self._font_loaded:
            return self._font
        self._font_loaded = True
        if not pygame.font.get_init():
            pygame.font.init()
        error = ""
        for path in self._candidates(FONT_FILE):
            try:
                self._font = pygame.font.Font(str(path), FONT_SIZE)
            except (pygame.error, OSError) as exc:
                error = str(exc)
                continue
            return self._font
        print(f"Unable to load font from: {self.assets / FONT_FILE} {error}")
        return None

    def _draw_console(self) -> None:
        lines = self.game.console
        if not lines:
            return
        font = self._console_font()
        if font is None:
            return
        for index, line in enumerate(lines):
            color = PLAYER_TEXT_COLOR if line.player_turn else ENGINE_TEXT_COLOR
            rendered = font.render(line.text, True, color)
            self.surface.blit(
                rendered, console_position(self.width, self.height, index, len(lines))
            )


def main(argv: list[str] | None = None) -> int:
    """Start a game in a window."""
    parser = argparse.ArgumentParser(prog="shakki", description="Play chess in a window.")
    parser.add_argument("--assets", default="Assets", help="directory holding images and fonts")
    parser.add_argument("--width", type=int, default=800)
    parser.add_argument("--height", type=int, default=600)
    args = parser.parse_args(argv)
    Display(Game(), args.width, args.height, args.assets).run()
    return 0


if __name__ == "__main__":
    raise SystemExit(main())