# shakki

A chess game for two people sharing one screen. The board takes up the left
part of the window. The right part holds a running log of the moves played.

## Installing

    pip install .

## Playing

    shakki

Options:

- `--assets DIR`: directory holding the images and the font (default `Assets`);
- `--width N`, `--height N`: starting window size (default 800 by 600).

The window can be resized.

White moves first. Click a piece of the side to move: the square turns blue
and the squares it can legally move to turn red. Then click one of those
squares to play the move. The square under the mouse is shown in green.

The game knows these rules:

- castling on either side, while the king and that rook have not moved, the
  king is not in check and the squares it passes are not attacked;
- capturing en passant;
- checkmate and stalemate, which end the game.

When a pawn reaches the last rank the promotion panel opens and clicks are
ignored until a key chooses the new piece:

| Key | Piece  |
|-----|--------|
| 1   | Queen  |
| 2   | Rook   |
| 3   | Knight |
| 4   | Bishop |

Press `R` at any time to start a new game. Press `Esc` or close the window to
quit.

### Images and font

The package does not ship any images or fonts. The window looks for them in
the assets directory (and, failing that, in `../` followed by that
directory):

- piece images named `<colour><piece>.png`, where colour is `w` or `b` and
  piece is `p`, `r`, `h` (knight), `b` (bishop), `q` or `k`, for example
  `wk.png`;
- `Other/tooltips.png`, drawn on the promotion panel;
- `Fonts/mytype.ttf`, used for the move log.

A file that cannot be loaded is reported once on standard output and then
left out of the drawing, so the game still runs without them, just with an
empty-looking board or no move log.

## What it does not do

There is no computer opponent: both sides are moved by clicking. Nothing is
saved; a game lasts as long as the window is open.

## Using the rules in code

The game logic does not depend on the display, so you can use it on its own:

    from shakki.model import Position, Settings
    from shakki.rules import legal_moves
    from shakki.moves import execute_move

    position = Position(Settings())
    pawn = position.find_piece(position.square(4, 6).piece)
    target = next(sq for sq in legal_moves(position, pawn) if (sq.x, sq.y) == (4, 4))
    execute_move(position, pawn, target)   # prints and returns "Pawn to E4"

`execute_move` must be given a piece from `position.pieces` (which
`find_piece` returns); the pieces stored on squares are copies.

Board coordinates run from `(0, 0)` in the top left (a8) to `(7, 7)` in the
bottom right (h1). `square_name` in `shakki.moves` converts a coordinate to its
name, such as `"E4"`. `shakki.rules` also offers `raw_moves`,
`king_in_danger` and `update_status`, which recomputes the check and castling
flags of both sides.

`shakki.game.Game` manages whole games: `click(x, y)` selects squares,
`update()` plays a selected move or detects the end of the game,
`promote(kind)` finishes a promotion, `all_moves()` lists the moves of the
side to move and `reset()` starts over. Its `console` holds the log lines.

## Running the tests

    pip install .[test]
    pytest