"""A two-player chess game: board model, move rules, game flow and a pygame window."""

__version__ = "0.1.0"
__all__ = ["__version__"]