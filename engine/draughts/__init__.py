"""Two-player checkers engine on 64-bit bitboards."""

from .errors import DraughtsError, IllegalMove, MalformedInput, BoardInvariantError

__version__ = "0.1.0"
