"""Exceptions raised by the checkers engine and terminal client."""

from __future__ import annotations
from typing import Any


class DraughtsError(Exception):
    """Base class for engine errors."""


class IllegalMove(DraughtsError, ValueError):
    """A proposed move breaks the movement rules. The board is left untouched."""

    def __init__(self, move: Any, reason: str = "illegal move"):
        self.move = move
        self.reason = reason
        super().__init__(f"{reason}: {move}")


class MalformedInput(DraughtsError, ValueError):
    """Input could not be read as four integer coordinates."""

    def __init__(self, text: str | None):
        self.text = text
        if text is None:
            super().__init__("end of input")
        else:
            super().__init__(f"expected 'r1 c1 r2 c2', got {text!r}")


class BoardInvariantError(DraughtsError, AssertionError):
    """Piece sets overlap or fall outside the playable squares."""
