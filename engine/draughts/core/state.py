"""
Game state representation for checkers.

Each side owns two bitboards (men and kings); the state adds whose turn it is.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from enum import IntEnum
from typing import Iterable, Optional
import numpy as np

from ..errors import BoardInvariantError
from .bitboard import (
    ROWS, COLS, VALID_MASK,
    RED_START, BLACK_START, RED_CROWN_ROW, BLACK_CROWN_ROW,
    is_bit_set, set_bit, popcount, iter_bits, sq_to_rowcol
)


class Side(IntEnum):
    """The two players. Red moves first."""
    RED = 0
    BLACK = 1

    @property
    def opponent(self) -> Side:
        return Side(1 - self)

    @property
    def forward(self) -> int:
        """Row direction a man of this side moves in."""
        return -1 if self is Side.RED else 1

    @property
    def crown_row(self) -> int:
        return RED_CROWN_ROW if self is Side.RED else BLACK_CROWN_ROW

    @property
    def label(self) -> str:
        return "Red" if self is Side.RED else "Black"


@dataclass
class Pieces:
    """Men and kings bitboards for one side."""
    men: int = 0
    kings: int = 0

    @property
    def all(self) -> int:
        return self.men | self.kings

    def has_pieces(self) -> bool:
        return (self.men | self.kings) != 0

    def count(self) -> int:
        return popcount(self.men | self.kings)

    def copy(self) -> Pieces:
        return Pieces(self.men, self.kings)


@dataclass
class GameState:
    """
    Represents the complete state of a checkers game.

    Attributes:
        red: Red's men and kings (starts on rows 5-7, moves toward row 0)
        black: Black's men and kings (starts on rows 0-2, moves toward row 7)
        turn: Side to move
    """
    red: Pieces = field(default_factory=lambda: Pieces(men=RED_START))
    black: Pieces = field(default_factory=lambda: Pieces(men=BLACK_START))
    turn: Side = Side.RED

    @classmethod
    def new_game(cls) -> GameState:
        """Create a new game in the starting position."""
        return cls()

    @classmethod
    def empty(cls, turn: Side = Side.RED) -> GameState:
        """Create a board with no pieces, for setting up positions."""
        return cls(red=Pieces(), black=Pieces(), turn=turn)

    @classmethod
    def from_squares(
        cls,
        red_men: Iterable[tuple[int, int]] = (),
        red_kings: Iterable[tuple[int, int]] = (),
        black_men: Iterable[tuple[int, int]] = (),
        black_kings: Iterable[tuple[int, int]] = (),
        turn: Side = Side.RED,
    ) -> GameState:
        """Build a position from lists of (row, col) squares."""
        def to_bb(squares: Iterable[tuple[int, int]]) -> int:
            bb = 0
            for row, col in squares:
                bb = set_bit(bb, row, col)
            return bb

        return cls(
            red=Pieces(to_bb(red_men), to_bb(red_kings)),
            black=Pieces(to_bb(black_men), to_bb(black_kings)),
            turn=turn,
        )

    def side(self, side: Side) -> Pieces:
        return self.red if side == Side.RED else self.black

    @property
    def player(self) -> Pieces:
        """Pieces of the side to move."""
        return self.side(self.turn)

    @property
    def enemy(self) -> Pieces:
        """Pieces of the side not to move."""
        return self.side(self.turn.opponent)

    @property
    def occupied(self) -> int:
        """Bitboard of all occupied squares."""
        return self.red.men | self.red.kings | self.black.men | self.black.kings

    def is_occupied(self, row: int, col: int) -> bool:
        return is_bit_set(self.occupied, row, col)

    def piece_at(self, row: int, col: int) -> str:
        """Symbol for the square: r/R red man/king, b/B black man/king, '.' empty."""
        if is_bit_set(self.red.men, row, col):
            return 'r'
        if is_bit_set(self.red.kings, row, col):
            return 'R'
        if is_bit_set(self.black.men, row, col):
            return 'b'
        if is_bit_set(self.black.kings, row, col):
            return 'B'
        return '.'

    def has_pieces(self, side: Side) -> bool:
        return self.side(side).has_pieces()

    def get_winner(self) -> Optional[Side]:
        """Return the winning side, or None while both sides have pieces."""
        if not self.red.has_pieces():
            return Side.BLACK
        if not self.black.has_pieces():
            return Side.RED
        return None

    def is_terminal(self) -> bool:
        return self.get_winner() is not None

    def copy(self) -> GameState:
        return GameState(red=self.red.copy(), black=self.black.copy(), turn=self.turn)

    def check_invariants(self) -> None:
        """Raise BoardInvariantError if the piece sets are inconsistent."""
        sets = {
            "red men": self.red.men,
            "red kings": self.red.kings,
            "black men": self.black.men,
            "black kings": self.black.kings,
        }
        seen = 0
        for name, bb in sets.items():
            if bb & ~VALID_MASK:
                raise BoardInvariantError(f"{name} has bits outside the board")
            if bb & seen:
                overlap = [sq_to_rowcol(sq) for sq in iter_bits(bb & seen)]
                raise BoardInvariantError(f"{name} overlaps another set at {overlap}")
            seen |= bb

    def to_tensor(self) -> np.ndarray:
        """
        Convert state to a stack of board planes.

        Returns (5, 8, 8) float32 array:
          - Plane 0: Red men
          - Plane 1: Red kings
          - Plane 2: Black men
          - Plane 3: Black kings
          - Plane 4: Side to move (all 1s if Red, all 0s if Black)
        """
        planes = np.zeros((5, ROWS, COLS), dtype=np.float32)

        for idx, bb in enumerate((self.red.men, self.red.kings,
                                  self.black.men, self.black.kings)):
            for sq in iter_bits(bb):
                row, col = sq_to_rowcol(sq)
                planes[idx, row, col] = 1.0

        if self.turn == Side.RED:
            planes[4, :, :] = 1.0

        return planes

    def __hash__(self) -> int:
        return hash((self.red.men, self.red.kings,
                     self.black.men, self.black.kings, int(self.turn)))

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, GameState):
            return False
        return (
            self.red == other.red and
            self.black == other.black and
            self.turn == other.turn
        )

    def render(self) -> str:
        """Text grid of the board followed by the side to move."""
        lines = ["  " + " ".join(str(c) for c in range(COLS)), "  " + "-" * (COLS * 2)]
        for row in range(ROWS):
            line = f"{row}| "
            for col in range(COLS):
                line += self.piece_at(row, col) + " "
            lines.append(line.rstrip())
        lines.append(f"Turn: {self.turn.label}")
        return "\n".join(lines)

    def __repr__(self) -> str:
        return self.render()
