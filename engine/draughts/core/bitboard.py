"""
Bitboard utilities for checkers.

Board layout (8 rows x 8 cols = 64 squares, one 64-bit int per piece set):

  0 |  0  1  2  3  4  5  6  7     <- Black's home rows (0-2)
  1 |  8  9 10 11 12 13 14 15
  2 | 16 17 18 19 20 21 22 23
  3 | 24 25 26 27 28 29 30 31
  4 | 32 33 34 35 36 37 38 39
  5 | 40 41 42 43 44 45 46 47     <- Red's home rows (5-7)
  6 | 48 49 50 51 52 53 54 55
  7 | 56 57 58 59 60 61 62 63
    +------------------------
       0  1  2  3  4  5  6  7

Square index = row * 8 + col. Only dark squares ((row + col) odd) are played.
"""

from typing import Iterator

# Board dimensions
ROWS = 8
COLS = 8
NUM_SQUARES = ROWS * COLS  # 64

# Mask for valid squares (bits 0-63)
VALID_MASK = (1 << NUM_SQUARES) - 1

# Crowning rows: Red men promote on row 0, Black men on row 7
RED_CROWN_ROW = 0
BLACK_CROWN_ROW = ROWS - 1


def sq_to_rowcol(sq: int) -> tuple[int, int]:
    """Convert square index to (row, col)."""
    return sq // COLS, sq % COLS


def rowcol_to_sq(row: int, col: int) -> int:
    """Convert (row, col) to square index."""
    return row * COLS + col


def is_valid_sq(row: int, col: int) -> bool:
    """Check if (row, col) is on the board."""
    return 0 <= row < ROWS and 0 <= col < COLS


def is_dark_sq(row: int, col: int) -> bool:
    """Check if (row, col) is a playable (dark) square."""
    return (row + col) % 2 == 1


def bit(sq: int) -> int:
    """Return bitboard with single bit set at square."""
    return 1 << sq


def get_bit(row: int, col: int) -> int:
    """Return bitboard with single bit set at (row, col).

    No bounds checking: callers must pass row, col in [0, 7].
    """
    return 1 << (row * COLS + col)


def set_bit(bb: int, row: int, col: int) -> int:
    """Return bb with (row, col) added."""
    return bb | get_bit(row, col)


def clear_bit(bb: int, row: int, col: int) -> int:
    """Return bb with (row, col) removed."""
    return bb & ~get_bit(row, col)


def is_bit_set(bb: int, row: int, col: int) -> bool:
    """Check whether (row, col) is in bb."""
    return (bb & get_bit(row, col)) != 0


def popcount(bb: int) -> int:
    """Count number of set bits."""
    return bin(bb).count('1')


def lsb(bb: int) -> int:
    """Return index of least significant bit (or -1 if empty)."""
    bb = int(bb)  # Handle numpy integer scalars
    if bb == 0:
        return -1
    return (bb & -bb).bit_length() - 1


def iter_bits(bb: int) -> Iterator[int]:
    """Iterate over indices of set bits."""
    bb = int(bb)  # Handle numpy integer scalars
    while bb:
        sq = lsb(bb)
        yield sq
        bb &= bb - 1  # Clear LSB


def bb_to_squares(bb: int) -> list[tuple[int, int]]:
    """Convert bitboard to a list of (row, col) squares."""
    return [sq_to_rowcol(sq) for sq in iter_bits(bb)]


def row_mask(row: int) -> int:
    """Bitboard of every square on a row."""
    return 0xFF << (row * COLS)


def print_bitboard(bb: int, label: str = "") -> None:
    """Print bitboard in readable format."""
    if label:
        print(f"{label}:")
    print("   " + " ".join(str(c) for c in range(COLS)))
    for row in range(ROWS):
        line = f"{row} |"
        for col in range(COLS):
            line += " 1" if is_bit_set(bb, row, col) else " ."
        print(line)


def _init_dark_squares() -> int:
    mask = 0
    for sq in range(NUM_SQUARES):
        if is_dark_sq(*sq_to_rowcol(sq)):
            mask |= bit(sq)
    return mask


DARK_SQUARES = _init_dark_squares()
ROW_MASKS: list[int] = [row_mask(r) for r in range(ROWS)]

# Starting positions: dark squares of rows 0-2 (Black) and rows 5-7 (Red)
BLACK_START = (ROW_MASKS[0] | ROW_MASKS[1] | ROW_MASKS[2]) & DARK_SQUARES
RED_START = (ROW_MASKS[5] | ROW_MASKS[6] | ROW_MASKS[7]) & DARK_SQUARES
