"""Core game logic: bitboards, state, and move validation."""

from .bitboard import *
from .state import GameState, Pieces, Side
from .moves import (
    Move, MoveKind, MoveValidator, MoveApplier, RulesConfig,
    STRICT_RULES, LEGACY_RULES,
    validate_move, apply_move, make_move, crown_kings, parse_move
)
