"""
Move validation and application for checkers.

A move is a single diagonal step or a single jump over an adjacent enemy
piece. There is no multi-jump chaining and captures are never mandatory.
"""

from __future__ import annotations
from dataclasses import dataclass
from enum import IntEnum
from typing import NamedTuple
import logging

from ..errors import IllegalMove, MalformedInput
from .bitboard import (
    ROW_MASKS, RED_CROWN_ROW, BLACK_CROWN_ROW,
    set_bit, clear_bit, is_bit_set, is_valid_sq, popcount
)
from .state import GameState

logger = logging.getLogger(__name__)


class MoveKind(IntEnum):
    """Result of validating a move."""
    ILLEGAL = 0
    STEP = 1
    JUMP = 2


class Move(NamedTuple):
    """Origin (r1, c1) and destination (r2, c2) of a move."""
    r1: int
    c1: int
    r2: int
    c2: int

    @property
    def midpoint(self) -> tuple[int, int]:
        """Square jumped over (only meaningful for a jump)."""
        return (self.r1 + self.r2) // 2, (self.c1 + self.c2) // 2

    def __str__(self) -> str:
        return f"{self.r1} {self.c1} {self.r2} {self.c2}"


def parse_move(text: str | None) -> Move:
    """Parse 'r1 c1 r2 c2' into a Move.

    Raises MalformedInput on end of input (None) or anything other than
    exactly four integers. Range checking is left to the validator.
    """
    if text is None:
        raise MalformedInput(None)
    parts = text.replace(',', ' ').split()
    if len(parts) != 4:
        raise MalformedInput(text)
    try:
        r1, c1, r2, c2 = (int(p) for p in parts)
    except ValueError as e:
        raise MalformedInput(text) from e
    return Move(r1, c1, r2, c2)


@dataclass
class RulesConfig:
    """Rule switches for move validation."""
    # Origin must hold a piece belonging to the side to move
    require_own_piece: bool = True


STRICT_RULES = RulesConfig()
LEGACY_RULES = RulesConfig(require_own_piece=False)


class MoveValidator:
    """Decides whether a move is a legal step, a legal jump, or illegal."""

    @staticmethod
    def validate(
        state: GameState,
        r1: int, c1: int, r2: int, c2: int,
        rules: RulesConfig = STRICT_RULES,
    ) -> MoveKind:
        """
        Classify a move for the side to move.

        Rules, in order:
        1. Destination must be on the board and empty.
        2. With require_own_piece, the origin must hold one of the mover's pieces.
        3. A man steps one row in its side's forward direction; a king steps
           either way.
        4. Any piece may jump two squares diagonally over an enemy piece.
        """
        if not is_valid_sq(r2, c2):
            return MoveKind.ILLEGAL
        if state.is_occupied(r2, c2):
            return MoveKind.ILLEGAL
        # Off-board origins have no bit to test
        if not is_valid_sq(r1, c1):
            return MoveKind.ILLEGAL

        player = state.player
        enemy = state.enemy

        if rules.require_own_piece and not is_bit_set(player.all, r1, c1):
            return MoveKind.ILLEGAL

        dr = r2 - r1
        dc = c2 - c1
        direction = state.turn.forward

        # Kings move in both directions
        if is_bit_set(player.kings, r1, c1):
            direction = dr

        if abs(dr) == 1 and abs(dc) == 1 and dr == direction:
            return MoveKind.STEP

        if abs(dr) == 2 and abs(dc) == 2:
            mr = (r1 + r2) // 2
            mc = (c1 + c2) // 2
            if is_bit_set(enemy.all, mr, mc):
                return MoveKind.JUMP

        return MoveKind.ILLEGAL


class MoveApplier:
    """Performs validated moves on a GameState in place."""

    @staticmethod
    def apply(
        state: GameState,
        r1: int, c1: int, r2: int, c2: int,
        rules: RulesConfig = STRICT_RULES,
    ) -> bool:
        """Validate and play a move. Returns False (state untouched) if illegal."""
        kind = MoveValidator.validate(state, r1, c1, r2, c2, rules)
        if kind == MoveKind.ILLEGAL:
            logger.debug("Rejected %s for %s", Move(r1, c1, r2, c2), state.turn.label)
            return False
        MoveApplier._perform(state, Move(r1, c1, r2, c2), kind)
        return True

    @staticmethod
    def _perform(state: GameState, move: Move, kind: MoveKind) -> None:
        r1, c1, r2, c2 = move
        player = state.player
        enemy = state.enemy
        was_king = is_bit_set(player.kings, r1, c1)

        player.men = clear_bit(player.men, r1, c1)
        player.kings = clear_bit(player.kings, r1, c1)

        if was_king:
            player.kings = set_bit(player.kings, r2, c2)
        else:
            player.men = set_bit(player.men, r2, c2)

        if kind == MoveKind.JUMP:
            mr, mc = move.midpoint
            enemy.men = clear_bit(enemy.men, mr, mc)
            enemy.kings = clear_bit(enemy.kings, mr, mc)

        crowned = crown_kings(state)
        logger.debug("%s played %s (%s)%s", state.turn.label, move, kind.name.lower(),
                     " and crowned" if crowned else "")
        state.turn = state.turn.opponent


def crown_kings(state: GameState) -> int:
    """
    Promote every Red man on row 0 and every Black man on row 7.

    Scans both back rows in full rather than just the moved piece's square.
    Returns the number of pieces crowned.
    """
    red_crowned = state.red.men & ROW_MASKS[RED_CROWN_ROW]
    black_crowned = state.black.men & ROW_MASKS[BLACK_CROWN_ROW]

    state.red.men &= ~red_crowned
    state.red.kings |= red_crowned
    state.black.men &= ~black_crowned
    state.black.kings |= black_crowned

    return popcount(red_crowned) + popcount(black_crowned)


def make_move(state: GameState, move: Move, rules: RulesConfig = STRICT_RULES) -> MoveKind:
    """Play a move, raising IllegalMove (state untouched) if it is not legal."""
    move = Move(*move)
    kind = MoveValidator.validate(state, *move, rules=rules)
    if kind == MoveKind.ILLEGAL:
        raise IllegalMove(move, f"illegal move for {state.turn.label}")
    MoveApplier._perform(state, move, kind)
    return kind


# Convenience functions
def validate_move(
    state: GameState, r1: int, c1: int, r2: int, c2: int,
    rules: RulesConfig = STRICT_RULES,
) -> MoveKind:
    """Classify a move for the side to move."""
    return MoveValidator.validate(state, r1, c1, r2, c2, rules)


def apply_move(
    state: GameState, r1: int, c1: int, r2: int, c2: int,
    rules: RulesConfig = STRICT_RULES,
) -> bool:
    """Play a move if legal. Returns whether it was played."""
    return MoveApplier.apply(state, r1, c1, r2, c2, rules)
