#!/usr/bin/env python3
"""
Terminal-based checkers client.

Two players share the keyboard and enter moves as 'r1 c1 r2 c2'.
"""

from __future__ import annotations
import argparse
import logging
import sys
from pathlib import Path
from typing import Callable, Optional

# Add parent to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from draughts.core.state import GameState, Side
from draughts.core.moves import (
    Move, RulesConfig, STRICT_RULES, LEGACY_RULES, make_move, parse_move
)
from draughts.errors import IllegalMove, MalformedInput

logger = logging.getLogger(__name__)

PROMPT = "Enter move (r1 c1 r2 c2): "


def print_board(state: GameState, output: Callable[[str], None] = print) -> None:
    """Print the board.

    Symbols:
        r = Red man      R = Red king
        b = Black man    B = Black king
        . = empty
    """
    output("")
    output(state.render())


def read_move(input_fn: Callable[[str], str] = input) -> Move:
    """Prompt for a move. End of input or bad text raises MalformedInput."""
    try:
        text = input_fn(PROMPT)
    except EOFError:
        text = None
    return parse_move(text)


def play_game(
    state: Optional[GameState] = None,
    input_fn: Callable[[str], str] = input,
    output: Callable[[str], None] = print,
    rules: RulesConfig = STRICT_RULES,
) -> Optional[Side]:
    """
    Run a game on the console until one side has no pieces left.

    Returns the winning side, or None if input ended first.
    """
    if state is None:
        state = GameState.new_game()
    logger.info("Game started (require_own_piece=%s)", rules.require_own_piece)

    while True:
        print_board(state, output)

        winner = state.get_winner()
        if winner is not None:
            output(f"\n{winner.label} wins!")
            logger.info("Game over: %s wins", winner.label)
            return winner

        try:
            move = read_move(input_fn)
        except MalformedInput as e:
            logger.info("Session ended: %s", e)
            return None

        try:
            make_move(state, move, rules)
        except IllegalMove:
            output("Invalid move! Try again.")


def main():
    parser = argparse.ArgumentParser(description='Checkers Terminal Client')
    parser.add_argument('--legacy-rules', action='store_true',
                        help='Do not check that the origin holds one of your pieces')
    parser.add_argument('--log-level', type=str, default='WARNING',
                        choices=['DEBUG', 'INFO', 'WARNING', 'ERROR'],
                        help='Logging verbosity')

    args = parser.parse_args()

    logging.basicConfig(
        level=getattr(logging, args.log_level),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    play_game(rules=LEGACY_RULES if args.legacy_rules else STRICT_RULES)


if __name__ == '__main__':
    main()
