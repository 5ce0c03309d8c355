"""Extended tests for move validation and application."""

import pytest
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent))

from draughts.core.state import GameState, Side
from draughts.core.moves import (
    Move, MoveKind, MoveValidator, MoveApplier, RulesConfig,
    LEGACY_RULES, STRICT_RULES,
    apply_move, validate_move, make_move, crown_kings
)
from draughts.core.bitboard import popcount


class TestDestinationChecks:
    @pytest.mark.parametrize("r2,c2", [(-1, 0), (0, -1), (8, 1), (3, 8)])
    def test_off_board_destination(self, r2, c2):
        state = GameState.from_squares(red_kings=[(0, 1)], black_kings=[(7, 0)])
        state.turn = Side.RED
        assert validate_move(state, 0, 1, r2, c2) == MoveKind.ILLEGAL

    def test_occupied_by_own_piece(self):
        state = GameState.new_game()
        assert validate_move(state, 6, 1, 5, 0) == MoveKind.ILLEGAL

    def test_occupied_by_enemy_piece(self):
        state = GameState.from_squares(red_men=[(4, 1)], black_men=[(3, 0)])
        assert validate_move(state, 4, 1, 3, 0) == MoveKind.ILLEGAL

    def test_off_board_origin(self):
        state = GameState.new_game()
        assert validate_move(state, 8, 0, 7, 1, LEGACY_RULES) == MoveKind.ILLEGAL
        assert validate_move(state, -1, 0, 0, 1, LEGACY_RULES) == MoveKind.ILLEGAL


class TestManSteps:
    def test_red_steps_toward_row_zero(self):
        state = GameState.from_squares(red_men=[(4, 3)], black_men=[(0, 1)])
        assert validate_move(state, 4, 3, 3, 2) == MoveKind.STEP
        assert validate_move(state, 4, 3, 3, 4) == MoveKind.STEP
        assert validate_move(state, 4, 3, 5, 2) == MoveKind.ILLEGAL
        assert validate_move(state, 4, 3, 5, 4) == MoveKind.ILLEGAL

    def test_black_steps_toward_row_seven(self):
        state = GameState.from_squares(
            red_men=[(7, 0)], black_men=[(3, 2)], turn=Side.BLACK
        )
        assert validate_move(state, 3, 2, 4, 1) == MoveKind.STEP
        assert validate_move(state, 3, 2, 4, 3) == MoveKind.STEP
        assert validate_move(state, 3, 2, 2, 1) == MoveKind.ILLEGAL

    @pytest.mark.parametrize("r2,c2", [(3, 3), (4, 5), (2, 3), (2, 5), (4, 3)])
    def test_non_diagonal_or_long_moves(self, r2, c2):
        state = GameState.from_squares(red_men=[(4, 3)], black_men=[(0, 1)])
        assert validate_move(state, 4, 3, r2, c2) == MoveKind.ILLEGAL


class TestKings:
    def test_king_steps_both_ways(self):
        state = GameState.from_squares(red_kings=[(4, 3)], black_men=[(0, 1)])
        for r2, c2 in [(3, 2), (3, 4), (5, 2), (5, 4)]:
            assert validate_move(state, 4, 3, r2, c2) == MoveKind.STEP

    def test_black_king_steps_backward(self):
        state = GameState.from_squares(
            red_men=[(7, 0)], black_kings=[(3, 2)], turn=Side.BLACK
        )
        assert validate_move(state, 3, 2, 2, 1) == MoveKind.STEP

    def test_king_stays_king_after_move(self):
        state = GameState.from_squares(red_kings=[(4, 3)], black_men=[(0, 1)])
        assert apply_move(state, 4, 3, 5, 4)
        assert state.piece_at(5, 4) == 'R'
        assert state.red.men == 0

    def test_king_jumps_backward(self):
        state = GameState.from_squares(red_kings=[(2, 1)], black_men=[(3, 2), (0, 1)])
        assert apply_move(state, 2, 1, 4, 3)
        assert state.piece_at(4, 3) == 'R'
        assert state.piece_at(3, 2) == '.'
        assert state.black.count() == 1


class TestJumps:
    def test_jump_requires_enemy_on_midpoint(self):
        state = GameState.new_game()
        before = state.copy()
        assert validate_move(state, 5, 0, 3, 2) == MoveKind.ILLEGAL
        assert not apply_move(state, 5, 0, 3, 2)
        assert state == before

    def test_cannot_jump_own_piece(self):
        state = GameState.from_squares(red_men=[(5, 2), (4, 3)], black_men=[(0, 1)])
        assert validate_move(state, 5, 2, 3, 4) == MoveKind.ILLEGAL

    def test_jump_over_enemy_king(self):
        state = GameState.from_squares(red_men=[(5, 2)], black_kings=[(4, 3)])
        assert validate_move(state, 5, 2, 3, 4) == MoveKind.JUMP
        assert apply_move(state, 5, 2, 3, 4)
        assert state.black.kings == 0

    def test_jump_removes_exactly_one_enemy(self):
        state = GameState.from_squares(
            red_men=[(5, 2)], black_men=[(4, 3), (4, 1), (2, 5)]
        )
        assert apply_move(state, 5, 2, 3, 4)
        assert state.black.count() == 2
        assert state.piece_at(4, 1) == 'b'
        assert state.piece_at(2, 5) == 'b'
        assert state.piece_at(4, 3) == '.'

    def test_men_may_jump_backward(self):
        state = GameState.from_squares(red_men=[(4, 3)], black_men=[(5, 4), (0, 1)])
        assert validate_move(state, 4, 3, 6, 5) == MoveKind.JUMP

    def test_jump_ends_turn(self):
        # A second capture is available but the turn passes to Black
        state = GameState.from_squares(
            red_men=[(6, 1)], black_men=[(5, 2), (3, 4)]
        )
        assert apply_move(state, 6, 1, 4, 3)
        assert state.turn is Side.BLACK
        assert not apply_move(state, 4, 3, 2, 5)

    def test_three_square_jump_rejected(self):
        state = GameState.from_squares(red_men=[(6, 1)], black_men=[(5, 2), (4, 3)])
        assert validate_move(state, 6, 1, 3, 4) == MoveKind.ILLEGAL


class TestPromotion:
    def test_red_man_crowned_on_row_zero(self):
        state = GameState.from_squares(red_men=[(1, 2)], black_men=[(5, 0)])
        assert apply_move(state, 1, 2, 0, 1)
        assert state.piece_at(0, 1) == 'R'
        assert state.red.men == 0

    def test_black_man_crowned_on_row_seven(self):
        state = GameState.from_squares(
            red_men=[(2, 1)], black_men=[(6, 1)], turn=Side.BLACK
        )
        assert apply_move(state, 6, 1, 7, 0)
        assert state.piece_at(7, 0) == 'B'

    def test_crowned_by_jump(self):
        state = GameState.from_squares(red_men=[(2, 3)], black_men=[(1, 2), (6, 1)])
        assert apply_move(state, 2, 3, 0, 1)
        assert state.piece_at(0, 1) == 'R'

    def test_red_man_on_row_seven_not_crowned(self):
        state = GameState.from_squares(red_kings=[(6, 1)], black_men=[(0, 1)])
        apply_move(state, 6, 1, 7, 0)
        assert state.piece_at(7, 0) == 'R'
        state = GameState.from_squares(red_men=[(7, 2)], black_men=[(0, 1)])
        crown_kings(state)
        assert state.piece_at(7, 2) == 'r'

    def test_crown_scans_whole_back_row(self):
        state = GameState.from_squares(
            red_men=[(0, 1), (0, 5), (4, 3)], black_men=[(7, 0), (2, 1)]
        )
        assert crown_kings(state) == 3
        assert popcount(state.red.kings) == 2
        assert state.piece_at(7, 0) == 'B'
        assert state.piece_at(4, 3) == 'r'
        assert state.piece_at(2, 1) == 'b'

    def test_any_move_crowns_stray_back_row_men(self):
        state = GameState.from_squares(
            red_men=[(0, 3), (5, 0)], black_men=[(2, 1)]
        )
        assert apply_move(state, 5, 0, 4, 1)
        assert state.piece_at(0, 3) == 'R'


class TestOriginCheck:
    def test_empty_origin_rejected(self):
        state = GameState.new_game()
        assert validate_move(state, 4, 1, 3, 0) == MoveKind.ILLEGAL

    def test_opponent_piece_rejected(self):
        state = GameState.from_squares(red_men=[(7, 0)], black_men=[(4, 3)])
        # Black man stepping toward row 3 would match Red's direction
        assert validate_move(state, 4, 3, 3, 2) == MoveKind.ILLEGAL

    def test_legacy_rules_accept_empty_origin(self):
        state = GameState.new_game()
        assert validate_move(state, 4, 1, 3, 0, LEGACY_RULES) == MoveKind.STEP
        assert apply_move(state, 4, 1, 3, 0, LEGACY_RULES)
        assert state.red.count() == 13

    def test_legacy_rules_accept_opponent_piece(self):
        state = GameState.from_squares(red_men=[(7, 0)], black_men=[(4, 3)])
        assert validate_move(state, 4, 3, 3, 2, LEGACY_RULES) == MoveKind.STEP

    def test_rules_config_defaults(self):
        assert RulesConfig().require_own_piece
        assert STRICT_RULES.require_own_piece
        assert not LEGACY_RULES.require_own_piece


class TestClassInterface:
    def test_validator_and_applier(self):
        state = GameState.new_game()
        assert MoveValidator.validate(state, 5, 0, 4, 1) == MoveKind.STEP
        assert MoveApplier.apply(state, 5, 0, 4, 1)
        assert not MoveApplier.apply(state, 5, 0, 4, 1)


class TestGameSequence:
    MOVES = [
        (Move(5, 2, 4, 3), MoveKind.STEP),
        (Move(2, 1, 3, 2), MoveKind.STEP),
        (Move(4, 3, 2, 1), MoveKind.JUMP),
        (Move(1, 0, 3, 2), MoveKind.JUMP),
    ]

    def test_sequence_keeps_sets_disjoint(self):
        state = GameState.new_game()
        for move, kind in self.MOVES:
            mover = state.turn
            assert make_move(state, move) == kind
            assert state.turn is mover.opponent
            state.check_invariants()

        assert state.red.count() == 11
        assert state.black.count() == 11
        assert state.piece_at(3, 2) == 'b'
        assert state.piece_at(2, 1) == '.'

    def test_rejection_is_bit_identical(self):
        state = GameState.new_game()
        for move, _ in self.MOVES[:2]:
            make_move(state, move)
        before = state.copy()
        for r1, c1, r2, c2 in [(4, 3, 2, 5), (4, 3, 5, 4), (2, 1, 3, 0), (6, 1, 4, 3), (4, 3, 4, 3)]:
            assert not apply_move(state, r1, c1, r2, c2)
            assert state == before
