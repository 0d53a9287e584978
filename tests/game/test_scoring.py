"""Tests for distance heuristics and the win condition."""

from __future__ import annotations

import pytest

from starhalma.game.board import Board, build_board
from starhalma.game.moves import Move
from starhalma.game.scoring import distance_sum, evaluate, forward_progress, has_won
from starhalma.game.types import Corner, HexCoord, goal_center


def _cells_of(board: Board, corner: Corner) -> list[HexCoord]:
    return [c.coord for c in board if c.home_corner is corner]


def test_forward_progress_toward_goal() -> None:
    goal = goal_center(Corner.SOUTH)
    origin = HexCoord(0, 0)
    toward = HexCoord(1, -1)
    assert toward.distance(goal) < origin.distance(goal)
    assert forward_progress(Move(origin, toward), Corner.SOUTH) == 1
    assert forward_progress(Move(toward, origin), Corner.SOUTH) == -1


def test_distance_sum(open_board: Board) -> None:
    open_board.set_occupant(HexCoord(0, 0), Corner.SOUTH)
    assert distance_sum(open_board, Corner.SOUTH) == 8


def test_evaluate_weights_opponent(star_board: Board) -> None:
    own = distance_sum(star_board, Corner.SOUTH)
    theirs = distance_sum(star_board, Corner.NORTH)
    assert evaluate(star_board, Corner.SOUTH, Corner.NORTH) == pytest.approx(-own + 0.5 * theirs)
    assert evaluate(star_board, Corner.SOUTH, Corner.NORTH, opponent_weight=0.0) == -own


def test_evaluate_symmetric_at_start(star_board: Board) -> None:
    assert evaluate(star_board, Corner.SOUTH, Corner.NORTH) == evaluate(
        star_board, Corner.NORTH, Corner.SOUTH
    )


class TestWinCondition:
    def test_not_won_at_start(self, star_board: Board) -> None:
        assert not has_won(star_board, Corner.SOUTH)
        assert not has_won(star_board, Corner.NORTH)

    def test_full_goal_triangle_wins(self) -> None:
        board = build_board([Corner.NORTH])
        board.clear()
        for coord in _cells_of(board, Corner.NORTH):
            board.set_occupant(coord, Corner.SOUTH)
        assert has_won(board, Corner.SOUTH)

    def test_nine_of_ten_does_not_win(self) -> None:
        board = build_board([Corner.NORTH])
        board.clear()
        for coord in _cells_of(board, Corner.NORTH)[:9]:
            board.set_occupant(coord, Corner.SOUTH)
        assert not has_won(board, Corner.SOUTH)

    def test_one_piece_outside_goal_does_not_win(self) -> None:
        board = build_board([Corner.NORTH])
        board.clear()
        goal_cells = _cells_of(board, Corner.NORTH)
        for coord in goal_cells[:9]:
            board.set_occupant(coord, Corner.SOUTH)
        board.set_occupant(HexCoord(0, 0), Corner.SOUTH)
        assert not has_won(board, Corner.SOUTH)

    def test_other_players_in_goal_do_not_matter(self) -> None:
        board = build_board([Corner.NORTH])
        board.clear()
        for coord in _cells_of(board, Corner.NORTH):
            board.set_occupant(coord, Corner.SOUTH)
        board.set_occupant(HexCoord(0, 0), Corner.NORTH)
        assert has_won(board, Corner.SOUTH)
