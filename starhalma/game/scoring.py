"""Distance-to-goal heuristics shared by the AI agents."""

from __future__ import annotations

from starhalma.config import settings
from starhalma.game.board import Board
from starhalma.game.moves import Move
from starhalma.game.types import Corner, goal_center, opposite_corner


def forward_progress(move: Move, player: Corner) -> int:
    """How many steps closer to the goal center *move* brings the piece."""
    goal = goal_center(player)
    return move.origin.distance(goal) - move.destination.distance(goal)


def distance_sum(board: Board, player: Corner) -> int:
    goal = goal_center(player)
    return sum(coord.distance(goal) for coord in board.pieces_of(player))


def evaluate(
    board: Board,
    player: Corner,
    opponent: Corner,
    opponent_weight: float | None = None,
) -> float:
    """Higher is better for *player*: own pieces near goal, opponent's far from theirs."""
    if opponent_weight is None:
        opponent_weight = settings.opponent_distance_weight
    score = -float(distance_sum(board, player))
    if opponent is not Corner.NONE:
        score += opponent_weight * distance_sum(board, opponent)
    return score


def has_won(board: Board, player: Corner) -> bool:
    """True iff all of *player*'s pieces sit in the opposite triangle.

    The piece count must also match a full triangle, so a partially
    populated board never reports a win.
    """
    target = opposite_corner(player)
    count = 0
    for cell in board:
        if cell.occupant is player:
            if cell.home_corner is not target:
                return False
            count += 1
    return count == board.pieces_per_player
