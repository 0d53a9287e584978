"""Monte Carlo Tree Search over the star board.

The tree lives in a flat list of nodes addressed by index; each node keeps
its parent's index and its children's indices, and owns a cloned board.
Nothing survives between searches.

Only the searching player's moves are modelled in the tree.  Opponents act
during rollouts (uniformly random), and a rollout counts as a win when the
final evaluation is positive for the searching player.
"""

from __future__ import annotations

import logging
import math
import random
import threading
import time
from dataclasses import dataclass, field, replace
from typing import Sequence

from starhalma.config import settings
from starhalma.game.board import Board
from starhalma.game.moves import Move, apply_move, generate_moves
from starhalma.game.scoring import evaluate, forward_progress
from starhalma.game.types import Corner

logger = logging.getLogger(__name__)


# ------------------------------------------------------------------
# Node arena
# ------------------------------------------------------------------


@dataclass
class MCTSNode:
    board: Board
    player: Corner  # whose moves are generated at this node
    parent: int | None = None
    move: Move | None = None  # move that led here (None for root)
    untried_moves: list[Move] = field(default_factory=list)
    children: list[int] = field(default_factory=list)
    visits: int = 0
    wins: float = 0.0

    def uct_value(self, parent_visits: int, c: float) -> float:
        if self.visits == 0:
            return float("inf")
        exploit = self.wins / self.visits
        explore = c * math.sqrt(math.log(parent_visits) / self.visits)
        return exploit + explore


class SearchTree:
    """Index-addressed node storage for one search."""

    def __init__(self, root: MCTSNode) -> None:
        self.nodes: list[MCTSNode] = [root]

    def __len__(self) -> int:
        return len(self.nodes)

    @property
    def root(self) -> MCTSNode:
        return self.nodes[0]

    def add_child(self, parent_index: int, node: MCTSNode) -> int:
        node.parent = parent_index
        self.nodes.append(node)
        index = len(self.nodes) - 1
        self.nodes[parent_index].children.append(index)
        return index

    def best_child_uct(self, index: int, c: float) -> int:
        node = self.nodes[index]
        return max(
            node.children,
            key=lambda ci: self.nodes[ci].uct_value(node.visits, c),
        )

    def most_visited_child(self, index: int) -> int | None:
        children = self.nodes[index].children
        if not children:
            return None
        return max(children, key=lambda ci: self.nodes[ci].visits)

    def backpropagate(self, index: int | None, result: float) -> None:
        while index is not None:
            node = self.nodes[index]
            node.visits += 1
            if result > 0:
                node.wins += 1
            index = node.parent


@dataclass
class SearchStats:
    iterations: int = 0
    elapsed_ms: float = 0.0
    node_count: int = 0


# ------------------------------------------------------------------
# Rollout
# ------------------------------------------------------------------


def simulate(
    board: Board,
    player: Corner,
    opponent: Corner,
    active_players: Sequence[Corner],
    depth: int,
    rng: random.Random,
    opponent_weight: float | None = None,
) -> float:
    """Play up to *depth* plies from *board* and return the final evaluation.

    Turns cycle through *active_players* starting with *player*.  The
    searching player moves greedily; everyone else moves at random.  The
    rollout stops early when the player to move has no legal move.
    """
    sim = board.clone()
    order = list(active_players) or [player]
    turn = order.index(player) if player in order else 0
    for _ in range(depth):
        current = order[turn]
        moves = generate_moves(sim, current)
        if not moves:
            break
        if current is player:
            # Only the moved piece's distance changes, so the best evaluation
            # after the move is the one with the most forward progress.
            move = max(moves, key=lambda m: forward_progress(m, player))
        else:
            move = rng.choice(moves)
        sim.apply_move(move)
        turn = (turn + 1) % len(order)
    return evaluate(sim, player, opponent, opponent_weight)


# ------------------------------------------------------------------
# Main search entry point
# ------------------------------------------------------------------


def mcts_search(
    board: Board,
    player: Corner,
    opponent: Corner,
    active_players: Sequence[Corner],
    *,
    time_limit_ms: float | None = None,
    exploration_constant: float | None = None,
    simulation_depth: int | None = None,
    opponent_weight: float | None = None,
    rng: random.Random | None = None,
    cancel_event: threading.Event | None = None,
) -> tuple[Move | None, SearchStats]:
    """Run a time-boxed search and return ``(best_move, stats)``.

    The caller's *board* is never mutated.  The loop checks the clock once
    per iteration, so it may overrun the budget by one iteration.  Setting
    *cancel_event* stops the search early with the best move found so far.
    """
    if time_limit_ms is None:
        time_limit_ms = settings.mcts_default_time_limit_ms
    if exploration_constant is None:
        exploration_constant = settings.mcts_exploration_constant
    if simulation_depth is None:
        simulation_depth = settings.mcts_simulation_depth
    if rng is None:
        rng = random.Random()

    root_board = board.clone()
    root_moves = generate_moves(root_board, player)
    stats = SearchStats()
    if not root_moves:
        return None, stats

    tree = SearchTree(MCTSNode(board=root_board, player=player, untried_moves=root_moves))

    start = time.monotonic()
    deadline = start + time_limit_ms / 1000.0
    while time.monotonic() < deadline:
        if cancel_event is not None and cancel_event.is_set():
            break
        _run_one_iteration(
            tree, player, opponent, active_players,
            exploration_constant, simulation_depth, opponent_weight, rng,
        )
        stats.iterations += 1

    stats.elapsed_ms = (time.monotonic() - start) * 1000.0
    stats.node_count = len(tree)

    best_index = tree.most_visited_child(0)
    best = tree.nodes[best_index] if best_index is not None else None
    if best is not None and best.move is not None:
        win_rate = best.wins / best.visits if best.visits else 0.0
        return replace(best.move, score=win_rate), stats

    remaining = tree.root.untried_moves
    if remaining:
        return rng.choice(remaining), stats
    return None, stats


def _run_one_iteration(
    tree: SearchTree,
    player: Corner,
    opponent: Corner,
    active_players: Sequence[Corner],
    c: float,
    depth: int,
    opponent_weight: float | None,
    rng: random.Random,
) -> None:
    """One MCTS iteration: select → expand → simulate → backpropagate."""
    index = 0
    node = tree.nodes[index]

    # 1. SELECT
    while not node.untried_moves and node.children:
        index = tree.best_child_uct(index, c)
        node = tree.nodes[index]

    # 2. EXPAND
    if node.untried_moves:
        move = node.untried_moves.pop(rng.randrange(len(node.untried_moves)))
        child_board = apply_move(node.board, move)
        child = MCTSNode(
            board=child_board,
            player=player,
            move=move,
            untried_moves=generate_moves(child_board, player),
        )
        index = tree.add_child(index, child)
        node = child

    # 3. SIMULATE
    result = simulate(
        node.board, player, opponent, active_players, depth, rng, opponent_weight,
    )

    # 4. BACKPROPAGATE
    tree.backpropagate(index, result)
