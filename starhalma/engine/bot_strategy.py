"""AI agents and the registry that maps agent kinds to agent factories."""

from __future__ import annotations

import logging
import random as _random
import threading
from dataclasses import replace
from typing import Callable, Sequence

from starhalma.config import settings
from starhalma.engine.errors import AgentError
from starhalma.engine.mcts import SearchStats, mcts_search
from starhalma.engine.protocol import Agent
from starhalma.game.board import Board
from starhalma.game.moves import Move, generate_moves
from starhalma.game.scoring import forward_progress
from starhalma.game.types import Corner, goal_center

logger = logging.getLogger(__name__)


def _check_player(player: Corner) -> None:
    if player is Corner.NONE:
        raise AgentError("An agent cannot play for NONE")


class GreedyAgent:
    """One-ply lookahead: take the move with the most forward progress.

    Ties go to the move that ends closest to the goal center, then to a
    random pick among whatever is still tied.
    """

    def __init__(self, player: Corner, seed: int | None = None) -> None:
        _check_player(player)
        self.player = player
        self._rng = _random.Random(seed)

    def get_best_move(
        self,
        board: Board,
        cancel_event: threading.Event | None = None,
    ) -> Move | None:
        moves = generate_moves(board, self.player)
        if not moves:
            return None
        goal = goal_center(self.player)
        ranked = [
            ((forward_progress(m, self.player), -m.destination.distance(goal)), m)
            for m in moves
        ]
        best_key = max(key for key, _ in ranked)
        candidates = [m for key, m in ranked if key == best_key]
        choice = self._rng.choice(candidates)
        return replace(choice, score=float(best_key[0]))


class MCTSAgent:
    """Time-boxed Monte Carlo Tree Search agent."""

    def __init__(
        self,
        player: Corner,
        opponent: Corner,
        active_players: Sequence[Corner],
        time_limit_ms: int | None = None,
        exploration_constant: float | None = None,
        simulation_depth: int | None = None,
        seed: int | None = None,
    ) -> None:
        _check_player(player)
        self.player = player
        self.opponent = opponent
        self.active_players = tuple(active_players)
        self.time_limit_ms = (
            time_limit_ms if time_limit_ms is not None
            else settings.mcts_default_time_limit_ms
        )
        self.exploration_constant = exploration_constant
        self.simulation_depth = simulation_depth
        self._rng = _random.Random(seed)
        self.last_stats: SearchStats | None = None

    def set_time_limit(self, time_limit_ms: int) -> None:
        self.time_limit_ms = time_limit_ms

    def set_opponent(self, opponent: Corner) -> None:
        self.opponent = opponent

    def get_best_move(
        self,
        board: Board,
        cancel_event: threading.Event | None = None,
    ) -> Move | None:
        move, stats = mcts_search(
            board,
            self.player,
            self.opponent,
            self.active_players,
            time_limit_ms=self.time_limit_ms,
            exploration_constant=self.exploration_constant,
            simulation_depth=self.simulation_depth,
            rng=self._rng,
            cancel_event=cancel_event,
        )
        self.last_stats = stats
        logger.info(
            "MCTS search: player=%s iters=%d nodes=%d elapsed=%.0fms budget=%dms",
            self.player.name, stats.iterations, stats.node_count,
            stats.elapsed_ms, self.time_limit_ms,
        )
        return move


# ---------------------------------------------------------------------------
# Registry
# ---------------------------------------------------------------------------

_AGENT_FACTORIES: dict[str, Callable[..., Agent]] = {
    "greedy": lambda player, seed=None, **_kwargs: GreedyAgent(player, seed=seed),
    "mcts": lambda player, opponent, active_players, time_limit_ms=None, seed=None, **_kwargs: MCTSAgent(
        player, opponent, active_players, time_limit_ms=time_limit_ms, seed=seed,
    ),
}


def create_agent(kind: str, **kwargs: object) -> Agent:
    """Create an agent for the given *kind* (``"greedy"`` or ``"mcts"``)."""
    kind = getattr(kind, "value", kind)
    factory = _AGENT_FACTORIES.get(kind)
    if factory is None:
        raise ValueError(f"Unknown agent kind: {kind!r}")
    return factory(**kwargs)


def register_agent(kind: str, factory: Callable[..., Agent]) -> None:
    """Register a new agent factory."""
    _AGENT_FACTORIES[kind] = factory


def available_agents() -> list[str]:
    return sorted(_AGENT_FACTORIES)
