"""AI-vs-AI arena: play full games between agents and report results."""

from __future__ import annotations

import logging
import math
import time
from dataclasses import dataclass, field
from typing import Callable

from starhalma.engine.agent_manager import AgentManager
from starhalma.engine.errors import AgentError
from starhalma.engine.models import GameConfig
from starhalma.engine.session import GameSession
from starhalma.game.types import Corner

logger = logging.getLogger(__name__)


@dataclass
class GameRecord:
    winner: Corner | None
    turns: int
    duration_ms: float
    final_state: str  # exported JSON of the final position
    skipped_turns: dict[Corner, int] = field(default_factory=dict)


@dataclass
class ArenaResult:
    """Aggregated results from an arena run."""

    num_games: int
    wins: dict[Corner, int]
    draws: int
    turn_counts: list[int]
    game_durations_ms: list[float]

    def win_rate(self, player: Corner) -> float:
        return self.wins.get(player, 0) / max(self.num_games, 1)

    def confidence_interval_95(self, player: Corner) -> tuple[float, float]:
        """95% Wilson score confidence interval for win rate."""
        n = self.num_games
        if n == 0:
            return (0.0, 0.0)
        p = self.win_rate(player)
        z = 1.96
        denom = 1 + z**2 / n
        center = (p + z**2 / (2 * n)) / denom
        margin = z * math.sqrt((p * (1 - p) + z**2 / (4 * n)) / n) / denom
        return (max(0.0, center - margin), min(1.0, center + margin))

    def avg_turns(self) -> float:
        return sum(self.turn_counts) / max(len(self.turn_counts), 1)

    def summary(self) -> str:
        lines = [f"Arena Results ({self.num_games} games)"]
        lines.append("=" * 60)
        for player in self.wins:
            wr = self.win_rate(player)
            ci_lo, ci_hi = self.confidence_interval_95(player)
            lines.append(
                f"  {player.name:>12s}: {self.wins[player]:3d} wins "
                f"({wr:5.1%})  [95% CI: {ci_lo:.1%}-{ci_hi:.1%}]"
            )
        lines.append(f"  {'Draws':>12s}: {self.draws}")
        lines.append(f"  Avg turns: {self.avg_turns():.1f}")
        if self.game_durations_ms:
            avg_ms = sum(self.game_durations_ms) / len(self.game_durations_ms)
            total_s = sum(self.game_durations_ms) / 1000
            lines.append(f"  Avg game: {avg_ms:.0f}ms  |  Total: {total_s:.1f}s")
        return "\n".join(lines)


def play_game(
    config: GameConfig,
    max_turns: int = 500,
    seed: int | None = None,
) -> GameRecord:
    """Play one game where every active player is an AI.

    A player with no legal move passes.  The game is a draw when every
    active player is stuck in the same round or *max_turns* is reached.
    """
    session = GameSession(config)
    manager = AgentManager(config, seed=seed)
    missing = [p.name for p in config.active_players if not manager.is_ai_player(p)]
    if missing:
        raise AgentError(f"Arena games need an AI for every player; missing {missing}")

    skipped: dict[Corner, int] = {p: 0 for p in config.active_players}
    consecutive_passes = 0
    turns = 0
    start = time.monotonic()

    while not session.is_over and turns < max_turns:
        player = session.current_player
        if session.skip_turn():
            skipped[player] += 1
            consecutive_passes += 1
            if consecutive_passes >= len(config.active_players):
                logger.info("Every player is stuck; game drawn")
                break
            continue
        consecutive_passes = 0

        move = manager.get_ai_move(player, session.board)
        if move is None or not session.play_move(move):
            raise AgentError(f"{player.name} proposed an illegal move: {move!r}")
        turns += 1

    duration_ms = (time.monotonic() - start) * 1000.0
    logger.info(
        "Game finished: winner=%s turns=%d elapsed=%.0fms",
        session.winner.name if session.winner else "draw", turns, duration_ms,
    )
    return GameRecord(
        winner=session.winner,
        turns=turns,
        duration_ms=duration_ms,
        final_state=session.export_state(),
        skipped_turns=skipped,
    )


def run_arena(
    config: GameConfig,
    num_games: int = 10,
    base_seed: int = 0,
    max_turns: int = 500,
    progress_callback: Callable[[int, int], None] | None = None,
) -> ArenaResult:
    """Play *num_games* and return aggregated stats.

    Game *i* seeds its agents with ``base_seed + i``.
    """
    result = ArenaResult(
        num_games=num_games,
        wins={p: 0 for p in config.active_players},
        draws=0,
        turn_counts=[],
        game_durations_ms=[],
    )

    for game_idx in range(num_games):
        record = play_game(config, max_turns=max_turns, seed=base_seed + game_idx)
        if record.winner is None:
            result.draws += 1
        else:
            result.wins[record.winner] += 1
        result.turn_counts.append(record.turns)
        result.game_durations_ms.append(record.duration_ms)

        if progress_callback:
            progress_callback(game_idx + 1, num_games)

    return result
