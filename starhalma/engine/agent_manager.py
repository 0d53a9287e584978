"""AgentManager: one AI agent per AI-controlled player."""

from __future__ import annotations

import asyncio
import logging
import threading

from starhalma.config import settings
from starhalma.engine.bot_strategy import create_agent
from starhalma.engine.models import Difficulty, GameConfig
from starhalma.engine.protocol import Agent, SupportsOpponent, SupportsTimeLimit
from starhalma.game.board import Board
from starhalma.game.moves import Move
from starhalma.game.types import Corner

logger = logging.getLogger(__name__)


class AgentManager:
    """Builds and drives the agents for every ``is_ai`` player config.

    Each agent's opponent is the next active player in turn order.  Agents
    only ever see clones of the board handed to :meth:`get_ai_move`.
    """

    def __init__(self, config: GameConfig, seed: int | None = None) -> None:
        self.config = config
        self.agents: dict[Corner, Agent] = {}
        for index, pc in enumerate(config.player_configs):
            if not pc.is_ai:
                continue
            kind = pc.agent_kind.value if pc.agent_kind else settings.default_agent_kind
            time_limit = settings.time_limit_for(pc.difficulty)
            opponent = self.opponent_of(pc.player)
            self.agents[pc.player] = create_agent(
                kind,
                player=pc.player,
                opponent=opponent,
                active_players=config.active_players,
                time_limit_ms=time_limit,
                seed=None if seed is None else seed + index,
            )
            logger.info(
                "AI initialized: player=%s kind=%s difficulty=%s time=%dms",
                pc.player.name, kind,
                pc.difficulty.value if pc.difficulty else "medium", time_limit,
            )

    def opponent_of(self, player: Corner) -> Corner:
        active = self.config.active_players
        return active[(active.index(player) + 1) % len(active)]

    def is_ai_player(self, player: Corner) -> bool:
        return player in self.agents

    def get_ai_move(
        self,
        player: Corner,
        board: Board,
        cancel_event: threading.Event | None = None,
    ) -> Move | None:
        return self._think(player, board.clone(), cancel_event)

    async def get_ai_move_async(
        self,
        player: Corner,
        board: Board,
        cancel_event: threading.Event | None = None,
    ) -> Move | None:
        """Run the search on a worker thread so the event loop stays responsive.

        The board is cloned before the thread starts; setting *cancel_event*
        makes a running search return its best move so far.
        """
        snapshot = board.clone()
        return await asyncio.to_thread(self._think, player, snapshot, cancel_event)

    def _think(
        self,
        player: Corner,
        snapshot: Board,
        cancel_event: threading.Event | None,
    ) -> Move | None:
        agent = self.agents.get(player)
        if agent is None:
            logger.warning("No AI agent for player %s", player.name)
            return None
        logger.debug("AI %s is thinking", player.name)
        return agent.get_best_move(snapshot, cancel_event)

    def get_ai_difficulty(self, player: Corner) -> Difficulty | None:
        if not self.is_ai_player(player):
            return None
        pc = self.config.player_config(player)
        if pc is None or pc.difficulty is None:
            return Difficulty.MEDIUM
        return pc.difficulty

    def set_ai_difficulty(self, player: Corner, difficulty: Difficulty) -> None:
        """Change the agent's search budget; the game config is left as is."""
        agent = self.agents.get(player)
        if isinstance(agent, SupportsTimeLimit):
            agent.set_time_limit(settings.time_limit_for(difficulty))

    def update_opponents(self) -> None:
        for player, agent in self.agents.items():
            if isinstance(agent, SupportsOpponent):
                agent.set_opponent(self.opponent_of(player))
