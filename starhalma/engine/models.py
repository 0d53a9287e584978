from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, StrictInt, model_validator

from starhalma.game.board import Board
from starhalma.game.types import Corner, HexCoord


class AgentKind(str, Enum):
    GREEDY = "greedy"
    MCTS = "mcts"


class Difficulty(str, Enum):
    EASY = "easy"
    MEDIUM = "medium"
    HARD = "hard"


# ------------------------------------------------------------------
# Game configuration
# ------------------------------------------------------------------


class PlayerConfig(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    player: Corner
    is_ai: bool = Field(default=False, alias="isAI")
    agent_kind: AgentKind | None = Field(default=None, alias="agentKind")
    difficulty: Difficulty | None = None


class GameConfig(BaseModel):
    """Immutable once a game starts."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    player_count: Literal[2, 3, 4, 6] = Field(alias="playerCount")
    active_players: tuple[Corner, ...] = Field(alias="activePlayers")
    player_configs: tuple[PlayerConfig, ...] = Field(default=(), alias="playerConfigs")

    @model_validator(mode="after")
    def _check_players(self) -> GameConfig:
        if len(self.active_players) != self.player_count:
            raise ValueError(
                f"playerCount is {self.player_count} but "
                f"{len(self.active_players)} active players were given"
            )
        if Corner.NONE in self.active_players:
            raise ValueError("NONE cannot be an active player")
        if len(set(self.active_players)) != len(self.active_players):
            raise ValueError("activePlayers contains duplicates")
        seen: set[Corner] = set()
        for pc in self.player_configs:
            if pc.player not in self.active_players:
                raise ValueError(f"playerConfigs refers to inactive player {pc.player.name}")
            if pc.player in seen:
                raise ValueError(f"playerConfigs lists {pc.player.name} twice")
            seen.add(pc.player)
        return self

    def player_config(self, player: Corner) -> PlayerConfig | None:
        for pc in self.player_configs:
            if pc.player is player:
                return pc
        return None


# ------------------------------------------------------------------
# Serialized state
# ------------------------------------------------------------------


class SerializedCell(BaseModel):
    q: StrictInt
    r: StrictInt
    s: StrictInt
    player: Corner = Field(strict=True)


class SerializedState(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    current_player: Corner = Field(alias="currentPlayer", strict=True)
    board: list[SerializedCell]


# ------------------------------------------------------------------
# Read-only state snapshot
# ------------------------------------------------------------------


@dataclass(frozen=True)
class GameStateView:
    board: Board
    current_player_index: int
    current_player: Corner
    selected: HexCoord | None
    valid_moves: frozenset[HexCoord]
    winner: Corner | None
