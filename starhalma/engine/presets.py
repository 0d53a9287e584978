"""Preset seatings and helpers that turn setup choices into a GameConfig."""

from __future__ import annotations

from typing import Literal, Sequence

from starhalma.engine.models import AgentKind, Difficulty, GameConfig, PlayerConfig
from starhalma.game.types import Corner

PlayerType = Literal["human", "ai"]

DEFAULT_DIFFICULTY = Difficulty.MEDIUM
DEFAULT_AGENT_KIND = AgentKind.GREEDY

# Seat order per player count; the list order is also turn order.
PRESET_PLAYERS: dict[int, tuple[Corner, ...]] = {
    2: (Corner.SOUTH, Corner.NORTH),
    3: (Corner.NORTH, Corner.SOUTH_EAST, Corner.SOUTH_WEST),
    4: (Corner.NORTH, Corner.SOUTH_EAST, Corner.SOUTH, Corner.NORTH_WEST),
    6: (
        Corner.NORTH,
        Corner.NORTH_EAST,
        Corner.SOUTH_EAST,
        Corner.SOUTH,
        Corner.SOUTH_WEST,
        Corner.NORTH_WEST,
    ),
}


def clamp_player_count(count: int | None) -> int:
    """Map any requested count onto a supported one (five players become six)."""
    if not count or count < 2:
        return 2
    if count == 5:
        return 6
    return min(6, max(2, count))


def preset_config(player_count: int) -> GameConfig:
    """All-human config for a preset seating."""
    players = PRESET_PLAYERS[clamp_player_count(player_count)]
    return GameConfig(
        player_count=len(players),
        active_players=players,
        player_configs=tuple(PlayerConfig(player=p) for p in players),
    )


def build_config(
    player_types: Sequence[PlayerType] = (),
    player_count: int | None = None,
    difficulty: Difficulty = DEFAULT_DIFFICULTY,
    agent_kind: AgentKind = DEFAULT_AGENT_KIND,
) -> GameConfig:
    """Build a config from per-seat "human"/"ai" choices.

    Missing seat types default to human.  The player count comes from
    *player_count* when given, else from the number of seat types.
    """
    count = clamp_player_count(player_count if player_count else len(player_types) or None)
    players = PRESET_PLAYERS[count]
    configs: list[PlayerConfig] = []
    for index, player in enumerate(players):
        seat = player_types[index] if index < len(player_types) else "human"
        if seat == "ai":
            configs.append(PlayerConfig(
                player=player, is_ai=True, agent_kind=agent_kind, difficulty=difficulty,
            ))
        else:
            configs.append(PlayerConfig(player=player))
    return GameConfig(
        player_count=len(players), active_players=players, player_configs=tuple(configs),
    )


def build_ai_config(
    difficulty: Difficulty = DEFAULT_DIFFICULTY,
    agent_kind: AgentKind = DEFAULT_AGENT_KIND,
) -> GameConfig:
    """Human South against one AI North."""
    return GameConfig(
        player_count=2,
        active_players=(Corner.SOUTH, Corner.NORTH),
        player_configs=(
            PlayerConfig(player=Corner.SOUTH),
            PlayerConfig(
                player=Corner.NORTH, is_ai=True, agent_kind=agent_kind, difficulty=difficulty,
            ),
        ),
    )


def normalize_config(
    config: GameConfig,
    difficulty: Difficulty = DEFAULT_DIFFICULTY,
    agent_kind: AgentKind = DEFAULT_AGENT_KIND,
) -> GameConfig:
    """One player config per active player, in turn order.

    AI entries missing an agent kind or difficulty get the given defaults;
    active players without an entry become human.
    """
    configs: list[PlayerConfig] = []
    for player in config.active_players:
        existing = config.player_config(player)
        if existing is not None and existing.is_ai:
            configs.append(PlayerConfig(
                player=player,
                is_ai=True,
                agent_kind=existing.agent_kind or agent_kind,
                difficulty=existing.difficulty or difficulty,
            ))
        else:
            configs.append(PlayerConfig(player=player))
    return GameConfig(
        player_count=config.player_count,
        active_players=config.active_players,
        player_configs=tuple(configs),
    )
