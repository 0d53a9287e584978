from __future__ import annotations

import pytest

from starhalma.engine.models import GameConfig
from starhalma.engine.presets import preset_config
from starhalma.game.board import Board, build_board, hexagon_coords


@pytest.fixture
def two_player_config() -> GameConfig:
    return preset_config(2)


@pytest.fixture
def six_player_config() -> GameConfig:
    return preset_config(6)


@pytest.fixture
def star_board(two_player_config: GameConfig) -> Board:
    return build_board(two_player_config.active_players)


@pytest.fixture
def open_board() -> Board:
    """Empty central hexagon, no corner triangles."""
    return Board.from_region(hexagon_coords())
