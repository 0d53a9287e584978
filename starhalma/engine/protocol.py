from __future__ import annotations

import threading
from typing import Protocol, runtime_checkable

from starhalma.game.board import Board
from starhalma.game.moves import Move
from starhalma.game.types import Corner


@runtime_checkable
class Agent(Protocol):
    """Interface every AI opponent implements.

    Agents are handed a clone of the live board and may mutate it freely.
    """

    player: Corner

    def get_best_move(
        self,
        board: Board,
        cancel_event: threading.Event | None = None,
    ) -> Move | None:
        ...


@runtime_checkable
class SupportsOpponent(Protocol):
    def set_opponent(self, opponent: Corner) -> None:
        ...


@runtime_checkable
class SupportsTimeLimit(Protocol):
    def set_time_limit(self, time_limit_ms: int) -> None:
        ...
