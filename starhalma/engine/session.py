"""GameSession owns the live board and drives selection, moves and turns."""

from __future__ import annotations

import logging

from pydantic import ValidationError

from starhalma.engine.errors import InvalidStateError
from starhalma.engine.models import (
    GameConfig,
    GameStateView,
    SerializedCell,
    SerializedState,
)
from starhalma.game.board import Board, create_board
from starhalma.game import moves
from starhalma.game.moves import Move, find_destinations, generate_moves
from starhalma.game.scoring import has_won
from starhalma.game.types import Corner, HexCoord

logger = logging.getLogger(__name__)


class GameSession:
    """Turn/selection state machine for one game.

    Idle → (select_piece) → Selected → (move_piece) → Idle.  Once a winner
    is set every select/move is rejected.  The session is the only holder
    of the live board; callers get clones through :meth:`get_state`.
    """

    def __init__(self, config: GameConfig) -> None:
        self.config = config
        self.board: Board = create_board(config)
        self.current_player_index = 0
        self.selected: HexCoord | None = None
        self.valid_moves: set[HexCoord] = set()
        self.winner: Corner | None = None

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    @property
    def active_players(self) -> tuple[Corner, ...]:
        return self.config.active_players

    @property
    def current_player(self) -> Corner:
        return self.active_players[self.current_player_index]

    @property
    def is_over(self) -> bool:
        return self.winner is not None

    def get_state(self) -> GameStateView:
        return GameStateView(
            board=self.board.clone(),
            current_player_index=self.current_player_index,
            current_player=self.current_player,
            selected=self.selected,
            valid_moves=frozenset(self.valid_moves),
            winner=self.winner,
        )

    def legal_moves(self, player: Corner | None = None) -> list[Move]:
        return generate_moves(self.board, player if player is not None else self.current_player)

    def has_legal_move(self, player: Corner | None = None) -> bool:
        return moves.has_legal_move(self.board, player if player is not None else self.current_player)

    # ------------------------------------------------------------------
    # Actions
    # ------------------------------------------------------------------

    def select_piece(self, coord: HexCoord) -> bool:
        if self.winner is not None:
            return False
        if self.board.occupant_at(coord) is not self.current_player:
            return False
        self.selected = coord
        self.valid_moves = find_destinations(self.board, coord)
        logger.debug(
            "%s selected %r (%d destinations)",
            self.current_player.name, coord, len(self.valid_moves),
        )
        return True

    def move_piece(self, dest: HexCoord) -> bool:
        """Move the selected piece to *dest*.

        A rejected move leaves the current selection untouched.
        """
        if self.winner is not None or self.selected is None:
            return False
        if dest not in self.valid_moves:
            return False

        mover = self.current_player
        self.board.apply_move(Move(self.selected, dest))
        logger.debug("%s moved %r -> %r", mover.name, self.selected, dest)

        if has_won(self.board, mover):
            self.winner = mover
            logger.info("%s wins", mover.name)
        else:
            self._advance_turn()

        self.selected = None
        self.valid_moves = set()
        return True

    def deselect_piece(self) -> None:
        self.selected = None
        self.valid_moves = set()

    def play_move(self, move: Move) -> bool:
        """Select and move in one step; the selection is cleared on failure."""
        if not self.select_piece(move.origin):
            return False
        if not self.move_piece(move.destination):
            self.deselect_piece()
            return False
        return True

    def skip_turn(self) -> bool:
        """Pass the turn, allowed only when the current player has no legal move."""
        if self.winner is not None or self.has_legal_move():
            return False
        logger.info("%s has no legal move; passing", self.current_player.name)
        self.deselect_piece()
        self._advance_turn()
        return True

    def reset(self) -> None:
        self.board = create_board(self.config)
        self.current_player_index = 0
        self.selected = None
        self.valid_moves = set()
        self.winner = None

    def _advance_turn(self) -> None:
        self.current_player_index = (self.current_player_index + 1) % len(self.active_players)

    # ------------------------------------------------------------------
    # Serialization
    # ------------------------------------------------------------------

    def export_state(self) -> str:
        state = SerializedState(
            current_player=self.current_player,
            board=[
                SerializedCell(q=c.coord.q, r=c.coord.r, s=c.coord.s, player=c.occupant)
                for c in self.board
            ],
        )
        return state.model_dump_json(by_alias=True, indent=2)

    def import_state(self, text: str) -> bool:
        """Replace the board and current player from exported JSON.

        All-or-nothing: on any problem nothing changes and False is returned.
        """
        try:
            occupants, player_index = self._parse_state(text)
        except InvalidStateError as exc:
            logger.warning("Rejected state import: %s", exc.message)
            return False

        self.board.clear()
        for coord, player in occupants.items():
            self.board.set_occupant(coord, player)
        self.current_player_index = player_index
        self.selected = None
        self.valid_moves = set()
        self.winner = None
        return True

    def _parse_state(self, text: str) -> tuple[dict[HexCoord, Corner], int]:
        try:
            state = SerializedState.model_validate_json(text)
        except ValidationError as exc:
            raise InvalidStateError("malformed state", details=exc.errors()) from exc

        if state.current_player not in self.active_players:
            raise InvalidStateError(
                f"current player {state.current_player.name} is not an active player"
            )

        occupants: dict[HexCoord, Corner] = {}
        for entry in state.board:
            if entry.q + entry.r + entry.s != 0:
                raise InvalidStateError(f"({entry.q}, {entry.r}, {entry.s}) is not a cube coordinate")
            coord = HexCoord(entry.q, entry.r, entry.s)
            if coord not in self.board:
                raise InvalidStateError(f"{coord!r} is not on the board")
            occupants[coord] = entry.player
        return occupants, self.active_players.index(state.current_player)
