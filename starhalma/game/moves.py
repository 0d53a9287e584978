"""Legal-move generation: adjacent steps, chained jumps and long jumps."""

from __future__ import annotations

import logging
from dataclasses import dataclass

from starhalma.config import settings
from starhalma.game.board import Board
from starhalma.game.types import HEX_DIRECTIONS, Corner, HexCoord

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Move:
    origin: HexCoord
    destination: HexCoord
    score: float | None = None


def find_destinations(
    board: Board,
    origin: HexCoord,
    lookahead: int | None = None,
) -> set[HexCoord]:
    """Every cell the piece on *origin* can legally end its move on.

    The origin counts as empty for the whole search since the moving piece
    has left it.  Jumps chain through an explicit worklist; each position is
    expanded at most once.
    """
    if lookahead is None:
        lookahead = settings.long_jump_lookahead
    if origin not in board:
        return set()

    def occupied(coord: HexCoord) -> bool:
        return coord != origin and board.occupant_at(coord) not in (None, Corner.NONE)

    def free(coord: HexCoord) -> bool:
        return coord == origin or board.is_empty(coord)

    destinations: set[HexCoord] = {
        n for n in board.neighbors(origin) if board.is_empty(n)
    }

    visited: set[HexCoord] = {origin}
    worklist: list[HexCoord] = [origin]
    while worklist:
        current = worklist.pop()
        for direction in HEX_DIRECTIONS:
            step = current + direction
            if step not in board:
                continue

            if occupied(step):
                landing = step + direction
                if board.is_empty(landing) and landing not in visited:
                    visited.add(landing)
                    destinations.add(landing)
                    worklist.append(landing)
                continue

            # Long jump: scan past empty cells to the first piece, then land
            # the same distance beyond it.
            scan = step
            distance = 1
            while distance <= lookahead:
                ahead = scan + direction
                if ahead not in board:
                    break
                if occupied(ahead):
                    landing = ahead + direction.scale(distance + 1)
                    if (
                        board.is_empty(landing)
                        and landing not in visited
                        and all(free(ahead + direction.scale(i)) for i in range(1, distance + 1))
                    ):
                        visited.add(landing)
                        destinations.add(landing)
                        worklist.append(landing)
                    break
                scan = ahead
                distance += 1

    destinations.discard(origin)
    return destinations


def generate_moves(board: Board, player: Corner, lookahead: int | None = None) -> list[Move]:
    """Every legal move for *player*, in board order."""
    moves: list[Move] = []
    for origin in board.pieces_of(player):
        for dest in find_destinations(board, origin, lookahead):
            moves.append(Move(origin, dest))
    return moves


def has_legal_move(board: Board, player: Corner) -> bool:
    return any(find_destinations(board, origin) for origin in board.pieces_of(player))


def apply_move(board: Board, move: Move) -> Board:
    """Return a clone of *board* with *move* applied."""
    new_board = board.clone()
    new_board.apply_move(move)
    return new_board
