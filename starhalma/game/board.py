"""Board model: the fixed star-shaped cell set with mutable occupants."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, Iterable, Iterator

from starhalma.game.types import (
    HEX_DIRECTIONS,
    HEX_RADIUS,
    STAR_LIMIT,
    Corner,
    HexCoord,
    corner_of,
)

if TYPE_CHECKING:
    from starhalma.engine.models import GameConfig
    from starhalma.game.moves import Move

logger = logging.getLogger(__name__)


@dataclass
class BoardCell:
    coord: HexCoord
    occupant: Corner = Corner.NONE
    home_corner: Corner | None = None

    @property
    def is_empty(self) -> bool:
        return self.occupant is Corner.NONE


# ------------------------------------------------------------------
# Board
# ------------------------------------------------------------------


class Board:
    """Mapping of coordinate → cell plus a precomputed adjacency table.

    Topology (cell set, home corners, adjacency) never changes after
    construction and is shared between clones.  Only occupants mutate.
    """

    def __init__(
        self,
        cells: dict[HexCoord, BoardCell],
        adjacency: dict[HexCoord, list[HexCoord]] | None = None,
        pieces_per_player: int = 10,
    ) -> None:
        self.cells = cells
        self.adjacency = adjacency if adjacency is not None else _build_adjacency(cells)
        self.pieces_per_player = pieces_per_player

    @classmethod
    def from_region(
        cls,
        coords: Iterable[HexCoord],
        pieces_per_player: int = 10,
    ) -> Board:
        """Build an empty board over an arbitrary cell set."""
        cells = {c: BoardCell(coord=c, home_corner=corner_of(c)) for c in coords}
        return cls(cells, pieces_per_player=pieces_per_player)

    def __contains__(self, coord: object) -> bool:
        return coord in self.cells

    def __iter__(self) -> Iterator[BoardCell]:
        return iter(self.cells.values())

    def __len__(self) -> int:
        return len(self.cells)

    def get(self, coord: HexCoord) -> BoardCell | None:
        return self.cells.get(coord)

    def occupant_at(self, coord: HexCoord) -> Corner | None:
        """Occupant of *coord*, or None when the coordinate is off the board."""
        cell = self.cells.get(coord)
        return cell.occupant if cell is not None else None

    def is_empty(self, coord: HexCoord) -> bool:
        cell = self.cells.get(coord)
        return cell is not None and cell.occupant is Corner.NONE

    def neighbors(self, coord: HexCoord) -> list[HexCoord]:
        return self.adjacency.get(coord, [])

    def set_occupant(self, coord: HexCoord, player: Corner) -> None:
        cell = self.cells.get(coord)
        if cell is None:
            raise KeyError(f"{coord!r} is not on the board")
        cell.occupant = player

    def pieces_of(self, player: Corner) -> list[HexCoord]:
        return [c.coord for c in self.cells.values() if c.occupant is player]

    def occupants(self) -> dict[HexCoord, Corner]:
        return {coord: cell.occupant for coord, cell in self.cells.items()}

    def clear(self) -> None:
        for cell in self.cells.values():
            cell.occupant = Corner.NONE

    def apply_move(self, move: Move) -> None:
        """Move the occupant of ``move.origin`` to ``move.destination`` in place."""
        origin = self.cells[move.origin]
        destination = self.cells[move.destination]
        destination.occupant = origin.occupant
        origin.occupant = Corner.NONE

    def clone(self) -> Board:
        cells = {
            coord: BoardCell(coord=coord, occupant=cell.occupant, home_corner=cell.home_corner)
            for coord, cell in self.cells.items()
        }
        return Board(cells, self.adjacency, self.pieces_per_player)


def _build_adjacency(cells: dict[HexCoord, BoardCell]) -> dict[HexCoord, list[HexCoord]]:
    adjacency: dict[HexCoord, list[HexCoord]] = {}
    for coord in cells:
        adjacency[coord] = [n for n in (coord + d for d in HEX_DIRECTIONS) if n in cells]
    return adjacency


# ------------------------------------------------------------------
# Construction
# ------------------------------------------------------------------


def hexagon_coords(radius: int = HEX_RADIUS) -> list[HexCoord]:
    return [
        HexCoord(q, r)
        for q in range(-radius, radius + 1)
        for r in range(max(-radius, -q - radius), min(radius, -q + radius) + 1)
    ]


def star_coords() -> list[HexCoord]:
    """All cells of the star: central hexagon first, then the six triangles."""
    arms = [
        coord
        for coord in hexagon_coords(STAR_LIMIT)
        if corner_of(coord) is not None
    ]
    return hexagon_coords() + arms


def build_board(active_players: Iterable[Corner]) -> Board:
    """Create the star board with each active player's triangle filled."""
    active = set(active_players)
    board = Board.from_region(star_coords())
    for cell in board:
        if cell.home_corner is not None and cell.home_corner in active:
            cell.occupant = cell.home_corner
    logger.debug(
        "Built board: %d cells, players=%s",
        len(board), sorted(p.name for p in active),
    )
    return board


def create_board(config: GameConfig) -> Board:
    return build_board(config.active_players)
