"""Tests for hex coordinates and corner geometry."""

from __future__ import annotations

import pytest

from starhalma.game.types import (
    CORNER_TIPS,
    HEX_DIRECTIONS,
    PLAYER_CORNERS,
    Corner,
    HexCoord,
    corner_of,
    goal_center,
    opposite_corner,
)


class TestHexCoord:
    def test_s_is_derived(self) -> None:
        assert HexCoord(2, -5).s == 3

    def test_inconsistent_s_rejected(self) -> None:
        with pytest.raises(ValueError, match="q \\+ r \\+ s must be 0"):
            HexCoord(1, 1, 1)

    def test_equality_and_hash_on_q_r(self) -> None:
        a = HexCoord(1, -1, 0)
        b = HexCoord(1, -1)
        assert a == b
        assert len({a, b}) == 1

    def test_arithmetic(self) -> None:
        a = HexCoord(1, 2)
        b = HexCoord(-3, 1)
        assert a + b == HexCoord(-2, 3)
        assert a - b == HexCoord(4, 1)
        assert b.scale(2) == HexCoord(-6, 2)

    def test_distance(self) -> None:
        assert HexCoord(0, 0).distance(HexCoord(0, 0)) == 0
        assert HexCoord(0, 0).distance(HexCoord(3, -1)) == 3
        assert HexCoord(-4, 8).distance(HexCoord(4, -8)) == 16

    def test_key_round_trip(self) -> None:
        coord = HexCoord(-3, 7)
        assert coord.key == "-3,7"
        assert HexCoord.from_key(coord.key) == coord

    def test_six_unit_directions(self) -> None:
        assert len(HEX_DIRECTIONS) == 6
        for d in HEX_DIRECTIONS:
            assert d.q + d.r + d.s == 0
            assert HexCoord(0, 0).distance(d) == 1


class TestCorners:
    def test_opposites(self) -> None:
        assert opposite_corner(Corner.NORTH) is Corner.SOUTH
        assert opposite_corner(Corner.SOUTH) is Corner.NORTH
        assert opposite_corner(Corner.NORTH_EAST) is Corner.SOUTH_WEST
        assert opposite_corner(Corner.SOUTH_EAST) is Corner.NORTH_WEST
        assert opposite_corner(Corner.NONE) is Corner.NONE

    def test_opposite_is_involution(self) -> None:
        for corner in PLAYER_CORNERS:
            assert opposite_corner(opposite_corner(corner)) is corner

    def test_tips_belong_to_their_corner(self) -> None:
        for corner, tip in CORNER_TIPS.items():
            assert corner_of(tip) is corner

    def test_opposite_tips_are_mirrored(self) -> None:
        for corner in PLAYER_CORNERS:
            tip = CORNER_TIPS[corner]
            other = CORNER_TIPS[opposite_corner(corner)]
            assert (tip.q, tip.r, tip.s) == (-other.q, -other.r, -other.s)

    def test_central_cells_have_no_corner(self) -> None:
        assert corner_of(HexCoord(0, 0)) is None
        assert corner_of(HexCoord(4, -4)) is None
        assert corner_of(HexCoord(4, 0)) is None

    def test_outside_star_has_no_corner(self) -> None:
        assert corner_of(HexCoord(9, -9)) is None
        assert corner_of(HexCoord(6, 2)) is None

    def test_goal_center_is_opposite_tip(self) -> None:
        assert goal_center(Corner.SOUTH) == HexCoord(4, -8, 4)
        assert goal_center(Corner.NORTH) == HexCoord(-4, 8, -4)
