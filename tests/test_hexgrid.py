"""Tests for hexaworld.world.hexgrid."""

import pytest

from hexaworld.world.hexgrid import (
    DIRECTIONS,
    ORIGIN,
    Hex,
    hex_distance,
    neighbour,
    neighbours,
    opposite,
    to_pixel,
)


class TestHex:
    """Tests for the coordinate type itself."""

    def test_value_equality_and_hashing(self) -> None:
        assert Hex(2, -1) == Hex(2, -1)
        lookup = {Hex(2, -1): "x"}
        assert lookup[Hex(2, -1)] == "x"

    def test_addition(self) -> None:
        assert Hex(1, 2) + Hex(-3, 1) == Hex(-2, 3)


class TestNeighbours:
    """Tests for direction arithmetic."""

    def test_six_distinct_neighbours(self) -> None:
        result = list(neighbours(ORIGIN))
        assert len(result) == 6
        assert len(set(result)) == 6
        assert all(hex_distance(ORIGIN, n) == 1 for n in result)

    def test_neighbours_follow_direction_order(self) -> None:
        c = Hex(3, -2)
        assert list(neighbours(c)) == [neighbour(c, d) for d in range(6)]

    @pytest.mark.parametrize("direction", range(6))
    def test_opposite_cancels(self, direction: int) -> None:
        c = Hex(-4, 7)
        assert neighbour(neighbour(c, direction), opposite(direction)) == c

    def test_relation_is_symmetric(self) -> None:
        c = Hex(1, 1)
        for n in neighbours(c):
            assert c in list(neighbours(n))

    def test_direction_wraps(self) -> None:
        assert neighbour(ORIGIN, 6) == neighbour(ORIGIN, 0)
        assert neighbour(ORIGIN, 0) == ORIGIN + DIRECTIONS[0]


class TestDistance:
    """Tests for hex_distance."""

    def test_zero_to_self(self) -> None:
        assert hex_distance(Hex(5, -3), Hex(5, -3)) == 0

    def test_known_distances(self) -> None:
        assert hex_distance(ORIGIN, Hex(2, -1)) == 2
        assert hex_distance(ORIGIN, Hex(3, 0)) == 3
        assert hex_distance(Hex(-1, 1), Hex(1, -1)) == 2

    def test_symmetric(self) -> None:
        a, b = Hex(4, -7), Hex(-2, 3)
        assert hex_distance(a, b) == hex_distance(b, a)


class TestToPixel:
    """Tests for the flat-top pixel projection."""

    def test_origin_is_zero(self) -> None:
        assert to_pixel(ORIGIN, 10.0) == (0.0, 0.0)

    def test_neighbours_equidistant(self) -> None:
        size = 12.0
        for n in neighbours(ORIGIN):
            x, y = to_pixel(n, size)
            assert (x * x + y * y) ** 0.5 == pytest.approx(size * 3**0.5)

    @pytest.mark.parametrize("size", [0.0, -1.0])
    def test_rejects_non_positive_size(self, size: float) -> None:
        with pytest.raises(ValueError, match="positive"):
            to_pixel(ORIGIN, size)
