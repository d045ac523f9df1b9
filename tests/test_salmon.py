"""Tests for hexaworld.fauna.salmon — the aquatic filler species."""

import pytest
from numpy.random import Generator

from hexaworld.fauna.base import DeathCause
from hexaworld.fauna.salmon import SALMON_COLOUR, Salmon
from hexaworld.world.cell import TerrainType
from hexaworld.world.hexgrid import ORIGIN, Hex
from hexaworld.world.world import World

LAKE = [ORIGIN, Hex(1, 0), Hex(1, -1), Hex(0, -1), Hex(2, -1), Hex(2, 0)]


class TestSalmon:
    """Tests for salmon behaviour."""

    def test_stays_in_water(self, make_world, rng: Generator) -> None:
        world = make_world(water=LAKE)
        fish = Salmon(coord=ORIGIN)
        visited = {fish.coord}
        for _ in range(100):
            fish.update(world, 0.5, rng)
            assert world.terrain_at(fish.coord) is TerrainType.WATER
            visited.add(fish.coord)
        assert len(visited) > 1

    def test_grazes_passively(self, make_world, rng: Generator) -> None:
        # a lone water hex has nowhere to swim to
        world = make_world(water=[ORIGIN])
        fish = Salmon(coord=ORIGIN)
        fish.update(world, 1.0, rng)
        assert fish.energy == pytest.approx(1.0 - 0.005 + 0.02 * 0.5)
        assert fish.coord == ORIGIN

    def test_starves_out_of_water(self, meadow: World, rng: Generator) -> None:
        fish = Salmon(coord=ORIGIN, energy=0.001)
        fish.update(meadow, 1.0, rng)
        assert fish.is_dead
        assert fish.death_cause is DeathCause.STARVATION
        assert meadow.terrain.nutrients_at(ORIGIN) == 0.5

    def test_spawns_when_well_fed(self, make_world, rng: Generator) -> None:
        world = make_world(water=[ORIGIN])
        fish = Salmon(coord=ORIGIN, energy=2.5)
        fish.update(world, 0.0, rng)
        assert fish.is_pregnant
        assert fish.energy == pytest.approx(1.0)
        fish.update(world, 15.0, rng)
        assert fish.ready_to_give_birth
        assert not fish.is_pregnant

    def test_pregnancy_ends_on_time(self, make_world, rng: Generator) -> None:
        world = make_world(water=[ORIGIN])
        fish = Salmon(coord=ORIGIN, is_pregnant=True, pregnancy_timer=15.0)
        for _ in range(149):
            fish.update(world, 0.1, rng)
        assert fish.is_pregnant
        fish.update(world, 0.1, rng)
        assert fish.ready_to_give_birth
        assert not fish.is_pregnant

    def test_never_hidden(self) -> None:
        fish = Salmon(coord=ORIGIN)
        assert not fish.is_hidden
        assert fish.colour == SALMON_COLOUR
        assert fish.speed == 1.0
