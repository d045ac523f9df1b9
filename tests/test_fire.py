"""Tests for hexaworld.world.fire — ignition, burn-down and spread."""

import logging

import pytest
from numpy.random import Generator

from hexaworld.world.fire import FireField
from hexaworld.world.hexgrid import ORIGIN, Hex
from hexaworld.world.plants import PlantStage
from hexaworld.world.world import World


def _plant_row(world: World, length: int) -> list[Hex]:
    """Plant a straight line of dormant plants eastward from the origin."""
    coords = [Hex(q, 0) for q in range(length)]
    for coord in coords:
        world.plants.add(coord, world.terrain)
    return coords


class TestIgnition:
    """Tests for explicit ignition."""

    def test_ignite_once(self) -> None:
        fire = FireField()
        assert fire.ignite(ORIGIN)
        assert not fire.ignite(ORIGIN)
        assert fire.is_burning(ORIGIN)
        assert len(fire) == 1

    def test_burn_fraction(self) -> None:
        fire = FireField(burn_duration=4.0)
        assert fire.burn_fraction(ORIGIN) == 0.0
        fire.ignite(ORIGIN)
        assert fire.burn_fraction(ORIGIN) == 1.0
        fire.marks[ORIGIN] = 1.0
        assert fire.burn_fraction(ORIGIN) == pytest.approx(0.25)

    def test_random_plant_needs_plants(self, meadow: World, rng: Generator) -> None:
        assert meadow.fire.ignite_random_plant(meadow.plants, rng) is None

    def test_random_plant_skips_charred(self, meadow: World, rng: Generator) -> None:
        _plant_row(meadow, 2)
        meadow.plants.char(ORIGIN)
        assert meadow.fire.ignite_random_plant(meadow.plants, rng) == Hex(1, 0)


class TestBurnDown:
    """Tests for the burn countdown."""

    def test_expired_fire_chars_plant(self, meadow: World, rng: Generator) -> None:
        meadow.plants.add(ORIGIN, meadow.terrain)
        meadow.fire.ignite(ORIGIN)
        meadow.fire.update(4.0, meadow.plants, rng)
        assert meadow.is_burning(ORIGIN)
        expired = meadow.fire.update(1.0, meadow.plants, rng)
        assert expired == [ORIGIN]
        assert not meadow.is_burning(ORIGIN)
        assert meadow.plants.plant_at(ORIGIN).stage is PlantStage.CHARRED

    def test_burns_exactly_its_duration(self, meadow: World, rng: Generator) -> None:
        meadow.plants.add(ORIGIN, meadow.terrain)
        meadow.fire.ignite(ORIGIN)
        for _ in range(49):
            assert meadow.fire.update(0.1, meadow.plants, rng) == []
        assert meadow.is_burning(ORIGIN)

        assert meadow.fire.update(0.1, meadow.plants, rng) == [ORIGIN]
        assert not meadow.is_burning(ORIGIN)
        assert meadow.plants.plant_at(ORIGIN).times_charred == 1

    def test_fire_without_plant_just_goes_out(self, rng: Generator) -> None:
        world = World()
        world.fire.ignite(ORIGIN)
        world.fire.update(5.0, world.plants, rng)
        assert len(world.fire) == 0
        assert len(world.plants) == 0


class TestSpread:
    """Tests for the discrete wavefront spread."""

    def test_spreads_one_ring_per_interval(
        self,
        meadow: World,
        rng: Generator,
    ) -> None:
        row = _plant_row(meadow, 3)
        meadow.fire.ignite(row[0])

        meadow.fire.update(1.0, meadow.plants, rng)
        assert not meadow.is_burning(row[1])

        meadow.fire.update(1.0, meadow.plants, rng)
        assert meadow.is_burning(row[1])
        assert not meadow.is_burning(row[2])

        meadow.fire.update(2.0, meadow.plants, rng)
        assert meadow.is_burning(row[2])

    def test_charred_plants_do_not_burn(self, meadow: World) -> None:
        row = _plant_row(meadow, 2)
        meadow.plants.char(row[1])
        meadow.fire.ignite(row[0])
        assert meadow.fire.spread(meadow.plants) == []

    def test_no_spread_to_empty_cells(self, meadow: World) -> None:
        meadow.fire.ignite(ORIGIN)
        assert meadow.fire.spread(meadow.plants) == []


class TestSpontaneousIgnition:
    """Tests for the rare background fire."""

    def test_needs_enough_mature_plants(self, meadow: World, rng: Generator) -> None:
        fire = FireField(ignition_rate=1000.0, min_mature_plants=2)
        _plant_row(meadow, 1)
        meadow.plants.plant_at(ORIGIN).stage = PlantStage.MATURE
        fire.update(0.1, meadow.plants, rng)
        assert len(fire) == 0

    def test_ignites_when_conditions_met(
        self,
        meadow: World,
        rng: Generator,
        caplog: pytest.LogCaptureFixture,
    ) -> None:
        fire = FireField(ignition_rate=1000.0, min_mature_plants=1)
        _plant_row(meadow, 1)
        meadow.plants.plant_at(ORIGIN).stage = PlantStage.MATURE
        with caplog.at_level(logging.INFO, logger="hexaworld.world.fire"):
            fire.update(0.1, meadow.plants, rng)
        assert fire.is_burning(ORIGIN)
        assert "Spontaneous fire" in caplog.text
