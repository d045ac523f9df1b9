"""Tests for hexaworld.fauna.fox and hexaworld.fauna.wolf — hunting."""

import pytest
from numpy.random import Generator

from hexaworld.fauna.base import DeathCause
from hexaworld.fauna.behaviour import catch_succeeds, count_allies
from hexaworld.fauna.fox import Fox
from hexaworld.fauna.genome import FoxGenome, HareGenome
from hexaworld.fauna.hare import Hare
from hexaworld.fauna.wolf import Wolf
from hexaworld.world.hexgrid import ORIGIN, Hex, neighbours
from hexaworld.world.world import World

EAST = Hex(1, 0)
WEST = Hex(-1, 0)

# A pale, light hare on rock: visibility ~0.275, between the wolf's and
# the fox's catch thresholds.
PALE = HareGenome(weight=0.5)


class TestFoxHunting:
    """Tests for fox catches."""

    def test_same_hex_catch_is_automatic(
        self,
        meadow: World,
        rng: Generator,
    ) -> None:
        hare = Hare(coord=ORIGIN)
        fox = Fox(coord=ORIGIN, genome=FoxGenome(reproduction_threshold=5.5))

        fox.update(meadow, [hare], [fox], 0.0, rng)

        assert hare.is_dead
        assert hare.death_cause is DeathCause.PREDATION
        assert fox.energy == pytest.approx(4.5)
        assert fox.digestion_time == pytest.approx(10.0)

    def test_energy_capped(self, meadow: World) -> None:
        fox = Fox(coord=ORIGIN, energy=5.8)
        assert fox.hunt(meadow, [Hare(coord=ORIGIN)], [fox])
        assert fox.energy == Fox.max_energy

    def test_catches_visible_slower_neighbour(self, meadow: World) -> None:
        hare = Hare(coord=EAST)
        fox = Fox(coord=ORIGIN)
        assert fox.hunt(meadow, [hare], [fox])
        assert hare.is_dead

    def test_equal_speed_escapes(self, meadow: World) -> None:
        hare = Hare(coord=EAST, genome=HareGenome(weight=0.5))
        fox = Fox(coord=ORIGIN, genome=FoxGenome(weight=1.5))
        assert hare.speed == fox.speed
        assert not fox.hunt(meadow, [hare], [fox])
        assert hare.is_alive

    def test_camouflaged_hare_escapes_lone_fox(self, make_world) -> None:
        world = make_world(rock=[EAST])
        hare = Hare(coord=EAST, genome=PALE)
        fox = Fox(coord=ORIGIN)
        assert not fox.hunt(world, [hare], [fox])

    def test_pack_bonus_catches_camouflaged_hare(self, make_world) -> None:
        world = make_world(rock=[EAST])
        hare = Hare(coord=EAST, genome=PALE)
        fox = Fox(coord=ORIGIN)
        ally = Fox(coord=WEST)
        assert count_allies(fox, [fox, ally]) == 1
        assert fox.hunt(world, [hare], [fox, ally])
        assert hare.is_dead

    def test_burrowed_hare_cannot_be_caught(self, meadow: World) -> None:
        hare = Hare(coord=EAST, burrow_timer=3.0)
        fox = Fox(coord=ORIGIN)
        assert not fox.hunt(meadow, [hare], [fox])
        assert hare.is_alive

    def test_digestion_blocks_second_catch(
        self,
        meadow: World,
        rng: Generator,
    ) -> None:
        first, second = Hare(coord=ORIGIN), Hare(coord=ORIGIN)
        fox = Fox(coord=ORIGIN, genome=FoxGenome(reproduction_threshold=5.5))
        fox.update(meadow, [first, second], [fox], 0.0, rng)
        fox.update(meadow, [first, second], [fox], 0.0, rng)
        assert first.is_dead
        assert second.is_alive

    def test_fox_never_enters_water(self, make_world, rng: Generator) -> None:
        world = make_world(water=list(neighbours(ORIGIN)))
        fox = Fox(coord=ORIGIN, move_timer=1.0)
        fox.update(world, [], [fox], 0.0, rng)
        assert fox.coord == ORIGIN


class TestPackBonus:
    """Tests for the catch rule itself."""

    def test_ally_lifts_score_over_threshold(self) -> None:
        kwargs = {"threshold": 0.3, "hunter_speed": 2.0, "prey_speed": 1.0}
        assert not catch_succeeds(0.26, **kwargs)
        assert catch_succeeds(0.26, allies=1, pack_bonus=0.2, **kwargs)

    def test_speed_must_be_strictly_greater(self) -> None:
        assert not catch_succeeds(1.0, threshold=0.3, hunter_speed=1.0, prey_speed=1.0)

    def test_only_adjacent_allies_count(self) -> None:
        hunter = Fox(coord=ORIGIN)
        near = Fox(coord=EAST)
        far = Fox(coord=Hex(3, 0))
        dead = Fox(coord=WEST, is_dead=True)
        assert count_allies(hunter, [hunter, near, far, dead]) == 1


class TestWolfHunting:
    """Tests for wolf catches."""

    def test_eats_fox(self, meadow: World) -> None:
        fox = Fox(coord=ORIGIN)
        wolf = Wolf(coord=ORIGIN)
        assert wolf.hunt(meadow, [], [fox])
        assert fox.is_dead
        assert wolf.energy == Wolf.max_energy

    def test_prefers_hare_on_same_hex(self, meadow: World) -> None:
        hare, fox = Hare(coord=ORIGIN), Fox(coord=ORIGIN)
        wolf = Wolf(coord=ORIGIN)
        assert wolf.hunt(meadow, [hare], [fox])
        assert hare.is_dead
        assert fox.is_alive

    def test_lower_threshold_than_fox(self, make_world) -> None:
        world = make_world(rock=[EAST])
        hare = Hare(coord=EAST, genome=PALE)
        wolf = Wolf(coord=ORIGIN)
        assert wolf.hunt(world, [hare], [])
        assert hare.death_cause is DeathCause.PREDATION

    def test_rests_when_low_on_energy(self, meadow: World, rng: Generator) -> None:
        wolf = Wolf(coord=ORIGIN, energy=1.5, move_timer=5.0)
        wolf.update(meadow, [], [], 0.0, rng)
        assert wolf.coord == ORIGIN

    def test_moves_when_fed(self, meadow: World, rng: Generator) -> None:
        wolf = Wolf(coord=ORIGIN, energy=5.0, move_timer=5.0)
        wolf.update(meadow, [], [], 0.0, rng)
        assert wolf.coord != ORIGIN
        assert wolf.energy == pytest.approx(5.0 - 0.08)
