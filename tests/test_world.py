"""Tests for hexaworld.world — terrain field, cells and the World container."""

from collections.abc import Callable

import numpy as np
import pytest
from numpy.random import Generator

from hexaworld.world.cell import HexCell, TerrainType
from hexaworld.world.hexgrid import ORIGIN, Hex, hex_distance, neighbours
from hexaworld.world.plants import PlantStage
from hexaworld.world.terrain import TerrainField, random_terrain
from hexaworld.world.world import World


class TestHexCell:
    """Tests for the HexCell dataclass."""

    def test_default_values(self) -> None:
        cell = HexCell(coord=ORIGIN)
        assert cell.terrain is TerrainType.SOIL
        assert cell.nutrients == 0.5


class TestTerrainGeneration:
    """Tests for layered terrain growth."""

    def test_first_layer_is_origin(self, rng: Generator) -> None:
        field = TerrainField()
        assert field.grow_layer(rng) == [ORIGIN]
        assert ORIGIN in field

    def test_layers_grow_ring_by_ring(self, rng: Generator) -> None:
        field = TerrainField()
        field.grow_layer(rng)
        for _ in range(3):
            field.grow_layer(rng, max_radius=3)
        # 1 + 6 + 12 + 18
        assert len(field) == 37
        assert all(hex_distance(ORIGIN, c) <= 3 for c in field.cells)

    def test_max_radius_stops_growth(self, rng: Generator) -> None:
        field = TerrainField()
        field.grow_layer(rng)
        field.grow_layer(rng, max_radius=1)
        assert field.grow_layer(rng, max_radius=1) == []

    def test_same_seed_same_terrain(self) -> None:
        fields = []
        for _ in range(2):
            rng = np.random.default_rng(99)
            field = TerrainField()
            for _ in range(5):
                field.grow_layer(rng)
            fields.append(field)
        a, b = fields
        assert list(a.cells) == list(b.cells)
        assert [c.terrain for c in a.cells.values()] == [
            c.terrain for c in b.cells.values()
        ]

    def test_nutrients_in_range(self, rng: Generator) -> None:
        field = TerrainField()
        for _ in range(6):
            field.grow_layer(rng)
        assert all(0.0 <= c.nutrients <= 1.0 for c in field.cells.values())

    def test_generate_cell_keeps_existing(self, rng: Generator) -> None:
        field = TerrainField()
        cell = field.set_cell(ORIGIN, TerrainType.ROCK, 0.1)
        assert field.generate_cell(ORIGIN, rng) is cell

    def test_random_terrain_proportions(self, rng: Generator) -> None:
        draws = [random_terrain(rng) for _ in range(10_000)]
        rock = draws.count(TerrainType.ROCK) / len(draws)
        soil = draws.count(TerrainType.SOIL) / len(draws)
        assert rock == pytest.approx(0.2, abs=0.02)
        assert soil == pytest.approx(0.4, abs=0.02)


class TestTerrainLookups:
    """Tests for default values and nutrient bookkeeping."""

    def test_ungenerated_defaults(self) -> None:
        field = TerrainField()
        far = Hex(100, -50)
        assert field.cell_at(far) is None
        assert field.terrain_at(far) is TerrainType.SOIL
        assert field.nutrients_at(far) == 0.0

    def test_set_cell_clamps_nutrients(self) -> None:
        field = TerrainField()
        assert field.set_cell(ORIGIN, TerrainType.SOIL, 1.7).nutrients == 1.0

    def test_enrich_soil_caps_at_one(self) -> None:
        field = TerrainField()
        field.set_cell(ORIGIN, TerrainType.SOIL, 0.9)
        field.enrich(ORIGIN, 0.3)
        assert field.nutrients_at(ORIGIN) == 1.0

    def test_enrich_ignores_water(self) -> None:
        field = TerrainField()
        field.set_cell(ORIGIN, TerrainType.WATER, 0.5)
        field.enrich(ORIGIN, 0.3)
        assert field.nutrients_at(ORIGIN) == 0.5

    def test_water_adjacency(self, make_world: Callable[..., World]) -> None:
        world = make_world(water=[Hex(2, 0)])
        assert world.terrain.is_water_adjacent(Hex(2, 0))
        assert world.terrain.is_water_adjacent(Hex(1, 0))
        assert not world.terrain.is_water_adjacent(ORIGIN)


class TestPruning:
    """Tests for isolated-water pruning."""

    def test_single_puddle_removed(self, make_world: Callable[..., World]) -> None:
        world = make_world(water=[ORIGIN])
        assert world.terrain.prune_isolated_water() == [ORIGIN]
        assert ORIGIN not in world.terrain
        assert world.terrain_at(ORIGIN) is TerrainType.SOIL

    def test_connected_water_kept(self, make_world: Callable[..., World]) -> None:
        world = make_world(water=[ORIGIN, Hex(1, 0)])
        assert world.terrain.prune_isolated_water() == []
        assert world.terrain.count(TerrainType.WATER) == 2


class TestWorld:
    """Tests for the World container."""

    @pytest.mark.parametrize("size", [0.0, -3.0])
    def test_rejects_bad_hex_size(self, size: float) -> None:
        with pytest.raises(ValueError, match="hex_size"):
            World(hex_size=size)

    def test_generate_fills_radius(self, rng: Generator) -> None:
        world = World()
        world.generate(rng, radius=4)
        assert len(world.terrain) > 0
        assert all(hex_distance(ORIGIN, c) <= 4 for c in world.terrain.cells)
        # no puddles survive generation
        for coord, cell in world.terrain.cells.items():
            if cell.terrain is TerrainType.WATER:
                assert any(
                    world.terrain_at(n) is TerrainType.WATER for n in neighbours(coord)
                )

    def test_generate_plants_only_on_soil(self, rng: Generator) -> None:
        world = World()
        world.generate(rng, radius=5, plant_chance=0.5)
        assert len(world.plants) > 0
        for coord in world.plants.plants:
            assert world.terrain_at(coord) is TerrainType.SOIL

    def test_pixel_uses_hex_size(self) -> None:
        world = World(hex_size=10.0)
        assert world.pixel(ORIGIN) == (0.0, 0.0)
        assert world.pixel(Hex(2, 0)) == pytest.approx((30.0, 10.0 * 3**0.5))

    def test_update_grows_plants(self, meadow: World, rng: Generator) -> None:
        meadow.plants.add(ORIGIN, meadow.terrain)
        meadow.update(20.0, rng)
        assert meadow.plants.plant_at(ORIGIN).stage is PlantStage.ESTABLISHING
