"""Shared fixtures for the Hexaworld test suite."""

from __future__ import annotations

from collections.abc import Callable, Iterable

import numpy as np
import pytest
from numpy.random import Generator

from hexaworld.simulation.config import SimulationConfig
from hexaworld.world.cell import TerrainType
from hexaworld.world.hexgrid import Hex
from hexaworld.world.world import World

WorldFactory = Callable[..., World]


def disc(radius: int) -> list[Hex]:
    """Return every coordinate within ``radius`` hexes of the origin."""
    coords = []
    for q in range(-radius, radius + 1):
        for r in range(max(-radius, -q - radius), min(radius, -q + radius) + 1):
            coords.append(Hex(q, r))
    return coords


@pytest.fixture
def rng() -> Generator:
    """A deterministic random generator for reproducible tests."""
    return np.random.default_rng(seed=12345)


@pytest.fixture
def default_config() -> SimulationConfig:
    """Default simulation config (no YAML file needed)."""
    return SimulationConfig()


@pytest.fixture
def small_config() -> SimulationConfig:
    """A small world with a handful of animals for fast engine tests."""
    cfg = SimulationConfig(seed=7, world_radius=5)
    for settings in cfg.species.values():
        settings.initial_count = min(settings.initial_count, 5)
    return cfg


@pytest.fixture
def make_world() -> WorldFactory:
    """Build hand-made worlds: a soil disc with optional water and rock."""

    def _make(
        radius: int = 3,
        *,
        water: Iterable[Hex] = (),
        rock: Iterable[Hex] = (),
        nutrients: float = 0.5,
    ) -> World:
        world = World()
        for coord in disc(radius):
            world.terrain.set_cell(coord, TerrainType.SOIL, nutrients)
        for coord in water:
            world.terrain.set_cell(coord, TerrainType.WATER, nutrients)
        for coord in rock:
            world.terrain.set_cell(coord, TerrainType.ROCK, nutrients)
        return world

    return _make


@pytest.fixture
def meadow(make_world: WorldFactory) -> World:
    """A radius-3 disc of plain soil with 0.5 nutrients everywhere."""
    return make_world()
