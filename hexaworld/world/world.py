"""World — the spatial container for the simulation.

The World bundles the terrain, plant and fire maps that together make up
the hexagonal landscape, and provides the spatial queries (terrain
lookups, fire checks, pixel projection) that animals use every tick.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from numpy.random import Generator

from hexaworld.world.cell import TerrainType
from hexaworld.world.fire import FireField
from hexaworld.world.hexgrid import Hex, neighbour, to_pixel
from hexaworld.world.plants import PlantField
from hexaworld.world.terrain import TerrainField

logger = logging.getLogger(__name__)


@dataclass
class World:
    """All landscape state of a running simulation.

    Attributes:
        hex_size: Hexagon radius in pixels used for display positions.
        terrain: Sparse terrain map.
        plants: Sparse plant map.
        fire: Sparse fire map.
    """

    hex_size: float = 18.0
    terrain: TerrainField = field(default_factory=TerrainField)
    plants: PlantField = field(default_factory=PlantField)
    fire: FireField = field(default_factory=FireField)

    def __post_init__(self) -> None:
        """Reject a degenerate hex size up front."""
        if self.hex_size <= 0:
            msg = f"hex_size must be positive, got {self.hex_size}"
            raise ValueError(msg)

    def generate(
        self,
        rng: Generator,
        *,
        radius: int,
        plant_chance: float = 0.1,
    ) -> None:
        """Grow terrain out to ``radius`` rings and scatter initial plants.

        Isolated single-hex water cells are pruned once growth is done.

        Args:
            rng: Seeded random generator.
            radius: Number of rings around the origin hex.
            plant_chance: Probability of a dormant plant per soil cell.
        """
        self.terrain.grow_layer(rng)
        for _ in range(radius):
            self.terrain.grow_layer(rng, max_radius=radius)
        pruned = self.terrain.prune_isolated_water()
        planted = self.plants.seed(self.terrain, rng, plant_chance)
        logger.info(
            "Generated %d cells (%d soil, %d water, %d rock), "
            "pruned %d puddles, planted %d seeds",
            len(self.terrain),
            self.terrain.count(TerrainType.SOIL),
            self.terrain.count(TerrainType.WATER),
            self.terrain.count(TerrainType.ROCK),
            len(pruned),
            planted,
        )

    def has_cell(self, coord: Hex) -> bool:
        """Return True if ``coord`` has been generated."""
        return coord in self.terrain

    def terrain_at(self, coord: Hex) -> TerrainType:
        """Return the terrain at ``coord`` (soil if ungenerated)."""
        return self.terrain.terrain_at(coord)

    def is_burning(self, coord: Hex) -> bool:
        """Return True if ``coord`` is on fire."""
        return self.fire.is_burning(coord)

    def neighbour(self, coord: Hex, direction: int) -> Hex:
        """Return the coordinate one step away in ``direction``."""
        return neighbour(coord, direction)

    def pixel(self, coord: Hex) -> tuple[float, float]:
        """Return the display position of the centre of ``coord``."""
        return to_pixel(coord, self.hex_size)

    def update(self, dt: float, rng: Generator) -> None:
        """Advance plants, then fire, by ``dt`` seconds."""
        self.plants.update(dt, self.terrain, rng)
        self.fire.update(dt, self.plants, rng)
