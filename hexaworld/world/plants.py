"""Plants — growth ladder and seed dispersal.

A plant climbs DORMANT → ESTABLISHING → MATURE at a speed set by the
nutrients of its cell.  Mature plants periodically scatter seeds onto
free soil around them.  Fire chars plants; a charred plant is not
removed but sprouts again from dormancy after a fixed delay.  Eating,
by contrast, removes the plant entirely.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum, auto
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from numpy.random import Generator

    from hexaworld.world.terrain import TerrainField

from hexaworld.world.cell import TerrainType
from hexaworld.world.hexgrid import Hex, neighbours


# Timers within this of their target have run out; summing the tick
# length in floating point rarely lands on the target exactly.
TIME_TOLERANCE = 1e-9


class PlantStage(Enum):
    """Lifecycle stage of a plant."""

    DORMANT = auto()
    ESTABLISHING = auto()
    MATURE = auto()
    CHARRED = auto()


# Energy a grazer gains from eating a plant at each stage
PLANT_ENERGY: dict[PlantStage, float] = {
    PlantStage.ESTABLISHING: 0.25,
    PlantStage.MATURE: 0.5,
}

_NEXT_STAGE: dict[PlantStage, PlantStage] = {
    PlantStage.DORMANT: PlantStage.ESTABLISHING,
    PlantStage.ESTABLISHING: PlantStage.MATURE,
}


@dataclass
class Plant:
    """A single plant occupying one soil cell.

    Attributes:
        coord: Cell the plant grows on.
        stage: Current lifecycle stage.
        growth_time: Seconds accumulated toward the next stage (or toward
            regrowth while charred).
        drop_time: Seconds accumulated toward the next seed drop.
        nutrients: Cell nutrients cached when the plant was created.
        times_charred: How often fire has burnt this plant.
    """

    coord: Hex
    stage: PlantStage = PlantStage.DORMANT
    growth_time: float = 0.0
    drop_time: float = 0.0
    nutrients: float = 0.5
    times_charred: int = 0

    @property
    def is_edible(self) -> bool:
        """Return True if a grazer can eat this plant."""
        return self.stage in PLANT_ENERGY


@dataclass
class PlantField:
    """Sparse map of plants, at most one per coordinate.

    Attributes:
        plants: Plants keyed by coordinate.
        base_growth: Seconds per stage for a plant on fully rich soil
            (scaled by ``1 / (nutrients + epsilon)``).
        epsilon: Guards the growth threshold against zero nutrients.
        regrowth_delay: Seconds a charred plant waits before going dormant.
        drop_interval: Seconds between seed-drop attempts of a mature plant.
        drop_chance: Probability that a seed-drop attempt succeeds.
    """

    plants: dict[Hex, Plant] = field(default_factory=dict)
    base_growth: float = 10.0
    epsilon: float = 0.1
    regrowth_delay: float = 30.0
    drop_interval: float = 15.0
    drop_chance: float = 0.3

    def __contains__(self, coord: object) -> bool:
        return coord in self.plants

    def __len__(self) -> int:
        return len(self.plants)

    def plant_at(self, coord: Hex) -> Plant | None:
        """Return the plant at ``coord``, or None."""
        return self.plants.get(coord)

    def can_grow_at(self, coord: Hex, terrain: TerrainField) -> bool:
        """Return True if ``coord`` is generated soil without a plant."""
        cell = terrain.cell_at(coord)
        return (
            cell is not None
            and cell.terrain is TerrainType.SOIL
            and coord not in self.plants
        )

    def add(self, coord: Hex, terrain: TerrainField) -> Plant | None:
        """Place a dormant plant on ``coord`` if the cell allows it.

        Returns:
            The new plant, or None if the cell is not free soil.
        """
        if not self.can_grow_at(coord, terrain):
            return None
        plant = Plant(coord=coord, nutrients=terrain.nutrients_at(coord))
        self.plants[coord] = plant
        return plant

    def remove(self, coord: Hex) -> Plant | None:
        """Remove and return the plant at ``coord`` (e.g. it was eaten)."""
        return self.plants.pop(coord, None)

    def char(self, coord: Hex) -> bool:
        """Force the plant at ``coord`` into the charred stage.

        Returns:
            True if there was a plant to char.
        """
        plant = self.plants.get(coord)
        if plant is None:
            return False
        plant.stage = PlantStage.CHARRED
        plant.growth_time = 0.0
        plant.drop_time = 0.0
        plant.times_charred += 1
        return True

    def seed(self, terrain: TerrainField, rng: Generator, chance: float) -> int:
        """Scatter dormant plants over the soil cells of a new world.

        Args:
            terrain: Generated terrain.
            rng: Seeded random generator.
            chance: Probability of a plant per soil cell.

        Returns:
            Number of plants placed.
        """
        placed = 0
        for coord, cell in terrain.cells.items():
            if cell.terrain is not TerrainType.SOIL:
                continue
            if rng.random() < chance and self.add(coord, terrain) is not None:
                placed += 1
        return placed

    def update(self, dt: float, terrain: TerrainField, rng: Generator) -> list[Hex]:
        """Advance growth, regrowth and seed dispersal by ``dt`` seconds.

        Seedlings dropped during the pass are inserted after it so that
        they do not grow in the tick they appear.

        Args:
            dt: Elapsed simulated seconds.
            terrain: Terrain used to find free soil for seeds.
            rng: Seeded random generator.

        Returns:
            Coordinates of seedlings added this tick.
        """
        seedlings: dict[Hex, Plant] = {}

        for plant in list(self.plants.values()):
            if plant.stage is PlantStage.CHARRED:
                plant.growth_time += dt
                if plant.growth_time >= self.regrowth_delay - TIME_TOLERANCE:
                    plant.stage = PlantStage.DORMANT
                    plant.growth_time = 0.0
                continue

            if plant.stage is PlantStage.MATURE:
                plant.drop_time += dt
                if plant.drop_time >= self.drop_interval - TIME_TOLERANCE:
                    plant.drop_time = 0.0
                    if rng.random() < self.drop_chance:
                        for n in neighbours(plant.coord):
                            if n not in seedlings and self.can_grow_at(n, terrain):
                                seedlings[n] = Plant(
                                    coord=n,
                                    nutrients=terrain.nutrients_at(n),
                                )
                continue

            plant.growth_time += dt
            threshold = self.base_growth / (plant.nutrients + self.epsilon)
            if plant.growth_time > threshold:
                plant.stage = _NEXT_STAGE[plant.stage]
                plant.growth_time = 0.0

        self.plants.update(seedlings)
        return list(seedlings)

    def stage_counts(self) -> dict[PlantStage, int]:
        """Return how many plants are in each stage."""
        counts = dict.fromkeys(PlantStage, 0)
        for plant in self.plants.values():
            counts[plant.stage] += 1
        return counts

    def count(self, stage: PlantStage) -> int:
        """Return how many plants are in ``stage``."""
        return sum(1 for plant in self.plants.values() if plant.stage is stage)
