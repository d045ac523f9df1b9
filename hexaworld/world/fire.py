"""Fire — ignition, burn-down and wavefront spread.

Each burning cell carries a countdown.  When it runs out the fire goes
out and whatever plant stood there is left charred.  Every
``spread_interval`` seconds each burning cell ignites neighbouring
plants that are neither charred nor already alight, so fire sweeps
through dense vegetation in discrete waves.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from numpy.random import Generator

    from hexaworld.world.plants import PlantField

from hexaworld.world.hexgrid import Hex, neighbours
from hexaworld.world.plants import TIME_TOLERANCE, PlantStage

logger = logging.getLogger(__name__)


@dataclass
class FireField:
    """Sparse map of burning cells.

    Attributes:
        marks: Remaining burn seconds keyed by coordinate.
        burn_duration: Seconds a newly ignited cell burns.
        spread_interval: Seconds between wavefront spread steps.
        ignition_rate: Chance per simulated second of a spontaneous fire.
        min_mature_plants: Mature plants required before spontaneous
            fires can start.
        spread_timer: Seconds accumulated toward the next spread step.
    """

    marks: dict[Hex, float] = field(default_factory=dict)
    burn_duration: float = 5.0
    spread_interval: float = 2.0
    ignition_rate: float = 0.0005
    min_mature_plants: int = 20
    spread_timer: float = 0.0

    def __contains__(self, coord: object) -> bool:
        return coord in self.marks

    def __len__(self) -> int:
        return len(self.marks)

    def is_burning(self, coord: Hex) -> bool:
        """Return True if ``coord`` is on fire."""
        return coord in self.marks

    def burn_fraction(self, coord: Hex) -> float:
        """Return the remaining share of the burn (1.0 fresh, 0.0 out)."""
        remaining = self.marks.get(coord, 0.0)
        return min(1.0, max(0.0, remaining / self.burn_duration))

    def ignite(self, coord: Hex) -> bool:
        """Set ``coord`` on fire for the full burn duration.

        Returns:
            False if the cell was already burning.
        """
        if coord in self.marks:
            return False
        self.marks[coord] = self.burn_duration
        logger.debug("Fire ignited at %s", coord)
        return True

    def ignite_random_plant(self, plants: PlantField, rng: Generator) -> Hex | None:
        """Ignite a randomly chosen plant that can still burn.

        Returns:
            The ignited coordinate, or None if nothing is flammable.
        """
        candidates = [
            coord
            for coord, plant in plants.plants.items()
            if plant.stage is not PlantStage.CHARRED and coord not in self.marks
        ]
        if not candidates:
            return None
        coord = candidates[int(rng.integers(len(candidates)))]
        self.ignite(coord)
        return coord

    def update(self, dt: float, plants: PlantField, rng: Generator) -> list[Hex]:
        """Advance every fire by ``dt`` seconds.

        Order within a tick:

        1. Count down all marks; expired fires are removed and their
           plant is charred.
        2. On the spread cadence, surviving fires ignite flammable
           neighbouring plants.
        3. Once enough mature plants exist, a rare spontaneous fire
           may start on a random plant.

        Args:
            dt: Elapsed simulated seconds.
            plants: Plant map to char and spread through.
            rng: Seeded random generator.

        Returns:
            Coordinates whose fire went out this tick.
        """
        expired: list[Hex] = []
        for coord in list(self.marks):
            self.marks[coord] -= dt
            if self.marks[coord] <= TIME_TOLERANCE:
                del self.marks[coord]
                plants.char(coord)
                expired.append(coord)

        self.spread_timer += dt
        if self.spread_timer >= self.spread_interval - TIME_TOLERANCE:
            self.spread_timer -= self.spread_interval
            self.spread(plants)

        if (
            plants.count(PlantStage.MATURE) >= self.min_mature_plants
            and rng.random() < self.ignition_rate * dt
        ):
            coord = self.ignite_random_plant(plants, rng)
            if coord is not None:
                logger.info("Spontaneous fire broke out at %s", coord)

        return expired

    def spread(self, plants: PlantField) -> list[Hex]:
        """Run one wavefront step from every currently burning cell.

        Returns:
            Coordinates newly set on fire.
        """
        ignited: list[Hex] = []
        for coord in list(self.marks):
            for n in neighbours(coord):
                plant = plants.plant_at(n)
                if (
                    plant is not None
                    and plant.stage is not PlantStage.CHARRED
                    and n not in self.marks
                    and n not in ignited
                ):
                    ignited.append(n)
        for coord in ignited:
            self.ignite(coord)
        return ignited
