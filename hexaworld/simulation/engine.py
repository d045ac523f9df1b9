"""SimulationEngine — the main tick loop.

Owns all top-level simulation state and advances it in a fixed tick
order:

1. Update the landscape (plants grow and drop seeds, fire burns down,
   spreads and may ignite on its own)
2. Update hares, foxes, wolves and salmon, one species after another
3. Kill every animal standing in fire
4. Remove the dead
5. Deliver births from parents that survived the tick
6. Record population counts
"""

from __future__ import annotations

import logging
from collections import deque
from dataclasses import dataclass, field

import numpy as np
from numpy.random import Generator

from hexaworld.fauna.base import Species
from hexaworld.fauna.fox import Fox
from hexaworld.fauna.hare import Hare
from hexaworld.fauna.population import Population
from hexaworld.fauna.salmon import Salmon
from hexaworld.fauna.wolf import Wolf
from hexaworld.simulation.config import SimulationConfig
from hexaworld.simulation.snapshot import (
    PopulationCounts,
    WorldSnapshot,
    count_population,
    take_snapshot,
)
from hexaworld.world.fire import FireField
from hexaworld.world.hexgrid import Hex
from hexaworld.world.plants import PlantField
from hexaworld.world.world import World

logger = logging.getLogger(__name__)

_SPECIES_TYPES: dict[Species, type[Hare | Fox | Wolf | Salmon]] = {
    Species.HARE: Hare,
    Species.FOX: Fox,
    Species.WOLF: Wolf,
    Species.SALMON: Salmon,
}


@dataclass
class SimulationEngine:
    """Drives the simulation forward tick by tick.

    Attributes:
        config: Loaded simulation configuration.
        world: The hexagonal landscape.
        population: All animals.
        rng: Master seeded random generator.
        tick: Current tick count.
        elapsed: Simulated seconds since the start.
        history: Population counts of the most recent ticks.
    """

    config: SimulationConfig
    world: World = field(init=False)
    population: Population = field(init=False)
    rng: Generator = field(init=False)
    tick: int = 0
    elapsed: float = 0.0
    history: deque[PopulationCounts] = field(init=False)

    def __post_init__(self) -> None:
        """Validate config, then build world, animals and RNG from it."""
        self.config.validate()
        self.rng = np.random.default_rng(self.config.seed)
        self.world = World(
            hex_size=self.config.hex_size,
            plants=PlantField(
                base_growth=self.config.plant_base_growth,
                regrowth_delay=self.config.plant_regrowth_delay,
                drop_interval=self.config.plant_drop_interval,
                drop_chance=self.config.plant_drop_chance,
            ),
            fire=FireField(
                burn_duration=self.config.fire_burn_duration,
                spread_interval=self.config.fire_spread_interval,
                ignition_rate=self.config.fire_ignition_rate,
                min_mature_plants=self.config.fire_min_mature_plants,
            ),
        )
        self.world.generate(
            self.rng,
            radius=self.config.world_radius,
            plant_chance=self.config.initial_plant_chance,
        )
        self.population = Population(caps=self.config.population_caps())
        self._spawn_initial()
        self.history = deque(maxlen=self.config.history_length)
        self.history.append(self.counts())

    def _spawn_initial(self) -> None:
        """Place each species' starting animals on its preferred terrain."""
        for species, cls in _SPECIES_TYPES.items():
            settings = self.config.species.get(species)
            if settings is None or settings.initial_count == 0:
                continue
            allowed = set(settings.terrains())
            candidates: list[Hex] = [
                cell.coord
                for cell in self.world.terrain.cells.values()
                if cell.terrain in allowed
            ]
            if not candidates:
                logger.warning(
                    "No %s cells for %s; none spawned",
                    "/".join(settings.preferred_terrains),
                    species.value,
                )
                continue
            for _ in range(settings.initial_count):
                coord = candidates[int(self.rng.integers(len(candidates)))]
                self.population.add(cls(coord=coord))
            logger.info("Spawned %d %s", settings.initial_count, species.value)

    def step(self, dt: float | None = None) -> None:
        """Advance the simulation by one tick.

        Args:
            dt: Simulated seconds to advance; defaults to the configured
                time step.
        """
        if dt is None:
            dt = self.config.time_step
        world = self.world
        pop = self.population

        # 1. Landscape
        world.update(dt, self.rng)

        # 2. Animals, each species over a snapshot of its list
        for hare in list(pop.hares):
            hare.update(world, pop.foxes, pop.wolves, dt, self.rng)
        for fox in list(pop.foxes):
            fox.update(world, pop.hares, pop.foxes, dt, self.rng)
        for wolf in list(pop.wolves):
            wolf.update(world, pop.hares, pop.foxes, dt, self.rng)
        for salmon in list(pop.salmon):
            salmon.update(world, dt, self.rng)

        # 3. Fire
        pop.burn(world)

        # 4-5. Deaths, then births
        pop.remove_dead()
        pop.deliver_births(
            self.rng,
            sigma=self.config.mutation_sigma,
            flip_chance=self.config.flip_chance,
        )

        self.tick += 1
        self.elapsed += dt

        # 6. History
        self.history.append(self.counts())

    def run(self, ticks: int, dt: float | None = None) -> None:
        """Run the simulation for a fixed number of ticks.

        Args:
            ticks: Number of ticks to advance.
            dt: Seconds per tick (configured time step if omitted).
        """
        for _ in range(ticks):
            self.step(dt)

    def ignite_random_plant(self) -> Hex | None:
        """Set a randomly chosen plant on fire.

        Returns:
            The ignited coordinate, or None if there are no plants.
        """
        return self.world.fire.ignite_random_plant(self.world.plants, self.rng)

    def counts(self) -> PopulationCounts:
        """Return the current per-species and per-stage counts."""
        return count_population(self.tick, self.world, self.population)

    def snapshot(self) -> WorldSnapshot:
        """Return a frozen, renderer-friendly copy of the current state."""
        return take_snapshot(self.tick, self.world, self.population)
