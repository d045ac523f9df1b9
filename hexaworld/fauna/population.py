"""Population — aggregate bookkeeping for every animal in the world.

The population owns one homogeneous list per species.  Agents act during
the tick; deaths and births are only applied afterwards, here, so the
lists never change shape while a species is being iterated.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from numpy.random import Generator

    from hexaworld.fauna.base import Agent
    from hexaworld.world.world import World

from hexaworld.fauna.base import DeathCause, Species
from hexaworld.fauna.fox import Fox
from hexaworld.fauna.genome import FLIP_CHANCE, MUTATION_SIGMA
from hexaworld.fauna.hare import Hare
from hexaworld.fauna.salmon import Salmon
from hexaworld.fauna.wolf import Wolf

logger = logging.getLogger(__name__)


@dataclass
class Population:
    """All living (and freshly dead) animals, grouped by species.

    Attributes:
        hares: Hare population.
        foxes: Fox population.
        wolves: Wolf population.
        salmon: Salmon population.
        caps: Optional maximum head count per species; births beyond it
            are dropped.
    """

    hares: list[Hare] = field(default_factory=list)
    foxes: list[Fox] = field(default_factory=list)
    wolves: list[Wolf] = field(default_factory=list)
    salmon: list[Salmon] = field(default_factory=list)
    caps: dict[Species, int] = field(default_factory=dict)

    def members(self, species: Species) -> list:
        """Return the list that holds ``species``."""
        match species:
            case Species.HARE:
                return self.hares
            case Species.FOX:
                return self.foxes
            case Species.WOLF:
                return self.wolves
            case Species.SALMON:
                return self.salmon

    def all_agents(self) -> list[Agent]:
        """Return every agent in species order, then list order."""
        return [*self.hares, *self.foxes, *self.wolves, *self.salmon]

    def add(self, agent: Hare | Fox | Wolf | Salmon) -> None:
        """Append ``agent`` to the list of its species."""
        self.members(agent.species).append(agent)

    def remove_dead(self) -> list[Agent]:
        """Remove and return agents that died this tick.

        Returns:
            The removed agents, in species order.
        """
        dead: list[Agent] = []
        for species in Species:
            agents = self.members(species)
            dead.extend(a for a in agents if not a.is_alive)
            agents[:] = [a for a in agents if a.is_alive]
        return dead

    def burn(self, world: World) -> int:
        """Kill every living animal standing on a burning hex.

        Burnt bodies return their remains to the soil.

        Returns:
            Number of animals killed.
        """
        killed = 0
        for species in Species:
            for agent in self.members(species):
                if agent.is_alive and world.is_burning(agent.coord):
                    agent.kill(DeathCause.FIRE)
                    world.terrain.enrich(agent.coord, agent.remains)
                    killed += 1
        if killed:
            logger.debug("Fire killed %d animals", killed)
        return killed

    def deliver_births(
        self,
        rng: Generator,
        *,
        sigma: float = MUTATION_SIGMA,
        flip_chance: float = FLIP_CHANCE,
    ) -> int:
        """Append a newborn for every live parent flagged ready to give birth.

        Parents are visited in species order, then list order.  The flag
        is cleared even when the species is already at its cap.

        Args:
            rng: Seeded random generator for genome mutation.
            sigma: Mutation standard deviation.
            flip_chance: Probability of flipping a boolean trait.

        Returns:
            Number of newborns added.
        """
        born = 0
        for species in Species:
            agents = self.members(species)
            cap = self.caps.get(species)
            parents = [a for a in agents if a.is_alive and a.ready_to_give_birth]
            for parent in parents:
                if cap is not None and len(agents) >= cap:
                    parent.ready_to_give_birth = False
                    continue
                agents.append(
                    parent.give_birth(rng, sigma=sigma, flip_chance=flip_chance),
                )
                born += 1
                logger.debug("%s born at %s", species.value, parent.coord)
        return born

    def counts(self) -> dict[Species, int]:
        """Return the number of living agents per species."""
        return {
            species: sum(1 for a in self.members(species) if a.is_alive)
            for species in Species
        }

    def total(self) -> int:
        """Return the number of living agents across all species."""
        return sum(self.counts().values())

    def is_extinct(self, species: Species) -> bool:
        """Return True if no living agent of ``species`` remains."""
        return not any(a.is_alive for a in self.members(species))
