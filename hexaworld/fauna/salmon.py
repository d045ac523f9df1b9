"""Salmon — the aquatic filler species.

Salmon live only in water, graze passively on the nutrients of the water
cell they swim in, and wander at random.  They never thirst and nothing
hunts them; they keep the lakes populated.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, ClassVar

if TYPE_CHECKING:
    from numpy.random import Generator

    from hexaworld.world.visibility import Colour
    from hexaworld.world.world import World

from hexaworld.fauna.base import DeathCause, Species
from hexaworld.fauna.behaviour import (
    advance_pregnancy,
    check_vitals,
    choose_direction,
    drain,
    glide,
    walkable_directions,
)
from hexaworld.fauna.genome import FLIP_CHANCE, MUTATION_SIGMA, SalmonGenome, mutate
from hexaworld.world.cell import TerrainType
from hexaworld.world.hexgrid import Hex, neighbour
from hexaworld.world.plants import TIME_TOLERANCE

# -- Constants ---------------------------------------------------------------

_ENERGY_DECAY = 0.005
_FEED_RATE = 0.02  # scaled by water nutrients
_MOVE_COOLDOWN = 1.0
_MOVE_COST = 0.02
_PREGNANCY_TIME = 15.0
_POST_BIRTH_ENERGY = 1.0
_GLIDE_SPEED = 50.0

_WATER = frozenset({TerrainType.WATER})

SALMON_COLOUR: Colour = (255, 100, 100)


@dataclass
class Salmon:
    """A single salmon.

    Attributes:
        coord: Water hex the salmon swims in.
        genome: Inherited traits.
        energy: Food reserve; the salmon starves at 0.
        move_timer: Seconds since the last swim.
        pregnancy_timer: Seconds until spawning while pregnant.
        is_pregnant: Whether a pregnancy is under way.
        ready_to_give_birth: Set when a pregnancy ends; cleared at birth.
        is_dead: Whether the salmon has died.
        death_cause: Why the salmon died.
        display_pos: Interpolated pixel position for rendering.
    """

    species: ClassVar[Species] = Species.SALMON
    max_energy: ClassVar[float] = 3.0
    remains: ClassVar[float] = 0.0

    coord: Hex
    genome: SalmonGenome = field(default_factory=SalmonGenome)
    energy: float = 1.0
    move_timer: float = 0.0
    pregnancy_timer: float = 0.0
    is_pregnant: bool = False
    ready_to_give_birth: bool = False
    is_dead: bool = False
    death_cause: DeathCause | None = None
    display_pos: tuple[float, float] | None = None

    @property
    def is_alive(self) -> bool:
        """Return True if this salmon is still alive."""
        return not self.is_dead

    @property
    def is_hidden(self) -> bool:
        return False

    @property
    def speed(self) -> float:
        return 1.0

    @property
    def colour(self) -> Colour:
        return SALMON_COLOUR

    def kill(self, cause: DeathCause) -> None:
        """Mark the salmon dead; it is removed at the end of the tick."""
        if self.is_dead:
            return
        self.is_dead = True
        self.death_cause = cause

    def give_birth(
        self,
        rng: Generator,
        *,
        sigma: float = MUTATION_SIGMA,
        flip_chance: float = FLIP_CHANCE,
    ) -> Salmon:
        """Return a fry with a mutated copy of this salmon's genome."""
        self.ready_to_give_birth = False
        return Salmon(
            coord=self.coord,
            genome=mutate(self.genome, rng, sigma=sigma, flip_chance=flip_chance),
            display_pos=self.display_pos,
        )

    def update(self, world: World, dt: float, rng: Generator) -> None:
        """Run one tick of salmon behaviour.

        Args:
            world: Landscape to swim in.
            dt: Elapsed simulated seconds.
            rng: Seeded random generator.
        """
        if self.is_dead:
            return

        if world.terrain_at(self.coord) is TerrainType.WATER:
            feed = _FEED_RATE * world.terrain.nutrients_at(self.coord) * dt
            self.energy = min(self.max_energy, self.energy + feed)

        advance_pregnancy(
            self,
            dt,
            threshold=self.genome.reproduction_threshold,
            duration=_PREGNANCY_TIME,
            reset_energy=_POST_BIRTH_ENERGY,
        )
        # upkeep is paid after the pregnancy check
        self.energy = drain(self.energy, _ENERGY_DECAY, dt)

        self.move_timer += dt
        if self.move_timer >= _MOVE_COOLDOWN - TIME_TOLERANCE and self.energy > 0.0:
            direction = choose_direction(
                world,
                self.coord,
                walkable_directions(world, self.coord, _WATER),
                rng,
            )
            if direction is not None:
                self.coord = neighbour(self.coord, direction)
                self.energy = max(
                    0.0,
                    self.energy - _MOVE_COST / self.genome.movement_efficiency,
                )
                self.move_timer = 0.0

        check_vitals(self, world, thirst=None, remains=self.remains)
        self.display_pos = glide(
            self.display_pos,
            world.pixel(self.coord),
            _GLIDE_SPEED,
            dt,
        )
