"""Wolf — the apex predator that hunts both hares and foxes.

Wolves see farther and need less contrast to spot prey than foxes, but
hunt alone (no pack bonus), move less often and burn more energy per
step.  They only set out once they have a comfortable energy reserve.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from itertools import chain
from typing import TYPE_CHECKING, ClassVar

if TYPE_CHECKING:
    from collections.abc import Sequence

    from numpy.random import Generator

    from hexaworld.fauna.base import Agent
    from hexaworld.fauna.fox import Fox
    from hexaworld.fauna.hare import Hare
    from hexaworld.world.visibility import Colour
    from hexaworld.world.world import World

from hexaworld.fauna.base import DeathCause, Species
from hexaworld.fauna.behaviour import (
    advance_pregnancy,
    apparent_visibility,
    catch_succeeds,
    check_vitals,
    choose_direction,
    drain,
    first_alive_at,
    glide,
    nearest_visible,
    walkable_directions,
)
from hexaworld.fauna.genome import FLIP_CHANCE, MUTATION_SIGMA, WolfGenome, mutate
from hexaworld.world.cell import TerrainType
from hexaworld.world.hexgrid import Hex, neighbour
from hexaworld.world.plants import TIME_TOLERANCE

logger = logging.getLogger(__name__)

# -- Constants ---------------------------------------------------------------

_ENERGY_DECAY = 0.01
_THIRST_DECAY = 0.009
_DRINK_RATE = 0.5
_PARCHED = 0.2
_MOVE_COOLDOWN = 0.6
_MIN_MOVE_ENERGY = 2.0
_MOVE_COST = 0.08
_DIGESTION_TIME = 15.0
_PREGNANCY_TIME = 25.0
_POST_BIRTH_ENERGY = 4.0
_VISION_RANGE = 4
_VISION_THRESHOLD = 0.2
CATCH_THRESHOLD = 0.2
_REMAINS = 0.4
_GLIDE_SPEED = 200.0

_LAND = frozenset({TerrainType.SOIL, TerrainType.ROCK})

WOLF_COLOUR: Colour = (64, 64, 64)


@dataclass
class Wolf:
    """A single wolf.

    Attributes:
        coord: Hex the wolf stands on.
        genome: Inherited traits.
        energy: Food reserve; the wolf starves at 0.
        thirst: Hydration (1.0 full, 0.0 dies of dehydration).
        digestion_time: Seconds until the wolf can hunt again.
        move_timer: Seconds since the last step.
        pregnancy_timer: Seconds until birth while pregnant.
        is_pregnant: Whether a pregnancy is under way.
        ready_to_give_birth: Set when a pregnancy ends; cleared at birth.
        is_dead: Whether the wolf has died.
        death_cause: Why the wolf died.
        display_pos: Interpolated pixel position for rendering.
    """

    species: ClassVar[Species] = Species.WOLF
    max_energy: ClassVar[float] = 8.0
    remains: ClassVar[float] = _REMAINS

    coord: Hex
    genome: WolfGenome = field(default_factory=WolfGenome)
    energy: float = 5.0
    thirst: float = 1.0
    digestion_time: float = 0.0
    move_timer: float = 0.0
    pregnancy_timer: float = 0.0
    is_pregnant: bool = False
    ready_to_give_birth: bool = False
    is_dead: bool = False
    death_cause: DeathCause | None = None
    display_pos: tuple[float, float] | None = None

    @property
    def is_alive(self) -> bool:
        """Return True if this wolf is still alive."""
        return not self.is_dead

    @property
    def is_hidden(self) -> bool:
        return False

    @property
    def speed(self) -> float:
        """Running speed; heavier wolves are slower."""
        return 3.5 - self.genome.weight

    @property
    def colour(self) -> Colour:
        return WOLF_COLOUR

    def kill(self, cause: DeathCause) -> None:
        """Mark the wolf dead; it is removed at the end of the tick."""
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
    ) -> Wolf:
        """Return a pup with a mutated copy of this wolf's genome."""
        self.ready_to_give_birth = False
        return Wolf(
            coord=self.coord,
            genome=mutate(self.genome, rng, sigma=sigma, flip_chance=flip_chance),
            display_pos=self.display_pos,
        )

    def update(
        self,
        world: World,
        hares: Sequence[Hare],
        foxes: Sequence[Fox],
        dt: float,
        rng: Generator,
    ) -> None:
        """Run one tick of wolf behaviour.

        Args:
            world: Landscape to drink and move in.
            hares: Hare population (prey).
            foxes: Fox population (prey).
            dt: Elapsed simulated seconds.
            rng: Seeded random generator.
        """
        if self.is_dead:
            return

        self.thirst = drain(self.thirst, _THIRST_DECAY, dt)
        if world.terrain.is_water_adjacent(self.coord):
            self.thirst = min(1.0, self.thirst + _DRINK_RATE * dt)

        self.digestion_time = max(0.0, self.digestion_time - dt)
        if self.digestion_time <= TIME_TOLERANCE and self.hunt(world, hares, foxes):
            self.digestion_time = _DIGESTION_TIME

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
        if (
            self.move_timer >= _MOVE_COOLDOWN - TIME_TOLERANCE
            and self.energy > _MIN_MOVE_ENERGY
        ):
            self._move(world, hares, foxes, rng)

        check_vitals(self, world, thirst=self.thirst, remains=_REMAINS)
        self.display_pos = glide(
            self.display_pos,
            world.pixel(self.coord),
            _GLIDE_SPEED,
            dt,
        )

    def hunt(
        self,
        world: World,
        hares: Sequence[Hare],
        foxes: Sequence[Fox],
    ) -> bool:
        """Try to catch a hare or fox on this hex or a neighbouring one.

        Hares are preferred over foxes on the same hex.

        Returns:
            True if prey was caught and eaten.
        """
        for prey_list in (hares, foxes):
            prey = first_alive_at(self.coord, prey_list)
            if prey is not None:
                self._eat(prey)
                return True

        for direction in range(6):
            n = neighbour(self.coord, direction)
            for prey_list in (hares, foxes):
                prey = first_alive_at(n, prey_list)
                if prey is None:
                    continue
                if catch_succeeds(
                    apparent_visibility(prey, world),
                    threshold=CATCH_THRESHOLD,
                    hunter_speed=self.speed,
                    prey_speed=prey.speed,
                ):
                    self._eat(prey)
                    return True
        return False

    def _eat(self, prey: Agent) -> None:
        gained = prey.energy
        prey.kill(DeathCause.PREDATION)
        self.energy = min(self.max_energy, self.energy + gained)
        logger.debug(
            "Wolf caught %s at %s, now %.2f energy",
            type(prey).__name__.lower(),
            prey.coord,
            self.energy,
        )

    def _move(
        self,
        world: World,
        hares: Sequence[Hare],
        foxes: Sequence[Fox],
        rng: Generator,
    ) -> None:
        sighting = nearest_visible(
            self.coord,
            chain(hares, foxes),
            world,
            vision_range=_VISION_RANGE,
            threshold=_VISION_THRESHOLD,
        )
        direction = choose_direction(
            world,
            self.coord,
            walkable_directions(world, self.coord, _LAND),
            rng,
            parched=self.thirst < _PARCHED,
            target=sighting[0] if sighting else None,
            approach=True,
            bias=self.genome.hunting_aggression,
        )
        if direction is None:
            return
        self.coord = neighbour(self.coord, direction)
        self.energy = max(
            0.0,
            self.energy - _MOVE_COST / self.genome.movement_efficiency,
        )
        self.move_timer = 0.0
