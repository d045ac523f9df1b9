"""Fox — the mid-tier predator that hunts hares in loose packs.

A fox catches any hare sharing its hex outright.  A hare on a
neighbouring hex is only caught if it is visible enough against its
terrain and slower than the fox; every other fox adjacent to the hunter
adds 20% to the effective visibility, so foxes hunting together catch
better-camouflaged prey.  Foxes never enter water but drink at the shore.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, ClassVar

if TYPE_CHECKING:
    from collections.abc import Sequence

    from numpy.random import Generator

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
    count_allies,
    drain,
    first_alive_at,
    glide,
    nearest_visible,
    walkable_directions,
)
from hexaworld.fauna.genome import FLIP_CHANCE, MUTATION_SIGMA, FoxGenome, mutate
from hexaworld.world.cell import TerrainType
from hexaworld.world.hexgrid import Hex, neighbour
from hexaworld.world.plants import TIME_TOLERANCE

logger = logging.getLogger(__name__)

# -- Constants ---------------------------------------------------------------

_ENERGY_DECAY = 0.008
_THIRST_DECAY = 0.008
_DRINK_RATE = 0.5
_PARCHED = 0.2
_MOVE_COOLDOWN = 0.4
_MOVE_COST = 0.05
_DIGESTION_TIME = 10.0
_PREGNANCY_TIME = 20.0
_POST_BIRTH_ENERGY = 1.5
_VISION_RANGE = 3
_VISION_THRESHOLD = 0.1
CATCH_THRESHOLD = 0.3
PACK_BONUS = 0.2  # per adjacent fox
_REMAINS = 0.3
_GLIDE_SPEED = 50.0

_LAND = frozenset({TerrainType.SOIL, TerrainType.ROCK})

FOX_COLOUR: Colour = (255, 140, 0)


@dataclass
class Fox:
    """A single fox.

    Attributes:
        coord: Hex the fox stands on.
        genome: Inherited traits.
        energy: Food reserve; the fox starves at 0.
        thirst: Hydration (1.0 full, 0.0 dies of dehydration).
        digestion_time: Seconds until the fox can hunt again.
        move_timer: Seconds since the last step.
        pregnancy_timer: Seconds until birth while pregnant.
        is_pregnant: Whether a pregnancy is under way.
        ready_to_give_birth: Set when a pregnancy ends; cleared at birth.
        is_dead: Whether the fox has died.
        death_cause: Why the fox died.
        display_pos: Interpolated pixel position for rendering.
    """

    species: ClassVar[Species] = Species.FOX
    max_energy: ClassVar[float] = 6.0
    remains: ClassVar[float] = _REMAINS

    coord: Hex
    genome: FoxGenome = field(default_factory=FoxGenome)
    energy: float = 3.5
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
        """Return True if this fox is still alive."""
        return not self.is_dead

    @property
    def is_hidden(self) -> bool:
        return False

    @property
    def speed(self) -> float:
        """Running speed; heavier foxes are slower."""
        return 3.0 - self.genome.weight

    @property
    def colour(self) -> Colour:
        return FOX_COLOUR

    def kill(self, cause: DeathCause) -> None:
        """Mark the fox dead; it is removed at the end of the tick."""
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
    ) -> Fox:
        """Return a cub with a mutated copy of this fox's genome."""
        self.ready_to_give_birth = False
        return Fox(
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
        """Run one tick of fox behaviour.

        Args:
            world: Landscape to drink and move in.
            hares: Hare population (prey).
            foxes: Fox population (pack mates).
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
        if self.move_timer >= _MOVE_COOLDOWN - TIME_TOLERANCE and self.energy > 0.0:
            self._move(world, hares, rng)

        check_vitals(self, world, thirst=self.thirst, remains=_REMAINS)
        self.display_pos = glide(
            self.display_pos,
            world.pixel(self.coord),
            _GLIDE_SPEED,
            dt,
        )

    def hunt(self, world: World, hares: Sequence[Hare], foxes: Sequence[Fox]) -> bool:
        """Try to catch a hare on this hex or a neighbouring one.

        Returns:
            True if a hare was caught and eaten.
        """
        prey = first_alive_at(self.coord, hares)
        if prey is not None:
            self._eat(prey)
            return True

        allies = count_allies(self, foxes)
        for direction in range(6):
            prey = first_alive_at(neighbour(self.coord, direction), hares)
            if prey is None:
                continue
            if catch_succeeds(
                apparent_visibility(prey, world),
                threshold=CATCH_THRESHOLD,
                hunter_speed=self.speed,
                prey_speed=prey.speed,
                allies=allies,
                pack_bonus=PACK_BONUS,
            ):
                self._eat(prey)
                return True
        return False

    def _eat(self, prey: Hare) -> None:
        gained = prey.energy
        prey.kill(DeathCause.PREDATION)
        self.energy = min(self.max_energy, self.energy + gained)
        logger.debug(
            "Fox caught hare at %s, gained %.2f energy, now %.2f",
            prey.coord,
            gained,
            self.energy,
        )

    def _move(self, world: World, hares: Sequence[Hare], rng: Generator) -> None:
        sighting = nearest_visible(
            self.coord,
            hares,
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
