"""Hare — the herbivore that grazes plants and flees predators.

Hares eat established or mature plants on their own hex, then rest to
eat and digest.  After digesting a meal they drop a single seed on the
spot, closing the loop between grazing and plant spread.  Fearful hares
run from the nearest fox or wolf they can see; hares carrying the
``can_hide`` gene burrow instead when a predator is right next to them.
Their coat colour comes from the genome, which is what predators see.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from itertools import chain
from typing import TYPE_CHECKING, ClassVar

if TYPE_CHECKING:
    from collections.abc import Sequence

    from numpy.random import Generator

    from hexaworld.fauna.fox import Fox
    from hexaworld.fauna.wolf import Wolf
    from hexaworld.world.visibility import Colour
    from hexaworld.world.world import World

from hexaworld.fauna.base import DeathCause, Species
from hexaworld.fauna.behaviour import (
    advance_pregnancy,
    check_vitals,
    choose_direction,
    drain,
    glide,
    nearest_visible,
    walkable_directions,
)
from hexaworld.fauna.genome import FLIP_CHANCE, MUTATION_SIGMA, HareGenome, mutate
from hexaworld.world.cell import TerrainType
from hexaworld.world.hexgrid import Hex, neighbour
from hexaworld.world.plants import PLANT_ENERGY, TIME_TOLERANCE

# -- Constants ---------------------------------------------------------------

_ENERGY_DECAY = 0.004
_THIRST_DECAY = 0.008
_DRINK_RATE = 0.5
_THIRSTY = 0.3  # may wade into water below this
_PARCHED = 0.2  # heads for water below this
_MOVE_COOLDOWN = 0.4
_MOVE_COST = 0.05
_EAT_TIME = 2.0
_DIGESTION_TIME = 2.0
_PREGNANCY_TIME = 20.0
_POST_BIRTH_ENERGY = 0.6
_VISION_RANGE = 3
_VISION_THRESHOLD = 0.1
_BURROW_TIME = 3.0
_REMAINS = 0.3
_GLIDE_SPEED = 50.0

_LAND = frozenset({TerrainType.SOIL, TerrainType.ROCK})
_LAND_AND_WATER = _LAND | {TerrainType.WATER}

BASE_COLOUR: Colour = (210, 180, 140)  # khaki
BURROW_COLOUR: Colour = (128, 128, 128)


@dataclass
class Hare:
    """A single hare.

    Attributes:
        coord: Hex the hare stands on.
        genome: Inherited traits.
        energy: Food reserve; the hare starves at 0.
        thirst: Hydration (1.0 full, 0.0 dies of dehydration).
        digestion_time: Seconds until the hare can graze again.
        move_timer: Seconds since the last step.
        eating_timer: Seconds left in the current meal (no moving).
        burrow_timer: Seconds left hiding underground.
        pregnancy_timer: Seconds until birth while pregnant.
        is_pregnant: Whether a pregnancy is under way.
        ready_to_give_birth: Set when a pregnancy ends; cleared at birth.
        seed_pending: A seed will be dropped once digestion finishes.
        is_dead: Whether the hare has died this or an earlier tick.
        death_cause: Why the hare died.
        display_pos: Interpolated pixel position for rendering.
    """

    species: ClassVar[Species] = Species.HARE
    max_energy: ClassVar[float] = 2.0
    remains: ClassVar[float] = _REMAINS

    coord: Hex
    genome: HareGenome = field(default_factory=HareGenome)
    energy: float = 1.0
    thirst: float = 1.0
    digestion_time: float = 0.0
    move_timer: float = 0.0
    eating_timer: float = 0.0
    burrow_timer: float = 0.0
    pregnancy_timer: float = 0.0
    is_pregnant: bool = False
    ready_to_give_birth: bool = False
    seed_pending: bool = False
    is_dead: bool = False
    death_cause: DeathCause | None = None
    display_pos: tuple[float, float] | None = None

    @property
    def is_alive(self) -> bool:
        """Return True if this hare is still alive."""
        return not self.is_dead

    @property
    def is_burrowing(self) -> bool:
        """Return True while the hare hides underground."""
        return self.burrow_timer > TIME_TOLERANCE

    @property
    def is_eating(self) -> bool:
        """Return True while the hare is busy with a meal."""
        return self.eating_timer > TIME_TOLERANCE

    @property
    def is_hidden(self) -> bool:
        """Burrowed hares cannot be seen from neighbouring hexes."""
        return self.is_burrowing

    @property
    def speed(self) -> float:
        """Running speed; heavier hares are slower."""
        return 2.0 - self.genome.weight

    @property
    def colour(self) -> Colour:
        """Coat colour derived from the genome.

        Calm hares are paler, heavy hares darker, burrowed hares show
        only grey earth.
        """
        if self.is_burrowing:
            return BURROW_COLOUR
        pale = (1.0 - self.genome.fear) * 50.0
        dark = (self.genome.weight - 1.0) * 50.0
        # whole channel values after each adjustment
        paled = (min(255, int(c + pale)) for c in BASE_COLOUR)
        r, g, b = (min(255, max(0, int(c - dark))) for c in paled)
        return r, g, b

    def kill(self, cause: DeathCause) -> None:
        """Mark the hare dead; it is removed at the end of the tick."""
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
    ) -> Hare:
        """Return a leveret with a mutated copy of this hare's genome."""
        self.ready_to_give_birth = False
        return Hare(
            coord=self.coord,
            genome=mutate(self.genome, rng, sigma=sigma, flip_chance=flip_chance),
            display_pos=self.display_pos,
        )

    def update(
        self,
        world: World,
        foxes: Sequence[Fox],
        wolves: Sequence[Wolf],
        dt: float,
        rng: Generator,
    ) -> None:
        """Run one tick of hare behaviour.

        Args:
            world: Landscape to graze, drink and move in.
            foxes: Fox population (threats).
            wolves: Wolf population (threats).
            dt: Elapsed simulated seconds.
            rng: Seeded random generator.
        """
        if self.is_dead:
            return

        self.thirst = drain(self.thirst, _THIRST_DECAY, dt)
        if world.terrain.is_water_adjacent(self.coord):
            self.thirst = min(1.0, self.thirst + _DRINK_RATE * dt)

        self.digestion_time = max(0.0, self.digestion_time - dt)
        if self.seed_pending and self.digestion_time <= TIME_TOLERANCE:
            self.seed_pending = False
            world.plants.add(self.coord, world.terrain)

        self.eating_timer = max(0.0, self.eating_timer - dt)
        self.burrow_timer = max(0.0, self.burrow_timer - dt)
        self.move_timer += dt

        threat = nearest_visible(
            self.coord,
            chain(foxes, wolves),
            world,
            vision_range=_VISION_RANGE,
            threshold=_VISION_THRESHOLD,
        )
        if (
            threat is not None
            and threat[1] == 1
            and self.genome.can_hide
            and not self.is_burrowing
            and world.terrain_at(self.coord) is TerrainType.SOIL
        ):
            self.burrow_timer = _BURROW_TIME

        if not self.is_burrowing and self.digestion_time <= TIME_TOLERANCE:
            self.graze(world)

        advance_pregnancy(
            self,
            dt,
            threshold=self.genome.reproduction_threshold,
            duration=_PREGNANCY_TIME,
            reset_energy=_POST_BIRTH_ENERGY,
        )
        # upkeep is paid after the pregnancy check
        self.energy = drain(self.energy, _ENERGY_DECAY, dt)

        if (
            not self.is_burrowing
            and not self.is_eating
            and self.move_timer >= _MOVE_COOLDOWN - TIME_TOLERANCE
            and self.energy > 0.0
        ):
            self._move(world, threat[0] if threat else None, rng)

        check_vitals(self, world, thirst=self.thirst, remains=_REMAINS)
        self.display_pos = glide(
            self.display_pos,
            world.pixel(self.coord),
            _GLIDE_SPEED,
            dt,
        )

    def graze(self, world: World) -> bool:
        """Eat an edible plant on the current hex.

        The plant is removed, energy grows by the stage's value, and the
        hare settles down to eat and digest.

        Returns:
            True if a plant was eaten.
        """
        plant = world.plants.plant_at(self.coord)
        if plant is None or not plant.is_edible:
            return False
        world.plants.remove(self.coord)
        self.energy = min(self.max_energy, self.energy + PLANT_ENERGY[plant.stage])
        self.digestion_time = _DIGESTION_TIME
        self.eating_timer = _EAT_TIME
        self.seed_pending = True
        return True

    def _move(self, world: World, threat: Hex | None, rng: Generator) -> None:
        allowed = _LAND_AND_WATER if self.thirst < _THIRSTY else _LAND
        direction = choose_direction(
            world,
            self.coord,
            walkable_directions(world, self.coord, allowed),
            rng,
            parched=self.thirst < _PARCHED,
            target=threat,
            approach=False,
            bias=self.genome.fear,
        )
        if direction is None:
            return
        self.coord = neighbour(self.coord, direction)
        self.energy = max(
            0.0,
            self.energy - _MOVE_COST / self.genome.movement_efficiency,
        )
        self.move_timer = 0.0
