"""Shared vocabulary for the animal species.

Each species is its own concrete dataclass with its own update method;
they are stored in separate homogeneous lists and never dispatched
through a common base class.  ``Agent`` only describes the structural
surface the population bookkeeping, fire pass and snapshots rely on.
"""

from __future__ import annotations

from enum import Enum
from typing import TYPE_CHECKING, ClassVar, Protocol

if TYPE_CHECKING:
    from hexaworld.world.hexgrid import Hex
    from hexaworld.world.visibility import Colour


class Species(Enum):
    """The four animal species of the ecosystem."""

    HARE = "hare"
    FOX = "fox"
    WOLF = "wolf"
    SALMON = "salmon"


class DeathCause(Enum):
    """Why an animal died."""

    STARVATION = "starvation"
    DEHYDRATION = "dehydration"
    FIRE = "fire"
    PREDATION = "predation"


class Agent(Protocol):
    """Structural interface shared by every species."""

    species: ClassVar[Species]
    remains: ClassVar[float]

    coord: Hex
    energy: float
    is_dead: bool
    is_pregnant: bool
    pregnancy_timer: float
    ready_to_give_birth: bool
    display_pos: tuple[float, float] | None

    @property
    def is_alive(self) -> bool: ...

    @property
    def is_hidden(self) -> bool: ...

    @property
    def colour(self) -> Colour: ...

    @property
    def speed(self) -> float: ...

    def kill(self, cause: DeathCause) -> None: ...
