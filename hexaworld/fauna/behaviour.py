"""Behaviour helpers shared by the per-species update methods.

These are small, species-agnostic building blocks: resource decay,
vision, hunting odds, direction filtering, pregnancy and death checks.
Each species composes them with its own constants inside its own
``update`` method.

Direction choice narrows the candidate set through a fixed chain of
preferences.  A filter that would leave no candidates is skipped, so an
animal surrounded by fire still moves rather than freezing in place.
"""

from __future__ import annotations

import logging
import math
from collections.abc import Callable, Collection, Iterable
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from numpy.random import Generator

    from hexaworld.fauna.base import Agent
    from hexaworld.world.cell import TerrainType
    from hexaworld.world.world import World

from hexaworld.fauna.base import DeathCause
from hexaworld.world.hexgrid import Hex, hex_distance, neighbour
from hexaworld.world.plants import TIME_TOLERANCE
from hexaworld.world.visibility import visibility

logger = logging.getLogger(__name__)


def drain(value: float, rate: float, dt: float) -> float:
    """Return ``value`` reduced by ``rate * dt``, floored at zero."""
    return max(0.0, value - rate * dt)


def glide(
    current: tuple[float, float] | None,
    target: tuple[float, float],
    speed: float,
    dt: float,
) -> tuple[float, float]:
    """Move a display position toward ``target`` at ``speed`` pixels/s.

    A missing position snaps straight to the target.
    """
    if current is None:
        return target
    distance = math.dist(current, target)
    step = speed * dt
    if distance <= step or distance == 0.0:
        return target
    t = step / distance
    return (
        current[0] + (target[0] - current[0]) * t,
        current[1] + (target[1] - current[1]) * t,
    )


def apparent_visibility(agent: Agent, world: World) -> float:
    """Return how visible ``agent`` is where it stands (0.0 if hidden)."""
    if agent.is_hidden:
        return 0.0
    return visibility(agent.colour, world.terrain_at(agent.coord))


def nearest_visible(
    origin: Hex,
    others: Iterable[Agent],
    world: World,
    *,
    vision_range: int,
    threshold: float,
) -> tuple[Hex, int] | None:
    """Find the closest living animal that can be seen from ``origin``.

    An animal counts as seen when it is within ``vision_range`` hexes
    (but not on the same hex) and its visibility exceeds ``threshold``.
    Ties keep the first animal encountered.

    Returns:
        ``(coord, distance)`` of the nearest seen animal, or None.
    """
    best: tuple[Hex, int] | None = None
    best_dist = vision_range + 1
    for other in others:
        if not other.is_alive:
            continue
        dist = hex_distance(origin, other.coord)
        if dist == 0 or dist >= best_dist:
            continue
        if apparent_visibility(other, world) > threshold:
            best = (other.coord, dist)
            best_dist = dist
    return best


def count_allies(hunter: Agent, pack: Iterable[Agent]) -> int:
    """Count living pack members exactly one hex away from ``hunter``."""
    return sum(
        1
        for other in pack
        if other is not hunter
        and other.is_alive
        and hex_distance(other.coord, hunter.coord) == 1
    )


def catch_succeeds(
    prey_visibility: float,
    *,
    threshold: float,
    hunter_speed: float,
    prey_speed: float,
    allies: int = 0,
    pack_bonus: float = 0.0,
) -> bool:
    """Decide whether a hunter catches prey on an adjacent hex.

    The prey's visibility is boosted by ``pack_bonus`` per adjacent ally;
    the catch needs the boosted score to exceed ``threshold`` and the
    hunter to be strictly faster than the prey.
    """
    score = prey_visibility * (1.0 + pack_bonus * allies)
    return score > threshold and hunter_speed > prey_speed


def first_alive_at(coord: Hex, animals: Iterable[Agent]) -> Agent | None:
    """Return the first living animal standing on ``coord``."""
    for animal in animals:
        if animal.is_alive and animal.coord == coord:
            return animal
    return None


def walkable_directions(
    world: World,
    coord: Hex,
    allowed: Collection[TerrainType],
) -> list[int]:
    """Return directions leading to generated cells with allowed terrain."""
    result: list[int] = []
    for direction in range(6):
        n = neighbour(coord, direction)
        if world.has_cell(n) and world.terrain_at(n) in allowed:
            result.append(direction)
    return result


def narrow(directions: list[int], keep: Callable[[int], bool]) -> list[int]:
    """Filter ``directions`` by ``keep`` unless nothing would remain."""
    kept = [d for d in directions if keep(d)]
    return kept or directions


def choose_direction(
    world: World,
    coord: Hex,
    directions: list[int],
    rng: Generator,
    *,
    parched: bool = False,
    target: Hex | None = None,
    approach: bool = True,
    bias: float = 0.0,
) -> int | None:
    """Pick a movement direction from ``directions``.

    Preferences, applied in order:

    1. Avoid burning cells.
    2. If ``parched``, prefer cells that are water or touch water.
    3. Otherwise, if a ``target`` is known, with probability ``bias``
       prefer directions that bring the animal closer to it
       (``approach``) or farther from it.

    The remaining candidates are tie-broken uniformly at random.

    Returns:
        The chosen direction, or None if ``directions`` is empty.
    """
    if not directions:
        return None

    candidates = narrow(
        directions,
        lambda d: not world.is_burning(neighbour(coord, d)),
    )

    if parched:
        candidates = narrow(
            candidates,
            lambda d: world.terrain.is_water_adjacent(neighbour(coord, d)),
        )
    elif target is not None:
        here = hex_distance(coord, target)
        if approach:
            preferred = [
                d
                for d in candidates
                if hex_distance(neighbour(coord, d), target) < here
            ]
        else:
            preferred = [
                d
                for d in candidates
                if hex_distance(neighbour(coord, d), target) > here
            ]
        if preferred and rng.random() < bias:
            candidates = preferred

    return candidates[int(rng.integers(len(candidates)))]


def advance_pregnancy(
    agent: Agent,
    dt: float,
    *,
    threshold: float,
    duration: float,
    reset_energy: float,
) -> None:
    """Start, or count down, a pregnancy.

    Reaching ``threshold`` energy while not pregnant starts a pregnancy
    and pays the reproduction cost by resetting energy.  When the timer
    runs out the agent is flagged ready to give birth.
    """
    if not agent.is_pregnant and agent.energy >= threshold:
        agent.is_pregnant = True
        agent.pregnancy_timer = duration
        agent.energy = reset_energy
        logger.debug("%s became pregnant at %s", type(agent).__name__, agent.coord)

    if agent.is_pregnant:
        agent.pregnancy_timer -= dt
        if agent.pregnancy_timer <= TIME_TOLERANCE:
            agent.ready_to_give_birth = True
            agent.is_pregnant = False


def check_vitals(
    agent: Agent,
    world: World,
    *,
    thirst: float | None,
    remains: float,
) -> None:
    """Kill an animal that has run out of energy or water.

    A death returns ``remains`` nutrients to the soil it lies on.

    Args:
        agent: Animal to check.
        world: World whose soil receives the remains.
        thirst: Current hydration, or None for species that never thirst.
        remains: Nutrients deposited on death.
    """
    if agent.is_dead:
        return
    if agent.energy <= 0.0:
        cause = DeathCause.STARVATION
    elif thirst is not None and thirst <= 0.0:
        cause = DeathCause.DEHYDRATION
    else:
        return
    agent.kill(cause)
    world.terrain.enrich(agent.coord, remains)
    logger.debug(
        "%s died of %s at %s",
        type(agent).__name__,
        cause.value,
        agent.coord,
    )
