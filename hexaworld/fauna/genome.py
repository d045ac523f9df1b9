"""Genomes — heritable, bounded trait sets for each species.

Every species carries its own frozen genome dataclass.  Continuous
traits declare their valid ``[min, max]`` range in the field metadata so
that mutation and averaging can work on any genome generically and
always clamp results back into range.  Boolean traits (such as the
hare's ability to hide) flip rarely instead of drifting.

Offspring are produced by single-parent mutation during the simulation.
``average`` exists for the offline tuning loop in ``evolution.py``.
"""

from __future__ import annotations

from dataclasses import dataclass, field, fields, replace
from typing import TYPE_CHECKING, Any, TypeVar

if TYPE_CHECKING:
    from numpy.random import Generator

MUTATION_SIGMA = 0.1
FLIP_CHANCE = 0.01

G = TypeVar("G")


def trait(default: float, low: float, high: float) -> Any:
    """Declare a continuous trait with a default and a valid range."""
    return field(default=default, metadata={"range": (low, high)})


@dataclass(frozen=True)
class HareGenome:
    """Heritable traits of a hare.

    Attributes:
        reproduction_threshold: Energy needed to become pregnant.
        fear: Probability of fleeing from a visible predator.
        weight: Heavier hares are darker and slower.
        movement_efficiency: Divides the energy cost of each step.
        can_hide: Whether the hare burrows when a predator is adjacent.
    """

    reproduction_threshold: float = trait(1.5, 1.0, 2.0)
    fear: float = trait(0.5, 0.0, 1.0)
    weight: float = trait(1.0, 0.5, 1.5)
    movement_efficiency: float = trait(1.0, 0.5, 1.5)
    can_hide: bool = False


@dataclass(frozen=True)
class FoxGenome:
    """Heritable traits of a fox.

    Attributes:
        reproduction_threshold: Energy needed to become pregnant.
        hunting_aggression: Probability of chasing visible prey.
        weight: Heavier foxes are slower.
        movement_efficiency: Divides the energy cost of each step.
    """

    reproduction_threshold: float = trait(4.5, 3.0, 5.5)
    hunting_aggression: float = trait(0.7, 0.0, 1.0)
    weight: float = trait(1.0, 0.5, 1.5)
    movement_efficiency: float = trait(1.0, 0.5, 1.5)


@dataclass(frozen=True)
class WolfGenome:
    """Heritable traits of a wolf.

    Attributes:
        reproduction_threshold: Energy needed to become pregnant.
        hunting_aggression: Probability of chasing visible prey.
        weight: Heavier wolves are slower.
        movement_efficiency: Divides the energy cost of each step.
    """

    reproduction_threshold: float = trait(6.5, 5.0, 7.5)
    hunting_aggression: float = trait(0.7, 0.0, 1.0)
    weight: float = trait(1.0, 0.5, 1.5)
    movement_efficiency: float = trait(1.0, 0.5, 1.5)


@dataclass(frozen=True)
class SalmonGenome:
    """Heritable traits of a salmon."""

    reproduction_threshold: float = trait(2.0, 1.5, 2.5)
    movement_efficiency: float = trait(1.0, 0.5, 1.5)


def trait_ranges(genome: Any) -> dict[str, tuple[float, float]]:
    """Return ``{trait_name: (min, max)}`` for a genome class or instance."""
    return {f.name: f.metadata["range"] for f in fields(genome) if "range" in f.metadata}


def in_range(genome: Any) -> bool:
    """Return True if every continuous trait lies within its declared range."""
    return all(
        low <= getattr(genome, name) <= high
        for name, (low, high) in trait_ranges(genome).items()
    )


def _clamp(value: float, low: float, high: float) -> float:
    return min(high, max(low, value))


def mutate(
    genome: G,
    rng: Generator,
    *,
    sigma: float = MUTATION_SIGMA,
    flip_chance: float = FLIP_CHANCE,
) -> G:
    """Return a mutated copy of ``genome``.

    Every continuous trait gets independent zero-mean Gaussian noise and
    is clamped back into its range.  Every boolean trait flips with
    probability ``flip_chance``.  Traits are visited in declaration
    order so the RNG stream is consumed deterministically.

    Args:
        genome: Parent genome.
        rng: Seeded random generator.
        sigma: Standard deviation of the Gaussian perturbation.
        flip_chance: Probability of flipping each boolean trait.

    Returns:
        A new genome of the same type.
    """
    changes: dict[str, Any] = {}
    for f in fields(genome):  # type: ignore[arg-type]
        value = getattr(genome, f.name)
        if "range" in f.metadata:
            low, high = f.metadata["range"]
            changes[f.name] = _clamp(value + float(rng.normal(0.0, sigma)), low, high)
        elif isinstance(value, bool):
            changes[f.name] = (not value) if rng.random() < flip_chance else value
    return replace(genome, **changes)  # type: ignore[type-var]


def average(first: G, second: G) -> G:
    """Blend two genomes by averaging each continuous trait.

    Boolean traits are inherited from ``first``.
    """
    changes = {
        name: _clamp((getattr(first, name) + getattr(second, name)) / 2.0, low, high)
        for name, (low, high) in trait_ranges(first).items()
    }
    return replace(first, **changes)  # type: ignore[type-var]


def random_genome(genome_cls: type[G], rng: Generator) -> G:
    """Draw a genome with every continuous trait uniform over its range."""
    values = {
        name: float(rng.uniform(low, high))
        for name, (low, high) in trait_ranges(genome_cls).items()
    }
    return genome_cls(**values)
