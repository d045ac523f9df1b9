"""Evolution — offline genome tuning outside the main simulation loop.

The running simulation only ever produces offspring by single-parent
mutation.  This module offers a small generational search for balancing
experiments: score a population of genomes with a caller-supplied
fitness function, keep the better half, and refill it with mutated
two-parent averages.
"""

from __future__ import annotations

from collections.abc import Callable, Sequence
from typing import TYPE_CHECKING, TypeVar

if TYPE_CHECKING:
    from numpy.random import Generator

from hexaworld.fauna.genome import MUTATION_SIGMA, average, mutate, random_genome

G = TypeVar("G")


def initial_population(genome_cls: type[G], size: int, rng: Generator) -> list[G]:
    """Draw ``size`` genomes uniformly over their trait ranges."""
    return [random_genome(genome_cls, rng) for _ in range(size)]


def evolve_genomes(
    population: Sequence[G],
    fitness: Callable[[G], float],
    *,
    generations: int,
    rng: Generator,
    sigma: float = MUTATION_SIGMA,
) -> list[G]:
    """Run truncation selection with averaging crossover.

    Each generation the population is ranked by ``fitness``, the top half
    survives, and the rest is refilled with ``mutate(average(a, b))`` of
    two survivors picked uniformly at random.

    Args:
        population: Starting genomes (at least two).
        fitness: Scores a genome; higher is better.
        generations: Number of selection rounds.
        rng: Seeded random generator.
        sigma: Mutation standard deviation for offspring.

    Returns:
        The final population, same size as the input.

    Raises:
        ValueError: If fewer than two genomes are given.
    """
    if len(population) < 2:
        msg = f"need at least 2 genomes to evolve, got {len(population)}"
        raise ValueError(msg)

    current = list(population)
    size = len(current)
    for _ in range(generations):
        ranked = sorted(current, key=fitness, reverse=True)
        survivors = ranked[: size // 2]
        current = list(survivors)
        while len(current) < size:
            a = survivors[int(rng.integers(len(survivors)))]
            b = survivors[int(rng.integers(len(survivors)))]
            current.append(mutate(average(a, b), rng, sigma=sigma))
    return current


def best_genome(population: Sequence[G], fitness: Callable[[G], float]) -> G:
    """Return the highest-scoring genome of ``population``."""
    return max(population, key=fitness)
