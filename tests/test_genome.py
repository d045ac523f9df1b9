"""Tests for hexaworld.fauna.genome — bounded mutation and averaging."""

import dataclasses

import numpy as np
import pytest
from numpy.random import Generator

from hexaworld.fauna.genome import (
    FoxGenome,
    HareGenome,
    SalmonGenome,
    WolfGenome,
    average,
    in_range,
    mutate,
    random_genome,
    trait_ranges,
)

ALL_GENOMES = [HareGenome, FoxGenome, WolfGenome, SalmonGenome]


class TestDefaults:
    """Tests for declared ranges and defaults."""

    @pytest.mark.parametrize("cls", ALL_GENOMES)
    def test_defaults_in_range(self, cls: type) -> None:
        assert in_range(cls())

    def test_hare_ranges(self) -> None:
        ranges = trait_ranges(HareGenome)
        assert ranges["reproduction_threshold"] == (1.0, 2.0)
        assert ranges["fear"] == (0.0, 1.0)
        assert "can_hide" not in ranges

    def test_genomes_are_frozen(self) -> None:
        genome = FoxGenome()
        with pytest.raises(dataclasses.FrozenInstanceError):
            genome.weight = 2.0  # type: ignore[misc]


class TestMutate:
    """Tests for single-parent mutation."""

    @pytest.mark.parametrize("cls", ALL_GENOMES)
    def test_repeated_mutation_stays_in_range(
        self,
        cls: type,
        rng: Generator,
    ) -> None:
        genome = cls()
        for _ in range(10_000):
            genome = mutate(genome, rng, sigma=0.5)
            assert in_range(genome)

    def test_returns_new_instance_of_same_type(self, rng: Generator) -> None:
        parent = WolfGenome()
        child = mutate(parent, rng)
        assert type(child) is WolfGenome
        assert child is not parent
        assert parent == WolfGenome()

    def test_zero_sigma_keeps_values(self, rng: Generator) -> None:
        parent = HareGenome(fear=0.3, weight=1.2)
        child = mutate(parent, rng, sigma=0.0, flip_chance=0.0)
        assert child == parent

    def test_flip_chance(self, rng: Generator) -> None:
        parent = HareGenome(can_hide=False)
        assert mutate(parent, rng, flip_chance=1.0).can_hide is True
        assert mutate(parent, rng, flip_chance=0.0).can_hide is False

    def test_deterministic_for_seed(self) -> None:
        a = mutate(FoxGenome(), np.random.default_rng(5))
        b = mutate(FoxGenome(), np.random.default_rng(5))
        assert a == b


class TestAverage:
    """Tests for two-parent averaging."""

    def test_midpoint(self) -> None:
        a = HareGenome(fear=0.2, weight=0.6, can_hide=True)
        b = HareGenome(fear=0.8, weight=1.4, can_hide=False)
        child = average(a, b)
        assert child.fear == pytest.approx(0.5)
        assert child.weight == pytest.approx(1.0)
        assert child.can_hide is True

    def test_random_genomes_in_range(self, rng: Generator) -> None:
        for cls in ALL_GENOMES:
            for _ in range(100):
                assert in_range(random_genome(cls, rng))
