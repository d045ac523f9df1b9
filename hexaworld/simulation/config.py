"""Config — load simulation parameters from YAML files.

World size, species spawn parameters, plant and fire rates, and the
mutation settings live in YAML and are parsed into typed dataclasses
here.  This keeps the simulation core data-driven and easy to
experiment with.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml

from hexaworld.fauna.base import Species
from hexaworld.world.cell import TerrainType

_TERRAIN_NAMES = {t.value for t in TerrainType}


@dataclass
class SpeciesConfig:
    """Spawn parameters for one species.

    Attributes:
        initial_count: Animals placed at world creation.
        preferred_terrains: Terrain names the animals may spawn on.
        max_population: Births stop once this many are alive
            (None for no limit).
    """

    initial_count: int = 0
    preferred_terrains: list[str] = field(default_factory=lambda: ["soil"])
    max_population: int | None = None

    @classmethod
    def from_dict(
        cls,
        data: dict[str, Any],
        base: SpeciesConfig | None = None,
    ) -> SpeciesConfig:
        """Build a species config from a YAML mapping.

        Keys missing from ``data`` are taken from ``base`` (or the class
        defaults).
        """
        default = base if base is not None else cls()
        return cls(
            initial_count=data.get("initial_count", default.initial_count),
            preferred_terrains=list(
                data.get("preferred_terrains", default.preferred_terrains),
            ),
            max_population=data.get("max_population", default.max_population),
        )

    def terrains(self) -> list[TerrainType]:
        """Return the preferred terrains as enum members."""
        return [TerrainType(name) for name in self.preferred_terrains]


def _default_species() -> dict[Species, SpeciesConfig]:
    return {
        Species.HARE: SpeciesConfig(
            initial_count=40,
            preferred_terrains=["soil"],
            max_population=400,
        ),
        Species.FOX: SpeciesConfig(
            initial_count=8,
            preferred_terrains=["soil", "rock"],
            max_population=80,
        ),
        Species.WOLF: SpeciesConfig(
            initial_count=3,
            preferred_terrains=["soil", "rock"],
            max_population=30,
        ),
        Species.SALMON: SpeciesConfig(
            initial_count=15,
            preferred_terrains=["water"],
            max_population=150,
        ),
    }


@dataclass
class SimulationConfig:
    """Top-level simulation configuration.

    Attributes:
        seed: RNG seed for deterministic replay.
        hex_size: Hexagon radius in pixels.
        world_radius: Rings of terrain grown around the origin hex.
        time_step: Simulated seconds advanced by a default ``step()``.
        history_length: Ticks of population counts kept for display.
        initial_plant_chance: Chance of a dormant plant per soil cell at
            world creation.
        plant_base_growth: Seconds per growth stage on fully rich soil.
        plant_regrowth_delay: Seconds before a charred plant sprouts again.
        plant_drop_interval: Seconds between seed drops of mature plants.
        plant_drop_chance: Success probability of one seed drop.
        fire_burn_duration: Seconds a cell stays on fire.
        fire_spread_interval: Seconds between fire spread waves.
        fire_ignition_rate: Chance per second of a spontaneous fire.
        fire_min_mature_plants: Mature plants required for spontaneous
            fires.
        mutation_sigma: Standard deviation of offspring trait mutation.
        flip_chance: Chance of flipping a boolean trait on mutation.
        species: Spawn parameters keyed by species.
    """

    seed: int = 42
    hex_size: float = 18.0
    world_radius: int = 12
    time_step: float = 0.1
    history_length: int = 600

    # Plants
    initial_plant_chance: float = 0.1
    plant_base_growth: float = 10.0
    plant_regrowth_delay: float = 30.0
    plant_drop_interval: float = 15.0
    plant_drop_chance: float = 0.3

    # Fire
    fire_burn_duration: float = 5.0
    fire_spread_interval: float = 2.0
    fire_ignition_rate: float = 0.0005
    fire_min_mature_plants: int = 20

    # Genetics
    mutation_sigma: float = 0.1
    flip_chance: float = 0.01

    species: dict[Species, SpeciesConfig] = field(default_factory=_default_species)

    @classmethod
    def from_yaml(cls, path: str | Path) -> SimulationConfig:
        """Load configuration from a YAML file.

        Keys missing from the file keep their defaults; species sections
        are merged over the default species table.

        Args:
            path: Path to the YAML config file.

        Returns:
            A populated and validated SimulationConfig instance.

        Raises:
            FileNotFoundError: If the config file does not exist.
            ValueError: If a value is out of range.
        """
        path = Path(path)
        with path.open("r") as f:
            data = yaml.safe_load(f) or {}

        species = _default_species()
        for name, section in (data.get("species") or {}).items():
            key = Species(name)
            species[key] = SpeciesConfig.from_dict(section or {}, species.get(key))

        config = cls(
            seed=data.get("seed", cls.seed),
            hex_size=data.get("hex_size", cls.hex_size),
            world_radius=data.get("world_radius", cls.world_radius),
            time_step=data.get("time_step", cls.time_step),
            history_length=data.get("history_length", cls.history_length),
            initial_plant_chance=data.get(
                "initial_plant_chance",
                cls.initial_plant_chance,
            ),
            plant_base_growth=data.get("plant_base_growth", cls.plant_base_growth),
            plant_regrowth_delay=data.get(
                "plant_regrowth_delay",
                cls.plant_regrowth_delay,
            ),
            plant_drop_interval=data.get(
                "plant_drop_interval",
                cls.plant_drop_interval,
            ),
            plant_drop_chance=data.get("plant_drop_chance", cls.plant_drop_chance),
            fire_burn_duration=data.get(
                "fire_burn_duration",
                cls.fire_burn_duration,
            ),
            fire_spread_interval=data.get(
                "fire_spread_interval",
                cls.fire_spread_interval,
            ),
            fire_ignition_rate=data.get(
                "fire_ignition_rate",
                cls.fire_ignition_rate,
            ),
            fire_min_mature_plants=data.get(
                "fire_min_mature_plants",
                cls.fire_min_mature_plants,
            ),
            mutation_sigma=data.get("mutation_sigma", cls.mutation_sigma),
            flip_chance=data.get("flip_chance", cls.flip_chance),
            species=species,
        )
        config.validate()
        return config

    def validate(self) -> None:
        """Reject settings the simulation cannot start from.

        Raises:
            ValueError: On a non-integer seed, a non-positive hex size,
                time step or world radius, a negative count, or an
                unknown terrain name.
        """
        if isinstance(self.seed, bool) or not isinstance(self.seed, int):
            msg = f"seed must be an integer, got {self.seed!r}"
            raise ValueError(msg)
        if self.hex_size <= 0:
            msg = f"hex_size must be positive, got {self.hex_size}"
            raise ValueError(msg)
        if self.time_step <= 0:
            msg = f"time_step must be positive, got {self.time_step}"
            raise ValueError(msg)
        if self.world_radius <= 0:
            msg = f"world_radius must be positive, got {self.world_radius}"
            raise ValueError(msg)
        if self.history_length < 1:
            msg = f"history_length must be at least 1, got {self.history_length}"
            raise ValueError(msg)
        for species, settings in self.species.items():
            if settings.initial_count < 0:
                msg = f"{species.value}: initial_count must not be negative"
                raise ValueError(msg)
            if settings.max_population is not None and settings.max_population < 0:
                msg = f"{species.value}: max_population must not be negative"
                raise ValueError(msg)
            unknown = set(settings.preferred_terrains) - _TERRAIN_NAMES
            if unknown:
                msg = f"{species.value}: unknown terrain {sorted(unknown)}"
                raise ValueError(msg)

    def population_caps(self) -> dict[Species, int]:
        """Return the configured population caps, skipping unlimited ones."""
        return {
            species: settings.max_population
            for species, settings in self.species.items()
            if settings.max_population is not None
        }
