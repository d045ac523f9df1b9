"""Snapshot — immutable views of the world for renderers and analysis.

Collaborators never touch live simulation state; they receive a frozen
``WorldSnapshot`` built once per frame by the engine.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from hexaworld.fauna.base import Agent, Species
    from hexaworld.fauna.population import Population
    from hexaworld.world.cell import TerrainType
    from hexaworld.world.hexgrid import Hex
    from hexaworld.world.plants import PlantStage
    from hexaworld.world.visibility import Colour
    from hexaworld.world.world import World


@dataclass(frozen=True)
class AgentView:
    """What a renderer needs to draw one animal."""

    species: Species
    coord: Hex
    display_pos: tuple[float, float] | None
    alive: bool
    colour: Colour


@dataclass(frozen=True)
class CellView:
    coord: Hex
    terrain: TerrainType
    nutrients: float


@dataclass(frozen=True)
class PlantView:
    coord: Hex
    stage: PlantStage


@dataclass(frozen=True)
class FireView:
    """A burning cell and how much of its burn is left (1.0 fresh)."""

    coord: Hex
    burn_fraction: float


@dataclass(frozen=True)
class PopulationCounts:
    """Head counts for one tick, used for the time-series history.

    Attributes:
        tick: Tick the counts were taken at.
        animals: Living animals per species.
        plants: Plants per lifecycle stage.
    """

    tick: int
    animals: dict[Species, int]
    plants: dict[PlantStage, int]

    def __getitem__(self, species: Species) -> int:
        return self.animals.get(species, 0)


@dataclass(frozen=True)
class WorldSnapshot:
    """Read-only picture of the whole simulation at one tick."""

    tick: int
    hex_size: float
    cells: tuple[CellView, ...]
    plants: tuple[PlantView, ...]
    fires: tuple[FireView, ...]
    agents: tuple[AgentView, ...]
    counts: PopulationCounts


def agent_view(agent: Agent) -> AgentView:
    return AgentView(
        species=agent.species,
        coord=agent.coord,
        display_pos=agent.display_pos,
        alive=agent.is_alive,
        colour=agent.colour,
    )


def count_population(tick: int, world: World, population: Population) -> PopulationCounts:
    """Take the per-species and per-stage counts for ``tick``."""
    return PopulationCounts(
        tick=tick,
        animals=population.counts(),
        plants=world.plants.stage_counts(),
    )


def take_snapshot(tick: int, world: World, population: Population) -> WorldSnapshot:
    """Copy the renderable state of ``world`` and ``population``.

    Args:
        tick: Current tick number.
        world: Live landscape.
        population: Live animals.

    Returns:
        A frozen snapshot sharing no mutable state with the simulation.
    """
    return WorldSnapshot(
        tick=tick,
        hex_size=world.hex_size,
        cells=tuple(
            CellView(cell.coord, cell.terrain, cell.nutrients)
            for cell in world.terrain.cells.values()
        ),
        plants=tuple(
            PlantView(plant.coord, plant.stage)
            for plant in world.plants.plants.values()
        ),
        fires=tuple(
            FireView(coord, world.fire.burn_fraction(coord))
            for coord in world.fire.marks
        ),
        agents=tuple(agent_view(agent) for agent in population.all_agents()),
        counts=count_population(tick, world, population),
    )
