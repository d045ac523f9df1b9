"""TerrainField — the sparse, lazily generated terrain map.

Cells are created on demand the first time a coordinate is generated.
A new cell mostly copies the dominant terrain of its already generated
neighbours, which grows coherent lakes, meadows and rock outcrops from a
single origin hex.  Lookups at coordinates that were never generated
return lenient defaults instead of failing.
"""

from __future__ import annotations

from collections import Counter
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from numpy.random import Generator

from hexaworld.world.cell import HexCell, TerrainType
from hexaworld.world.hexgrid import ORIGIN, Hex, hex_distance, neighbours

# -- Constants ---------------------------------------------------------------

_REROLL_CHANCE = 0.3  # chance a cell ignores its neighbours
_NUTRIENT_NOISE = 0.2
_BASE_NUTRIENTS: dict[TerrainType, float] = {
    TerrainType.SOIL: 0.8,
    TerrainType.WATER: 0.5,
    TerrainType.ROCK: 0.2,
}
DEFAULT_TERRAIN = TerrainType.SOIL


def random_terrain(rng: Generator) -> TerrainType:
    """Draw a terrain category: 20% rock, 40% soil, 40% water."""
    roll = int(rng.integers(0, 10))
    if roll < 2:
        return TerrainType.ROCK
    if roll < 6:
        return TerrainType.SOIL
    return TerrainType.WATER


@dataclass
class TerrainField:
    """Sparse map from axial coordinate to terrain cell.

    Attributes:
        cells: Generated cells keyed by coordinate, in generation order.
    """

    cells: dict[Hex, HexCell] = field(default_factory=dict)

    def __contains__(self, coord: object) -> bool:
        return coord in self.cells

    def __len__(self) -> int:
        return len(self.cells)

    def cell_at(self, coord: Hex) -> HexCell | None:
        """Return the cell at ``coord`` or None if it was never generated."""
        return self.cells.get(coord)

    def terrain_at(self, coord: Hex) -> TerrainType:
        """Return the terrain at ``coord``; ungenerated cells count as soil."""
        cell = self.cells.get(coord)
        return cell.terrain if cell is not None else DEFAULT_TERRAIN

    def nutrients_at(self, coord: Hex) -> float:
        """Return the nutrient level at ``coord`` (0.0 if ungenerated)."""
        cell = self.cells.get(coord)
        return cell.nutrients if cell is not None else 0.0

    def set_cell(
        self,
        coord: Hex,
        terrain: TerrainType,
        nutrients: float = 0.5,
    ) -> HexCell:
        """Create or replace a cell with explicit values.

        Used to lay out hand-made worlds without going through random
        generation.
        """
        cell = HexCell(
            coord=coord,
            terrain=terrain,
            nutrients=min(1.0, max(0.0, nutrients)),
        )
        self.cells[coord] = cell
        return cell

    def generate_cell(self, coord: Hex, rng: Generator) -> HexCell:
        """Generate the cell at ``coord`` unless it already exists.

        With no generated neighbours the terrain is drawn at random.
        Otherwise there is a 30% chance of a fresh random draw and a 70%
        chance of adopting the most common neighbouring terrain (ties go
        to the earlier ``TerrainType`` member).

        Args:
            coord: Coordinate to generate.
            rng: Seeded random generator.

        Returns:
            The existing or newly generated cell.
        """
        existing = self.cells.get(coord)
        if existing is not None:
            return existing

        counts = Counter(
            self.cells[n].terrain for n in neighbours(coord) if n in self.cells
        )
        if not counts:
            terrain = random_terrain(rng)
        elif rng.random() < _REROLL_CHANCE:
            terrain = random_terrain(rng)
        else:
            terrain = max(TerrainType, key=lambda t: counts[t])

        noise = float(rng.uniform(-_NUTRIENT_NOISE, _NUTRIENT_NOISE))
        nutrients = min(1.0, max(0.0, _BASE_NUTRIENTS[terrain] + noise))
        cell = HexCell(coord=coord, terrain=terrain, nutrients=nutrients)
        self.cells[coord] = cell
        return cell

    def grow_layer(
        self,
        rng: Generator,
        *,
        max_radius: int | None = None,
    ) -> list[Hex]:
        """Generate every missing neighbour of the currently known cells.

        Calling this repeatedly grows the world ring by ring from the
        origin.  Coordinates are discovered in cell insertion order, so
        the result is fully determined by the RNG stream.

        Args:
            rng: Seeded random generator.
            max_radius: If given, skip coordinates farther than this many
                hexes from the origin.

        Returns:
            Coordinates generated by this call.
        """
        if not self.cells:
            self.generate_cell(ORIGIN, rng)
            return [ORIGIN]

        frontier: dict[Hex, None] = {}
        for coord in self.cells:
            for n in neighbours(coord):
                if n in self.cells or n in frontier:
                    continue
                if max_radius is not None and hex_distance(n, ORIGIN) > max_radius:
                    continue
                frontier[n] = None

        for coord in frontier:
            self.generate_cell(coord, rng)
        return list(frontier)

    def prune_isolated_water(self) -> list[Hex]:
        """Remove water cells that have no water neighbour.

        Single-hex puddles look like noise and strand aquatic animals,
        so world setup drops them.  Pruned coordinates fall back to the
        default terrain for lookups.

        Returns:
            Coordinates that were removed.
        """
        isolated = [
            coord
            for coord, cell in self.cells.items()
            if cell.terrain is TerrainType.WATER
            and not any(
                self.terrain_at(n) is TerrainType.WATER for n in neighbours(coord)
            )
        ]
        for coord in isolated:
            del self.cells[coord]
        return isolated

    def enrich(self, coord: Hex, amount: float) -> None:
        """Add ``amount`` nutrients to a soil cell, capped at 1.0.

        Non-soil and ungenerated cells are left unchanged.
        """
        cell = self.cells.get(coord)
        if cell is None or cell.terrain is not TerrainType.SOIL:
            return
        cell.nutrients = min(1.0, cell.nutrients + amount)

    def is_water_adjacent(self, coord: Hex) -> bool:
        """Return True if ``coord`` is water or touches a generated water cell."""
        for c in (coord, *neighbours(coord)):
            cell = self.cells.get(c)
            if cell is not None and cell.terrain is TerrainType.WATER:
                return True
        return False

    def count(self, terrain: TerrainType) -> int:
        """Return how many generated cells have the given terrain."""
        return sum(1 for cell in self.cells.values() if cell.terrain is terrain)
