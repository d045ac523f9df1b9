"""Cell — a single hexagon of terrain in the world.

Each cell holds an immutable terrain category and a mutable nutrient
level.  Plants and fire marks are stored externally in their own sparse
maps so the cell itself stays lightweight.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from hexaworld.world.hexgrid import Hex


class TerrainType(Enum):
    """Terrain category of a cell.

    Declaration order is also the tie-break order when a new cell adopts
    the most common terrain among its neighbours.
    """

    SOIL = "soil"
    WATER = "water"
    ROCK = "rock"


@dataclass
class HexCell:
    """A single hexagon of terrain.

    Attributes:
        coord: Axial coordinate of the cell.
        terrain: Terrain category, fixed once generated.
        nutrients: Soil richness (0.0-1.0); drives plant growth speed.
    """

    coord: Hex
    terrain: TerrainType = TerrainType.SOIL
    nutrients: float = 0.5
