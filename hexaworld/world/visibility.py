"""Visibility — how easily an animal's colour stands out from the ground.

Visibility is the RGB distance between the animal's display colour and
the base colour of the terrain it stands on, normalised to [0, 1].  On
rock, colours close to neutral grey blend in and are harder to spot.
"""

from __future__ import annotations

import math

from hexaworld.world.cell import TerrainType

Colour = tuple[int, int, int]

TERRAIN_COLOURS: dict[TerrainType, Colour] = {
    TerrainType.SOIL: (139, 69, 19),
    TerrainType.WATER: (0, 150, 255),
    TerrainType.ROCK: (128, 128, 128),
}

NEUTRAL_GREY: Colour = (128, 128, 128)
MAX_DISTANCE = math.sqrt(3 * 255 * 255)


def colour_distance(a: Colour, b: Colour) -> float:
    """Return the Euclidean distance between two RGB colours."""
    return math.dist(a, b)


def visibility(colour: Colour, terrain: TerrainType) -> float:
    """Return how visible ``colour`` is against ``terrain`` (0.0-1.0).

    Args:
        colour: RGB display colour of the animal.
        terrain: Terrain the animal stands on.

    Returns:
        0.0 for perfect camouflage, 1.0 for maximum contrast.
    """
    score = colour_distance(colour, TERRAIN_COLOURS[terrain]) / MAX_DISTANCE
    if terrain is TerrainType.ROCK:
        grey = colour_distance(colour, NEUTRAL_GREY) / MAX_DISTANCE
        score *= 0.5 + 0.5 * grey
    return min(1.0, max(0.0, score))
