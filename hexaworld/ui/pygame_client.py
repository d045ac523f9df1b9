"""Pygame 2D visualization for the Hexaworld simulation.

Renders terrain hexes, plants, fires and animals from engine snapshots,
plus a side panel with population counts and a small history graph.
The simulation steps at a configurable tick rate while the display
refreshes at the Pygame frame rate.  The renderer never reads live
simulation state, only ``WorldSnapshot`` objects.
"""

from __future__ import annotations

import math
from typing import TYPE_CHECKING, ClassVar

import numpy as np
import pygame

if TYPE_CHECKING:
    from hexaworld.simulation.engine import SimulationEngine
    from hexaworld.simulation.snapshot import WorldSnapshot
    from hexaworld.world.hexgrid import Hex

from hexaworld.fauna.base import Species
from hexaworld.world.cell import TerrainType
from hexaworld.world.hexgrid import SQRT3, to_pixel
from hexaworld.world.plants import PlantStage
from hexaworld.world.visibility import TERRAIN_COLOURS

# Colour palette
_BG = (20, 20, 25)
_OUTLINE = (40, 35, 30)
_TEXT = (200, 200, 200)

# Terrain shading by nutrients (poor -> rich), scaled around the base colour
_SHADE_LO = 0.6
_SHADE_HI = 1.2

_PLANT_COLOURS: dict[PlantStage, tuple[int, int, int]] = {
    PlantStage.DORMANT: (90, 110, 40),
    PlantStage.ESTABLISHING: (60, 160, 40),
    PlantStage.MATURE: (20, 200, 60),
    PlantStage.CHARRED: (30, 30, 30),
}

_FIRE_LO = np.array([120, 30, 0], dtype=np.float64)
_FIRE_HI = np.array([255, 180, 0], dtype=np.float64)

_SPECIES_RADIUS: dict[Species, float] = {
    Species.HARE: 0.25,
    Species.FOX: 0.3,
    Species.WOLF: 0.35,
    Species.SALMON: 0.2,
}

_GRAPH_COLOURS: dict[Species, tuple[int, int, int]] = {
    Species.HARE: (210, 180, 140),
    Species.FOX: (255, 140, 0),
    Species.WOLF: (160, 160, 160),
    Species.SALMON: (255, 100, 100),
}


def hex_corners(
    centre: tuple[float, float],
    size: float,
) -> list[tuple[float, float]]:
    """Return the six corners of a flat-top hexagon around ``centre``."""
    cx, cy = centre
    corners = []
    for i in range(6):
        angle = math.radians(60 * i)
        corners.append((cx + size * math.cos(angle), cy + size * math.sin(angle)))
    return corners


def shade(terrain: TerrainType, nutrients: float) -> tuple[int, int, int]:
    """Return the terrain colour darkened or brightened by nutrients."""
    base = np.array(TERRAIN_COLOURS[terrain], dtype=np.float64)
    t = min(max(nutrients, 0.0), 1.0)
    factor = _SHADE_LO + t * (_SHADE_HI - _SHADE_LO)
    return tuple(np.clip(base * factor, 0, 255).astype(int).tolist())


class PygameRenderer:
    """Renders SimulationEngine snapshots into a Pygame window.

    Attributes:
        engine: The simulation engine to visualise.
        screen: The Pygame display surface.
    """

    # Speed presets: ticks per real second
    _SPEED_STEPS: ClassVar[list[float]] = [
        1.0,
        3.0,
        5.0,
        10.0,
        15.0,
        30.0,
        60.0,
        120.0,
        300.0,
    ]

    def __init__(
        self,
        engine: SimulationEngine,
        ticks_per_second: float = 10.0,
    ) -> None:
        """Initialise the renderer.

        Args:
            engine: The simulation engine to render.
            ticks_per_second: Simulation ticks per real-time second.
        """
        self.engine = engine
        self.ticks_per_second = ticks_per_second
        self._speed_index = self._nearest_speed(ticks_per_second)
        self._tick_accumulator = 0.0

        size = engine.config.hex_size
        radius = engine.config.world_radius
        map_w = int(3.0 * size * radius + 2.0 * size) + 20
        map_h = int(2.0 * SQRT3 * size * radius + SQRT3 * size) + 20
        self._origin = (map_w / 2.0, map_h / 2.0)
        self._panel_width = 240
        self._map_w = map_w
        self._win_w = map_w + self._panel_width
        self._win_h = max(map_h, 420)

        pygame.init()
        self.screen = pygame.display.set_mode((self._win_w, self._win_h))
        pygame.display.set_caption("Hexaworld")
        self.clock = pygame.time.Clock()
        self.font = pygame.font.SysFont("monospace", 14)
        self.running = True
        self.paused = False

    def _nearest_speed(self, tps: float) -> int:
        """Return the index of the closest speed preset."""
        best = 0
        best_diff = abs(self._SPEED_STEPS[0] - tps)
        for i, s in enumerate(self._SPEED_STEPS):
            diff = abs(s - tps)
            if diff < best_diff:
                best, best_diff = i, diff
        return best

    def run(self, fps: int = 30) -> None:
        """Main loop: handle events, step sim, render.

        Args:
            fps: Target frames per second.
        """
        while self.running:
            dt = self.clock.tick(fps) / 1000.0  # seconds elapsed
            self._handle_events()
            if not self.paused:
                self._tick_accumulator += self.ticks_per_second * dt
                steps = int(self._tick_accumulator)
                self._tick_accumulator -= steps
                for _ in range(steps):
                    self.engine.step()
            self._draw(self.engine.snapshot())

        pygame.quit()

    def _handle_events(self) -> None:
        """Process Pygame input events."""
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                self.running = False
            elif event.type == pygame.KEYDOWN:
                if event.key == pygame.K_ESCAPE:
                    self.running = False
                elif event.key == pygame.K_SPACE:
                    self.paused = not self.paused
                elif event.key == pygame.K_f:
                    self.engine.ignite_random_plant()
                elif event.key in (pygame.K_PLUS, pygame.K_EQUALS):
                    self._speed_index = min(
                        len(self._SPEED_STEPS) - 1,
                        self._speed_index + 1,
                    )
                    self.ticks_per_second = self._SPEED_STEPS[self._speed_index]
                elif event.key == pygame.K_MINUS:
                    self._speed_index = max(0, self._speed_index - 1)
                    self.ticks_per_second = self._SPEED_STEPS[self._speed_index]

    def _screen_pos(self, pos: tuple[float, float]) -> tuple[float, float]:
        return pos[0] + self._origin[0], pos[1] + self._origin[1]

    def _centre(self, coord: Hex, size: float) -> tuple[float, float]:
        return self._screen_pos(to_pixel(coord, size))

    def _draw(self, snap: WorldSnapshot) -> None:
        """Render one frame."""
        self.screen.fill(_BG)
        self._draw_cells(snap)
        self._draw_plants(snap)
        self._draw_fires(snap)
        self._draw_agents(snap)
        self._draw_info_panel(snap)
        pygame.display.flip()

    def _draw_cells(self, snap: WorldSnapshot) -> None:
        """Draw every generated hex shaded by its nutrients."""
        size = snap.hex_size
        for cell in snap.cells:
            corners = hex_corners(self._centre(cell.coord, size), size)
            pygame.draw.polygon(
                self.screen,
                shade(cell.terrain, cell.nutrients),
                corners,
            )
            pygame.draw.polygon(self.screen, _OUTLINE, corners, width=1)

    def _draw_plants(self, snap: WorldSnapshot) -> None:
        """Draw plants as dots that grow with their stage."""
        size = snap.hex_size
        for plant in snap.plants:
            radius = size * (0.2 if plant.stage is PlantStage.DORMANT else 0.35)
            pygame.draw.circle(
                self.screen,
                _PLANT_COLOURS[plant.stage],
                self._centre(plant.coord, size),
                max(2, int(radius)),
            )

    def _draw_fires(self, snap: WorldSnapshot) -> None:
        """Draw burning hexes, fading from yellow to dark red as they die down."""
        size = snap.hex_size
        for fire in snap.fires:
            colour = _FIRE_LO + fire.burn_fraction * (_FIRE_HI - _FIRE_LO)
            pygame.draw.polygon(
                self.screen,
                colour.astype(int).tolist(),
                hex_corners(self._centre(fire.coord, size), size * 0.8),
            )

    def _draw_agents(self, snap: WorldSnapshot) -> None:
        """Draw each living animal at its interpolated position."""
        size = snap.hex_size
        for agent in snap.agents:
            if not agent.alive:
                continue
            pos = agent.display_pos or to_pixel(agent.coord, size)
            pygame.draw.circle(
                self.screen,
                agent.colour,
                self._screen_pos(pos),
                max(2, int(size * _SPECIES_RADIUS[agent.species])),
            )

    def _draw_info_panel(self, snap: WorldSnapshot) -> None:
        """Draw counts, a population graph and controls on the right."""
        panel_x = self._map_w + 10
        y = 10

        lines = [
            f"Tick: {snap.tick}",
            f"Speed: {self.ticks_per_second:.1f} t/s",
            f"{'PAUSED' if self.paused else 'RUNNING'}",
            "",
            "--- Animals ---",
        ]
        lines += [
            f"  {species.value}: {snap.counts[species]}" for species in Species
        ]
        lines += ["", "--- Plants ---"]
        lines += [
            f"  {stage.name.lower()}: {snap.counts.plants.get(stage, 0)}"
            for stage in PlantStage
        ]
        lines += [f"  burning: {len(snap.fires)}"]

        for line in lines:
            surf = self.font.render(line, True, _TEXT)
            self.screen.blit(surf, (panel_x, y))
            y += 18

        y = self._draw_history(panel_x, y + 10)

        controls = [
            "--- Controls ---",
            "SPACE: pause",
            "+/-: speed",
            "F: ignite",
            "ESC: quit",
        ]
        for line in controls:
            surf = self.font.render(line, True, _TEXT)
            self.screen.blit(surf, (panel_x, y))
            y += 18

    def _draw_history(self, x: int, y: int) -> int:
        """Plot the population history; return the y below the graph."""
        width = self._panel_width - 20
        height = 80
        pygame.draw.rect(self.screen, _OUTLINE, (x, y, width, height), width=1)
        history = list(self.engine.history)
        if len(history) >= 2:
            series = np.array(
                [[counts[s] for s in Species] for counts in history],
                dtype=np.float64,
            )
            peak = max(series.max(), 1.0)
            xs = np.linspace(x, x + width - 1, len(history))
            for i, species in enumerate(Species):
                ys = y + height - 1 - series[:, i] / peak * (height - 2)
                pygame.draw.lines(
                    self.screen,
                    _GRAPH_COLOURS[species],
                    False,
                    list(zip(xs.tolist(), ys.tolist())),
                )
        return y + height + 10
