"""Hyperspace backdrop for nebula cells and twinkling stars on a pygame surface."""

from __future__ import annotations

import math

import pygame

from ..colour import adjust_brightness
from ..constants import CELL_SIZE
from ..models.galaxy import Galaxy
from ..models.prng import fast_hash


class NebulaBackdrop:
    """Paints the galaxy around a camera cell, one block per world cell."""

    def __init__(self, galaxy: Galaxy, cell_size: int = CELL_SIZE) -> None:
        self.galaxy = galaxy
        self.cell_size = max(1, int(cell_size))
        self.timer = 0.0

    def update(self, dt: float) -> None:
        self.timer += dt

    def grid_size(self, surface: pygame.Surface) -> tuple[int, int]:
        return surface.get_width() // self.cell_size, surface.get_height() // self.cell_size

    def world_cell(self, surface: pygame.Surface, col: int, row: int, camera_x: int, camera_y: int) -> tuple[int, int]:
        """World coordinate shown at a grid cell, camera in the middle."""
        cols, rows = self.grid_size(surface)
        return camera_x + col - cols // 2, camera_y + row - rows // 2

    def _star_colour(self, x: int, y: int) -> tuple[int, int, int]:
        star_class = self.galaxy.star_class_at(x, y)
        data = self.galaxy.config.star_data.get(star_class.value) if star_class else None
        if data is None:
            return (255, 0, 255)
        offset = fast_hash(x, y, 0x5EED) % 628 / 100.0
        brightness = data["brightness"] * (0.75 + 0.25 * math.sin(self.timer * 2.0 + offset))
        return adjust_brightness(data["color"], brightness)

    def draw(self, surface: pygame.Surface, camera_x: int, camera_y: int) -> None:
        size = self.cell_size
        cols, rows = self.grid_size(surface)
        nebula = self.galaxy.nebula
        for row in range(rows):
            for col in range(cols):
                x, y = self.world_cell(surface, col, row, camera_x, camera_y)
                rect = pygame.Rect(col * size, row * size, size, size)
                surface.fill(nebula.colour_at(x, y), rect)
                if self.galaxy.star_at(x, y):
                    pygame.draw.circle(
                        surface, self._star_colour(x, y), rect.center, max(1, size // 3)
                    )
