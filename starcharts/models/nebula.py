"""Nebula background colour as a function of world coordinates."""

from __future__ import annotations

import logging
import math

from ..colour import Colour, clamp_rgb, interpolate_colour, to_rgb
from ..config import EngineConfig
from .noise import NoiseField

logger = logging.getLogger(__name__)

_BLACK = (0.0, 0.0, 0.0)
_SPARSITY_EXPONENT = 0.7


class NebulaField:
    """Patchy nebular gas composited from two noise frequencies.

    One sample at ``nebula_scale`` picks the colour from the palette; a
    second at ``nebula_scale * nebula_mask_ratio`` decides how dense the gas
    is there.  Compositing against the real background is left to the
    renderer: thin gas fades toward black.
    """

    def __init__(self, root_seed: str, config: EngineConfig | None = None) -> None:
        self.config = config or EngineConfig()
        self.seed = f"{root_seed}_nebula"
        self.precision = max(0, min(10, int(self.config.nebula_cache_precision)))
        self.noise = NoiseField(self.seed, self.precision, self.config.noise_cache_limit)
        self.default_colour: Colour = to_rgb(self.config.default_bg_colour)
        self.palette: list[Colour] = []
        for entry in self.config.nebula_colours:
            try:
                self.palette.append(to_rgb(entry))
            except (ValueError, TypeError):
                logger.warning("Ignoring unreadable nebula colour %r", entry)
        self.max_cache_size = self.config.nebula_cache_size
        self._cache: dict[tuple[float, float], Colour] = {}

        if len(self.palette) < 2:
            logger.warning(
                "Nebula palette has %d usable colours (need 2); nebula will render as background",
                len(self.palette),
            )
        logger.info("Nebula field seeded with %r and %d base colours", self.seed, len(self.palette))

    @property
    def cache_size(self) -> int:
        return len(self._cache)

    def clear_cache(self) -> None:
        logger.debug("Clearing nebula colour cache")
        self._cache.clear()

    # ------------------------------------------------------------------
    # Compositing steps
    # ------------------------------------------------------------------

    def base_colour(self, structure: float) -> tuple[float, float, float]:
        """Unmasked palette colour for a structural noise value in [-1, 1]."""
        factor = (structure + 1) / 2
        scale = factor * (len(self.palette) - 1)
        index1 = min(len(self.palette) - 1, max(0, math.floor(scale)))
        index2 = min(len(self.palette) - 1, index1 + 1)
        return interpolate_colour(self.palette[index1], self.palette[index2], scale - index1)

    def mask_alpha(self, mask: float) -> float:
        """Opacity from the mask value: opaque where the mask is low."""
        adjusted = self.config.nebula_sparsity ** _SPARSITY_EXPONENT
        mask_norm = (mask + 1) / 2
        alpha = max(0.0, 1 - mask_norm / (1 - adjusted))
        return min(1.0, alpha * self.config.nebula_intensity)

    def colour_at(self, world_x: float, world_y: float) -> Colour:
        """Nebula colour at a world coordinate; never raises."""
        try:
            if not (math.isfinite(world_x) and math.isfinite(world_y)):
                logger.warning("Non-finite nebula coordinate (%r, %r)", world_x, world_y)
                return self.default_colour

            key = (round(world_x, self.precision), round(world_y, self.precision))
            cached = self._cache.get(key)
            if cached is not None:
                return cached

            if len(self.palette) < 2:
                return self.default_colour

            scale = self.config.nebula_scale
            mask_scale = scale * self.config.nebula_mask_ratio
            structure = self.noise.sample(world_x * scale, world_y * scale)
            mask = self.noise.sample(world_x * mask_scale, world_y * mask_scale)

            rgb = self.base_colour(structure)
            alpha = self.mask_alpha(mask)
            if not math.isfinite(alpha) or not all(math.isfinite(ch) for ch in rgb):
                logger.warning("Non-finite nebula value at (%r, %r)", world_x, world_y)
                return self.default_colour
            if alpha < 1:
                rgb = interpolate_colour(_BLACK, rgb, alpha)

            colour = clamp_rgb(rgb)
            if len(self._cache) < self.max_cache_size:
                self._cache[key] = colour
            return colour
        except Exception as exc:
            logger.warning("Nebula colour failed at (%r, %r): %s", world_x, world_y, exc)
            return self.default_colour
