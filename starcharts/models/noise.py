"""Seeded 2D coherent (Perlin-style) noise with memoisation."""

from __future__ import annotations

import logging
import math
from collections import OrderedDict
from typing import NamedTuple

from .prng import SeededRandom

logger = logging.getLogger(__name__)


class GradientVector(NamedTuple):
    """Unit vector pinned to one integer lattice point."""

    x: float
    y: float


def smootherstep(t: float) -> float:
    """Quintic blend weight 6t^5 - 15t^4 + 10t^3."""
    return t * t * t * (t * (t * 6 - 15) + 10)


def interpolate(t: float, a: float, b: float) -> float:
    """Blend from ``a`` to ``b`` using the smootherstep weight of ``t``."""
    return a + smootherstep(t) * (b - a)


class NoiseField:
    """Coherent noise over the plane, owned by one caller.

    Gradients are fixed per lattice point for the life of the instance, so
    adjacent cells share corner gradients and the field is continuous
    across cell boundaries.  Sampled values are memoised under a key
    rounded to ``precision`` decimal places.

    The value cache is unbounded unless ``max_entries`` is given, in which
    case least recently used values are evicted first.
    """

    def __init__(self, seed: str, precision: int = 2, max_entries: int | None = None) -> None:
        self.seed = str(seed)
        self.precision = max(0, min(10, int(precision)))
        self.max_entries = max_entries
        self._rng = SeededRandom(self.seed)
        self._gradients: dict[tuple[int, int], GradientVector] = {}
        self._values: OrderedDict[tuple[float, float], float] = OrderedDict()

    # ------------------------------------------------------------------
    # Cache management
    # ------------------------------------------------------------------

    def reseed(self, seed: str | None = None) -> None:
        """Drop every gradient and value and restart the random source."""
        if seed is not None:
            self.seed = str(seed)
        self._gradients.clear()
        self._values.clear()
        self._rng = SeededRandom(self.seed)
        logger.debug("Noise field reseeded with %r", self.seed)

    def clear_cache(self) -> None:
        self._values.clear()

    @property
    def gradient_count(self) -> int:
        return len(self._gradients)

    @property
    def cached_values(self) -> int:
        return len(self._values)

    # ------------------------------------------------------------------
    # Sampling
    # ------------------------------------------------------------------

    def gradient(self, vx: int, vy: int) -> GradientVector:
        """Gradient at lattice point (vx, vy), created on first access.

        The angle comes from a child stream keyed by the lattice point, so
        the vector does not depend on the order points are visited in.
        """
        key = (vx, vy)
        g = self._gradients.get(key)
        if g is None:
            theta = self._rng.seed_new(vx, vy).random(0.0, math.tau)
            g = GradientVector(math.cos(theta), math.sin(theta))
            self._gradients[key] = g
        return g

    def _dot_grid(self, x: float, y: float, vx: int, vy: int) -> float:
        g = self.gradient(vx, vy)
        return (x - vx) * g.x + (y - vy) * g.y

    def sample(self, x: float, y: float) -> float:
        """Noise value in [-1, 1] at (x, y).

        Non-finite input has no lattice cell; it yields 0.0 and is not
        cached.
        """
        if not (math.isfinite(x) and math.isfinite(y)):
            logger.debug("Non-finite noise sample at (%r, %r)", x, y)
            return 0.0

        key = (round(x, self.precision), round(y, self.precision))
        cached = self._values.get(key)
        if cached is not None:
            if self.max_entries is not None:
                self._values.move_to_end(key)
            return cached

        xf = math.floor(x)
        yf = math.floor(y)

        # Interpolation corners
        tl = self._dot_grid(x, y, xf, yf)
        tr = self._dot_grid(x, y, xf + 1, yf)
        bl = self._dot_grid(x, y, xf, yf + 1)
        br = self._dot_grid(x, y, xf + 1, yf + 1)

        xt = interpolate(x - xf, tl, tr)
        xb = interpolate(x - xf, bl, br)
        v = interpolate(y - yf, xt, xb)

        if not math.isfinite(v):
            logger.debug("Noise produced non-finite value at (%r, %r)", x, y)
            return 0.0
        v = max(-1.0, min(1.0, v))

        self._values[key] = v
        if self.max_entries is not None and len(self._values) > self.max_entries:
            self._values.popitem(last=False)
        return v
