"""Engine configuration for Starcharts.

Every tunable the generation engine reads lives on ``EngineConfig``.  The
defaults come from ``constants``; a session builds one config and threads
it through the noise, nebula, system and orbit components.
"""

from __future__ import annotations

import dataclasses
import math
from dataclasses import dataclass, field

from . import constants as C


class ConfigError(ValueError):
    """Raised when an engine configuration value can never work."""


@dataclass(frozen=True)
class EngineConfig:
    """Read-only inputs consumed by the generation engine."""

    seed: str = C.DEFAULT_SEED

    # Stars and planets
    star_data: dict[str, dict] = field(default_factory=lambda: {k: dict(v) for k, v in C.STAR_DATA.items()})
    star_weights: list[tuple[str, int]] = field(default_factory=lambda: list(C.STAR_WEIGHTS))
    planet_data: dict[str, dict] = field(default_factory=lambda: {k: dict(v) for k, v in C.PLANET_DATA.items()})
    zone_planet_weights: dict[str, list[tuple[str, int]]] = field(
        default_factory=lambda: dict(C.ZONE_PLANET_WEIGHTS)
    )
    max_planets: int = C.MAX_PLANETS_PER_SYSTEM
    starbase_probability: float = C.STARBASE_PROBABILITY
    starbase_orbit_distance: float = C.STARBASE_ORBIT_DISTANCE
    edge_radius_floor: float = C.SYSTEM_EDGE_RADIUS_FLOOR
    edge_radius_factor: float = C.SYSTEM_EDGE_RADIUS_FACTOR
    min_orbit_separation: float = C.MIN_ORBIT_SEPARATION
    max_orbit_distance: float = C.MAX_ORBIT_DISTANCE
    first_orbit_range: tuple[float, float] = C.FIRST_ORBIT_RANGE
    orbit_scale_range: tuple[float, float] = C.ORBIT_SCALE_RANGE
    orbit_jitter: float = C.ORBIT_JITTER
    orbit_extra_range: tuple[float, float] = C.ORBIT_EXTRA_RANGE
    formation_chance_base: float = C.FORMATION_CHANCE_BASE
    formation_chance_step: float = C.FORMATION_CHANCE_STEP

    # Hyperspace
    star_density: float = C.STAR_DENSITY
    star_check_hash_scale: int = C.STAR_CHECK_HASH_SCALE
    nebula_scale: float = C.NEBULA_SCALE
    nebula_mask_ratio: float = C.NEBULA_MASK_RATIO
    nebula_intensity: float = C.NEBULA_INTENSITY
    nebula_sparsity: float = C.NEBULA_SPARSITY
    nebula_colours: list = field(default_factory=lambda: list(C.NEBULA_COLOURS))
    nebula_cache_precision: int = C.NEBULA_CACHE_PRECISION
    nebula_cache_size: int = C.NEBULA_CACHE_SIZE
    noise_cache_limit: int | None = None
    default_bg_colour: tuple[int, int, int] = C.DEFAULT_BG_COLOR

    # Orbits
    seconds_per_year: float = C.SECONDS_PER_SIMULATED_YEAR

    def __post_init__(self) -> None:
        if not math.isfinite(self.seconds_per_year) or self.seconds_per_year <= 0:
            raise ConfigError(f"seconds_per_year must be positive, got {self.seconds_per_year!r}")
        if not 0 <= self.nebula_sparsity < 1:
            raise ConfigError(f"nebula_sparsity must be in [0, 1), got {self.nebula_sparsity!r}")
        if self.max_planets < 0:
            raise ConfigError(f"max_planets cannot be negative, got {self.max_planets!r}")
        if self.min_orbit_separation <= 0:
            raise ConfigError("min_orbit_separation must be positive")
        if self.edge_radius_floor < 0:
            raise ConfigError("edge_radius_floor cannot be negative")
        if self.nebula_cache_size < 0:
            raise ConfigError("nebula_cache_size cannot be negative")

    def replace(self, **changes) -> EngineConfig:
        """Return a copy with some fields changed."""
        return dataclasses.replace(self, **changes)
