"""Procedural star system generation for Starcharts.

Every system is a pure function of the root seed and its integer world
coordinates.  The system stream is ``root.seed_new("star_{x},{y}")`` and
values are drawn from it in this fixed order:

1. spectral class: one ``random_int`` over the summed class weights
2. name: prefix ``choice``, ``random_int(1, 999)``, ``random_int(0, 25)``
3. starbase roll: ``random()``; the starbase angle comes from its own
   ``"starbase_<name>"`` branch
4. ``random(*orbit_scale_range)`` then ``random(*first_orbit_range)``
5. for each slot, until the orbit marker reaches the outer limit:
   ``random(-jitter, jitter)``, ``random(*orbit_extra_range)``, the
   formation roll ``random()``, and only for a formed planet the angle
   ``random(0, tau)``.  The planet type comes from the ``"type_<slot>"``
   branch and physical characteristics from ``"planet_<name>"``.

Changing this order changes every universe generated from existing seeds.
"""

from __future__ import annotations

import enum
import logging
import math
from dataclasses import dataclass, field

from ..config import EngineConfig
from ..constants import (
    AU,
    REFERENCE_STAR,
    STAR_DATA,
    ZONE_COOL,
    ZONE_HABITABLE,
    ZONE_HOT,
    ZONE_OUTER_HOT,
)
from .nebula import NebulaField
from .prng import SeededRandom, fast_hash, seed_to_int

logger = logging.getLogger(__name__)


class SpectralClass(enum.Enum):
    """Star spectral classes, hottest first."""

    O = "O"
    B = "B"
    A = "A"
    F = "F"
    G = "G"
    K = "K"
    M = "M"


class PlanetType(enum.Enum):
    """Planet types produced by the climate zones."""

    MOLTEN = "molten"
    ROCK = "rock"
    OCEANIC = "oceanic"
    LUNAR = "lunar"
    GAS_GIANT = "gas_giant"
    ICE_GIANT = "ice_giant"
    FROZEN = "frozen"


# Reference temperature at 1 AU from a Sun-like star (K)
_REFERENCE_TEMP = 278.3

# Used by the gravity estimate
_EARTH_DENSITY = 5.51  # g/cm3
_EARTH_DIAMETER_KM = 12742


@dataclass
class OrbitalBody:
    """Anything on a circular orbit around the system's star.

    ``orbit_angle`` and the system-space position are the only fields
    that change after creation.
    """

    name: str
    orbit_distance: float  # metres
    orbit_angle: float  # radians
    system_x: float = field(init=False, default=0.0)
    system_y: float = field(init=False, default=0.0)

    def __post_init__(self) -> None:
        self.place(self.orbit_angle)

    def place(self, angle: float) -> None:
        """Move to ``angle`` on the orbit and recompute the position."""
        self.orbit_angle = angle
        self.system_x = math.cos(angle) * self.orbit_distance
        self.system_y = math.sin(angle) * self.orbit_distance

    def reset_position(self) -> None:
        self.system_x = 0.0
        self.system_y = 0.0


@dataclass
class Planet(OrbitalBody):
    """A generated planet."""

    planet_type: PlanetType
    slot: int
    star_class: SpectralClass
    diameter: int  # km
    density: float  # g/cm3
    gravity: float  # relative to Earth
    surface_temp: float  # K, equilibrium estimate
    rng: SeededRandom = field(repr=False, compare=False)

    def describe(self) -> dict:
        return {
            "name": self.name,
            "type": self.planet_type.value,
            "slot": self.slot,
            "orbit_distance": self.orbit_distance,
            "orbit_angle": self.orbit_angle,
            "diameter": self.diameter,
            "density": self.density,
            "gravity": self.gravity,
            "surface_temp": self.surface_temp,
        }


@dataclass
class Starbase(OrbitalBody):
    """An orbital station; at most one per system."""

    rng: SeededRandom = field(repr=False, compare=False)

    def describe(self) -> dict:
        return {
            "name": self.name,
            "orbit_distance": self.orbit_distance,
            "orbit_angle": self.orbit_angle,
        }


@dataclass(frozen=True)
class StarSystem:
    """A single generated star system."""

    star_x: int
    star_y: int
    star_class: SpectralClass
    name: str
    planets: tuple[Planet | None, ...]
    starbase: Starbase | None
    edge_radius: float
    star: dict = field(repr=False, compare=False)
    rng: SeededRandom = field(repr=False, compare=False)

    def bodies(self) -> list[OrbitalBody]:
        """Every orbiting body: planets in slot order, then the starbase."""
        found: list[OrbitalBody] = [p for p in self.planets if p is not None]
        if self.starbase is not None:
            found.append(self.starbase)
        return found

    def object_near(self, x: float, y: float, radius: float) -> OrbitalBody | None:
        """First planet, then starbase, within ``radius`` of a system-space point."""
        radius_sq = radius * radius
        for body in self.bodies():
            dx = body.system_x - x
            dy = body.system_y - y
            if dx * dx + dy * dy < radius_sq:
                return body
        return None

    def is_at_edge(self, x: float, y: float) -> bool:
        """True once a point is beyond the edge radius, with a 10% buffer."""
        return x * x + y * y > (self.edge_radius * 1.1) ** 2

    def describe(self) -> dict:
        """Plain-data view of the system, stable for a given seed."""
        return {
            "star_x": self.star_x,
            "star_y": self.star_y,
            "star_class": self.star_class.value,
            "name": self.name,
            "planets": [p.describe() if p else None for p in self.planets],
            "starbase": self.starbase.describe() if self.starbase else None,
            "edge_radius": self.edge_radius,
        }


# ---------------------------------------------------------------------------
# Name generation
# ---------------------------------------------------------------------------

_PREFIXES = [
    "Alpha", "Beta", "Gamma", "Delta", "Epsilon", "Zeta", "Eta", "Theta",
    "Iota", "Kappa", "Lambda", "Mu", "Nu", "Xi", "Omicron", "Pi", "Rho",
    "Sigma", "Tau", "Upsilon", "Phi", "Chi", "Psi", "Omega", "Proxima",
    "Cygnus", "Kepler", "Gliese", "HD", "Trappist", "Luyten", "Wolf",
    "Ross", "Barnard",
]

_ROMAN = [
    (1000, "M"), (900, "CM"), (500, "D"), (400, "CD"), (100, "C"), (90, "XC"),
    (50, "L"), (40, "XL"), (10, "X"), (9, "IX"), (5, "V"), (4, "IV"), (1, "I"),
]


def _generate_system_name(rng: SeededRandom) -> str:
    """Generate a catalogue-style system name, e.g. ``Kepler-442B``."""
    prefix = rng.choice(_PREFIXES)
    number = rng.random_int(1, 999)
    letter = chr(ord("A") + rng.random_int(0, 25))
    return f"{prefix}-{number}{letter}"


def roman_numeral(num: int) -> str:
    if num < 1:
        return str(num)
    result = ""
    for value, symbol in _ROMAN:
        count, num = divmod(num, value)
        result += symbol * count
    return result


# ---------------------------------------------------------------------------
# Tables
# ---------------------------------------------------------------------------


def _table_total(choices) -> int:
    """Total weight of a table, or 0 when it cannot be drawn from."""
    if not choices:
        return 0
    try:
        return int(sum(c[1] for c in choices))
    except (TypeError, ValueError, IndexError):
        return 0


def _weighted_choice(rng: SeededRandom, choices: list[tuple]) -> object:
    """Weighted random selection from a list of (item, weight) tuples."""
    total = _table_total(choices)
    roll = rng.random_int(1, total)
    cumulative = 0
    for choice in choices:
        cumulative += choice[1]
        if roll <= cumulative:
            return choice[0]
    return choices[-1][0]


def star_info(star_class: SpectralClass, config: EngineConfig) -> dict:
    """Physical and display data for a class, falling back to the G class."""
    info = config.star_data.get(star_class.value)
    if info is None:
        logger.warning("No spectral data for class %s; using %s", star_class.value, REFERENCE_STAR)
        info = config.star_data.get(REFERENCE_STAR) or dict(STAR_DATA[REFERENCE_STAR])
    return info


def _reference_star(config: EngineConfig) -> dict:
    return star_info(SpectralClass(REFERENCE_STAR), config)


def luminosity(star_class: SpectralClass, config: EngineConfig) -> float:
    """Luminosity relative to the reference star: (T/T_ref)^4 (R/R_ref)^2."""
    star = star_info(star_class, config)
    ref = _reference_star(config)
    return (star["temp"] / ref["temp"]) ** 4 * (star["radius"] / ref["radius"]) ** 2


def effective_temperature(star_class: SpectralClass, distance_m: float, config: EngineConfig) -> float:
    """Approximate black-body temperature (K) at an orbital distance."""
    try:
        distance_au = distance_m / AU
        return _REFERENCE_TEMP * luminosity(star_class, config) ** 0.25 / math.sqrt(distance_au)
    except (ValueError, ZeroDivisionError, OverflowError):
        return math.nan


def climate_zone(temperature: float) -> str:
    if temperature > ZONE_HOT:
        return "hot"
    if temperature > ZONE_OUTER_HOT:
        return "outer_hot"
    if temperature > ZONE_HABITABLE:
        return "habitable"
    if temperature > ZONE_COOL:
        return "cool"
    return "cold"


# ---------------------------------------------------------------------------
# System generation
# ---------------------------------------------------------------------------


class SystemGenerator:
    """Turns (x, y, root stream) into a fully specified star system."""

    def __init__(self, config: EngineConfig | None = None) -> None:
        self.config = config or EngineConfig()

    # ------------------------------------------------------------------
    # Policies
    # ------------------------------------------------------------------

    def system_stream(self, star_x: int, star_y: int, root: SeededRandom) -> SeededRandom:
        return root.seed_new(f"star_{star_x},{star_y}")

    def _pick_star_class(self, rng: SeededRandom) -> SpectralClass:
        weights = self.config.star_weights
        if _table_total(weights) < 1:
            logger.warning("Unusable star weight table; using class %s", REFERENCE_STAR)
            return SpectralClass(REFERENCE_STAR)
        value = _weighted_choice(rng, weights)
        try:
            return SpectralClass(value)
        except ValueError:
            logger.warning("Unknown spectral class %r; using %s", value, REFERENCE_STAR)
            return SpectralClass(REFERENCE_STAR)

    def star_class_for(self, star_x: int, star_y: int, root: SeededRandom) -> SpectralClass:
        """Spectral class of the system at (x, y) without generating the rest."""
        return self._pick_star_class(self.system_stream(star_x, star_y, root))

    def planet_type_for_orbit(
        self, star_class: SpectralClass, distance_m: float, rng: SeededRandom,
    ) -> PlanetType:
        """Pick a planet type from the climate zone at ``distance_m``."""
        temperature = effective_temperature(star_class, distance_m, self.config)
        if not math.isfinite(temperature):
            logger.warning(
                "Non-finite effective temperature for class %s at %r m; defaulting to rock",
                star_class.value, distance_m,
            )
            return PlanetType.ROCK
        zone = climate_zone(temperature)
        weights = self.config.zone_planet_weights.get(zone)
        if _table_total(weights) < 1:
            logger.warning("No usable planet weights for the %s zone; defaulting to rock", zone)
            return PlanetType.ROCK
        value = _weighted_choice(rng, weights)
        try:
            return PlanetType(value)
        except ValueError:
            logger.warning("Unknown planet type %r; defaulting to rock", value)
            return PlanetType.ROCK

    def _physical(
        self, rng: SeededRandom, planet_type: PlanetType, star_class: SpectralClass, distance_m: float,
    ) -> tuple[int, float, float, float]:
        """Diameter, density, gravity and equilibrium temperature."""
        data = self.config.planet_data.get(planet_type.value, {})
        lo, hi = data.get("density", (3.0, 5.5))
        diameter = rng.random_int(2000, 20000)
        density = max(0.1, rng.random(lo, hi))
        gravity = (density / _EARTH_DENSITY) * (diameter / _EARTH_DIAMETER_KM)
        gravity = max(0.01, min(10.0, gravity))

        star = star_info(star_class, self.config)
        albedo = data.get("albedo", 0.3)
        try:
            temp = star["temp"] * math.sqrt(star["radius"] / (2 * distance_m)) * (1 - albedo) ** 0.25
        except (ValueError, ZeroDivisionError):
            temp = math.nan
        if not math.isfinite(temp):
            temp = float(data.get("base_temp", 280))
        return diameter, density, gravity, temp

    def _make_starbase(self, rng: SeededRandom, name: str) -> Starbase:
        base_rng = rng.seed_new(f"starbase_{name}")
        starbase = Starbase(
            name=f"{name} Starbase",
            orbit_distance=self.config.starbase_orbit_distance,
            orbit_angle=base_rng.random(0.0, math.tau),
            rng=base_rng,
        )
        logger.debug("Starbase generated in %s at orbit %.3g m", name, starbase.orbit_distance)
        return starbase

    def _next_orbit(self, candidate: float, last: float, starbase: Starbase | None) -> float | None:
        """Apply separation and outer-limit rules; ``None`` when nothing fits."""
        cfg = self.config
        min_sep = cfg.min_orbit_separation
        outer = cfg.max_orbit_distance

        candidate = min(max(candidate, last + min_sep), outer)
        if starbase is not None:
            base = starbase.orbit_distance
            if abs(candidate - base) < min_sep:
                # Nudge to the side it already leaned toward
                candidate = base + min_sep if candidate >= base else base - min_sep
                candidate = min(max(candidate, last + min_sep), outer)
                if abs(candidate - base) < min_sep:
                    candidate = base + min_sep
        if candidate > outer or candidate < last + min_sep:
            return None
        return candidate

    # ------------------------------------------------------------------
    # Generation
    # ------------------------------------------------------------------

    def generate(self, star_x: int, star_y: int, root: SeededRandom) -> StarSystem:
        """Build the star system at integer world coordinates (x, y)."""
        cfg = self.config
        star_x = int(star_x)
        star_y = int(star_y)
        rng = self.system_stream(star_x, star_y, root)

        star_class = self._pick_star_class(rng)
        star = star_info(star_class, cfg)
        name = _generate_system_name(rng)

        starbase = self._make_starbase(rng, name) if rng.random() < cfg.starbase_probability else None
        planets = self._generate_planets(rng, name, star_class, starbase)

        max_orbit = max((b.orbit_distance for b in planets if b is not None), default=0.0)
        if starbase is not None:
            max_orbit = max(max_orbit, starbase.orbit_distance)
        edge_radius = max(cfg.edge_radius_floor, max_orbit * cfg.edge_radius_factor)

        system = StarSystem(
            star_x=star_x,
            star_y=star_y,
            star_class=star_class,
            name=name,
            planets=tuple(planets),
            starbase=starbase,
            edge_radius=edge_radius,
            star=dict(star),
            rng=rng,
        )
        logger.debug(
            "Generated %s (%s) at %d,%d: %d planets, starbase=%s",
            name, star_class.value, star_x, star_y,
            sum(1 for p in planets if p), starbase is not None,
        )
        return system

    def _generate_planets(
        self, rng: SeededRandom, name: str, star_class: SpectralClass, starbase: Starbase | None,
    ) -> list[Planet | None]:
        cfg = self.config
        planets: list[Planet | None] = [None] * cfg.max_planets

        scale_base = rng.random(*cfg.orbit_scale_range)
        last = rng.random(*cfg.first_orbit_range)

        for i in range(cfg.max_planets):
            if last >= cfg.max_orbit_distance:
                break

            jitter = rng.random(-cfg.orbit_jitter, cfg.orbit_jitter)
            extra = rng.random(*cfg.orbit_extra_range) * (i + 1)
            candidate = self._next_orbit(last * scale_base ** (1 + jitter) + extra, last, starbase)
            if candidate is None:
                break

            # Decreasing chance of planet formation further out
            formation_chance = cfg.formation_chance_base - i * cfg.formation_chance_step
            if rng.random() < formation_chance:
                planet_type = self.planet_type_for_orbit(star_class, candidate, rng.seed_new(f"type_{i}"))
                angle = rng.random(0.0, math.tau)
                planet_name = f"{name} {roman_numeral(i + 1)}"
                planet_rng = rng.seed_new(f"planet_{planet_name}")
                diameter, density, gravity, temp = self._physical(
                    planet_rng, planet_type, star_class, candidate,
                )
                planets[i] = Planet(
                    name=planet_name,
                    orbit_distance=candidate,
                    orbit_angle=angle,
                    planet_type=planet_type,
                    slot=i,
                    star_class=star_class,
                    diameter=diameter,
                    density=density,
                    gravity=gravity,
                    surface_temp=temp,
                    rng=planet_rng,
                )

            # Empty slots still advance the marker
            last = candidate

        return planets


# ---------------------------------------------------------------------------
# Session context
# ---------------------------------------------------------------------------


class Galaxy:
    """One play session's universe: root stream, nebula and visited systems."""

    def __init__(self, seed: str | None = None, config: EngineConfig | None = None) -> None:
        self.config = config or EngineConfig()
        self.seed = seed if seed is not None else self.config.seed
        self.rng = SeededRandom(self.seed)
        self.nebula = NebulaField(self.seed, self.config)
        self.generator = SystemGenerator(self.config)
        self._seed_int = seed_to_int(self.seed)
        self._systems: dict[tuple[int, int], StarSystem] = {}
        logger.info("Galaxy ready with seed %r", self.seed)

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def star_at(self, x: int, y: int) -> bool:
        """Whether the hyperspace cell (x, y) holds a star."""
        threshold = math.floor(self.config.star_density * self.config.star_check_hash_scale)
        return fast_hash(x, y, self._seed_int) % self.config.star_check_hash_scale < threshold

    def star_class_at(self, x: int, y: int) -> SpectralClass | None:
        if not self.star_at(x, y):
            return None
        cached = self._systems.get((int(x), int(y)))
        if cached is not None:
            return cached.star_class
        return self.generator.star_class_for(int(x), int(y), self.rng)

    def system_at(self, x: int, y: int) -> StarSystem | None:
        """The system at (x, y), generated on first visit; ``None`` if empty space."""
        if not self.star_at(x, y):
            return None
        key = (int(x), int(y))
        system = self._systems.get(key)
        if system is None:
            system = self.generator.generate(key[0], key[1], self.rng)
            self._systems[key] = system
        return system

    def forget_system(self, x: int, y: int) -> None:
        """Drop a held system; the next visit regenerates it identically."""
        self._systems.pop((int(x), int(y)), None)

    @property
    def visited_count(self) -> int:
        return len(self._systems)
