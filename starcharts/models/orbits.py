"""Circular orbit updates for the bodies of a star system."""

from __future__ import annotations

import logging
import math

from ..config import ConfigError, EngineConfig
from ..constants import SECONDS_PER_SIMULATED_YEAR
from .galaxy import OrbitalBody, StarSystem

logger = logging.getLogger(__name__)


class OrbitIntegrator:
    """Advances every body of a system by elapsed real time.

    All bodies share one angular speed: a full simulated year takes
    ``seconds_per_year`` real seconds regardless of orbit or star mass.
    The integrator keeps no state of its own.
    """

    def __init__(self, seconds_per_year: float = SECONDS_PER_SIMULATED_YEAR) -> None:
        if not math.isfinite(seconds_per_year) or seconds_per_year <= 0:
            raise ConfigError(f"seconds_per_year must be positive, got {seconds_per_year!r}")
        self.seconds_per_year = seconds_per_year

    @classmethod
    def from_config(cls, config: EngineConfig) -> OrbitIntegrator:
        return cls(config.seconds_per_year)

    @property
    def angular_speed(self) -> float:
        """Radians per real second."""
        return math.tau / self.seconds_per_year

    def advance(self, system: StarSystem, delta_seconds: float) -> list[OrbitalBody]:
        """Move every planet and the starbase; returns bodies reset to the origin."""
        if not math.isfinite(delta_seconds):
            logger.warning("Ignoring non-finite orbit step %r", delta_seconds)
            delta_seconds = 0.0
        increment = self.angular_speed * delta_seconds

        faulted: list[OrbitalBody] = []
        for body in system.bodies():
            if not self._advance_body(body, increment):
                faulted.append(body)
        return faulted

    def _advance_body(self, body: OrbitalBody, increment: float) -> bool:
        distance = body.orbit_distance
        if not math.isfinite(distance) or distance <= 0:
            logger.warning("Invalid orbit distance %r for %s; resetting to origin", distance, body.name)
            body.reset_position()
            return False

        angle = (body.orbit_angle + increment) % math.tau
        if angle >= math.tau:
            angle = 0.0
        body.place(angle)
        if not (math.isfinite(body.system_x) and math.isfinite(body.system_y)):
            logger.warning("Non-finite position for %s; resetting to origin", body.name)
            body.reset_position()
            return False
        return True
