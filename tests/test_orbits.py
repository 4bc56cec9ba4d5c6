from __future__ import annotations

import logging
import math

import pytest

from starcharts.config import ConfigError, EngineConfig
from starcharts.models.galaxy import SystemGenerator
from starcharts.models.orbits import OrbitIntegrator
from starcharts.models.prng import SeededRandom


def _system(starbase: bool = True):
    config = EngineConfig(starbase_probability=1.0 if starbase else 0.0, formation_chance_base=2.0)
    return SystemGenerator(config).generate(4, -4, SeededRandom("orbits"))


def _angle_delta(a: float, b: float) -> float:
    d = (a - b) % math.tau
    return min(d, math.tau - d)


def test_full_year_returns_every_body_to_its_start() -> None:
    system = _system()
    before = {b.name: b.orbit_angle for b in system.bodies()}
    integrator = OrbitIntegrator(seconds_per_year=90.0)

    assert integrator.advance(system, 90.0) == []

    for body in system.bodies():
        assert _angle_delta(body.orbit_angle, before[body.name]) == pytest.approx(0.0, abs=1e-9)
        assert 0 <= body.orbit_angle < math.tau


def test_quarter_year_turns_bodies_by_a_right_angle() -> None:
    system = _system()
    body = system.bodies()[0]
    start = body.orbit_angle

    OrbitIntegrator(seconds_per_year=40.0).advance(system, 10.0)

    assert _angle_delta(body.orbit_angle, start + math.pi / 2) == pytest.approx(0.0, abs=1e-9)
    assert body.system_x == pytest.approx(math.cos(body.orbit_angle) * body.orbit_distance)
    assert body.system_y == pytest.approx(math.sin(body.orbit_angle) * body.orbit_distance)


def test_advance_includes_the_starbase() -> None:
    system = _system()
    start = system.starbase.orbit_angle

    OrbitIntegrator(seconds_per_year=100.0).advance(system, 5.0)

    assert system.starbase.orbit_angle != start


def test_invalid_distance_resets_body_to_origin(caplog) -> None:
    system = _system()
    body = system.bodies()[0]
    body.orbit_distance = -5.0

    with caplog.at_level(logging.WARNING, logger="starcharts"):
        faulted = OrbitIntegrator().advance(system, 1.0)

    assert faulted == [body]
    assert (body.system_x, body.system_y) == (0.0, 0.0)
    assert "Invalid orbit distance" in caplog.text


def test_non_finite_distance_is_skipped_without_touching_others() -> None:
    system = _system()
    bad, good = system.bodies()[:2]
    bad.orbit_distance = math.inf
    start = good.orbit_angle

    faulted = OrbitIntegrator(seconds_per_year=10.0).advance(system, 1.0)

    assert faulted == [bad]
    assert good.orbit_angle != start


def test_non_finite_step_is_ignored() -> None:
    system = _system()
    before = [b.orbit_angle for b in system.bodies()]

    OrbitIntegrator().advance(system, math.nan)

    assert [b.orbit_angle for b in system.bodies()] == pytest.approx(before)


def test_integrator_rejects_bad_year_length() -> None:
    with pytest.raises(ConfigError):
        OrbitIntegrator(seconds_per_year=0.0)
    with pytest.raises(ConfigError):
        EngineConfig(seconds_per_year=-1.0)


def test_from_config_uses_configured_year() -> None:
    integrator = OrbitIntegrator.from_config(EngineConfig(seconds_per_year=30.0))

    assert integrator.angular_speed == pytest.approx(math.tau / 30.0)


def test_tiny_backward_step_keeps_angle_below_a_full_turn() -> None:
    system = _system()
    body = system.bodies()[0]
    body.place(0.0)

    OrbitIntegrator().advance(system, -1e-18)

    assert 0 <= body.orbit_angle < math.tau
