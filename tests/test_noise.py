from __future__ import annotations

import math
import random

import pytest

from starcharts.models.noise import NoiseField, interpolate, smootherstep


def test_smootherstep_endpoints_and_midpoint() -> None:
    assert smootherstep(0.0) == 0.0
    assert smootherstep(1.0) == 1.0
    assert smootherstep(0.5) == pytest.approx(0.5)
    assert interpolate(0.5, 2.0, 4.0) == pytest.approx(3.0)


def test_lattice_corners_evaluate_to_zero() -> None:
    field = NoiseField("corners")
    for x, y in [(0, 0), (1, 0), (0, 1), (1, 1), (-7, 12), (250, -3)]:
        assert field.sample(float(x), float(y)) == pytest.approx(0.0, abs=1e-12)


def test_values_stay_bounded() -> None:
    field = NoiseField("bounded", precision=6)
    pick = random.Random(1234)
    for _ in range(10_000):
        v = field.sample(pick.uniform(-50, 50), pick.uniform(-50, 50))
        assert -1.0 - 1e-9 <= v <= 1.0 + 1e-9


def test_cached_sample_is_identical_and_creates_no_gradients() -> None:
    field = NoiseField("cache")
    first = field.sample(3.14159, 2.71828)
    gradients = field.gradient_count

    second = field.sample(3.14159, 2.71828)

    assert second == first
    assert field.gradient_count == gradients
    assert field.cached_values == 1


def test_quantised_coordinates_share_a_cache_entry() -> None:
    field = NoiseField("quantise", precision=2)

    assert field.sample(1.2341, 5.6789) == field.sample(1.2339, 5.6791)
    assert field.cached_values == 1


def test_nearby_points_give_nearby_values() -> None:
    field = NoiseField("continuity", precision=8)
    for x in [0.999999, 1.0, 1.000001]:
        assert field.sample(x, 0.37) == pytest.approx(field.sample(1.0, 0.37), abs=1e-4)


def test_gradients_are_unit_vectors() -> None:
    field = NoiseField("unit")
    g = field.gradient(4, -9)

    assert math.hypot(g.x, g.y) == pytest.approx(1.0)
    assert field.gradient(4, -9) is g


def test_same_seed_gives_same_field_in_any_visit_order() -> None:
    a = NoiseField("order")
    b = NoiseField("order")
    points = [(0.3, 0.4), (10.5, -2.2), (-33.1, 7.7)]

    forward = [a.sample(x, y) for x, y in points]
    backward = [b.sample(x, y) for x, y in reversed(points)]

    assert forward == list(reversed(backward))


def test_reseed_clears_everything_and_is_idempotent() -> None:
    field = NoiseField("first")
    field.sample(1.5, 1.5)

    field.reseed("second")
    assert field.gradient_count == 0
    assert field.cached_values == 0
    value = field.sample(1.5, 1.5)

    field.reseed("second")
    field.reseed("second")
    assert field.sample(1.5, 1.5) == value
    assert NoiseField("second").sample(1.5, 1.5) == value


def test_non_finite_input_falls_back_to_zero() -> None:
    field = NoiseField("nan")

    assert field.sample(math.nan, 1.0) == 0.0
    assert field.sample(1.0, math.inf) == 0.0
    assert field.cached_values == 0


def test_huge_coordinates_stay_finite() -> None:
    field = NoiseField("huge")

    assert math.isfinite(field.sample(1e15 + 0.5, -1e15 + 0.25))


def test_value_cache_evicts_least_recently_used() -> None:
    field = NoiseField("lru", max_entries=2)
    field.sample(0.1, 0.1)
    field.sample(0.2, 0.2)
    field.sample(0.1, 0.1)  # refresh
    field.sample(0.3, 0.3)

    assert field.cached_values == 2
    gradients = field.gradient_count
    field.sample(0.1, 0.1)
    assert field.cached_values == 2
    assert field.gradient_count == gradients
