"""Small RGB helpers shared by the nebula field and the backdrop."""

from __future__ import annotations

import pygame

Colour = tuple[int, int, int]


def to_rgb(value) -> Colour:
    """Accept ``"#RRGGBB"``, a colour name, a ``pygame.Color`` or an RGB tuple."""
    c = pygame.Color(value)
    return (c.r, c.g, c.b)


def interpolate_colour(a, b, factor: float) -> tuple[float, float, float]:
    """Linear blend from ``a`` to ``b``; ``factor`` is clamped to [0, 1].

    Channels stay unrounded so chained blends do not accumulate error.
    """
    factor = max(0.0, min(1.0, factor))
    return (
        a[0] + (b[0] - a[0]) * factor,
        a[1] + (b[1] - a[1]) * factor,
        a[2] + (b[2] - a[2]) * factor,
    )


def clamp_rgb(rgb) -> Colour:
    """Round and clamp each channel to 0–255."""
    return tuple(max(0, min(255, round(ch))) for ch in rgb)


def adjust_brightness(rgb, factor: float) -> Colour:
    return clamp_rgb((rgb[0] * factor, rgb[1] * factor, rgb[2] * factor))
