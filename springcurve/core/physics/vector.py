"""
SPRINGCURVE - VECTOR MATH
=========================

Immutable 2D points and the handful of vector operations the curve and
spring code need.

All functions are pure and never raise for finite input.
"""
from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Dict, Tuple


@dataclass(frozen=True)
class Point2:
    """
    Immutable 2D point / vector.

    Attributes:
        x: Horizontal coordinate (canvas space, grows right)
        y: Vertical coordinate (canvas space, grows down)
    """
    x: float
    y: float

    def __add__(self, other: Point2) -> Point2:
        return add(self, other)

    def __sub__(self, other: Point2) -> Point2:
        return sub(self, other)

    def __mul__(self, s: float) -> Point2:
        return scale(self, s)

    def __rmul__(self, s: float) -> Point2:
        return scale(self, s)

    def __neg__(self) -> Point2:
        return Point2(-self.x, -self.y)

    def to_tuple(self) -> Tuple[float, float]:
        return (self.x, self.y)

    def to_dict(self) -> Dict[str, float]:
        """Convert to dictionary for serialization."""
        return {'x': self.x, 'y': self.y}


ZERO = Point2(0.0, 0.0)


def add(a: Point2, b: Point2) -> Point2:
    """Component-wise sum."""
    return Point2(a.x + b.x, a.y + b.y)


def sub(a: Point2, b: Point2) -> Point2:
    """Component-wise difference a - b."""
    return Point2(a.x - b.x, a.y - b.y)


def scale(v: Point2, s: float) -> Point2:
    """Multiply both components by s."""
    return Point2(v.x * s, v.y * s)


def magnitude(v: Point2) -> float:
    """Euclidean norm."""
    return math.hypot(v.x, v.y)


def distance(a: Point2, b: Point2) -> float:
    """Euclidean distance between two points (used for hit-testing)."""
    return magnitude(sub(a, b))


def unit(v: Point2) -> Point2:
    """
    Direction of v with length 1.

    Returns the zero vector when v has zero length, so callers drawing a
    direction never divide by zero.
    """
    length = magnitude(v)
    if length == 0.0:
        return ZERO
    return Point2(v.x / length, v.y / length)


def is_finite(v: Point2) -> bool:
    return math.isfinite(v.x) and math.isfinite(v.y)
