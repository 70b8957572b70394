"""
SPRINGCURVE - BEZIER MATH
=========================

Stateless cubic Bezier evaluation in the plane.

Mathematical Foundation:
- Cubic Bezier: B(t) = (1-t)³P₀ + 3(1-t)²t P₁ + 3(1-t)t² P₂ + t³ P₃
- Derivative:   B'(t) = 3(1-t)²(P₁-P₀) + 6(1-t)t(P₂-P₁) + 3t²(P₃-P₂)
- t ∈ [0, 1] along the curve; the polynomials are defined for any real t

P₀ and P₃ are the anchors, P₁ and P₂ the movable control points.
"""
from __future__ import annotations

import math
from dataclasses import dataclass
from typing import List, Dict, Any

from .vector import Point2, add, sub, scale, unit


# ============================================================================
# POINT / TANGENT EVALUATION
# ============================================================================

def get_point(t: float, p0: Point2, p1: Point2, p2: Point2, p3: Point2) -> Point2:
    """
    Evaluate the curve at parameter t.

    No clamping is done here: callers clamp t themselves when they need to.
    At t=0 the result is exactly p0 and at t=1 exactly p3.

    Args:
        t: Curve parameter, usually in [0, 1]
        p0, p1, p2, p3: Control points

    Returns:
        Point on the curve
    """
    u = 1.0 - t

    # Bernstein polynomial coefficients
    b0 = u * u * u
    b1 = 3.0 * u * u * t
    b2 = 3.0 * u * t * t
    b3 = t * t * t

    return Point2(
        b0 * p0.x + b1 * p1.x + b2 * p2.x + b3 * p3.x,
        b0 * p0.y + b1 * p1.y + b2 * p2.y + b3 * p3.y,
    )


def get_tangent(t: float, p0: Point2, p1: Point2, p2: Point2, p3: Point2) -> Point2:
    """
    Evaluate the first derivative dB/dt at parameter t.

    The result is a direction vector, not normalised. When the control
    points coincide the derivative is the zero vector; it is returned as-is.

    Returns:
        Tangent vector at t
    """
    u = 1.0 - t

    a = scale(sub(p1, p0), 3.0 * u * u)
    b = scale(sub(p2, p1), 6.0 * u * t)
    c = scale(sub(p3, p2), 3.0 * t * t)

    return add(add(a, b), c)


# ============================================================================
# SAMPLING RESULTS
# ============================================================================

@dataclass(frozen=True)
class TangentMarker:
    """
    Short segment centred on a curve point, aligned with the tangent.

    Attributes:
        t: Curve parameter of the origin
        origin: Point on the curve
        start: origin - direction * length/2
        end: origin + direction * length/2
    """
    t: float
    origin: Point2
    start: Point2
    end: Point2

    @property
    def degenerate(self) -> bool:
        """Zero-length marker (zero tangent); renderers draw nothing."""
        return self.start == self.end

    def to_dict(self) -> Dict[str, Any]:
        return {
            't': self.t,
            'origin': self.origin.to_dict(),
            'start': self.start.to_dict(),
            'end': self.end.to_dict(),
            'degenerate': self.degenerate
        }


@dataclass(frozen=True)
class CursorProjection:
    """
    Curve point at the horizontal fraction nearest the pointer.

    Attributes:
        t: Clamped curve parameter
        point: B(t)
        tangent: B'(t)
        angle_degrees: atan2 of the tangent, in degrees
    """
    t: float
    point: Point2
    tangent: Point2
    angle_degrees: float

    def to_dict(self) -> Dict[str, Any]:
        return {
            't': self.t,
            'point': self.point.to_dict(),
            'tangent': self.tangent.to_dict(),
            'angle_degrees': self.angle_degrees
        }


# ============================================================================
# CURVE VALUE TYPE
# ============================================================================

@dataclass(frozen=True)
class CubicBezier:
    """
    Cubic Bezier curve through four planar control points.

    Usage:
        curve = CubicBezier(
            Point2(100, 300),   # P₀ anchor
            Point2(150, 250),   # P₁ control
            Point2(450, 350),   # P₂ control
            Point2(500, 300)    # P₃ anchor
        )

        polyline = curve.sample(100)        # 101 points
        markers = curve.tangent_markers(100, 10, 100.0)
    """
    p0: Point2
    p1: Point2
    p2: Point2
    p3: Point2

    def point(self, t: float) -> Point2:
        return get_point(t, self.p0, self.p1, self.p2, self.p3)

    def tangent(self, t: float) -> Point2:
        return get_tangent(t, self.p0, self.p1, self.p2, self.p3)

    def sample(self, steps: int) -> List[Point2]:
        """
        Sample the curve at evenly spaced parameters.

        Args:
            steps: Number of segments (>= 1)

        Returns:
            steps + 1 points, from P₀ to P₃ inclusive
        """
        if steps < 1:
            raise ValueError(f"steps must be >= 1, got {steps}")

        return [self.point(i / steps) for i in range(steps + 1)]

    def tangent_markers(self, steps: int, interval: int, length: float) -> List[TangentMarker]:
        """
        Tangent markers at every `interval`-th sample, starting at i=1.

        Args:
            steps: Sampling resolution (same as the polyline)
            interval: Sample stride between markers (>= 1)
            length: Full marker length

        Returns:
            Markers for t = i/steps, i = 1, 1+interval, ... while i < steps
        """
        if steps < 1:
            raise ValueError(f"steps must be >= 1, got {steps}")
        if interval < 1:
            raise ValueError(f"interval must be >= 1, got {interval}")

        half = length / 2.0
        markers = []
        for i in range(1, steps, interval):
            t = i / steps
            origin = self.point(t)
            offset = scale(unit(self.tangent(t)), half)
            markers.append(TangentMarker(
                t=t,
                origin=origin,
                start=sub(origin, offset),
                end=add(origin, offset)
            ))

        return markers

    def project_cursor(self, x: float) -> CursorProjection:
        """
        Project a pointer x coordinate onto the curve parameter.

        t is the pointer's horizontal fraction between the anchors, clamped
        to [0, 1].
        """
        t = (x - self.p0.x) / (self.p3.x - self.p0.x)
        t = max(0.0, min(1.0, t))

        point = self.point(t)
        tangent = self.tangent(t)

        return CursorProjection(
            t=t,
            point=point,
            tangent=tangent,
            angle_degrees=math.degrees(math.atan2(tangent.y, tangent.x))
        )

    def points(self) -> Dict[str, Dict[str, float]]:
        """All four control points, for on-screen readout."""
        return {
            'p0': self.p0.to_dict(),
            'p1': self.p1.to_dict(),
            'p2': self.p2.to_dict(),
            'p3': self.p3.to_dict()
        }
