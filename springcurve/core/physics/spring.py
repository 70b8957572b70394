"""
SPRINGCURVE - DAMPED SPRING INTEGRATOR
======================================

Spring-mass follower used to animate the curve's control points.

Dynamics (unit mass):
    F = k (target - x) - c v
    v ← v + F dt
    x ← x + v dt            (semi-implicit / symplectic Euler)

- k: stiffness (> 0)
- c: damping (>= 0); c = 2√k is critical damping
- dt is clamped to [0, max_dt] before integrating. Long pauses (background
  tab, debugger break) would otherwise make the explicit step diverge.
"""
from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Optional

from .vector import Point2, ZERO, add, sub, scale, magnitude

# Stability ceiling for a single integration step (seconds)
MAX_DT = 0.1


def clamp_dt(dt: float, max_dt: float = MAX_DT) -> float:
    """Clamp a frame delta into [0, max_dt]."""
    if not dt > 0.0:
        return 0.0
    return min(dt, max_dt)


@dataclass(frozen=True)
class SpringConfig:
    """
    Spring tuning constants.

    Attributes:
        stiffness: Spring constant k (higher = snappier)
        damping: Velocity damping c (higher = less oscillation)
        max_dt: Largest step the integrator accepts
    """
    stiffness: float = 80.0
    damping: float = 10.0
    max_dt: float = MAX_DT

    def __post_init__(self):
        """Validate ranges."""
        if not self.stiffness > 0.0:
            raise ValueError(f"stiffness must be > 0, got {self.stiffness}")
        if not self.damping >= 0.0:
            raise ValueError(f"damping must be >= 0, got {self.damping}")
        if not self.max_dt > 0.0:
            raise ValueError(f"max_dt must be > 0, got {self.max_dt}")

    @classmethod
    def default(cls) -> "SpringConfig":
        """Tuned follow: slightly underdamped (k=80, c=10)."""
        return cls()

    @classmethod
    def critical(cls, stiffness: float, max_dt: float = MAX_DT) -> "SpringConfig":
        """Critically damped spring for the given stiffness."""
        return cls(stiffness=stiffness, damping=2.0 * math.sqrt(stiffness), max_dt=max_dt)

    @property
    def damping_ratio(self) -> float:
        """ζ = c / 2√k  (< 1 underdamped, 1 critical, > 1 overdamped)."""
        return self.damping / (2.0 * math.sqrt(self.stiffness))


class SpringPoint:
    """
    Control point chasing a target through a damped spring.

    Usage:
        spring = SpringPoint(Point2(100, 200))
        spring.set_target(Point2(300, 100))

        for _ in range(60):
            spring.update(1 / 60)

    The target may be changed at any time between updates; the most recent
    target wins.
    """

    def __init__(self, position: Point2, config: Optional[SpringConfig] = None):
        """
        Initialize at rest.

        Args:
            position: Seed position (also the initial target)
            config: Tuning constants (default: stiffness 80, damping 10)
        """
        self.config = config or SpringConfig()
        self.position = position
        self.velocity = ZERO
        self.target = position

    @property
    def stiffness(self) -> float:
        return self.config.stiffness

    @property
    def damping(self) -> float:
        return self.config.damping

    def set_target(self, target: Point2) -> None:
        self.target = target

    def teleport(self, position: Point2) -> None:
        """Jump to position and come to rest there."""
        self.position = position
        self.target = position
        self.velocity = ZERO

    def update(self, dt: float) -> Point2:
        """
        Advance the simulation by dt seconds.

        Args:
            dt: Frame delta; clamped to [0, max_dt]

        Returns:
            Position after the step
        """
        dt = clamp_dt(dt, self.config.max_dt)
        if dt == 0.0:
            return self.position

        force = sub(
            scale(sub(self.target, self.position), self.config.stiffness),
            scale(self.velocity, self.config.damping)
        )

        self.velocity = add(self.velocity, scale(force, dt))
        self.position = add(self.position, scale(self.velocity, dt))

        return self.position

    def is_settled(self, epsilon: float = 0.01) -> bool:
        """True when both the offset to target and the speed are below epsilon."""
        return (
            magnitude(sub(self.target, self.position)) < epsilon
            and magnitude(self.velocity) < epsilon
        )

    def __repr__(self) -> str:
        return (
            f"SpringPoint(position={self.position}, velocity={self.velocity}, "
            f"target={self.target})"
        )
