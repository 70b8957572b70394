"""
SPRINGCURVE - CONTROL POINT MODEL
=================================

Mode-dependent owner of the curve's four points.

- Anchors P₀/P₃: fixed, set from the canvas layout (P₀.x < P₃.x)
- Control points P₁/P₂:
    AUTO   → SpringPoint chasing an externally supplied target
    MANUAL → ManualPoint moved only by drag commands

Switching mode reseeds both control points and resets the simulation clock.
"""
from __future__ import annotations

import logging
from enum import Enum
from dataclasses import dataclass
from typing import Optional, Union, Dict

from springcurve.core.physics import (
    Point2,
    CubicBezier,
    SpringPoint,
    SpringConfig,
    distance
)


logger = logging.getLogger(__name__)


class Mode(str, Enum):
    AUTO = "auto"
    MANUAL = "manual"


class ControlPointId(str, Enum):
    P1 = "p1"
    P2 = "p2"


@dataclass
class ManualPoint:
    """Free-standing control point (manual mode)."""
    position: Point2


ControlPoint = Union[SpringPoint, ManualPoint]


# ============================================================================
# SIMULATION CLOCK
# ============================================================================

class SimulationClock:
    """
    Frame timestamp tracker.

    The first tick after a reset yields dt = 0 instead of a spurious jump
    from whatever timestamp the host happens to start at.
    """

    def __init__(self):
        self.last_timestamp: Optional[float] = None

    def reset(self) -> None:
        self.last_timestamp = None

    def tick(self, timestamp: float) -> float:
        """
        Record a frame timestamp.

        Args:
            timestamp: Host clock reading (seconds)

        Returns:
            Seconds since the previous tick (0.0 on the first tick)
        """
        if self.last_timestamp is None:
            self.last_timestamp = timestamp
            return 0.0

        dt = timestamp - self.last_timestamp
        self.last_timestamp = timestamp
        return dt


# ============================================================================
# MODEL
# ============================================================================

class ControlPointModel:
    """
    Holds the anchors, the two control points and the active Mode.

    Usage:
        model = ControlPointModel(Point2(100, 300), Point2(500, 300))
        model.set_mode(Mode.AUTO)
        model.set_target(ControlPointId.P1, Point2(300, 100))
        model.step(1 / 60)

        curve = model.curve
    """

    def __init__(
        self,
        p0: Point2,
        p3: Point2,
        mode: Mode = Mode.AUTO,
        spring_config: Optional[SpringConfig] = None,
        auto_seed_height: float = 100.0,
        manual_offset: float = 50.0
    ):
        """
        Initialize model and seed control points for the given mode.

        Args:
            p0: Left anchor
            p3: Right anchor (p3.x must exceed p0.x)
            mode: Initial mode
            spring_config: Tuning for auto-mode springs
            auto_seed_height: Auto seeds sit this far above their anchor
            manual_offset: Manual seeds offset diagonally from their anchor
        """
        self.spring_config = spring_config or SpringConfig()
        self.auto_seed_height = auto_seed_height
        self.manual_offset = manual_offset
        self.clock = SimulationClock()

        self.p0 = p0
        self.p3 = p3
        self.set_endpoints(p0, p3)

        self.mode = Mode(mode)
        self._points: Dict[ControlPointId, ControlPoint] = {}
        self.set_mode(mode)

    # ------------------------------------------------------------------
    # Geometry
    # ------------------------------------------------------------------

    def set_endpoints(self, p0: Point2, p3: Point2) -> None:
        """
        Replace the anchors. Control points are left alone; call reseed()
        to move them relative to the new anchors.

        Raises:
            ValueError: If p0.x >= p3.x
        """
        if not p0.x < p3.x:
            raise ValueError(f"p0.x must be < p3.x, got {p0.x} and {p3.x}")

        self.p0 = p0
        self.p3 = p3

    def set_mode(self, mode: Mode) -> None:
        """
        Enter a mode: reseed both control points and reset the clock.

        AUTO seeds:   P₁ = (P₀.x, P₀.y - h), P₂ = (P₃.x, P₃.y - h), at rest
        MANUAL seeds: P₁ = (P₀.x + d, P₀.y - d), P₂ = (P₃.x - d, P₃.y + d)
        """
        mode = Mode(mode)

        if mode == Mode.AUTO:
            h = self.auto_seed_height
            self._points = {
                ControlPointId.P1: SpringPoint(Point2(self.p0.x, self.p0.y - h), self.spring_config),
                ControlPointId.P2: SpringPoint(Point2(self.p3.x, self.p3.y - h), self.spring_config),
            }
        else:
            d = self.manual_offset
            self._points = {
                ControlPointId.P1: ManualPoint(Point2(self.p0.x + d, self.p0.y - d)),
                ControlPointId.P2: ManualPoint(Point2(self.p3.x - d, self.p3.y + d)),
            }

        if mode != self.mode:
            logger.info("Control mode %s -> %s", self.mode.value, mode.value)

        self.mode = mode
        self.clock.reset()

    def reseed(self) -> None:
        """Re-enter the current mode (after resize or line-length change)."""
        self.set_mode(self.mode)

    # ------------------------------------------------------------------
    # Access
    # ------------------------------------------------------------------

    def point(self, which: ControlPointId) -> ControlPoint:
        return self._points[ControlPointId(which)]

    def position(self, which: ControlPointId) -> Point2:
        """Current position, whichever variant backs the point."""
        return self.point(which).position

    def spring(self, which: ControlPointId) -> Optional[SpringPoint]:
        point = self.point(which)
        return point if isinstance(point, SpringPoint) else None

    @property
    def p1(self) -> Point2:
        return self.position(ControlPointId.P1)

    @property
    def p2(self) -> Point2:
        return self.position(ControlPointId.P2)

    @property
    def curve(self) -> CubicBezier:
        return CubicBezier(self.p0, self.p1, self.p2, self.p3)

    # ------------------------------------------------------------------
    # Commands
    # ------------------------------------------------------------------

    def set_target(self, which: ControlPointId, target: Point2) -> bool:
        """
        Point a spring at a new target (AUTO only).

        Returns:
            False (and no change) in MANUAL mode
        """
        spring = self.spring(which)
        if self.mode != Mode.AUTO or spring is None:
            logger.debug("Rejected set_target(%s) in %s mode", ControlPointId(which).value, self.mode.value)
            return False

        spring.set_target(target)
        return True

    def drag_to(self, which: ControlPointId, position: Point2) -> bool:
        """
        Move a control point directly, bypassing physics (MANUAL only).

        Returns:
            False (and no change) in AUTO mode
        """
        point = self.point(which)
        if self.mode != Mode.MANUAL or not isinstance(point, ManualPoint):
            logger.debug("Rejected drag_to(%s) in %s mode", ControlPointId(which).value, self.mode.value)
            return False

        point.position = position
        return True

    def hit_test(self, point: Point2, radius: float) -> Optional[ControlPointId]:
        """
        Find the control point under a pointer.

        Args:
            point: Pointer position
            radius: Hit tolerance (strict: distance < radius)

        Returns:
            Nearest control point within radius (P₁ on a tie), or None
        """
        best: Optional[ControlPointId] = None
        best_distance = radius

        for which in (ControlPointId.P1, ControlPointId.P2):
            d = distance(point, self.position(which))
            if d < best_distance:
                best = which
                best_distance = d

        return best

    def step(self, dt: float) -> bool:
        """
        Advance both springs by dt (AUTO only).

        Returns:
            True if physics ran
        """
        if self.mode != Mode.AUTO:
            return False

        for which in (ControlPointId.P1, ControlPointId.P2):
            self.spring(which).update(dt)

        return True

    def is_settled(self, epsilon: float = 0.01) -> bool:
        """True in MANUAL, or when both springs rest at their targets."""
        if self.mode != Mode.AUTO:
            return True
        return all(
            self.spring(which).is_settled(epsilon)
            for which in (ControlPointId.P1, ControlPointId.P2)
        )
