"""
SPRINGCURVE - INPUT ROUTER
==========================

Turns raw pointer, tilt and drag input into ControlPointModel calls.

- Pointer move (AUTO):  P₁ target = pointer, P₂ target = mirrored pointer
- Tilt (AUTO):          P₁ target from tilt angles, P₂ mirrored through the
                        canvas centre
- Drag (MANUAL):        hit-test on press, drag_to on move, clear on release

Only one of {pointer, tilt} drives the targets: once tilt is active,
pointer moves are ignored.

Nothing here raises on bad input. Rejected events (wrong mode, missing or
non-finite values) return False.
"""
from __future__ import annotations

import math
import logging
from enum import Enum
from dataclasses import dataclass
from typing import Callable, Optional, Tuple, Dict

from springcurve.core.config import InputSettings
from springcurve.core.physics import Point2
from springcurve.services.control_points import ControlPointModel, ControlPointId, Mode


logger = logging.getLogger(__name__)


class PointerDevice(str, Enum):
    MOUSE = "mouse"
    TOUCH = "touch"


class PermissionStatus(str, Enum):
    """Outcome of the host's sensor-permission request."""
    UNREQUESTED = "unrequested"
    GRANTED = "granted"
    DENIED = "denied"
    UNSUPPORTED = "unsupported"
    ERROR = "error"


class CursorHint(str, Enum):
    DEFAULT = "default"
    CROSSHAIR = "crosshair"
    GRAB = "grab"
    GRABBING = "grabbing"


@dataclass(frozen=True)
class SensorReadout:
    """Last accepted tilt angles (degrees, clamped)."""
    beta: float
    gamma: float

    def to_dict(self) -> Dict[str, float]:
        return {'beta': self.beta, 'gamma': self.gamma}


def _clamp(value: float, low: float, high: float) -> float:
    return max(low, min(high, value))


def _finite(*values: float) -> bool:
    return all(math.isfinite(v) for v in values)


class InputRouter:
    """
    Maps input events onto the model.

    Args:
        model: Shared control-point model
        settings: Hit radii and tilt mapping
        canvas_size: Returns the current (width, height)
        switch_mode: Performs a full mode switch (loop restart included)
        redraw: Renders synchronously (manual mode)
    """

    def __init__(
        self,
        model: ControlPointModel,
        settings: InputSettings,
        canvas_size: Callable[[], Tuple[float, float]],
        switch_mode: Callable[[Mode], None],
        redraw: Callable[[], None]
    ):
        self.model = model
        self.settings = settings
        self._canvas_size = canvas_size
        self._switch_mode = switch_mode
        self._redraw = redraw

        self.cursor = Point2(0.0, 0.0)
        self.dragging: Optional[ControlPointId] = None
        self.tilt_active = False
        self.permission = PermissionStatus.UNREQUESTED
        self.permission_message: Optional[str] = None
        self.sensor: SensorReadout = SensorReadout(0.0, 0.0)

    # ------------------------------------------------------------------
    # Pointer
    # ------------------------------------------------------------------

    def pointer_move(self, x: float, y: float) -> bool:
        """
        Handle a pointer move in canvas-local coordinates.

        Returns:
            False when ignored (tilt input is driving the curve)
        """
        if self.tilt_active:
            return False

        if not _finite(x, y):
            logger.debug("Dropped pointer event with non-finite coordinates")
            return False

        self.cursor = Point2(x, y)

        if self.model.mode == Mode.AUTO:
            _, height = self._canvas_size()
            self.model.set_target(ControlPointId.P1, Point2(x, y))
            self.model.set_target(
                ControlPointId.P2,
                Point2(x + self.settings.pointer_mirror_offset, height - y)
            )
            return True

        if self.dragging is not None:
            self.model.drag_to(self.dragging, Point2(x, y))
            self._redraw()

        return True

    @property
    def cursor_hint(self) -> CursorHint:
        """Pointer style for the renderer."""
        if self.model.mode == Mode.AUTO:
            return CursorHint.CROSSHAIR
        if self.dragging is not None:
            return CursorHint.GRABBING
        if self.model.hit_test(self.cursor, self.settings.mouse_hit_radius) is not None:
            return CursorHint.GRAB
        return CursorHint.DEFAULT

    # ------------------------------------------------------------------
    # Drag (manual mode)
    # ------------------------------------------------------------------

    def hit_radius(self, device: PointerDevice) -> float:
        if PointerDevice(device) == PointerDevice.TOUCH:
            return self.settings.touch_hit_radius
        return self.settings.mouse_hit_radius

    def drag_start(self, x: float, y: float, device: PointerDevice = PointerDevice.MOUSE) -> Optional[ControlPointId]:
        """
        Press: pick the control point under (x, y).

        Returns:
            The grabbed point, or None (nothing hit, or not in MANUAL)
        """
        if self.model.mode != Mode.MANUAL:
            return None

        if not _finite(x, y):
            logger.debug("Dropped drag start with non-finite coordinates")
            return None

        self.cursor = Point2(x, y)
        self.dragging = self.model.hit_test(self.cursor, self.hit_radius(device))

        if self.dragging is not None:
            logger.debug("Drag started on %s", self.dragging.value)

        return self.dragging

    def drag_move(self, x: float, y: float) -> bool:
        """
        Move the grabbed point and redraw.

        Returns:
            False when no drag is active
        """
        if self.model.mode != Mode.MANUAL or self.dragging is None:
            return False

        if not _finite(x, y):
            logger.debug("Dropped drag move with non-finite coordinates")
            return False

        self.cursor = Point2(x, y)
        self.model.drag_to(self.dragging, self.cursor)
        self._redraw()
        return True

    def drag_end(self) -> None:
        self.dragging = None

    def reset(self) -> None:
        """Forget any drag in progress (mode switch, resize)."""
        self.dragging = None

    # ------------------------------------------------------------------
    # Tilt
    # ------------------------------------------------------------------

    def resolve_tilt_permission(self, status: PermissionStatus, message: Optional[str] = None) -> PermissionStatus:
        """
        Apply the outcome of the host's sensor-permission request.

        GRANTED forces AUTO mode (manual control points are discarded) and
        hands target control to tilt. Anything else leaves the mode and the
        physics untouched.
        """
        status = PermissionStatus(status)
        self.permission = status
        self.permission_message = message

        if status != PermissionStatus.GRANTED:
            logger.warning("Sensor access not available: %s%s", status.value, f" ({message})" if message else "")
            return status

        if self.model.mode != Mode.AUTO:
            logger.info("Tilt enabled while in manual mode, switching to auto")
            self._switch_mode(Mode.AUTO)

        self.tilt_active = True
        logger.info("Tilt input enabled")
        return status

    def tilt(self, beta: Optional[float], gamma: Optional[float]) -> bool:
        """
        Handle a device-orientation reading.

        Args:
            beta: Front/back tilt in degrees (drives y)
            gamma: Left/right tilt in degrees (drives x)

        Returns:
            False when the reading is dropped
        """
        if not self.tilt_active:
            return False

        if beta is None or gamma is None:
            logger.debug("Dropped tilt event with missing angle")
            return False

        if not _finite(beta, gamma):
            logger.debug("Dropped tilt event with non-finite angle")
            return False

        s = self.settings
        beta = _clamp(beta, -s.tilt_limit, s.tilt_limit)
        gamma = _clamp(gamma, -s.tilt_limit, s.tilt_limit)
        self.sensor = SensorReadout(beta=beta, gamma=gamma)

        # Readout stays current even when the targets are not driven
        if self.model.mode != Mode.AUTO:
            return False

        tilt_x = _clamp(gamma / s.tilt_sensitivity, -1.0, 1.0)
        tilt_y = _clamp(beta / s.tilt_sensitivity, -1.0, 1.0)

        width, height = self._canvas_size()
        cx = width / 2
        cy = height / 2
        dx = tilt_x * width * s.tilt_scale_x
        dy = tilt_y * height * s.tilt_scale_y

        self.model.set_target(ControlPointId.P1, Point2(cx + dx, cy + dy))
        self.model.set_target(ControlPointId.P2, Point2(cx - dx, cy - dy))
        return True
