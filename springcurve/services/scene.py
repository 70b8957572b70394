"""
SPRINGCURVE - CURVE SCENE
=========================

Single owner of all mutable curve state.

Wires together:
- CanvasLayout: canvas size derived from the window size
- ControlPointModel: anchors + control points + mode
- SimulationLoop: auto-mode animation (one instance per run)
- InputRouter: pointer / tilt / drag handling

Every mode switch, resize or line-length change goes through
reset_and_start(): the old loop is stopped before anything else happens,
then the geometry is rebuilt and, in AUTO mode, a new loop is started.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable, List, Optional, Dict, Any, Tuple

from springcurve.core.config import Settings
from springcurve.core.physics import Point2, TangentMarker, CursorProjection
from springcurve.services.control_points import ControlPointModel, Mode
from springcurve.services.input_router import InputRouter, CursorHint, SensorReadout
from springcurve.services.loop import FrameSource, SimulationLoop


logger = logging.getLogger(__name__)


# ============================================================================
# LAYOUT
# ============================================================================

@dataclass(frozen=True)
class CanvasLayout:
    """
    Canvas size for a window size.

    Compact windows (width <= breakpoint) use the full width and a
    percentage line length; regular windows leave room for the sidebar and
    use a pixel line length.
    """
    width: float
    height: float
    compact: bool

    @classmethod
    def from_window(
        cls,
        window_width: float,
        window_height: float,
        compact_breakpoint: float = 768.0,
        sidebar_width: float = 350.0
    ) -> "CanvasLayout":
        compact = window_width <= compact_breakpoint
        width = window_width if compact else window_width - sidebar_width
        return cls(width=max(1.0, width), height=max(1.0, window_height), compact=compact)

    @property
    def center(self) -> Point2:
        return Point2(self.width / 2, self.height / 2)


@dataclass(frozen=True)
class SliderRange:
    """Line-length slider bounds and value, in slider units."""
    min: float
    max: float
    value: float
    unit: str

    def to_dict(self) -> Dict[str, Any]:
        return {'min': self.min, 'max': self.max, 'value': self.value, 'unit': self.unit}


# ============================================================================
# FRAME SNAPSHOT
# ============================================================================

@dataclass(frozen=True)
class CurveFrame:
    """
    Render-ready snapshot of the scene.

    Attributes:
        index: Render counter (increments on every render)
        mode: Active control mode
        width, height: Canvas size
        points: P₀..P₃ positions
        polyline: steps + 1 curve samples
        tangents: Tangent markers
        cursor: Projection of the pointer onto the curve
        cursor_hint: Suggested pointer style
        sensor: Tilt readout (only while tilt input is active)
    """
    index: int
    mode: Mode
    width: float
    height: float
    points: Dict[str, Point2]
    polyline: List[Point2]
    tangents: List[TangentMarker]
    cursor: CursorProjection
    cursor_hint: CursorHint
    sensor: Optional[SensorReadout] = None

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for serialization."""
        return {
            'index': self.index,
            'mode': self.mode.value,
            'width': self.width,
            'height': self.height,
            'points': {name: p.to_dict() for name, p in self.points.items()},
            'polyline': [p.to_dict() for p in self.polyline],
            'tangents': [m.to_dict() for m in self.tangents],
            'cursor': self.cursor.to_dict(),
            'cursor_hint': self.cursor_hint.value,
            'sensor': self.sensor.to_dict() if self.sensor else None
        }


RenderListener = Callable[[CurveFrame], None]


# ============================================================================
# SCENE
# ============================================================================

class CurveScene:
    """
    Owner of the model, the loop and the router.

    Usage:
        source = ManualFrameSource()
        scene = CurveScene(settings, source)
        scene.resize(1280, 720)

        scene.router.pointer_move(400, 200)
        source.emit(0.0)
        source.emit(1 / 60)

        frame = scene.frame()
    """

    def __init__(self, settings: Settings, frame_source: FrameSource, mode: Mode = Mode.AUTO):
        self.settings = settings
        self.frame_source = frame_source

        self.steps = settings.curve.steps
        self.tangent_interval = settings.curve.tangent_interval
        self.tangent_length = settings.curve.tangent_length
        self.line_length_px = settings.curve.line_length
        self.line_length_percent = settings.curve.line_length_percent

        self.layout = self._layout_for(settings.layout.window_width, settings.layout.window_height)
        p0, p3 = self._endpoints()

        self.model = ControlPointModel(
            p0,
            p3,
            mode=Mode(mode),
            spring_config=settings.physics.spring_config(),
            auto_seed_height=settings.physics.auto_seed_height,
            manual_offset=settings.physics.manual_offset
        )
        self.router = InputRouter(
            self.model,
            settings.input,
            canvas_size=lambda: (self.layout.width, self.layout.height),
            switch_mode=self.set_mode,
            redraw=self.redraw
        )

        self.loop: Optional[SimulationLoop] = None
        self.renders = 0
        self.last_frame: Optional[CurveFrame] = None
        self._listeners: List[RenderListener] = []

        self.reset_and_start()

    # ------------------------------------------------------------------
    # Geometry
    # ------------------------------------------------------------------

    def _layout_for(self, window_width: float, window_height: float) -> CanvasLayout:
        return CanvasLayout.from_window(
            window_width,
            window_height,
            compact_breakpoint=self.settings.layout.compact_breakpoint,
            sidebar_width=self.settings.layout.sidebar_width
        )

    @property
    def line_length(self) -> float:
        """Effective anchor separation in pixels."""
        if self.layout.compact:
            return self.layout.width * self.line_length_percent
        return self.line_length_px

    def _endpoints(self) -> Tuple[Point2, Point2]:
        center = self.layout.center
        half = self.line_length / 2
        return Point2(center.x - half, center.y), Point2(center.x + half, center.y)

    def line_length_slider(self) -> SliderRange:
        curve = self.settings.curve
        if self.layout.compact:
            return SliderRange(curve.percent_min, curve.percent_max, self.line_length_percent * 100, "percent")
        return SliderRange(curve.line_length_min, curve.line_length_max, self.line_length_px, "px")

    # ------------------------------------------------------------------
    # Commands from collaborators
    # ------------------------------------------------------------------

    def resize(self, window_width: float, window_height: float) -> None:
        self.layout = self._layout_for(window_width, window_height)
        logger.debug("Resized canvas to %.0fx%.0f (compact=%s)", self.layout.width, self.layout.height, self.layout.compact)
        self.reset_and_start()

    def set_mode(self, mode: Mode) -> None:
        self.reset_and_start(Mode(mode))

    def set_line_length(self, value: float) -> float:
        """
        Apply a slider value: percent on compact layouts, pixels otherwise.

        The value is clamped to the slider range.

        Returns:
            Effective line length in pixels
        """
        slider = self.line_length_slider()
        value = max(slider.min, min(slider.max, value))

        if self.layout.compact:
            self.line_length_percent = value / 100
        else:
            self.line_length_px = value

        self.reset_and_start()
        return self.line_length

    def set_tangent_length(self, length: float) -> None:
        self.tangent_length = max(0.0, length)
        if self.model.mode == Mode.MANUAL:
            self.redraw()

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    def reset_and_start(self, mode: Optional[Mode] = None) -> None:
        """
        Stop the running loop, rebuild geometry, then start anew.

        Args:
            mode: Mode to enter (default: stay in the current mode)
        """
        if self.loop is not None:
            self.loop.stop()
            self.loop = None

        if mode is None:
            mode = self.model.mode

        p0, p3 = self._endpoints()
        self.model.set_endpoints(p0, p3)
        self.model.set_mode(mode)
        self.router.reset()

        if mode == Mode.AUTO:
            self.loop = SimulationLoop(
                self.model,
                self.frame_source,
                on_render=self.redraw,
                max_dt=self.settings.physics.max_dt
            )
            self.loop.start()
        else:
            self.redraw()

    # ------------------------------------------------------------------
    # Rendering
    # ------------------------------------------------------------------

    def add_render_listener(self, listener: RenderListener) -> None:
        self._listeners.append(listener)

    def remove_render_listener(self, listener: RenderListener) -> None:
        if listener in self._listeners:
            self._listeners.remove(listener)

    def frame(self, index: Optional[int] = None) -> CurveFrame:
        """Build a snapshot of the current state without rendering."""
        curve = self.model.curve
        router = self.router

        return CurveFrame(
            index=self.renders if index is None else index,
            mode=self.model.mode,
            width=self.layout.width,
            height=self.layout.height,
            points={'p0': curve.p0, 'p1': curve.p1, 'p2': curve.p2, 'p3': curve.p3},
            polyline=curve.sample(self.steps),
            tangents=curve.tangent_markers(self.steps, self.tangent_interval, self.tangent_length),
            cursor=curve.project_cursor(router.cursor.x),
            cursor_hint=router.cursor_hint,
            sensor=router.sensor if router.tilt_active else None
        )

    def redraw(self) -> CurveFrame:
        """
        Render now: build a frame and hand it to every listener.

        A listener that raises is logged; the others still get the frame.
        """
        self.renders += 1
        frame = self.frame(self.renders)
        self.last_frame = frame

        for listener in list(self._listeners):
            try:
                listener(frame)
            except Exception:
                logger.exception("Render listener %r failed", listener)

        return frame
