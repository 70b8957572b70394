"""
Services package for SpringCurve.

Exports:
- ControlPointModel: Mode-dependent control points
- SimulationLoop: Auto-mode animation over a FrameSource
- InputRouter: Pointer / tilt / drag handling
- CurveScene: Owner of all of the above
"""
from .control_points import (
    ControlPointModel,
    ControlPointId,
    ManualPoint,
    Mode,
    SimulationClock
)
from .loop import (
    FrameSource,
    ManualFrameSource,
    AsyncioFrameSource,
    SimulationLoop,
    LoopState
)
from .input_router import (
    InputRouter,
    PointerDevice,
    PermissionStatus,
    CursorHint,
    SensorReadout
)
from .scene import (
    CurveScene,
    CurveFrame,
    CanvasLayout,
    SliderRange
)

__all__ = [
    'ControlPointModel',
    'ControlPointId',
    'ManualPoint',
    'Mode',
    'SimulationClock',
    'FrameSource',
    'ManualFrameSource',
    'AsyncioFrameSource',
    'SimulationLoop',
    'LoopState',
    'InputRouter',
    'PointerDevice',
    'PermissionStatus',
    'CursorHint',
    'SensorReadout',
    'CurveScene',
    'CurveFrame',
    'CanvasLayout',
    'SliderRange'
]
