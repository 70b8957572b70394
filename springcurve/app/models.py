"""
SPRINGCURVE - API MODELS
========================

Pydantic models for request/response validation.

Requests are mutable and reject NaN/Infinity; responses are frozen.
"""
from __future__ import annotations

from typing import Optional, List, Dict, Any
from pydantic import BaseModel, Field, ConfigDict

from springcurve.services.control_points import Mode, ControlPointId
from springcurve.services.input_router import PointerDevice, PermissionStatus, CursorHint


# ============================================================================
# GEOMETRY
# ============================================================================

class PointModel(BaseModel):
    x: float
    y: float

    model_config = ConfigDict(frozen=True)


class TangentMarkerModel(BaseModel):
    t: float
    origin: PointModel
    start: PointModel
    end: PointModel
    degenerate: bool = False

    model_config = ConfigDict(frozen=True)


class CursorModel(BaseModel):
    t: float = Field(..., ge=0, le=1)
    point: PointModel
    tangent: PointModel
    angle_degrees: float

    model_config = ConfigDict(frozen=True)


# ============================================================================
# SCENE MODELS
# ============================================================================

class FrameResponse(BaseModel):
    """
    Render-ready curve snapshot.

    Example:
        {
            "index": 42,
            "mode": "auto",
            "width": 930, "height": 720,
            "points": {"p0": {"x": 365, "y": 360}, ...},
            "polyline": [{"x": 365, "y": 360}, ...],     # steps + 1 points
            "tangents": [{"t": 0.01, "origin": {...}, "start": {...}, "end": {...}}],
            "cursor": {"t": 0.5, "point": {...}, "tangent": {...}, "angle_degrees": 12.3},
            "cursor_hint": "crosshair",
            "sensor": null
        }
    """
    index: int
    mode: Mode
    width: float
    height: float
    points: Dict[str, PointModel]
    polyline: List[PointModel]
    tangents: List[TangentMarkerModel]
    cursor: CursorModel
    cursor_hint: CursorHint
    sensor: Optional[Dict[str, float]] = None

    model_config = ConfigDict(frozen=True)


class ResizeRequest(BaseModel):
    """
    Window size reported by the renderer.

    Example:
        {"width": 1280, "height": 720}
    """
    width: float = Field(..., gt=0, le=100000, description="Window width (px)")
    height: float = Field(..., gt=0, le=100000, description="Window height (px)")

    model_config = ConfigDict(allow_inf_nan=False)


class ModeRequest(BaseModel):
    mode: Mode = Field(..., description="auto or manual")


class SliderRequest(BaseModel):
    value: float = Field(..., ge=0, description="Slider value")

    model_config = ConfigDict(allow_inf_nan=False)


class SliderResponse(BaseModel):
    min: float
    max: float
    value: float
    unit: str

    model_config = ConfigDict(frozen=True)


class SceneStateResponse(BaseModel):
    """
    Scene settings after a command.

    Example:
        {
            "mode": "manual",
            "width": 930, "height": 720, "compact": false,
            "line_length": 200.0,
            "line_length_slider": {"min": 100, "max": 1000, "value": 200, "unit": "px"},
            "tangent_length": 100.0,
            "loop": "idle"
        }
    """
    mode: Mode
    width: float
    height: float
    compact: bool
    line_length: float
    line_length_slider: SliderResponse
    tangent_length: float
    loop: str = Field(..., description="running, stopped, or none (manual)")

    model_config = ConfigDict(frozen=True)


# ============================================================================
# INPUT MODELS
# ============================================================================

class PointerRequest(BaseModel):
    """Pointer position in canvas-local coordinates."""
    x: float
    y: float

    model_config = ConfigDict(allow_inf_nan=False)


class DragStartRequest(BaseModel):
    x: float
    y: float
    device: PointerDevice = Field(PointerDevice.MOUSE, description="mouse or touch")

    model_config = ConfigDict(allow_inf_nan=False)


class TiltRequest(BaseModel):
    """
    Device orientation reading.

    Null angles are accepted and dropped (sensors report null before the
    first real reading).
    """
    beta: Optional[float] = Field(None, description="Front/back tilt (deg)")
    gamma: Optional[float] = Field(None, description="Left/right tilt (deg)")

    model_config = ConfigDict(allow_inf_nan=False)


class PermissionRequest(BaseModel):
    status: PermissionStatus
    message: Optional[str] = Field(None, max_length=500)


class InputResponse(BaseModel):
    """
    Outcome of an input event.

    Rejected input is not an error: accepted is false and nothing changed.
    """
    accepted: bool
    mode: Mode
    dragging: Optional[ControlPointId] = None
    cursor_hint: CursorHint

    model_config = ConfigDict(frozen=True)


class PermissionResponse(BaseModel):
    status: PermissionStatus
    tilt_active: bool
    mode: Mode
    message: Optional[str] = None

    model_config = ConfigDict(frozen=True)


# ============================================================================
# SYSTEM MODELS
# ============================================================================

class HealthResponse(BaseModel):
    """
    System health check.

    Example:
        {
            "status": "healthy",
            "scene": {"mode": "auto", "loop": "running", "renders": 1200},
            "version": "1.0.0",
            "uptime_seconds": 20.5
        }
    """
    status: str = Field(..., description="healthy or degraded")
    scene: Dict[str, Any]
    version: str
    uptime_seconds: float = 0.0

    model_config = ConfigDict(frozen=True)


class ErrorResponse(BaseModel):
    """
    Standard error response.

    Example:
        {
            "error": "not_found",
            "message": "Endpoint /nope not found",
            "details": {...}
        }
    """
    error: str = Field(..., description="Error code")
    message: str = Field(..., description="Human-readable message")
    details: Optional[Dict[str, Any]] = Field(None, description="Additional context")

    model_config = ConfigDict(frozen=True)
