"""
SPRINGCURVE - INPUT API ROUTES
==============================

Pointer, drag, tilt and sensor-permission events from the renderer.

Every endpoint answers 200 with {"accepted": bool, ...}; a rejected event
(wrong mode, nothing under the pointer, missing tilt angle) is a status,
not an error.
"""
from __future__ import annotations

from fastapi import APIRouter, Depends, Request

from springcurve.app.models import (
    PointerRequest,
    DragStartRequest,
    TiltRequest,
    PermissionRequest,
    InputResponse,
    PermissionResponse
)
from springcurve.services.scene import CurveScene


router = APIRouter(prefix="/input", tags=["input"])


# ============================================================================
# DEPENDENCIES
# ============================================================================

def get_scene(request: Request) -> CurveScene:
    """Dependency: the application's scene."""
    return request.app.state.scene


def input_response(scene: CurveScene, accepted: bool) -> InputResponse:
    return InputResponse(
        accepted=accepted,
        mode=scene.model.mode,
        dragging=scene.router.dragging,
        cursor_hint=scene.router.cursor_hint
    )


# ============================================================================
# POINTER / DRAG
# ============================================================================

@router.post("/pointer", response_model=InputResponse)
async def pointer_move(request: PointerRequest, scene: CurveScene = Depends(get_scene)):
    """
    Pointer moved (canvas-local coordinates).

    AUTO: retargets both springs. MANUAL: moves the dragged point, if any.
    Ignored while tilt input is active.
    """
    accepted = scene.router.pointer_move(request.x, request.y)
    return input_response(scene, accepted)


@router.post("/drag/start", response_model=InputResponse)
async def drag_start(request: DragStartRequest, scene: CurveScene = Depends(get_scene)):
    """
    Press on the canvas (manual mode).

    Example:
        POST /input/drag/start
        {"x": 410, "y": 310, "device": "touch"}

    Returns:
        accepted=true and dragging="p1"|"p2" when a control point was hit
    """
    grabbed = scene.router.drag_start(request.x, request.y, request.device)
    return input_response(scene, grabbed is not None)


@router.post("/drag/move", response_model=InputResponse)
async def drag_move(request: PointerRequest, scene: CurveScene = Depends(get_scene)):
    accepted = scene.router.drag_move(request.x, request.y)
    return input_response(scene, accepted)


@router.post("/drag/end", response_model=InputResponse)
async def drag_end(scene: CurveScene = Depends(get_scene)):
    scene.router.drag_end()
    return input_response(scene, True)


# ============================================================================
# TILT
# ============================================================================

@router.post("/sensors", response_model=PermissionResponse)
async def resolve_sensor_permission(request: PermissionRequest, scene: CurveScene = Depends(get_scene)):
    """
    Report the outcome of the host's sensor-permission prompt.

    Example:
        POST /input/sensors
        {"status": "granted"}

    granted switches to auto mode (if needed) and enables tilt input;
    any other status is recorded without touching the curve.
    """
    status = scene.router.resolve_tilt_permission(request.status, request.message)

    return PermissionResponse(
        status=status,
        tilt_active=scene.router.tilt_active,
        mode=scene.model.mode,
        message=request.message
    )


@router.post("/tilt", response_model=InputResponse)
async def tilt(request: TiltRequest, scene: CurveScene = Depends(get_scene)):
    """
    Device orientation reading (degrees).

    Example:
        POST /input/tilt
        {"beta": 20.0, "gamma": -10.0}
    """
    accepted = scene.router.tilt(request.beta, request.gamma)
    return input_response(scene, accepted)
