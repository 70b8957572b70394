"""
SPRINGCURVE - SCENE API ROUTES
==============================

Frame snapshots and scene-level commands (resize, mode, sliders).
"""
from __future__ import annotations

from fastapi import APIRouter, Depends, Request

from springcurve.app.models import (
    FrameResponse,
    ResizeRequest,
    ModeRequest,
    SliderRequest,
    SliderResponse,
    SceneStateResponse
)
from springcurve.services.scene import CurveScene


router = APIRouter(prefix="/scene", tags=["scene"])


# ============================================================================
# DEPENDENCIES
# ============================================================================

def get_scene(request: Request) -> CurveScene:
    """Dependency: the application's scene."""
    return request.app.state.scene


def scene_state(scene: CurveScene) -> SceneStateResponse:
    """Summarize scene settings for responses."""
    slider = scene.line_length_slider()

    return SceneStateResponse(
        mode=scene.model.mode,
        width=scene.layout.width,
        height=scene.layout.height,
        compact=scene.layout.compact,
        line_length=scene.line_length,
        line_length_slider=SliderResponse(**slider.to_dict()),
        tangent_length=scene.tangent_length,
        loop=scene.loop.state.value if scene.loop is not None else "none"
    )


# ============================================================================
# FRAME ENDPOINTS
# ============================================================================

@router.get("/frame", response_model=FrameResponse)
async def get_frame(scene: CurveScene = Depends(get_scene)):
    """
    Current curve snapshot.

    Example:
        GET /scene/frame

    Returns:
        Polyline (steps + 1 points), tangent markers, the four points,
        cursor projection and cursor hint.
    """
    return FrameResponse.model_validate(scene.frame().to_dict())


@router.post("/redraw", response_model=FrameResponse)
async def redraw(scene: CurveScene = Depends(get_scene)):
    """Render synchronously (notifies render listeners) and return the frame."""
    return FrameResponse.model_validate(scene.redraw().to_dict())


# ============================================================================
# COMMAND ENDPOINTS
# ============================================================================

@router.get("/settings", response_model=SceneStateResponse)
async def get_settings(scene: CurveScene = Depends(get_scene)):
    return scene_state(scene)


@router.post("/resize", response_model=SceneStateResponse)
async def resize(request: ResizeRequest, scene: CurveScene = Depends(get_scene)):
    """
    Report a new window size. Anchors are recentred and control points
    reseeded.

    Example:
        POST /scene/resize
        {"width": 1280, "height": 720}
    """
    scene.resize(request.width, request.height)
    return scene_state(scene)


@router.post("/mode", response_model=SceneStateResponse)
async def set_mode(request: ModeRequest, scene: CurveScene = Depends(get_scene)):
    """
    Switch control mode.

    Example:
        POST /scene/mode
        {"mode": "manual"}
    """
    scene.set_mode(request.mode)
    return scene_state(scene)


@router.post("/line-length", response_model=SceneStateResponse)
async def set_line_length(request: SliderRequest, scene: CurveScene = Depends(get_scene)):
    """
    Apply the line-length slider.

    The value is a percentage of the canvas width on compact layouts and a
    pixel length otherwise; it is clamped to the slider range.
    """
    scene.set_line_length(request.value)
    return scene_state(scene)


@router.post("/tangent-length", response_model=SceneStateResponse)
async def set_tangent_length(request: SliderRequest, scene: CurveScene = Depends(get_scene)):
    scene.set_tangent_length(request.value)
    return scene_state(scene)
