"""
SPRINGCURVE - MAIN API SERVER
=============================

FastAPI application around a single CurveScene.

Features:
- Frame source ticking on the server's event loop (auto mode physics)
- Scene and input endpoints for any renderer
- CORS middleware for browser clients
- Health check
- Request logging

Usage:
    uvicorn springcurve.app.main:app --reload --port 8000
"""
from __future__ import annotations

import time
import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from springcurve import __version__
from springcurve.app.api import scene, inputs
from springcurve.app.models import HealthResponse, ErrorResponse
from springcurve.core.config import Settings, load_settings
from springcurve.core.logging_config import setup_logging
from springcurve.services.loop import FrameSource, AsyncioFrameSource
from springcurve.services.scene import CurveScene


logger = logging.getLogger(__name__)

VERSION = __version__


def create_app(settings: Optional[Settings] = None, frame_source: Optional[FrameSource] = None) -> FastAPI:
    """
    Build the application.

    Args:
        settings: Loaded settings (default: load_settings())
        frame_source: Tick provider (default: AsyncioFrameSource at the
                      configured fps)

    Returns:
        FastAPI app with app.state.scene set up during lifespan
    """
    settings = settings or load_settings()

    # ========================================================================
    # APPLICATION LIFECYCLE
    # ========================================================================

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """
        Startup:
        - Start the frame source
        - Build the scene (starts the auto-mode loop)

        Shutdown:
        - Stop the scene's loop
        - Stop the frame source
        """
        setup_logging(settings.logging.level, settings.logging.file)

        logger.info("=" * 60)
        logger.info(" SPRINGCURVE - STARTING")
        logger.info("=" * 60)

        source = frame_source or AsyncioFrameSource(fps=settings.loop.fps)
        await source.start()

        app.state.started_at = time.time()
        app.state.frame_source = source
        app.state.scene = CurveScene(settings, source)

        layout = app.state.scene.layout
        logger.info(
            "[Startup] Scene ready: %s mode, canvas %.0fx%.0f",
            app.state.scene.model.mode.value, layout.width, layout.height
        )

        yield  # Application runs here

        logger.info(" SPRINGCURVE - SHUTTING DOWN")

        if app.state.scene.loop is not None:
            app.state.scene.loop.stop()
        await source.stop()

        logger.info("[Shutdown] Cleanup complete")

    # ========================================================================
    # APPLICATION SETUP
    # ========================================================================

    app = FastAPI(
        title="SpringCurve API",
        description="Spring-animated cubic Bezier curve engine",
        version=VERSION,
        docs_url="/docs",
        redoc_url="/redoc",
        lifespan=lifespan
    )
    app.state.settings = settings

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # ========================================================================
    # MIDDLEWARE (Request Logging)
    # ========================================================================

    @app.middleware("http")
    async def log_requests(request: Request, call_next):
        """
        Log all HTTP requests with timing.

        Format: [METHOD] /path - 200 (1.2ms)
        """
        start_time = time.time()

        response = await call_next(request)

        duration_ms = (time.time() - start_time) * 1000
        logger.debug(
            "[%s] %s - %d (%.1fms)",
            request.method, request.url.path, response.status_code, duration_ms
        )

        return response

    # ========================================================================
    # EXCEPTION HANDLERS
    # ========================================================================

    @app.exception_handler(404)
    async def not_found_handler(request: Request, exc):
        """Handle 404 Not Found."""
        return JSONResponse(
            status_code=404,
            content=ErrorResponse(
                error="not_found",
                message=f"Endpoint {request.url.path} not found"
            ).model_dump()
        )

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(request: Request, exc: RequestValidationError):
        """
        Handle 422 Unprocessable Entity.

        The offending input is left out: it may be NaN or Infinity, which
        cannot be encoded as JSON.
        """
        errors = [
            {"loc": list(error["loc"]), "msg": error["msg"], "type": error["type"]}
            for error in exc.errors()
        ]
        logger.debug("Rejected payload on %s: %s", request.url.path, errors)
        return JSONResponse(
            status_code=422,
            content=ErrorResponse(
                error="validation_error",
                message="Request payload failed validation",
                details={"errors": errors}
            ).model_dump()
        )

    @app.exception_handler(500)
    async def internal_error_handler(request: Request, exc):
        """Handle 500 Internal Server Error."""
        logger.exception("Unhandled error on %s", request.url.path)
        return JSONResponse(
            status_code=500,
            content=ErrorResponse(
                error="internal_error",
                message="An unexpected error occurred",
                details={"exception": str(exc)}
            ).model_dump()
        )

    # ========================================================================
    # ROUTERS
    # ========================================================================

    app.include_router(scene.router)
    app.include_router(inputs.router)

    @app.get("/", tags=["system"])
    async def api_root():
        """
        Root endpoint with API information.

        Returns:
            {
                "service": "SpringCurve API",
                "version": "1.0.0",
                "docs": "/docs"
            }
        """
        return {
            "service": "SpringCurve API",
            "version": VERSION,
            "status": "operational",
            "docs": "/docs",
            "endpoints": {
                "frame": "/scene/frame",
                "settings": "/scene/settings",
                "pointer": "/input/pointer",
                "tilt": "/input/tilt",
                "health": "/health"
            }
        }

    @app.get("/health", response_model=HealthResponse, tags=["system"])
    async def health_check(request: Request):
        """
        Health check.

        The scene is degraded when it is in auto mode without a running loop
        (the curve would not animate).
        """
        curve_scene: CurveScene = request.app.state.scene
        loop = curve_scene.loop

        loop_state = loop.state.value if loop is not None else "none"
        degraded = curve_scene.model.mode.value == "auto" and (loop is None or not loop.running)

        return HealthResponse(
            status="degraded" if degraded else "healthy",
            scene={
                "mode": curve_scene.model.mode.value,
                "loop": loop_state,
                "renders": curve_scene.renders,
                "tilt_active": curve_scene.router.tilt_active,
                "settled": curve_scene.model.is_settled()
            },
            version=VERSION,
            uptime_seconds=time.time() - request.app.state.started_at
        )

    return app


app = create_app()


# ============================================================================
# MAIN (for direct execution)
# ============================================================================

if __name__ == "__main__":
    import uvicorn

    settings = app.state.settings

    uvicorn.run(
        "springcurve.app.main:app",
        host=settings.server.host,
        port=settings.server.port,
        reload=True,  # Dev mode
        log_level="info"
    )
