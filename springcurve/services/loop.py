"""
SPRINGCURVE - SIMULATION LOOP
=============================

Frame-driven physics cadence for auto mode.

A FrameSource delivers timestamps; a SimulationLoop subscribes to it while
running and, on each frame:
1. Stops if the model left AUTO mode
2. Computes dt from the model's SimulationClock (0 on the first frame)
3. Clamps dt to the stability ceiling
4. Advances both springs
5. Triggers a render

Loop lifecycle: IDLE → RUNNING → STOPPED. STOPPED is final for an
instance; a mode or geometry change builds a fresh loop.
"""
from __future__ import annotations

import asyncio
import logging
from enum import Enum
from typing import Callable, List, Optional

from springcurve.core.physics import MAX_DT, clamp_dt
from springcurve.services.control_points import ControlPointModel, Mode


logger = logging.getLogger(__name__)

FrameCallback = Callable[[float], None]


# ============================================================================
# FRAME SOURCES
# ============================================================================

class FrameSource:
    """
    Host tick provider.

    Subscribers receive a monotonic timestamp in seconds once per frame.
    start()/stop() bracket the source's own lifetime (no-ops by default).
    """

    def __init__(self):
        self._subscribers: List[FrameCallback] = []

    @property
    def subscriber_count(self) -> int:
        return len(self._subscribers)

    def subscribe(self, callback: FrameCallback) -> None:
        if callback not in self._subscribers:
            self._subscribers.append(callback)

    def unsubscribe(self, callback: FrameCallback) -> None:
        if callback in self._subscribers:
            self._subscribers.remove(callback)

    def _dispatch(self, timestamp: float) -> None:
        """Deliver a frame. A failing subscriber is logged and skipped."""
        # Copy: callbacks may unsubscribe themselves mid-dispatch
        for callback in list(self._subscribers):
            try:
                callback(timestamp)
            except Exception:
                logger.exception("Frame subscriber %r failed", callback)

    async def start(self) -> None:
        pass

    async def stop(self) -> None:
        pass


class ManualFrameSource(FrameSource):
    """
    Frame source driven by explicit emit() calls.

    Usage:
        source = ManualFrameSource()
        source.emit(0.0)
        source.emit(1 / 60)
    """

    def emit(self, timestamp: float) -> None:
        self._dispatch(timestamp)


class AsyncioFrameSource(FrameSource):
    """
    Fixed-rate frame source on the running asyncio event loop.

    Timestamps come from the event loop's monotonic clock. Frames are
    emitted only while at least one subscriber is attached.
    """

    def __init__(self, fps: float = 60.0):
        super().__init__()
        if not fps > 0:
            raise ValueError(f"fps must be > 0, got {fps}")
        self.fps = fps
        self._task: Optional[asyncio.Task] = None

    @property
    def running(self) -> bool:
        return self._task is not None and not self._task.done()

    async def start(self) -> None:
        if self.running:
            return
        self._task = asyncio.create_task(self._run())
        logger.info("Frame source started (%.0f fps)", self.fps)

    async def stop(self) -> None:
        if self._task is None:
            return

        self._task.cancel()
        try:
            await self._task
        except asyncio.CancelledError:
            pass
        self._task = None
        logger.info("Frame source stopped")

    async def _run(self) -> None:
        loop = asyncio.get_running_loop()
        interval = 1.0 / self.fps

        while True:
            await asyncio.sleep(interval)
            if self._subscribers:
                self._dispatch(loop.time())


# ============================================================================
# SIMULATION LOOP
# ============================================================================

class LoopState(str, Enum):
    IDLE = "idle"
    RUNNING = "running"
    STOPPED = "stopped"


class SimulationLoop:
    """
    One auto-mode animation run.

    Usage:
        loop = SimulationLoop(model, source, on_render=scene.redraw)
        loop.start()
        ...
        loop.stop()   # final; build a new loop to animate again
    """

    def __init__(
        self,
        model: ControlPointModel,
        source: FrameSource,
        on_render: Optional[Callable[[], None]] = None,
        max_dt: float = MAX_DT
    ):
        self.model = model
        self.source = source
        self.on_render = on_render
        self.max_dt = max_dt
        self.state = LoopState.IDLE
        self.frames = 0

    @property
    def running(self) -> bool:
        return self.state == LoopState.RUNNING

    def start(self) -> bool:
        """
        Subscribe to the frame source.

        Returns:
            False if this instance was already started or stopped
        """
        if self.state != LoopState.IDLE:
            logger.warning("Loop start ignored in state %s", self.state.value)
            return False

        self.model.clock.reset()
        self.state = LoopState.RUNNING
        self.source.subscribe(self._on_frame)
        logger.debug("Simulation loop started")
        return True

    def stop(self) -> None:
        """Unsubscribe and finish this instance. Safe to call repeatedly."""
        if self.state == LoopState.STOPPED:
            return

        self.source.unsubscribe(self._on_frame)
        self.state = LoopState.STOPPED
        logger.debug("Simulation loop stopped after %d frames", self.frames)

    def _on_frame(self, timestamp: float) -> None:
        if self.state != LoopState.RUNNING:
            return

        if self.model.mode != Mode.AUTO:
            logger.info("Model left auto mode, stopping loop")
            self.stop()
            return

        dt = clamp_dt(self.model.clock.tick(timestamp), self.max_dt)

        self.model.step(dt)
        self.frames += 1

        if self.on_render is not None:
            self.on_render()
