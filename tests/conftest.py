import sys
from pathlib import Path

import pytest

sys.path.insert(0, str(Path(__file__).parent.parent))

from springcurve.core.config import Settings, LayoutSettings
from springcurve.services import CurveScene, ManualFrameSource, Mode


@pytest.fixture
def settings():
    # Regular (non-compact) window: canvas 930x720, anchors at (365, 360) / (565, 360)
    return Settings(layout=LayoutSettings(window_width=1280, window_height=720))


@pytest.fixture
def source():
    return ManualFrameSource()


@pytest.fixture
def auto_scene(settings, source):
    return CurveScene(settings, source, mode=Mode.AUTO)


@pytest.fixture
def manual_scene(settings, source):
    return CurveScene(settings, source, mode=Mode.MANUAL)
