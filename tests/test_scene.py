import pytest

from springcurve.core.config import Settings, LayoutSettings
from springcurve.core.physics import Point2, distance
from springcurve.services import CurveScene, CanvasLayout, ControlPointId, Mode, LoopState, PermissionStatus


def emit_frames(source, count, dt=1 / 60, start=0.0):
    ts = start
    for _ in range(count):
        source.emit(ts)
        ts += dt
    return ts


class TestCanvasLayout:

    def test_regular_window_leaves_room_for_sidebar(self):
        layout = CanvasLayout.from_window(1280, 720)
        assert layout == CanvasLayout(width=930, height=720, compact=False)
        assert layout.center == Point2(465.0, 360.0)

    def test_breakpoint_is_inclusive(self):
        assert CanvasLayout.from_window(768, 500).compact
        assert not CanvasLayout.from_window(769, 500).compact

    def test_compact_uses_full_width(self):
        layout = CanvasLayout.from_window(400, 800)
        assert layout.width == 400
        assert layout.compact


class TestGeometry:

    def test_anchors_centred_on_canvas(self, manual_scene):
        curve = manual_scene.model.curve

        assert curve.p0 == Point2(365.0, 360.0)
        assert curve.p3 == Point2(565.0, 360.0)
        assert curve.p1 == Point2(415.0, 310.0)
        assert curve.p2 == Point2(515.0, 410.0)

    def test_compact_window_uses_percent_line_length(self, source):
        settings = Settings(layout=LayoutSettings(window_width=600, window_height=800))
        scene = CurveScene(settings, source, mode=Mode.MANUAL)

        assert scene.layout.compact
        assert scene.line_length == pytest.approx(360.0)
        assert scene.model.curve.p0.to_tuple() == pytest.approx((120.0, 400.0))
        assert scene.model.curve.p3.to_tuple() == pytest.approx((480.0, 400.0))

        slider = scene.line_length_slider()
        assert (slider.min, slider.max, slider.unit) == (10.0, 90.0, "percent")
        assert slider.value == pytest.approx(60.0)

    def test_pixel_slider_is_clamped(self, manual_scene):
        assert manual_scene.set_line_length(5000) == 1000.0
        assert manual_scene.set_line_length(20) == 100.0
        assert manual_scene.set_line_length(300) == 300.0

        curve = manual_scene.model.curve
        assert curve.p3.x - curve.p0.x == pytest.approx(300.0)

    def test_percent_slider_is_clamped(self, source):
        settings = Settings(layout=LayoutSettings(window_width=600, window_height=800))
        scene = CurveScene(settings, source, mode=Mode.MANUAL)

        assert scene.set_line_length(95) == pytest.approx(540.0)
        assert scene.line_length_percent == pytest.approx(0.9)

    def test_resize_switches_layout_and_reseeds(self, manual_scene):
        manual_scene.router.drag_start(415.0, 310.0)
        manual_scene.router.drag_move(0.0, 0.0)

        manual_scene.resize(700, 500)

        assert manual_scene.layout.compact
        assert manual_scene.router.dragging is None
        assert manual_scene.model.p1.to_tuple() == pytest.approx((190.0, 200.0))


class TestLifecycle:

    def test_auto_scene_runs_a_single_loop(self, auto_scene, source):
        assert auto_scene.loop.state == LoopState.RUNNING
        assert source.subscriber_count == 1

        for _ in range(5):
            auto_scene.set_mode(Mode.AUTO)

        assert source.subscriber_count == 1

    def test_manual_scene_has_no_loop(self, manual_scene, source):
        assert manual_scene.loop is None
        assert source.subscriber_count == 0
        assert manual_scene.renders == 1

    def test_switch_stops_old_loop_first(self, auto_scene, source):
        old_loop = auto_scene.loop

        auto_scene.set_mode(Mode.MANUAL)

        assert old_loop.state == LoopState.STOPPED
        assert auto_scene.loop is None
        assert source.subscriber_count == 0

        renders = auto_scene.renders
        emit_frames(source, 10)
        assert auto_scene.renders == renders

    def test_restart_discards_previous_motion(self, auto_scene, source):
        auto_scene.router.pointer_move(100.0, 100.0)
        emit_frames(source, 30)

        auto_scene.set_mode(Mode.AUTO)

        assert auto_scene.model.p1 == Point2(365.0, 260.0)
        assert auto_scene.model.spring(ControlPointId.P1).velocity == Point2(0.0, 0.0)

    def test_auto_scene_follows_pointer(self, auto_scene, source):
        auto_scene.router.pointer_move(300.0, 100.0)

        emit_frames(source, 900)

        assert distance(auto_scene.model.p1, Point2(300.0, 100.0)) < 1e-2
        assert distance(auto_scene.model.p2, Point2(500.0, 620.0)) < 1e-2
        assert auto_scene.model.curve.p0 == Point2(365.0, 360.0)
        assert auto_scene.renders == 900

    def test_tilt_grant_moves_manual_scene_to_auto(self, manual_scene, source):
        manual_scene.router.resolve_tilt_permission(PermissionStatus.GRANTED)

        assert manual_scene.model.mode == Mode.AUTO
        assert manual_scene.loop.state == LoopState.RUNNING
        assert source.subscriber_count == 1

        manual_scene.router.tilt(0.0, 0.0)
        emit_frames(source, 900)
        assert distance(manual_scene.model.p1, Point2(465.0, 360.0)) < 1e-2


class TestRendering:

    def test_frame_contents(self, manual_scene):
        frame = manual_scene.frame()

        assert frame.mode == Mode.MANUAL
        assert len(frame.polyline) == 101
        assert frame.polyline[0] == frame.points['p0']
        assert frame.polyline[-1] == frame.points['p3']
        assert len(frame.tangents) == 10
        assert frame.sensor is None

        data = frame.to_dict()
        assert data['mode'] == "manual"
        assert data['points']['p1'] == {'x': 415.0, 'y': 310.0}

    def test_manual_drag_renders_once_per_move(self, manual_scene):
        frames = []
        manual_scene.add_render_listener(frames.append)

        assert manual_scene.router.drag_start(420.0, 310.0) is not None
        manual_scene.router.drag_move(400.0, 200.0)
        manual_scene.router.drag_move(410.0, 210.0)
        manual_scene.router.drag_end()

        assert len(frames) == 2
        assert frames[-1].points['p1'] == Point2(410.0, 210.0)
        assert frames[-1].points['p0'] == Point2(365.0, 360.0)
        assert frames[-1].points['p3'] == Point2(565.0, 360.0)

        manual_scene.remove_render_listener(frames.append)
        manual_scene.redraw()
        assert len(frames) == 2

    def test_tangent_length_redraws_in_manual(self, manual_scene):
        renders = manual_scene.renders

        manual_scene.set_tangent_length(40.0)

        assert manual_scene.renders == renders + 1
        marker = manual_scene.last_frame.tangents[0]
        assert distance(marker.start, marker.end) == pytest.approx(40.0)

    def test_tangent_length_waits_for_next_frame_in_auto(self, auto_scene, source):
        renders = auto_scene.renders
        auto_scene.set_tangent_length(-5.0)

        assert auto_scene.tangent_length == 0.0
        assert auto_scene.renders == renders

        source.emit(0.0)
        assert auto_scene.renders == renders + 1

    def test_failing_listener_does_not_block_others(self, manual_scene, caplog):
        frames = []

        def broken(frame):
            raise RuntimeError("renderer hiccup")

        manual_scene.add_render_listener(broken)
        manual_scene.add_render_listener(frames.append)

        with caplog.at_level("ERROR", logger="springcurve.services.scene"):
            first = manual_scene.redraw()
            second = manual_scene.redraw()

        assert frames == [first, second]
        assert manual_scene.last_frame is second
        assert "renderer hiccup" in caplog.text
