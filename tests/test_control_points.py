import pytest

from springcurve.core.physics import Point2, ZERO, SpringPoint, distance
from springcurve.services.control_points import (
    ControlPointModel,
    ControlPointId,
    ManualPoint,
    Mode,
    SimulationClock
)


P0 = Point2(100.0, 300.0)
P3 = Point2(500.0, 300.0)


def settle(model: ControlPointModel, seconds: float = 15.0, dt: float = 1 / 60) -> None:
    for _ in range(int(seconds / dt)):
        model.step(dt)


class TestSimulationClock:

    def test_first_tick_is_zero(self):
        clock = SimulationClock()
        assert clock.tick(12345.678) == 0.0
        assert clock.tick(12345.778) == pytest.approx(0.1)

    def test_reset_forgets_last_timestamp(self):
        clock = SimulationClock()
        clock.tick(1.0)
        clock.reset()

        assert clock.last_timestamp is None
        assert clock.tick(500.0) == 0.0


class TestSeeding:

    def test_auto_seeds_above_anchors_at_rest(self):
        model = ControlPointModel(P0, P3, mode=Mode.AUTO)

        for which, anchor in ((ControlPointId.P1, P0), (ControlPointId.P2, P3)):
            spring = model.point(which)
            assert isinstance(spring, SpringPoint)
            assert spring.position == Point2(anchor.x, anchor.y - 100)
            assert spring.target == spring.position
            assert spring.velocity == ZERO

    def test_manual_seeds_at_diagonal_offsets(self):
        model = ControlPointModel(P0, P3, mode=Mode.MANUAL)

        assert isinstance(model.point(ControlPointId.P1), ManualPoint)
        assert model.p1 == Point2(150.0, 250.0)
        assert model.p2 == Point2(450.0, 350.0)

    def test_seed_offsets_are_configurable(self):
        model = ControlPointModel(P0, P3, mode=Mode.AUTO, auto_seed_height=30.0, manual_offset=10.0)
        assert model.p1 == Point2(100.0, 270.0)

        model.set_mode(Mode.MANUAL)
        assert model.p2 == Point2(490.0, 310.0)

    def test_set_mode_resets_clock(self):
        model = ControlPointModel(P0, P3)
        model.clock.tick(3.0)

        model.set_mode(Mode.MANUAL)

        assert model.clock.last_timestamp is None

    def test_mode_round_trip_reseeds_identically(self):
        model = ControlPointModel(P0, P3, mode=Mode.AUTO)
        model.set_target(ControlPointId.P1, Point2(0.0, 0.0))
        settle(model, 1.0)

        seeds = []
        for _ in range(2):
            model.set_mode(Mode.MANUAL)
            manual = (model.p1, model.p2)
            model.set_mode(Mode.AUTO)
            seeds.append((manual, (model.p1, model.p2)))

        assert seeds[0] == seeds[1]
        assert seeds[0][1] == (Point2(100.0, 200.0), Point2(500.0, 200.0))

    def test_endpoints_must_be_ordered(self):
        with pytest.raises(ValueError):
            ControlPointModel(P3, P0)

        model = ControlPointModel(P0, P3)
        with pytest.raises(ValueError):
            model.set_endpoints(Point2(10.0, 0.0), Point2(10.0, 5.0))

    def test_reseed_follows_new_endpoints(self):
        model = ControlPointModel(P0, P3, mode=Mode.MANUAL)
        model.drag_to(ControlPointId.P1, Point2(1.0, 1.0))

        model.set_endpoints(Point2(0.0, 0.0), Point2(200.0, 0.0))
        model.reseed()

        assert model.mode == Mode.MANUAL
        assert model.p1 == Point2(50.0, -50.0)
        assert model.p2 == Point2(150.0, 50.0)


class TestAutoMode:

    def test_springs_settle_on_targets(self):
        model = ControlPointModel(P0, P3, mode=Mode.AUTO)
        assert model.set_target(ControlPointId.P1, Point2(300.0, 100.0))
        assert model.set_target(ControlPointId.P2, Point2(300.0, 500.0))

        settle(model)

        assert distance(model.p1, Point2(300.0, 100.0)) < 1e-3
        assert distance(model.p2, Point2(300.0, 500.0)) < 1e-3
        assert model.is_settled(1e-3)

    def test_drag_rejected(self):
        model = ControlPointModel(P0, P3, mode=Mode.AUTO)
        before = model.p1

        assert model.drag_to(ControlPointId.P1, Point2(1.0, 1.0)) is False
        assert model.p1 == before

    def test_anchors_never_move(self):
        model = ControlPointModel(P0, P3, mode=Mode.AUTO)
        model.set_target(ControlPointId.P1, Point2(-900.0, 900.0))
        settle(model, 2.0)

        assert model.curve.p0 == P0
        assert model.curve.p3 == P3


class TestManualMode:

    def test_set_target_rejected(self):
        model = ControlPointModel(P0, P3, mode=Mode.MANUAL)
        before = (model.p1, model.p2)

        assert model.set_target(ControlPointId.P1, Point2(0.0, 0.0)) is False
        assert model.step(0.1) is False
        assert (model.p1, model.p2) == before

    def test_drag_changes_interior_but_not_endpoints(self):
        model = ControlPointModel(P0, P3, mode=Mode.MANUAL)
        before = model.curve

        assert model.drag_to(ControlPointId.P1, Point2(50.0, 50.0))
        after = model.curve

        assert model.p1 == Point2(50.0, 50.0)
        assert after.point(0.0) == P0
        assert after.point(1.0) == P3
        for t in (0.25, 0.5, 0.75):
            assert after.point(t) != before.point(t)


class TestHitTest:

    @pytest.fixture
    def model(self):
        return ControlPointModel(P0, P3, mode=Mode.MANUAL)

    def test_inside_and_outside_radius(self, model):
        radius = 20.0
        p1 = model.p1

        assert model.hit_test(Point2(p1.x + radius - 1, p1.y), radius) == ControlPointId.P1
        assert model.hit_test(Point2(p1.x + radius + 1, p1.y), radius) is None

    def test_exact_radius_misses(self, model):
        p2 = model.p2
        assert model.hit_test(Point2(p2.x, p2.y - 40.0), 40.0) is None

    def test_nearest_wins_when_both_qualify(self, model):
        model.drag_to(ControlPointId.P1, Point2(200.0, 200.0))
        model.drag_to(ControlPointId.P2, Point2(210.0, 200.0))

        assert model.hit_test(Point2(208.0, 200.0), 40.0) == ControlPointId.P2
        assert model.hit_test(Point2(202.0, 200.0), 40.0) == ControlPointId.P1
        assert model.hit_test(Point2(205.0, 200.0), 40.0) == ControlPointId.P1

    def test_works_in_auto_mode(self):
        model = ControlPointModel(P0, P3, mode=Mode.AUTO)
        assert model.hit_test(Point2(100.0, 205.0), 20.0) == ControlPointId.P1
