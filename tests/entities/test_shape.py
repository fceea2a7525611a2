"""
紙飛行機（ShapeBody）のテスト

アイドル揺動・発射ステートマシン・帰還の収束を検証
"""

import math

import numpy as np
import pytest
from aerotunnel import config
from aerotunnel.entities.shape import LaunchPhase, ShapeBody, ShapeKind

WIDTH = 500.0
HEIGHT = 340.0
HOME_X = WIDTH * config.HOME_X_FRACTION
HOME_Y = HEIGHT * config.HOME_Y_FRACTION

# 形状ごとの所要ステップ上限
STEP_LIMITS = {
    ShapeKind.LOW_DRAG: 300,
    ShapeKind.LIFT_GENERATING: 400,
    ShapeKind.HIGH_DRAG: 400,
}


def _make_shape(kind, seed=0) -> ShapeBody:
    return ShapeBody(kind, HOME_X, HOME_Y, WIDTH, HEIGHT, rng=np.random.default_rng(seed))


def _run_launch(shape: ShapeBody, wind: float, max_steps: int = 2000) -> int:
    """発射してアイドルに戻るまでのステップ数"""
    assert shape.launch(WIDTH, wind)
    for step in range(1, max_steps + 1):
        if not shape.advance_launch(wind):
            return step
    pytest.fail(f"{shape.kind.value} did not return home within {max_steps} steps")


def test_kind_accepts_string_value():
    assert _make_shape("glider").kind == ShapeKind.LIFT_GENERATING
    with pytest.raises(ValueError):
        _make_shape("brick")


def test_bounds_are_scaled_half_sizes():
    shape = _make_shape(ShapeKind.LOW_DRAG)
    bounds = shape.bounds()
    assert bounds.x == HOME_X
    assert bounds.y == HOME_Y
    assert bounds.half_width == pytest.approx(90 * config.SHAPE_SCALE / 2)
    assert bounds.half_height == pytest.approx(28 * config.SHAPE_SCALE / 2)


class TestReact:
    """アイドル時の揺動"""

    def test_lift_rises_with_wind(self):
        """揚力形状は風が強いほど高く（画面座標で小さいy）浮く"""
        t = 3.7
        calm = _make_shape(ShapeKind.LIFT_GENERATING)
        strong = _make_shape(ShapeKind.LIFT_GENERATING)
        calm.react(1.0, t)
        strong.react(10.0, t)
        assert strong.y < calm.y, f"Expected more lift at wind 10: {strong.y:.2f} vs {calm.y:.2f}"
        assert calm.y - strong.y == pytest.approx(9 * 1.5)

    def test_high_drag_pushed_downstream(self):
        t = 0.0
        calm = _make_shape(ShapeKind.HIGH_DRAG)
        strong = _make_shape(ShapeKind.HIGH_DRAG)
        calm.react(1.0, t)
        strong.react(10.0, t)
        assert strong.x - calm.x == pytest.approx(9.0)

    def test_low_drag_barely_moves(self):
        shape = _make_shape(ShapeKind.LOW_DRAG)
        for i in range(200):
            shape.react(10.0, i * 0.1)
            assert abs(shape.x - HOME_X) <= 1.0 + 1e-9
            assert abs(shape.y - HOME_Y) <= 0.6 + 1e-9
            assert abs(shape.angle) <= 0.08 + 1e-9

    @pytest.mark.parametrize("kind", list(ShapeKind))
    def test_react_is_pure_function_of_time(self, kind):
        """同じ時刻・風速なら同じ姿勢（呼び出し回数に依存しない）"""
        a = _make_shape(kind)
        b = _make_shape(kind)
        for i in range(50):
            a.react(7.0, i * config.DT)
        a.react(7.0, 1.25)
        b.react(7.0, 1.25)
        assert (a.x, a.y, a.angle) == (b.x, b.y, b.angle)

    def test_react_suppressed_while_launched(self):
        shape = _make_shape(ShapeKind.LIFT_GENERATING)
        shape.launch(WIDTH, 5.0)
        shape.advance_launch(5.0)
        before = (shape.x, shape.y, shape.angle)
        shape.react(10.0, 12.3)
        assert (shape.x, shape.y, shape.angle) == before


class TestLaunch:
    """発射ステートマシン"""

    def test_launch_is_idempotent_while_animating(self):
        shape = _make_shape(ShapeKind.LOW_DRAG)
        assert shape.launch(WIDTH, 5.0) is True
        for _ in range(5):
            shape.advance_launch(5.0)
        velocity = shape.velocity.copy()
        x = shape.x

        assert shape.launch(WIDTH, 5.0) is False
        assert shape.launch_phase == LaunchPhase.FLYING
        assert np.array_equal(shape.velocity, velocity)
        assert shape.x == x

    def test_advance_while_idle_is_noop(self):
        shape = _make_shape(ShapeKind.HIGH_DRAG)
        assert shape.advance_launch(5.0) is False
        assert (shape.x, shape.y) == (HOME_X, HOME_Y)

    @pytest.mark.parametrize("kind", list(ShapeKind))
    @pytest.mark.parametrize("wind", range(1, 11))
    def test_converges_within_step_limit(self, kind, wind):
        """全風速で上限ステップ以内にホームへ戻る"""
        shape = _make_shape(kind, seed=wind)
        steps = _run_launch(shape, float(wind))
        assert steps <= STEP_LIMITS[kind], f"{kind.value} at wind {wind} took {steps} steps"

    @pytest.mark.parametrize("kind", list(ShapeKind))
    def test_x_strictly_increases_while_flying(self, kind):
        """飛行中は前進のみ（後退しない）"""
        shape = _make_shape(kind, seed=3)
        shape.launch(WIDTH, 1.0)
        previous_x = shape.x
        while shape.launch_phase == LaunchPhase.FLYING:
            shape.advance_launch(1.0)
            if shape.launch_phase != LaunchPhase.FLYING:
                break
            assert shape.x > previous_x
            previous_x = shape.x
        assert shape.launch_phase == LaunchPhase.RETURNING

    @pytest.mark.parametrize("kind", list(ShapeKind))
    def test_stays_between_ceiling_and_floor(self, kind):
        shape = _make_shape(kind, seed=4)
        shape.launch(WIDTH, 10.0)
        top = config.LAUNCH_CEILING
        bottom = HEIGHT - config.LAUNCH_CEILING
        while shape.launch_phase == LaunchPhase.FLYING:
            shape.advance_launch(10.0)
            if shape.launch_phase == LaunchPhase.FLYING:
                assert top <= shape.y <= bottom

    def test_returns_from_left_edge(self):
        shape = _make_shape(ShapeKind.LOW_DRAG)
        shape.launch(WIDTH, 5.0)
        while shape.launch_phase == LaunchPhase.FLYING:
            shape.advance_launch(5.0)
        assert shape.x == -config.LAUNCH_EXIT_MARGIN
        assert shape.return_progress == 0.0

    @pytest.mark.parametrize("kind", list(ShapeKind))
    def test_lands_exactly_home(self, kind):
        shape = _make_shape(kind, seed=5)
        _run_launch(shape, 5.0)
        assert shape.launch_phase == LaunchPhase.IDLE
        assert shape.x == HOME_X
        assert shape.y == HOME_Y
        assert shape.angle == 0.0
        assert shape.angular_velocity == 0.0

    def test_glider_climbs_after_launch(self):
        shape = _make_shape(ShapeKind.LIFT_GENERATING)
        shape.launch(WIDTH, 5.0)
        for _ in range(5):
            shape.advance_launch(5.0)
        assert shape.y < HOME_Y
        assert shape.angle < 0  # 機首上げ

    def test_tumbler_spins(self):
        shape = _make_shape(ShapeKind.HIGH_DRAG, seed=11)
        shape.launch(WIDTH, 10.0)
        angles = []
        for _ in range(20):
            shape.advance_launch(10.0)
            angles.append(shape.angle)
        assert max(abs(a) for a in angles) > 0.0
        assert all(math.isfinite(a) for a in angles)

    def test_set_home_while_flying_keeps_position(self):
        """発射中のリサイズは飛行を乱さず、帰還先だけ変わる"""
        shape = _make_shape(ShapeKind.LOW_DRAG)
        shape.launch(WIDTH, 5.0)
        shape.advance_launch(5.0)
        x, y = shape.x, shape.y

        shape.set_home(300.0, 200.0, 600.0, 400.0)
        assert (shape.x, shape.y) == (x, y)

        for _ in range(2000):
            if not shape.advance_launch(5.0):
                break
        assert (shape.x, shape.y) == (300.0, 200.0)

    def test_set_home_while_idle_snaps(self):
        shape = _make_shape(ShapeKind.HIGH_DRAG)
        shape.set_home(100.0, 80.0, 250.0, 160.0)
        assert (shape.x, shape.y) == (100.0, 80.0)
