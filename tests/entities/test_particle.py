"""流線パーティクルのテスト"""

import numpy as np
import pytest
from aerotunnel import config
from aerotunnel.entities.particle import FlowParticle
from aerotunnel.physics.deflection import ShapeBounds, deflection_profile_for

WIDTH = config.TUNNEL_WIDTH
HEIGHT = config.TUNNEL_HEIGHT


def _bounds_for(kind: str, x: float, y: float) -> ShapeBounds:
    width, height = config.SHAPE_SIZES[kind]
    return ShapeBounds(x, y, width * config.SHAPE_SCALE * 0.5, height * config.SHAPE_SCALE * 0.5)


@pytest.mark.parametrize("kind", ["dart", "glider", "tumbler"])
@pytest.mark.parametrize("shape_y", [20.0, HEIGHT / 2, HEIGHT - 20.0])
def test_particles_stay_inside_walls(kind, shape_y):
    """形状が壁際にあっても、流線は壁マージンの内側に留まる"""
    rng = np.random.default_rng(7)
    profile = deflection_profile_for(kind)
    bounds = _bounds_for(kind, WIDTH * 0.45, shape_y)
    particles = [FlowParticle(rng, WIDTH, HEIGHT, x=rng.random() * WIDTH) for _ in range(60)]

    low = config.WALL_MARGIN
    high = HEIGHT - config.WALL_MARGIN
    for step in range(300):
        t = step * config.DT
        for p in particles:
            p.update(10.0, profile, bounds, t, rng)
            assert low <= p.y <= high, f"Particle escaped walls: y={p.y:.2f}"


@pytest.mark.parametrize("height", [20.0, 30.0, 36.0, 40.0])
def test_low_tunnel_spawns_inside_walls(height):
    """出現余白より低いトンネルでも、生成直後・再利用直後から壁の内側"""
    rng = np.random.default_rng(5)
    low = config.WALL_MARGIN
    high = max(low, height - config.WALL_MARGIN)
    particles = [FlowParticle(rng, 200.0, height) for _ in range(20)]
    for p in particles:
        assert low <= p.y <= high, f"Spawned outside walls: y={p.y:.2f} (h={height})"
        p.recycle(rng)
        assert low <= p.y <= high, f"Recycled outside walls: y={p.y:.2f} (h={height})"
        assert p.y == p.row


def test_recycle_clears_trail_and_respawns_upstream():
    rng = np.random.default_rng(0)
    profile = deflection_profile_for("dart")
    far_away = _bounds_for("dart", -10_000.0, -10_000.0)
    p = FlowParticle(rng, WIDTH, HEIGHT, x=-config.EXIT_OVERSHOOT + 0.01, row=100.0)

    p.update(10.0, profile, far_away, 0.0, rng)

    assert len(p.trail) == 0
    assert WIDTH <= p.x < WIDTH + config.SPAWN_JITTER
    assert config.SPAWN_MARGIN <= p.row <= HEIGHT - config.SPAWN_MARGIN
    assert p.y == p.row
    assert p.color == config.COLOR_STREAM_DEFAULT


def test_trail_capped_at_max_points():
    """軌跡は最大点数で頭打ち（古い点から捨てる）"""
    rng = np.random.default_rng(1)
    profile = deflection_profile_for("glider")
    far_away = _bounds_for("glider", -10_000.0, -10_000.0)
    p = FlowParticle(rng, WIDTH, HEIGHT, x=WIDTH, row=HEIGHT / 2)

    assert config.TRAIL_LENGTH_RANGE[0] <= p.max_points < config.TRAIL_LENGTH_RANGE[1]

    # 風速1なら1ステップ0.25px以下しか動かず、左端まで届かない
    for _ in range(p.max_points + 20):
        p.update(1.0, profile, far_away, 0.0, rng)
        assert len(p.trail) <= p.max_points
    assert len(p.trail) == p.max_points
    assert p.trail[-1].x == pytest.approx(p.x)


def test_speed_fixed_for_lifetime():
    """速度係数は生成時に決まり、再利用後も変わらない"""
    rng = np.random.default_rng(2)
    profile = deflection_profile_for("tumbler")
    bounds = _bounds_for("tumbler", WIDTH * 0.45, HEIGHT / 2)
    p = FlowParticle(rng, WIDTH, HEIGHT)
    speed, opacity, thickness, max_points = p.speed, p.opacity, p.thickness, p.max_points

    recycled = False
    x_before = p.x
    for step in range(2000):
        p.update(10.0, profile, bounds, step * config.DT, rng)
        if p.x > x_before + 1.0:
            recycled = True
        x_before = p.x

    assert recycled, "Particle should have crossed the tunnel at least once"
    assert p.speed == speed
    assert p.opacity == opacity
    assert p.thickness == thickness
    assert p.max_points == max_points


def test_plain_wind_moves_left():
    rng = np.random.default_rng(3)
    profile = deflection_profile_for("dart")
    far_away = _bounds_for("dart", -10_000.0, -10_000.0)
    p = FlowParticle(rng, WIDTH, HEIGHT, x=300.0, row=100.0)

    p.update(6.0, profile, far_away, 0.0, rng)

    assert p.x == pytest.approx(300.0 - p.speed * 6.0 / config.WIND_SPEED_DIVISOR)
    assert p.y == 100.0
