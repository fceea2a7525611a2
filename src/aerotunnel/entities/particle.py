"""流線パーティクル"""

from collections import deque
from typing import NamedTuple

import numpy as np
from aerotunnel import config
from aerotunnel.physics.deflection import DeflectionProfile, ShapeBounds


class TrailSample(NamedTuple):
    """軌跡の1点（位置と、その時点の色）"""
    x: float
    y: float
    color: tuple[int, int, int]


class FlowParticle:
    """
    流線パーティクル（右から左へ流れ、形状の周りで曲がる）

    プールから再利用されるため、毎フレーム生成・破棄はしない。
    左端を抜けたら recycle() で右端に戻し、軌跡を消す。
    """

    def __init__(
        self,
        rng: np.random.Generator,
        tunnel_width: float = config.TUNNEL_WIDTH,
        tunnel_height: float = config.TUNNEL_HEIGHT,
        x: float = None,
        row: float = None,
    ):
        self.tunnel_width = tunnel_width
        self.tunnel_height = tunnel_height

        # 生成時に一度だけ決まる個性
        self.speed = float(rng.uniform(*config.PARTICLE_SPEED_RANGE))
        self.opacity = float(rng.uniform(*config.PARTICLE_OPACITY_RANGE))
        self.thickness = float(rng.uniform(*config.PARTICLE_THICKNESS_RANGE))
        max_points = int(rng.integers(*config.TRAIL_LENGTH_RANGE))

        self.row = row if row is not None else self._random_row(rng)
        self.x = x if x is not None else tunnel_width + rng.random() * config.INITIAL_SPAWN_JITTER
        low, high = self._wall_range()
        self.y = min(max(self.row, low), high)
        self.color = config.COLOR_STREAM_DEFAULT
        self.trail: deque[TrailSample] = deque(maxlen=max_points)

    @property
    def max_points(self) -> int:
        return self.trail.maxlen

    def _wall_range(self) -> tuple[float, float]:
        low = config.WALL_MARGIN
        return low, max(low, self.tunnel_height - config.WALL_MARGIN)

    def _random_row(self, rng: np.random.Generator) -> float:
        span = max(0.0, self.tunnel_height - 2 * config.SPAWN_MARGIN)
        row = config.SPAWN_MARGIN + rng.random() * span
        # 低いトンネルでは出現行も壁の内側に収める
        low, high = self._wall_range()
        return min(max(row, low), high)

    def update(
        self,
        wind_intensity: float,
        profile: DeflectionProfile,
        bounds: ShapeBounds,
        t: float,
        rng: np.random.Generator,
    ):
        """
        1ステップ進める

        Args:
            wind_intensity: 風速 [1, 10]（呼び出し側でクランプ済み）
            profile: 形状の偏向プロファイル
            bounds: 形状の現在位置と半サイズ
            t: シミュレーション経過時間 (s)
            rng: 乱数生成器
        """
        spd = self.speed * (wind_intensity / config.WIND_SPEED_DIVISOR)
        step = profile.deflect(self.x, self.y, spd, bounds, wind_intensity, t, self.row, rng)

        self.x += step.dx
        self.y += step.dy
        self.color = step.color

        # 壁はクランプのみ（反射しない）
        low, high = self._wall_range()
        self.y = min(max(self.y, low), high)

        self.trail.append(TrailSample(self.x, self.y, self.color))

        if self.x < -config.EXIT_OVERSHOOT:
            self.recycle(rng)

    def recycle(self, rng: np.random.Generator):
        """右端（上流）へ戻し、新しい行から流し直す"""
        self.x = self.tunnel_width + rng.random() * config.SPAWN_JITTER
        self.row = self._random_row(rng)
        self.y = self.row
        self.color = config.COLOR_STREAM_DEFAULT
        self.trail.clear()
