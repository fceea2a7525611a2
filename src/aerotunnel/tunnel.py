"""風洞（流れ場）: パーティクルプールと紙飛行機の統括"""

import logging
import math
from typing import Callable, Optional

import numpy as np
from aerotunnel import config
from aerotunnel.entities.particle import FlowParticle
from aerotunnel.entities.shape import ShapeBody, ShapeKind
from aerotunnel.physics.utils import clamp_wind

logger = logging.getLogger(__name__)


def pool_size(wind_intensity: float) -> int:
    """風速に応じたパーティクル数（基本数 + 追加分の線形補間、端数は四捨五入）"""
    v = clamp_wind(wind_intensity)
    return config.BASE_PARTICLES + int(math.floor(v * config.EXTRA_PARTICLES / 10.0 + 0.5))


class FlowField:
    """
    1つの風洞パネル

    フレームごとの処理順:
        1. 全パーティクルを更新（形状の現在位置を渡す）
        2. 形状を更新（発射中なら advance_launch、そうでなければ react）
        3. 描画コールバックを呼ぶ

    visible が False の間は何も進めない（シミュレーション時間も止まる）。
    描画面の寸法が無い場合は警告を出して不活性（全操作が no-op）になる。
    """

    def __init__(
        self,
        kind: ShapeKind,
        width: float = config.TUNNEL_WIDTH,
        height: float = config.TUNNEL_HEIGHT,
        wind_intensity: float = config.WIND_DEFAULT,
        seed: Optional[int] = None,
        renderer: Optional[Callable[["FlowField"], None]] = None,
    ):
        self.kind = ShapeKind(kind)
        self.rng = np.random.default_rng(seed)
        self.renderer = renderer

        self.visible = True
        self.hovered = False
        self.elapsed = 0.0  # シミュレーション時間 (s)
        self.frame = 0

        self.active = width > 0 and height > 0
        if not self.active:
            self._warn_inactive(width, height)

        self.width = max(1.0, float(width))
        self.height = max(1.0, float(height))
        self.wind_intensity = clamp_wind(wind_intensity)

        home_x, home_y = self._home_for(self.width, self.height)
        self.shape = ShapeBody(self.kind, home_x, home_y, self.width, self.height, rng=self.rng)

        self.particles: list[FlowParticle] = []
        if self.active:
            self._build_particles(pool_size(self.wind_intensity))

    def _warn_inactive(self, width: float, height: float):
        logger.warning(
            "%s: no drawable area (%sx%s), tunnel disabled", self.kind.value, width, height
        )

    @staticmethod
    def _home_for(width: float, height: float) -> tuple[float, float]:
        return width * config.HOME_X_FRACTION, height * config.HOME_Y_FRACTION

    @property
    def is_launching(self) -> bool:
        return not self.shape.is_idle

    def _new_particle(self) -> FlowParticle:
        """トンネル全体にばらまいた新しいパーティクル"""
        x = self.rng.random() * self.width
        return FlowParticle(self.rng, self.width, self.height, x=x)

    def _build_particles(self, count: int):
        self.particles = [self._new_particle() for _ in range(count)]

    def tick(self, dt: float = config.DT) -> bool:
        """
        1フレーム分進める

        Args:
            dt: フレーム時間 (s)

        Returns:
            シミュレーションを進めた場合 True（非表示・不活性なら False）
        """
        if not (self.active and self.visible):
            return False

        self.elapsed += dt
        self.frame += 1

        bounds = self.shape.bounds()
        profile = self.shape.deflection
        for particle in self.particles:
            particle.update(self.wind_intensity, profile, bounds, self.elapsed, self.rng)

        if self.shape.is_idle:
            self.shape.react(self.wind_intensity, self.elapsed)
        else:
            self.shape.advance_launch(self.wind_intensity)

        if self.renderer is not None:
            self.renderer(self)
        return True

    def set_wind_intensity(self, value: float):
        """
        風速を設定し、プールを伸縮する

        範囲外は [1, 10] にクランプ。既存パーティクルの順序・状態は変えない。
        """
        if not self.active:
            return

        self.wind_intensity = clamp_wind(value)
        target = pool_size(self.wind_intensity)
        current = len(self.particles)
        if target > current:
            self.particles.extend(self._new_particle() for _ in range(target - current))
        elif target < current:
            del self.particles[target:]

        if target != current:
            logger.debug("%s: wind=%.1f pool %d -> %d", self.kind.value,
                         self.wind_intensity, current, target)

    def resize(self, width: float, height: float):
        """
        表示サイズ変更: ホーム位置を再計算し、パーティクルを新しい範囲に配り直す

        寸法が0になれば不活性に、0から正の寸法に戻れば再び活性化する。
        """
        active = width > 0 and height > 0
        if not active:
            if self.active:
                self._warn_inactive(width, height)
                self.active = False
                self.particles = []
            return

        if not self.active:
            logger.info("%s: drawable area available (%sx%s), tunnel enabled",
                        self.kind.value, width, height)
            self.active = True

        self.width = max(1.0, float(width))
        self.height = max(1.0, float(height))
        home_x, home_y = self._home_for(self.width, self.height)
        self.shape.set_home(home_x, home_y, self.width, self.height)
        self._build_particles(pool_size(self.wind_intensity))
        logger.debug("%s: resized to %.0fx%.0f", self.kind.value, self.width, self.height)

    def launch(self) -> bool:
        """発射（発射中は無視）"""
        if not self.active:
            return False
        return self.shape.launch(self.width, self.wind_intensity)
