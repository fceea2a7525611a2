"""偏向プロファイル（形状まわりの流線の曲がり方）"""

import math
from typing import NamedTuple

import numpy as np
from aerotunnel import config
from aerotunnel.physics.utils import radial_falloff, sign

RGB = tuple[int, int, int]


class ShapeBounds(NamedTuple):
    """流線が参照する形状の位置と半サイズ (px)"""
    x: float
    y: float
    half_width: float
    half_height: float


class Deflection(NamedTuple):
    """1ステップ分の変位と色"""
    dx: float
    dy: float
    color: RGB


class ZoneGeometry(NamedTuple):
    """形状中心から見たパーティクルの相対位置"""
    rel_x: float
    rel_y: float
    dist: float
    pw: float
    ph: float

    @classmethod
    def measure(cls, x: float, y: float, bounds: ShapeBounds) -> "ZoneGeometry":
        rel_x = x - bounds.x
        rel_y = y - bounds.y
        return cls(rel_x, rel_y, math.hypot(rel_x, rel_y), bounds.half_width, bounds.half_height)

    @property
    def in_zone(self) -> bool:
        return abs(self.rel_x) < self.pw and abs(self.rel_y) < self.ph

    @property
    def approaching(self) -> bool:
        return (-self.pw * config.ZONE_APPROACH_BACK < self.rel_x
                < self.pw * config.ZONE_APPROACH_FRONT)

    @property
    def near_body(self) -> bool:
        return abs(self.rel_y) < self.ph * config.ZONE_NEAR_BODY


class DeflectionProfile:
    """
    偏向プロファイルの基底クラス

    形状の種類ごとにサブクラスを1つ用意し、構築時に一度だけ選ぶ。
    deflect() は入力から (dx, dy, color) を返す純粋関数で、
    パーティクルの状態は書き換えない（乱数生成器のみ消費する）。
    """

    kind = ""

    def deflect(
        self,
        x: float,
        y: float,
        spd: float,
        bounds: ShapeBounds,
        wind_intensity: float,
        t: float,
        row: float,
        rng: np.random.Generator,
    ) -> Deflection:
        """
        パーティクル位置での変位を計算

        Args:
            x, y: パーティクル位置 (px)
            spd: 風速を反映した基本速度 (px/step)
            bounds: 形状の現在位置と半サイズ
            wind_intensity: 風速 [1, 10]
            t: シミュレーション経過時間 (s)
            row: パーティクルの出現行 (px)
            rng: 乱数生成器

        Returns:
            Deflection(dx, dy, color)
        """
        geometry = ZoneGeometry.measure(x, y, bounds)
        return self._apply(geometry, spd, wind_intensity, t, row, rng)

    def _apply(self, g: ZoneGeometry, spd, wind_intensity, t, row, rng) -> Deflection:
        raise NotImplementedError

    @staticmethod
    def undeflected(spd: float) -> Deflection:
        """ゾーン外: 素の風ベクトル（右→左）と既定色"""
        return Deflection(-spd, 0.0, config.COLOR_STREAM_DEFAULT)


class LowDragDeflection(DeflectionProfile):
    """ダート: 細い機首ゾーンだけで流れを分け、後方ですぐ回復する"""

    kind = "dart"

    def _apply(self, g, spd, wind_intensity, t, row, rng):
        if not (g.in_zone or (g.approaching and g.near_body)):
            return self.undeflected(spd)

        dx, dy = -spd, 0.0
        radius = g.pw * config.LOW_DRAG_RADIUS
        if 0 < g.dist < radius:
            push = radial_falloff(g.dist, radius) * config.LOW_DRAG_PUSH
            dy += sign(g.rel_y) * push * spd
            dx *= config.LOW_DRAG_DAMPING

        # 機体を通過した後は加速（低抵抗・素早い回復）
        if g.rel_x < 0:
            dx *= config.LOW_DRAG_RECOVERY

        return Deflection(dx, dy, config.COLOR_STREAM_INTERACT)


class LiftGeneratingDeflection(DeflectionProfile):
    """グライダー: 翼下面の流れを強く押し上げる（揚力）"""

    kind = "glider"

    def _apply(self, g, spd, wind_intensity, t, row, rng):
        span = g.ph * config.LIFT_SPAN
        near_wings = abs(g.rel_x) < g.pw * config.LIFT_NEAR_WINGS and abs(g.rel_y) < span
        if not (near_wings or (g.approaching and abs(g.rel_y) < span)):
            return self.undeflected(spd)

        dx, dy = -spd, 0.0
        color = config.COLOR_STREAM_DEFAULT
        radius = max(g.pw, g.ph) * config.LIFT_RADIUS
        if 0 < g.dist < radius:
            push = radial_falloff(g.dist, radius) * config.LIFT_PUSH
            if g.rel_y > 0:
                # 翼下面（画面座標はy下向き）→ 上へ
                dy -= push * spd * config.LIFT_BELOW_GAIN
                color = config.COLOR_STREAM_LIFT
            else:
                dy += push * spd * config.LIFT_ABOVE_GAIN
                color = config.COLOR_STREAM_INTERACT
            dx *= config.LIFT_DAMPING

        # 後縁の吹き下ろし
        if g.rel_x < -g.pw * config.LIFT_TRAILING_EDGE:
            dy -= config.LIFT_TRAILING_BIAS * spd
            color = config.COLOR_STREAM_LIFT_TRAIL

        return Deflection(dx, dy, color)


class HighDragDeflection(DeflectionProfile):
    """タンブラー: 前面でせき止め、後方に乱れた後流を作る"""

    kind = "tumbler"

    def _apply(self, g, spd, wind_intensity, t, row, rng):
        radius = max(g.pw, g.ph) * config.HIGH_DRAG_RADIUS
        near_front = -g.pw * config.HIGH_DRAG_BACK < g.rel_x < g.pw * config.HIGH_DRAG_FRONT
        if not ((near_front and g.near_body) or g.dist < radius):
            return self.undeflected(spd)

        dx, dy = -spd, 0.0
        if g.rel_x > 0:
            # 前面: 大きく減速し外側へ散らす
            dx *= config.HIGH_DRAG_FRONT_DAMPING
            scatter = radial_falloff(g.dist, radius) * config.HIGH_DRAG_SCATTER
            dy += sign(g.rel_y) * scatter * spd
            return Deflection(dx, dy, config.COLOR_STREAM_HOT)

        # 後流: 時間と行に依存する擬似乱流
        dx *= config.HIGH_DRAG_WAKE_DAMPING
        wave = math.sin(t * config.WAKE_FREQUENCY + row * config.WAKE_ROW_PHASE)
        noise = float(rng.random()) - 0.5
        dy += ((wave * config.WAKE_AMPLITUDE + noise * config.WAKE_NOISE)
               * (wind_intensity / config.WAKE_WIND_REFERENCE))
        return Deflection(dx, dy, config.COLOR_STREAM_WAKE)


DEFLECTION_PROFILES = {
    profile.kind: profile
    for profile in (LowDragDeflection, LiftGeneratingDeflection, HighDragDeflection)
}


def deflection_profile_for(kind: str) -> DeflectionProfile:
    """形状種別名 ("dart" / "glider" / "tumbler") からプロファイルを生成"""
    return DEFLECTION_PROFILES[kind]()
