"""紙飛行機（形状ボディ、発射ステートマシン）"""

import logging
import math
from enum import Enum, auto

import numpy as np
from aerotunnel import config
from aerotunnel.physics.deflection import ShapeBounds, deflection_profile_for
from aerotunnel.physics.launch import launch_profile_for
from aerotunnel.physics.utils import return_curve

logger = logging.getLogger(__name__)


class ShapeKind(Enum):
    """形状の種類"""
    LOW_DRAG = "dart"           # 低抵抗・安定
    LIFT_GENERATING = "glider"  # 揚力
    HIGH_DRAG = "tumbler"       # 高抵抗・不安定


class LaunchPhase(Enum):
    """発射アニメーションの状態"""
    IDLE = auto()       # ホーム位置で揺動
    FLYING = auto()     # 右へ飛行中
    RETURNING = auto()  # 左端から戻ってくる


class ShapeBody:
    """
    風洞内の紙飛行機

    - 種類ごとの偏向プロファイル（流線側が参照）
    - アイドル時の揺動（react）
    - 発射ステートマシン（launch → advance_launch）
    """

    def __init__(
        self,
        kind: ShapeKind,
        home_x: float,
        home_y: float,
        tunnel_width: float = config.TUNNEL_WIDTH,
        tunnel_height: float = config.TUNNEL_HEIGHT,
        rng: np.random.Generator = None,
    ):
        self.kind = ShapeKind(kind)
        self.deflection = deflection_profile_for(self.kind.value)
        self.launch_profile = launch_profile_for(self.kind.value)
        self.rng = rng if rng is not None else np.random.default_rng()

        self.width, self.height = config.SHAPE_SIZES[self.kind.value]
        self.scale = config.SHAPE_SCALE

        self.tunnel_width = tunnel_width
        self.tunnel_height = tunnel_height

        # 姿勢
        self.home_x = home_x
        self.home_y = home_y
        self.x = home_x
        self.y = home_y
        self.angle = 0.0

        # ステートマシン
        self.launch_phase = LaunchPhase.IDLE
        self.velocity = np.array([0.0, 0.0])
        self.angular_velocity = 0.0
        self.elapsed_steps = 0
        self.return_progress = 0.0
        self._return_start = (home_x, home_y)

    @property
    def is_idle(self) -> bool:
        return self.launch_phase == LaunchPhase.IDLE

    def bounds(self) -> ShapeBounds:
        """流線の偏向ゾーン判定用の位置・半サイズ"""
        return ShapeBounds(
            self.x,
            self.y,
            self.width * self.scale * 0.5,
            self.height * self.scale * 0.5,
        )

    def set_home(self, home_x: float, home_y: float, tunnel_width: float, tunnel_height: float):
        """ホーム位置とトンネル寸法を更新（アイドル中なら即座にホームへ）"""
        self.home_x = home_x
        self.home_y = home_y
        self.tunnel_width = tunnel_width
        self.tunnel_height = tunnel_height
        if self.is_idle:
            self.x = home_x
            self.y = home_y

    def react(self, wind_intensity: float, t: float):
        """
        アイドル時の揺動（時間と風速の純関数）

        Args:
            wind_intensity: 風速 [1, 10]
            t: シミュレーション経過時間 (s)
        """
        if not self.is_idle:
            return

        s = t / config.REACT_TIME_SCALE
        w = wind_intensity / 10.0

        if self.kind == ShapeKind.LOW_DRAG:
            # ほぼ動かない（安定）
            self.angle = math.sin(s * 1.2) * 0.008 * wind_intensity
            self.x = self.home_x + math.sin(s * 0.5) * 1.0
            self.y = self.home_y + math.sin(s * 0.7) * 0.6
        elif self.kind == ShapeKind.LIFT_GENERATING:
            # 風速に比例して浮き上がる（揚力）
            self.angle = -0.03 * w + math.sin(s * 0.4) * 0.01
            self.x = self.home_x + math.sin(s * 0.3) * 1.0
            self.y = self.home_y - wind_intensity * 1.5 + math.sin(s * 0.5) * 1.5
        else:
            # 大きく揺れて押し流される（抗力・不安定）
            self.angle = (math.sin(s * 1.8) * 0.06 * w
                          + math.sin(s * 2.5) * 0.02 * wind_intensity)
            self.x = self.home_x + wind_intensity * 1.0 + math.sin(s) * 1.5
            self.y = self.home_y + math.sin(s * 0.8) * 2.0 * w

    def launch(self, tunnel_width: float, wind_intensity: float) -> bool:
        """
        発射開始

        Returns:
            発射した場合 True。発射中の再要求は無視して False
        """
        if not self.is_idle:
            logger.debug("%s: launch ignored (phase=%s)", self.kind.value, self.launch_phase.name)
            return False

        self.tunnel_width = tunnel_width
        self.velocity = self.launch_profile.initial_velocity()
        self.angular_velocity = 0.0
        self.elapsed_steps = 0
        self.launch_phase = LaunchPhase.FLYING
        logger.debug("%s: launched at wind=%.1f v0=%s", self.kind.value, wind_intensity, self.velocity)
        return True

    def advance_launch(self, wind_intensity: float) -> bool:
        """
        発射アニメーションを1ステップ進める

        Returns:
            まだアニメーション中なら True、アイドルに戻っていれば False
        """
        if self.launch_phase == LaunchPhase.FLYING:
            self._flying_behavior(wind_intensity)
        elif self.launch_phase == LaunchPhase.RETURNING:
            self._returning_behavior()
        return not self.is_idle

    def _flying_behavior(self, wind_intensity: float):
        """飛行: 二乗抵抗・重力・風で速度を積分し、上下の壁で跳ね返る"""
        profile = self.launch_profile
        self.velocity = profile.integrate(self.velocity, wind_intensity)
        self.x += self.velocity[0]
        self.y += self.velocity[1]
        self._bounce_vertical()

        self.angle, self.angular_velocity = profile.steer(
            self.angle, self.angular_velocity, self.velocity, wind_intensity, self.rng
        )
        self.elapsed_steps += 1

        if self.x > self.tunnel_width + config.LAUNCH_EXIT_MARGIN:
            # 左端の外から戻ってくる
            self._return_start = (-config.LAUNCH_EXIT_MARGIN, self.y)
            self.x, self.y = self._return_start
            self.return_progress = 0.0
            self.launch_phase = LaunchPhase.RETURNING
            logger.debug("%s: exited after %d steps, returning", self.kind.value, self.elapsed_steps)

    def _bounce_vertical(self):
        """上下の境界で位置を折り返し、縦速度を反転・半減"""
        top = config.LAUNCH_CEILING
        bottom = max(top, self.tunnel_height - config.LAUNCH_CEILING)
        if self.y < top:
            self.y = top + (top - self.y)
            self.velocity[1] = -self.velocity[1] * config.LAUNCH_BOUNCE
        elif self.y > bottom:
            self.y = bottom - (self.y - bottom)
            self.velocity[1] = -self.velocity[1] * config.LAUNCH_BOUNCE
        self.y = min(max(self.y, top), bottom)

    def _returning_behavior(self):
        """帰還: イーズアウト + 減衰振動でホームへ、角度は等比で0へ"""
        self.return_progress = min(1.0, self.return_progress + 1.0 / config.RETURN_STEPS)

        if self.return_progress >= 1.0:
            self.x = self.home_x
            self.y = self.home_y
            self.angle = 0.0
            self.angular_velocity = 0.0
            self.velocity = np.array([0.0, 0.0])
            self.launch_phase = LaunchPhase.IDLE
            logger.debug("%s: back home", self.kind.value)
            return

        f = return_curve(self.return_progress)
        start_x, start_y = self._return_start
        self.x = start_x + (self.home_x - start_x) * f
        self.y = start_y + (self.home_y - start_y) * f
        self.angle *= config.RETURN_ANGLE_DECAY
