"""発射プロファイル（飛行中の速度・姿勢の積分）"""

import numpy as np
from aerotunnel import config
from aerotunnel.physics.utils import clamp


class LaunchProfile:
    """
    発射中の運動モデル（基底クラス）

    1ステップ = 1フレーム、速度は px/step、画面座標はy下向き。

    更新順序:
        1. calculate_drag(): 二乗抵抗
        2. integrate(): 抵抗・重力・風の押しを加え、前進速度の下限を保証
        3. steer(): 姿勢角の更新（形状ごとに異なる）
    """

    kind = ""

    def __init__(
        self,
        initial_velocity: tuple[float, float],
        drag: float,
        gravity: float,
        vertical_damping: float,
        min_forward_speed: float,
    ):
        self._initial_velocity = np.array(initial_velocity, dtype=float)
        self.drag = drag
        self.gravity = gravity
        self.vertical_damping = vertical_damping
        self.min_forward_speed = min_forward_speed

    @classmethod
    def from_config(cls) -> "LaunchProfile":
        return cls(**config.LAUNCH_PROFILES[cls.kind])

    def initial_velocity(self) -> np.ndarray:
        """初速ベクトル（形状ごとに固定）"""
        return self._initial_velocity.copy()

    def calculate_drag(self, velocity: np.ndarray) -> np.ndarray:
        """抵抗（速度の二乗に比例、速度と逆向き）"""
        speed = np.linalg.norm(velocity)
        if speed < 1e-9:
            return np.array([0.0, 0.0])
        return -self.drag * speed * velocity

    def integrate(self, velocity: np.ndarray, wind_intensity: float) -> np.ndarray:
        """
        速度を1ステップ進める

        Args:
            velocity: 現在速度 [vx, vy]
            wind_intensity: 風速 [1, 10]

        Returns:
            新しい速度 [vx, vy]
        """
        new_velocity = velocity + self.calculate_drag(velocity)
        new_velocity[1] = new_velocity[1] * self.vertical_damping + self.gravity
        new_velocity[0] += config.LAUNCH_WIND_PUSH * wind_intensity

        # 前進速度の下限（必ず右端から抜ける）
        new_velocity[0] = max(new_velocity[0], self.min_forward_speed)
        return new_velocity

    def steer(
        self,
        angle: float,
        angular_velocity: float,
        velocity: np.ndarray,
        wind_intensity: float,
        rng: np.random.Generator,
    ) -> tuple[float, float]:
        """姿勢角を更新して (angle, angular_velocity) を返す"""
        raise NotImplementedError

    @staticmethod
    def flight_path_angle(velocity: np.ndarray) -> float:
        """経路角 (rad)。上昇中は負（機首上げ）"""
        return float(np.arctan2(velocity[1], velocity[0]))


class LowDragLaunch(LaunchProfile):
    """ダート: 速く平らに飛び、姿勢はすぐ落ち着く"""

    kind = "dart"

    def steer(self, angle, angular_velocity, velocity, wind_intensity, rng):
        target = self.flight_path_angle(velocity) * config.DART_ANGLE_GAIN
        angle += (target - angle) * config.DART_ANGLE_RELAX
        return angle, 0.0


class LiftGeneratingLaunch(LaunchProfile):
    """グライダー: 滑らかな放物線、機首は上昇で上・下降で下を向く"""

    kind = "glider"

    def steer(self, angle, angular_velocity, velocity, wind_intensity, rng):
        target = clamp(self.flight_path_angle(velocity),
                       -config.GLIDER_ANGLE_LIMIT, config.GLIDER_ANGLE_LIMIT)
        angle += (target - angle) * config.GLIDER_ANGLE_RELAX
        return angle, 0.0


class HighDragLaunch(LaunchProfile):
    """タンブラー: 減速しながら不規則に回転する（不安定）"""

    kind = "tumbler"

    def steer(self, angle, angular_velocity, velocity, wind_intensity, rng):
        kick = (float(rng.random()) - 0.5) * 2.0 * config.TUMBLER_ANGULAR_KICK
        angular_velocity += kick * (wind_intensity / config.WAKE_WIND_REFERENCE)
        angular_velocity *= config.TUMBLER_ANGULAR_DECAY
        angle = (angle + angular_velocity) * config.TUMBLER_ANGLE_DECAY
        return angle, angular_velocity


LAUNCH_PROFILES = {
    profile.kind: profile
    for profile in (LowDragLaunch, LiftGeneratingLaunch, HighDragLaunch)
}


def launch_profile_for(kind: str) -> LaunchProfile:
    """形状種別名から発射プロファイルを生成"""
    return LAUNCH_PROFILES[kind].from_config()
