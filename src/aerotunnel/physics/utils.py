"""物理計算の共通ユーティリティ"""
import math

import numpy as np
from aerotunnel import config


def clamp(value: float, lower: float, upper: float) -> float:
    """値を [lower, upper] に収める"""
    return max(lower, min(upper, value))


def clamp_wind(value: float) -> float:
    """
    風速を [WIND_MIN, WIND_MAX] に収める

    範囲外は拒否せず黙ってクランプする。NaN は最小値として扱う。
    """
    value = float(value)
    if math.isnan(value):
        return float(config.WIND_MIN)
    return clamp(value, float(config.WIND_MIN), float(config.WIND_MAX))


def sign(value: float) -> float:
    """正なら +1、それ以外は -1（ゼロは -1 側に倒す）"""
    return 1.0 if value > 0 else -1.0


def radial_falloff(distance: float, radius: float) -> float:
    """
    中心で1、半径ちょうどで0になる線形減衰

    半径の外側と中心点（方向が定まらない）では0を返す。
    ゾーン境界で押し出し量が連続になることを保証する。
    """
    if radius <= 0 or distance <= 0 or distance >= radius:
        return 0.0
    return 1.0 - distance / radius


def ease_out_cubic(progress: float) -> float:
    """3次のイーズアウト: 1 - (1 - p)^3"""
    p = clamp(progress, 0.0, 1.0)
    return 1.0 - (1.0 - p) ** 3


def return_curve(progress: float) -> float:
    """
    帰還用の補間係数（イーズアウト + 減衰振動の行き過ぎ）

    p=0 で 0、p=1 でちょうど 1。途中で1を少し越えて跳ね戻る。
    """
    p = clamp(progress, 0.0, 1.0)
    overshoot = (
        config.RETURN_OVERSHOOT
        * math.sin(config.RETURN_OSCILLATIONS * math.pi * p)
        * (1.0 - p)
    )
    return ease_out_cubic(p) + overshoot


def rotate_point(offset_x: float, offset_y: float, angle_rad: float) -> tuple[float, float]:
    """
    2D回転行列を適用

    紙飛行機の輪郭を姿勢角に合わせて回す描画処理で使用。

    Args:
        offset_x: 回転中心からのX方向オフセット
        offset_y: 回転中心からのY方向オフセット
        angle_rad: 回転角度 (ラジアン)

    Returns:
        (rotated_x, rotated_y)
    """
    cos_a = np.cos(angle_rad)
    sin_a = np.sin(angle_rad)
    return (
        offset_x * cos_a - offset_y * sin_a,
        offset_x * sin_a + offset_y * cos_a,
    )
