"""流れ場・発射の物理モジュール"""

from .deflection import (
    Deflection,
    DeflectionProfile,
    ShapeBounds,
    deflection_profile_for,
)
from .launch import LaunchProfile, launch_profile_for

__all__ = [
    "Deflection",
    "DeflectionProfile",
    "ShapeBounds",
    "deflection_profile_for",
    "LaunchProfile",
    "launch_profile_for",
]
