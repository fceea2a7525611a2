"""エンティティ モジュール"""

from .particle import FlowParticle, TrailSample
from .shape import LaunchPhase, ShapeBody, ShapeKind

__all__ = ["FlowParticle", "TrailSample", "LaunchPhase", "ShapeBody", "ShapeKind"]
