"""表示領域との交差判定（可視フラグの供給）"""

import logging

import pygame
from aerotunnel import config

logger = logging.getLogger(__name__)


def intersection_ratio(target: pygame.Rect, viewport: pygame.Rect) -> float:
    """target の面積のうち viewport と重なる割合 [0, 1]"""
    area = target.width * target.height
    if area <= 0:
        return 0.0
    overlap = target.clip(viewport)
    return (overlap.width * overlap.height) / area


class VisibilityObserver:
    """
    パネル矩形とビューポートの交差率から visible を決める

    閾値以上なら可視。ウィンドウが最小化・非表示の間は全て不可視。
    FlowField 側はフレームごとに最新の visible を読むだけで待たない。
    """

    def __init__(self, threshold: float = config.VISIBILITY_THRESHOLD):
        self.threshold = threshold
        self.window_shown = True
        self._entries = []  # (target, rect) のリスト

    def observe(self, target, rect: pygame.Rect):
        """監視対象（visible 属性を持つオブジェクト）と、そのコンテンツ座標での矩形を登録"""
        self._entries.append((target, rect))

    def handle_event(self, event: pygame.event.Event):
        """ウィンドウの最小化・復帰を反映"""
        if event.type in (pygame.WINDOWMINIMIZED, pygame.WINDOWHIDDEN):
            self.window_shown = False
        elif event.type in (pygame.WINDOWRESTORED, pygame.WINDOWSHOWN, pygame.WINDOWMAXIMIZED):
            self.window_shown = True

    def update(self, viewport: pygame.Rect):
        """全対象の visible を更新"""
        for target, rect in self._entries:
            ratio = intersection_ratio(rect, viewport)
            visible = self.window_shown and ratio > 0 and ratio >= self.threshold
            if visible != target.visible:
                logger.debug("visibility %s -> %s", getattr(target, "kind", target), visible)
            target.visible = visible
