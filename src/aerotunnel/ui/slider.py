"""風速スライダー（Pygame用）"""
import pygame
from typing import Callable

from aerotunnel import config


class WindSlider:
    """
    整数値 [WIND_MIN, WIND_MAX] を選ぶ横スライダー

    クリック位置へジャンプし、ドラッグで追従する。
    値が変わったときだけ on_change(value) を呼ぶ。
    """

    def __init__(
        self,
        rect: pygame.Rect,
        on_change: Callable[[int], None],
        value: int = config.WIND_DEFAULT,
        minimum: int = config.WIND_MIN,
        maximum: int = config.WIND_MAX,
    ):
        self.rect = rect
        self.on_change = on_change
        self.minimum = minimum
        self.maximum = maximum
        self.value = self._clamp(value)
        self.dragging = False

    def _clamp(self, value: int) -> int:
        return max(self.minimum, min(self.maximum, int(value)))

    def value_at(self, x: float) -> int:
        """画面X座標 → スライダー値（最も近い目盛り）"""
        if self.rect.width <= 1:
            return self.value
        ratio = (x - self.rect.left) / (self.rect.width - 1)
        ratio = max(0.0, min(1.0, ratio))
        return self._clamp(round(self.minimum + ratio * (self.maximum - self.minimum)))

    def knob_x(self) -> int:
        """現在値のつまみX座標"""
        span = self.maximum - self.minimum
        ratio = (self.value - self.minimum) / span if span else 0.0
        return int(self.rect.left + ratio * (self.rect.width - 1))

    def set_value(self, value: int) -> bool:
        """
        値を設定（範囲外はクランプ）

        Returns:
            値が変わった場合 True
        """
        value = self._clamp(value)
        if value == self.value:
            return False
        self.value = value
        self.on_change(value)
        return True

    def step(self, delta: int) -> bool:
        """キーボード操作用: 現在値から delta だけ動かす"""
        return self.set_value(self.value + delta)

    def handle_event(self, event: pygame.event.Event) -> bool:
        """
        イベントを処理する。

        Returns:
            値が変わった場合 True
        """
        if event.type == pygame.MOUSEBUTTONDOWN and event.button == 1:
            if self.rect.collidepoint(event.pos):
                self.dragging = True
                return self.set_value(self.value_at(event.pos[0]))
        elif event.type == pygame.MOUSEMOTION and self.dragging:
            return self.set_value(self.value_at(event.pos[0]))
        elif event.type == pygame.MOUSEBUTTONUP and event.button == 1:
            self.dragging = False
        return False

    def render(self, screen: pygame.Surface, font: pygame.font.Font = None):
        """溝・目盛り・つまみを描画"""
        track_y = self.rect.centery
        pygame.draw.line(screen, (90, 100, 110),
                         (self.rect.left, track_y), (self.rect.right - 1, track_y), 4)

        # 塗り済み区間
        knob_x = self.knob_x()
        pygame.draw.line(screen, (100, 210, 255), (self.rect.left, track_y), (knob_x, track_y), 4)

        span = self.maximum - self.minimum
        for i in range(span + 1):
            tick_x = int(self.rect.left + (i / span if span else 0) * (self.rect.width - 1))
            pygame.draw.line(screen, (140, 150, 160), (tick_x, track_y - 5), (tick_x, track_y + 5))

        radius = max(4, self.rect.height // 2 - 2)
        pygame.draw.circle(screen, (230, 240, 255), (knob_x, track_y), radius)

        if font is not None:
            label = font.render(str(self.value), True, (230, 240, 255))
            screen.blit(label, label.get_rect(midleft=(self.rect.right + 8, track_y)))
