"""汎用UIButtonクラス（Pygame用）"""
import pygame
from typing import Callable


class UIButton:
    """
    クリック可能なボタン（hover/pressed/disabled状態対応）

    使い方:
        Pygameのイベントループ内でhandle_event()を呼ぶ。
        render()は毎フレーム呼ぶ必要がある。
        発射中など受け付けない間は enabled = False にする（クリックは無視）。
    """

    def __init__(
        self,
        rect: pygame.Rect,
        label: str,
        on_click: Callable,
        color: tuple = (64, 128, 255),
        text_color: tuple = (255, 255, 255),
        font: pygame.font.Font = None,
    ):
        self.rect = rect
        self.label = label
        self.on_click = on_click
        self.color = color
        self.text_color = text_color
        self.font = font or pygame.font.Font(None, 28)

        self.hovered = False
        self.pressed = False
        self.enabled = True

    def handle_event(self, event: pygame.event.Event) -> bool:
        """
        イベントを処理する。

        Returns:
            クリックが確定した場合 True、そうでなければ False
        """
        if event.type == pygame.MOUSEMOTION:
            self.hovered = self.rect.collidepoint(event.pos)
        elif not self.enabled:
            self.pressed = False
        elif event.type == pygame.MOUSEBUTTONDOWN and event.button == 1:
            if self.rect.collidepoint(event.pos):
                self.pressed = True
        elif event.type == pygame.MOUSEBUTTONUP and event.button == 1:
            if self.pressed and self.rect.collidepoint(event.pos):
                self.pressed = False
                self.on_click()
                return True
            self.pressed = False
        return False

    def render(self, screen: pygame.Surface):
        """ボタンを描画（hover/pressed/disabledで色変化）"""
        r, g, b = self.color

        if not self.enabled:
            # 無効時はグレーアウト
            gray = (r + g + b) // 3
            r, g, b = gray // 2, gray // 2, gray // 2
        elif self.pressed:
            r, g, b = int(r * 0.7), int(g * 0.7), int(b * 0.7)
        elif self.hovered:
            r = min(255, int(r * 1.3))
            g = min(255, int(g * 1.3))
            b = min(255, int(b * 1.3))

        pygame.draw.rect(screen, (r, g, b), self.rect, border_radius=6)
        pygame.draw.rect(screen, (180, 180, 180), self.rect, 1, border_radius=6)

        # テキスト（中央揃え）
        text_color = self.text_color if self.enabled else (150, 150, 150)
        text_surface = self.font.render(self.label, True, text_color)
        text_rect = text_surface.get_rect(center=self.rect.center)
        screen.blit(text_surface, text_rect)
