"""風洞ビュー描画のテスト（ダミードライバで実行）"""
import pygame
import pytest
pygame.init()

from aerotunnel.entities.shape import ShapeKind
from aerotunnel.rendering.tunnel_view import TunnelViewRenderer
from aerotunnel.tunnel import FlowField


def _font(size):
    return pygame.font.Font(None, size)


@pytest.mark.parametrize("kind", list(ShapeKind))
@pytest.mark.parametrize("scale", [1.0, 2.0])
def test_render_draws_into_view_rect(kind, scale):
    """描画倍率に関わらず表示矩形の内側だけに描く"""
    screen = pygame.Surface((700, 500))
    screen.fill((255, 0, 255))
    view_rect = pygame.Rect(50, 40, 500, 340)
    renderer = TunnelViewRenderer(_font, scale)
    field = FlowField(kind, seed=0, renderer=lambda f: renderer.render(screen, view_rect, f))
    field.hovered = True

    for _ in range(5):
        field.tick()

    assert screen.get_at(view_rect.center)[:3] != (255, 0, 255)
    assert screen.get_at((10, 10))[:3] == (255, 0, 255)


def test_render_during_launch():
    screen = pygame.Surface((500, 340))
    renderer = TunnelViewRenderer(_font)
    field = FlowField("tumbler", seed=1, renderer=lambda f: renderer.render(screen, screen.get_rect(), f))
    field.launch()
    for _ in range(60):
        field.tick()
    assert field.is_launching
