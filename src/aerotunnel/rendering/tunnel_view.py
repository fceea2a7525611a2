"""風洞ビュー レンダラー"""

import numpy as np
import pygame
from aerotunnel import config
from aerotunnel.entities.shape import ShapeBody, ShapeKind
from aerotunnel.physics.utils import rotate_point

# 紙飛行機の輪郭（機首が +x、描画倍率前の px）。(塗り色, 頂点列) の順に重ねて描く
SHAPE_OUTLINES = {
    ShapeKind.LOW_DRAG: [
        ((255, 107, 107), [(50, 0), (-30, -13), (-18, 0), (-30, 13)]),
        ((255, 136, 136), [(50, 0), (-30, -13), (-18, 0)]),
    ],
    ShapeKind.LIFT_GENERATING: [
        ((107, 203, 119), [(28, 0), (5, -52), (-28, -44), (-22, 0), (-28, 44), (5, 52)]),
        ((130, 217, 140), [(28, 0), (5, -52), (-28, -44), (-22, 0)]),
    ],
    ShapeKind.HIGH_DRAG: [
        ((166, 108, 255), [(18, 0), (12, -22), (-22, -30), (-24, -10),
                           (-22, 0), (-24, 10), (-22, 30), (12, 22)]),
        ((187, 136, 255), [(18, 0), (12, -22), (-22, -30), (-24, -10), (-22, 0)]),
        ((155, 95, 238), [(18, 0), (12, -22), (15, -12), (19, 0), (15, 12), (12, 22)]),
    ],
}

# 輪郭線と中心の折り目
SHAPE_STROKES = {
    ShapeKind.LOW_DRAG: ((196, 64, 64), ((50, 0), (-22, 0))),
    ShapeKind.LIFT_GENERATING: ((58, 122, 66), ((28, 0), (-22, 0))),
    ShapeKind.HIGH_DRAG: ((107, 63, 192), ((18, 0), (-22, 0))),
}

# 影の楕円半径
SHADOW_RADII = {
    ShapeKind.LOW_DRAG: (38, 10),
    ShapeKind.LIFT_GENERATING: (30, 34),
    ShapeKind.HIGH_DRAG: (24, 22),
}

TRAIL_BANDS = 4  # 軌跡を何段階の透明度で描くか


def _gradient_background(size: tuple[int, int]) -> pygame.Surface:
    """中心が明るい放射グラデーション背景"""
    w, h = size
    surface = pygame.Surface(size)
    surface.fill(config.COLOR_BG_EDGE)
    max_radius = max(1, int(w * 0.6))
    steps = 24
    inner = np.array(config.COLOR_BG_CENTER, dtype=float)
    outer = np.array(config.COLOR_BG_EDGE, dtype=float)
    for i in range(steps, 0, -1):
        ratio = i / steps
        color = outer + (inner - outer) * (1.0 - ratio)
        pygame.draw.circle(surface, color.astype(int).tolist(),
                           (w // 2, h // 2), int(max_radius * ratio))
    return surface


class TunnelViewRenderer:
    """
    1つの風洞パネルのレンダラー

    シミュレーション座標 (px) に display_scale を掛けた内部解像度で描いてから
    表示矩形へ縮小する。倍率は描画専用で物理には影響しない。
    """

    def __init__(self, font_loader, display_scale: float = config.DISPLAY_SCALE):
        """
        Args:
            font_loader: フォント取得関数 (size: int) -> pygame.font.Font
            display_scale: 描画倍率（高DPI向けの内部解像度）
        """
        self.font_loader = font_loader
        self.display_scale = max(0.25, float(display_scale))
        self._background_cache: dict[tuple[int, int], pygame.Surface] = {}

    def render(self, screen: pygame.Surface, view_rect: pygame.Rect, field):
        """風洞を描画"""
        scale = self.display_scale
        size = (max(1, int(field.width * scale)), max(1, int(field.height * scale)))

        canvas = self._background(size).copy()
        self._draw_walls(canvas, size)

        trail_layer = pygame.Surface(size, pygame.SRCALPHA)
        for particle in field.particles:
            self._draw_trail(trail_layer, particle)
        canvas.blit(trail_layer, (0, 0))

        self._draw_shape(canvas, field.shape, field.hovered)
        self._draw_label(canvas, field)

        if size != view_rect.size:
            canvas = pygame.transform.smoothscale(canvas, view_rect.size)
        screen.blit(canvas, view_rect.topleft)

    def _background(self, size):
        if size not in self._background_cache:
            self._background_cache.clear()
            self._background_cache[size] = _gradient_background(size)
        return self._background_cache[size]

    def _draw_walls(self, canvas, size):
        """上下の薄い壁と目盛り"""
        w, h = size
        wall_h = max(1, int(config.WALL_HEIGHT_PX * self.display_scale))
        pygame.draw.rect(canvas, config.COLOR_WALL_LIGHT, (0, 0, w, wall_h))
        pygame.draw.rect(canvas, config.COLOR_WALL_DARK, (0, wall_h // 2, w, wall_h - wall_h // 2))
        pygame.draw.rect(canvas, config.COLOR_WALL_DARK, (0, h - wall_h, w, wall_h // 2))
        pygame.draw.rect(canvas, config.COLOR_WALL_LIGHT, (0, h - wall_h // 2, w, wall_h // 2))

        spacing = max(4, int(config.WALL_GRID_SPACING * self.display_scale))
        grid_color = (70, 84, 98)
        for gx in range(0, w, spacing):
            pygame.draw.line(canvas, grid_color, (gx, 0), (gx, wall_h))
            pygame.draw.line(canvas, grid_color, (gx, h - wall_h), (gx, h))

    def _draw_trail(self, layer, particle):
        """軌跡を先端ほど濃く描く（古いサンプルほど透明）"""
        samples = particle.trail
        n = len(samples)
        if n < 2:
            return

        scale = self.display_scale
        points = [(s.x * scale, s.y * scale) for s in samples]
        width = max(1, int(particle.thickness * scale))
        band = max(2, n // TRAIL_BANDS)

        for start in range(0, n - 1, band - 1):
            end = min(n, start + band)
            age = end / n
            alpha = int(255 * min(1.0, particle.opacity * age))
            r, g, b = samples[end - 1].color
            pygame.draw.lines(layer, (r, g, b, alpha), False, points[start:end], width)

        # 先端の丸
        head = samples[-1]
        head_alpha = int(255 * min(1.0, particle.opacity * 1.3))
        pygame.draw.circle(layer, (*head.color, head_alpha), points[-1],
                           max(1, int(particle.thickness * 0.9 * scale)))

    def _draw_shape(self, canvas, shape: ShapeBody, hovered: bool):
        """紙飛行機を姿勢角どおりに描画"""
        total_scale = shape.scale * self.display_scale
        cx = shape.x * self.display_scale
        cy = shape.y * self.display_scale

        def transform(points):
            result = []
            for px, py in points:
                rx, ry = rotate_point(px * total_scale, py * total_scale, shape.angle)
                result.append((cx + rx, cy + ry))
            return result

        # 影（少しずらした半透明の楕円）
        rx, ry = SHADOW_RADII[shape.kind]
        shadow_size = (max(1, int(rx * 2 * total_scale)), max(1, int(ry * 2 * total_scale)))
        shadow = pygame.Surface(shadow_size, pygame.SRCALPHA)
        pygame.draw.ellipse(shadow, (0, 0, 0, 46), shadow.get_rect())
        offset_x, offset_y = rotate_point(3 * total_scale, 5 * total_scale, shape.angle)
        canvas.blit(shadow, shadow.get_rect(center=(cx + offset_x, cy + offset_y)))

        outlines = SHAPE_OUTLINES[shape.kind]
        body = transform(outlines[0][1])

        if hovered:
            pygame.draw.polygon(canvas, config.COLOR_HOVER_GLOW, body,
                                max(2, int(4 * self.display_scale)))

        for color, points in outlines:
            pygame.draw.polygon(canvas, color, transform(points))

        stroke_color, fold = SHAPE_STROKES[shape.kind]
        pygame.draw.polygon(canvas, stroke_color, body, 1)
        pygame.draw.line(canvas, stroke_color, *transform(fold), max(1, int(1.5 * self.display_scale)))

    def _draw_label(self, canvas, field):
        """種別と風速"""
        font = self.font_loader(max(10, int(16 * self.display_scale)))
        label = f"{config.SHAPE_LABELS[field.kind.value]}  風速 {field.wind_intensity:.0f}"
        text = font.render(label, True, config.COLOR_LABEL)
        margin = int((config.WALL_HEIGHT_PX + 6) * self.display_scale)
        canvas.blit(text, (margin, margin))
