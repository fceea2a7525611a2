"""AeroTunnel メインエントリーポイント"""

import argparse
import logging
import os
import time

import pygame
from aerotunnel import config
from aerotunnel.entities.shape import ShapeKind
from aerotunnel.input.debounce import ResizeDebouncer
from aerotunnel.input.viewport import VisibilityObserver
from aerotunnel.rendering.tunnel_view import TunnelViewRenderer
from aerotunnel.tunnel import FlowField
from aerotunnel.ui.button import UIButton
from aerotunnel.ui.slider import WindSlider

logger = logging.getLogger(__name__)

MIN_PANEL_WIDTH = 360
PANEL_ASPECT = config.TUNNEL_HEIGHT / config.TUNNEL_WIDTH

# 日本語フォント探索
pygame.font.init()


def _find_jp_font_path():
    candidates = [
        "/System/Library/Fonts/Hiragino Sans W3.ttc",
        "/System/Library/Fonts/ヒラギノ角ゴシック W3.ttc",
        "/usr/share/fonts/opentype/noto/NotoSansCJK-Regular.ttc",
        "/usr/share/fonts/noto-cjk/NotoSansCJK-Regular.ttc",
    ]
    for path in candidates:
        if os.path.exists(path):
            return path

    # フォールバック: システムフォントマッチング
    for name in ("hiraginosans", "notosanscjkjp", "takaoexgothic"):
        path = pygame.font.match_font(name)
        if path:
            return path
    return None


_JP_FONT_PATH = _find_jp_font_path()


def _get_jp_font(size: int) -> pygame.font.Font:
    """日本語フォントを取得（キャッシュなし、毎回生成）"""
    if _JP_FONT_PATH:
        return pygame.font.Font(_JP_FONT_PATH, size)
    return pygame.font.Font(None, size)


def setup_logging(debug: bool = False) -> None:
    """ログ設定"""
    level = logging.DEBUG if debug else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%H:%M:%S",
    )


def layout_panels(window_width: int, count: int = 3) -> list[pygame.Rect]:
    """
    パネル矩形をコンテンツ座標で並べる（幅に応じて列数を決める）

    Returns:
        風洞ビューの矩形リスト（操作バーは各矩形の直下）
    """
    gap = config.PANEL_GAP
    columns = max(1, min(count, (window_width - gap) // (MIN_PANEL_WIDTH + gap)))
    width = max(1, (window_width - gap * (columns + 1)) // columns)
    height = max(1, int(width * PANEL_ASPECT))
    row_height = height + config.CONTROL_BAR_HEIGHT + gap

    rects = []
    for i in range(count):
        col, row = i % columns, i // columns
        x = gap + col * (width + gap)
        y = gap + row * row_height
        rects.append(pygame.Rect(x, y, width, height))
    return rects


class TunnelPanel:
    """風洞1つ分の表示と操作（スライダー・発射ボタン）"""

    def __init__(self, kind: ShapeKind, rect: pygame.Rect, renderer: TunnelViewRenderer,
                 seed: int = None):
        self.rect = rect
        self.view_renderer = renderer
        self.screen = None
        self.scroll = 0
        self.field = FlowField(kind, rect.width, rect.height, seed=seed, renderer=self._draw)

        self.slider = WindSlider(pygame.Rect(0, 0, 1, config.SLIDER_HEIGHT),
                                 self.field.set_wind_intensity,
                                 value=int(self.field.wind_intensity))
        self.button = UIButton(pygame.Rect(0, 0, config.BUTTON_WIDTH, config.BUTTON_HEIGHT),
                               "発射", self.field.launch, color=(220, 90, 90),
                               font=_get_jp_font(20))
        self._place_controls()

    def _place_controls(self):
        bar_y = self.rect.bottom + config.CONTROL_BAR_HEIGHT // 2
        slider_width = max(40, self.rect.width - config.BUTTON_WIDTH - 60)
        self.slider.rect = pygame.Rect(self.rect.left, bar_y - config.SLIDER_HEIGHT // 2,
                                       slider_width, config.SLIDER_HEIGHT)
        self.button.rect = pygame.Rect(0, 0, config.BUTTON_WIDTH, config.BUTTON_HEIGHT)
        self.button.rect.midright = (self.rect.right, bar_y)

    def relayout(self, rect: pygame.Rect):
        """リサイズ確定時に呼ぶ"""
        self.rect.update(rect)
        self.field.resize(rect.width, rect.height)
        self._place_controls()

    def screen_rect(self, rect: pygame.Rect) -> pygame.Rect:
        return rect.move(0, -self.scroll)

    def _draw(self, field: FlowField):
        """FlowField.tick() からの描画シグナル"""
        if self.screen is None:
            return
        self.view_renderer.render(self.screen, self.screen_rect(self.rect), field)

    def handle_event(self, event: pygame.event.Event):
        """スクロール分を補正してウィジェットへ渡す"""
        if hasattr(event, "pos"):
            x, y = event.pos
            self.field.hovered = self.screen_rect(self.rect).collidepoint(x, y)
            event = pygame.event.Event(event.type, {**event.dict, "pos": (x, y + self.scroll)})
        self.slider.handle_event(event)
        self.button.handle_event(event)

    def render_controls(self, screen: pygame.Surface, font, selected: bool):
        offset = (0, -self.scroll)
        if selected:
            pygame.draw.rect(screen, config.COLOR_HOVER_GLOW,
                             self.screen_rect(self.rect).inflate(6, 6), 2)
        else:
            pygame.draw.rect(screen, config.COLOR_PANEL_BORDER,
                             self.screen_rect(self.rect).inflate(2, 2), 1)

        # 発射中はボタンを無効化（連打・再発射を無視）
        self.button.enabled = not self.field.is_launching

        slider_rect, button_rect = self.slider.rect, self.button.rect
        self.slider.rect = slider_rect.move(offset)
        self.button.rect = button_rect.move(offset)
        self.slider.render(screen, font)
        self.button.render(screen)
        self.slider.rect, self.button.rect = slider_rect, button_rect


def content_height(panels: list[TunnelPanel]) -> int:
    return max(p.rect.bottom for p in panels) + config.CONTROL_BAR_HEIGHT + config.PANEL_GAP


def main():
    """メインループ"""
    parser = argparse.ArgumentParser(description="AeroTunnel: paper airplane wind tunnel")
    parser.add_argument("--width", type=int, default=config.SCREEN_WIDTH)
    parser.add_argument("--height", type=int, default=config.SCREEN_HEIGHT)
    parser.add_argument("--scale", type=float, default=config.DISPLAY_SCALE,
                        help="描画倍率（高DPI向け、物理には影響しない）")
    parser.add_argument("--seed", type=int, default=None)
    parser.add_argument("--debug", action="store_true")
    args = parser.parse_args()

    setup_logging(args.debug)

    pygame.init()
    screen = pygame.display.set_mode((args.width, args.height), pygame.RESIZABLE)
    pygame.display.set_caption("AeroTunnel: Paper Airplane Wind Tunnel")
    clock = pygame.time.Clock()

    renderer = TunnelViewRenderer(_get_jp_font, args.scale)
    kinds = list(ShapeKind)
    rects = layout_panels(args.width, len(kinds))
    panels = [
        TunnelPanel(kind, rect, renderer, seed=None if args.seed is None else args.seed + i)
        for i, (kind, rect) in enumerate(zip(kinds, rects))
    ]

    observer = VisibilityObserver()
    for panel in panels:
        observer.observe(panel.field, panel.rect)

    debouncer = ResizeDebouncer()
    font_ui = _get_jp_font(18)
    selected = 0
    scroll = 0

    running = True
    while running:
        now = time.monotonic()
        window_w, window_h = screen.get_size()

        # --- イベント処理 ---
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                running = False
            elif event.type == pygame.VIDEORESIZE:
                debouncer.push(event.size, now)
            elif event.type == pygame.MOUSEWHEEL:
                scroll -= event.y * config.SCROLL_STEP
            elif event.type == pygame.KEYDOWN:
                if event.key == pygame.K_ESCAPE:
                    running = False
                elif event.key == pygame.K_TAB:
                    selected = (selected + 1) % len(panels)
                elif event.key == pygame.K_LEFTBRACKET:
                    panels[selected].slider.step(-1)
                elif event.key == pygame.K_RIGHTBRACKET:
                    panels[selected].slider.step(1)
                elif event.key == pygame.K_SPACE:
                    panels[selected].field.launch()

            observer.handle_event(event)
            for panel in panels:
                panel.handle_event(event)

        # リサイズは静止してから1回だけ反映
        size = debouncer.poll(now)
        if size is not None:
            logger.debug("resize settled at %sx%s", *size)
            for panel, rect in zip(panels, layout_panels(size[0], len(panels))):
                panel.relayout(rect)
            window_w, window_h = screen.get_size()

        scroll = max(0, min(scroll, content_height(panels) - window_h))
        viewport = pygame.Rect(0, scroll, window_w, window_h)
        observer.update(viewport)

        # --- 更新・描画 ---
        screen.fill(config.COLOR_BG_EDGE)
        for panel in panels:
            panel.screen = screen
            panel.scroll = scroll
            panel.field.tick(config.DT)

        for i, panel in enumerate(panels):
            panel.render_controls(screen, font_ui, selected == i)

        hint = font_ui.render("Tab: 選択  [ ]: 風速  Space: 発射  ホイール: スクロール",
                              True, config.COLOR_LABEL)
        screen.blit(hint, (config.PANEL_GAP, window_h - hint.get_height() - 4))

        pygame.display.flip()
        clock.tick(config.FPS)

    pygame.quit()


if __name__ == "__main__":
    main()
