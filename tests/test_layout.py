"""パネル配置のテスト"""

from aerotunnel import config
from aerotunnel.main import MIN_PANEL_WIDTH, layout_panels


def test_wide_window_uses_three_columns():
    rects = layout_panels(1280)
    assert len(rects) == 3
    assert len({r.y for r in rects}) == 1
    assert rects[0].x == config.PANEL_GAP
    assert rects[1].left - rects[0].right == config.PANEL_GAP


def test_narrow_window_stacks_vertically():
    rects = layout_panels(MIN_PANEL_WIDTH + 3 * config.PANEL_GAP)
    assert len({r.x for r in rects}) == 1
    ys = [r.y for r in rects]
    assert ys == sorted(ys) and len(set(ys)) == 3
    assert rects[1].top - rects[0].bottom == config.CONTROL_BAR_HEIGHT + config.PANEL_GAP


def test_panels_keep_tunnel_aspect():
    for rect in layout_panels(1280):
        ratio = rect.height / rect.width
        assert abs(ratio - config.TUNNEL_HEIGHT / config.TUNNEL_WIDTH) < 0.01


def test_tiny_window_still_has_area():
    for rect in layout_panels(10):
        assert rect.width >= 1 and rect.height >= 1
