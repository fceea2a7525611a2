"""リサイズのデバウンスのテスト"""

from aerotunnel.input.debounce import ResizeDebouncer


def test_nothing_pending_initially():
    debouncer = ResizeDebouncer(delay=0.15)
    assert debouncer.pending is False
    assert debouncer.poll(10.0) is None


def test_burst_collapses_to_last_size():
    """連続したリサイズは静止後に最後のサイズ1回だけ"""
    debouncer = ResizeDebouncer(delay=0.15)
    debouncer.push((800, 600), now=1.00)
    debouncer.push((820, 610), now=1.05)
    assert debouncer.poll(1.10) is None
    debouncer.push((900, 640), now=1.12)
    assert debouncer.poll(1.20) is None  # タイマーはリセットされている

    assert debouncer.poll(1.25) is None  # 静止 0.13 秒ではまだ確定しない
    assert debouncer.poll(1.30) == (900, 640)
    assert debouncer.pending is False
    assert debouncer.poll(2.00) is None


def test_sizes_are_integers():
    debouncer = ResizeDebouncer(delay=0.0)
    debouncer.push((800.7, 600.2), now=0.0)
    assert debouncer.poll(0.0) == (800, 600)
