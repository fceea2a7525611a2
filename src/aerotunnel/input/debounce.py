"""リサイズ入力のデバウンス"""

from typing import Optional

from aerotunnel import config


class ResizeDebouncer:
    """
    連続するリサイズ通知を1回にまとめる

    最後の push から delay 秒経過した時点で poll() が最新サイズを1度だけ返す。
    """

    def __init__(self, delay: float = config.RESIZE_DEBOUNCE_SEC):
        self.delay = delay
        self._pending: Optional[tuple[int, int]] = None
        self._last_push = 0.0

    @property
    def pending(self) -> bool:
        return self._pending is not None

    def push(self, size: tuple[int, int], now: float):
        """リサイズ通知を受け取る（タイマーをリセット）"""
        self._pending = (int(size[0]), int(size[1]))
        self._last_push = now

    def poll(self, now: float) -> Optional[tuple[int, int]]:
        """
        確定したサイズを取り出す

        Returns:
            静止から delay 秒経過していれば (width, height)、それ以外は None
        """
        if self._pending is None or now - self._last_push < self.delay:
            return None
        size = self._pending
        self._pending = None
        return size
