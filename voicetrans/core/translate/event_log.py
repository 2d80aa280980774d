"""
翻訳処理のイベントログ
上限付きの追記専用ログ（古いものから破棄）
"""

import logging
import threading
from collections import deque
from typing import Callable, Deque, List

from .models import LogRecord

DEFAULT_MAX_LOG_SIZE = 1000

LogListener = Callable[[LogRecord], None]


class EventLog:
    """上限付きイベントログ"""

    def __init__(self, max_size: int = DEFAULT_MAX_LOG_SIZE):
        if max_size <= 0:
            raise ValueError(f"ログの最大件数は1以上を指定してください: {max_size}")

        self.max_size = max_size
        self.logger = logging.getLogger(__name__)
        self._records: Deque[LogRecord] = deque(maxlen=max_size)
        self._listeners: List[LogListener] = []
        self._lock = threading.Lock()

    def append(self, record: LogRecord):
        """レコードを追加（上限超過時は先頭から破棄）"""
        with self._lock:
            self._records.append(record)
            listeners = list(self._listeners)

        for listener in listeners:
            try:
                listener(record)
            except Exception as e:
                self.logger.warning(f"ログリスナーでエラー: {e}")

    def clear(self):
        with self._lock:
            self._records.clear()

    def snapshot(self) -> List[LogRecord]:
        """古い順のコピーを返す"""
        with self._lock:
            return list(self._records)

    def add_listener(self, listener: LogListener):
        """追加されたレコードを受け取るコールバックを登録"""
        with self._lock:
            if listener not in self._listeners:
                self._listeners.append(listener)

    def remove_listener(self, listener: LogListener):
        with self._lock:
            if listener in self._listeners:
                self._listeners.remove(listener)

    def __len__(self) -> int:
        with self._lock:
            return len(self._records)
